"""
Derivative contract

Options, perpetuals, futures and structured products. Pricing models are
supplied by implementations; this module fixes the market-parameter input,
the Greeks output and the operations.

Contract:
- price() returns fair value for the given parameters
- greeks() returns every sensitivity; those that do not apply to the
  instrument are zero, never None
- settle() returns the signed settlement PnL
"""
from abc import abstractmethod
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Dict

from ..primitives import Price
from .base import MarketMechanism, MechanismType


class OptionType(str, Enum):
    """Option type"""
    CALL = "call"
    PUT = "put"


class PositionDirection(str, Enum):
    """Derivative position direction"""
    LONG = "long"
    SHORT = "short"


@dataclass(frozen=True)
class PriceParams:
    """
    Market parameters for derivative pricing

    Each instrument reads the subset it needs:
    - European option: underlying, strike, time to expiry, volatility, rate
    - Perpetual: underlying, mark price, funding rate
    - Future: underlying, time to expiry
    """
    underlying_price: Price = field(default_factory=Price.zero)
    strike_price: Price = field(default_factory=Price.zero)
    time_to_expiry: Decimal = Decimal("0")  # Years
    volatility: Decimal = Decimal("0")  # Annualized
    risk_free_rate: Decimal = Decimal("0")  # Annualized
    funding_rate: Decimal = Decimal("0")  # Per funding period
    mark_price: Price = field(default_factory=Price.zero)
    metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Greeks:
    """Risk sensitivities; inapplicable entries stay zero"""
    delta: Decimal = Decimal("0")  # dV/dS
    gamma: Decimal = Decimal("0")  # d2V/dS2
    theta: Decimal = Decimal("0")  # dV/dt
    vega: Decimal = Decimal("0")  # dV/dsigma
    rho: Decimal = Decimal("0")  # dV/dr

    def __post_init__(self):
        for name in ("delta", "gamma", "theta", "vega", "rho"):
            if getattr(self, name) is None:
                object.__setattr__(self, name, Decimal("0"))


class Derivative(MarketMechanism):
    """Derivative instrument"""

    @property
    def mechanism(self) -> MechanismType:
        return MechanismType.DERIVATIVE

    @abstractmethod
    async def price(self, params: PriceParams) -> Price:
        """Fair value of the derivative"""
        pass

    @abstractmethod
    async def greeks(self, params: PriceParams) -> Greeks:
        """Risk sensitivities"""
        pass

    @abstractmethod
    async def settle(self) -> Decimal:
        """Settlement PnL (positive = profit, negative = loss)"""
        pass
