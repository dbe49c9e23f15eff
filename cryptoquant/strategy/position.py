"""
Position

Anything a portfolio can hold. The interface is deliberately small:
an id, a type and the ability to value itself against a snapshot.
LP positions, option and perpetual positions, or entirely custom ones
plug in by implementing it.

Positions are treated as immutable once added: modifying one means
replacing it with a new instance (ReplacePositionAction). Valuing the
same position against the same snapshot twice gives the same result.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum

from ..primitives import Amount, Price
from .market import MarketSnapshot


class PositionType(str, Enum):
    """Position classification"""
    SPOT = "spot"
    LIQUIDITY_POOL = "liquidity_pool"
    OPTION = "option"
    PERPETUAL = "perpetual"
    FUTURE = "future"
    ORDER_BOOK = "orderbook"
    CUSTOM = "custom"


class Position(ABC):
    """Base interface for portfolio positions"""

    @property
    @abstractmethod
    def id(self) -> str:
        """
        Unique, stable identifier within a portfolio

        e.g. "spot:ETH", "lp:uniswap-v3:ETH/USDC:0x123", "perp:gmx:ETH-USD"
        """
        pass

    @property
    @abstractmethod
    def type(self) -> PositionType:
        """Position classification"""
        pass

    @abstractmethod
    async def value(self, snapshot: MarketSnapshot) -> Amount:
        """
        Value in the portfolio's denomination currency

        Raises:
            PriceNotAvailableError: If a required price is missing
            ValueError: If the position state is invalid
        """
        pass


@dataclass(frozen=True)
class RiskMetrics:
    """Position-level risk measures"""
    delta: Decimal = Decimal("0")
    gamma: Decimal = Decimal("0")
    vega: Decimal = Decimal("0")
    theta: Decimal = Decimal("0")
    leverage: Decimal = Decimal("1")
    liquidation_price: Price = field(default_factory=Price.zero)  # Zero when not liquidatable


class PositionWithRisk(Position):
    """Position that reports its own risk metrics"""

    @abstractmethod
    async def risk(self, snapshot: MarketSnapshot) -> RiskMetrics:
        pass


class PositionMetadata(Position):
    """Position with descriptive information for reporting"""

    @property
    @abstractmethod
    def description(self) -> str:
        """e.g. "100 ETH spot", "ETH Call $2500 exp 2024-12-31" """
        pass

    @property
    @abstractmethod
    def venue(self) -> str:
        pass
