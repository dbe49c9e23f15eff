"""
Liquidity pool contract

AMM-style liquidity provision: constant product, concentrated liquidity,
stable swap, weighted pools. Implementations supply the math; this module
fixes the operations and the value types they exchange.

Contract:
- calculate() is pure: it derives a PoolState without touching pool state
- add_liquidity() returns a PoolPosition accepted by remove_liquidity()
- remove_liquidity() on an unchanged market returns the deposited amounts,
  less whatever fee policy the implementation documents
"""
from abc import abstractmethod
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict

from ..primitives import Amount, Price
from .base import MarketMechanism, MechanismType


@dataclass(frozen=True)
class PoolParams:
    """
    Pool-specific calculation inputs

    Constant product pools use the reserves and fee rate; concentrated
    liquidity pools typically also read the current tick from metadata.
    """
    reserve_a: Amount
    reserve_b: Amount
    fee_rate: Decimal = Decimal("0")
    metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class PoolState:
    """Derived state of a pool"""
    spot_price: Price  # Token A in terms of token B
    liquidity: Amount
    effective_liquidity: Amount
    accumulated_fees_a: Amount = field(default_factory=Amount.zero)
    accumulated_fees_b: Amount = field(default_factory=Amount.zero)
    metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class TokenAmounts:
    """Quantities of the two pool tokens"""
    amount_a: Amount
    amount_b: Amount


@dataclass(frozen=True)
class PoolPosition:
    """
    Liquidity provided to a pool

    Created by add_liquidity, valued via calculate, closed by
    remove_liquidity. Metadata carries implementation data such as a
    tick range.
    """
    pool_id: str
    liquidity: Amount
    tokens_deposited: TokenAmounts
    metadata: Dict[str, Any] = field(default_factory=dict)


class LiquidityPool(MarketMechanism):
    """AMM-style liquidity pool"""

    @property
    def mechanism(self) -> MechanismType:
        return MechanismType.LIQUIDITY_POOL

    @abstractmethod
    async def calculate(self, params: PoolParams) -> PoolState:
        """
        Compute pool state for the given parameters

        Raises:
            ValueError: If parameters are invalid or the calculation fails
        """
        pass

    @abstractmethod
    async def add_liquidity(self, amounts: TokenAmounts) -> PoolPosition:
        """
        Simulate adding liquidity

        Raises:
            ValueError: If amounts are invalid
        """
        pass

    @abstractmethod
    async def remove_liquidity(self, position: PoolPosition) -> TokenAmounts:
        """
        Simulate removing a position created by add_liquidity

        Raises:
            ValueError: If the position does not belong to this pool
        """
        pass
