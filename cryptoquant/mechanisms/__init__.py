"""
Market Mechanisms

Extensible contracts for trading venues and protocols. The core depends
only on these interfaces; concrete math (AMM curves, option models,
order matching) is supplied by implementations.

Categories:
- LiquidityPool: calculate / add_liquidity / remove_liquidity
- Derivative: price / greeks / settle
- OrderBook: best_bid / best_ask / place_order / cancel_order / depth

Adding a category means subclassing MarketMechanism; nothing in the
portfolio or backtest pipeline changes.
"""

from .base import MechanismType, MarketMechanism
from .errors import MechanismError, CrossedBookError, OrderNotFoundError
from .liquidity_pool import (
    LiquidityPool,
    PoolParams,
    PoolState,
    PoolPosition,
    TokenAmounts,
)
from .derivative import (
    Derivative,
    PriceParams,
    Greeks,
    OptionType,
    PositionDirection,
)
from .orderbook import (
    OrderBook,
    Order,
    OrderID,
    OrderSide,
    OrderType,
    TimeInForce,
    PriceLevel,
    OrderBookDepth,
)

__all__ = [
    "MechanismType",
    "MarketMechanism",
    "MechanismError",
    "CrossedBookError",
    "OrderNotFoundError",
    "LiquidityPool",
    "PoolParams",
    "PoolState",
    "PoolPosition",
    "TokenAmounts",
    "Derivative",
    "PriceParams",
    "Greeks",
    "OptionType",
    "PositionDirection",
    "OrderBook",
    "Order",
    "OrderID",
    "OrderSide",
    "OrderType",
    "TimeInForce",
    "PriceLevel",
    "OrderBookDepth",
]
