"""
Strategy Framework

Portfolio management and the seams strategies plug into:
- MarketSnapshot / SimpleSnapshot: point-in-time market data
- Position: anything a portfolio holds and can value
- Action: mutations strategies return (add, remove, replace, cash, batch)
- Portfolio: lock-guarded ledger of positions and signed cash
- Strategy: decides actions from portfolio and snapshot

Usage:
    class MyStrategy(Strategy):
        async def rebalance(self, portfolio, snapshot):
            return [AdjustCashAction(Decimal("-100"), reason="fee")]
"""

from .errors import (
    StrategyError,
    PriceNotAvailableError,
    PositionNotFoundError,
    DuplicatePositionError,
    InvalidActionError,
    NilPortfolioError,
    NilPositionError,
    BatchActionError,
    PositionValuationError,
)
from .market import MarketSnapshot, SimpleSnapshot
from .position import (
    Position,
    PositionType,
    PositionWithRisk,
    PositionMetadata,
    RiskMetrics,
)
from .portfolio import Portfolio
from .action import (
    Action,
    AddPositionAction,
    RemovePositionAction,
    ReplacePositionAction,
    AdjustCashAction,
    BatchAction,
)
from .base import Strategy

__all__ = [
    "StrategyError",
    "PriceNotAvailableError",
    "PositionNotFoundError",
    "DuplicatePositionError",
    "InvalidActionError",
    "NilPortfolioError",
    "NilPositionError",
    "BatchActionError",
    "PositionValuationError",
    "MarketSnapshot",
    "SimpleSnapshot",
    "Position",
    "PositionType",
    "PositionWithRisk",
    "PositionMetadata",
    "RiskMetrics",
    "Portfolio",
    "Action",
    "AddPositionAction",
    "RemovePositionAction",
    "ReplacePositionAction",
    "AdjustCashAction",
    "BatchAction",
    "Strategy",
]
