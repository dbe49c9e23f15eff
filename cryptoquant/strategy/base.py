"""
Base Strategy Class

A strategy looks at the current portfolio and market snapshot and returns
the actions it wants applied. It must not mutate the portfolio itself.

Example:
    class BuyAndHold(Strategy):
        def __init__(self, position: Position, cost: Decimal):
            self.position = position
            self.cost = cost

        async def rebalance(self, portfolio, snapshot):
            if portfolio.has_position(self.position.id):
                return []
            return [
                AddPositionAction(self.position),
                AdjustCashAction(-self.cost, reason="buy"),
            ]
"""
from abc import ABC, abstractmethod
from typing import List

from .action import Action
from .market import MarketSnapshot
from .portfolio import Portfolio


class Strategy(ABC):
    """
    Abstract base class for strategies

    The backtest engine calls rebalance() once per snapshot, sequentially.
    Implementations need not be thread-safe.
    """

    @property
    def name(self) -> str:
        return type(self).__name__

    @abstractmethod
    async def rebalance(self, portfolio: Portfolio, snapshot: MarketSnapshot) -> List[Action]:
        """
        Decide the portfolio changes for this snapshot

        Args:
            portfolio: Current portfolio (read only)
            snapshot: Current market snapshot

        Returns:
            Actions to apply, in order; empty when nothing changes

        Raises:
            Exception: Any error aborts the backtest run
        """
        pass
