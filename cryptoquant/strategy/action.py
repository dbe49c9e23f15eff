"""
Actions

Mutations a strategy asks the engine to apply to a portfolio. Strategies
never touch the portfolio directly; they return a list of actions and the
engine applies them in order.

Variants:
- AddPositionAction: add a new position
- RemovePositionAction: remove a position by id
- ReplacePositionAction: remove one position, add its successor
- AdjustCashAction: add a signed delta to cash
- BatchAction: apply several actions in sequence

Each action validates its own arguments inside apply() and raises on
failure. BatchAction stops at the first failing step and does not roll
back the steps that already succeeded.
"""
from abc import ABC, abstractmethod
from decimal import Decimal
from typing import List, Optional

from .errors import (
    BatchActionError,
    InvalidActionError,
    NilPortfolioError,
)
from .portfolio import Portfolio
from .position import Position


class Action(ABC):
    """Base class for portfolio mutations"""

    @abstractmethod
    def apply(self, portfolio: Portfolio) -> None:
        """
        Apply this action to the portfolio

        Raises:
            NilPortfolioError: If portfolio is None
            StrategyError: If the action cannot be applied
        """
        pass

    @abstractmethod
    def __str__(self) -> str:
        """Human-readable description for logs"""
        pass

    def __repr__(self) -> str:
        return str(self)


def _require_portfolio(portfolio: Optional[Portfolio]) -> Portfolio:
    if portfolio is None:
        raise NilPortfolioError()
    return portfolio


class AddPositionAction(Action):
    """Add a new position to the portfolio"""

    def __init__(self, position: Position):
        self.position = position

    def apply(self, portfolio: Portfolio) -> None:
        _require_portfolio(portfolio)
        if self.position is None:
            raise InvalidActionError("cannot add None position")
        portfolio.add_position(self.position)

    def __str__(self) -> str:
        if self.position is None:
            return "AddPosition(None)"
        return f"AddPosition({self.position.id})"


class RemovePositionAction(Action):
    """Remove a position by id"""

    def __init__(self, position_id: str):
        self.position_id = position_id

    def apply(self, portfolio: Portfolio) -> None:
        _require_portfolio(portfolio)
        if not self.position_id:
            raise InvalidActionError("position id cannot be empty")
        portfolio.remove_position(self.position_id)

    def __str__(self) -> str:
        return f"RemovePosition({self.position_id})"


class ReplacePositionAction(Action):
    """
    Replace a held position with a new one

    Used for adjusting an LP range or rolling an option. Arguments are
    checked before anything is removed; if adding the successor fails,
    the old position is restored.
    """

    def __init__(self, old_position_id: str, new_position: Position):
        self.old_position_id = old_position_id
        self.new_position = new_position

    def apply(self, portfolio: Portfolio) -> None:
        _require_portfolio(portfolio)
        if not self.old_position_id:
            raise InvalidActionError("old position id cannot be empty")
        if self.new_position is None:
            raise InvalidActionError("new position cannot be None")

        old_position = portfolio.get_position(self.old_position_id)
        portfolio.remove_position(self.old_position_id)
        try:
            portfolio.add_position(self.new_position)
        except Exception:
            portfolio.add_position(old_position)
            raise

    def __str__(self) -> str:
        new_id = self.new_position.id if self.new_position is not None else "None"
        return f"ReplacePosition({self.old_position_id} -> {new_id})"


class AdjustCashAction(Action):
    """
    Add or remove cash

    Positive delta adds cash, negative removes it. The balance may go
    negative (margin / leverage).
    """

    def __init__(self, delta: Decimal, reason: str = ""):
        self.delta = delta
        self.reason = reason

    def apply(self, portfolio: Portfolio) -> None:
        _require_portfolio(portfolio)
        portfolio.adjust_cash(self.delta)

    def __str__(self) -> str:
        if self.reason:
            return f"AdjustCash({self.delta}, reason: {self.reason})"
        return f"AdjustCash({self.delta})"


class BatchAction(Action):
    """
    Several actions applied in sequence

    Not atomic: the first failure stops the batch and raises
    BatchActionError, leaving earlier steps applied.
    """

    def __init__(self, *actions: Action):
        self.actions: List[Action] = list(actions)

    def apply(self, portfolio: Portfolio) -> None:
        _require_portfolio(portfolio)
        for index, action in enumerate(self.actions):
            try:
                action.apply(portfolio)
            except Exception as e:
                raise BatchActionError(index, action, e) from e

    def __str__(self) -> str:
        return f"BatchAction({len(self.actions)} actions)"
