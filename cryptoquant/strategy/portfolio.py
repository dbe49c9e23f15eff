"""
Portfolio

Ledger of positions keyed by unique id plus a signed cash balance.

Cash is tracked as a signed Decimal so strategies can model margin or
leverage by going negative. cash() exposes a clamped, non-negative view
for display; cash_decimal() reports the true balance.

Concurrency:
- Every method takes the ledger lock for the time it touches internal state
- Reads may come from several threads; writes need a single writer, since
  read-then-write sequences spanning several calls are not atomic
- Valuation copies the position set under the lock and awaits each
  position's value() outside it

Usage:
    portfolio = Portfolio(Amount("100000"))
    portfolio.add_position(position)
    portfolio.adjust_cash(Decimal("-5000"))

    total = await portfolio.value(snapshot)
"""
import threading
from decimal import Decimal
from typing import Dict, List, Optional

from loguru import logger

from ..primitives import Amount, add
from .errors import (
    DuplicatePositionError,
    NilPositionError,
    PositionNotFoundError,
    PositionValuationError,
    StrategyError,
)
from .market import MarketSnapshot
from .position import Position, PositionType


class Portfolio:
    """Position and cash ledger"""

    def __init__(self, initial_cash: Optional[Amount] = None):
        """
        Initialize portfolio

        Args:
            initial_cash: Starting cash balance (defaults to zero)
        """
        self._lock = threading.Lock()
        self._positions: Dict[str, Position] = {}
        self._cash: Decimal = initial_cash.value if initial_cash is not None else Decimal("0")

    def add_position(self, position: Position) -> None:
        """
        Add a position

        Raises:
            NilPositionError: If position is None
            DuplicatePositionError: If a position with the same id is held
        """
        if position is None:
            raise NilPositionError()

        position_id = position.id
        with self._lock:
            if position_id in self._positions:
                raise DuplicatePositionError(position_id)
            self._positions[position_id] = position

        logger.debug(f"Position added: {position_id} ({position.type.value})")

    def remove_position(self, position_id: str) -> None:
        """
        Remove a position

        Raises:
            PositionNotFoundError: If no position has this id
        """
        with self._lock:
            if position_id not in self._positions:
                raise PositionNotFoundError(position_id)
            del self._positions[position_id]

        logger.debug(f"Position removed: {position_id}")

    def get_position(self, position_id: str) -> Position:
        """
        Raises:
            PositionNotFoundError: If no position has this id
        """
        with self._lock:
            try:
                return self._positions[position_id]
            except KeyError:
                raise PositionNotFoundError(position_id) from None

    def has_position(self, position_id: str) -> bool:
        with self._lock:
            return position_id in self._positions

    def positions(self) -> List[Position]:
        """Copy of the held positions"""
        with self._lock:
            return list(self._positions.values())

    def positions_by_type(self, position_type: PositionType) -> List[Position]:
        with self._lock:
            return [p for p in self._positions.values() if p.type == position_type]

    def position_count(self) -> int:
        with self._lock:
            return len(self._positions)

    def cash(self) -> Amount:
        """Cash balance clamped at zero"""
        with self._lock:
            balance = self._cash
        if balance < 0:
            return Amount.zero()
        return Amount(balance)

    def cash_decimal(self) -> Decimal:
        """Signed cash balance"""
        with self._lock:
            return self._cash

    def adjust_cash(self, delta: Decimal) -> None:
        """Add a signed delta to the cash balance; the balance may go negative"""
        with self._lock:
            self._cash = add(self._cash, delta)
            balance = self._cash

        logger.debug(f"Cash adjusted by {delta}: balance={balance}")

    def set_cash(self, amount: Amount) -> None:
        with self._lock:
            self._cash = amount.value

    async def value(self, snapshot: MarketSnapshot) -> Amount:
        """
        Cash plus the value of every position

        A negative total is reported as zero, since an Amount cannot be
        negative; cash_decimal() still shows the true balance.

        Raises:
            StrategyError: If any position fails to value (no partial total)
        """
        with self._lock:
            total = self._cash
            positions = list(self._positions.items())

        for position_id, position in positions:
            position_value = await self._value_position(position_id, position, snapshot)
            total = add(total, position_value.value)

        if total < 0:
            return Amount.zero()
        return Amount(total)

    async def positions_value(self, snapshot: MarketSnapshot) -> Amount:
        """
        Value of all positions excluding cash

        Raises:
            StrategyError: If any position fails to value
        """
        with self._lock:
            positions = list(self._positions.items())

        total = Amount.zero()
        for position_id, position in positions:
            total = total + await self._value_position(position_id, position, snapshot)

        return total

    @staticmethod
    async def _value_position(
        position_id: str,
        position: Position,
        snapshot: MarketSnapshot
    ) -> Amount:
        try:
            return await position.value(snapshot)
        except Exception as e:
            raise PositionValuationError(position_id, e) from e

    def clone(self) -> "Portfolio":
        """
        Independent copy of the ledger

        Positions are shared by reference; they are immutable once added.
        """
        with self._lock:
            clone = Portfolio()
            clone._positions = dict(self._positions)
            clone._cash = self._cash
        return clone

    def clear(self) -> None:
        """Remove all positions and zero the cash balance"""
        with self._lock:
            self._positions = {}
            self._cash = Decimal("0")

    async def summary(self, snapshot: Optional[MarketSnapshot] = None) -> str:
        """One-line description, with total value when a snapshot is given"""
        with self._lock:
            count = len(self._positions)
            cash = self._cash

        summary = f"Portfolio: {count} positions, Cash: {cash}"
        if snapshot is not None:
            try:
                total = await self.value(snapshot)
            except StrategyError as e:
                logger.debug(f"Portfolio summary without total value: {e}")
            else:
                summary += f", Total Value: {total}"

        return summary

    def __repr__(self) -> str:
        return f"Portfolio(positions={self.position_count()}, cash={self.cash_decimal()})"

