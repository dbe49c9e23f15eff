"""
Market Snapshot

Point-in-time view of market data. Strategies and positions read prices
and mechanism-specific metadata (pool ticks, funding rates, volatility
surfaces) from a snapshot without knowing where the data came from.

Usage:
    snapshot = SimpleSnapshot(
        time=datetime(2024, 1, 1, tzinfo=timezone.utc),
        prices={"ETH/USDC": Price("2000")},
    )
    snapshot.set("perpetual:ETH-PERP:funding_rate", Decimal("0.0001"))

    price = snapshot.price("ETH/USDC")
    rate, found = snapshot.get("perpetual:ETH-PERP:funding_rate")
"""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, Mapping, Optional, Tuple

from ..primitives import Price, Time, to_utc
from .errors import PriceNotAvailableError


class MarketSnapshot(ABC):
    """
    Immutable market state at one instant

    The core only reads from snapshots; they are built once per time step
    by the data-supplying side.
    """

    @property
    @abstractmethod
    def time(self) -> Time:
        """Timestamp of this snapshot (UTC)"""
        pass

    @abstractmethod
    def price(self, pair: str) -> Price:
        """
        Price for an exact pair symbol match

        Raises:
            PriceNotAvailableError: If the pair is not priced
        """
        pass

    @abstractmethod
    def prices(self) -> Dict[str, Price]:
        """All available prices"""
        pass

    @abstractmethod
    def get(self, key: str) -> Tuple[Any, bool]:
        """
        Mechanism-specific metadata

        Returns:
            (value, found); (None, False) when the key is absent
        """
        pass


class SimpleSnapshot(MarketSnapshot):
    """In-memory snapshot backed by dictionaries"""

    def __init__(
        self,
        time: datetime,
        prices: Optional[Mapping[str, Price]] = None,
        data: Optional[Mapping[str, Any]] = None
    ):
        """
        Initialize snapshot

        Args:
            time: Snapshot timestamp (naive values are taken as UTC)
            prices: Pair symbol -> price
            data: Initial metadata
        """
        self._time = to_utc(time)
        self._prices: Dict[str, Price] = dict(prices or {})
        self._data: Dict[str, Any] = dict(data or {})

    @property
    def time(self) -> Time:
        return self._time

    def price(self, pair: str) -> Price:
        try:
            return self._prices[pair]
        except KeyError:
            raise PriceNotAvailableError(pair) from None

    def prices(self) -> Dict[str, Price]:
        return dict(self._prices)

    def get(self, key: str) -> Tuple[Any, bool]:
        if key in self._data:
            return self._data[key], True
        return None, False

    def set(self, key: str, value: Any) -> None:
        """Store metadata; for use while building the snapshot"""
        self._data[key] = value

    def __repr__(self) -> str:
        return f"SimpleSnapshot(time={self._time.isoformat()}, pairs={sorted(self._prices)})"
