"""
Base interface for market mechanisms

Every mechanism (liquidity pool, derivative, order book, or a category
added later) reports its category and the venue it lives on. The core
never branches on the concrete implementation; new categories plug in by
implementing these interfaces.
"""
from abc import ABC, abstractmethod
from enum import Enum


class MechanismType(str, Enum):
    """Market mechanism category"""
    LIQUIDITY_POOL = "liquidity_pool"  # Uniswap, Curve, Balancer
    DERIVATIVE = "derivative"  # Options, perpetuals, futures
    ORDER_BOOK = "orderbook"  # CEX-style limit order books


class MarketMechanism(ABC):
    """
    Base interface for all market mechanisms

    Implementations are not required to be thread-safe. Category
    operations are coroutines so that long-running calculations can
    observe task cancellation at their await points.
    """

    @property
    @abstractmethod
    def mechanism(self) -> MechanismType:
        """Mechanism category"""
        pass

    @property
    @abstractmethod
    def venue(self) -> str:
        """Where this mechanism exists (e.g., 'uniswap-v3', 'deribit'); may be empty"""
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}(mechanism={self.mechanism.value}, venue={self.venue!r})"
