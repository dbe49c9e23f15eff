"""
Order book contract

CEX-style limit order ledger. Matching logic belongs to implementations;
this module fixes the order model, the depth snapshot and the operations.

Contract:
- best_bid()/best_ask() return (zero price, zero amount) for an empty side
- a crossed book (best bid >= best ask) is an invariant violation,
  reported by OrderBookDepth.validate() as CrossedBookError
- place_order() returns an id unique within the book, accepted by
  cancel_order(); unknown ids raise OrderNotFoundError
"""
from abc import abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..primitives import Amount, Price, Time, now
from .base import MarketMechanism, MechanismType
from .errors import CrossedBookError


OrderID = str


class OrderSide(str, Enum):
    """Order side"""
    BUY = "buy"
    SELL = "sell"


class OrderType(str, Enum):
    """Order type"""
    LIMIT = "limit"
    MARKET = "market"
    STOP_LOSS = "stop_loss"
    STOP_LIMIT = "stop_limit"


class TimeInForce(str, Enum):
    """Time in force"""
    GTC = "GTC"  # Good till cancel
    IOC = "IOC"  # Immediate or cancel
    FOK = "FOK"  # Fill or kill
    GTD = "GTD"  # Good till date


class Order(BaseModel):
    """
    Order to place in a book

    Raises pydantic.ValidationError when the size is zero, a limit or
    stop-limit order has no positive price, a stop order has no stop
    price, or a GTD order has no expiry.
    """
    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    side: OrderSide
    order_type: OrderType
    size: Amount
    price: Price = Field(default_factory=Price.zero)  # Ignored for market orders
    time_in_force: TimeInForce = TimeInForce.GTC
    stop_price: Price = Field(default_factory=Price.zero)
    expiry_time: Optional[Time] = None
    metadata: dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _validate_order(self) -> "Order":
        if not self.size.is_positive():
            raise ValueError("order size must be positive")
        if self.order_type in (OrderType.LIMIT, OrderType.STOP_LIMIT) and not self.price.is_positive():
            raise ValueError(f"{self.order_type.value} order requires a positive price")
        if self.order_type in (OrderType.STOP_LOSS, OrderType.STOP_LIMIT) and not self.stop_price.is_positive():
            raise ValueError(f"{self.order_type.value} order requires a positive stop price")
        if self.time_in_force == TimeInForce.GTD and self.expiry_time is None:
            raise ValueError("GTD order requires an expiry time")
        return self


@dataclass(frozen=True)
class PriceLevel:
    """Aggregated size at one price"""
    price: Price
    size: Amount
    order_count: int = 1


@dataclass(frozen=True)
class OrderBookDepth:
    """
    Book depth snapshot

    Bids sorted by price descending, asks ascending.
    """
    bids: List[PriceLevel] = field(default_factory=list)
    asks: List[PriceLevel] = field(default_factory=list)
    timestamp: Time = field(default_factory=now)

    def best_bid(self) -> Tuple[Price, Amount]:
        if not self.bids:
            return Price.zero(), Amount.zero()
        return self.bids[0].price, self.bids[0].size

    def best_ask(self) -> Tuple[Price, Amount]:
        if not self.asks:
            return Price.zero(), Amount.zero()
        return self.asks[0].price, self.asks[0].size

    def is_crossed(self) -> bool:
        if not self.bids or not self.asks:
            return False
        return self.bids[0].price >= self.asks[0].price

    def validate(self) -> None:
        """
        Raises:
            CrossedBookError: If best bid >= best ask
        """
        if self.is_crossed():
            raise CrossedBookError(self.bids[0].price, self.asks[0].price)


class OrderBook(MarketMechanism):
    """Limit order book"""

    @property
    def mechanism(self) -> MechanismType:
        return MechanismType.ORDER_BOOK

    @abstractmethod
    async def best_bid(self) -> Tuple[Price, Amount]:
        """Highest bid and its size; zero/zero when there are no bids"""
        pass

    @abstractmethod
    async def best_ask(self) -> Tuple[Price, Amount]:
        """Lowest ask and its size; zero/zero when there are no asks"""
        pass

    @abstractmethod
    async def place_order(self, order: Order) -> OrderID:
        """Place an order and return its book-unique id"""
        pass

    @abstractmethod
    async def cancel_order(self, order_id: OrderID) -> None:
        """
        Cancel an order

        Raises:
            OrderNotFoundError: If the id was not issued by this book or is already gone
        """
        pass

    @abstractmethod
    async def depth(self, levels: int = 0) -> OrderBookDepth:
        """Book depth up to `levels` price levels (0 = full book)"""
        pass
