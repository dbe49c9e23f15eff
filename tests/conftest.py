"""
Shared test doubles

Positions, strategies and mechanism implementations that satisfy the
framework contracts with the simplest possible math.
"""
import itertools
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Callable, Dict, List, Optional, Sequence, Tuple

import pytest

from cryptoquant.mechanisms import (
    Derivative,
    Greeks,
    LiquidityPool,
    Order,
    OrderBook,
    OrderBookDepth,
    OrderNotFoundError,
    OrderSide,
    PoolParams,
    PoolPosition,
    PoolState,
    PositionDirection,
    PriceLevel,
    PriceParams,
    TokenAmounts,
)
from cryptoquant.primitives import Amount, Price, divide, must_amount, must_price, sqrt
from cryptoquant.strategy import (
    Action,
    MarketSnapshot,
    Portfolio,
    Position,
    PositionType,
    SimpleSnapshot,
    Strategy,
)


START = datetime(2024, 1, 1, tzinfo=timezone.utc)


class FixedPosition(Position):
    """Position with a constant value"""

    def __init__(self, position_id: str, value: str = "0", position_type: PositionType = PositionType.SPOT):
        self._id = position_id
        self._value = must_amount(value)
        self._type = position_type
        self.calls = 0

    @property
    def id(self) -> str:
        return self._id

    @property
    def type(self) -> PositionType:
        return self._type

    async def value(self, snapshot: MarketSnapshot) -> Amount:
        self.calls += 1
        return self._value


class SpotPosition(Position):
    """quantity * snapshot price of `pair`"""

    def __init__(self, position_id: str, pair: str, quantity: str):
        self._id = position_id
        self.pair = pair
        self.quantity = must_amount(quantity)

    @property
    def id(self) -> str:
        return self._id

    @property
    def type(self) -> PositionType:
        return PositionType.SPOT

    async def value(self, snapshot: MarketSnapshot) -> Amount:
        return self.quantity * snapshot.price(self.pair)


class FailingPosition(Position):
    """Position whose valuation always fails"""

    def __init__(self, position_id: str = "broken"):
        self._id = position_id

    @property
    def id(self) -> str:
        return self._id

    @property
    def type(self) -> PositionType:
        return PositionType.CUSTOM

    async def value(self, snapshot: MarketSnapshot) -> Amount:
        raise ValueError("valuation model diverged")


class ScriptedStrategy(Strategy):
    """Returns a prepared action list per step"""

    def __init__(self, script: Optional[Dict[int, List[Action]]] = None):
        self.script = script or {}
        self.step = 0
        self.seen: List[MarketSnapshot] = []

    async def rebalance(self, portfolio: Portfolio, snapshot: MarketSnapshot) -> List[Action]:
        actions = self.script.get(self.step, [])
        self.step += 1
        self.seen.append(snapshot)
        return actions


class CallbackStrategy(Strategy):
    """Delegates rebalance to a coroutine function"""

    def __init__(self, callback: Callable):
        self.callback = callback

    async def rebalance(self, portfolio: Portfolio, snapshot: MarketSnapshot) -> List[Action]:
        return await self.callback(portfolio, snapshot)


class ConstantProductPool(LiquidityPool):
    """x * y = k pool without fees on liquidity operations"""

    def __init__(self, pool_id: str = "ETH/USDC", venue: str = "test-amm"):
        self.pool_id = pool_id
        self._venue = venue

    @property
    def venue(self) -> str:
        return self._venue

    async def calculate(self, params: PoolParams) -> PoolState:
        if params.reserve_a.is_zero():
            raise ValueError("reserve A cannot be zero")
        spot = Price(divide(params.reserve_b.value, params.reserve_a.value))
        liquidity = Amount(sqrt(params.reserve_a.value * params.reserve_b.value))
        return PoolState(spot_price=spot, liquidity=liquidity, effective_liquidity=liquidity)

    async def add_liquidity(self, amounts: TokenAmounts) -> PoolPosition:
        if amounts.amount_a.is_zero() or amounts.amount_b.is_zero():
            raise ValueError("both token amounts must be positive")
        liquidity = Amount(sqrt(amounts.amount_a.value * amounts.amount_b.value))
        return PoolPosition(pool_id=self.pool_id, liquidity=liquidity, tokens_deposited=amounts)

    async def remove_liquidity(self, position: PoolPosition) -> TokenAmounts:
        if position.pool_id != self.pool_id:
            raise ValueError(f"position belongs to pool {position.pool_id}")
        return position.tokens_deposited


class PerpetualFuture(Derivative):
    """Linear perpetual: value tracks mark price, only delta applies"""

    def __init__(self, entry_price: str, size: str, direction: PositionDirection = PositionDirection.LONG):
        self.entry_price = must_price(entry_price)
        self.size = must_amount(size)
        self.direction = direction
        self.last_mark = self.entry_price

    @property
    def venue(self) -> str:
        return "test-perps"

    async def price(self, params: PriceParams) -> Price:
        return params.mark_price

    async def greeks(self, params: PriceParams) -> Greeks:
        delta = Decimal("1") if self.direction == PositionDirection.LONG else Decimal("-1")
        return Greeks(delta=delta * self.size.value)

    async def settle(self) -> Decimal:
        diff = self.last_mark.value - self.entry_price.value
        if self.direction == PositionDirection.SHORT:
            diff = -diff
        return diff * self.size.value


class InMemoryOrderBook(OrderBook):
    """Resting-order ledger without matching"""

    def __init__(self):
        self._ids = itertools.count(1)
        self._orders: Dict[str, Order] = {}

    @property
    def venue(self) -> str:
        return "test-cex"

    def _levels(self, side: OrderSide) -> List[PriceLevel]:
        totals: Dict[Price, Tuple[Amount, int]] = {}
        for order in self._orders.values():
            if order.side != side:
                continue
            size, count = totals.get(order.price, (Amount.zero(), 0))
            totals[order.price] = (size + order.size, count + 1)
        prices = sorted(totals, reverse=(side == OrderSide.BUY))
        return [PriceLevel(price=p, size=totals[p][0], order_count=totals[p][1]) for p in prices]

    async def best_bid(self) -> Tuple[Price, Amount]:
        return (await self.depth(1)).best_bid()

    async def best_ask(self) -> Tuple[Price, Amount]:
        return (await self.depth(1)).best_ask()

    async def place_order(self, order: Order) -> str:
        order_id = f"order-{next(self._ids)}"
        self._orders[order_id] = order
        return order_id

    async def cancel_order(self, order_id: str) -> None:
        if order_id not in self._orders:
            raise OrderNotFoundError(order_id)
        del self._orders[order_id]

    async def depth(self, levels: int = 0) -> OrderBookDepth:
        bids = self._levels(OrderSide.BUY)
        asks = self._levels(OrderSide.SELL)
        if levels > 0:
            bids, asks = bids[:levels], asks[:levels]
        return OrderBookDepth(bids=bids, asks=asks)


def make_snapshots(
    count: int,
    prices: Optional[Sequence[str]] = None,
    pair: str = "ETH/USDC",
    interval: timedelta = timedelta(days=1)
) -> List[SimpleSnapshot]:
    """Daily snapshots, optionally pricing `pair`"""
    snapshots = []
    for i in range(count):
        snapshot_prices = {pair: must_price(prices[i])} if prices else {}
        snapshots.append(SimpleSnapshot(time=START + interval * i, prices=snapshot_prices))
    return snapshots


@pytest.fixture
def snapshot() -> SimpleSnapshot:
    return SimpleSnapshot(
        time=START,
        prices={"ETH/USDC": must_price("2000"), "BTC/USDC": must_price("40000")},
    )


@pytest.fixture
def portfolio() -> Portfolio:
    return Portfolio(must_amount("100000"))
