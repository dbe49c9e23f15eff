"""
Tests for MarketSnapshot and Portfolio
"""
import asyncio
import threading
from datetime import datetime, timezone
from decimal import Decimal

import pytest

from cryptoquant.primitives import Amount, must_amount, must_price
from cryptoquant.strategy import (
    DuplicatePositionError,
    NilPositionError,
    Portfolio,
    PositionNotFoundError,
    PositionType,
    PositionWithRisk,
    RiskMetrics,
    PositionValuationError,
    PriceNotAvailableError,
    SimpleSnapshot,
    StrategyError,
)

from conftest import START, FailingPosition, FixedPosition, SpotPosition


class TestSimpleSnapshot:
    """Snapshot lookups"""

    def test_price_lookup(self, snapshot):
        assert snapshot.price("ETH/USDC") == must_price("2000")
        assert snapshot.time == START

    def test_missing_pair_names_the_pair(self, snapshot):
        with pytest.raises(PriceNotAvailableError, match="SOL/USDC"):
            snapshot.price("SOL/USDC")

    def test_pair_match_is_exact(self, snapshot):
        with pytest.raises(PriceNotAvailableError):
            snapshot.price("eth/usdc")

    def test_prices_returns_copy(self, snapshot):
        prices = snapshot.prices()
        prices["ETH/USDC"] = must_price("1")
        del prices["BTC/USDC"]

        assert snapshot.price("ETH/USDC") == must_price("2000")
        assert len(snapshot.prices()) == 2

    def test_metadata(self, snapshot):
        assert snapshot.get("perpetual:ETH-PERP:funding_rate") == (None, False)

        snapshot.set("perpetual:ETH-PERP:funding_rate", Decimal("0.0001"))
        assert snapshot.get("perpetual:ETH-PERP:funding_rate") == (Decimal("0.0001"), True)

    def test_naive_time_taken_as_utc(self):
        snap = SimpleSnapshot(time=datetime(2024, 1, 1))
        assert snap.time == datetime(2024, 1, 1, tzinfo=timezone.utc)
        assert snap.prices() == {}


class TestPortfolioPositions:
    """Position bookkeeping"""

    def test_add_and_get(self, portfolio):
        position = FixedPosition("p1", "100")
        portfolio.add_position(position)

        assert portfolio.get_position("p1") is position
        assert portfolio.has_position("p1")
        assert portfolio.position_count() == 1

    def test_duplicate_leaves_portfolio_unchanged(self, portfolio):
        first = FixedPosition("p1", "100")
        portfolio.add_position(first)

        with pytest.raises(DuplicatePositionError, match="p1"):
            portfolio.add_position(FixedPosition("p1", "999"))

        assert portfolio.position_count() == 1
        assert portfolio.get_position("p1") is first

    def test_add_none(self, portfolio):
        with pytest.raises(NilPositionError):
            portfolio.add_position(None)

    def test_remove_missing(self, portfolio):
        with pytest.raises(PositionNotFoundError, match="ghost"):
            portfolio.remove_position("ghost")
        with pytest.raises(PositionNotFoundError):
            portfolio.get_position("ghost")

    def test_remove(self, portfolio):
        portfolio.add_position(FixedPosition("p1"))
        portfolio.remove_position("p1")

        assert not portfolio.has_position("p1")
        assert portfolio.positions() == []

    def test_positions_copy_is_isolated(self, portfolio):
        portfolio.add_position(FixedPosition("p1"))
        listed = portfolio.positions()
        listed.append(FixedPosition("p2"))
        listed.clear()

        assert portfolio.position_count() == 1

    def test_positions_by_type(self, portfolio):
        portfolio.add_position(FixedPosition("spot", position_type=PositionType.SPOT))
        portfolio.add_position(FixedPosition("lp", position_type=PositionType.LIQUIDITY_POOL))
        portfolio.add_position(FixedPosition("lp2", position_type=PositionType.LIQUIDITY_POOL))

        ids = sorted(p.id for p in portfolio.positions_by_type(PositionType.LIQUIDITY_POOL))
        assert ids == ["lp", "lp2"]
        assert portfolio.positions_by_type(PositionType.OPTION) == []


class TestPortfolioCash:
    """Cash balance"""

    def test_default_cash_is_zero(self):
        assert Portfolio().cash() == Amount.zero()

    def test_adjust(self, portfolio):
        portfolio.adjust_cash(Decimal("-5000"))
        assert portfolio.cash() == must_amount("95000")

    def test_negative_balance_clamped(self):
        portfolio = Portfolio(must_amount("100"))
        portfolio.adjust_cash(Decimal("-250"))

        assert portfolio.cash() == Amount.zero()
        assert portfolio.cash_decimal() == Decimal("-150")

    def test_set_cash(self, portfolio):
        portfolio.set_cash(must_amount("42"))
        assert portfolio.cash_decimal() == Decimal("42")

    def test_concurrent_adjustments(self):
        portfolio = Portfolio()

        def deposit():
            for _ in range(1000):
                portfolio.adjust_cash(Decimal("0.01"))

        threads = [threading.Thread(target=deposit) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert portfolio.cash_decimal() == Decimal("40")


class TestPortfolioValuation:
    """Valuation against a snapshot"""

    @pytest.mark.asyncio
    async def test_value_is_cash_plus_positions(self, portfolio, snapshot):
        portfolio.add_position(SpotPosition("eth", "ETH/USDC", "2.5"))
        portfolio.add_position(FixedPosition("fixed", "1000"))
        portfolio.adjust_cash(Decimal("-6000"))

        assert await portfolio.positions_value(snapshot) == must_amount("6000")
        assert await portfolio.value(snapshot) == must_amount("100000")

    @pytest.mark.asyncio
    async def test_negative_total_reported_as_zero(self, snapshot):
        portfolio = Portfolio()
        portfolio.add_position(FixedPosition("p1", "10"))
        portfolio.adjust_cash(Decimal("-50"))

        assert await portfolio.value(snapshot) == Amount.zero()

    @pytest.mark.asyncio
    async def test_failing_position_names_id(self, portfolio, snapshot):
        portfolio.add_position(FixedPosition("ok", "1"))
        portfolio.add_position(FailingPosition("broken"))

        with pytest.raises(PositionValuationError, match="broken") as exc_info:
            await portfolio.value(snapshot)

        assert exc_info.value.position_id == "broken"
        assert isinstance(exc_info.value.__cause__, ValueError)

    @pytest.mark.asyncio
    async def test_missing_price_surfaces(self, portfolio, snapshot):
        portfolio.add_position(SpotPosition("sol", "SOL/USDC", "1"))

        with pytest.raises(StrategyError, match="SOL/USDC"):
            await portfolio.value(snapshot)

    @pytest.mark.asyncio
    async def test_value_does_not_mutate(self, portfolio, snapshot):
        portfolio.add_position(FixedPosition("p1", "5"))
        first = await portfolio.value(snapshot)
        second = await portfolio.value(snapshot)

        assert first == second
        assert portfolio.cash_decimal() == Decimal("100000")

    @pytest.mark.asyncio
    async def test_concurrent_valuation(self, portfolio, snapshot):
        for i in range(10):
            portfolio.add_position(FixedPosition(f"p{i}", "10"))

        values = await asyncio.gather(*(portfolio.value(snapshot) for _ in range(5)))
        assert all(v == must_amount("100100") for v in values)


class TestPortfolioCopy:
    """clone, clear and summary"""

    def test_clone_is_independent(self, portfolio):
        portfolio.add_position(FixedPosition("p1"))
        clone = portfolio.clone()

        clone.add_position(FixedPosition("p2"))
        clone.adjust_cash(Decimal("-1"))

        assert portfolio.position_count() == 1
        assert portfolio.cash_decimal() == Decimal("100000")
        assert clone.position_count() == 2

    def test_clear(self, portfolio):
        portfolio.add_position(FixedPosition("p1"))
        portfolio.clear()

        assert portfolio.position_count() == 0
        assert portfolio.cash_decimal() == Decimal("0")

    @pytest.mark.asyncio
    async def test_summary(self, portfolio, snapshot):
        portfolio.add_position(FixedPosition("p1", "50"))

        assert await portfolio.summary() == "Portfolio: 1 positions, Cash: 100000"
        assert (await portfolio.summary(snapshot)).endswith("Total Value: 100050")

    @pytest.mark.asyncio
    async def test_summary_without_value_on_failure(self, portfolio, snapshot):
        portfolio.add_position(FailingPosition())
        assert "Total Value" not in await portfolio.summary(snapshot)


class HedgedPerpPosition(PositionWithRisk):
    """Perp leg that reports delta from the snapshot price"""

    def __init__(self, size: str):
        self.size = Decimal(size)

    @property
    def id(self) -> str:
        return "perp"

    @property
    def type(self) -> PositionType:
        return PositionType.PERPETUAL

    async def value(self, snapshot) -> Amount:
        return Amount.zero()

    async def risk(self, snapshot) -> RiskMetrics:
        return RiskMetrics(delta=-self.size, leverage=Decimal("3"))


class TestPositionExtensions:
    """Optional position capabilities"""

    @pytest.mark.asyncio
    async def test_risk_reporting(self, portfolio, snapshot):
        portfolio.add_position(HedgedPerpPosition("2"))

        risky = [p for p in portfolio.positions() if isinstance(p, PositionWithRisk)]
        metrics = await risky[0].risk(snapshot)

        assert metrics.delta == Decimal("-2")
        assert metrics.gamma == Decimal("0")
        assert metrics.liquidation_price.is_zero()
