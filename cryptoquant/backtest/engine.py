"""
Backtesting Engine

Deterministic, sequential replay of a strategy over market snapshots:
- For each snapshot, in the given order, ask the strategy to rebalance
- Apply the returned actions to the portfolio, in order
- Value the portfolio and record (snapshot time, value)

Any failure aborts the run: there is no retry, skip or partial result.
Actions already applied in the failing step are not rolled back.

State machine: IDLE -> RUNNING -> COMPLETED | ABORTED

Usage:
    engine = BacktestEngine(BacktestConfig(initial_cash=Amount("100000")))
    result = await engine.run(strategy, snapshots)
    print(result.summary())
"""
import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from loguru import logger

from ..primitives import Amount, Time, must_amount
from ..strategy import Action, MarketSnapshot, Portfolio, Strategy
from .result import BacktestResult, ValuePoint


DEFAULT_INITIAL_CASH = must_amount("10000")


class EngineState(str, Enum):
    """Backtest engine lifecycle"""
    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    ABORTED = "aborted"


class BacktestError(Exception):
    """
    A run was aborted

    The underlying error is chained as __cause__; step context says where
    the run stopped.
    """

    def __init__(
        self,
        message: str,
        step: Optional[int] = None,
        time: Optional[Time] = None,
        action_index: Optional[int] = None
    ):
        self.step = step
        self.time = time
        self.action_index = action_index
        super().__init__(message)


class EngineStateError(BacktestError):
    """Operation not allowed in the engine's current state"""
    pass


class SnapshotOrderError(BacktestError):
    """Snapshots are not in chronological order"""
    pass


@dataclass
class BacktestConfig:
    """Backtest configuration"""

    # Capital
    initial_cash: Amount = DEFAULT_INITIAL_CASH

    # Logging
    enable_detailed_logging: bool = False  # Log every step and action

    # Per-step limit on strategy rebalancing, in seconds
    step_timeout: Optional[float] = None

    def __post_init__(self):
        if not isinstance(self.initial_cash, Amount):
            raise TypeError(f"initial_cash must be an Amount, got {type(self.initial_cash).__name__}")
        if not self.initial_cash.is_positive():
            raise ValueError("initial_cash must be positive")
        if self.step_timeout is not None and self.step_timeout <= 0:
            raise ValueError("step_timeout must be positive")

    @classmethod
    def from_settings(cls, settings) -> "BacktestConfig":
        """
        Build from application settings

        Args:
            settings: shared.config.settings.Settings or its BacktestSettings
        """
        backtest = getattr(settings, "backtest", settings)
        return cls(
            initial_cash=Amount(backtest.initial_cash),
            enable_detailed_logging=backtest.enable_detailed_logging,
            step_timeout=backtest.step_timeout,
        )


class BacktestEngine:
    """
    Backtesting engine for strategy validation

    Owns one portfolio for the duration of a run; nothing else mutates it.
    """

    def __init__(self, config: Optional[BacktestConfig] = None):
        """
        Initialize backtest engine

        Args:
            config: Backtest configuration (defaults to BacktestConfig())
        """
        self.config = config or BacktestConfig()
        self.portfolio = Portfolio(self.config.initial_cash)
        self.state = EngineState.IDLE
        self.value_history: List[ValuePoint] = []

        logger.info(f"Initialized BacktestEngine: initial_cash={self.config.initial_cash}")

    def reset(self) -> None:
        """Return a finished engine to IDLE with a fresh portfolio"""
        if self.state == EngineState.RUNNING:
            raise EngineStateError("cannot reset a running backtest")

        self.portfolio = Portfolio(self.config.initial_cash)
        self.value_history = []
        self.state = EngineState.IDLE

    async def run(
        self,
        strategy: Strategy,
        snapshots: Sequence[MarketSnapshot]
    ) -> BacktestResult:
        """
        Run backtest

        Args:
            strategy: Strategy to replay
            snapshots: Market snapshots in chronological order

        Returns:
            BacktestResult with final portfolio, value history and metrics

        Raises:
            EngineStateError: If the engine is not IDLE
            BacktestError: If validation fails or any step fails
            asyncio.CancelledError: If the run is cancelled
        """
        if self.state != EngineState.IDLE:
            raise EngineStateError(f"engine is {self.state.value}; call reset() before running again")
        if strategy is None:
            raise BacktestError("strategy cannot be None")
        if not snapshots:
            raise BacktestError("snapshots cannot be empty")
        self._check_order(snapshots)

        strategy_name = getattr(strategy, "name", type(strategy).__name__)

        logger.info("=" * 70)
        logger.info(f"Starting backtest: {strategy_name}")
        logger.info(f"Period: {snapshots[0].time} to {snapshots[-1].time} ({len(snapshots)} snapshots)")
        logger.info(f"Initial cash: {self.config.initial_cash}")
        logger.info("=" * 70)

        self.state = EngineState.RUNNING
        try:
            for step, snapshot in enumerate(snapshots):
                await self._run_step(strategy, step, snapshot)
            result, summary = self._build_result()
        except asyncio.CancelledError:
            self.state = EngineState.ABORTED
            logger.warning(f"Backtest cancelled after {len(self.value_history)} steps")
            raise
        except BacktestError as e:
            self.state = EngineState.ABORTED
            logger.error(f"Backtest aborted: {e}")
            raise

        self.state = EngineState.COMPLETED

        logger.info("Backtest complete\n" + summary)
        return result

    def _build_result(self) -> Tuple[BacktestResult, str]:
        """Result and its summary report; a metrics failure aborts the run"""
        try:
            result = BacktestResult(
                portfolio=self.portfolio,
                initial_value=self.config.initial_cash,
                final_value=self.value_history[-1].value,
                value_history=list(self.value_history),
            )
            return result, result.summary()
        except Exception as e:
            raise BacktestError(f"failed to compute backtest result: {e}") from e

    async def _run_step(self, strategy: Strategy, step: int, snapshot: MarketSnapshot) -> None:
        """Rebalance, apply actions, record value"""
        detailed = self.config.enable_detailed_logging
        time = snapshot.time

        actions = await self._rebalance(strategy, step, snapshot)

        if detailed:
            logger.debug(f"Step {step} @ {time}: {len(actions)} actions")

        for action_index, action in enumerate(actions):
            if detailed:
                logger.debug(f"  Applying {action}")
            try:
                action.apply(self.portfolio)
            except Exception as e:
                raise BacktestError(
                    f"failed to apply action {action_index} ({action}) at snapshot {step} ({time}): {e}",
                    step=step,
                    time=time,
                    action_index=action_index,
                ) from e

        try:
            value = await self.portfolio.value(snapshot)
        except Exception as e:
            raise BacktestError(
                f"failed to value portfolio at snapshot {step} ({time}): {e}",
                step=step,
                time=time,
            ) from e

        self.value_history.append(ValuePoint(time=time, value=value))

        if detailed:
            logger.debug(f"Step {step} @ {time}: value={value} cash={self.portfolio.cash_decimal()}")

    async def _rebalance(
        self,
        strategy: Strategy,
        step: int,
        snapshot: MarketSnapshot
    ) -> List[Action]:
        time = snapshot.time
        try:
            if self.config.step_timeout is not None:
                actions = await asyncio.wait_for(
                    strategy.rebalance(self.portfolio, snapshot),
                    timeout=self.config.step_timeout,
                )
            else:
                actions = await strategy.rebalance(self.portfolio, snapshot)
        except asyncio.TimeoutError as e:
            if self.config.step_timeout is None:
                # Raised by the strategy itself, not by the step limit
                raise BacktestError(
                    f"strategy rebalance failed at snapshot {step} ({time}): {e!r}",
                    step=step,
                    time=time,
                ) from e
            raise BacktestError(
                f"strategy rebalance timed out after {self.config.step_timeout}s at snapshot {step} ({time})",
                step=step,
                time=time,
            ) from e
        except Exception as e:
            raise BacktestError(
                f"strategy rebalance failed at snapshot {step} ({time}): {e}",
                step=step,
                time=time,
            ) from e

        return list(actions or [])

    @staticmethod
    def _check_order(snapshots: Sequence[MarketSnapshot]) -> None:
        """Reject snapshots earlier than their predecessor; equal times are allowed"""
        previous = snapshots[0].time
        for index, snapshot in enumerate(snapshots[1:], start=1):
            if snapshot.time < previous:
                raise SnapshotOrderError(
                    f"snapshot {index} ({snapshot.time}) is earlier than snapshot {index - 1} ({previous})",
                    step=index,
                    time=snapshot.time,
                )
            previous = snapshot.time
