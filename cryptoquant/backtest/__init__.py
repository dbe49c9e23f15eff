"""
Backtesting Framework

Deterministic replay of a strategy over historical market snapshots.

Features:
- Sequential, fail-fast replay (no skips, no retries)
- Exact-decimal portfolio valuation at every snapshot
- Performance metrics: total and annualized return, Sharpe, max drawdown

Usage:
    from cryptoquant.backtest import BacktestEngine, BacktestConfig
    from cryptoquant.primitives import Amount

    engine = BacktestEngine(BacktestConfig(initial_cash=Amount("100000")))
    result = await engine.run(strategy, snapshots)
    print(result.summary())
"""

from .engine import (
    BacktestConfig,
    BacktestEngine,
    BacktestError,
    EngineState,
    EngineStateError,
    SnapshotOrderError,
    DEFAULT_INITIAL_CASH,
)
from .result import BacktestResult, ValuePoint

__all__ = [
    "BacktestConfig",
    "BacktestEngine",
    "BacktestError",
    "EngineState",
    "EngineStateError",
    "SnapshotOrderError",
    "DEFAULT_INITIAL_CASH",
    "BacktestResult",
    "ValuePoint",
]
