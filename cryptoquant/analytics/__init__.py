"""
Performance Analytics

Exact-decimal metrics over a backtest value history.

Usage:
    from cryptoquant.analytics import calculate_returns, calculate_max_drawdown

    returns = calculate_returns(values)
    drawdown = calculate_max_drawdown(values)
"""

from .metrics import (
    MIN_ANNUALIZATION_PERIOD,
    DrawdownMetrics,
    calculate_returns,
    calculate_total_return,
    calculate_annualized_return,
    calculate_sharpe_ratio,
    calculate_max_drawdown,
)

__all__ = [
    "MIN_ANNUALIZATION_PERIOD",
    "DrawdownMetrics",
    "calculate_returns",
    "calculate_total_return",
    "calculate_annualized_return",
    "calculate_sharpe_ratio",
    "calculate_max_drawdown",
]
