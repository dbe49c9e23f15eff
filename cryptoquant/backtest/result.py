"""
Backtest Result

Output of a completed run: the final portfolio, one value point per
snapshot, and performance metrics derived from that history.
"""
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List

from ..analytics import (
    calculate_annualized_return,
    calculate_max_drawdown,
    calculate_returns,
    calculate_sharpe_ratio,
    calculate_total_return,
)
from ..primitives import Amount, Time, ZERO, format_time, multiply
from ..strategy import Portfolio


@dataclass(frozen=True)
class ValuePoint:
    """Portfolio value at one snapshot"""
    time: Time
    value: Amount


@dataclass
class BacktestResult:
    """Backtest results and performance metrics"""

    portfolio: Portfolio
    initial_value: Amount
    final_value: Amount
    value_history: List[ValuePoint] = field(default_factory=list)

    # Derived in __post_init__
    total_return: Decimal = ZERO  # 0.15 = 15%
    annualized_return: Decimal = ZERO
    sharpe_ratio: Decimal = ZERO
    max_drawdown: Decimal = ZERO  # 0.20 = 20%
    max_drawdown_amount: Amount = field(default_factory=Amount.zero)

    def __post_init__(self):
        self.total_return = calculate_total_return(self.initial_value.value, self.final_value.value)

        if len(self.value_history) < 2:
            return

        start = self.value_history[0].time
        end = self.value_history[-1].time
        values = [point.value.value for point in self.value_history]

        self.annualized_return = calculate_annualized_return(self.total_return, start, end)
        self.sharpe_ratio = calculate_sharpe_ratio(calculate_returns(values), start, end)

        drawdown = calculate_max_drawdown(values)
        self.max_drawdown = drawdown.max_drawdown
        self.max_drawdown_amount = Amount(drawdown.max_drawdown_amount)

    @property
    def start_time(self) -> Time:
        return self.value_history[0].time

    @property
    def end_time(self) -> Time:
        return self.value_history[-1].time

    def summary(self) -> str:
        """Generate summary report"""
        hundred = Decimal("100")
        lines = [
            "Backtest Results:",
            f"  Period: {format_time(self.start_time)} to {format_time(self.end_time)}",
            f"  Initial Value: {self.initial_value}",
            f"  Final Value: {self.final_value}",
            f"  Total Return: {multiply(self.total_return, hundred):.2f}%",
            f"  Annualized Return: {multiply(self.annualized_return, hundred):.2f}%",
            f"  Sharpe Ratio: {self.sharpe_ratio:.2f}",
            f"  Max Drawdown: {multiply(self.max_drawdown, hundred):.2f}% ({self.max_drawdown_amount})",
            f"  Positions: {self.portfolio.position_count()}",
            f"  Data Points: {len(self.value_history)}",
        ]
        return "\n".join(lines)
