"""
Performance Metrics

Metrics over a portfolio value history, computed in exact decimal
arithmetic:
- Return metrics: total return, annualized return
- Risk-adjusted metrics: Sharpe ratio
- Risk metrics: max drawdown

Degenerate inputs (fewer than two points, zero elapsed time, zero
deviation) give zero rather than an error.
"""
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import List, Sequence

from ..primitives import (
    SECONDS_PER_YEAR,
    ONE,
    ZERO,
    add,
    divide,
    multiply,
    power,
    sqrt,
    subtract,
    total_seconds,
)


# Histories shorter than one day are not annualized
MIN_ANNUALIZATION_PERIOD = Decimal("86400")


@dataclass(frozen=True)
class DrawdownMetrics:
    """Largest peak-to-trough decline"""
    max_drawdown: Decimal  # Fraction of the peak, e.g. 0.2 for 20%
    max_drawdown_amount: Decimal


def calculate_returns(values: Sequence[Decimal]) -> List[Decimal]:
    """
    Period-over-period returns

    Periods starting from a zero value are skipped.

    Returns:
        List of returns (as decimals, not percentages)
    """
    returns = []
    for previous, current in zip(values, values[1:]):
        if previous == 0:
            continue
        returns.append(divide(subtract(current, previous), previous))
    return returns


def calculate_total_return(initial_value: Decimal, final_value: Decimal) -> Decimal:
    """
    (final - initial) / initial

    Raises:
        DivisionByZeroError: If initial_value is zero
    """
    return divide(subtract(final_value, initial_value), initial_value)


def calculate_annualized_return(
    total_return: Decimal,
    start: datetime,
    end: datetime
) -> Decimal:
    """
    Compound the total return to a one-year horizon

    annualized = (1 + total_return) ** (year / period) - 1

    Periods shorter than MIN_ANNUALIZATION_PERIOD (one day) give zero.
    """
    period = total_seconds(end - start)
    if period < MIN_ANNUALIZATION_PERIOD:
        return ZERO

    growth = add(ONE, total_return)
    if growth <= 0:
        return -ONE

    exponent = divide(SECONDS_PER_YEAR, period)
    return subtract(power(growth, exponent), ONE)


def calculate_sharpe_ratio(
    returns: Sequence[Decimal],
    start: datetime,
    end: datetime
) -> Decimal:
    """
    Annualized Sharpe ratio with a zero risk-free rate

    Sharpe = mean / std * sqrt(periods per year), where the period length
    is the average spacing of the samples between start and end.
    """
    if len(returns) < 2:
        return ZERO

    count = Decimal(len(returns))
    total = ZERO
    for r in returns:
        total = add(total, r)
    mean = divide(total, count)

    variance_sum = ZERO
    for r in returns:
        diff = subtract(r, mean)
        variance_sum = add(variance_sum, multiply(diff, diff))
    std_dev = sqrt(divide(variance_sum, count))

    if std_dev == 0:
        return ZERO

    period = total_seconds(end - start)
    if period <= 0:
        return ZERO

    seconds_per_period = divide(period, count)
    periods_per_year = divide(SECONDS_PER_YEAR, seconds_per_period)

    return multiply(divide(mean, std_dev), sqrt(periods_per_year))


def calculate_max_drawdown(values: Sequence[Decimal]) -> DrawdownMetrics:
    """Max drawdown as a fraction of the running peak, and in absolute terms"""
    if not values:
        return DrawdownMetrics(max_drawdown=ZERO, max_drawdown_amount=ZERO)

    peak = values[0]
    max_dd = ZERO
    max_dd_amount = ZERO

    for value in values[1:]:
        if value > peak:
            peak = value

        if peak > 0:
            dd_amount = subtract(peak, value)
            dd = divide(dd_amount, peak)
            if dd > max_dd:
                max_dd = dd
                max_dd_amount = dd_amount

    return DrawdownMetrics(max_drawdown=max_dd, max_drawdown_amount=max_dd_amount)

