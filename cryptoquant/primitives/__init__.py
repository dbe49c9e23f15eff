"""
Numeric and Temporal Primitives

Type-safe financial values used across every layer:
- Decimal: exact base-10 arithmetic (Python's decimal.Decimal under FINANCIAL_CONTEXT)
- Price: non-negative exchange rate or mark value
- Amount: non-negative quantity or value
- Time / Duration: UTC instants and intervals

Usage:
    from cryptoquant.primitives import Price, Amount, parse_decimal

    price = Price(parse_decimal("2000.50"))
    value = Amount("2") * price
"""

from .errors import (
    PrimitiveError,
    InvalidDecimalError,
    NegativePriceError,
    NegativeAmountError,
    DivisionByZeroError,
)
from .numeric import (
    FINANCIAL_CONTEXT,
    ZERO,
    ONE,
    DecimalLike,
    parse_decimal,
    must_decimal,
    add,
    subtract,
    multiply,
    divide,
    sqrt,
    power,
    is_zero,
    is_positive,
    is_negative,
    format_decimal,
)
from .values import (
    Price,
    Amount,
    must_price,
    must_amount,
)
from .time import (
    Time,
    Duration,
    SECONDS_PER_YEAR,
    to_utc,
    now,
    from_unix,
    to_unix,
    seconds,
    minutes,
    hours,
    days,
    divide_duration,
    total_seconds,
    year_fraction,
    format_time,
)

__all__ = [
    "PrimitiveError",
    "InvalidDecimalError",
    "NegativePriceError",
    "NegativeAmountError",
    "DivisionByZeroError",
    "FINANCIAL_CONTEXT",
    "ZERO",
    "ONE",
    "DecimalLike",
    "parse_decimal",
    "must_decimal",
    "add",
    "subtract",
    "multiply",
    "divide",
    "sqrt",
    "power",
    "is_zero",
    "is_positive",
    "is_negative",
    "format_decimal",
    "Price",
    "Amount",
    "must_price",
    "must_amount",
    "Time",
    "Duration",
    "SECONDS_PER_YEAR",
    "to_utc",
    "now",
    "from_unix",
    "to_unix",
    "seconds",
    "minutes",
    "hours",
    "days",
    "divide_duration",
    "total_seconds",
    "year_fraction",
    "format_time",
]
