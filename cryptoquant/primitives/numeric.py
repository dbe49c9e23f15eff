"""
Exact decimal arithmetic

All financial math runs on Python's decimal.Decimal evaluated under
FINANCIAL_CONTEXT: base-10, 50 significant digits, banker's rounding.
Binary floats are only accepted at the parsing boundary and are converted
through their shortest repr, so Decimal("0.1") + Decimal("0.2") is exactly
Decimal("0.3").

Helpers here never return NaN or Infinity:
- parse_decimal rejects malformed and non-finite input
- divide raises DivisionByZeroError instead of trapping or returning inf
"""
from decimal import (
    Context,
    Decimal,
    InvalidOperation,
    MAX_EMAX,
    MIN_EMIN,
    ROUND_HALF_EVEN,
    localcontext,
)
from typing import Union

from .errors import InvalidDecimalError, DivisionByZeroError


FINANCIAL_CONTEXT = Context(prec=50, rounding=ROUND_HALF_EVEN, Emax=MAX_EMAX, Emin=MIN_EMIN)

ZERO = Decimal("0")
ONE = Decimal("1")

DecimalLike = Union[Decimal, int, str, float]


def parse_decimal(value: DecimalLike) -> Decimal:
    """
    Build a finite Decimal from a string, int, float or Decimal

    Args:
        value: Value to convert

    Returns:
        Finite Decimal

    Raises:
        InvalidDecimalError: If the value is malformed, NaN or infinite
    """
    if isinstance(value, bool):
        raise InvalidDecimalError(f"invalid decimal value: {value!r}")

    try:
        if isinstance(value, Decimal):
            result = value
        elif isinstance(value, float):
            result = Decimal(repr(value))
        elif isinstance(value, (int, str)):
            result = Decimal(value.strip() if isinstance(value, str) else value)
        else:
            raise InvalidDecimalError(
                f"invalid decimal value: unsupported type {type(value).__name__}"
            )
    except (InvalidOperation, ValueError) as e:
        raise InvalidDecimalError(f"invalid decimal value: {value!r}") from e

    if not result.is_finite():
        raise InvalidDecimalError(f"invalid decimal value: {value!r} is not finite")

    return result


def must_decimal(value: DecimalLike) -> Decimal:
    """
    Parse a known-valid decimal literal

    Reserved for tests and module-level constants. Production paths
    use parse_decimal and handle InvalidDecimalError.
    """
    try:
        return parse_decimal(value)
    except InvalidDecimalError as e:
        raise AssertionError(f"invalid decimal literal {value!r}: {e}") from e


def add(a: Decimal, b: Decimal) -> Decimal:
    with localcontext(FINANCIAL_CONTEXT):
        return a + b


def subtract(a: Decimal, b: Decimal) -> Decimal:
    with localcontext(FINANCIAL_CONTEXT):
        return a - b


def multiply(a: Decimal, b: Decimal) -> Decimal:
    with localcontext(FINANCIAL_CONTEXT):
        return a * b


def divide(a: Decimal, b: Decimal) -> Decimal:
    """
    Divide two decimals

    Raises:
        DivisionByZeroError: If b is zero (including 0/0)
    """
    if b == 0:
        raise DivisionByZeroError()
    with localcontext(FINANCIAL_CONTEXT):
        return a / b


def sqrt(value: Decimal) -> Decimal:
    """Square root of a non-negative decimal"""
    if value < 0:
        raise InvalidDecimalError(f"square root of negative value: {value}")
    with localcontext(FINANCIAL_CONTEXT):
        return value.sqrt()


def power(base: Decimal, exponent: Decimal) -> Decimal:
    """Raise a non-negative base to a (possibly fractional) exponent"""
    if base < 0:
        raise InvalidDecimalError(f"fractional power of negative base: {base}")
    if base == 0:
        return ZERO
    with localcontext(FINANCIAL_CONTEXT):
        return base ** exponent


def is_zero(value: Decimal) -> bool:
    return value == 0


def is_positive(value: Decimal) -> bool:
    return value > 0


def is_negative(value: Decimal) -> bool:
    return value < 0


def format_decimal(value: Decimal) -> str:
    """
    Canonical string form

    Plain notation without exponent; parse_decimal(format_decimal(d)) == d.
    """
    if value == 0:
        return "0"
    text = format(value, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text
