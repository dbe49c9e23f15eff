"""
Price and Amount

Non-negative branded decimals. Both wrap an exact Decimal but are distinct
types: a Price is an exchange rate or mark, an Amount is a quantity of an
asset or of cash-equivalent value.

Allowed compositions:
- Price + Price -> Price, Price - Price -> Price (fails if negative)
- Price * Decimal -> Price, Price / Decimal -> Price
- Amount + Amount -> Amount, Amount - Amount -> Amount (fails if negative)
- Amount * Decimal -> Amount, Amount / Decimal -> Amount
- Amount * Price -> Amount (value), Amount / Price -> Amount

Price * Amount is not defined, and a Price can never be added to,
subtracted from or ordered against an Amount: Python raises TypeError.

Usage:
    price = Price(Decimal("2000"))
    size = Amount(Decimal("1.5"))
    notional = size * price        # Amount("3000")
"""
from decimal import Decimal
from functools import total_ordering
from typing import Union

from .errors import NegativePriceError, NegativeAmountError, InvalidDecimalError
from .numeric import (
    DecimalLike,
    add,
    divide,
    format_decimal,
    multiply,
    parse_decimal,
    subtract,
)


Scalar = Union[Decimal, int]


def _scalar(value) -> Decimal:
    # Scalars must already be exact; floats and strings go through parse_decimal
    if isinstance(value, bool) or not isinstance(value, (Decimal, int)):
        raise TypeError(f"expected Decimal or int, got {type(value).__name__}")
    return Decimal(value)


@total_ordering
class _NonNegativeDecimal:
    """Shared behaviour of the non-negative decimal brands"""

    __slots__ = ("_value",)

    _negative_error = ValueError

    def __init__(self, value: DecimalLike):
        parsed = parse_decimal(value)
        if parsed < 0:
            raise self._negative_error(parsed)
        # Normalize -0 so it prints and hashes as 0
        self._value = parsed if parsed != 0 else Decimal("0")

    @classmethod
    def _checked(cls, value: Decimal):
        return cls(value)

    @property
    def value(self) -> Decimal:
        """Underlying Decimal"""
        return self._value

    def to_decimal(self) -> Decimal:
        return self._value

    def is_zero(self) -> bool:
        return self._value == 0

    def is_positive(self) -> bool:
        return self._value > 0

    def __add__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self._checked(add(self._value, other._value))

    def __sub__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self._checked(subtract(self._value, other._value))

    def __mul__(self, other):
        if isinstance(other, _NonNegativeDecimal):
            return NotImplemented
        try:
            factor = _scalar(other)
        except TypeError:
            return NotImplemented
        return self._checked(multiply(self._value, factor))

    def __truediv__(self, other):
        if isinstance(other, _NonNegativeDecimal):
            return NotImplemented
        try:
            divisor = _scalar(other)
        except TypeError:
            return NotImplemented
        return self._checked(divide(self._value, divisor))

    def __eq__(self, other):
        if isinstance(other, _NonNegativeDecimal) and type(other) is not type(self):
            raise TypeError(f"cannot compare {type(self).__name__} with {type(other).__name__}")
        if type(other) is not type(self):
            return NotImplemented
        return self._value == other._value

    def __lt__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self._value < other._value

    def __hash__(self):
        return hash((type(self).__name__, self._value))

    def __bool__(self):
        return self._value != 0

    def __str__(self):
        return format_decimal(self._value)

    def __repr__(self):
        return f"{type(self).__name__}('{self}')"


class Price(_NonNegativeDecimal):
    """
    Unit price of an asset

    Raises:
        NegativePriceError: If constructed from a negative value
    """

    __slots__ = ()

    _negative_error = NegativePriceError

    @classmethod
    def zero(cls) -> "Price":
        return cls(Decimal("0"))


class Amount(_NonNegativeDecimal):
    """
    Quantity of an asset or of cash-equivalent value

    Raises:
        NegativeAmountError: If constructed from a negative value
    """

    __slots__ = ()

    _negative_error = NegativeAmountError

    @classmethod
    def zero(cls) -> "Amount":
        return cls(Decimal("0"))

    def __mul__(self, other):
        if isinstance(other, Price):
            return Amount(multiply(self._value, other.value))
        return super().__mul__(other)

    def __truediv__(self, other):
        if isinstance(other, Price):
            return Amount(divide(self._value, other.value))
        return super().__truediv__(other)


def must_price(value: DecimalLike) -> Price:
    """
    Build a Price from a known-valid literal

    Reserved for tests and module-level constants.
    """
    try:
        return Price(value)
    except (NegativePriceError, InvalidDecimalError) as e:
        raise AssertionError(f"invalid price literal {value!r}: {e}") from e


def must_amount(value: DecimalLike) -> Amount:
    """
    Build an Amount from a known-valid literal

    Reserved for tests and module-level constants.
    """
    try:
        return Amount(value)
    except (NegativeAmountError, InvalidDecimalError) as e:
        raise AssertionError(f"invalid amount literal {value!r}: {e}") from e
