"""
Primitive errors

Raised when a numeric value cannot be constructed or an arithmetic
operation is undefined. All derive from PrimitiveError (a ValueError)
so callers can catch the whole family at once.
"""


class PrimitiveError(ValueError):
    """Base class for numeric primitive errors"""
    pass


class InvalidDecimalError(PrimitiveError):
    """Value could not be parsed as a finite decimal"""
    pass


class NegativePriceError(PrimitiveError):
    """Price cannot be negative"""

    def __init__(self, value=None):
        self.value = value
        message = "price cannot be negative"
        if value is not None:
            message = f"{message}: {value}"
        super().__init__(message)


class NegativeAmountError(PrimitiveError):
    """Amount cannot be negative"""

    def __init__(self, value=None):
        self.value = value
        message = "amount cannot be negative"
        if value is not None:
            message = f"{message}: {value}"
        super().__init__(message)


class DivisionByZeroError(PrimitiveError, ZeroDivisionError):
    """Attempted division by zero"""

    def __init__(self, message: str = "division by zero"):
        super().__init__(message)
