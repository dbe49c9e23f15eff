"""
Strategy framework errors

Lookup errors carry the missing id or pair so failures can be diagnosed
from the message alone.
"""
from typing import Optional


class StrategyError(ValueError):
    """Base class for portfolio, snapshot and action errors"""
    pass


class PriceNotAvailableError(StrategyError, LookupError):
    """Requested pair is not priced in the snapshot"""

    def __init__(self, pair: str):
        self.pair = pair
        super().__init__(f"price not available for pair: {pair}")


class PositionNotFoundError(StrategyError, LookupError):
    """Position id is not held in the portfolio"""

    def __init__(self, position_id: str):
        self.position_id = position_id
        super().__init__(f"position not found: {position_id}")


class DuplicatePositionError(StrategyError):
    """Position id is already held in the portfolio"""

    def __init__(self, position_id: str):
        self.position_id = position_id
        super().__init__(f"position {position_id} already exists")


class InvalidActionError(StrategyError):
    """Action cannot be applied as specified"""

    def __init__(self, reason: str):
        super().__init__(f"invalid action: {reason}")


class NilPortfolioError(StrategyError):
    """Portfolio argument was None"""

    def __init__(self):
        super().__init__("portfolio cannot be None")


class NilPositionError(StrategyError):
    """Position argument was None"""

    def __init__(self):
        super().__init__("position cannot be None")


class BatchActionError(StrategyError):
    """A step of a batch failed; earlier steps remain applied"""

    def __init__(self, index: int, action: object, cause: Exception):
        self.index = index
        self.action = action
        self.cause: Optional[Exception] = cause
        super().__init__(f"batch action failed at step {index} ({action}): {cause}")


class PositionValuationError(StrategyError):
    """A held position could not be valued"""

    def __init__(self, position_id: str, cause: Exception):
        self.position_id = position_id
        self.cause = cause
        super().__init__(f"failed to value position {position_id}: {cause}")
