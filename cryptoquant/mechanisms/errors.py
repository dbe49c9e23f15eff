"""
Mechanism errors

Shared error types that mechanism implementations raise for contract
violations the core knows how to describe.
"""


class MechanismError(ValueError):
    """Base class for mechanism contract errors"""
    pass


class CrossedBookError(MechanismError):
    """Best bid is at or above best ask"""

    def __init__(self, best_bid, best_ask):
        self.best_bid = best_bid
        self.best_ask = best_ask
        super().__init__(f"crossed order book: best bid {best_bid} >= best ask {best_ask}")


class OrderNotFoundError(MechanismError, LookupError):
    """Order id is unknown to the book"""

    def __init__(self, order_id: str):
        self.order_id = order_id
        super().__init__(f"order not found: {order_id}")
