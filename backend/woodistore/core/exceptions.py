"""
Domain errors raised by the cart and checkout services.

Every failure here is recoverable: the stored cart is left untouched and the
caller decides what to show the shopper.
"""
from typing import Dict, Optional


class WoodistoreError(Exception):
    """Base class for domain errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(WoodistoreError):
    """Customer-supplied checkout fields are invalid."""

    def __init__(self, errors: Dict[str, str], message: str = "Invalid checkout data"):
        super().__init__(message)
        self.errors = errors


class EmptyCartError(WoodistoreError):
    """Checkout was attempted with no cart lines."""

    def __init__(self, message: str = "Cannot create an order with no items"):
        super().__init__(message)


class SubmissionError(WoodistoreError):
    """The order-persistence collaborator rejected the order or was unreachable."""

    def __init__(self, message: str = "Failed to create order", cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class StockExceededError(WoodistoreError):
    """A cart quantity was clamped to the available stock."""

    def __init__(self, product_id: str, requested: int, available: int):
        super().__init__(
            f"Insufficient stock for product {product_id}. "
            f"Requested: {requested}, available: {available}"
        )
        self.product_id = product_id
        self.requested = requested
        self.available = available
