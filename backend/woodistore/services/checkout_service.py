"""
Checkout: turns a session cart into a price-frozen order.

build_line_items and order_total are pure; CheckoutService.submit validates
the customer's details and hands the order to the persistence collaborator.
The cart passed to submit is never modified here: clearing it after a
confirmed order is the caller's job.
"""
import asyncio
import logging
from typing import Iterable, List, Optional, Protocol

from pydantic import BaseModel, ValidationError as PydanticValidationError

from woodistore.core.exceptions import EmptyCartError, SubmissionError, ValidationError
from woodistore.models.cart import CartLine
from woodistore.models.order import CustomerDetails, LineItem
from woodistore.services.cart_service import CartStore

logger = logging.getLogger(__name__)


class OrderStore(Protocol):
    """External order-persistence collaborator."""

    async def create_order(self, customer: CustomerDetails, items: List[LineItem], total: float) -> str:
        ...


class CheckoutResult(BaseModel):
    """Outcome of a confirmed order submission."""
    order_id: str
    items: List[LineItem]
    total: float


def build_line_items(cart_lines: Iterable[CartLine]) -> List[LineItem]:
    """Snapshot cart lines into line items, freezing each product's current price."""
    items = [
        LineItem(
            product_id=line.product.id,
            product_name=line.product.name,
            quantity=line.quantity,
            unit_price_at_purchase=line.product.price
        )
        for line in cart_lines
    ]

    if not items:
        raise EmptyCartError()

    return items


def order_total(items: Iterable[LineItem]) -> float:
    return sum(item.quantity * item.unit_price_at_purchase for item in items)


def validate_customer(data: dict) -> CustomerDetails:
    """
    Validate checkout form fields.

    Raises:
        ValidationError: with one message per invalid field
    """
    try:
        return CustomerDetails(**data)
    except PydanticValidationError as e:
        errors = {}
        for error in e.errors():
            field = str(error["loc"][0]) if error["loc"] else "__root__"
            errors.setdefault(field, _field_message(field, error))
        raise ValidationError(errors)


def _field_message(field: str, error: dict) -> str:
    if field == "name":
        return "Name is required"
    if field == "email":
        return "Invalid email address"
    if field == "shipping_address":
        return "A full address is required"
    return error.get("msg", "Invalid value")


class CheckoutService:
    """Service for submitting orders from a session cart."""

    def __init__(self, order_store: OrderStore, timeout: Optional[float] = None):
        self.order_store = order_store
        self.timeout = timeout

    async def submit(self, cart: CartStore, customer_data: dict) -> CheckoutResult:
        """
        Submit the cart as an order.

        Raises:
            ValidationError: customer fields are invalid
            EmptyCartError: the cart has no lines
            SubmissionError: the order store failed or timed out
        """
        customer = validate_customer(customer_data)
        items = build_line_items(cart.lines)
        total = order_total(items)

        try:
            order_id = await asyncio.wait_for(
                self.order_store.create_order(customer, items, total),
                timeout=self.timeout
            )
        except asyncio.TimeoutError as e:
            logger.error(f"Order submission for {customer.email} timed out after {self.timeout}s")
            raise SubmissionError("Order submission timed out", cause=e)
        except Exception as e:
            logger.exception(f"Error creating order for {customer.email}")
            raise SubmissionError(cause=e)

        logger.info(f"Order {order_id} submitted: {len(items)} line items, total {total}")

        return CheckoutResult(order_id=order_id, items=items, total=total)
