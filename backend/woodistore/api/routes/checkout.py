import logging

from fastapi import APIRouter, Depends, status
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from woodistore.api.deps import get_db, get_cart, get_checkout_service, get_session_id
from woodistore.schemas.order import CheckoutRequest, CheckoutResponse
from woodistore.services.cart_service import CartService, CartStore
from woodistore.services.checkout_service import CheckoutService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=CheckoutResponse, status_code=status.HTTP_201_CREATED)
async def checkout(
    request: CheckoutRequest,
    session_id: str = Depends(get_session_id),
    cart: CartStore = Depends(get_cart),
    checkout_service: CheckoutService = Depends(get_checkout_service),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    """
    Place an order from the session's cart.

    Validates the customer's name, email and shipping address, freezes the
    current cart prices into line items and stores the order. The cart is
    cleared only once the order is confirmed; on any error it is left as is.
    """
    result = await checkout_service.submit(cart, request.model_dump())

    # The order exists at this point; a failed cart clear must not hide it
    cart.clear_cart()
    try:
        await CartService.save_cart(session_id, cart, db)
    except PyMongoError:
        logger.exception(f"Order {result.order_id} placed but cart for session {session_id} was not cleared")

    return CheckoutResponse(
        order_id=result.order_id,
        items=result.items,
        total=result.total
    )
