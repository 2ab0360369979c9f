from fastapi import APIRouter, Depends, HTTPException, status
from motor.motor_asyncio import AsyncIOMotorDatabase

from woodistore.api.deps import get_db, get_cart, get_session_id
from woodistore.schemas.cart import (
    AddToCartRequest,
    UpdateCartItemRequest,
    CartResponse
)
from woodistore.services.cart_service import CartService, CartStore
from woodistore.services.catalog_service import CatalogService

router = APIRouter()


@router.get("", response_model=CartResponse)
async def get_cart_contents(
    cart: CartStore = Depends(get_cart)
):
    """
    Get the session's cart.

    Returns every line with its subtotal and stock warning, plus the item
    count and cart total.
    """
    return CartService.build_cart_response(cart)


@router.post("/items", response_model=CartResponse, status_code=status.HTTP_201_CREATED)
async def add_to_cart(
    request: AddToCartRequest,
    session_id: str = Depends(get_session_id),
    cart: CartStore = Depends(get_cart),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    """
    Add a product to the cart.

    If the product is already in the cart, its quantity is increased. The
    product's current catalog price and stock are captured on the line.
    """
    product = await CatalogService.get_product_by_id(db, request.product_id)
    if not product:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Product not found"
        )

    try:
        cart.add_to_cart(product, request.quantity)
    finally:
        # Stock clamps change the cart before raising
        await CartService.save_cart(session_id, cart, db)

    return CartService.build_cart_response(cart)


@router.put("/items/{product_id}", response_model=CartResponse)
async def update_cart_item(
    product_id: str,
    request: UpdateCartItemRequest,
    session_id: str = Depends(get_session_id),
    cart: CartStore = Depends(get_cart),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    """
    Set the quantity of an item in the cart. Zero or less removes the item.

    The line's product snapshot is refreshed from the catalog, so the price
    and stock shown afterwards are current.
    """
    if cart.get_line(product_id) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Item not found in cart"
        )

    # Fresh snapshot for stock checks; a product since removed from the
    # catalog keeps its stored snapshot
    product = None
    if request.quantity > 0:
        product = await CatalogService.get_product_by_id(db, product_id)

    try:
        cart.update_quantity(product_id, request.quantity, product=product)
    finally:
        await CartService.save_cart(session_id, cart, db)

    return CartService.build_cart_response(cart)


@router.delete("/items/{product_id}", response_model=CartResponse)
async def remove_from_cart(
    product_id: str,
    session_id: str = Depends(get_session_id),
    cart: CartStore = Depends(get_cart),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    """
    Remove an item from the cart.
    """
    cart.remove_from_cart(product_id)
    await CartService.save_cart(session_id, cart, db)
    return CartService.build_cart_response(cart)


@router.delete("", response_model=CartResponse)
async def clear_cart(
    session_id: str = Depends(get_session_id),
    cart: CartStore = Depends(get_cart),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    """
    Clear all items from the cart.
    """
    cart.clear_cart()
    await CartService.save_cart(session_id, cart, db)
    return CartService.build_cart_response(cart)
