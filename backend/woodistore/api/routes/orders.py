from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, status, Query
from motor.motor_asyncio import AsyncIOMotorDatabase

from woodistore.api.deps import get_db, require_admin
from woodistore.schemas.order import (
    OrderResponse,
    OrderStatusUpdateRequest,
    OrderStatusUpdateResponse
)
from woodistore.services.order_service import OrderService

router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("", response_model=List[OrderResponse])
async def list_orders(
    limit: Optional[int] = Query(None, ge=1, le=500, description="Maximum number of orders"),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    """
    List orders, newest first.
    """
    return await OrderService.get_orders(db, limit=limit)


@router.get("/{order_id}", response_model=OrderResponse)
async def get_order(
    order_id: str,
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    """
    Get a single order.
    """
    order = await OrderService.get_order_by_id(db, order_id)

    if not order:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Order not found"
        )

    return order


@router.patch("/{order_id}/status", response_model=OrderStatusUpdateResponse)
async def update_order_status(
    order_id: str,
    request: OrderStatusUpdateRequest,
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    """
    Update an order's status.

    Valid transitions:
    - Pending -> Shipped, Cancelled
    - Shipped -> Delivered, Cancelled
    - Delivered and Cancelled are final
    """
    return await OrderService.update_order_status(
        db,
        order_id,
        request.status,
        tracking_number=request.tracking_number
    )
