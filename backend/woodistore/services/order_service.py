"""
Order service for persisting orders and managing status transitions.
"""
import logging
from typing import List, Optional, Tuple
from datetime import datetime
from fastapi import HTTPException, status
from motor.motor_asyncio import AsyncIOMotorDatabase
from bson import ObjectId
from bson.errors import InvalidId

from woodistore.models.order import CustomerDetails, LineItem, Order, OrderStatus
from woodistore.utils.helpers import format_document

logger = logging.getLogger(__name__)


class OrderService:
    """Order persistence collaborator and order management business logic."""

    # Valid status transitions
    STATUS_TRANSITIONS = {
        OrderStatus.PENDING.value: [OrderStatus.SHIPPED.value, OrderStatus.CANCELLED.value],
        OrderStatus.SHIPPED.value: [OrderStatus.DELIVERED.value, OrderStatus.CANCELLED.value],
        OrderStatus.DELIVERED.value: [],  # Final state
        OrderStatus.CANCELLED.value: []   # Final state
    }

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db

    async def create_order(self, customer: CustomerDetails, items: List[LineItem], total: float) -> str:
        """Insert a new Pending order and return its id."""
        now = datetime.utcnow()
        order = Order(
            customer_name=customer.name,
            customer_email=customer.email,
            shipping_address=customer.shipping_address,
            items=items,
            total=total,
            created_at=now,
            updated_at=now
        )

        order_data = order.model_dump(exclude={"id"}, mode="json")
        order_data["created_at"] = order.created_at
        order_data["updated_at"] = order.updated_at

        result = await self.db.orders.insert_one(order_data)
        order_id = str(result.inserted_id)

        logger.info(f"Created order {order_id} for {customer.email} (total {total})")
        return order_id

    @staticmethod
    async def get_orders(db: AsyncIOMotorDatabase, limit: Optional[int] = None) -> List[dict]:
        """Get orders, newest first."""
        cursor = db.orders.find({}).sort("created_at", -1)
        if limit:
            cursor = cursor.limit(limit)

        orders = await cursor.to_list(length=limit)
        return [format_document(order) for order in orders]

    @staticmethod
    async def get_order_by_id(db: AsyncIOMotorDatabase, order_id: str) -> Optional[dict]:
        try:
            order = await db.orders.find_one({"_id": ObjectId(order_id)})
        except (InvalidId, TypeError):
            return None

        return format_document(order) if order else None

    @staticmethod
    async def get_orders_by_customer_email(db: AsyncIOMotorDatabase, email: str) -> List[dict]:
        """Get a customer's orders, newest first."""
        cursor = db.orders.find({"customer_email": email}).sort("created_at", -1)
        orders = await cursor.to_list(length=None)
        return [format_document(order) for order in orders]

    @staticmethod
    def validate_status_transition(current_status: str, new_status: str) -> Tuple[bool, Optional[str]]:
        """
        Validate if status transition is allowed.
        Returns (is_valid, error_message)
        """
        if current_status not in OrderService.STATUS_TRANSITIONS:
            return False, f"Invalid current status: {current_status}"

        valid_next_statuses = OrderService.STATUS_TRANSITIONS[current_status]

        if new_status not in valid_next_statuses:
            if not valid_next_statuses:
                return False, f"Order is in final state '{current_status}' and cannot be modified"
            return False, f"Cannot transition from '{current_status}' to '{new_status}'. Valid transitions: {', '.join(valid_next_statuses)}"

        return True, None

    @staticmethod
    async def update_order_status(
        db: AsyncIOMotorDatabase,
        order_id: str,
        new_status: str,
        tracking_number: Optional[str] = None
    ) -> dict:
        """
        Update order status with transition validation.
        """
        valid_statuses = [s.value for s in OrderStatus]
        if new_status not in valid_statuses:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Invalid status: {new_status}"
            )

        try:
            object_id = ObjectId(order_id)
        except (InvalidId, TypeError):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Invalid order ID"
            )

        order = await db.orders.find_one({"_id": object_id})
        if not order:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Order not found"
            )

        current_status = order["status"]

        is_valid, error_msg = OrderService.validate_status_transition(current_status, new_status)
        if not is_valid:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=error_msg
            )

        update_data = {
            "status": new_status,
            "updated_at": datetime.utcnow()
        }
        if tracking_number:
            update_data["tracking_number"] = tracking_number

        await db.orders.update_one({"_id": object_id}, {"$set": update_data})

        logger.info(f"Order {order_id} status changed: {current_status} -> {new_status}")

        return {
            "message": f"Order status updated to {new_status}",
            "order_id": order_id,
            "old_status": current_status,
            "new_status": new_status,
            "updated_at": update_data["updated_at"]
        }
