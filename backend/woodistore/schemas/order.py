from typing import List, Optional
from datetime import datetime
from pydantic import BaseModel

from woodistore.models.order import LineItem, OrderStatus


class CheckoutRequest(BaseModel):
    """
    Schema for the checkout form.

    Fields are accepted as plain strings here; the checkout service applies
    the field rules so that every invalid field is reported together.
    """
    name: str = ""
    email: str = ""
    shipping_address: str = ""

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Jane Doe",
                "email": "jane@woodistore.com",
                "shipping_address": "123 Main St, Anytown, USA 12345"
            }
        }


class CheckoutResponse(BaseModel):
    """Schema for a confirmed order submission."""
    order_id: str
    items: List[LineItem]
    total: float
    message: str = "Thank you for your purchase. We'll notify you when it ships."


class OrderResponse(BaseModel):
    """Schema for order response."""
    id: str
    customer_name: str
    customer_email: str
    shipping_address: str
    items: List[LineItem]
    total: float
    status: OrderStatus
    tracking_number: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class OrderStatusUpdateRequest(BaseModel):
    """Schema for updating an order's status."""
    status: str
    tracking_number: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {
                "status": "Shipped",
                "tracking_number": "TRK123456789"
            }
        }


class OrderStatusUpdateResponse(BaseModel):
    """Schema for status update response."""
    message: str
    order_id: str
    old_status: str
    new_status: str
    updated_at: datetime
