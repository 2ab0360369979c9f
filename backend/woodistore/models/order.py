from datetime import datetime
from typing import List, Optional
from enum import Enum
from pydantic import BaseModel, EmailStr, Field, field_validator


class OrderStatus(str, Enum):
    """Order status enumeration."""
    PENDING = "Pending"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"


class LineItem(BaseModel):
    """Price-frozen snapshot of a cart line, captured when the order is submitted."""
    product_id: str
    product_name: str
    quantity: int = Field(ge=1)
    unit_price_at_purchase: float = Field(ge=0)

    class Config:
        frozen = True

    @property
    def subtotal(self) -> float:
        return self.quantity * self.unit_price_at_purchase


class CustomerDetails(BaseModel):
    """Customer-supplied checkout fields."""
    name: str = Field(min_length=2)
    email: EmailStr
    shipping_address: str = Field(min_length=10)

    @field_validator("name", "shipping_address", mode="before")
    @classmethod
    def strip_whitespace(cls, value):
        if isinstance(value, str):
            return value.strip()
        return value


class Order(BaseModel):
    """Order model for MongoDB."""
    id: Optional[str] = Field(None, alias="_id")
    customer_name: str
    customer_email: str
    shipping_address: str
    items: List[LineItem]
    total: float = Field(ge=0)
    status: OrderStatus = OrderStatus.PENDING
    tracking_number: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "customer_name": "Jane Doe",
                "customer_email": "jane@woodistore.com",
                "shipping_address": "123 Main St, Anytown, USA 12345",
                "items": [
                    {
                        "product_id": "prod123",
                        "product_name": "Walnut Serving Board",
                        "quantity": 2,
                        "unit_price_at_purchase": 100.0
                    }
                ],
                "total": 200.0,
                "status": "Pending",
                "tracking_number": None
            }
        }
