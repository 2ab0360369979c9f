from typing import List, Optional
from pydantic import BaseModel, Field


class AddToCartRequest(BaseModel):
    """Schema for adding a product to cart."""
    product_id: str
    quantity: int = Field(default=1, gt=0)

    class Config:
        json_schema_extra = {
            "example": {
                "product_id": "65a1f0c2e4b0a1b2c3d4e5f6",
                "quantity": 2
            }
        }


class UpdateCartItemRequest(BaseModel):
    """Schema for updating cart item quantity. Zero or less removes the item."""
    quantity: int

    class Config:
        json_schema_extra = {
            "example": {
                "quantity": 3
            }
        }


class CartItemResponse(BaseModel):
    """Schema for cart item response."""
    product_id: str
    name: str
    price: float
    quantity: int
    stock: int
    image: Optional[str] = None
    subtotal: float
    stock_warning: bool = False


class CartResponse(BaseModel):
    """Schema for cart response."""
    items: List[CartItemResponse]
    cart_count: int
    cart_total: float
