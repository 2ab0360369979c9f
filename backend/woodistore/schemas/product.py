from typing import List, Optional
from pydantic import BaseModel, Field

from woodistore.models.product import ImageAsset, ProductCategory


class ProductCreate(BaseModel):
    """Schema for creating a product."""
    name: str = Field(min_length=1)
    description: str = Field(min_length=1)
    price: float = Field(ge=0)
    stock: int = Field(ge=0)
    category: ProductCategory
    images: List[ImageAsset] = Field(min_length=1)
    sku: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Walnut Serving Board",
                "description": "Hand-oiled walnut board",
                "price": 100.0,
                "stock": 12,
                "category": "Kitchenware",
                "images": [
                    {
                        "id": "woodistore-products/abc",
                        "url": "https://res.cloudinary.com/demo/image/upload/abc.jpg",
                        "alt": "Walnut Serving Board",
                        "hint": "kitchenware",
                        "is_primary": True
                    }
                ],
                "sku": "WB-001"
            }
        }


class ProductUpdate(BaseModel):
    """Schema for updating a product. Images, when given, replace the stored list."""
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = Field(None, min_length=1)
    price: Optional[float] = Field(None, ge=0)
    stock: Optional[int] = Field(None, ge=0)
    category: Optional[ProductCategory] = None
    images: Optional[List[ImageAsset]] = Field(None, min_length=1)
    sku: Optional[str] = None
