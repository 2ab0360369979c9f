from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field


class ProductCategory(str, Enum):
    """Product category enumeration."""
    FURNITURE = "Furniture"
    HOME_DECOR = "Home Decor"
    KITCHENWARE = "Kitchenware"
    TOYS = "Toys"


class ImageAsset(BaseModel):
    """Image metadata stored alongside a product (the file itself lives on the CDN)."""
    id: str = ""
    url: str = ""
    alt: str = ""
    hint: str = ""
    is_primary: bool = False

    class Config:
        frozen = True


class ProductRef(BaseModel):
    """
    Read-only product snapshot supplied by the catalog.

    The cart stores this snapshot as-is; a later catalog edit produces a new
    ProductRef instead of mutating the one already held by a cart line.
    """
    id: str
    name: str
    description: str = ""
    price: float = Field(ge=0)
    stock: int = Field(ge=0)
    category: Optional[ProductCategory] = None
    images: List[ImageAsset] = Field(default_factory=list)
    sku: Optional[str] = None

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "id": "prod123",
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
                ]
            }
        }

    @property
    def primary_image(self) -> Optional[ImageAsset]:
        for image in self.images:
            if image.is_primary:
                return image
        return self.images[0] if self.images else None

    @classmethod
    def from_document(cls, document: dict) -> "ProductRef":
        """Build a snapshot from a MongoDB product document."""
        data = {key: value for key, value in document.items() if key != "_id"}
        data["id"] = str(document.get("_id", document.get("id", "")))
        return cls(**data)

