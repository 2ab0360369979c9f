import logging
from typing import List, Optional
from datetime import datetime
from fastapi import HTTPException, status
from motor.motor_asyncio import AsyncIOMotorDatabase
from bson import ObjectId
from bson.errors import InvalidId

from woodistore.models.product import ImageAsset, ProductRef
from woodistore.schemas.product import ProductCreate, ProductUpdate

logger = logging.getLogger(__name__)

RECOMMENDED_PRODUCTS_LIMIT = 4


def normalize_images(images: List[ImageAsset]) -> List[ImageAsset]:
    """
    Return the images with exactly one marked primary.

    The first image already flagged primary keeps the flag; if none is
    flagged, the first image becomes primary.
    """
    if not images:
        raise ValueError("A product needs at least one image")

    primary_index = next(
        (index for index, image in enumerate(images) if image.is_primary),
        0
    )

    return [
        image.model_copy(update={"is_primary": index == primary_index})
        for index, image in enumerate(images)
    ]


def _object_id(product_id: str) -> ObjectId:
    try:
        return ObjectId(product_id)
    except (InvalidId, TypeError):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid product ID"
        )


class CatalogService:
    """Product catalog reads and back-office product management."""

    @staticmethod
    async def get_products(db: AsyncIOMotorDatabase, category: Optional[str] = None) -> List[ProductRef]:
        """Get all products, newest first."""
        query = {}
        if category:
            query["category"] = category

        cursor = db.products.find(query).sort("created_at", -1)
        products = await cursor.to_list(length=None)

        return [ProductRef.from_document(product) for product in products]

    @staticmethod
    async def count_products(db: AsyncIOMotorDatabase) -> int:
        return await db.products.count_documents({})

    @staticmethod
    async def get_product_by_id(db: AsyncIOMotorDatabase, product_id: str) -> Optional[ProductRef]:
        """Get a product snapshot, or None if the id is invalid or unknown."""
        if not product_id:
            return None

        try:
            object_id = ObjectId(product_id)
        except (InvalidId, TypeError):
            return None

        product = await db.products.find_one({"_id": object_id})
        if not product:
            return None

        return ProductRef.from_document(product)

    @staticmethod
    async def get_recommended_products(
        db: AsyncIOMotorDatabase,
        product_id: str,
        limit: int = RECOMMENDED_PRODUCTS_LIMIT
    ) -> List[ProductRef]:
        """Other catalog products, newest first."""
        products = await CatalogService.get_products(db)
        return [product for product in products if product.id != product_id][:limit]

    @staticmethod
    async def create_product(db: AsyncIOMotorDatabase, data: ProductCreate) -> ProductRef:
        now = datetime.utcnow()
        product_data = data.model_dump(mode="json", exclude={"images"})
        product_data["images"] = [
            image.model_dump(mode="json") for image in normalize_images(data.images)
        ]
        product_data["created_at"] = now
        product_data["updated_at"] = now

        result = await db.products.insert_one(product_data)
        product_data["_id"] = result.inserted_id

        logger.info(f"Created product {result.inserted_id} ({data.name})")

        return ProductRef.from_document(product_data)

    @staticmethod
    async def update_product(db: AsyncIOMotorDatabase, product_id: str, data: ProductUpdate) -> ProductRef:
        """
        Update the fields given in `data`; omitted fields keep their values.
        """
        object_id = _object_id(product_id)

        existing_product = await db.products.find_one({"_id": object_id})
        if not existing_product:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Product not found"
            )

        update_data = data.model_dump(mode="json", exclude_none=True, exclude={"images"})
        if data.images is not None:
            update_data["images"] = [
                image.model_dump(mode="json") for image in normalize_images(data.images)
            ]
        update_data["updated_at"] = datetime.utcnow()

        await db.products.update_one({"_id": object_id}, {"$set": update_data})

        logger.info(f"Updated product {product_id}")

        return ProductRef.from_document({**existing_product, **update_data})

    @staticmethod
    async def delete_product(db: AsyncIOMotorDatabase, product_id: str) -> None:
        object_id = _object_id(product_id)

        result = await db.products.delete_one({"_id": object_id})
        if result.deleted_count == 0:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Product not found"
            )

        logger.info(f"Deleted product {product_id}")
