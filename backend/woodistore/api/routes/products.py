from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, status, Query
from motor.motor_asyncio import AsyncIOMotorDatabase

from woodistore.api.deps import get_db
from woodistore.models.product import ProductCategory, ProductRef
from woodistore.services.catalog_service import CatalogService

router = APIRouter()


@router.get("", response_model=List[ProductRef])
async def list_products(
    category: Optional[ProductCategory] = Query(None, description="Filter by category"),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    """
    List catalog products, newest first.
    """
    return await CatalogService.get_products(db, category.value if category else None)


@router.get("/{product_id}", response_model=ProductRef)
async def get_product(
    product_id: str,
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    """
    Get a single product.
    """
    product = await CatalogService.get_product_by_id(db, product_id)

    if not product:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Product not found"
        )

    return product


@router.get("/{product_id}/recommended", response_model=List[ProductRef])
async def get_recommended_products(
    product_id: str,
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    """
    Get up to four other products to show alongside a product.
    """
    return await CatalogService.get_recommended_products(db, product_id)
