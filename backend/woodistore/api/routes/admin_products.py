from fastapi import APIRouter, Depends, status
from motor.motor_asyncio import AsyncIOMotorDatabase

from woodistore.api.deps import get_db, require_admin
from woodistore.models.product import ProductRef
from woodistore.schemas.product import ProductCreate, ProductUpdate
from woodistore.services.catalog_service import CatalogService

router = APIRouter(dependencies=[Depends(require_admin)])


@router.post("", response_model=ProductRef, status_code=status.HTTP_201_CREATED)
async def create_product(
    product: ProductCreate,
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    """
    Create a product.

    At least one image is required. If no image is marked primary, the first
    one becomes the primary image.
    """
    return await CatalogService.create_product(db, product)


@router.put("/{product_id}", response_model=ProductRef)
async def update_product(
    product_id: str,
    product_update: ProductUpdate,
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    """
    Update a product. Carts keep the snapshot they already hold.
    """
    return await CatalogService.update_product(db, product_id, product_update)


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_product(
    product_id: str,
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    """
    Delete a product.
    """
    await CatalogService.delete_product(db, product_id)
    return None
