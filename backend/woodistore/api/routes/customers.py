from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from motor.motor_asyncio import AsyncIOMotorDatabase

from woodistore.api.deps import get_db, require_admin
from woodistore.schemas.dashboard import CustomerResponse, CustomerDetailResponse
from woodistore.services.customer_service import CustomerService

router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("", response_model=List[CustomerResponse])
async def list_customers(
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    """
    List customers derived from orders, most recent buyer first.
    """
    return await CustomerService.get_customers(db)


@router.get("/{email}", response_model=CustomerDetailResponse)
async def get_customer(
    email: str,
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    """
    Get a customer and their order history.
    """
    customer = await CustomerService.get_customer_by_email(db, email)

    if not customer:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Customer not found"
        )

    return customer
