from typing import Optional
from fastapi import APIRouter, Depends, Query
from motor.motor_asyncio import AsyncIOMotorDatabase

from woodistore.api.deps import get_db, require_admin
from woodistore.schemas.dashboard import DashboardOverviewResponse
from woodistore.services.dashboard_service import DashboardService

router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("", response_model=DashboardOverviewResponse)
async def get_dashboard_overview(
    year: Optional[int] = Query(None, ge=2000, le=2100, description="Year for the monthly series (default: current)"),
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    """
    Get the admin dashboard overview.

    Returns total revenue, order and customer counts, product count, a
    12-month sales series and the most recent orders.
    """
    return await DashboardService.get_overview(db, year=year)
