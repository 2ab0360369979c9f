import calendar
from datetime import datetime
from typing import List, Optional
from motor.motor_asyncio import AsyncIOMotorDatabase

from woodistore.services.catalog_service import CatalogService
from woodistore.services.customer_service import CustomerService
from woodistore.services.order_service import OrderService

RECENT_ORDERS_LIMIT = 5


class DashboardService:
    """Service for the admin dashboard overview."""

    @staticmethod
    def build_overview(orders: List[dict], product_count: int, year: int) -> dict:
        """
        Summarize orders for the dashboard.

        `orders` must be sorted newest first. The monthly series only counts
        orders placed in `year`.
        """
        sales_data = [
            {"month": calendar.month_abbr[month], "total_sales": 0, "total_revenue": 0.0}
            for month in range(1, 13)
        ]

        for order in orders:
            created_at = order["created_at"]
            if created_at.year != year:
                continue
            point = sales_data[created_at.month - 1]
            point["total_sales"] += 1
            point["total_revenue"] += order["total"]

        return {
            "total_revenue": sum(order["total"] for order in orders),
            "total_sales": len(orders),
            "total_customers": len(CustomerService.aggregate_customers(orders)),
            "total_products": product_count,
            "sales_data": sales_data,
            "recent_orders": orders[:RECENT_ORDERS_LIMIT]
        }

    @staticmethod
    async def get_overview(db: AsyncIOMotorDatabase, year: Optional[int] = None) -> dict:
        orders = await OrderService.get_orders(db)
        product_count = await CatalogService.count_products(db)
        return DashboardService.build_overview(
            orders,
            product_count,
            year or datetime.utcnow().year
        )
