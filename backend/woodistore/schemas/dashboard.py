"""Schemas for the admin customers and dashboard endpoints."""

from datetime import datetime
from typing import List
from pydantic import BaseModel, Field

from woodistore.schemas.order import OrderResponse


class CustomerResponse(BaseModel):
    """Customer derived from order history."""
    email: str
    name: str
    total_orders: int
    total_spent: float
    last_ordered: datetime


class CustomerDetailResponse(CustomerResponse):
    """Customer with their orders, newest first."""
    orders: List[OrderResponse]


class SalesDataPoint(BaseModel):
    """Monthly sales data point."""
    month: str = Field(..., description="Abbreviated month name")
    total_sales: int = Field(default=0, description="Number of orders in the month")
    total_revenue: float = Field(default=0.0, description="Revenue for the month")


class DashboardOverviewResponse(BaseModel):
    """Schema for admin dashboard overview response."""
    total_revenue: float = Field(..., description="Sum of all order totals")
    total_sales: int = Field(..., description="Total number of orders")
    total_customers: int = Field(..., description="Distinct customer emails")
    total_products: int = Field(..., description="Number of products in the catalog")
    sales_data: List[SalesDataPoint] = Field(..., description="Orders and revenue per month")
    recent_orders: List[OrderResponse] = Field(..., description="Most recent orders")

    class Config:
        json_schema_extra = {
            "example": {
                "total_revenue": 12500.0,
                "total_sales": 42,
                "total_customers": 31,
                "total_products": 18,
                "sales_data": [
                    {"month": "Jan", "total_sales": 4, "total_revenue": 1200.0}
                ],
                "recent_orders": []
            }
        }
