"""
Customer views derived from orders.

There is no customers collection: a customer is every order placed under the
same email address.
"""
from typing import Dict, Iterable, List, Optional
from motor.motor_asyncio import AsyncIOMotorDatabase

from woodistore.services.order_service import OrderService


class CustomerService:
    """Service for aggregating customers from order history."""

    @staticmethod
    def aggregate_customers(orders: Iterable[dict]) -> List[dict]:
        """
        Group orders by customer email.

        The customer's name is taken from their most recent order. Result is
        sorted by last order date, most recent first.
        """
        customers: Dict[str, dict] = {}

        for order in orders:
            email = order["customer_email"]
            created_at = order["created_at"]
            customer = customers.get(email)

            if customer is None:
                customers[email] = {
                    "email": email,
                    "name": order["customer_name"],
                    "total_orders": 1,
                    "total_spent": order["total"],
                    "last_ordered": created_at
                }
                continue

            customer["total_orders"] += 1
            customer["total_spent"] += order["total"]
            if created_at > customer["last_ordered"]:
                customer["last_ordered"] = created_at
                customer["name"] = order["customer_name"]

        return sorted(customers.values(), key=lambda c: c["last_ordered"], reverse=True)

    @staticmethod
    async def get_customers(db: AsyncIOMotorDatabase) -> List[dict]:
        orders = await OrderService.get_orders(db)
        return CustomerService.aggregate_customers(orders)

    @staticmethod
    async def get_customer_by_email(db: AsyncIOMotorDatabase, email: str) -> Optional[dict]:
        """Get a customer with their orders, or None if they have never ordered."""
        orders = await OrderService.get_orders_by_customer_email(db, email)
        if not orders:
            return None

        most_recent = orders[0]
        return {
            "email": most_recent["customer_email"],
            "name": most_recent["customer_name"],
            "total_orders": len(orders),
            "total_spent": sum(order["total"] for order in orders),
            "last_ordered": most_recent["created_at"],
            "orders": orders
        }
