"""
Tests for order persistence and status management.
"""
import pytest
from datetime import datetime
from unittest.mock import AsyncMock, MagicMock
from bson import ObjectId
from fastapi import HTTPException
from woodistore.models.order import CustomerDetails, LineItem
from woodistore.services.order_service import OrderService


def make_customer():
    return CustomerDetails(
        name="Jane Doe",
        email="jane.doe@gmail.com",
        shipping_address="123 Main St, Anytown, USA 12345"
    )


class TestStatusTransitions:
    """Test status transition validation."""

    def test_valid_pending_to_shipped(self):
        """Test valid transition from Pending to Shipped."""
        is_valid, error = OrderService.validate_status_transition("Pending", "Shipped")
        assert is_valid is True
        assert error is None

    def test_valid_pending_to_cancelled(self):
        """Test valid transition from Pending to Cancelled."""
        is_valid, error = OrderService.validate_status_transition("Pending", "Cancelled")
        assert is_valid is True
        assert error is None

    def test_valid_shipped_to_delivered(self):
        """Test valid transition from Shipped to Delivered."""
        is_valid, error = OrderService.validate_status_transition("Shipped", "Delivered")
        assert is_valid is True
        assert error is None

    def test_invalid_pending_to_delivered(self):
        """Test invalid transition from Pending to Delivered (must ship first)."""
        is_valid, error = OrderService.validate_status_transition("Pending", "Delivered")
        assert is_valid is False
        assert "Cannot transition" in error

    def test_invalid_delivered_to_any(self):
        """Test that Delivered is a final state."""
        is_valid, error = OrderService.validate_status_transition("Delivered", "Cancelled")
        assert is_valid is False
        assert "final state" in error

    def test_invalid_cancelled_to_any(self):
        """Test that Cancelled is a final state."""
        is_valid, error = OrderService.validate_status_transition("Cancelled", "Pending")
        assert is_valid is False
        assert "final state" in error

    def test_unknown_current_status(self):
        """Test an unknown stored status is rejected."""
        is_valid, error = OrderService.validate_status_transition("Lost", "Shipped")
        assert is_valid is False
        assert "Invalid current status" in error


class TestCreateOrder:
    """Test order persistence."""

    @pytest.mark.asyncio
    async def test_create_order_inserts_pending_order(self):
        """Test a new order is stored as Pending with frozen line items."""
        inserted_id = ObjectId()
        mock_db = MagicMock()
        mock_db.orders.insert_one = AsyncMock(return_value=MagicMock(inserted_id=inserted_id))

        items = [
            LineItem(product_id="A", product_name="Oak Stool", quantity=2, unit_price_at_purchase=100.0)
        ]
        order_id = await OrderService(mock_db).create_order(make_customer(), items, 200.0)

        assert order_id == str(inserted_id)

        order_data = mock_db.orders.insert_one.call_args.args[0]
        assert order_data["customer_name"] == "Jane Doe"
        assert order_data["customer_email"] == "jane.doe@gmail.com"
        assert order_data["status"] == "Pending"
        assert order_data["tracking_number"] is None
        assert order_data["total"] == 200.0
        assert order_data["items"] == [{
            "product_id": "A",
            "product_name": "Oak Stool",
            "quantity": 2,
            "unit_price_at_purchase": 100.0
        }]
        assert isinstance(order_data["created_at"], datetime)
        assert "id" not in order_data


class TestUpdateOrderStatus:
    """Test status updates against the database."""

    @pytest.mark.asyncio
    async def test_ship_order(self):
        """Test shipping a pending order records the tracking number."""
        order_id = ObjectId()
        mock_db = MagicMock()
        mock_db.orders.find_one = AsyncMock(return_value={"_id": order_id, "status": "Pending"})
        mock_db.orders.update_one = AsyncMock()

        result = await OrderService.update_order_status(
            mock_db, str(order_id), "Shipped", tracking_number="TRK1"
        )

        assert result["old_status"] == "Pending"
        assert result["new_status"] == "Shipped"
        update = mock_db.orders.update_one.call_args.args[1]["$set"]
        assert update["status"] == "Shipped"
        assert update["tracking_number"] == "TRK1"

    @pytest.mark.asyncio
    async def test_invalid_status_value(self):
        """Test an unknown status value is rejected before any lookup."""
        mock_db = MagicMock()
        mock_db.orders.find_one = AsyncMock()

        with pytest.raises(HTTPException) as exc_info:
            await OrderService.update_order_status(mock_db, str(ObjectId()), "Refunded")

        assert exc_info.value.status_code == 400
        mock_db.orders.find_one.assert_not_called()

    @pytest.mark.asyncio
    async def test_order_not_found(self):
        """Test updating a missing order."""
        mock_db = MagicMock()
        mock_db.orders.find_one = AsyncMock(return_value=None)

        with pytest.raises(HTTPException) as exc_info:
            await OrderService.update_order_status(mock_db, str(ObjectId()), "Shipped")

        assert exc_info.value.status_code == 404

    @pytest.mark.asyncio
    async def test_invalid_order_id(self):
        """Test a malformed order id."""
        mock_db = MagicMock()

        with pytest.raises(HTTPException) as exc_info:
            await OrderService.update_order_status(mock_db, "not-an-id", "Shipped")

        assert exc_info.value.status_code == 400

    @pytest.mark.asyncio
    async def test_invalid_transition(self):
        """Test a final-state order cannot change."""
        mock_db = MagicMock()
        mock_db.orders.find_one = AsyncMock(return_value={"_id": ObjectId(), "status": "Delivered"})
        mock_db.orders.update_one = AsyncMock()

        with pytest.raises(HTTPException) as exc_info:
            await OrderService.update_order_status(mock_db, str(ObjectId()), "Cancelled")

        assert exc_info.value.status_code == 400
        mock_db.orders.update_one.assert_not_called()


class TestOrderQueries:
    """Test order lookups."""

    @pytest.mark.asyncio
    async def test_get_order_by_invalid_id(self):
        """Test a malformed id returns None."""
        mock_db = MagicMock()
        assert await OrderService.get_order_by_id(mock_db, "nope") is None

    @pytest.mark.asyncio
    async def test_get_orders_formats_ids(self):
        """Test listed orders expose string ids."""
        order_id = ObjectId()
        cursor = MagicMock()
        cursor.to_list = AsyncMock(return_value=[{"_id": order_id, "total": 10.0}])
        mock_db = MagicMock()
        mock_db.orders.find.return_value.sort.return_value = cursor

        orders = await OrderService.get_orders(mock_db)

        assert orders == [{"id": str(order_id), "total": 10.0}]
        mock_db.orders.find.return_value.sort.assert_called_once_with("created_at", -1)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
