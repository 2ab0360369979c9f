"""
Tests for catalog reads and product management.
"""
import pytest
from datetime import datetime
from unittest.mock import AsyncMock, MagicMock
from bson import ObjectId
from fastapi import HTTPException
from pydantic import ValidationError
from woodistore.models.product import ImageAsset
from woodistore.schemas.product import ProductCreate, ProductUpdate
from woodistore.services.catalog_service import CatalogService, normalize_images


def make_image(image_id, is_primary=False):
    return ImageAsset(id=image_id, url=f"https://cdn.example.com/{image_id}.jpg", is_primary=is_primary)


def make_product_doc(name, created_at, product_id=None):
    return {
        "_id": product_id or ObjectId(),
        "name": name,
        "description": f"{name} description",
        "price": 20.0,
        "stock": 5,
        "category": "Toys",
        "images": [],
        "created_at": created_at
    }


def make_db_with_products(documents):
    cursor = MagicMock()
    cursor.to_list = AsyncMock(return_value=documents)
    mock_db = MagicMock()
    mock_db.products.find.return_value.sort.return_value = cursor
    return mock_db


class TestNormalizeImages:
    """Test primary image selection."""

    def test_first_image_becomes_primary(self):
        """Test the first image is primary when none is marked."""
        images = normalize_images([make_image("a"), make_image("b")])
        assert [image.is_primary for image in images] == [True, False]

    def test_marked_primary_is_kept(self):
        """Test an image already marked primary keeps the flag."""
        images = normalize_images([make_image("a"), make_image("b", is_primary=True)])
        assert [image.is_primary for image in images] == [False, True]

    def test_only_first_of_several_primaries_kept(self):
        """Test several primary flags collapse to the first one."""
        images = normalize_images([
            make_image("a"),
            make_image("b", is_primary=True),
            make_image("c", is_primary=True)
        ])
        assert [image.is_primary for image in images] == [False, True, False]

    def test_input_images_unchanged(self):
        """Test the given images are not modified."""
        original = [make_image("a"), make_image("b")]
        normalize_images(original)
        assert original[0].is_primary is False

    def test_no_images_rejected(self):
        """Test a product needs at least one image."""
        with pytest.raises(ValueError):
            normalize_images([])


class TestProductSchemas:
    """Test product field rules."""

    def test_create_requires_image(self):
        """Test creating a product without images is invalid."""
        with pytest.raises(ValidationError):
            ProductCreate(
                name="Oak Stool",
                description="Three-legged stool",
                price=45.0,
                stock=2,
                category="Furniture",
                images=[]
            )

    def test_create_rejects_negative_price_and_stock(self):
        """Test price and stock must not be negative."""
        with pytest.raises(ValidationError) as exc_info:
            ProductCreate(
                name="Oak Stool",
                description="Three-legged stool",
                price=-1,
                stock=-2,
                category="Furniture",
                images=[make_image("a")]
            )

        fields = {error["loc"][0] for error in exc_info.value.errors()}
        assert fields == {"price", "stock"}

    def test_create_rejects_unknown_category(self):
        """Test category must be one of the catalog categories."""
        with pytest.raises(ValidationError):
            ProductCreate(
                name="Oak Stool",
                description="Three-legged stool",
                price=45.0,
                stock=2,
                category="Garden",
                images=[make_image("a")]
            )

    def test_update_allows_partial(self):
        """Test an update may carry a single field."""
        update = ProductUpdate(stock=0)
        assert update.stock == 0
        assert update.images is None


class TestCatalogReads:
    """Test catalog lookups."""

    @pytest.mark.asyncio
    async def test_get_product_invalid_id(self):
        """Test a malformed id returns None without querying."""
        mock_db = MagicMock()
        mock_db.products.find_one = AsyncMock()

        assert await CatalogService.get_product_by_id(mock_db, "not-an-id") is None
        mock_db.products.find_one.assert_not_called()

    @pytest.mark.asyncio
    async def test_recommended_excludes_current_product(self):
        """Test recommendations skip the product being viewed."""
        current_id = ObjectId()
        documents = [
            make_product_doc("Rocking Horse", datetime(2026, 3, 1)),
            make_product_doc("Current", datetime(2026, 2, 1), product_id=current_id),
            make_product_doc("Puzzle Box", datetime(2026, 1, 1))
        ]
        mock_db = make_db_with_products(documents)

        products = await CatalogService.get_recommended_products(mock_db, str(current_id))

        assert [p.name for p in products] == ["Rocking Horse", "Puzzle Box"]

    @pytest.mark.asyncio
    async def test_recommended_limited_to_four(self):
        """Test at most four products are recommended."""
        documents = [
            make_product_doc(f"Product {index}", datetime(2026, 1, index + 1))
            for index in range(6)
        ]
        mock_db = make_db_with_products(documents)

        products = await CatalogService.get_recommended_products(mock_db, str(ObjectId()))

        assert len(products) == 4
        assert products[0].name == "Product 0"


class TestProductManagement:
    """Test creating, updating and deleting products."""

    @pytest.mark.asyncio
    async def test_create_product(self):
        """Test a new product is stored with a primary image and timestamps."""
        new_id = ObjectId()
        mock_db = MagicMock()
        mock_db.products.insert_one = AsyncMock(return_value=MagicMock(inserted_id=new_id))
        data = ProductCreate(
            name="Oak Stool",
            description="Three-legged stool",
            price=45.0,
            stock=2,
            category="Furniture",
            images=[make_image("a"), make_image("b")],
            sku="OS-1"
        )

        product = await CatalogService.create_product(mock_db, data)

        assert product.id == str(new_id)
        assert product.primary_image.id == "a"
        stored = mock_db.products.insert_one.call_args.args[0]
        assert stored["category"] == "Furniture"
        assert stored["images"][0]["is_primary"] is True
        assert stored["images"][1]["is_primary"] is False
        assert stored["created_at"] == stored["updated_at"]

    @pytest.mark.asyncio
    async def test_update_product_sets_given_fields(self):
        """Test only the given fields are written."""
        product_id = ObjectId()
        mock_db = MagicMock()
        mock_db.products.find_one = AsyncMock(
            return_value=make_product_doc("Puzzle Box", datetime(2026, 1, 1), product_id=product_id)
        )
        mock_db.products.update_one = AsyncMock()

        product = await CatalogService.update_product(
            mock_db,
            str(product_id),
            ProductUpdate(price=30.0, images=[make_image("a", True), make_image("b", True)])
        )

        assert product.price == 30.0
        assert product.name == "Puzzle Box"
        update_data = mock_db.products.update_one.call_args.args[1]["$set"]
        assert set(update_data) == {"price", "images", "updated_at"}
        assert [image["is_primary"] for image in update_data["images"]] == [True, False]

    @pytest.mark.asyncio
    async def test_update_unknown_product(self):
        """Test updating a missing product is a 404."""
        mock_db = MagicMock()
        mock_db.products.find_one = AsyncMock(return_value=None)
        mock_db.products.update_one = AsyncMock()

        with pytest.raises(HTTPException) as exc_info:
            await CatalogService.update_product(mock_db, str(ObjectId()), ProductUpdate(stock=1))

        assert exc_info.value.status_code == 404
        mock_db.products.update_one.assert_not_called()

    @pytest.mark.asyncio
    async def test_update_invalid_id(self):
        """Test a malformed id is a 400."""
        with pytest.raises(HTTPException) as exc_info:
            await CatalogService.update_product(MagicMock(), "bad-id", ProductUpdate(stock=1))

        assert exc_info.value.status_code == 400

    @pytest.mark.asyncio
    async def test_delete_product(self):
        """Test deleting an existing product."""
        product_id = ObjectId()
        mock_db = MagicMock()
        mock_db.products.delete_one = AsyncMock(return_value=MagicMock(deleted_count=1))

        await CatalogService.delete_product(mock_db, str(product_id))

        mock_db.products.delete_one.assert_called_once_with({"_id": product_id})

    @pytest.mark.asyncio
    async def test_delete_unknown_product(self):
        """Test deleting a missing product is a 404."""
        mock_db = MagicMock()
        mock_db.products.delete_one = AsyncMock(return_value=MagicMock(deleted_count=0))

        with pytest.raises(HTTPException) as exc_info:
            await CatalogService.delete_product(mock_db, str(ObjectId()))

        assert exc_info.value.status_code == 404


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
