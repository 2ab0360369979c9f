import logging
from typing import Dict, Iterable, List, Optional, Tuple
from datetime import datetime
from motor.motor_asyncio import AsyncIOMotorDatabase

from woodistore.core.exceptions import StockExceededError
from woodistore.models.cart import CartLine
from woodistore.models.product import ProductRef

logger = logging.getLogger(__name__)


class CartStore:
    """
    In-memory cart for a single session.

    Holds at most one CartLine per product id, in insertion order. A line is
    never kept at quantity 0: updating to 0 or below removes it.

    Stock is advisory by default (see CartLine.stock_warning). With
    enforce_stock=True, quantities are clamped to product.stock and
    StockExceededError is raised after the clamp has been applied.
    """

    def __init__(self, lines: Optional[Iterable[CartLine]] = None, enforce_stock: bool = False):
        self.enforce_stock = enforce_stock
        self._lines: Dict[str, CartLine] = {}
        for line in lines or []:
            if line.product.id in self._lines:
                self._lines[line.product.id].quantity += line.quantity
            else:
                self._lines[line.product.id] = line.model_copy()

    @property
    def lines(self) -> Tuple[CartLine, ...]:
        return tuple(self._lines.values())

    @property
    def cart_count(self) -> int:
        """Sum of all quantities."""
        return sum(line.quantity for line in self._lines.values())

    @property
    def cart_total(self) -> float:
        """Sum of quantity x product.price over all lines."""
        return sum(line.subtotal for line in self._lines.values())

    @property
    def is_empty(self) -> bool:
        return not self._lines

    def get_line(self, product_id: str) -> Optional[CartLine]:
        return self._lines.get(product_id)

    def add_to_cart(self, product: ProductRef, quantity: int = 1) -> Optional[CartLine]:
        """Add `quantity` units of `product`, merging into an existing line."""
        if quantity < 1:
            raise ValueError("Quantity must be a positive integer")

        line = self._lines.get(product.id)
        if line is None:
            new_quantity = quantity
        else:
            new_quantity = line.quantity + quantity

        return self._set_line(product, new_quantity)

    def update_quantity(
        self,
        product_id: str,
        quantity: int,
        product: Optional[ProductRef] = None
    ) -> Optional[CartLine]:
        """
        Set a line's quantity. quantity <= 0 removes the line.

        `product` replaces the stored snapshot, so stock limits are checked
        against current catalog stock rather than the stock seen at add time.
        """
        line = self._lines.get(product_id)
        if line is None:
            return None

        if quantity <= 0:
            self.remove_from_cart(product_id)
            return None

        return self._set_line(product or line.product, quantity)

    def remove_from_cart(self, product_id: str) -> None:
        self._lines.pop(product_id, None)

    def clear_cart(self) -> None:
        self._lines.clear()

    def _set_line(self, product: ProductRef, quantity: int) -> Optional[CartLine]:
        requested = quantity
        if self.enforce_stock and quantity > product.stock:
            quantity = product.stock

        if quantity <= 0:
            self._lines.pop(product.id, None)
            line = None
        elif product.id in self._lines:
            line = self._lines[product.id]
            line.product = product
            line.quantity = quantity
        else:
            line = CartLine(product=product, quantity=quantity)
            self._lines[product.id] = line

        if quantity < requested:
            raise StockExceededError(product.id, requested, product.stock)

        return line

    def to_documents(self) -> List[dict]:
        """Serialize lines for storage in the carts collection."""
        return [line.model_dump(mode="json") for line in self._lines.values()]

    @classmethod
    def from_documents(cls, documents: Iterable[dict], enforce_stock: bool = False) -> "CartStore":
        return cls(
            lines=[CartLine(**document) for document in documents],
            enforce_stock=enforce_stock
        )


class CartService:
    """Service for loading and saving session carts."""

    @staticmethod
    async def load_cart(
        session_id: str,
        db: AsyncIOMotorDatabase,
        enforce_stock: bool = False
    ) -> CartStore:
        """Load the session's cart, or an empty one if it has none yet."""
        cart = await db.carts.find_one({"session_id": session_id})

        if not cart:
            return CartStore(enforce_stock=enforce_stock)

        return CartStore.from_documents(cart.get("items", []), enforce_stock=enforce_stock)

    @staticmethod
    async def save_cart(session_id: str, store: CartStore, db: AsyncIOMotorDatabase) -> None:
        """Persist the store's lines for the session."""
        now = datetime.utcnow()
        await db.carts.update_one(
            {"session_id": session_id},
            {
                "$set": {
                    "items": store.to_documents(),
                    "updated_at": now
                },
                "$setOnInsert": {"created_at": now}
            },
            upsert=True
        )
        logger.debug(f"Saved cart for session {session_id} ({store.cart_count} items)")

    @staticmethod
    def build_cart_response(store: CartStore) -> dict:
        """Shape the store's state for API responses."""
        items = []
        for line in store.lines:
            image = line.product.primary_image
            items.append({
                "product_id": line.product.id,
                "name": line.product.name,
                "price": line.product.price,
                "quantity": line.quantity,
                "stock": line.product.stock,
                "image": image.url if image else None,
                "subtotal": line.subtotal,
                "stock_warning": line.stock_warning
            })

        return {
            "items": items,
            "cart_count": store.cart_count,
            "cart_total": store.cart_total
        }
