from pydantic import BaseModel, Field

from woodistore.models.product import ProductRef


class CartLine(BaseModel):
    """One product-and-quantity pair held in the active cart."""
    product: ProductRef
    quantity: int = Field(ge=1)

    class Config:
        validate_assignment = True

    @property
    def subtotal(self) -> float:
        return self.product.price * self.quantity

    @property
    def stock_warning(self) -> bool:
        return self.quantity > self.product.stock

