"""Session-scoped cart value object.

The cart lives with the client; each request carries it in and gets it back
out. Nothing here is shared between requests.
"""

import uuid
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


class CartItem(BaseModel):
    product_id: uuid.UUID
    quantity: int = Field(1, ge=1)
    custom_price: Optional[Decimal] = Field(None, gt=0, decimal_places=2)

    def unit_price(self, catalog_price: Decimal) -> Decimal:
        """Price override when one is set, else the catalog price."""
        return self.custom_price if self.custom_price is not None else catalog_price


class Cart(BaseModel):
    items: list[CartItem] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.items

    def first_item(self) -> Optional[CartItem]:
        return self.items[0] if self.items else None

    def clear(self) -> None:
        self.items = []

    def total(self, prices: dict[uuid.UUID, Decimal]) -> Decimal:
        """Cart total given catalog prices keyed by product id."""
        total = Decimal("0")
        for item in self.items:
            total += item.unit_price(prices[item.product_id]) * item.quantity
        return total
