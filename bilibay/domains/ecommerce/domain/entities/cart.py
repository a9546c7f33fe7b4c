"""
Cart Entity for the marketplace
"""

from dataclasses import dataclass, field
from typing import Any
from uuid import UUID

from bilibay.core.domain import Entity, Money

from .product import Product


@dataclass
class CartItem:
    """One (product, variant) line with the live product attached for display."""

    product_id: UUID
    quantity: int
    variant: str | None = None
    id: UUID | None = None
    product: Product | None = None

    @property
    def line_total(self) -> Money:
        if self.product is None:
            return Money.zero()
        return self.product.price.multiply(self.quantity)

    def matches(self, product_id: UUID, variant: str | None) -> bool:
        return self.product_id == product_id and self.variant == variant

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.id) if self.id else None,
            "product_id": str(self.product_id),
            "product": self.product.to_dict() if self.product else None,
            "quantity": self.quantity,
            "variant": self.variant,
            "line_total": self.line_total.amount,
        }


@dataclass
class Cart(Entity[UUID]):
    """A buyer's cart. Exactly one exists per buyer."""

    user_id: UUID | None = None
    items: list[CartItem] = field(default_factory=list)
    currency: str = "PHP"

    def is_empty(self) -> bool:
        return not self.items

    def find_item(self, product_id: UUID, variant: str | None = None) -> CartItem | None:
        for item in self.items:
            if item.matches(product_id, variant):
                return item
        return None

    def get_item(self, item_id: UUID) -> CartItem | None:
        for item in self.items:
            if item.id == item_id:
                return item
        return None

    def quantity_for_product(self, product_id: UUID, exclude_item_id: UUID | None = None) -> int:
        """Units of a product across all variant lines, optionally skipping one line."""
        return sum(
            item.quantity
            for item in self.items
            if item.product_id == product_id and (exclude_item_id is None or item.id != exclude_item_id)
        )

    @property
    def total(self) -> Money:
        priced = [item.line_total for item in self.items if item.product is not None]
        return Money.sum(priced, currency=self.currency)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.id) if self.id else None,
            "items": [item.to_dict() for item in self.items],
            "total": self.total.amount,
        }
