"""
Product Entity for the marketplace
"""

from dataclasses import dataclass, field
from typing import Any
from uuid import UUID

from bilibay.core.domain import (
    BusinessRuleViolationException,
    Entity,
    InsufficientStockException,
    Money,
    ValidationException,
)

from ..value_objects.order_status import ProductStatus


@dataclass
class Product(Entity[UUID]):
    """
    A seller's listing.

    Stock and status move together: a product whose stock runs out is
    ``sold`` and a sold product that gets stock back is ``available``
    again. Drafts are never touched by stock changes.
    """

    title: str = ""
    description: str = ""
    price: Money = field(default_factory=Money.zero)
    stock: int = 0
    status: ProductStatus = ProductStatus.AVAILABLE
    seller_id: UUID | None = None
    category_id: UUID | None = None
    images: list[str] = field(default_factory=list)
    variants: list[str] = field(default_factory=list)

    def __post_init__(self):
        if self.stock < 0:
            raise ValidationException("Stock cannot be negative", field="stock")

    def is_available_for_sale(self) -> bool:
        return self.status.is_available_for_sale()

    def has_stock(self, quantity: int) -> bool:
        return self.stock >= quantity

    def supports_variant(self, variant: str | None) -> bool:
        """A variant, when given, must be one the seller offers."""
        return variant is None or variant in self.variants

    def ensure_can_fulfil(self, quantity: int, variant: str | None = None) -> None:
        """
        Validate that ``quantity`` units (of ``variant``) can be sold right now.

        Raises:
            BusinessRuleViolationException: Product is not for sale or variant unknown
            InsufficientStockException: Not enough units left
        """
        if not self.is_available_for_sale():
            raise BusinessRuleViolationException(
                rule="PRODUCT_UNAVAILABLE",
                message=f"Product '{self.title}' is not available",
                details={"product_id": str(self.id), "status": self.status.value},
            )
        if not self.supports_variant(variant):
            raise BusinessRuleViolationException(
                rule="INVALID_VARIANT",
                message=f"Variant '{variant}' is not offered for '{self.title}'",
                details={"product_id": str(self.id), "variants": list(self.variants)},
            )
        if not self.has_stock(quantity):
            raise InsufficientStockException(
                product_id=self.id,
                requested=quantity,
                available=self.stock,
                title=self.title,
            )

    def set_stock(self, stock: int) -> None:
        """Set stock (seller edit) keeping the status consistent."""
        if stock < 0:
            raise ValidationException("Stock cannot be negative", field="stock")
        self.stock = stock
        self.sync_status_with_stock()
        self.touch()

    def sync_status_with_stock(self) -> None:
        if self.status == ProductStatus.AVAILABLE and self.stock == 0:
            self.status = ProductStatus.SOLD
        elif self.status == ProductStatus.SOLD and self.stock > 0:
            self.status = ProductStatus.AVAILABLE

    def is_owned_by(self, seller_id: UUID) -> bool:
        return self.seller_id == seller_id

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.id) if self.id else None,
            "title": self.title,
            "description": self.description,
            "price": self.price.amount,
            "currency": self.price.currency,
            "stock": self.stock,
            "status": self.status.value,
            "seller_id": str(self.seller_id) if self.seller_id else None,
            "category_id": str(self.category_id) if self.category_id else None,
            "images": list(self.images),
            "variants": list(self.variants),
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }
