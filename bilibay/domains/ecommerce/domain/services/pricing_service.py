"""
Pricing Service for the marketplace

Domain service for checkout pricing that doesn't belong to a single entity.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from bilibay.core.domain import Money

from ..entities.order import OrderItem
from ..entities.product import Product


@dataclass
class OrderPricing:
    """Breakdown of an order's price."""

    subtotal: Money
    shipping_fee: Money
    total: Money

    @property
    def has_free_shipping(self) -> bool:
        return self.shipping_fee.is_zero()

    def to_dict(self) -> dict[str, Any]:
        return {
            "subtotal": self.subtotal.amount,
            "shipping_fee": self.shipping_fee.amount,
            "total": self.total.amount,
            "free_shipping": self.has_free_shipping,
        }


class PricingService:
    """
    Domain service for checkout pricing.

    Handles:
    - Freezing the current product price into an order line
    - Flat shipping fee with a free-shipping threshold

    Example:
        ```python
        service = PricingService(shipping_fee=Decimal("10"), free_shipping_threshold=Decimal("50"))
        pricing = service.price_order(items)
        print(pricing.total)
        ```
    """

    def __init__(
        self,
        shipping_fee: Decimal = Decimal("10.00"),
        free_shipping_threshold: Decimal = Decimal("50.00"),
        currency: str = "PHP",
    ):
        """
        Initialize pricing service.

        Args:
            shipping_fee: Fee charged when the subtotal is below the threshold
            free_shipping_threshold: Subtotal from which shipping is free
            currency: ISO currency of all amounts
        """
        self.shipping_fee = Money(amount=shipping_fee, currency=currency)
        self.free_shipping_threshold = Money(amount=free_shipping_threshold, currency=currency)
        self.currency = currency

    def build_order_item(self, product: Product, quantity: int, variant: str | None = None) -> OrderItem:
        """Snapshot the product's current title and price into an order line."""
        assert product.id is not None and product.seller_id is not None
        return OrderItem(
            product_id=product.id,
            seller_id=product.seller_id,
            title=product.title,
            unit_price=product.price,
            quantity=quantity,
            variant=variant,
        )

    def calculate_subtotal(self, items: list[OrderItem]) -> Money:
        return Money.sum([item.subtotal for item in items], currency=self.currency)

    def calculate_shipping(self, subtotal: Money) -> Money:
        """
        Calculate shipping cost.

        Free from the threshold upwards, flat fee below it.
        """
        if subtotal >= self.free_shipping_threshold:
            return Money.zero(self.currency)
        return self.shipping_fee

    def price_order(self, items: list[OrderItem]) -> OrderPricing:
        subtotal = self.calculate_subtotal(items)
        shipping = self.calculate_shipping(subtotal)
        return OrderPricing(subtotal=subtotal, shipping_fee=shipping, total=subtotal.add(shipping))
