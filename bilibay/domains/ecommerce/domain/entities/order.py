"""
Order Entity for the marketplace

An order is the immutable record of a checkout: the lines, their prices
and the shipping address are frozen when it is placed. Only its
fulfilment status, payment status and shipping metadata change afterwards.
"""

import secrets
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any
from uuid import UUID

from bilibay.core.domain import (
    Address,
    BusinessRuleViolationException,
    Entity,
    InvalidOperationException,
    Money,
)

from ..value_objects.order_status import OrderStatus, PaymentMethod, PaymentStatus


def generate_order_number() -> str:
    """Human-readable order number, e.g. ORD-3F9A1C0B."""
    return f"ORD-{secrets.token_hex(4).upper()}"


@dataclass
class OrderItem:
    """
    Individual line in an order.

    ``unit_price`` and ``title`` are copied from the product at checkout
    so later catalog edits never change what the buyer agreed to pay.
    """

    product_id: UUID
    seller_id: UUID
    title: str
    unit_price: Money
    quantity: int
    variant: str | None = None

    @property
    def subtotal(self) -> Money:
        return self.unit_price.multiply(self.quantity)

    def to_dict(self) -> dict[str, Any]:
        return {
            "product_id": str(self.product_id),
            "seller_id": str(self.seller_id),
            "title": self.title,
            "unit_price": self.unit_price.amount,
            "quantity": self.quantity,
            "variant": self.variant,
            "subtotal": self.subtotal.amount,
        }


@dataclass
class Order(Entity[UUID]):
    """
    Order aggregate.

    Example:
        ```python
        order = Order.place(
            buyer_id=buyer.id,
            items=[OrderItem(product.id, product.seller_id, product.title, product.price, 2)],
            shipping_address=Address(street="1 Rizal Ave", city="Manila"),
            payment_method=PaymentMethod.COD,
            shipping_fee=Money.from_float(10),
        )
        order.start_processing()
        order.ship(tracking_number="LBC123")
        ```
    """

    buyer_id: UUID | None = None
    order_number: str = ""
    items: list[OrderItem] = field(default_factory=list)

    status: OrderStatus = OrderStatus.PENDING
    payment_method: PaymentMethod = PaymentMethod.COD
    payment_status: PaymentStatus = PaymentStatus.PENDING

    shipping_address: Address | None = None

    subtotal: Money = field(default_factory=Money.zero)
    shipping_fee: Money = field(default_factory=Money.zero)
    total: Money = field(default_factory=Money.zero)

    tracking_number: str | None = None
    shipped_at: datetime | None = None
    delivered_at: datetime | None = None
    cancelled_at: datetime | None = None
    cancellation_reason: str | None = None

    @classmethod
    def place(
        cls,
        buyer_id: UUID,
        items: list[OrderItem],
        shipping_address: Address,
        payment_method: PaymentMethod,
        shipping_fee: Money,
    ) -> "Order":
        """
        Create a new pending order with computed totals.

        Raises:
            BusinessRuleViolationException: If there are no items
        """
        if not items:
            raise BusinessRuleViolationException(rule="CART_EMPTY", message="Cart is empty")

        order = cls(
            buyer_id=buyer_id,
            order_number=generate_order_number(),
            items=list(items),
            status=OrderStatus.PENDING,
            payment_method=payment_method,
            payment_status=PaymentStatus.PENDING,
            shipping_address=shipping_address,
            shipping_fee=shipping_fee,
        )
        order._recalculate_totals()
        return order

    def _recalculate_totals(self) -> None:
        self.subtotal = Money.sum([item.subtotal for item in self.items], currency=self.shipping_fee.currency)
        self.total = self.subtotal.add(self.shipping_fee)

    # Status Transitions

    def transition_to(self, new_status: OrderStatus, tracking_number: str | None = None, reason: str | None = None) -> None:
        """
        Move the order to ``new_status`` through the matching transition.

        Raises:
            InvalidOperationException: If the transition is not allowed
        """
        if new_status == OrderStatus.PROCESSING:
            self.start_processing()
        elif new_status == OrderStatus.SHIPPED:
            self.ship(tracking_number)
        elif new_status == OrderStatus.DELIVERED:
            self.deliver()
        elif new_status == OrderStatus.CANCELLED:
            self.cancel(reason)
        else:
            self._ensure_transition(new_status, operation=f"set status to {new_status.value}")

    def _ensure_transition(self, new_status: OrderStatus, operation: str) -> None:
        if not self.status.can_transition_to(new_status):
            raise InvalidOperationException(
                operation=operation,
                current_state=self.status.value,
                message=f"Cannot change order status from '{self.status.value}' to '{new_status.value}'",
            )

    def start_processing(self) -> None:
        self._ensure_transition(OrderStatus.PROCESSING, "start_processing")
        self.status = OrderStatus.PROCESSING
        self.touch()

    def ship(self, tracking_number: str | None = None) -> None:
        self._ensure_transition(OrderStatus.SHIPPED, "ship")
        self.status = OrderStatus.SHIPPED
        self.shipped_at = datetime.now(UTC)
        if tracking_number:
            self.tracking_number = tracking_number
        self.touch()

    def deliver(self) -> None:
        self._ensure_transition(OrderStatus.DELIVERED, "deliver")
        self.status = OrderStatus.DELIVERED
        self.delivered_at = datetime.now(UTC)
        self.touch()

    def cancel(self, reason: str | None = None) -> None:
        """
        Cancel the order. Only possible before it ships.

        A payment that was never settled is marked failed; stock restoration
        is the caller's job since it spans other aggregates.
        """
        if not self.status.can_be_cancelled():
            message = (
                "Order is already cancelled"
                if self.status == OrderStatus.CANCELLED
                else "Order cannot be cancelled once it has shipped"
            )
            raise InvalidOperationException(operation="cancel", current_state=self.status.value, message=message)

        self.status = OrderStatus.CANCELLED
        self.cancelled_at = datetime.now(UTC)
        self.cancellation_reason = reason
        if self.payment_status == PaymentStatus.PENDING:
            self.payment_status = PaymentStatus.FAILED
        self.touch()

    # Payment

    def mark_paid(self) -> None:
        if self.status == OrderStatus.CANCELLED:
            raise InvalidOperationException(
                operation="mark_paid",
                current_state=self.status.value,
                message="Cannot verify payment for a cancelled order",
            )
        self.payment_status = PaymentStatus.PAID
        self.touch()

    def mark_payment_failed(self) -> None:
        self.payment_status = PaymentStatus.FAILED
        self.touch()

    # Helpers

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)

    def contains_seller(self, seller_id: UUID) -> bool:
        return any(item.seller_id == seller_id for item in self.items)

    def quantities_by_product(self) -> dict[UUID, int]:
        """Units per product, summed over variant lines."""
        quantities: dict[UUID, int] = {}
        for item in self.items:
            quantities[item.product_id] = quantities.get(item.product_id, 0) + item.quantity
        return quantities

    def is_paid(self) -> bool:
        return self.payment_status == PaymentStatus.PAID

    # Serialization

    def to_summary_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.id) if self.id else None,
            "order_number": self.order_number,
            "buyer_id": str(self.buyer_id) if self.buyer_id else None,
            "status": self.status.value,
            "payment_method": self.payment_method.value,
            "payment_status": self.payment_status.value,
            "item_count": self.item_count,
            "subtotal": self.subtotal.amount,
            "shipping_fee": self.shipping_fee.amount,
            "total": self.total.amount,
            "created_at": self.created_at,
        }

    def to_detail_dict(self) -> dict[str, Any]:
        return {
            **self.to_summary_dict(),
            "items": [item.to_dict() for item in self.items],
            "shipping_address": self.shipping_address.to_dict() if self.shipping_address else None,
            "tracking_number": self.tracking_number,
            "shipped_at": self.shipped_at,
            "delivered_at": self.delivered_at,
            "cancelled_at": self.cancelled_at,
            "cancellation_reason": self.cancellation_reason,
            "updated_at": self.updated_at,
        }
