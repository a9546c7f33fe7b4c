"""
Status Value Objects for the marketplace

Lifecycle states of orders, payments and products, with transition rules.
"""

from bilibay.core.domain import StatusEnum


class OrderStatus(StatusEnum):
    """
    Order lifecycle states.

    Valid transitions:
    - PENDING -> PROCESSING, CANCELLED
    - PROCESSING -> SHIPPED, CANCELLED
    - SHIPPED -> DELIVERED
    - DELIVERED, CANCELLED -> (terminal states)
    """

    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"

    def can_transition_to(self, new_status: "OrderStatus") -> bool:
        """
        Check if transition to new status is valid.

        Args:
            new_status: Target status

        Returns:
            True if transition is allowed
        """
        return new_status in ORDER_TRANSITIONS[self]

    def get_valid_transitions(self) -> list["OrderStatus"]:
        """Get list of valid next statuses."""
        return list(ORDER_TRANSITIONS[self])

    def is_terminal(self) -> bool:
        """Check if this is a terminal (final) state."""
        return not ORDER_TRANSITIONS[self]

    def is_shipped(self) -> bool:
        """Check if order has left the seller."""
        return self in (OrderStatus.SHIPPED, OrderStatus.DELIVERED)

    def can_be_cancelled(self) -> bool:
        """Orders can only be cancelled before shipping."""
        return OrderStatus.CANCELLED in ORDER_TRANSITIONS[self]


ORDER_TRANSITIONS: dict[OrderStatus, tuple[OrderStatus, ...]] = {
    OrderStatus.PENDING: (OrderStatus.PROCESSING, OrderStatus.CANCELLED),
    OrderStatus.PROCESSING: (OrderStatus.SHIPPED, OrderStatus.CANCELLED),
    OrderStatus.SHIPPED: (OrderStatus.DELIVERED,),
    OrderStatus.DELIVERED: (),
    OrderStatus.CANCELLED: (),
}


class PaymentStatus(StatusEnum):
    """Settlement status of an order's payment."""

    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"

    def is_settled(self) -> bool:
        """Paid or failed payments can no longer change."""
        return self != PaymentStatus.PENDING


class PaymentMethod(StatusEnum):
    """Supported payment methods."""

    COD = "cod"
    BANK_TRANSFER = "bank_transfer"

    def requires_proof(self) -> bool:
        """Bank transfers need a reference number or receipt for verification."""
        return self == PaymentMethod.BANK_TRANSFER


class ProductStatus(StatusEnum):
    """Product availability status."""

    AVAILABLE = "available"
    SOLD = "sold"
    DRAFT = "draft"

    def is_available_for_sale(self) -> bool:
        """Check if product can be purchased."""
        return self == ProductStatus.AVAILABLE

    def is_visible(self) -> bool:
        """Drafts are only visible to their seller."""
        return self != ProductStatus.DRAFT
