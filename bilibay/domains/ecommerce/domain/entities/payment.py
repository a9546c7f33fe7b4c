"""
Payment Entity for the marketplace
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any
from uuid import UUID

from bilibay.core.domain import Entity, Money, PaymentException

from ..value_objects.order_status import PaymentMethod, PaymentStatus


@dataclass
class Payment(Entity[UUID]):
    """
    Settlement record for an order (exactly one per order).

    Payments start ``pending`` and are settled manually by an admin,
    either ``paid`` after checking the transfer or ``failed``.
    """

    order_id: UUID | None = None
    amount: Money = field(default_factory=Money.zero)
    method: PaymentMethod = PaymentMethod.COD
    status: PaymentStatus = PaymentStatus.PENDING
    reference: str | None = None
    receipt_image: str | None = None
    failure_reason: str | None = None
    verified_by: UUID | None = None
    verified_at: datetime | None = None

    def _ensure_pending(self, operation: str) -> None:
        if self.status != PaymentStatus.PENDING:
            raise PaymentException(
                f"Payment is already {self.status.value}",
                payment_id=str(self.id) if self.id else None,
                reason=f"cannot {operation} a {self.status.value} payment",
            )

    def verify(self, admin_id: UUID) -> None:
        """Confirm the payment was received."""
        self._ensure_pending("verify")
        self.status = PaymentStatus.PAID
        self.verified_by = admin_id
        self.verified_at = datetime.now(UTC)
        self.touch()

    def reject(self, admin_id: UUID, reason: str | None = None) -> None:
        """Mark the payment as not received or invalid."""
        self._ensure_pending("reject")
        self.status = PaymentStatus.FAILED
        self.failure_reason = reason
        self.verified_by = admin_id
        self.verified_at = datetime.now(UTC)
        self.touch()

    def fail(self, reason: str | None = None) -> None:
        """Fail a pending payment (order cancelled); settled payments are left alone."""
        if self.status == PaymentStatus.PENDING:
            self.status = PaymentStatus.FAILED
            self.failure_reason = reason
            self.touch()

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.id) if self.id else None,
            "order_id": str(self.order_id) if self.order_id else None,
            "amount": self.amount.amount,
            "currency": self.amount.currency,
            "method": self.method.value,
            "status": self.status.value,
            "reference": self.reference,
            "receipt_image": self.receipt_image,
            "failure_reason": self.failure_reason,
            "verified_by": str(self.verified_by) if self.verified_by else None,
            "verified_at": self.verified_at,
            "created_at": self.created_at,
        }
