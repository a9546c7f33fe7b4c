"""
Payment records (one per order)
"""

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import Column, DateTime, ForeignKey, Index, Numeric, String, Text, Uuid
from sqlalchemy.orm import Mapped, relationship

from .base import Base, TimestampMixin

if TYPE_CHECKING:
    from .orders import Order


class Payment(Base, TimestampMixin):
    """Settlement record for an order."""

    __tablename__ = "payments"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    order_id = Column(Uuid, ForeignKey("orders.id", ondelete="CASCADE"), unique=True, nullable=False)

    amount = Column(Numeric(12, 2), nullable=False)
    method = Column(String(20), nullable=False)  # cod, bank_transfer
    status = Column(String(20), nullable=False, default="pending")  # pending, paid, failed
    reference = Column(String(100))
    receipt_image = Column(Text)
    failure_reason = Column(Text)

    verified_by = Column(Uuid, ForeignKey("users.id"), nullable=True)
    verified_at = Column(DateTime(timezone=True))

    order: Mapped["Order"] = relationship("Order", back_populates="payment")

    __table_args__ = (Index("idx_payments_status", status),)

    def __repr__(self):
        return f"<Payment(order_id='{self.order_id}', status='{self.status}', amount={self.amount})>"
