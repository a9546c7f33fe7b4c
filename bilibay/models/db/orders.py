"""
Order management models
"""

import uuid
from typing import TYPE_CHECKING, List

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Index, Integer, Numeric, String, Text, Uuid
from sqlalchemy.orm import Mapped, relationship

from .base import Base, TimestampMixin

if TYPE_CHECKING:
    from .payments import Payment


class Order(Base, TimestampMixin):
    """Buyer orders. Items and prices are a snapshot taken at checkout."""

    __tablename__ = "orders"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    order_number = Column(String(50), unique=True, nullable=False, index=True)
    buyer_id = Column(Uuid, ForeignKey("users.id"), nullable=False)

    status = Column(String(20), nullable=False, default="pending")  # pending, processing, shipped, delivered, cancelled
    subtotal = Column(Numeric(12, 2), nullable=False, default=0)
    shipping_fee = Column(Numeric(12, 2), nullable=False, default=0)
    total = Column(Numeric(12, 2), nullable=False)

    payment_method = Column(String(20), nullable=False)  # cod, bank_transfer
    payment_status = Column(String(20), nullable=False, default="pending")  # pending, paid, failed

    shipping_address = Column(JSON, nullable=False)
    tracking_number = Column(String(100))

    shipped_at = Column(DateTime(timezone=True))
    delivered_at = Column(DateTime(timezone=True))
    cancelled_at = Column(DateTime(timezone=True))
    cancellation_reason = Column(Text)

    items: Mapped[List["OrderItem"]] = relationship(
        "OrderItem", back_populates="order", cascade="all, delete-orphan", order_by="OrderItem.position"
    )
    payment: Mapped["Payment"] = relationship("Payment", back_populates="order", uselist=False)

    __table_args__ = (
        Index("idx_orders_buyer", buyer_id),
        Index("idx_orders_status", status),
        Index("idx_orders_payment_status", payment_status),
    )

    def __repr__(self):
        return f"<Order(number='{self.order_number}', status='{self.status}', total={self.total})>"


class OrderItem(Base):
    """Frozen order line."""

    __tablename__ = "order_items"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    order_id = Column(Uuid, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False)
    position = Column(Integer, nullable=False, default=0)

    # No FK: the snapshot must outlive a deleted product
    product_id = Column(Uuid, nullable=False, index=True)
    seller_id = Column(Uuid, nullable=False, index=True)
    title = Column(String(200), nullable=False)
    unit_price = Column(Numeric(10, 2), nullable=False)
    quantity = Column(Integer, nullable=False)
    variant = Column(String(100))
    subtotal = Column(Numeric(12, 2), nullable=False)

    order: Mapped["Order"] = relationship("Order", back_populates="items")
