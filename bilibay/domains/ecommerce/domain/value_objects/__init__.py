"""
Marketplace Value Objects
"""

from .order_status import (
    ORDER_TRANSITIONS,
    OrderStatus,
    PaymentMethod,
    PaymentStatus,
    ProductStatus,
)

__all__ = [
    "ORDER_TRANSITIONS",
    "OrderStatus",
    "PaymentMethod",
    "PaymentStatus",
    "ProductStatus",
]
