"""
Marketplace Infrastructure Repositories

SQLAlchemy implementations of the application ports.
"""

from .cart_repository import SQLAlchemyCartRepository
from .category_repository import SQLAlchemyCategoryRepository
from .order_repository import SQLAlchemyOrderRepository
from .payment_repository import SQLAlchemyPaymentRepository
from .product_repository import SQLAlchemyProductRepository

__all__ = [
    "SQLAlchemyCartRepository",
    "SQLAlchemyCategoryRepository",
    "SQLAlchemyOrderRepository",
    "SQLAlchemyPaymentRepository",
    "SQLAlchemyProductRepository",
]
