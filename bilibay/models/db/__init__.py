"""
Database models package - Organized by responsibility
"""

from .base import Base, TimestampMixin
from .cart import Cart, CartItem
from .catalog import Category, Product
from .orders import Order, OrderItem
from .payments import Payment
from .user import UserDB

__all__ = [
    "Base",
    "TimestampMixin",
    "UserDB",
    "Category",
    "Product",
    "Cart",
    "CartItem",
    "Order",
    "OrderItem",
    "Payment",
]
