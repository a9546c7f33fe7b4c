"""
Marketplace Entities
"""

from .cart import Cart, CartItem
from .category import Category, slugify
from .order import Order, OrderItem, generate_order_number
from .payment import Payment
from .product import Product

__all__ = [
    "Cart",
    "CartItem",
    "Category",
    "slugify",
    "Order",
    "OrderItem",
    "generate_order_number",
    "Payment",
    "Product",
]
