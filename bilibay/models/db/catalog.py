"""
Catalog models: categories and products
"""

import uuid
from typing import TYPE_CHECKING, List

from sqlalchemy import JSON, CheckConstraint, Column, ForeignKey, Index, Integer, Numeric, String, Text, Uuid
from sqlalchemy.orm import Mapped, relationship

from .base import Base, TimestampMixin

if TYPE_CHECKING:
    from .user import UserDB


class Category(Base, TimestampMixin):
    """Product categories."""

    __tablename__ = "categories"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(100), unique=True, nullable=False)
    slug = Column(String(120), unique=True, nullable=False, index=True)
    description = Column(Text, nullable=True)

    products: Mapped[List["Product"]] = relationship("Product", back_populates="category")

    def __repr__(self):
        return f"<Category(name='{self.name}', slug='{self.slug}')>"


class Product(Base, TimestampMixin):
    """Products listed by sellers."""

    __tablename__ = "products"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False, default="")
    price = Column(Numeric(10, 2), nullable=False)
    stock = Column(Integer, nullable=False, default=0)
    status = Column(String(20), nullable=False, default="available")  # available, sold, draft
    images = Column(JSON, nullable=False, default=list)
    variants = Column(JSON, nullable=False, default=list)

    category_id = Column(Uuid, ForeignKey("categories.id"), nullable=True)
    seller_id = Column(Uuid, ForeignKey("users.id"), nullable=False)

    category: Mapped["Category"] = relationship("Category", back_populates="products")
    seller: Mapped["UserDB"] = relationship("UserDB")

    __table_args__ = (
        CheckConstraint("stock >= 0", name="ck_products_stock_non_negative"),
        CheckConstraint("price >= 0", name="ck_products_price_non_negative"),
        Index("idx_products_status", status),
        Index("idx_products_seller", seller_id),
        Index("idx_products_category", category_id),
    )

    def __repr__(self):
        return f"<Product(title='{self.title}', stock={self.stock}, status='{self.status}')>"
