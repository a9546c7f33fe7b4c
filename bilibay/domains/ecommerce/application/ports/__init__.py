"""
Marketplace Application Ports

Interface definitions (ports) for the marketplace domain.
Uses Protocol for structural typing.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Protocol, runtime_checkable
from uuid import UUID

from bilibay.domains.ecommerce.domain.entities import (
    Cart,
    CartItem,
    Category,
    Order,
    Payment,
    Product,
)

PRODUCT_SORT_OPTIONS = ("newest", "price_asc", "price_desc", "title")


@dataclass
class ProductSearchFilters:
    """Catalog query accepted by IProductRepository.search."""

    search: str | None = None
    category_id: UUID | None = None
    min_price: Decimal | None = None
    max_price: Decimal | None = None
    in_stock: bool = False
    sort_by: str = "newest"
    offset: int = 0
    limit: int = 20


@runtime_checkable
class IProductRepository(Protocol):
    """
    Interface for product repository.

    Defines the contract for product data access.
    """

    async def get_by_id(self, product_id: UUID) -> Product | None:
        """Get product by ID"""
        ...

    async def get_many(self, product_ids: list[UUID]) -> dict[UUID, Product]:
        """Get several products keyed by ID (missing IDs are absent)"""
        ...

    async def search(self, filters: ProductSearchFilters) -> tuple[list[Product], int]:
        """Search available products; returns (page, total matches)"""
        ...

    async def list_by_seller(
        self, seller_id: UUID, status: str | None = None, offset: int = 0, limit: int = 20
    ) -> tuple[list[Product], int]:
        """List a seller's own products"""
        ...

    async def create(self, product: Product) -> Product:
        """Persist a new product"""
        ...

    async def update(self, product: Product) -> Product:
        """Persist changes to a product"""
        ...

    async def delete(self, product_id: UUID) -> bool:
        """Delete a product"""
        ...

    async def decrement_stock(self, product_id: UUID, quantity: int) -> bool:
        """Atomically take stock; False when fewer than quantity units remain"""
        ...

    async def restore_stock(self, product_id: UUID, quantity: int) -> None:
        """Give stock back (cancellation)"""
        ...

    async def count_by_category(self, category_id: UUID) -> int:
        """Count products in a category"""
        ...

    async def get_low_stock(self, threshold: int, limit: int = 20) -> list[Product]:
        """Available products with stock below threshold"""
        ...


@runtime_checkable
class ICategoryRepository(Protocol):
    """
    Interface for category repository.

    Defines the contract for category data access.
    """

    async def get_all(self) -> list[Category]:
        """Get all categories"""
        ...

    async def get_by_id(self, category_id: UUID) -> Category | None:
        """Get category by ID"""
        ...

    async def get_by_slug(self, slug: str) -> Category | None:
        """Get category by slug"""
        ...

    async def get_by_name(self, name: str) -> Category | None:
        """Get category by name (case-insensitive)"""
        ...

    async def create(self, category: Category) -> Category:
        """Persist a new category"""
        ...

    async def update(self, category: Category) -> Category:
        """Persist changes to a category"""
        ...

    async def delete(self, category_id: UUID) -> bool:
        """Delete a category"""
        ...


@runtime_checkable
class ICartRepository(Protocol):
    """
    Interface for cart repository.

    Defines the contract for cart data access.
    """

    async def get_or_create(self, user_id: UUID) -> Cart:
        """Get the buyer's cart with products attached, creating it if needed"""
        ...

    async def add_item(self, cart_id: UUID, product_id: UUID, quantity: int, variant: str | None) -> CartItem:
        """Add a new line"""
        ...

    async def update_item_quantity(self, item_id: UUID, quantity: int) -> None:
        """Set the quantity of a line"""
        ...

    async def remove_item(self, item_id: UUID) -> bool:
        """Remove one line"""
        ...

    async def clear(self, cart_id: UUID) -> int:
        """Remove every line; returns how many were removed"""
        ...

    async def remove_product(self, product_id: UUID) -> int:
        """Remove a product from every cart"""
        ...


@runtime_checkable
class IOrderRepository(Protocol):
    """
    Interface for order repository.

    Defines the contract for order data access.
    """

    async def create(self, order: Order) -> Order:
        """Create a new order"""
        ...

    async def get_by_id(self, order_id: UUID) -> Order | None:
        """Get order by ID"""
        ...

    async def get_by_buyer(self, buyer_id: UUID, offset: int = 0, limit: int = 20) -> tuple[list[Order], int]:
        """Get a buyer's orders, newest first"""
        ...

    async def get_by_seller(
        self, seller_id: UUID, status: str | None = None, offset: int = 0, limit: int = 20
    ) -> tuple[list[Order], int]:
        """Get orders containing at least one of the seller's products"""
        ...

    async def find(self, status: str | None = None, offset: int = 0, limit: int = 20) -> tuple[list[Order], int]:
        """List all orders, optionally by status"""
        ...

    async def update(self, order: Order) -> Order:
        """Persist status/payment/shipping changes"""
        ...

    async def total_paid_sales(self) -> Decimal:
        """Sum of totals of paid orders"""
        ...


@runtime_checkable
class IPaymentRepository(Protocol):
    """
    Interface for payment repository.

    Defines the contract for payment data access.
    """

    async def create(self, payment: Payment) -> Payment:
        """Create the payment record of an order"""
        ...

    async def get_by_id(self, payment_id: UUID) -> Payment | None:
        """Get payment by ID"""
        ...

    async def get_by_order_id(self, order_id: UUID) -> Payment | None:
        """Get the payment of an order"""
        ...

    async def find(self, status: str | None = None, offset: int = 0, limit: int = 20) -> tuple[list[Payment], int]:
        """List payments, optionally by status"""
        ...

    async def update(self, payment: Payment) -> Payment:
        """Persist payment changes"""
        ...


@runtime_checkable
class IUserCounter(Protocol):
    """Minimal user statistics needed by the dashboard."""

    async def count(self, role: str | None = None) -> int:
        """Count users, optionally by role"""
        ...


__all__ = [
    "PRODUCT_SORT_OPTIONS",
    "ProductSearchFilters",
    "IProductRepository",
    "ICategoryRepository",
    "ICartRepository",
    "IOrderRepository",
    "IPaymentRepository",
    "IUserCounter",
]
