"""
Browse Catalog Use Cases

Public, read-only access to the product catalog.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any
from uuid import UUID

from bilibay.core.domain import EntityNotFoundException
from bilibay.core.shared import Page, page_offset
from bilibay.domains.ecommerce.application.ports import (
    PRODUCT_SORT_OPTIONS,
    ICategoryRepository,
    IProductRepository,
    ProductSearchFilters,
)
from bilibay.domains.ecommerce.domain.entities import Category

logger = logging.getLogger(__name__)


@dataclass
class BrowseProductsRequest:
    """Request for browsing the catalog"""

    search: str | None = None
    category: str | None = None  # id or slug
    min_price: Decimal | None = None
    max_price: Decimal | None = None
    in_stock: bool = False
    sort_by: str = "newest"
    page: int = 1
    limit: int = 20


class BrowseProductsUseCase:
    """
    Use case for listing available products.

    Search matches title or description case-insensitively; drafts and
    sold products never show up.
    """

    def __init__(self, product_repository: IProductRepository, category_repository: ICategoryRepository):
        self.product_repository = product_repository
        self.category_repository = category_repository

    async def execute(self, request: BrowseProductsRequest) -> Page:
        category_id = None
        if request.category:
            category = await self._resolve_category(request.category)
            if category is None:
                logger.debug(f"Unknown category filter '{request.category}', returning no products")
                return Page(items=[], total=0, page=request.page, limit=request.limit)
            category_id = category.id

        filters = ProductSearchFilters(
            search=request.search or None,
            category_id=category_id,
            min_price=request.min_price,
            max_price=request.max_price,
            in_stock=request.in_stock,
            sort_by=request.sort_by if request.sort_by in PRODUCT_SORT_OPTIONS else "newest",
            offset=page_offset(request.page, request.limit),
            limit=request.limit,
        )
        products, total = await self.product_repository.search(filters)
        return Page(
            items=[p.to_dict() for p in products],
            total=total,
            page=request.page,
            limit=request.limit,
        )

    async def _resolve_category(self, value: str) -> Category | None:
        try:
            return await self.category_repository.get_by_id(UUID(value))
        except ValueError:
            return await self.category_repository.get_by_slug(value.lower())


class GetProductUseCase:
    """Use case for a single public product page."""

    def __init__(self, product_repository: IProductRepository):
        self.product_repository = product_repository

    async def execute(self, product_id: UUID) -> dict[str, Any]:
        """
        Get a product by ID.

        Raises:
            EntityNotFoundException: Missing product or a draft
        """
        product = await self.product_repository.get_by_id(product_id)
        if product is None or not product.status.is_visible():
            raise EntityNotFoundException("Product", product_id)
        return product.to_dict()


class ListCategoriesUseCase:
    """Use case for the category list (ordered by name)."""

    def __init__(self, category_repository: ICategoryRepository):
        self.category_repository = category_repository

    async def execute(self) -> list[dict[str, Any]]:
        categories = await self.category_repository.get_all()
        return [c.to_dict() for c in categories]


__all__ = [
    "BrowseProductsRequest",
    "BrowseProductsUseCase",
    "GetProductUseCase",
    "ListCategoriesUseCase",
]
