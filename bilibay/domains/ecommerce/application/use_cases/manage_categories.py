"""
Category Management Use Cases (admin)
"""

import logging
from dataclasses import dataclass
from typing import Any
from uuid import UUID

from bilibay.core.domain import (
    BusinessRuleViolationException,
    DuplicateEntityException,
    EntityNotFoundException,
    generate_uuid,
)
from bilibay.database.unit_of_work import IUnitOfWork
from bilibay.domains.ecommerce.application.ports import ICategoryRepository, IProductRepository
from bilibay.domains.ecommerce.domain.entities import Category

logger = logging.getLogger(__name__)


@dataclass
class SaveCategoryRequest:
    """Create or update a category; ``category_id`` set means update"""

    name: str
    description: str | None = None
    category_id: UUID | None = None


class GetCategoryUseCase:
    def __init__(self, category_repository: ICategoryRepository):
        self.category_repository = category_repository

    async def execute(self, category_id: UUID) -> dict[str, Any]:
        category = await self.category_repository.get_by_id(category_id)
        if category is None:
            raise EntityNotFoundException("Category", category_id)
        return category.to_dict()


class SaveCategoryUseCase:
    """
    Use Case: Create or rename a category

    Name and slug are both unique; the slug is recomputed from the name.
    """

    def __init__(self, category_repository: ICategoryRepository, uow: IUnitOfWork):
        self.category_repository = category_repository
        self.uow = uow

    async def execute(self, request: SaveCategoryRequest) -> dict[str, Any]:
        if request.category_id is None:
            category = Category(id=generate_uuid(), name=request.name, description=request.description)
        else:
            existing = await self.category_repository.get_by_id(request.category_id)
            if existing is None:
                raise EntityNotFoundException("Category", request.category_id)
            category = existing
            category.rename(request.name)
            category.description = request.description

        await self._ensure_unique(category)

        try:
            if request.category_id is None:
                saved = await self.category_repository.create(category)
            else:
                saved = await self.category_repository.update(category)
            await self.uow.commit()
        except Exception:
            await self.uow.rollback()
            raise
        return saved.to_dict()

    async def _ensure_unique(self, category: Category) -> None:
        by_name = await self.category_repository.get_by_name(category.name)
        if by_name is not None and by_name.id != category.id:
            raise DuplicateEntityException("Category", "name", category.name)
        by_slug = await self.category_repository.get_by_slug(category.slug)
        if by_slug is not None and by_slug.id != category.id:
            raise DuplicateEntityException("Category", "slug", category.slug)


class DeleteCategoryUseCase:
    """Use Case: Delete a category that no product references."""

    def __init__(
        self,
        category_repository: ICategoryRepository,
        product_repository: IProductRepository,
        uow: IUnitOfWork,
    ):
        self.category_repository = category_repository
        self.product_repository = product_repository
        self.uow = uow

    async def execute(self, category_id: UUID) -> None:
        if await self.category_repository.get_by_id(category_id) is None:
            raise EntityNotFoundException("Category", category_id)

        in_use = await self.product_repository.count_by_category(category_id)
        if in_use:
            raise BusinessRuleViolationException(
                rule="CATEGORY_IN_USE",
                message="Cannot delete category with existing products",
                details={"products": in_use},
            )

        try:
            await self.category_repository.delete(category_id)
            await self.uow.commit()
        except Exception:
            await self.uow.rollback()
            raise
        logger.info(f"Category {category_id} deleted")


__all__ = [
    "SaveCategoryRequest",
    "GetCategoryUseCase",
    "SaveCategoryUseCase",
    "DeleteCategoryUseCase",
]
