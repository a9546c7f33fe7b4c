"""
Category Repository Implementation

SQLAlchemy implementation of ICategoryRepository.
"""

import logging
from typing import cast
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from bilibay.core.domain import generate_uuid
from bilibay.domains.ecommerce.application.ports import ICategoryRepository
from bilibay.domains.ecommerce.domain.entities import Category
from bilibay.models.db.catalog import Category as CategoryModel

logger = logging.getLogger(__name__)


class SQLAlchemyCategoryRepository(ICategoryRepository):
    """SQLAlchemy implementation of category repository."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_all(self) -> list[Category]:
        """Get all categories ordered by name."""
        result = await self.session.execute(select(CategoryModel).order_by(CategoryModel.name))
        return [self._to_entity(m) for m in result.scalars().all()]

    async def get_by_id(self, category_id: UUID) -> Category | None:
        model = await self.session.get(CategoryModel, category_id)
        return self._to_entity(model) if model else None

    async def get_by_slug(self, slug: str) -> Category | None:
        result = await self.session.execute(select(CategoryModel).where(CategoryModel.slug == slug))
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_by_name(self, name: str) -> Category | None:
        result = await self.session.execute(
            select(CategoryModel).where(func.lower(CategoryModel.name) == name.strip().lower())
        )
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def create(self, category: Category) -> Category:
        model = CategoryModel(
            id=category.id or generate_uuid(),
            name=category.name,
            slug=category.slug,
            description=category.description,
        )
        self.session.add(model)
        await self.session.flush()
        logger.info(f"Category created: {category.slug}")
        return self._to_entity(model)

    async def update(self, category: Category) -> Category:
        model = await self.session.get(CategoryModel, category.id)
        if model is None:
            raise ValueError(f"Category {category.id} does not exist")
        model.name = category.name
        model.slug = category.slug
        model.description = category.description
        await self.session.flush()
        return self._to_entity(model)

    async def delete(self, category_id: UUID) -> bool:
        result = await self.session.execute(delete(CategoryModel).where(CategoryModel.id == category_id))
        return result.rowcount > 0

    def _to_entity(self, model: CategoryModel) -> Category:
        """Convert model to entity."""
        return Category(
            id=cast(UUID, model.id),
            name=cast(str, model.name),
            slug=cast(str, model.slug),
            description=cast(str | None, model.description),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
