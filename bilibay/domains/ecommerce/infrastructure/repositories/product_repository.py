"""
Product Repository Implementation

SQLAlchemy implementation of IProductRepository.
"""

import logging
from decimal import Decimal
from typing import cast
from uuid import UUID

from sqlalchemy import delete, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from bilibay.config.settings import get_settings
from bilibay.core.domain import Money, generate_uuid
from bilibay.domains.ecommerce.application.ports import IProductRepository, ProductSearchFilters
from bilibay.domains.ecommerce.domain.entities import Product
from bilibay.domains.ecommerce.domain.value_objects import ProductStatus
from bilibay.models.db.catalog import Product as ProductModel

logger = logging.getLogger(__name__)

_SORT_COLUMNS = {
    "newest": ProductModel.created_at.desc(),
    "price_asc": ProductModel.price.asc(),
    "price_desc": ProductModel.price.desc(),
    "title": ProductModel.title.asc(),
}


class SQLAlchemyProductRepository(IProductRepository):
    """
    SQLAlchemy implementation of product repository.

    Never commits: the surrounding unit of work decides.
    """

    def __init__(self, session: AsyncSession):
        """
        Initialize repository.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session
        self.currency = get_settings().CURRENCY

    async def get_by_id(self, product_id: UUID) -> Product | None:
        """Get product by ID."""
        model = await self.session.get(ProductModel, product_id)
        return self._to_entity(model) if model else None

    async def get_many(self, product_ids: list[UUID]) -> dict[UUID, Product]:
        """Get several products keyed by ID."""
        if not product_ids:
            return {}
        result = await self.session.execute(select(ProductModel).where(ProductModel.id.in_(set(product_ids))))
        products = [self._to_entity(m) for m in result.scalars().all()]
        return {cast(UUID, p.id): p for p in products}

    async def search(self, filters: ProductSearchFilters) -> tuple[list[Product], int]:
        """Search the public catalog (available products only)."""
        conditions = [ProductModel.status == ProductStatus.AVAILABLE.value]

        if filters.search:
            pattern = f"%{filters.search.strip()}%"
            conditions.append(or_(ProductModel.title.ilike(pattern), ProductModel.description.ilike(pattern)))
        if filters.category_id:
            conditions.append(ProductModel.category_id == filters.category_id)
        if filters.min_price is not None:
            conditions.append(ProductModel.price >= filters.min_price)
        if filters.max_price is not None:
            conditions.append(ProductModel.price <= filters.max_price)
        if filters.in_stock:
            conditions.append(ProductModel.stock > 0)

        total = await self.session.scalar(select(func.count()).select_from(ProductModel).where(*conditions))

        order_by = _SORT_COLUMNS.get(filters.sort_by, _SORT_COLUMNS["newest"])
        result = await self.session.execute(
            select(ProductModel)
            .where(*conditions)
            .order_by(order_by, ProductModel.id)
            .offset(filters.offset)
            .limit(filters.limit)
        )
        return [self._to_entity(m) for m in result.scalars().all()], total or 0

    async def list_by_seller(
        self, seller_id: UUID, status: str | None = None, offset: int = 0, limit: int = 20
    ) -> tuple[list[Product], int]:
        """List a seller's products, drafts included."""
        conditions = [ProductModel.seller_id == seller_id]
        if status:
            conditions.append(ProductModel.status == status)

        total = await self.session.scalar(select(func.count()).select_from(ProductModel).where(*conditions))
        result = await self.session.execute(
            select(ProductModel)
            .where(*conditions)
            .order_by(ProductModel.created_at.desc(), ProductModel.id)
            .offset(offset)
            .limit(limit)
        )
        return [self._to_entity(m) for m in result.scalars().all()], total or 0

    async def create(self, product: Product) -> Product:
        """Persist a new product."""
        model = self._to_model(product)
        self.session.add(model)
        await self.session.flush()
        return self._to_entity(model)

    async def update(self, product: Product) -> Product:
        """Copy the entity's editable fields onto the stored row."""
        model = await self.session.get(ProductModel, product.id)
        if model is None:
            raise ValueError(f"Product {product.id} does not exist")

        model.title = product.title
        model.description = product.description
        model.price = product.price.amount
        model.stock = product.stock
        model.status = product.status.value
        model.category_id = product.category_id
        model.images = list(product.images)
        model.variants = list(product.variants)
        await self.session.flush()
        return self._to_entity(model)

    async def delete(self, product_id: UUID) -> bool:
        """Delete a product."""
        result = await self.session.execute(delete(ProductModel).where(ProductModel.id == product_id))
        return result.rowcount > 0

    async def decrement_stock(self, product_id: UUID, quantity: int) -> bool:
        """
        Atomically take ``quantity`` units.

        The guard ``stock >= quantity`` lives in the UPDATE itself, so two
        concurrent checkouts can never both take the last unit. A product
        that reaches zero is flipped to ``sold``.

        Returns:
            False when the row did not have enough stock
        """
        result = await self.session.execute(
            update(ProductModel)
            .where(ProductModel.id == product_id, ProductModel.stock >= quantity)
            .values(stock=ProductModel.stock - quantity)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            logger.warning(f"Stock decrement of {quantity} refused for product {product_id}")
            return False

        await self.session.execute(
            update(ProductModel)
            .where(
                ProductModel.id == product_id,
                ProductModel.stock == 0,
                ProductModel.status == ProductStatus.AVAILABLE.value,
            )
            .values(status=ProductStatus.SOLD.value)
            .execution_options(synchronize_session=False)
        )
        await self._expire(product_id)
        return True

    async def restore_stock(self, product_id: UUID, quantity: int) -> None:
        """Give units back; a sold product becomes available again."""
        await self.session.execute(
            update(ProductModel)
            .where(ProductModel.id == product_id)
            .values(stock=ProductModel.stock + quantity)
            .execution_options(synchronize_session=False)
        )
        await self.session.execute(
            update(ProductModel)
            .where(
                ProductModel.id == product_id,
                ProductModel.stock > 0,
                ProductModel.status == ProductStatus.SOLD.value,
            )
            .values(status=ProductStatus.AVAILABLE.value)
            .execution_options(synchronize_session=False)
        )
        await self._expire(product_id)

    async def count_by_category(self, category_id: UUID) -> int:
        """Count products in a category."""
        total = await self.session.scalar(
            select(func.count()).select_from(ProductModel).where(ProductModel.category_id == category_id)
        )
        return total or 0

    async def get_low_stock(self, threshold: int, limit: int = 20) -> list[Product]:
        """Available products running low, lowest stock first."""
        result = await self.session.execute(
            select(ProductModel)
            .where(ProductModel.status == ProductStatus.AVAILABLE.value, ProductModel.stock < threshold)
            .order_by(ProductModel.stock.asc(), ProductModel.title)
            .limit(limit)
        )
        return [self._to_entity(m) for m in result.scalars().all()]

    async def _expire(self, product_id: UUID) -> None:
        """Drop a cached row so the next read sees the bulk UPDATE."""
        model = await self.session.get(ProductModel, product_id)
        if model is not None:
            await self.session.refresh(model)

    # Mapping methods

    def _to_entity(self, model: ProductModel) -> Product:
        """Convert model to entity."""
        return to_product_entity(model, self.currency)

    def _to_model(self, product: Product) -> ProductModel:
        """Convert entity to model."""
        return ProductModel(
            id=product.id or generate_uuid(),
            title=product.title,
            description=product.description,
            price=product.price.amount,
            stock=product.stock,
            status=product.status.value,
            seller_id=product.seller_id,
            category_id=product.category_id,
            images=list(product.images),
            variants=list(product.variants),
        )


def to_product_entity(model: ProductModel, currency: str) -> Product:
    """Map a product row to the domain entity (shared with the cart repository)."""
    return Product(
        id=cast(UUID, model.id),
        title=cast(str, model.title),
        description=cast(str, model.description) or "",
        price=Money(amount=cast(Decimal, model.price), currency=currency),
        stock=cast(int, model.stock),
        status=ProductStatus(cast(str, model.status)),
        seller_id=cast(UUID, model.seller_id),
        category_id=cast(UUID | None, model.category_id),
        images=list(model.images or []),
        variants=list(model.variants or []),
        created_at=model.created_at,
        updated_at=model.updated_at,
    )
