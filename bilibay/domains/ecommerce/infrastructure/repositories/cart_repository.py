"""
Cart Repository Implementation

SQLAlchemy implementation of ICartRepository.
"""

import logging
from typing import cast
from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from bilibay.config.settings import get_settings
from bilibay.core.domain import generate_uuid
from bilibay.domains.ecommerce.application.ports import ICartRepository
from bilibay.domains.ecommerce.domain.entities import Cart, CartItem
from bilibay.models.db.cart import Cart as CartModel
from bilibay.models.db.cart import CartItem as CartItemModel

from .product_repository import to_product_entity

logger = logging.getLogger(__name__)


class SQLAlchemyCartRepository(ICartRepository):
    """
    SQLAlchemy implementation of cart repository.

    Carts are created lazily on first access, one per buyer.
    """

    def __init__(self, session: AsyncSession):
        """
        Initialize repository.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session
        self.currency = get_settings().CURRENCY

    async def get_or_create(self, user_id: UUID) -> Cart:
        """Get the buyer's cart with every line's product loaded."""
        model = await self._load(user_id)
        if model is None:
            self.session.add(CartModel(id=generate_uuid(), user_id=user_id))
            await self.session.flush()
            logger.debug(f"Created cart for user {user_id}")
            model = await self._load(user_id)
        return self._to_entity(cast(CartModel, model))

    async def add_item(self, cart_id: UUID, product_id: UUID, quantity: int, variant: str | None) -> CartItem:
        model = CartItemModel(
            id=generate_uuid(),
            cart_id=cart_id,
            product_id=product_id,
            quantity=quantity,
            variant=variant,
        )
        self.session.add(model)
        await self.session.flush()
        return CartItem(
            id=cast(UUID, model.id),
            product_id=product_id,
            quantity=quantity,
            variant=variant,
        )

    async def update_item_quantity(self, item_id: UUID, quantity: int) -> None:
        await self.session.execute(
            update(CartItemModel).where(CartItemModel.id == item_id).values(quantity=quantity)
        )

    async def remove_item(self, item_id: UUID) -> bool:
        result = await self.session.execute(delete(CartItemModel).where(CartItemModel.id == item_id))
        return result.rowcount > 0

    async def clear(self, cart_id: UUID) -> int:
        result = await self.session.execute(delete(CartItemModel).where(CartItemModel.cart_id == cart_id))
        return result.rowcount

    async def remove_product(self, product_id: UUID) -> int:
        """Drop a deleted product from every cart."""
        result = await self.session.execute(delete(CartItemModel).where(CartItemModel.product_id == product_id))
        return result.rowcount

    async def _load(self, user_id: UUID) -> CartModel | None:
        result = await self.session.execute(
            select(CartModel)
            .options(selectinload(CartModel.items).selectinload(CartItemModel.product))
            .where(CartModel.user_id == user_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    # Mapping methods

    def _to_entity(self, model: CartModel) -> Cart:
        """Convert model to entity."""
        items = [
            CartItem(
                id=cast(UUID, item.id),
                product_id=cast(UUID, item.product_id),
                quantity=cast(int, item.quantity),
                variant=cast(str | None, item.variant),
                product=to_product_entity(item.product, self.currency) if item.product is not None else None,
            )
            for item in model.items
        ]
        return Cart(
            id=cast(UUID, model.id),
            user_id=cast(UUID, model.user_id),
            items=items,
            currency=self.currency,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
