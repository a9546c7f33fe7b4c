"""
Cart Use Cases

A buyer's cart is created lazily on first access. Quantities are checked
against live stock on every change, summed over all variant lines of the
same product.
"""

import logging
from dataclasses import dataclass
from typing import Any
from uuid import UUID

from bilibay.core.domain import (
    BusinessRuleViolationException,
    EntityNotFoundException,
    InsufficientStockException,
)
from bilibay.database.unit_of_work import IUnitOfWork
from bilibay.domains.ecommerce.application.ports import ICartRepository, IProductRepository
from bilibay.domains.ecommerce.domain.entities import Product

logger = logging.getLogger(__name__)


@dataclass
class AddToCartRequest:
    user_id: UUID
    product_id: UUID
    quantity: int = 1
    variant: str | None = None


@dataclass
class UpdateCartItemRequest:
    user_id: UUID
    item_id: UUID
    quantity: int


class _CartUseCase:
    """Shared wiring for the cart use cases."""

    def __init__(self, cart_repository: ICartRepository, product_repository: IProductRepository, uow: IUnitOfWork):
        self.cart_repository = cart_repository
        self.product_repository = product_repository
        self.uow = uow

    async def _commit_and_reload(self, user_id: UUID) -> dict[str, Any]:
        try:
            await self.uow.commit()
        except Exception:
            await self.uow.rollback()
            raise
        cart = await self.cart_repository.get_or_create(user_id)
        return cart.to_dict()

    @staticmethod
    def _ensure_stock(product: Product, quantity: int) -> None:
        if quantity > product.stock:
            raise InsufficientStockException(
                product_id=product.id,
                requested=quantity,
                available=product.stock,
                title=product.title,
            )


class GetCartUseCase(_CartUseCase):
    async def execute(self, user_id: UUID) -> dict[str, Any]:
        cart = await self.cart_repository.get_or_create(user_id)
        await self.uow.commit()
        return cart.to_dict()


class AddToCartUseCase(_CartUseCase):
    """
    Use Case: Add to cart

    Adding a (product, variant) pair already in the cart merges quantities.
    """

    async def execute(self, request: AddToCartRequest) -> dict[str, Any]:
        product = await self.product_repository.get_by_id(request.product_id)
        if product is None or not product.is_available_for_sale():
            raise EntityNotFoundException("Product", request.product_id)
        if not product.supports_variant(request.variant):
            raise BusinessRuleViolationException(
                rule="INVALID_VARIANT",
                message=f"Variant '{request.variant}' is not offered for '{product.title}'",
                details={"variants": list(product.variants)},
            )

        cart = await self.cart_repository.get_or_create(request.user_id)
        self._ensure_stock(product, cart.quantity_for_product(request.product_id) + request.quantity)

        existing = cart.find_item(request.product_id, request.variant)
        if existing is not None and existing.id is not None:
            await self.cart_repository.update_item_quantity(existing.id, existing.quantity + request.quantity)
        else:
            await self.cart_repository.add_item(
                cart.id, request.product_id, request.quantity, request.variant  # type: ignore[arg-type]
            )

        logger.debug(f"Added {request.quantity} x {request.product_id} to cart of {request.user_id}")
        return await self._commit_and_reload(request.user_id)


class UpdateCartItemUseCase(_CartUseCase):
    async def execute(self, request: UpdateCartItemRequest) -> dict[str, Any]:
        cart = await self.cart_repository.get_or_create(request.user_id)
        item = cart.get_item(request.item_id)
        if item is None:
            raise EntityNotFoundException("Cart item", request.item_id)

        product = item.product or await self.product_repository.get_by_id(item.product_id)
        if product is None or not product.is_available_for_sale():
            raise EntityNotFoundException("Product", item.product_id)

        other_lines = cart.quantity_for_product(item.product_id, exclude_item_id=item.id)
        self._ensure_stock(product, other_lines + request.quantity)

        await self.cart_repository.update_item_quantity(request.item_id, request.quantity)
        return await self._commit_and_reload(request.user_id)


class RemoveCartItemUseCase(_CartUseCase):
    async def execute(self, user_id: UUID, item_id: UUID) -> dict[str, Any]:
        cart = await self.cart_repository.get_or_create(user_id)
        if cart.get_item(item_id) is None:
            raise EntityNotFoundException("Cart item", item_id)
        await self.cart_repository.remove_item(item_id)
        return await self._commit_and_reload(user_id)


class ClearCartUseCase(_CartUseCase):
    async def execute(self, user_id: UUID) -> dict[str, Any]:
        cart = await self.cart_repository.get_or_create(user_id)
        await self.cart_repository.clear(cart.id)  # type: ignore[arg-type]
        return await self._commit_and_reload(user_id)


__all__ = [
    "AddToCartRequest",
    "UpdateCartItemRequest",
    "GetCartUseCase",
    "AddToCartUseCase",
    "UpdateCartItemUseCase",
    "RemoveCartItemUseCase",
    "ClearCartUseCase",
]
