"""
Seller Product Management Use Cases

Sellers create and maintain their own listings. Every lookup is scoped to
the seller from the access token: someone else's product is reported as
not found.
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any
from uuid import UUID

from bilibay.core.domain import EntityNotFoundException, Money, ValidationException, generate_uuid
from bilibay.core.shared import Page, page_offset
from bilibay.database.unit_of_work import IUnitOfWork
from bilibay.domains.ecommerce.application.ports import ICartRepository, ICategoryRepository, IProductRepository
from bilibay.domains.ecommerce.domain.entities import Product
from bilibay.domains.ecommerce.domain.value_objects import ProductStatus

logger = logging.getLogger(__name__)


@dataclass
class ListSellerProductsRequest:
    seller_id: UUID
    status: str | None = None
    page: int = 1
    limit: int = 20


@dataclass
class CreateProductRequest:
    """Request for listing a new product"""

    seller_id: UUID
    title: str
    price: Decimal
    description: str = ""
    stock: int = 0
    category_id: UUID | None = None
    status: str = ProductStatus.AVAILABLE.value
    images: list[str] = field(default_factory=list)
    variants: list[str] = field(default_factory=list)
    currency: str = "PHP"


@dataclass
class UpdateProductRequest:
    """Partial update; ``None`` leaves a field unchanged"""

    product_id: UUID
    seller_id: UUID
    title: str | None = None
    description: str | None = None
    price: Decimal | None = None
    stock: int | None = None
    category_id: UUID | None = None
    status: str | None = None
    images: list[str] | None = None
    variants: list[str] | None = None


async def _ensure_category(category_repository: ICategoryRepository, category_id: UUID | None) -> None:
    if category_id is not None and await category_repository.get_by_id(category_id) is None:
        raise EntityNotFoundException("Category", category_id)


async def _get_owned_product(product_repository: IProductRepository, product_id: UUID, seller_id: UUID) -> Product:
    product = await product_repository.get_by_id(product_id)
    if product is None or not product.is_owned_by(seller_id):
        raise EntityNotFoundException("Product", product_id)
    return product


def _parse_status(value: str) -> ProductStatus:
    try:
        return ProductStatus.from_string(value)
    except ValueError as e:
        raise ValidationException(str(e), field="status") from e


def _ensure_status_matches_stock(status: ProductStatus, stock: int) -> None:
    """``sold`` is reserved for products without stock; sellers zero the stock instead."""
    if status == ProductStatus.SOLD and stock > 0:
        raise ValidationException("Cannot mark a product with stock as sold, set stock to 0 instead", field="status")


class ListSellerProductsUseCase:
    """Use case for a seller's own listings, drafts included."""

    def __init__(self, product_repository: IProductRepository):
        self.product_repository = product_repository

    async def execute(self, request: ListSellerProductsRequest) -> Page:
        products, total = await self.product_repository.list_by_seller(
            request.seller_id,
            status=request.status,
            offset=page_offset(request.page, request.limit),
            limit=request.limit,
        )
        return Page(items=[p.to_dict() for p in products], total=total, page=request.page, limit=request.limit)


class CreateProductUseCase:
    """
    Use Case: Create Product

    A product listed with no stock is immediately ``sold``.
    """

    def __init__(
        self,
        product_repository: IProductRepository,
        category_repository: ICategoryRepository,
        uow: IUnitOfWork,
    ):
        self.product_repository = product_repository
        self.category_repository = category_repository
        self.uow = uow

    async def execute(self, request: CreateProductRequest) -> dict[str, Any]:
        await _ensure_category(self.category_repository, request.category_id)

        product = Product(
            id=generate_uuid(),
            title=request.title.strip(),
            description=request.description,
            price=Money(amount=request.price, currency=request.currency),
            stock=request.stock,
            status=_parse_status(request.status),
            seller_id=request.seller_id,
            category_id=request.category_id,
            images=list(request.images),
            variants=list(request.variants),
        )
        if not product.title:
            raise ValidationException("Title is required", field="title")
        _ensure_status_matches_stock(product.status, product.stock)
        product.sync_status_with_stock()

        try:
            created = await self.product_repository.create(product)
            await self.uow.commit()
        except Exception:
            await self.uow.rollback()
            raise

        logger.info(f"Seller {request.seller_id} listed product {created.id}")
        return created.to_dict()


class UpdateProductUseCase:
    """
    Use Case: Update Product

    Stock edits keep the status consistent (0 means sold, restocking a
    sold product makes it available again). An explicit ``sold`` status
    is refused while stock remains.
    """

    def __init__(
        self,
        product_repository: IProductRepository,
        category_repository: ICategoryRepository,
        uow: IUnitOfWork,
    ):
        self.product_repository = product_repository
        self.category_repository = category_repository
        self.uow = uow

    async def execute(self, request: UpdateProductRequest) -> dict[str, Any]:
        product = await _get_owned_product(self.product_repository, request.product_id, request.seller_id)

        if request.title is not None:
            if not request.title.strip():
                raise ValidationException("Title is required", field="title")
            product.title = request.title.strip()
        if request.description is not None:
            product.description = request.description
        if request.price is not None:
            product.price = Money(amount=request.price, currency=product.price.currency)
        if request.category_id is not None:
            await _ensure_category(self.category_repository, request.category_id)
            product.category_id = request.category_id
        if request.images is not None:
            product.images = list(request.images)
        if request.variants is not None:
            product.variants = list(request.variants)
        stock = request.stock if request.stock is not None else product.stock
        if request.status is not None:
            new_status = _parse_status(request.status)
            _ensure_status_matches_stock(new_status, stock)
            product.status = new_status

        product.set_stock(stock)

        try:
            updated = await self.product_repository.update(product)
            await self.uow.commit()
        except Exception:
            await self.uow.rollback()
            raise
        return updated.to_dict()


class DeleteProductUseCase:
    """
    Use Case: Delete Product

    Cart lines pointing at the product go with it; order lines keep their
    snapshot.
    """

    def __init__(
        self,
        product_repository: IProductRepository,
        cart_repository: ICartRepository,
        uow: IUnitOfWork,
    ):
        self.product_repository = product_repository
        self.cart_repository = cart_repository
        self.uow = uow

    async def execute(self, product_id: UUID, seller_id: UUID) -> None:
        await _get_owned_product(self.product_repository, product_id, seller_id)
        try:
            removed_lines = await self.cart_repository.remove_product(product_id)
            await self.product_repository.delete(product_id)
            await self.uow.commit()
        except Exception:
            await self.uow.rollback()
            raise
        logger.info(f"Product {product_id} deleted by seller {seller_id} ({removed_lines} cart lines removed)")


__all__ = [
    "ListSellerProductsRequest",
    "ListSellerProductsUseCase",
    "CreateProductRequest",
    "CreateProductUseCase",
    "UpdateProductRequest",
    "UpdateProductUseCase",
    "DeleteProductUseCase",
]
