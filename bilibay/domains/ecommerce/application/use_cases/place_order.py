"""
Place Order Use Case

Turns a buyer's cart (or an explicit list of lines) into an immutable order.

Everything runs in one unit of work: the order, its payment record, the
stock decrements and the cart clean-up are committed together or not at all.
"""

import logging
from dataclasses import dataclass, field
from typing import Any
from uuid import UUID

from bilibay.core.domain import (
    Address,
    BusinessRuleViolationException,
    EntityNotFoundException,
    InsufficientStockException,
    ValidationException,
    generate_uuid,
)
from bilibay.database.unit_of_work import IUnitOfWork
from bilibay.domains.ecommerce.application.ports import (
    ICartRepository,
    IOrderRepository,
    IPaymentRepository,
    IProductRepository,
)
from bilibay.domains.ecommerce.domain.entities import Order, OrderItem, Payment, Product
from bilibay.domains.ecommerce.domain.services import PricingService
from bilibay.domains.ecommerce.domain.value_objects import PaymentMethod, PaymentStatus

logger = logging.getLogger(__name__)


@dataclass
class OrderLineInput:
    """One requested line."""

    product_id: UUID
    quantity: int
    variant: str | None = None


@dataclass
class PlaceOrderRequest:
    """
    Request for placing an order.

    ``items`` empty or None means "check out the cart".
    """

    buyer_id: UUID
    payment_method: str
    items: list[OrderLineInput] | None = None
    shipping_address: dict[str, Any] | None = None
    default_shipping_address: dict[str, Any] | None = None
    payment_reference: str | None = None
    receipt_image: str | None = None


@dataclass
class PlaceOrderResponse:
    """Response from order placement."""

    order: dict[str, Any]
    payment: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {**self.order, "payment": self.payment}


class PlaceOrderUseCase:
    """
    Use Case: Place Order

    Responsibilities:
    - Collect and merge the lines to buy
    - Validate availability, variants and stock
    - Freeze prices and compute shipping and totals
    - Persist the order and its pending payment
    - Take stock with a guarded update (a concurrent buyer may win the race)
    - Empty the cart when it was the source
    """

    def __init__(
        self,
        order_repository: IOrderRepository,
        product_repository: IProductRepository,
        cart_repository: ICartRepository,
        payment_repository: IPaymentRepository,
        pricing_service: PricingService,
        uow: IUnitOfWork,
    ):
        """
        Initialize use case with dependencies.

        Args:
            order_repository: Repository for order persistence
            product_repository: Repository for product lookup and stock changes
            cart_repository: Repository for the buyer's cart
            payment_repository: Repository for the order's payment record
            pricing_service: Shipping and total calculation
            uow: Transaction boundary
        """
        self.order_repository = order_repository
        self.product_repository = product_repository
        self.cart_repository = cart_repository
        self.payment_repository = payment_repository
        self.pricing_service = pricing_service
        self.uow = uow

    async def execute(self, request: PlaceOrderRequest) -> PlaceOrderResponse:
        """
        Place an order.

        Raises:
            BusinessRuleViolationException: Empty cart, unavailable product, bad variant,
                missing address or missing transfer proof
            EntityNotFoundException: A requested product does not exist
            InsufficientStockException: Not enough units (also when lost to a concurrent order)
        """
        payment_method = self._parse_payment_method(request.payment_method)

        cart_id: UUID | None = None
        if request.items:
            lines = list(request.items)
        else:
            cart = await self.cart_repository.get_or_create(request.buyer_id)
            cart_id = cart.id
            lines = [
                OrderLineInput(product_id=item.product_id, quantity=item.quantity, variant=item.variant)
                for item in cart.items
            ]

        lines = self._merge_lines(lines)
        if not lines:
            raise BusinessRuleViolationException(rule="CART_EMPTY", message="Cart is empty")

        products = await self._load_and_validate(lines)
        order_items = [
            self.pricing_service.build_order_item(products[line.product_id], line.quantity, line.variant)
            for line in lines
        ]
        pricing = self.pricing_service.price_order(order_items)

        shipping_address = self._resolve_address(request)
        if payment_method.requires_proof() and not (request.payment_reference or request.receipt_image):
            raise BusinessRuleViolationException(
                rule="PAYMENT_PROOF_REQUIRED",
                message="Bank transfer requires a payment reference or receipt image",
            )

        order = Order.place(
            buyer_id=request.buyer_id,
            items=order_items,
            shipping_address=shipping_address,
            payment_method=payment_method,
            shipping_fee=pricing.shipping_fee,
        )
        order.id = generate_uuid()

        try:
            created = await self.order_repository.create(order)
            payment = await self.payment_repository.create(
                Payment(
                    id=generate_uuid(),
                    order_id=created.id,
                    amount=created.total,
                    method=payment_method,
                    status=PaymentStatus.PENDING,
                    reference=request.payment_reference,
                    receipt_image=request.receipt_image,
                )
            )

            for product_id, quantity in created.quantities_by_product().items():
                await self._take_stock(products[product_id], quantity)

            if cart_id is not None:
                await self.cart_repository.clear(cart_id)

            await self.uow.commit()
        except Exception:
            await self.uow.rollback()
            raise

        logger.info(
            f"Order {created.order_number} placed by {request.buyer_id}: "
            f"{created.item_count} items, total {created.total}"
        )
        return PlaceOrderResponse(order=created.to_detail_dict(), payment=payment.to_dict())

    @staticmethod
    def _parse_payment_method(value: str) -> PaymentMethod:
        try:
            return PaymentMethod.from_string(value)
        except ValueError as e:
            raise ValidationException(str(e), field="payment_method") from e

    @staticmethod
    def _merge_lines(lines: list[OrderLineInput]) -> list[OrderLineInput]:
        """Collapse duplicate (product, variant) lines, keeping first-seen order."""
        merged: dict[tuple[UUID, str | None], OrderLineInput] = {}
        for line in lines:
            if line.quantity < 1:
                raise ValidationException("Quantity must be at least 1", field="quantity")
            key = (line.product_id, line.variant)
            if key in merged:
                merged[key].quantity += line.quantity
            else:
                merged[key] = OrderLineInput(line.product_id, line.quantity, line.variant)
        return list(merged.values())

    async def _load_and_validate(self, lines: list[OrderLineInput]) -> dict[UUID, Product]:
        products = await self.product_repository.get_many([line.product_id for line in lines])

        requested: dict[UUID, int] = {}
        for line in lines:
            requested[line.product_id] = requested.get(line.product_id, 0) + line.quantity

        for line in lines:
            product = products.get(line.product_id)
            if product is None:
                raise EntityNotFoundException("Product", line.product_id)
            product.ensure_can_fulfil(requested[line.product_id], line.variant)
        return products

    @staticmethod
    def _resolve_address(request: PlaceOrderRequest) -> Address:
        data = request.shipping_address or request.default_shipping_address
        if not data:
            raise BusinessRuleViolationException(
                rule="SHIPPING_ADDRESS_REQUIRED",
                message="A shipping address is required",
            )
        try:
            return Address.from_dict(data)
        except ValueError as e:
            raise ValidationException(str(e), field="shipping_address") from e

    async def _take_stock(self, product: Product, quantity: int) -> None:
        if await self.product_repository.decrement_stock(product.id, quantity):  # type: ignore[arg-type]
            return

        current = await self.product_repository.get_by_id(product.id)  # type: ignore[arg-type]
        raise InsufficientStockException(
            product_id=product.id,
            requested=quantity,
            available=current.stock if current else 0,
            title=product.title,
        )


__all__ = ["OrderLineInput", "PlaceOrderRequest", "PlaceOrderResponse", "PlaceOrderUseCase"]
