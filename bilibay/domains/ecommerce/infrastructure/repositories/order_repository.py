"""
Order Repository Implementation

SQLAlchemy implementation of IOrderRepository.
"""

import logging
from datetime import datetime
from decimal import Decimal
from typing import cast
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from bilibay.config.settings import get_settings
from bilibay.core.domain import Address, Money, generate_uuid
from bilibay.domains.ecommerce.application.ports import IOrderRepository
from bilibay.domains.ecommerce.domain.entities import Order, OrderItem
from bilibay.domains.ecommerce.domain.value_objects import OrderStatus, PaymentMethod, PaymentStatus
from bilibay.models.db.orders import Order as OrderModel
from bilibay.models.db.orders import OrderItem as OrderItemModel

logger = logging.getLogger(__name__)


class SQLAlchemyOrderRepository(IOrderRepository):
    """
    SQLAlchemy implementation of order repository.

    Handles all order data persistence operations.
    """

    def __init__(self, session: AsyncSession):
        """
        Initialize repository.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session
        self.currency = get_settings().CURRENCY

    async def create(self, order: Order) -> Order:
        """Create a new order with its lines."""
        model = self._to_model(order)
        self.session.add(model)
        await self.session.flush()
        logger.info(f"Order {model.order_number} created for buyer {order.buyer_id}")
        return self._to_entity(model)

    async def get_by_id(self, order_id: UUID) -> Order | None:
        """Get order by ID."""
        model = await self._get_model(order_id)
        return self._to_entity(model) if model else None

    async def get_by_buyer(self, buyer_id: UUID, offset: int = 0, limit: int = 20) -> tuple[list[Order], int]:
        """Get a buyer's orders, newest first."""
        return await self._page([OrderModel.buyer_id == buyer_id], offset, limit)

    async def get_by_seller(
        self, seller_id: UUID, status: str | None = None, offset: int = 0, limit: int = 20
    ) -> tuple[list[Order], int]:
        """Get orders with at least one line sold by ``seller_id``."""
        conditions = [OrderModel.items.any(OrderItemModel.seller_id == seller_id)]
        if status:
            conditions.append(OrderModel.status == status)
        return await self._page(conditions, offset, limit)

    async def find(self, status: str | None = None, offset: int = 0, limit: int = 20) -> tuple[list[Order], int]:
        """List all orders, optionally filtered by status."""
        conditions = [OrderModel.status == status] if status else []
        return await self._page(conditions, offset, limit)

    async def update(self, order: Order) -> Order:
        """Persist the mutable part of an order (status, payment and shipping metadata)."""
        model = await self._get_model(cast(UUID, order.id))
        if model is None:
            raise ValueError(f"Order {order.id} does not exist")

        model.status = order.status.value
        model.payment_status = order.payment_status.value
        model.tracking_number = order.tracking_number
        model.shipped_at = order.shipped_at
        model.delivered_at = order.delivered_at
        model.cancelled_at = order.cancelled_at
        model.cancellation_reason = order.cancellation_reason
        await self.session.flush()
        return self._to_entity(model)

    async def total_paid_sales(self) -> Decimal:
        """Sum of totals over orders whose payment is settled as paid."""
        total = await self.session.scalar(
            select(func.coalesce(func.sum(OrderModel.total), 0)).where(
                OrderModel.payment_status == PaymentStatus.PAID.value
            )
        )
        return Decimal(str(total or 0)).quantize(Decimal("0.01"))

    async def _get_model(self, order_id: UUID) -> OrderModel | None:
        result = await self.session.execute(
            select(OrderModel)
            .options(selectinload(OrderModel.items))
            .where(OrderModel.id == order_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def _page(self, conditions: list, offset: int, limit: int) -> tuple[list[Order], int]:
        total = await self.session.scalar(select(func.count()).select_from(OrderModel).where(*conditions))
        result = await self.session.execute(
            select(OrderModel)
            .options(selectinload(OrderModel.items))
            .where(*conditions)
            .order_by(OrderModel.created_at.desc(), OrderModel.id)
            .offset(offset)
            .limit(limit)
        )
        return [self._to_entity(m) for m in result.scalars().all()], total or 0

    # Mapping methods

    def _money(self, value) -> Money:
        return Money(amount=cast(Decimal, value) if value is not None else Decimal("0"), currency=self.currency)

    def _to_entity(self, model: OrderModel) -> Order:
        """Convert model to entity."""
        items = [
            OrderItem(
                product_id=cast(UUID, item.product_id),
                seller_id=cast(UUID, item.seller_id),
                title=cast(str, item.title),
                unit_price=self._money(item.unit_price),
                quantity=cast(int, item.quantity),
                variant=cast(str | None, item.variant),
            )
            for item in model.items
        ]

        address_data = cast(dict | None, model.shipping_address)

        return Order(
            id=cast(UUID, model.id),
            buyer_id=cast(UUID, model.buyer_id),
            order_number=cast(str, model.order_number),
            items=items,
            status=OrderStatus(cast(str, model.status)),
            payment_method=PaymentMethod(cast(str, model.payment_method)),
            payment_status=PaymentStatus(cast(str, model.payment_status)),
            shipping_address=Address.from_dict(address_data) if address_data else None,
            subtotal=self._money(model.subtotal),
            shipping_fee=self._money(model.shipping_fee),
            total=self._money(model.total),
            tracking_number=cast(str | None, model.tracking_number),
            shipped_at=cast(datetime | None, model.shipped_at),
            delivered_at=cast(datetime | None, model.delivered_at),
            cancelled_at=cast(datetime | None, model.cancelled_at),
            cancellation_reason=cast(str | None, model.cancellation_reason),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, order: Order) -> OrderModel:
        """Convert entity to model."""
        model = OrderModel(
            id=order.id or generate_uuid(),
            order_number=order.order_number,
            buyer_id=order.buyer_id,
            status=order.status.value,
            subtotal=order.subtotal.amount,
            shipping_fee=order.shipping_fee.amount,
            total=order.total.amount,
            payment_method=order.payment_method.value,
            payment_status=order.payment_status.value,
            shipping_address=order.shipping_address.to_dict() if order.shipping_address else None,
            tracking_number=order.tracking_number,
        )
        model.items = [
            OrderItemModel(
                id=generate_uuid(),
                position=position,
                product_id=item.product_id,
                seller_id=item.seller_id,
                title=item.title,
                unit_price=item.unit_price.amount,
                quantity=item.quantity,
                variant=item.variant,
                subtotal=item.subtotal.amount,
            )
            for position, item in enumerate(order.items)
        ]
        return model
