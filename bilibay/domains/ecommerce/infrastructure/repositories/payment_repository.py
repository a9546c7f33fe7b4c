"""
Payment Repository Implementation

SQLAlchemy implementation of IPaymentRepository.
"""

import logging
from datetime import datetime
from decimal import Decimal
from typing import cast
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from bilibay.config.settings import get_settings
from bilibay.core.domain import Money, generate_uuid
from bilibay.domains.ecommerce.application.ports import IPaymentRepository
from bilibay.domains.ecommerce.domain.entities import Payment
from bilibay.domains.ecommerce.domain.value_objects import PaymentMethod, PaymentStatus
from bilibay.models.db.payments import Payment as PaymentModel

logger = logging.getLogger(__name__)


class SQLAlchemyPaymentRepository(IPaymentRepository):
    """SQLAlchemy implementation of payment repository."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.currency = get_settings().CURRENCY

    async def create(self, payment: Payment) -> Payment:
        model = PaymentModel(
            id=payment.id or generate_uuid(),
            order_id=payment.order_id,
            amount=payment.amount.amount,
            method=payment.method.value,
            status=payment.status.value,
            reference=payment.reference,
            receipt_image=payment.receipt_image,
        )
        self.session.add(model)
        await self.session.flush()
        return self._to_entity(model)

    async def get_by_id(self, payment_id: UUID) -> Payment | None:
        model = await self.session.get(PaymentModel, payment_id)
        return self._to_entity(model) if model else None

    async def get_by_order_id(self, order_id: UUID) -> Payment | None:
        result = await self.session.execute(select(PaymentModel).where(PaymentModel.order_id == order_id))
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def find(self, status: str | None = None, offset: int = 0, limit: int = 20) -> tuple[list[Payment], int]:
        """List payments, newest first."""
        conditions = [PaymentModel.status == status] if status else []
        total = await self.session.scalar(select(func.count()).select_from(PaymentModel).where(*conditions))
        result = await self.session.execute(
            select(PaymentModel)
            .where(*conditions)
            .order_by(PaymentModel.created_at.desc(), PaymentModel.id)
            .offset(offset)
            .limit(limit)
        )
        return [self._to_entity(m) for m in result.scalars().all()], total or 0

    async def update(self, payment: Payment) -> Payment:
        model = await self.session.get(PaymentModel, payment.id)
        if model is None:
            raise ValueError(f"Payment {payment.id} does not exist")
        model.status = payment.status.value
        model.failure_reason = payment.failure_reason
        model.verified_by = payment.verified_by
        model.verified_at = payment.verified_at
        await self.session.flush()
        logger.info(f"Payment {payment.id} is now {payment.status.value}")
        return self._to_entity(model)

    def _to_entity(self, model: PaymentModel) -> Payment:
        """Convert model to entity."""
        return Payment(
            id=cast(UUID, model.id),
            order_id=cast(UUID, model.order_id),
            amount=Money(amount=cast(Decimal, model.amount), currency=self.currency),
            method=PaymentMethod(cast(str, model.method)),
            status=PaymentStatus(cast(str, model.status)),
            reference=cast(str | None, model.reference),
            receipt_image=cast(str | None, model.receipt_image),
            failure_reason=cast(str | None, model.failure_reason),
            verified_by=cast(UUID | None, model.verified_by),
            verified_at=cast(datetime | None, model.verified_at),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
