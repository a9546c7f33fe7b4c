"""
Payment Verification Use Cases (admin)

Payments are settled by hand: an admin checks the bank transfer (or the
cash collected on delivery) and verifies or rejects the record. The
order's ``payment_status`` always mirrors the payment.
"""

import logging
from dataclasses import dataclass
from typing import Any
from uuid import UUID

from bilibay.core.domain import EntityNotFoundException
from bilibay.core.shared import Page, page_offset
from bilibay.database.unit_of_work import IUnitOfWork
from bilibay.domains.ecommerce.application.ports import IOrderRepository, IPaymentRepository

logger = logging.getLogger(__name__)


@dataclass
class ListPaymentsRequest:
    status: str | None = None
    page: int = 1
    limit: int = 20


@dataclass
class SettlePaymentRequest:
    payment_id: UUID
    admin_id: UUID
    reason: str | None = None


class ListPaymentsUseCase:
    def __init__(self, payment_repository: IPaymentRepository):
        self.payment_repository = payment_repository

    async def execute(self, request: ListPaymentsRequest) -> Page:
        payments, total = await self.payment_repository.find(
            request.status, page_offset(request.page, request.limit), request.limit
        )
        return Page(items=[p.to_dict() for p in payments], total=total, page=request.page, limit=request.limit)


class VerifyPaymentUseCase:
    """
    Use Case: Verify Payment

    pending -> paid. Refused for settled payments and cancelled orders.
    """

    def __init__(self, payment_repository: IPaymentRepository, order_repository: IOrderRepository, uow: IUnitOfWork):
        self.payment_repository = payment_repository
        self.order_repository = order_repository
        self.uow = uow

    async def execute(self, request: SettlePaymentRequest) -> dict[str, Any]:
        payment = await self.payment_repository.get_by_id(request.payment_id)
        if payment is None:
            raise EntityNotFoundException("Payment", request.payment_id)
        order = await self.order_repository.get_by_id(payment.order_id)  # type: ignore[arg-type]
        if order is None:
            raise EntityNotFoundException("Order", payment.order_id)

        order.mark_paid()
        payment.verify(request.admin_id)

        try:
            saved = await self.payment_repository.update(payment)
            await self.order_repository.update(order)
            await self.uow.commit()
        except Exception:
            await self.uow.rollback()
            raise

        logger.info(f"Payment {payment.id} for order {order.order_number} verified by {request.admin_id}")
        return saved.to_dict()


class RejectPaymentUseCase:
    """Use Case: Reject Payment (pending -> failed)."""

    def __init__(self, payment_repository: IPaymentRepository, order_repository: IOrderRepository, uow: IUnitOfWork):
        self.payment_repository = payment_repository
        self.order_repository = order_repository
        self.uow = uow

    async def execute(self, request: SettlePaymentRequest) -> dict[str, Any]:
        payment = await self.payment_repository.get_by_id(request.payment_id)
        if payment is None:
            raise EntityNotFoundException("Payment", request.payment_id)

        payment.reject(request.admin_id, request.reason)
        order = await self.order_repository.get_by_id(payment.order_id)  # type: ignore[arg-type]

        try:
            saved = await self.payment_repository.update(payment)
            if order is not None:
                order.mark_payment_failed()
                await self.order_repository.update(order)
            await self.uow.commit()
        except Exception:
            await self.uow.rollback()
            raise

        logger.info(f"Payment {payment.id} rejected by {request.admin_id}: {request.reason or 'no reason given'}")
        return saved.to_dict()


__all__ = [
    "ListPaymentsRequest",
    "SettlePaymentRequest",
    "ListPaymentsUseCase",
    "VerifyPaymentUseCase",
    "RejectPaymentUseCase",
]
