"""
Update Order Status Use Case

Fulfilment transitions driven by sellers and admins.
"""

import logging
from dataclasses import dataclass
from typing import Any
from uuid import UUID

from bilibay.core.domain import EntityNotFoundException, ValidationException
from bilibay.database.unit_of_work import IUnitOfWork
from bilibay.domains.ecommerce.application.ports import IOrderRepository, IPaymentRepository, IProductRepository
from bilibay.domains.ecommerce.domain.value_objects import OrderStatus

from .cancel_order import release_order

logger = logging.getLogger(__name__)


@dataclass
class UpdateOrderStatusRequest:
    """
    Request for a status change.

    ``seller_id`` restricts the change to orders containing that seller's
    products; admins leave it unset.
    """

    order_id: UUID
    status: str
    tracking_number: str | None = None
    reason: str | None = None
    seller_id: UUID | None = None


class UpdateOrderStatusUseCase:
    """
    Use Case: Update Order Status

    pending -> processing -> shipped -> delivered, and cancellation before
    shipping (which releases stock like a buyer cancellation).
    """

    def __init__(
        self,
        order_repository: IOrderRepository,
        product_repository: IProductRepository,
        payment_repository: IPaymentRepository,
        uow: IUnitOfWork,
    ):
        self.order_repository = order_repository
        self.product_repository = product_repository
        self.payment_repository = payment_repository
        self.uow = uow

    async def execute(self, request: UpdateOrderStatusRequest) -> dict[str, Any]:
        try:
            new_status = OrderStatus.from_string(request.status)
        except ValueError as e:
            raise ValidationException(str(e), field="status") from e

        order = await self.order_repository.get_by_id(request.order_id)
        if order is None or (request.seller_id is not None and not order.contains_seller(request.seller_id)):
            raise EntityNotFoundException("Order", request.order_id)

        previous = order.status
        order.transition_to(new_status, tracking_number=request.tracking_number, reason=request.reason)

        try:
            updated = await self.order_repository.update(order)
            if new_status == OrderStatus.CANCELLED:
                await release_order(order, self.product_repository, self.payment_repository, request.reason)
            await self.uow.commit()
        except Exception:
            await self.uow.rollback()
            raise

        actor = f"seller {request.seller_id}" if request.seller_id else "admin"
        logger.info(f"Order {order.order_number}: {previous.value} -> {new_status.value} by {actor}")
        return updated.to_detail_dict()


__all__ = ["UpdateOrderStatusRequest", "UpdateOrderStatusUseCase"]
