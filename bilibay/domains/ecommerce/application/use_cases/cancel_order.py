"""
Cancel Order Use Case

Cancelling is the compensating step of order placement: every unit taken
at checkout goes back on the shelf and an unsettled payment is failed.
"""

import logging
from dataclasses import dataclass
from typing import Any
from uuid import UUID

from bilibay.core.domain import EntityNotFoundException
from bilibay.database.unit_of_work import IUnitOfWork
from bilibay.domains.ecommerce.application.ports import IOrderRepository, IPaymentRepository, IProductRepository
from bilibay.domains.ecommerce.domain.entities import Order

logger = logging.getLogger(__name__)


@dataclass
class CancelOrderRequest:
    order_id: UUID
    buyer_id: UUID
    reason: str | None = None


async def release_order(
    order: Order,
    product_repository: IProductRepository,
    payment_repository: IPaymentRepository,
    reason: str | None = None,
) -> None:
    """
    Undo the side effects of a placed order once it has been cancelled.

    Restores stock for every line (sold products become available again)
    and fails the payment if it was still pending.
    """
    for product_id, quantity in order.quantities_by_product().items():
        await product_repository.restore_stock(product_id, quantity)

    payment = await payment_repository.get_by_order_id(order.id)  # type: ignore[arg-type]
    if payment is not None:
        payment.fail(reason or "Order cancelled")
        await payment_repository.update(payment)


class CancelOrderUseCase:
    """
    Use Case: Cancel Order (buyer)

    Only possible while the order is pending or processing.
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

    async def execute(self, request: CancelOrderRequest) -> dict[str, Any]:
        """
        Cancel the buyer's own order.

        Raises:
            EntityNotFoundException: Unknown order or another buyer's order
            InvalidOperationException: Order already shipped, delivered or cancelled
        """
        order = await self.order_repository.get_by_id(request.order_id)
        if order is None or order.buyer_id != request.buyer_id:
            raise EntityNotFoundException("Order", request.order_id)

        order.cancel(request.reason)

        try:
            updated = await self.order_repository.update(order)
            await release_order(order, self.product_repository, self.payment_repository, request.reason)
            await self.uow.commit()
        except Exception:
            await self.uow.rollback()
            raise

        logger.info(f"Order {order.order_number} cancelled by buyer {request.buyer_id}")
        return updated.to_detail_dict()


__all__ = ["CancelOrderRequest", "CancelOrderUseCase", "release_order"]
