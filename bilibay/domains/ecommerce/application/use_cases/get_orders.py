"""
Order Query Use Cases

Read access to orders for buyers, sellers and admins.
"""

from dataclasses import dataclass
from typing import Any
from uuid import UUID

from bilibay.core.domain import EntityNotFoundException
from bilibay.core.shared import Page, page_offset
from bilibay.domains.ecommerce.application.ports import IOrderRepository, IPaymentRepository


@dataclass
class ListOrdersRequest:
    """
    Listing scope: a buyer's orders, a seller's orders or (neither set) all orders.
    """

    buyer_id: UUID | None = None
    seller_id: UUID | None = None
    status: str | None = None
    page: int = 1
    limit: int = 20


@dataclass
class GetOrderRequest:
    order_id: UUID
    buyer_id: UUID | None = None
    seller_id: UUID | None = None


class ListOrdersUseCase:
    """Use case for paginated order listings, newest first."""

    def __init__(self, order_repository: IOrderRepository):
        self.order_repository = order_repository

    async def execute(self, request: ListOrdersRequest) -> Page:
        offset = page_offset(request.page, request.limit)
        if request.buyer_id is not None:
            orders, total = await self.order_repository.get_by_buyer(request.buyer_id, offset, request.limit)
        elif request.seller_id is not None:
            orders, total = await self.order_repository.get_by_seller(
                request.seller_id, request.status, offset, request.limit
            )
        else:
            orders, total = await self.order_repository.find(request.status, offset, request.limit)

        return Page(
            items=[o.to_detail_dict() for o in orders],
            total=total,
            page=request.page,
            limit=request.limit,
        )


class GetOrderUseCase:
    """Use case for one order, with its payment, within the caller's scope."""

    def __init__(self, order_repository: IOrderRepository, payment_repository: IPaymentRepository):
        self.order_repository = order_repository
        self.payment_repository = payment_repository

    async def execute(self, request: GetOrderRequest) -> dict[str, Any]:
        order = await self.order_repository.get_by_id(request.order_id)
        if (
            order is None
            or (request.buyer_id is not None and order.buyer_id != request.buyer_id)
            or (request.seller_id is not None and not order.contains_seller(request.seller_id))
        ):
            raise EntityNotFoundException("Order", request.order_id)

        payment = await self.payment_repository.get_by_order_id(request.order_id)
        return {**order.to_detail_dict(), "payment": payment.to_dict() if payment else None}


__all__ = ["ListOrdersRequest", "GetOrderRequest", "ListOrdersUseCase", "GetOrderUseCase"]
