"""
Dashboard Statistics Use Case (admin)
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from bilibay.domains.ecommerce.application.ports import (
    IOrderRepository,
    IPaymentRepository,
    IProductRepository,
    IUserCounter,
)
from bilibay.domains.ecommerce.domain.value_objects import PaymentStatus

RECENT_LIMIT = 10


@dataclass
class DashboardStats:
    total_orders: int
    total_sales: Decimal
    total_users: int
    low_stock_products: list[dict[str, Any]] = field(default_factory=list)
    recent_orders: list[dict[str, Any]] = field(default_factory=list)
    pending_payments: list[dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_orders": self.total_orders,
            "total_sales": self.total_sales,
            "total_users": self.total_users,
            "low_stock_products": self.low_stock_products,
            "recent_orders": self.recent_orders,
            "pending_payments": self.pending_payments,
        }


class GetDashboardStatsUseCase:
    """Use case for the admin overview: counts, paid sales and what needs attention."""

    def __init__(
        self,
        order_repository: IOrderRepository,
        product_repository: IProductRepository,
        payment_repository: IPaymentRepository,
        user_counter: IUserCounter,
        low_stock_threshold: int = 10,
    ):
        self.order_repository = order_repository
        self.product_repository = product_repository
        self.payment_repository = payment_repository
        self.user_counter = user_counter
        self.low_stock_threshold = low_stock_threshold

    async def execute(self) -> DashboardStats:
        recent_orders, total_orders = await self.order_repository.find(limit=RECENT_LIMIT)
        pending, _ = await self.payment_repository.find(status=PaymentStatus.PENDING.value, limit=RECENT_LIMIT)
        low_stock = await self.product_repository.get_low_stock(self.low_stock_threshold)

        return DashboardStats(
            total_orders=total_orders,
            total_sales=await self.order_repository.total_paid_sales(),
            total_users=await self.user_counter.count(),
            low_stock_products=[p.to_dict() for p in low_stock],
            recent_orders=[o.to_summary_dict() for o in recent_orders],
            pending_payments=[p.to_dict() for p in pending],
        )


__all__ = ["DashboardStats", "GetDashboardStatsUseCase"]
