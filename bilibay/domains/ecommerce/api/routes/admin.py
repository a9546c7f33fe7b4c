"""
Admin routes: categories, all orders, payment settlement, users and dashboard.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from bilibay.api.dependencies import get_user_service, require_admin
from bilibay.config.settings import get_settings
from bilibay.domains.ecommerce.api.dependencies import (
    get_category_detail_use_case,
    get_dashboard_stats_use_case,
    get_delete_category_use_case,
    get_list_categories_use_case,
    get_list_orders_use_case,
    get_list_payments_use_case,
    get_order_detail_use_case,
    get_reject_payment_use_case,
    get_save_category_use_case,
    get_update_order_status_use_case,
    get_verify_payment_use_case,
)
from bilibay.domains.ecommerce.api.schemas import (
    CategoryRequest,
    CategoryResponse,
    DashboardStatsResponse,
    OrderDetailResponse,
    OrderPage,
    OrderResponse,
    OrderStatusUpdateRequest,
    PaymentPage,
    PaymentResponse,
    RejectPaymentRequest,
)
from bilibay.domains.ecommerce.application import use_cases as uc
from bilibay.models.auth import User, UserPage, UserRole
from bilibay.models.db.user import UserDB
from bilibay.services.user_service import UserService, to_profile

settings = get_settings()

categories_router = APIRouter(dependencies=[Depends(require_admin)])
orders_router = APIRouter(dependencies=[Depends(require_admin)])
payments_router = APIRouter()
users_router = APIRouter()
dashboard_router = APIRouter(dependencies=[Depends(require_admin)])


# ==================== CATEGORIES ====================


@categories_router.get("/", response_model=list[CategoryResponse])
async def list_categories(
    use_case: uc.ListCategoriesUseCase = Depends(get_list_categories_use_case),  # noqa: B008
):
    return await use_case.execute()


@categories_router.post("/", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(
    request: CategoryRequest,
    use_case: uc.SaveCategoryUseCase = Depends(get_save_category_use_case),  # noqa: B008
):
    return await use_case.execute(uc.SaveCategoryRequest(name=request.name, description=request.description))


@categories_router.get("/{category_id}", response_model=CategoryResponse)
async def get_category(
    category_id: UUID,
    use_case: uc.GetCategoryUseCase = Depends(get_category_detail_use_case),  # noqa: B008
):
    return await use_case.execute(category_id)


@categories_router.put("/{category_id}", response_model=CategoryResponse)
async def update_category(
    category_id: UUID,
    request: CategoryRequest,
    use_case: uc.SaveCategoryUseCase = Depends(get_save_category_use_case),  # noqa: B008
):
    """Rename or re-describe a category; the slug follows the name."""
    return await use_case.execute(
        uc.SaveCategoryRequest(name=request.name, description=request.description, category_id=category_id)
    )


@categories_router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(
    category_id: UUID,
    use_case: uc.DeleteCategoryUseCase = Depends(get_delete_category_use_case),  # noqa: B008
):
    await use_case.execute(category_id)


# ==================== ORDERS ====================


@orders_router.get("/", response_model=OrderPage)
async def list_all_orders(
    status_filter: str | None = Query(None, alias="status"),
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    use_case: uc.ListOrdersUseCase = Depends(get_list_orders_use_case),  # noqa: B008
):
    result = await use_case.execute(uc.ListOrdersRequest(status=status_filter, page=page, limit=limit))
    return result.to_dict()


@orders_router.get("/{order_id}", response_model=OrderDetailResponse)
async def get_any_order(
    order_id: UUID,
    use_case: uc.GetOrderUseCase = Depends(get_order_detail_use_case),  # noqa: B008
):
    return await use_case.execute(uc.GetOrderRequest(order_id=order_id))


@orders_router.put("/{order_id}/status", response_model=OrderResponse)
async def update_order_status(
    order_id: UUID,
    request: OrderStatusUpdateRequest,
    use_case: uc.UpdateOrderStatusUseCase = Depends(get_update_order_status_use_case),  # noqa: B008
):
    """
    Move an order through its lifecycle.

    Cancelling here restores stock exactly like a buyer cancellation.
    """
    return await use_case.execute(
        uc.UpdateOrderStatusRequest(
            order_id=order_id,
            status=request.status,
            tracking_number=request.tracking_number,
            reason=request.reason,
        )
    )


# ==================== PAYMENTS ====================


@payments_router.get("/", response_model=PaymentPage, dependencies=[Depends(require_admin)])
async def list_payments(
    status_filter: str | None = Query(None, alias="status"),
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    use_case: uc.ListPaymentsUseCase = Depends(get_list_payments_use_case),  # noqa: B008
):
    result = await use_case.execute(uc.ListPaymentsRequest(status=status_filter, page=page, limit=limit))
    return result.to_dict()


@payments_router.put("/{payment_id}/verify", response_model=PaymentResponse)
async def verify_payment(
    payment_id: UUID,
    current_user: UserDB = Depends(require_admin),  # noqa: B008
    use_case: uc.VerifyPaymentUseCase = Depends(get_verify_payment_use_case),  # noqa: B008
):
    """Confirm a pending payment; the order is marked paid."""
    return await use_case.execute(uc.SettlePaymentRequest(payment_id=payment_id, admin_id=current_user.id))


@payments_router.put("/{payment_id}/reject", response_model=PaymentResponse)
async def reject_payment(
    payment_id: UUID,
    request: RejectPaymentRequest | None = None,
    current_user: UserDB = Depends(require_admin),  # noqa: B008
    use_case: uc.RejectPaymentUseCase = Depends(get_reject_payment_use_case),  # noqa: B008
):
    return await use_case.execute(
        uc.SettlePaymentRequest(
            payment_id=payment_id,
            admin_id=current_user.id,
            reason=request.reason if request else None,
        )
    )


# ==================== USERS ====================


@users_router.get("/", response_model=UserPage, dependencies=[Depends(require_admin)])
async def list_users(
    role: UserRole | None = None,
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    user_service: UserService = Depends(get_user_service),  # noqa: B008
):
    result = await user_service.list_users(role.value if role else None, page, limit)
    return result.to_dict()


@users_router.put("/{user_id}/toggle-status", response_model=User)
async def toggle_user_status(
    user_id: UUID,
    current_user: UserDB = Depends(require_admin),  # noqa: B008
    user_service: UserService = Depends(get_user_service),  # noqa: B008
):
    """Activate or deactivate an account. Admins cannot deactivate themselves."""
    user = await user_service.toggle_status(user_id, current_user.id)
    return to_profile(user)


# ==================== DASHBOARD ====================


@dashboard_router.get("/stats", response_model=DashboardStatsResponse)
async def get_dashboard_stats(
    use_case: uc.GetDashboardStatsUseCase = Depends(get_dashboard_stats_use_case),  # noqa: B008
):
    stats = await use_case.execute()
    return stats.to_dict()


__all__ = [
    "categories_router",
    "orders_router",
    "payments_router",
    "users_router",
    "dashboard_router",
]
