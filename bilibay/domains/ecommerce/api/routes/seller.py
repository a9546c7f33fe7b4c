"""
Seller marketplace routes: own listings and orders containing own products.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from bilibay.api.dependencies import require_seller
from bilibay.config.settings import get_settings
from bilibay.domains.ecommerce.api.dependencies import (
    get_create_product_use_case,
    get_delete_product_use_case,
    get_list_orders_use_case,
    get_list_seller_products_use_case,
    get_order_detail_use_case,
    get_update_order_status_use_case,
    get_update_product_use_case,
)
from bilibay.domains.ecommerce.api.schemas import (
    OrderDetailResponse,
    OrderPage,
    OrderResponse,
    OrderStatusUpdateRequest,
    ProductCreateRequest,
    ProductPage,
    ProductResponse,
    ProductUpdateRequest,
)
from bilibay.domains.ecommerce.application import use_cases as uc
from bilibay.models.db.user import UserDB

settings = get_settings()

products_router = APIRouter()
orders_router = APIRouter()


# ==================== PRODUCTS ====================


@products_router.get("/", response_model=ProductPage)
async def list_my_products(
    status_filter: str | None = Query(None, alias="status"),
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    current_user: UserDB = Depends(require_seller),  # noqa: B008
    use_case: uc.ListSellerProductsUseCase = Depends(get_list_seller_products_use_case),  # noqa: B008
):
    """List the seller's own products, drafts included."""
    result = await use_case.execute(
        uc.ListSellerProductsRequest(seller_id=current_user.id, status=status_filter, page=page, limit=limit)
    )
    return result.to_dict()


@products_router.post("/", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
async def create_product(
    request: ProductCreateRequest,
    current_user: UserDB = Depends(require_seller),  # noqa: B008
    use_case: uc.CreateProductUseCase = Depends(get_create_product_use_case),  # noqa: B008
):
    return await use_case.execute(
        uc.CreateProductRequest(
            seller_id=current_user.id,
            title=request.title,
            description=request.description,
            price=request.price,
            stock=request.stock,
            category_id=request.category_id,
            status=request.status,
            images=request.images,
            variants=request.variants,
            currency=settings.CURRENCY,
        )
    )


@products_router.put("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: UUID,
    request: ProductUpdateRequest,
    current_user: UserDB = Depends(require_seller),  # noqa: B008
    use_case: uc.UpdateProductUseCase = Depends(get_update_product_use_case),  # noqa: B008
):
    """
    Update one of the seller's products.

    Stock changes keep the status in step: 0 marks the product sold,
    restocking a sold product makes it available again.
    """
    return await use_case.execute(
        uc.UpdateProductRequest(
            product_id=product_id,
            seller_id=current_user.id,
            **request.model_dump(exclude_unset=True),
        )
    )


@products_router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_product(
    product_id: UUID,
    current_user: UserDB = Depends(require_seller),  # noqa: B008
    use_case: uc.DeleteProductUseCase = Depends(get_delete_product_use_case),  # noqa: B008
):
    await use_case.execute(product_id, current_user.id)


# ==================== ORDERS ====================


@orders_router.get("/", response_model=OrderPage)
async def list_seller_orders(
    status_filter: str | None = Query(None, alias="status"),
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    current_user: UserDB = Depends(require_seller),  # noqa: B008
    use_case: uc.ListOrdersUseCase = Depends(get_list_orders_use_case),  # noqa: B008
):
    """List orders containing at least one of the seller's products."""
    result = await use_case.execute(
        uc.ListOrdersRequest(seller_id=current_user.id, status=status_filter, page=page, limit=limit)
    )
    return result.to_dict()


@orders_router.get("/{order_id}", response_model=OrderDetailResponse)
async def get_seller_order(
    order_id: UUID,
    current_user: UserDB = Depends(require_seller),  # noqa: B008
    use_case: uc.GetOrderUseCase = Depends(get_order_detail_use_case),  # noqa: B008
):
    return await use_case.execute(uc.GetOrderRequest(order_id=order_id, seller_id=current_user.id))


@orders_router.put("/{order_id}/status", response_model=OrderResponse)
async def update_seller_order_status(
    order_id: UUID,
    request: OrderStatusUpdateRequest,
    current_user: UserDB = Depends(require_seller),  # noqa: B008
    use_case: uc.UpdateOrderStatusUseCase = Depends(get_update_order_status_use_case),  # noqa: B008
):
    return await use_case.execute(
        uc.UpdateOrderStatusRequest(
            order_id=order_id,
            status=request.status,
            tracking_number=request.tracking_number,
            reason=request.reason,
            seller_id=current_user.id,
        )
    )


__all__ = ["products_router", "orders_router"]
