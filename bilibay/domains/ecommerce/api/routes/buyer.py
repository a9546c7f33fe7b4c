"""
Buyer-facing marketplace routes: public catalog, cart and orders.
"""

from decimal import Decimal
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from bilibay.api.dependencies import require_buyer
from bilibay.config.settings import get_settings
from bilibay.domains.ecommerce.api.dependencies import (
    get_add_to_cart_use_case,
    get_browse_products_use_case,
    get_cancel_order_use_case,
    get_cart_use_case,
    get_clear_cart_use_case,
    get_list_categories_use_case,
    get_list_orders_use_case,
    get_order_detail_use_case,
    get_place_order_use_case,
    get_product_detail_use_case,
    get_remove_cart_item_use_case,
    get_update_cart_item_use_case,
)
from bilibay.domains.ecommerce.api.schemas import (
    AddToCartRequest,
    CancelOrderRequest,
    CartResponse,
    CategoryResponse,
    OrderDetailResponse,
    OrderPage,
    OrderResponse,
    PlaceOrderRequest,
    ProductPage,
    ProductResponse,
    UpdateCartItemRequest,
)
from bilibay.domains.ecommerce.application import use_cases as uc
from bilibay.models.db.user import UserDB

settings = get_settings()

products_router = APIRouter()
cart_router = APIRouter()
orders_router = APIRouter()


# ==================== CATALOG (public) ====================


@products_router.get("/", response_model=ProductPage)
async def browse_products(
    search: str | None = Query(None, max_length=200),
    category: str | None = Query(None, description="Category id or slug"),
    min_price: Decimal | None = Query(None, ge=0),
    max_price: Decimal | None = Query(None, ge=0),
    in_stock: bool = False,
    sort_by: str = Query("newest", description="newest, price_asc, price_desc or title"),
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    use_case: uc.BrowseProductsUseCase = Depends(get_browse_products_use_case),  # noqa: B008
):
    """Browse available products with filters, sorting and pagination."""
    result = await use_case.execute(
        uc.BrowseProductsRequest(
            search=search,
            category=category,
            min_price=min_price,
            max_price=max_price,
            in_stock=in_stock,
            sort_by=sort_by,
            page=page,
            limit=limit,
        )
    )
    return result.to_dict()


@products_router.get("/categories", response_model=list[CategoryResponse])
async def list_categories(
    use_case: uc.ListCategoriesUseCase = Depends(get_list_categories_use_case),  # noqa: B008
):
    return await use_case.execute()


@products_router.get("/{product_id}", response_model=ProductResponse)
async def get_product(
    product_id: UUID,
    use_case: uc.GetProductUseCase = Depends(get_product_detail_use_case),  # noqa: B008
):
    """Get product by ID."""
    return await use_case.execute(product_id)


# ==================== CART ====================


@cart_router.get("/", response_model=CartResponse)
async def get_cart(
    current_user: UserDB = Depends(require_buyer),  # noqa: B008
    use_case: uc.GetCartUseCase = Depends(get_cart_use_case),  # noqa: B008
):
    return await use_case.execute(current_user.id)


@cart_router.post("/", response_model=CartResponse)
async def add_to_cart(
    request: AddToCartRequest,
    current_user: UserDB = Depends(require_buyer),  # noqa: B008
    use_case: uc.AddToCartUseCase = Depends(get_add_to_cart_use_case),  # noqa: B008
):
    """
    Add a product to the cart.

    A line for the same product and variant has its quantity increased.
    """
    return await use_case.execute(
        uc.AddToCartRequest(
            user_id=current_user.id,
            product_id=request.product_id,
            quantity=request.quantity,
            variant=request.variant,
        )
    )


@cart_router.put("/{item_id}", response_model=CartResponse)
async def update_cart_item(
    item_id: UUID,
    request: UpdateCartItemRequest,
    current_user: UserDB = Depends(require_buyer),  # noqa: B008
    use_case: uc.UpdateCartItemUseCase = Depends(get_update_cart_item_use_case),  # noqa: B008
):
    return await use_case.execute(
        uc.UpdateCartItemRequest(user_id=current_user.id, item_id=item_id, quantity=request.quantity)
    )


@cart_router.delete("/{item_id}", response_model=CartResponse)
async def remove_cart_item(
    item_id: UUID,
    current_user: UserDB = Depends(require_buyer),  # noqa: B008
    use_case: uc.RemoveCartItemUseCase = Depends(get_remove_cart_item_use_case),  # noqa: B008
):
    return await use_case.execute(current_user.id, item_id)


@cart_router.delete("/", response_model=CartResponse)
async def clear_cart(
    current_user: UserDB = Depends(require_buyer),  # noqa: B008
    use_case: uc.ClearCartUseCase = Depends(get_clear_cart_use_case),  # noqa: B008
):
    return await use_case.execute(current_user.id)


# ==================== ORDERS ====================


@orders_router.post("/", response_model=OrderDetailResponse, status_code=status.HTTP_201_CREATED)
async def place_order(
    request: PlaceOrderRequest,
    current_user: UserDB = Depends(require_buyer),  # noqa: B008
    use_case: uc.PlaceOrderUseCase = Depends(get_place_order_use_case),  # noqa: B008
):
    """
    Place an order from the given items, or from the cart when none are given.

    Stock is reserved and a pending payment is recorded in the same transaction.
    """
    items = None
    if request.items:
        items = [
            uc.OrderLineInput(product_id=line.product_id, quantity=line.quantity, variant=line.variant)
            for line in request.items
        ]
    result = await use_case.execute(
        uc.PlaceOrderRequest(
            buyer_id=current_user.id,
            payment_method=request.payment_method,
            items=items,
            shipping_address=request.shipping_address.model_dump() if request.shipping_address else None,
            default_shipping_address=current_user.default_shipping_address,
            payment_reference=request.payment_reference,
            receipt_image=request.receipt_image,
        )
    )
    return result.to_dict()


@orders_router.get("/", response_model=OrderPage)
async def list_my_orders(
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    current_user: UserDB = Depends(require_buyer),  # noqa: B008
    use_case: uc.ListOrdersUseCase = Depends(get_list_orders_use_case),  # noqa: B008
):
    result = await use_case.execute(uc.ListOrdersRequest(buyer_id=current_user.id, page=page, limit=limit))
    return result.to_dict()


@orders_router.get("/{order_id}", response_model=OrderDetailResponse)
async def get_my_order(
    order_id: UUID,
    current_user: UserDB = Depends(require_buyer),  # noqa: B008
    use_case: uc.GetOrderUseCase = Depends(get_order_detail_use_case),  # noqa: B008
):
    return await use_case.execute(uc.GetOrderRequest(order_id=order_id, buyer_id=current_user.id))


@orders_router.post("/{order_id}/cancel", response_model=OrderResponse)
async def cancel_order(
    order_id: UUID,
    request: CancelOrderRequest | None = None,
    current_user: UserDB = Depends(require_buyer),  # noqa: B008
    use_case: uc.CancelOrderUseCase = Depends(get_cancel_order_use_case),  # noqa: B008
):
    """Cancel a pending or processing order and put its stock back."""
    return await use_case.execute(
        uc.CancelOrderRequest(
            order_id=order_id,
            buyer_id=current_user.id,
            reason=request.reason if request else None,
        )
    )


__all__ = ["products_router", "cart_router", "orders_router"]
