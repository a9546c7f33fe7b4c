"""
Marketplace API Dependencies

FastAPI dependencies for the marketplace domain. Every use case is bound
to the request's database session.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from bilibay.core.container import get_container
from bilibay.database.async_db import get_async_db
from bilibay.domains.ecommerce.application.use_cases import (
    AddToCartUseCase,
    BrowseProductsUseCase,
    CancelOrderUseCase,
    ClearCartUseCase,
    CreateProductUseCase,
    DeleteCategoryUseCase,
    DeleteProductUseCase,
    GetCartUseCase,
    GetCategoryUseCase,
    GetDashboardStatsUseCase,
    GetOrderUseCase,
    GetProductUseCase,
    ListCategoriesUseCase,
    ListOrdersUseCase,
    ListPaymentsUseCase,
    ListSellerProductsUseCase,
    PlaceOrderUseCase,
    RejectPaymentUseCase,
    RemoveCartItemUseCase,
    SaveCategoryUseCase,
    UpdateCartItemUseCase,
    UpdateOrderStatusUseCase,
    UpdateProductUseCase,
    VerifyPaymentUseCase,
)


def get_browse_products_use_case(db: AsyncSession = Depends(get_async_db)) -> BrowseProductsUseCase:  # noqa: B008
    """Get BrowseProductsUseCase instance."""
    return get_container().create_browse_products_use_case(db)


def get_product_detail_use_case(db: AsyncSession = Depends(get_async_db)) -> GetProductUseCase:  # noqa: B008
    """Get GetProductUseCase instance."""
    return get_container().create_get_product_use_case(db)


def get_list_categories_use_case(db: AsyncSession = Depends(get_async_db)) -> ListCategoriesUseCase:  # noqa: B008
    """Get ListCategoriesUseCase instance."""
    return get_container().create_list_categories_use_case(db)


def get_list_seller_products_use_case(db: AsyncSession = Depends(get_async_db)) -> ListSellerProductsUseCase:  # noqa: B008
    """Get ListSellerProductsUseCase instance."""
    return get_container().create_list_seller_products_use_case(db)


def get_create_product_use_case(db: AsyncSession = Depends(get_async_db)) -> CreateProductUseCase:  # noqa: B008
    """Get CreateProductUseCase instance."""
    return get_container().create_create_product_use_case(db)


def get_update_product_use_case(db: AsyncSession = Depends(get_async_db)) -> UpdateProductUseCase:  # noqa: B008
    """Get UpdateProductUseCase instance."""
    return get_container().create_update_product_use_case(db)


def get_delete_product_use_case(db: AsyncSession = Depends(get_async_db)) -> DeleteProductUseCase:  # noqa: B008
    """Get DeleteProductUseCase instance."""
    return get_container().create_delete_product_use_case(db)


def get_category_detail_use_case(db: AsyncSession = Depends(get_async_db)) -> GetCategoryUseCase:  # noqa: B008
    """Get GetCategoryUseCase instance."""
    return get_container().create_get_category_use_case(db)


def get_save_category_use_case(db: AsyncSession = Depends(get_async_db)) -> SaveCategoryUseCase:  # noqa: B008
    """Get SaveCategoryUseCase instance."""
    return get_container().create_save_category_use_case(db)


def get_delete_category_use_case(db: AsyncSession = Depends(get_async_db)) -> DeleteCategoryUseCase:  # noqa: B008
    """Get DeleteCategoryUseCase instance."""
    return get_container().create_delete_category_use_case(db)


def get_cart_use_case(db: AsyncSession = Depends(get_async_db)) -> GetCartUseCase:  # noqa: B008
    """Get GetCartUseCase instance."""
    return get_container().create_get_cart_use_case(db)


def get_add_to_cart_use_case(db: AsyncSession = Depends(get_async_db)) -> AddToCartUseCase:  # noqa: B008
    """Get AddToCartUseCase instance."""
    return get_container().create_add_to_cart_use_case(db)


def get_update_cart_item_use_case(db: AsyncSession = Depends(get_async_db)) -> UpdateCartItemUseCase:  # noqa: B008
    """Get UpdateCartItemUseCase instance."""
    return get_container().create_update_cart_item_use_case(db)


def get_remove_cart_item_use_case(db: AsyncSession = Depends(get_async_db)) -> RemoveCartItemUseCase:  # noqa: B008
    """Get RemoveCartItemUseCase instance."""
    return get_container().create_remove_cart_item_use_case(db)


def get_clear_cart_use_case(db: AsyncSession = Depends(get_async_db)) -> ClearCartUseCase:  # noqa: B008
    """Get ClearCartUseCase instance."""
    return get_container().create_clear_cart_use_case(db)


def get_place_order_use_case(db: AsyncSession = Depends(get_async_db)) -> PlaceOrderUseCase:  # noqa: B008
    """Get PlaceOrderUseCase instance."""
    return get_container().create_place_order_use_case(db)


def get_cancel_order_use_case(db: AsyncSession = Depends(get_async_db)) -> CancelOrderUseCase:  # noqa: B008
    """Get CancelOrderUseCase instance."""
    return get_container().create_cancel_order_use_case(db)


def get_update_order_status_use_case(db: AsyncSession = Depends(get_async_db)) -> UpdateOrderStatusUseCase:  # noqa: B008
    """Get UpdateOrderStatusUseCase instance."""
    return get_container().create_update_order_status_use_case(db)


def get_list_orders_use_case(db: AsyncSession = Depends(get_async_db)) -> ListOrdersUseCase:  # noqa: B008
    """Get ListOrdersUseCase instance."""
    return get_container().create_list_orders_use_case(db)


def get_order_detail_use_case(db: AsyncSession = Depends(get_async_db)) -> GetOrderUseCase:  # noqa: B008
    """Get GetOrderUseCase instance."""
    return get_container().create_get_order_use_case(db)


def get_list_payments_use_case(db: AsyncSession = Depends(get_async_db)) -> ListPaymentsUseCase:  # noqa: B008
    """Get ListPaymentsUseCase instance."""
    return get_container().create_list_payments_use_case(db)


def get_verify_payment_use_case(db: AsyncSession = Depends(get_async_db)) -> VerifyPaymentUseCase:  # noqa: B008
    """Get VerifyPaymentUseCase instance."""
    return get_container().create_verify_payment_use_case(db)


def get_reject_payment_use_case(db: AsyncSession = Depends(get_async_db)) -> RejectPaymentUseCase:  # noqa: B008
    """Get RejectPaymentUseCase instance."""
    return get_container().create_reject_payment_use_case(db)


def get_dashboard_stats_use_case(db: AsyncSession = Depends(get_async_db)) -> GetDashboardStatsUseCase:  # noqa: B008
    """Get GetDashboardStatsUseCase instance."""
    return get_container().create_dashboard_stats_use_case(db)


__all__ = [
    "get_browse_products_use_case",
    "get_product_detail_use_case",
    "get_list_categories_use_case",
    "get_list_seller_products_use_case",
    "get_create_product_use_case",
    "get_update_product_use_case",
    "get_delete_product_use_case",
    "get_category_detail_use_case",
    "get_save_category_use_case",
    "get_delete_category_use_case",
    "get_cart_use_case",
    "get_add_to_cart_use_case",
    "get_update_cart_item_use_case",
    "get_remove_cart_item_use_case",
    "get_clear_cart_use_case",
    "get_place_order_use_case",
    "get_cancel_order_use_case",
    "get_update_order_status_use_case",
    "get_list_orders_use_case",
    "get_order_detail_use_case",
    "get_list_payments_use_case",
    "get_verify_payment_use_case",
    "get_reject_payment_use_case",
    "get_dashboard_stats_use_case",
]
