"""
Marketplace Use Cases

Business use cases for the marketplace domain.
Each use case represents a single business operation.
"""

from .browse_catalog import (
    BrowseProductsRequest,
    BrowseProductsUseCase,
    GetProductUseCase,
    ListCategoriesUseCase,
)
from .cancel_order import CancelOrderRequest, CancelOrderUseCase, release_order
from .dashboard_stats import DashboardStats, GetDashboardStatsUseCase
from .get_orders import GetOrderRequest, GetOrderUseCase, ListOrdersRequest, ListOrdersUseCase
from .manage_cart import (
    AddToCartRequest,
    AddToCartUseCase,
    ClearCartUseCase,
    GetCartUseCase,
    RemoveCartItemUseCase,
    UpdateCartItemRequest,
    UpdateCartItemUseCase,
)
from .manage_categories import (
    DeleteCategoryUseCase,
    GetCategoryUseCase,
    SaveCategoryRequest,
    SaveCategoryUseCase,
)
from .manage_payments import (
    ListPaymentsRequest,
    ListPaymentsUseCase,
    RejectPaymentUseCase,
    SettlePaymentRequest,
    VerifyPaymentUseCase,
)
from .manage_products import (
    CreateProductRequest,
    CreateProductUseCase,
    DeleteProductUseCase,
    ListSellerProductsRequest,
    ListSellerProductsUseCase,
    UpdateProductRequest,
    UpdateProductUseCase,
)
from .place_order import OrderLineInput, PlaceOrderRequest, PlaceOrderResponse, PlaceOrderUseCase
from .update_order_status import UpdateOrderStatusRequest, UpdateOrderStatusUseCase

__all__ = [
    # Catalog
    "BrowseProductsRequest",
    "BrowseProductsUseCase",
    "GetProductUseCase",
    "ListCategoriesUseCase",
    # Seller products
    "ListSellerProductsRequest",
    "ListSellerProductsUseCase",
    "CreateProductRequest",
    "CreateProductUseCase",
    "UpdateProductRequest",
    "UpdateProductUseCase",
    "DeleteProductUseCase",
    # Categories
    "SaveCategoryRequest",
    "GetCategoryUseCase",
    "SaveCategoryUseCase",
    "DeleteCategoryUseCase",
    # Cart
    "AddToCartRequest",
    "UpdateCartItemRequest",
    "GetCartUseCase",
    "AddToCartUseCase",
    "UpdateCartItemUseCase",
    "RemoveCartItemUseCase",
    "ClearCartUseCase",
    # Orders
    "OrderLineInput",
    "PlaceOrderRequest",
    "PlaceOrderResponse",
    "PlaceOrderUseCase",
    "CancelOrderRequest",
    "CancelOrderUseCase",
    "release_order",
    "UpdateOrderStatusRequest",
    "UpdateOrderStatusUseCase",
    "ListOrdersRequest",
    "GetOrderRequest",
    "ListOrdersUseCase",
    "GetOrderUseCase",
    # Payments
    "ListPaymentsRequest",
    "SettlePaymentRequest",
    "ListPaymentsUseCase",
    "VerifyPaymentUseCase",
    "RejectPaymentUseCase",
    # Dashboard
    "DashboardStats",
    "GetDashboardStatsUseCase",
]
