"""
Marketplace API Schemas

Pydantic schemas for API request/response validation.
"""

from datetime import datetime
from decimal import Decimal
from typing import Annotated
from uuid import UUID

from pydantic import BaseModel, Field, PlainSerializer

from bilibay.models.auth import ShippingAddress

# Money leaves the API as a JSON number
Amount = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class PageResponse(BaseModel):
    """Common pagination envelope."""

    total: int
    page: int
    limit: int
    pages: int


# ==================== CATALOG ====================


class CategoryResponse(BaseModel):
    id: UUID
    name: str
    slug: str
    description: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class CategoryRequest(BaseModel):
    """Create/update category request schema."""

    name: str = Field(..., min_length=1, max_length=100)
    description: str | None = Field(None, max_length=1000)


class ProductResponse(BaseModel):
    """Product response schema."""

    id: UUID
    title: str
    description: str | None = None
    price: Amount
    currency: str
    stock: int
    status: str
    seller_id: UUID | None = None
    category_id: UUID | None = None
    images: list[str] = []
    variants: list[str] = []
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ProductPage(PageResponse):
    items: list[ProductResponse]


class ProductCreateRequest(BaseModel):
    """New listing; the seller comes from the token."""

    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field("", max_length=5000)
    price: Decimal = Field(..., ge=0, decimal_places=2)
    stock: int = Field(0, ge=0)
    category_id: UUID | None = None
    status: str = Field("available", description="draft, available or sold")
    images: list[str] = Field(default_factory=list)
    variants: list[str] = Field(default_factory=list)


class ProductUpdateRequest(BaseModel):
    """Partial product update; omitted fields are left unchanged."""

    title: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = Field(None, max_length=5000)
    price: Decimal | None = Field(None, ge=0, decimal_places=2)
    stock: int | None = Field(None, ge=0)
    category_id: UUID | None = None
    status: str | None = None
    images: list[str] | None = None
    variants: list[str] | None = None


# ==================== CART ====================


class CartItemResponse(BaseModel):
    id: UUID
    product_id: UUID
    product: ProductResponse | None = None
    quantity: int
    variant: str | None = None
    line_total: Amount


class CartResponse(BaseModel):
    id: UUID | None = None
    items: list[CartItemResponse]
    total: Amount


class AddToCartRequest(BaseModel):
    product_id: UUID
    quantity: int = Field(1, ge=1)
    variant: str | None = None


class UpdateCartItemRequest(BaseModel):
    quantity: int = Field(..., ge=1)


# ==================== ORDERS ====================


class OrderItemRequest(BaseModel):
    """Order item request schema."""

    product_id: UUID
    quantity: int = Field(..., ge=1)
    variant: str | None = None


class PlaceOrderRequest(BaseModel):
    """Checkout request; without items the buyer's cart is ordered."""

    items: list[OrderItemRequest] | None = None
    shipping_address: ShippingAddress | None = None
    payment_method: str = Field(..., description="cod or bank_transfer")
    payment_reference: str | None = Field(None, max_length=100)
    receipt_image: str | None = Field(None, max_length=500)


class CancelOrderRequest(BaseModel):
    reason: str | None = Field(None, max_length=500)


class OrderStatusUpdateRequest(BaseModel):
    status: str = Field(..., description="processing, shipped, delivered or cancelled")
    tracking_number: str | None = Field(None, max_length=100)
    reason: str | None = Field(None, max_length=500)


class OrderItemResponse(BaseModel):
    product_id: UUID
    seller_id: UUID
    title: str
    unit_price: Amount
    quantity: int
    variant: str | None = None
    subtotal: Amount


class PaymentResponse(BaseModel):
    id: UUID
    order_id: UUID | None = None
    amount: Amount
    currency: str
    method: str
    status: str
    reference: str | None = None
    receipt_image: str | None = None
    failure_reason: str | None = None
    verified_by: UUID | None = None
    verified_at: datetime | None = None
    created_at: datetime | None = None


class PaymentPage(PageResponse):
    items: list[PaymentResponse]


class OrderResponse(BaseModel):
    """Order response schema."""

    id: UUID
    order_number: str
    buyer_id: UUID | None = None
    status: str
    payment_method: str
    payment_status: str
    item_count: int
    subtotal: Amount
    shipping_fee: Amount
    total: Amount
    items: list[OrderItemResponse] = []
    shipping_address: ShippingAddress | None = None
    tracking_number: str | None = None
    shipped_at: datetime | None = None
    delivered_at: datetime | None = None
    cancelled_at: datetime | None = None
    cancellation_reason: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class OrderDetailResponse(OrderResponse):
    payment: PaymentResponse | None = None


class OrderPage(PageResponse):
    items: list[OrderResponse]


class RejectPaymentRequest(BaseModel):
    reason: str | None = Field(None, max_length=500)


# ==================== DASHBOARD ====================


class DashboardStatsResponse(BaseModel):
    total_orders: int
    total_sales: Amount
    total_users: int
    low_stock_products: list[ProductResponse]
    recent_orders: list[OrderResponse]
    pending_payments: list[PaymentResponse]
