from fastapi import APIRouter

from bilibay.api.routes import auth, profile
from bilibay.domains.ecommerce.api.routes import admin, buyer, seller

api_router = APIRouter()

# API routes (all have /api/v1 prefix from app_factory.py)
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])

# Buyer
api_router.include_router(buyer.products_router, prefix="/buyer/products", tags=["catalog"])
api_router.include_router(buyer.cart_router, prefix="/buyer/cart", tags=["cart"])
api_router.include_router(buyer.orders_router, prefix="/buyer/orders", tags=["buyer-orders"])
api_router.include_router(profile.buyer_router, prefix="/buyer/users", tags=["buyer-profile"])

# Seller
api_router.include_router(seller.products_router, prefix="/seller/products", tags=["seller-products"])
api_router.include_router(seller.orders_router, prefix="/seller/orders", tags=["seller-orders"])
api_router.include_router(profile.seller_router, prefix="/seller/users", tags=["seller-profile"])

# Admin
api_router.include_router(admin.categories_router, prefix="/admin/categories", tags=["admin-categories"])
api_router.include_router(admin.orders_router, prefix="/admin/orders", tags=["admin-orders"])
api_router.include_router(admin.payments_router, prefix="/admin/payments", tags=["admin-payments"])
api_router.include_router(admin.users_router, prefix="/admin/users", tags=["admin-users"])
api_router.include_router(admin.dashboard_router, prefix="/admin/dashboard", tags=["admin-dashboard"])
