"""
Marketplace Dependency Container.

Single Responsibility: Wire marketplace repositories and use cases to a
request-scoped database session.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from bilibay.config.settings import Settings, get_settings
from bilibay.database.unit_of_work import SQLAlchemyUnitOfWork
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
from bilibay.domains.ecommerce.domain.services import PricingService
from bilibay.domains.ecommerce.infrastructure.repositories import (
    SQLAlchemyCartRepository,
    SQLAlchemyCategoryRepository,
    SQLAlchemyOrderRepository,
    SQLAlchemyPaymentRepository,
    SQLAlchemyProductRepository,
)
from bilibay.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)


class EcommerceContainer:
    """
    Marketplace domain container.

    Repositories are cheap wrappers around the session, so each use case
    gets fresh instances bound to the caller's session.
    """

    def __init__(self, settings: Settings | None = None):
        self._settings = settings or get_settings()

    # ==================== REPOSITORIES ====================

    def create_product_repository(self, db: AsyncSession) -> SQLAlchemyProductRepository:
        return SQLAlchemyProductRepository(session=db)

    def create_category_repository(self, db: AsyncSession) -> SQLAlchemyCategoryRepository:
        return SQLAlchemyCategoryRepository(session=db)

    def create_cart_repository(self, db: AsyncSession) -> SQLAlchemyCartRepository:
        return SQLAlchemyCartRepository(session=db)

    def create_order_repository(self, db: AsyncSession) -> SQLAlchemyOrderRepository:
        return SQLAlchemyOrderRepository(session=db)

    def create_payment_repository(self, db: AsyncSession) -> SQLAlchemyPaymentRepository:
        return SQLAlchemyPaymentRepository(session=db)

    def create_pricing_service(self) -> PricingService:
        return PricingService(
            shipping_fee=self._settings.SHIPPING_FEE,
            free_shipping_threshold=self._settings.FREE_SHIPPING_THRESHOLD,
            currency=self._settings.CURRENCY,
        )

    # ==================== CATALOG ====================

    def create_browse_products_use_case(self, db: AsyncSession) -> BrowseProductsUseCase:
        return BrowseProductsUseCase(
            product_repository=self.create_product_repository(db),
            category_repository=self.create_category_repository(db),
        )

    def create_get_product_use_case(self, db: AsyncSession) -> GetProductUseCase:
        return GetProductUseCase(product_repository=self.create_product_repository(db))

    def create_list_categories_use_case(self, db: AsyncSession) -> ListCategoriesUseCase:
        return ListCategoriesUseCase(category_repository=self.create_category_repository(db))

    def create_list_seller_products_use_case(self, db: AsyncSession) -> ListSellerProductsUseCase:
        return ListSellerProductsUseCase(product_repository=self.create_product_repository(db))

    def create_create_product_use_case(self, db: AsyncSession) -> CreateProductUseCase:
        return CreateProductUseCase(
            product_repository=self.create_product_repository(db),
            category_repository=self.create_category_repository(db),
            uow=SQLAlchemyUnitOfWork(db),
        )

    def create_update_product_use_case(self, db: AsyncSession) -> UpdateProductUseCase:
        return UpdateProductUseCase(
            product_repository=self.create_product_repository(db),
            category_repository=self.create_category_repository(db),
            uow=SQLAlchemyUnitOfWork(db),
        )

    def create_delete_product_use_case(self, db: AsyncSession) -> DeleteProductUseCase:
        return DeleteProductUseCase(
            product_repository=self.create_product_repository(db),
            cart_repository=self.create_cart_repository(db),
            uow=SQLAlchemyUnitOfWork(db),
        )

    def create_get_category_use_case(self, db: AsyncSession) -> GetCategoryUseCase:
        return GetCategoryUseCase(category_repository=self.create_category_repository(db))

    def create_save_category_use_case(self, db: AsyncSession) -> SaveCategoryUseCase:
        return SaveCategoryUseCase(category_repository=self.create_category_repository(db), uow=SQLAlchemyUnitOfWork(db))

    def create_delete_category_use_case(self, db: AsyncSession) -> DeleteCategoryUseCase:
        return DeleteCategoryUseCase(
            category_repository=self.create_category_repository(db),
            product_repository=self.create_product_repository(db),
            uow=SQLAlchemyUnitOfWork(db),
        )

    # ==================== CART ====================

    def _cart_dependencies(self, db: AsyncSession) -> dict:
        return {
            "cart_repository": self.create_cart_repository(db),
            "product_repository": self.create_product_repository(db),
            "uow": SQLAlchemyUnitOfWork(db),
        }

    def create_get_cart_use_case(self, db: AsyncSession) -> GetCartUseCase:
        return GetCartUseCase(**self._cart_dependencies(db))

    def create_add_to_cart_use_case(self, db: AsyncSession) -> AddToCartUseCase:
        return AddToCartUseCase(**self._cart_dependencies(db))

    def create_update_cart_item_use_case(self, db: AsyncSession) -> UpdateCartItemUseCase:
        return UpdateCartItemUseCase(**self._cart_dependencies(db))

    def create_remove_cart_item_use_case(self, db: AsyncSession) -> RemoveCartItemUseCase:
        return RemoveCartItemUseCase(**self._cart_dependencies(db))

    def create_clear_cart_use_case(self, db: AsyncSession) -> ClearCartUseCase:
        return ClearCartUseCase(**self._cart_dependencies(db))

    # ==================== ORDERS ====================

    def create_place_order_use_case(self, db: AsyncSession) -> PlaceOrderUseCase:
        return PlaceOrderUseCase(
            order_repository=self.create_order_repository(db),
            product_repository=self.create_product_repository(db),
            cart_repository=self.create_cart_repository(db),
            payment_repository=self.create_payment_repository(db),
            pricing_service=self.create_pricing_service(),
            uow=SQLAlchemyUnitOfWork(db),
        )

    def create_cancel_order_use_case(self, db: AsyncSession) -> CancelOrderUseCase:
        return CancelOrderUseCase(
            order_repository=self.create_order_repository(db),
            product_repository=self.create_product_repository(db),
            payment_repository=self.create_payment_repository(db),
            uow=SQLAlchemyUnitOfWork(db),
        )

    def create_update_order_status_use_case(self, db: AsyncSession) -> UpdateOrderStatusUseCase:
        return UpdateOrderStatusUseCase(
            order_repository=self.create_order_repository(db),
            product_repository=self.create_product_repository(db),
            payment_repository=self.create_payment_repository(db),
            uow=SQLAlchemyUnitOfWork(db),
        )

    def create_list_orders_use_case(self, db: AsyncSession) -> ListOrdersUseCase:
        return ListOrdersUseCase(order_repository=self.create_order_repository(db))

    def create_get_order_use_case(self, db: AsyncSession) -> GetOrderUseCase:
        return GetOrderUseCase(
            order_repository=self.create_order_repository(db),
            payment_repository=self.create_payment_repository(db),
        )

    # ==================== PAYMENTS / ADMIN ====================

    def create_list_payments_use_case(self, db: AsyncSession) -> ListPaymentsUseCase:
        return ListPaymentsUseCase(payment_repository=self.create_payment_repository(db))

    def create_verify_payment_use_case(self, db: AsyncSession) -> VerifyPaymentUseCase:
        return VerifyPaymentUseCase(
            payment_repository=self.create_payment_repository(db),
            order_repository=self.create_order_repository(db),
            uow=SQLAlchemyUnitOfWork(db),
        )

    def create_reject_payment_use_case(self, db: AsyncSession) -> RejectPaymentUseCase:
        return RejectPaymentUseCase(
            payment_repository=self.create_payment_repository(db),
            order_repository=self.create_order_repository(db),
            uow=SQLAlchemyUnitOfWork(db),
        )

    def create_dashboard_stats_use_case(self, db: AsyncSession) -> GetDashboardStatsUseCase:
        return GetDashboardStatsUseCase(
            order_repository=self.create_order_repository(db),
            product_repository=self.create_product_repository(db),
            payment_repository=self.create_payment_repository(db),
            user_counter=UserRepository(db),
            low_stock_threshold=self._settings.LOW_STOCK_THRESHOLD,
        )


_container: EcommerceContainer | None = None


def get_container() -> EcommerceContainer:
    """Get or create the global container instance."""
    global _container
    if _container is None:
        _container = EcommerceContainer()
    return _container
