"""
Unit tests for catalog browsing, seller listings, categories and the dashboard.
"""

from decimal import Decimal
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from bilibay.core.domain import (
    BusinessRuleViolationException,
    DuplicateEntityException,
    EntityNotFoundException,
    ValidationException,
)
from bilibay.domains.ecommerce.application.use_cases import (
    BrowseProductsRequest,
    BrowseProductsUseCase,
    CreateProductRequest,
    CreateProductUseCase,
    DeleteCategoryUseCase,
    DeleteProductUseCase,
    GetDashboardStatsUseCase,
    GetProductUseCase,
    SaveCategoryRequest,
    SaveCategoryUseCase,
    UpdateProductRequest,
    UpdateProductUseCase,
)
from bilibay.domains.ecommerce.domain.value_objects import ProductStatus
from tests.utils import create_order, create_payment, create_product


@pytest.fixture
def mock_category_repository():
    """Create a mock category repository with no categories."""
    mock = AsyncMock()
    mock.get_by_id = AsyncMock(return_value=None)
    mock.get_by_slug = AsyncMock(return_value=None)
    mock.get_by_name = AsyncMock(return_value=None)
    mock.create = AsyncMock(side_effect=lambda category: category)
    mock.update = AsyncMock(side_effect=lambda category: category)
    return mock


# ============================================================================
# BROWSING
# ============================================================================


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_browse_resolves_category_slug(mock_product_repository, mock_category_repository, sample_category):
    mock_category_repository.get_by_slug.return_value = sample_category
    mock_product_repository.search.return_value = ([create_product()], 1)

    page = await BrowseProductsUseCase(mock_product_repository, mock_category_repository).execute(
        BrowseProductsRequest(category="Home-Living", min_price=Decimal("5"), sort_by="price_asc", page=2, limit=10)
    )

    mock_category_repository.get_by_slug.assert_awaited_once_with("home-living")
    filters = mock_product_repository.search.await_args.args[0]
    assert filters.category_id == sample_category.id
    assert filters.sort_by == "price_asc"
    assert filters.offset == 10
    assert page.total == 1


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_browse_unknown_category_is_empty(mock_product_repository, mock_category_repository):
    page = await BrowseProductsUseCase(mock_product_repository, mock_category_repository).execute(
        BrowseProductsRequest(category=str(uuid4()))
    )

    assert page.to_dict() == {"items": [], "total": 0, "page": 1, "limit": 20, "pages": 0}
    mock_product_repository.search.assert_not_awaited()


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_browse_falls_back_to_newest_sort(mock_product_repository, mock_category_repository):
    mock_product_repository.search.return_value = ([], 0)

    await BrowseProductsUseCase(mock_product_repository, mock_category_repository).execute(
        BrowseProductsRequest(sort_by="popularity", search="")
    )

    filters = mock_product_repository.search.await_args.args[0]
    assert filters.sort_by == "newest"
    assert filters.search is None


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_drafts_are_hidden_from_product_page(mock_product_repository):
    draft = create_product(status=ProductStatus.DRAFT)
    mock_product_repository.get_by_id.return_value = draft

    with pytest.raises(EntityNotFoundException):
        await GetProductUseCase(mock_product_repository).execute(draft.id)

    mock_product_repository.get_by_id.return_value = create_product(stock=0, status=ProductStatus.SOLD)
    result = await GetProductUseCase(mock_product_repository).execute(uuid4())
    assert result["status"] == "sold"


# ============================================================================
# SELLER PRODUCTS
# ============================================================================


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_create_product_without_stock_is_sold(mock_product_repository, mock_category_repository, mock_uow):
    mock_product_repository.create = AsyncMock(side_effect=lambda product: product)
    seller_id = uuid4()

    result = await CreateProductUseCase(mock_product_repository, mock_category_repository, mock_uow).execute(
        CreateProductRequest(seller_id=seller_id, title="  Pili Nuts ", price=Decimal("8.50"), stock=0)
    )

    assert result["title"] == "Pili Nuts"
    assert result["status"] == "sold"
    assert result["seller_id"] == str(seller_id)
    mock_uow.commit.assert_awaited_once()


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_create_product_in_unknown_category(mock_product_repository, mock_category_repository, mock_uow):
    with pytest.raises(EntityNotFoundException):
        await CreateProductUseCase(mock_product_repository, mock_category_repository, mock_uow).execute(
            CreateProductRequest(seller_id=uuid4(), title="Abaca Bag", price=Decimal("30"), category_id=uuid4())
        )


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_restocking_sold_product_makes_it_available(mock_product_repository, mock_category_repository, mock_uow):
    product = create_product(stock=0, status=ProductStatus.SOLD)
    mock_product_repository.get_by_id.return_value = product
    mock_product_repository.update = AsyncMock(side_effect=lambda p: p)

    result = await UpdateProductUseCase(mock_product_repository, mock_category_repository, mock_uow).execute(
        UpdateProductRequest(product_id=product.id, seller_id=product.seller_id, stock=4, price=Decimal("22.00"))
    )

    assert result["status"] == "available"
    assert result["stock"] == 4
    assert result["price"] == Decimal("22.00")


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_marking_stocked_product_sold_is_refused(mock_product_repository, mock_category_repository, mock_uow):
    product = create_product(stock=3)
    mock_product_repository.get_by_id.return_value = product

    with pytest.raises(ValidationException) as exc_info:
        await UpdateProductUseCase(mock_product_repository, mock_category_repository, mock_uow).execute(
            UpdateProductRequest(product_id=product.id, seller_id=product.seller_id, status="sold")
        )

    assert exc_info.value.details["field"] == "status"
    assert product.status == ProductStatus.AVAILABLE
    mock_product_repository.update.assert_not_called()


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_sellers_only_edit_their_own_products(mock_product_repository, mock_category_repository, mock_uow):
    product = create_product()
    mock_product_repository.get_by_id.return_value = product

    with pytest.raises(EntityNotFoundException):
        await UpdateProductUseCase(mock_product_repository, mock_category_repository, mock_uow).execute(
            UpdateProductRequest(product_id=product.id, seller_id=uuid4(), title="Mine now")
        )
    with pytest.raises(EntityNotFoundException):
        await DeleteProductUseCase(mock_product_repository, AsyncMock(), mock_uow).execute(product.id, uuid4())


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_delete_product_drops_cart_lines(mock_product_repository, mock_cart_repository, mock_uow, sample_product):
    mock_product_repository.get_by_id.return_value = sample_product
    mock_cart_repository.remove_product = AsyncMock(return_value=3)

    await DeleteProductUseCase(mock_product_repository, mock_cart_repository, mock_uow).execute(
        sample_product.id, sample_product.seller_id
    )

    mock_cart_repository.remove_product.assert_awaited_once_with(sample_product.id)
    mock_product_repository.delete.assert_awaited_once_with(sample_product.id)
    mock_uow.commit.assert_awaited_once()


# ============================================================================
# CATEGORIES
# ============================================================================


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_create_category_derives_slug(mock_category_repository, mock_uow):
    result = await SaveCategoryUseCase(mock_category_repository, mock_uow).execute(
        SaveCategoryRequest(name="Food & Delicacies")
    )

    assert result["slug"] == "food-delicacies"
    mock_category_repository.create.assert_awaited_once()


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_duplicate_category_name(mock_category_repository, mock_uow, sample_category):
    mock_category_repository.get_by_name.return_value = sample_category

    with pytest.raises(DuplicateEntityException) as exc_info:
        await SaveCategoryUseCase(mock_category_repository, mock_uow).execute(SaveCategoryRequest(name="Home & Living"))

    assert exc_info.value.code == "DUPLICATE_ENTITY"


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_rename_category_keeps_its_own_name(mock_category_repository, mock_uow, sample_category):
    mock_category_repository.get_by_id.return_value = sample_category
    mock_category_repository.get_by_name.return_value = sample_category

    result = await SaveCategoryUseCase(mock_category_repository, mock_uow).execute(
        SaveCategoryRequest(name="Home and Living", description=None, category_id=sample_category.id)
    )

    assert result["slug"] == "home-and-living"
    mock_category_repository.update.assert_awaited_once()


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_category_in_use_cannot_be_deleted(
    mock_category_repository, mock_product_repository, mock_uow, sample_category
):
    mock_category_repository.get_by_id.return_value = sample_category
    mock_product_repository.count_by_category = AsyncMock(return_value=2)

    with pytest.raises(BusinessRuleViolationException) as exc_info:
        await DeleteCategoryUseCase(mock_category_repository, mock_product_repository, mock_uow).execute(
            sample_category.id
        )

    assert exc_info.value.code == "CATEGORY_IN_USE"
    mock_category_repository.delete.assert_not_awaited()


# ============================================================================
# DASHBOARD
# ============================================================================


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_dashboard_stats(mock_order_repository, mock_product_repository, mock_payment_repository):
    product = create_product(stock=2)
    order = create_order([product])
    mock_order_repository.find = AsyncMock(return_value=([order], 7))
    mock_order_repository.total_paid_sales = AsyncMock(return_value=Decimal("150.00"))
    mock_payment_repository.find = AsyncMock(return_value=([create_payment(order)], 1))
    mock_product_repository.get_low_stock = AsyncMock(return_value=[product])
    user_counter = AsyncMock()
    user_counter.count = AsyncMock(return_value=3)

    stats = await GetDashboardStatsUseCase(
        mock_order_repository, mock_product_repository, mock_payment_repository, user_counter, low_stock_threshold=5
    ).execute()

    data = stats.to_dict()
    assert data["total_orders"] == 7
    assert data["total_sales"] == Decimal("150.00")
    assert data["total_users"] == 3
    assert data["low_stock_products"][0]["stock"] == 2
    assert data["recent_orders"][0]["order_number"] == order.order_number
    assert len(data["pending_payments"]) == 1
    mock_product_repository.get_low_stock.assert_awaited_once_with(5)
