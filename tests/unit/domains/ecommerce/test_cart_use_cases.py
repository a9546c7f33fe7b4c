"""
Unit tests for the cart use cases.
"""

from uuid import uuid4

import pytest

from bilibay.core.domain import BusinessRuleViolationException, EntityNotFoundException, InsufficientStockException
from bilibay.domains.ecommerce.application.use_cases import (
    AddToCartRequest,
    AddToCartUseCase,
    ClearCartUseCase,
    RemoveCartItemUseCase,
    UpdateCartItemRequest,
    UpdateCartItemUseCase,
)
from bilibay.domains.ecommerce.domain.entities import CartItem
from bilibay.domains.ecommerce.domain.value_objects import ProductStatus
from tests.utils import create_product


@pytest.fixture
def deps(mock_cart_repository, mock_product_repository, mock_uow):
    return {"cart_repository": mock_cart_repository, "product_repository": mock_product_repository, "uow": mock_uow}


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_add_new_line(deps, mock_cart_repository, mock_product_repository, sample_product, mock_uow):
    mock_product_repository.get_by_id.return_value = sample_product
    cart = mock_cart_repository.get_or_create.return_value

    await AddToCartUseCase(**deps).execute(
        AddToCartRequest(user_id=cart.user_id, product_id=sample_product.id, quantity=2)
    )

    mock_cart_repository.add_item.assert_awaited_once_with(cart.id, sample_product.id, 2, None)
    mock_uow.commit.assert_awaited_once()


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_add_existing_line_merges_quantity(
    deps, mock_cart_repository, mock_product_repository, cart_with_item, sample_product
):
    mock_product_repository.get_by_id.return_value = sample_product
    mock_cart_repository.get_or_create.return_value = cart_with_item
    item = cart_with_item.items[0]

    await AddToCartUseCase(**deps).execute(
        AddToCartRequest(user_id=cart_with_item.user_id, product_id=sample_product.id, quantity=3)
    )

    mock_cart_repository.update_item_quantity.assert_awaited_once_with(item.id, 5)
    mock_cart_repository.add_item.assert_not_awaited()


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_add_beyond_stock_counts_lines_already_in_cart(
    deps, mock_cart_repository, mock_product_repository, cart_with_item, sample_product
):
    mock_product_repository.get_by_id.return_value = sample_product
    mock_cart_repository.get_or_create.return_value = cart_with_item

    with pytest.raises(InsufficientStockException) as exc_info:
        await AddToCartUseCase(**deps).execute(
            AddToCartRequest(user_id=cart_with_item.user_id, product_id=sample_product.id, quantity=4)
        )

    assert exc_info.value.requested == 6
    assert exc_info.value.available == 5


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
@pytest.mark.parametrize("status", [ProductStatus.SOLD, ProductStatus.DRAFT])
async def test_add_unavailable_product_is_not_found(deps, mock_product_repository, status):
    mock_product_repository.get_by_id.return_value = create_product(stock=0, status=status)

    with pytest.raises(EntityNotFoundException):
        await AddToCartUseCase(**deps).execute(AddToCartRequest(user_id=uuid4(), product_id=uuid4()))


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_add_unknown_variant(deps, mock_product_repository):
    product = create_product(variants=["Small", "Large"])
    mock_product_repository.get_by_id.return_value = product

    with pytest.raises(BusinessRuleViolationException) as exc_info:
        await AddToCartUseCase(**deps).execute(AddToCartRequest(user_id=uuid4(), product_id=product.id, variant="XL"))

    assert exc_info.value.code == "INVALID_VARIANT"


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_update_item_checks_other_variant_lines(deps, mock_cart_repository, cart_with_item, sample_product):
    sample_product.variants = ["Red", "Blue"]
    cart_with_item.items[0].variant = "Red"
    cart_with_item.items.append(
        CartItem(product_id=sample_product.id, quantity=1, variant="Blue", id=uuid4(), product=sample_product)
    )
    mock_cart_repository.get_or_create.return_value = cart_with_item
    blue = cart_with_item.items[1]

    with pytest.raises(InsufficientStockException):
        await UpdateCartItemUseCase(**deps).execute(
            UpdateCartItemRequest(user_id=cart_with_item.user_id, item_id=blue.id, quantity=4)
        )

    await UpdateCartItemUseCase(**deps).execute(
        UpdateCartItemRequest(user_id=cart_with_item.user_id, item_id=blue.id, quantity=3)
    )
    mock_cart_repository.update_item_quantity.assert_awaited_once_with(blue.id, 3)


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_update_unknown_item(deps, cart_with_item, mock_cart_repository):
    mock_cart_repository.get_or_create.return_value = cart_with_item

    with pytest.raises(EntityNotFoundException):
        await UpdateCartItemUseCase(**deps).execute(
            UpdateCartItemRequest(user_id=cart_with_item.user_id, item_id=uuid4(), quantity=1)
        )


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_remove_and_clear(deps, cart_with_item, mock_cart_repository):
    mock_cart_repository.get_or_create.return_value = cart_with_item
    item_id = cart_with_item.items[0].id

    await RemoveCartItemUseCase(**deps).execute(cart_with_item.user_id, item_id)
    await ClearCartUseCase(**deps).execute(cart_with_item.user_id)

    mock_cart_repository.remove_item.assert_awaited_once_with(item_id)
    mock_cart_repository.clear.assert_awaited_once_with(cart_with_item.id)
    with pytest.raises(EntityNotFoundException):
        await RemoveCartItemUseCase(**deps).execute(cart_with_item.user_id, uuid4())
