"""
Unit tests for cancelling, fulfilling and reading orders.
"""

from uuid import uuid4

import pytest

from bilibay.core.domain import EntityNotFoundException, InvalidOperationException, ValidationException
from bilibay.domains.ecommerce.application.use_cases import (
    CancelOrderRequest,
    CancelOrderUseCase,
    GetOrderRequest,
    GetOrderUseCase,
    ListOrdersRequest,
    ListOrdersUseCase,
    UpdateOrderStatusRequest,
    UpdateOrderStatusUseCase,
)
from bilibay.domains.ecommerce.domain.value_objects import OrderStatus, PaymentStatus
from tests.utils import create_order, create_payment, create_product


@pytest.fixture
def order(sample_product):
    return create_order([sample_product], quantity=2)


@pytest.fixture
def cancel_use_case(mock_order_repository, mock_product_repository, mock_payment_repository, mock_uow):
    return CancelOrderUseCase(mock_order_repository, mock_product_repository, mock_payment_repository, mock_uow)


@pytest.fixture
def status_use_case(mock_order_repository, mock_product_repository, mock_payment_repository, mock_uow):
    return UpdateOrderStatusUseCase(mock_order_repository, mock_product_repository, mock_payment_repository, mock_uow)


# ============================================================================
# CANCEL
# ============================================================================


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_buyer_cancel_restores_stock_and_fails_payment(
    cancel_use_case, order, sample_product, mock_order_repository, mock_product_repository, mock_payment_repository
):
    payment = create_payment(order)
    mock_order_repository.get_by_id.return_value = order
    mock_payment_repository.get_by_order_id.return_value = payment

    result = await cancel_use_case.execute(
        CancelOrderRequest(order_id=order.id, buyer_id=order.buyer_id, reason="Changed my mind")
    )

    assert result["status"] == "cancelled"
    assert result["payment_status"] == "failed"
    assert result["cancellation_reason"] == "Changed my mind"
    mock_product_repository.restore_stock.assert_awaited_once_with(sample_product.id, 2)
    assert payment.status == PaymentStatus.FAILED
    mock_payment_repository.update.assert_awaited_once_with(payment)


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_cancel_keeps_a_paid_payment(cancel_use_case, order, mock_order_repository, mock_payment_repository):
    order.mark_paid()
    payment = create_payment(order, status=PaymentStatus.PAID)
    mock_order_repository.get_by_id.return_value = order
    mock_payment_repository.get_by_order_id.return_value = payment

    result = await cancel_use_case.execute(CancelOrderRequest(order_id=order.id, buyer_id=order.buyer_id))

    assert result["payment_status"] == "paid"
    assert payment.status == PaymentStatus.PAID


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_cannot_cancel_someone_elses_order(cancel_use_case, order, mock_order_repository):
    mock_order_repository.get_by_id.return_value = order

    with pytest.raises(EntityNotFoundException):
        await cancel_use_case.execute(CancelOrderRequest(order_id=order.id, buyer_id=uuid4()))


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_cannot_cancel_shipped_order(cancel_use_case, order, mock_order_repository, mock_product_repository):
    order.start_processing()
    order.ship("LBC-1")
    mock_order_repository.get_by_id.return_value = order

    with pytest.raises(InvalidOperationException):
        await cancel_use_case.execute(CancelOrderRequest(order_id=order.id, buyer_id=order.buyer_id))

    mock_product_repository.restore_stock.assert_not_awaited()


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_cancel_rolls_back_when_restore_fails(
    cancel_use_case, order, mock_order_repository, mock_product_repository, mock_uow
):
    mock_order_repository.get_by_id.return_value = order
    mock_product_repository.restore_stock.side_effect = RuntimeError("db down")

    with pytest.raises(RuntimeError):
        await cancel_use_case.execute(CancelOrderRequest(order_id=order.id, buyer_id=order.buyer_id))

    mock_uow.rollback.assert_awaited_once()
    mock_uow.commit.assert_not_awaited()


# ============================================================================
# STATUS UPDATES
# ============================================================================


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_seller_ships_order_with_tracking(status_use_case, order, sample_product, mock_order_repository, mock_uow):
    order.start_processing()
    mock_order_repository.get_by_id.return_value = order

    result = await status_use_case.execute(
        UpdateOrderStatusRequest(
            order_id=order.id, status="shipped", tracking_number="JNT-778", seller_id=sample_product.seller_id
        )
    )

    assert result["status"] == "shipped"
    assert result["tracking_number"] == "JNT-778"
    assert result["shipped_at"] is not None
    mock_uow.commit.assert_awaited_once()


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_seller_cannot_touch_orders_without_their_products(status_use_case, order, mock_order_repository):
    mock_order_repository.get_by_id.return_value = order

    with pytest.raises(EntityNotFoundException):
        await status_use_case.execute(UpdateOrderStatusRequest(order_id=order.id, status="processing", seller_id=uuid4()))


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_skipping_a_step_is_invalid(status_use_case, order, mock_order_repository):
    mock_order_repository.get_by_id.return_value = order

    with pytest.raises(InvalidOperationException):
        await status_use_case.execute(UpdateOrderStatusRequest(order_id=order.id, status="delivered"))

    mock_order_repository.update.assert_not_awaited()
    assert order.status == OrderStatus.PENDING


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_unknown_status_is_a_validation_error(status_use_case):
    with pytest.raises(ValidationException):
        await status_use_case.execute(UpdateOrderStatusRequest(order_id=uuid4(), status="lost"))


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_admin_cancellation_releases_stock(
    status_use_case, order, sample_product, mock_order_repository, mock_product_repository
):
    mock_order_repository.get_by_id.return_value = order

    result = await status_use_case.execute(
        UpdateOrderStatusRequest(order_id=order.id, status="cancelled", reason="Out of area")
    )

    assert result["status"] == "cancelled"
    mock_product_repository.restore_stock.assert_awaited_once_with(sample_product.id, 2)


# ============================================================================
# QUERIES
# ============================================================================


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_list_orders_picks_scope(mock_order_repository):
    orders = [create_order([create_product()])]
    mock_order_repository.get_by_buyer.return_value = (orders, 1)
    mock_order_repository.get_by_seller.return_value = ([], 0)
    mock_order_repository.find.return_value = (orders, 21)
    use_case = ListOrdersUseCase(mock_order_repository)

    buyer_page = await use_case.execute(ListOrdersRequest(buyer_id=uuid4(), page=2, limit=5))
    await use_case.execute(ListOrdersRequest(seller_id=uuid4(), status="pending"))
    all_page = await use_case.execute(ListOrdersRequest(limit=10))

    mock_order_repository.get_by_buyer.assert_awaited_once()
    assert mock_order_repository.get_by_buyer.await_args.args[1:] == (5, 5)
    assert mock_order_repository.get_by_seller.await_args.args[1] == "pending"
    assert buyer_page.to_dict()["page"] == 2
    assert all_page.pages == 3


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_get_order_includes_payment(order, mock_order_repository, mock_payment_repository):
    payment = create_payment(order)
    mock_order_repository.get_by_id.return_value = order
    mock_payment_repository.get_by_order_id.return_value = payment
    use_case = GetOrderUseCase(mock_order_repository, mock_payment_repository)

    result = await use_case.execute(GetOrderRequest(order_id=order.id, buyer_id=order.buyer_id))

    assert result["payment"]["id"] == str(payment.id)
    assert len(result["items"]) == 1


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_get_order_hidden_outside_scope(order, mock_order_repository, mock_payment_repository):
    mock_order_repository.get_by_id.return_value = order
    use_case = GetOrderUseCase(mock_order_repository, mock_payment_repository)

    with pytest.raises(EntityNotFoundException):
        await use_case.execute(GetOrderRequest(order_id=order.id, buyer_id=uuid4()))
    with pytest.raises(EntityNotFoundException):
        await use_case.execute(GetOrderRequest(order_id=order.id, seller_id=uuid4()))
