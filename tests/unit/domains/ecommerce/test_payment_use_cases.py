"""
Unit tests for admin payment verification.
"""

from uuid import uuid4

import pytest

from bilibay.core.domain import EntityNotFoundException, InvalidOperationException, PaymentException
from bilibay.domains.ecommerce.application.use_cases import (
    ListPaymentsRequest,
    ListPaymentsUseCase,
    RejectPaymentUseCase,
    SettlePaymentRequest,
    VerifyPaymentUseCase,
)
from bilibay.domains.ecommerce.domain.value_objects import OrderStatus, PaymentStatus
from tests.utils import create_order, create_payment


@pytest.fixture
def order(sample_product):
    return create_order([sample_product])


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_verify_marks_payment_and_order_paid(order, mock_payment_repository, mock_order_repository, mock_uow):
    payment = create_payment(order)
    admin_id = uuid4()
    mock_payment_repository.get_by_id.return_value = payment
    mock_order_repository.get_by_id.return_value = order

    result = await VerifyPaymentUseCase(mock_payment_repository, mock_order_repository, mock_uow).execute(
        SettlePaymentRequest(payment_id=payment.id, admin_id=admin_id)
    )

    assert result["status"] == "paid"
    assert result["verified_by"] == str(admin_id)
    assert order.payment_status == PaymentStatus.PAID
    mock_order_repository.update.assert_awaited_once_with(order)
    mock_uow.commit.assert_awaited_once()


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_verify_twice_is_refused(order, mock_payment_repository, mock_order_repository, mock_uow):
    mock_payment_repository.get_by_id.return_value = create_payment(order, status=PaymentStatus.PAID)
    mock_order_repository.get_by_id.return_value = order

    with pytest.raises(PaymentException):
        await VerifyPaymentUseCase(mock_payment_repository, mock_order_repository, mock_uow).execute(
            SettlePaymentRequest(payment_id=uuid4(), admin_id=uuid4())
        )

    mock_payment_repository.update.assert_not_awaited()


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_verify_cancelled_order_is_refused(order, mock_payment_repository, mock_order_repository, mock_uow):
    mock_payment_repository.get_by_id.return_value = create_payment(order)
    order.status = OrderStatus.CANCELLED
    mock_order_repository.get_by_id.return_value = order

    with pytest.raises(InvalidOperationException):
        await VerifyPaymentUseCase(mock_payment_repository, mock_order_repository, mock_uow).execute(
            SettlePaymentRequest(payment_id=uuid4(), admin_id=uuid4())
        )


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_reject_fails_payment_with_reason(order, mock_payment_repository, mock_order_repository, mock_uow):
    payment = create_payment(order)
    mock_payment_repository.get_by_id.return_value = payment
    mock_order_repository.get_by_id.return_value = order

    result = await RejectPaymentUseCase(mock_payment_repository, mock_order_repository, mock_uow).execute(
        SettlePaymentRequest(payment_id=payment.id, admin_id=uuid4(), reason="Amount mismatch")
    )

    assert result["status"] == "failed"
    assert result["failure_reason"] == "Amount mismatch"
    assert order.payment_status == PaymentStatus.FAILED


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_settling_unknown_payment(mock_payment_repository, mock_order_repository, mock_uow):
    request = SettlePaymentRequest(payment_id=uuid4(), admin_id=uuid4())

    with pytest.raises(EntityNotFoundException):
        await VerifyPaymentUseCase(mock_payment_repository, mock_order_repository, mock_uow).execute(request)
    with pytest.raises(EntityNotFoundException):
        await RejectPaymentUseCase(mock_payment_repository, mock_order_repository, mock_uow).execute(request)


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_list_payments_by_status(order, mock_payment_repository):
    mock_payment_repository.find.return_value = ([create_payment(order)], 1)

    page = await ListPaymentsUseCase(mock_payment_repository).execute(ListPaymentsRequest(status="pending"))

    mock_payment_repository.find.assert_awaited_once_with("pending", 0, 20)
    assert page.total == 1
    assert page.items[0]["method"] == "cod"
