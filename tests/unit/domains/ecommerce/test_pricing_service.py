"""
Unit tests for checkout pricing (frozen prices, shipping threshold).
"""

from decimal import Decimal
from uuid import uuid4

import pytest

from bilibay.core.domain import Address, Money
from bilibay.domains.ecommerce.domain.entities import Cart, CartItem, Order
from bilibay.domains.ecommerce.domain.services import PricingService
from bilibay.domains.ecommerce.domain.value_objects import PaymentMethod
from tests.utils import create_product


@pytest.fixture
def pricing_service():
    return PricingService(shipping_fee=Decimal("10.00"), free_shipping_threshold=Decimal("50.00"))


@pytest.mark.unit
def test_build_order_item_snapshots_title_and_price(pricing_service):
    product = create_product(title="Banig Mat", price=Money(amount=Decimal("24.99")))

    item = pricing_service.build_order_item(product, 2, None)
    product.price = Money(amount=Decimal("99.00"))
    product.title = "Renamed"

    assert item.title == "Banig Mat"
    assert item.unit_price.amount == Decimal("24.99")
    assert item.subtotal.amount == Decimal("49.98")
    assert item.seller_id == product.seller_id


@pytest.mark.unit
@pytest.mark.parametrize(
    ("unit_price", "quantity", "shipping", "total"),
    [
        ("49.99", 1, "10.00", "59.99"),
        ("50.00", 1, "0.00", "50.00"),
        ("25.00", 3, "0.00", "75.00"),
        ("0.50", 1, "10.00", "10.50"),
    ],
)
def test_shipping_is_free_from_threshold(pricing_service, unit_price, quantity, shipping, total):
    product = create_product(price=Money(amount=Decimal(unit_price)))
    items = [pricing_service.build_order_item(product, quantity)]

    pricing = pricing_service.price_order(items)

    assert pricing.shipping_fee.amount == Decimal(shipping)
    assert pricing.total.amount == Decimal(total)
    assert pricing.has_free_shipping is (Decimal(shipping) == 0)


@pytest.mark.unit
def test_custom_fee_and_threshold():
    service = PricingService(shipping_fee=Decimal("5.00"), free_shipping_threshold=Decimal("100.00"))
    product = create_product(price=Money(amount=Decimal("60.00")))

    pricing = service.price_order([service.build_order_item(product, 1)])

    assert pricing.to_dict() == {
        "subtotal": Decimal("60.00"),
        "shipping_fee": Decimal("5.00"),
        "total": Decimal("65.00"),
        "free_shipping": False,
    }


@pytest.mark.unit
def test_order_in_configured_currency():
    service = PricingService(shipping_fee=Decimal("10.00"), free_shipping_threshold=Decimal("50.00"), currency="USD")
    product = create_product(price=Money(amount=Decimal("20.00"), currency="USD"))

    items = [service.build_order_item(product, 2)]

    order = Order.place(
        buyer_id=uuid4(),
        items=items,
        shipping_address=Address(street="1 Main St", city="Austin"),
        payment_method=PaymentMethod.COD,
        shipping_fee=service.price_order(items).shipping_fee,
    )

    assert order.subtotal == Money(amount=Decimal("40.00"), currency="USD")
    assert order.total == Money(amount=Decimal("50.00"), currency="USD")


@pytest.mark.unit
def test_cart_total_in_configured_currency():
    product = create_product(price=Money(amount=Decimal("12.50"), currency="USD"))
    cart = Cart(
        id=uuid4(),
        user_id=uuid4(),
        items=[CartItem(product_id=product.id, quantity=2, id=uuid4(), product=product)],
        currency="USD",
    )

    data = cart.to_dict()

    assert cart.total == Money(amount=Decimal("25.00"), currency="USD")
    assert data["total"] == Decimal("25.00")
    assert Cart(id=uuid4(), user_id=uuid4(), currency="USD").total.currency == "USD"
