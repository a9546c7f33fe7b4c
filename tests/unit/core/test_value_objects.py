"""
Unit tests for the shared value objects (Money, Address, Email).
"""

from decimal import Decimal

import pytest

from bilibay.core.domain import Address, Email, Money


@pytest.mark.unit
def test_money_rounds_half_up_to_cents():
    assert Money(amount=Decimal("10.005")).amount == Decimal("10.01")
    assert Money.from_float(0.1 + 0.2).amount == Decimal("0.30")


@pytest.mark.unit
def test_money_arithmetic():
    price = Money(amount=Decimal("19.99"))

    assert price.multiply(3).amount == Decimal("59.97")
    assert price.add(Money.from_float(10)).amount == Decimal("29.99")
    assert Money.sum([]).is_zero()
    assert str(Money(amount=Decimal("1234.5"))) == "PHP 1,234.50"


@pytest.mark.unit
def test_money_rejects_negative_and_mixed_currencies():
    with pytest.raises(ValueError):
        Money(amount=Decimal("-1"))
    with pytest.raises(ValueError):
        Money(amount=Decimal("1"), currency="PHP").add(Money(amount=Decimal("1"), currency="USD"))


@pytest.mark.unit
def test_address_round_trips_through_dict():
    address = Address.from_dict({"street": "1 Rizal Ave", "city": "Manila", "zip_code": "1000"})

    assert address.country == "Philippines"
    assert address.get_full_address() == "1 Rizal Ave, Manila, 1000, Philippines"
    assert Address.from_dict(address.to_dict()) == address


@pytest.mark.unit
def test_address_requires_street_and_city():
    with pytest.raises(ValueError):
        Address.from_dict({"street": "", "city": "Manila"})


@pytest.mark.unit
def test_email_is_normalized():
    assert str(Email(address="  Buyer@Example.COM ")) == "buyer@example.com"
    with pytest.raises(ValueError):
        Email(address="not-an-email")
