"""
Base Value Object Classes for Domain-Driven Design

Value Objects are immutable domain primitives that have no identity.
They are compared by their values, not by reference.
"""

from abc import ABC
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Any, Self

CENTS = Decimal("0.01")


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base class for all value objects.

    Value objects are immutable, compared by value and carry no identity.
    Subclasses put their invariants in ``_validate``.
    """

    def __post_init__(self):
        self._validate()

    def _validate(self) -> None:
        """Validate the value object. Override in subclasses."""
        pass


@dataclass(frozen=True)
class Money(ValueObject):
    """
    Money value object for price and order arithmetic.

    Amounts are kept as Decimal rounded half-up to cents.

    Example:
        ```python
        unit = Money(amount=Decimal("19.99"))
        line = unit.multiply(3)                 # PHP 59.97
        total = line.add(Money.from_float(10))  # PHP 69.97
        ```
    """

    amount: Decimal
    currency: str = "PHP"

    def _validate(self) -> None:
        if not isinstance(self.amount, Decimal):
            object.__setattr__(self, "amount", Decimal(str(self.amount)))
        if self.amount < 0:
            raise ValueError("Money amount cannot be negative")
        if not self.currency or len(self.currency) != 3:
            raise ValueError("Currency must be a 3-letter ISO code")
        object.__setattr__(self, "amount", self.amount.quantize(CENTS, ROUND_HALF_UP))

    def add(self, other: "Money") -> "Money":
        """Add two Money values (must be same currency)."""
        if self.currency != other.currency:
            raise ValueError(f"Cannot add {self.currency} to {other.currency}")
        return Money(amount=self.amount + other.amount, currency=self.currency)

    def multiply(self, factor: int | Decimal) -> "Money":
        """Multiply by a quantity or factor."""
        return Money(amount=self.amount * Decimal(str(factor)), currency=self.currency)

    def is_zero(self) -> bool:
        return self.amount == Decimal("0")

    def __ge__(self, other: "Money") -> bool:
        return self.amount >= other.amount

    def __lt__(self, other: "Money") -> bool:
        return self.amount < other.amount

    def __str__(self) -> str:
        return f"{self.currency} {self.amount:,.2f}"

    @classmethod
    def zero(cls, currency: str = "PHP") -> "Money":
        """Create a zero Money value."""
        return cls(amount=Decimal("0"), currency=currency)

    @classmethod
    def from_float(cls, amount: float | int | str, currency: str = "PHP") -> "Money":
        """Create Money from a float, int or numeric string with proper rounding."""
        return cls(amount=Decimal(str(amount)), currency=currency)

    @classmethod
    def sum(cls, values: list["Money"], currency: str = "PHP") -> "Money":
        """Sum a list of Money values, zero when empty."""
        total = cls.zero(currency)
        for value in values:
            total = total.add(value)
        return total


@dataclass(frozen=True)
class Email(ValueObject):
    """
    Email address value object.

    Normalizes addresses to lowercase without surrounding whitespace.
    """

    address: str

    def _validate(self) -> None:
        if not self.address or "@" not in self.address:
            raise ValueError(f"Invalid email address: {self.address}")
        object.__setattr__(self, "address", self.address.lower().strip())

    def __str__(self) -> str:
        return self.address


@dataclass(frozen=True)
class Address(ValueObject):
    """Shipping address value object."""

    street: str
    city: str
    province: str = ""
    zip_code: str = ""
    country: str = "Philippines"

    def _validate(self) -> None:
        if not self.street or not self.city:
            raise ValueError("Street and city are required")

    def get_full_address(self) -> str:
        parts = [self.street, self.city, self.province, self.zip_code, self.country]
        return ", ".join(p for p in parts if p)

    def to_dict(self) -> dict[str, str]:
        return {
            "street": self.street,
            "city": self.city,
            "province": self.province,
            "zip_code": self.zip_code,
            "country": self.country,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        return cls(
            street=data.get("street") or "",
            city=data.get("city") or "",
            province=data.get("province") or "",
            zip_code=data.get("zip_code") or "",
            country=data.get("country") or "Philippines",
        )

    def __str__(self) -> str:
        return self.get_full_address()


class StatusEnum(str, Enum):
    """
    Base class for status enums.

    Provides common functionality for all status value objects.
    """

    @classmethod
    def values(cls) -> list[str]:
        """Get all possible values."""
        return [e.value for e in cls]

    @classmethod
    def from_string(cls, value: str) -> Self:
        """Create from string value (case-insensitive)."""
        for member in cls:
            if member.value.lower() == value.lower():
                return member
        raise ValueError(f"Invalid {cls.__name__}: {value}")
