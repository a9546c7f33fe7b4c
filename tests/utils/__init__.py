"""Test utilities and helpers."""

from tests.utils.assertions import assert_error_response, assert_page
from tests.utils.factories import (
    API,
    PASSWORD,
    auth_headers,
    create_order,
    create_payment,
    create_product,
    create_user,
)

__all__ = [
    "API",
    "PASSWORD",
    # Factories
    "create_product",
    "create_order",
    "create_payment",
    "create_user",
    "auth_headers",
    # Assertions
    "assert_error_response",
    "assert_page",
]
