"""
Domain Layer - Core DDD building blocks

This module provides base classes for Domain-Driven Design:
- Entities: Objects with identity and lifecycle
- Value Objects: Immutable objects compared by value
- Exceptions: Domain-specific error handling
"""

from bilibay.core.domain.entities import Entity, generate_uuid
from bilibay.core.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    BusinessRuleViolationException,
    DomainException,
    DuplicateEntityException,
    EntityNotFoundException,
    InsufficientStockException,
    InvalidOperationException,
    PaymentException,
    ValidationException,
)
from bilibay.core.domain.value_objects import (
    Address,
    Email,
    Money,
    StatusEnum,
    ValueObject,
)

__all__ = [
    # Entities
    "Entity",
    "generate_uuid",
    # Value Objects
    "ValueObject",
    "Money",
    "Email",
    "Address",
    "StatusEnum",
    # Exceptions
    "DomainException",
    "ValidationException",
    "EntityNotFoundException",
    "BusinessRuleViolationException",
    "InsufficientStockException",
    "InvalidOperationException",
    "AuthenticationException",
    "AuthorizationException",
    "DuplicateEntityException",
    "PaymentException",
]
