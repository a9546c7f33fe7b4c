"""
Category Entity for the marketplace
"""

import re
from dataclasses import dataclass
from typing import Any
from uuid import UUID

from bilibay.core.domain import Entity, ValidationException

_SLUG_SEPARATORS = re.compile(r"[^a-z0-9]+")


def slugify(name: str) -> str:
    """Lowercase, collapse every non-alphanumeric run to '-', trim dashes."""
    return _SLUG_SEPARATORS.sub("-", name.lower()).strip("-")


@dataclass
class Category(Entity[UUID]):
    """Product category with a URL-safe slug derived from its name."""

    name: str = ""
    slug: str = ""
    description: str | None = None

    def __post_init__(self):
        self.name = self.name.strip()
        if not self.name:
            raise ValidationException("Category name is required", field="name")
        if not self.slug:
            self.slug = slugify(self.name)
        if not self.slug:
            raise ValidationException("Category name must contain letters or digits", field="name")

    def rename(self, name: str) -> None:
        """Rename the category; the slug always follows the name."""
        name = name.strip()
        slug = slugify(name)
        if not slug:
            raise ValidationException("Category name must contain letters or digits", field="name")
        self.name = name
        self.slug = slug
        self.touch()

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.id) if self.id else None,
            "name": self.name,
            "slug": self.slug,
            "description": self.description,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }
