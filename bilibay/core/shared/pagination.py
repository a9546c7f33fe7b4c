"""
Page arithmetic shared by every paginated listing.
"""

import math
from dataclasses import dataclass, field
from typing import Any


def page_offset(page: int, limit: int) -> int:
    """Offset of the first row of a 1-based page."""
    return (max(page, 1) - 1) * limit


@dataclass
class Page:
    """One page of a listing plus the numbers a client needs to navigate."""

    items: list[Any] = field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = 20

    @property
    def pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "items": self.items,
            "total": self.total,
            "page": self.page,
            "limit": self.limit,
            "pages": self.pages,
        }
