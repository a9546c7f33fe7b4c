"""
Shared utilities module

Domain-agnostic helpers used across the application.
"""

from .logger import JSONFormatter, configure_logging
from .pagination import Page, page_offset

__all__ = ["JSONFormatter", "configure_logging", "Page", "page_offset"]
