"""
Core Infrastructure Module

Cross-cutting infrastructure patterns.

Components:
- Rate Limiter: sliding window request limiting keyed by client
"""

from bilibay.core.infrastructure.rate_limiter import (
    KeyedRateLimiter,
    RateLimitExceeded,
    SlidingWindowRateLimiter,
)

__all__ = [
    "KeyedRateLimiter",
    "RateLimitExceeded",
    "SlidingWindowRateLimiter",
]
