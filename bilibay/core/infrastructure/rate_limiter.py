"""
Rate Limiter Infrastructure

Sliding window rate limiting, optionally partitioned by a client key.
"""

import asyncio
import logging
import time

logger = logging.getLogger(__name__)


class RateLimitExceeded(Exception):
    """Exception raised when rate limit is exceeded."""

    def __init__(self, message: str, retry_after: float | None = None):
        self.retry_after = retry_after
        super().__init__(message)


class SlidingWindowRateLimiter:
    """
    Sliding window rate limiter.

    Tracks requests in a sliding time window for more accurate rate limiting.

    Example:
        ```python
        limiter = SlidingWindowRateLimiter(max_requests=100, window_seconds=900.0)

        if limiter.record_request():
            # Process request
            pass
        ```
    """

    def __init__(self, max_requests: int, window_seconds: float):
        """
        Initialize sliding window limiter.

        Args:
            max_requests: Maximum requests in window
            window_seconds: Window size in seconds
        """
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.requests: list[float] = []

    def _clean_old_requests(self) -> None:
        """Remove requests outside the window."""
        cutoff = time.monotonic() - self.window_seconds
        self.requests = [r for r in self.requests if r > cutoff]

    def is_allowed(self) -> bool:
        """Check if request is allowed."""
        self._clean_old_requests()
        return len(self.requests) < self.max_requests

    def record_request(self) -> bool:
        """
        Record a request if allowed.

        Returns:
            True if request recorded, False if rate limited
        """
        self._clean_old_requests()

        if len(self.requests) >= self.max_requests:
            return False

        self.requests.append(time.monotonic())
        return True

    @property
    def current_count(self) -> int:
        """Get current request count in window."""
        self._clean_old_requests()
        return len(self.requests)

    @property
    def remaining(self) -> int:
        """Get remaining requests allowed."""
        return max(0, self.max_requests - self.current_count)

    def time_until_reset(self) -> float:
        """Get time until oldest request expires."""
        self._clean_old_requests()
        if not self.requests:
            return 0.0
        return max(0.0, self.requests[0] + self.window_seconds - time.monotonic())


class KeyedRateLimiter:
    """
    One sliding window per key (typically the client IP).

    Idle windows are swept at most once per window length, so memory stays
    bounded by the number of recently active clients.
    """

    def __init__(self, max_requests: int, window_seconds: float):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._limiters: dict[str, SlidingWindowRateLimiter] = {}
        self._lock = asyncio.Lock()
        self._last_prune = time.monotonic()

    def _get(self, key: str) -> SlidingWindowRateLimiter:
        limiter = self._limiters.get(key)
        if limiter is None:
            limiter = SlidingWindowRateLimiter(self.max_requests, self.window_seconds)
            self._limiters[key] = limiter
        return limiter

    async def hit(self, key: str) -> SlidingWindowRateLimiter:
        """
        Record a request for ``key``.

        Raises:
            RateLimitExceeded: When the key has used up its window
        """
        async with self._lock:
            if time.monotonic() - self._last_prune >= self.window_seconds:
                self._prune()
            limiter = self._get(key)
            if not limiter.record_request():
                retry_after = limiter.time_until_reset()
                logger.warning(f"Rate limit exceeded for {key} (retry after {retry_after:.0f}s)")
                raise RateLimitExceeded(f"Rate limit exceeded for {key}", retry_after=retry_after)
            return limiter

    def _prune(self) -> None:
        self._last_prune = time.monotonic()
        idle = [key for key, limiter in self._limiters.items() if limiter.current_count == 0]
        for key in idle:
            del self._limiters[key]

    @property
    def tracked_keys(self) -> int:
        return len(self._limiters)

    def reset(self) -> None:
        """Forget every tracked key."""
        self._limiters.clear()
