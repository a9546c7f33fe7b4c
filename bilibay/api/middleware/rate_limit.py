"""
Per-client rate limiting middleware.

Authentication endpoints get a tighter budget than the rest of the API.
"""

import logging
import math
from collections.abc import Callable
from typing import Any

from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response
from starlette.types import ASGIApp

from bilibay.config.settings import Settings, get_settings
from bilibay.core.infrastructure import KeyedRateLimiter, RateLimitExceeded

logger = logging.getLogger(__name__)


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    Sliding-window limit per client IP.

    ``/auth`` paths share ``AUTH_RATE_LIMIT`` requests per window, all
    other API paths ``API_RATE_LIMIT``. Over the limit the client gets 429
    with a ``Retry-After`` header.

    The key is the socket peer address. Forwarded headers are only honoured
    after uvicorn rewrites the peer from them for ``--forwarded-allow-ips``.
    """

    def __init__(self, app: ASGIApp, settings: Settings | None = None) -> None:
        super().__init__(app)
        self._settings = settings or get_settings()
        window = self._settings.RATE_LIMIT_WINDOW_SECONDS
        self._auth_prefix = f"{self._settings.API_V1_STR}/auth"
        self.auth_limiter = KeyedRateLimiter(self._settings.AUTH_RATE_LIMIT, window)
        self.api_limiter = KeyedRateLimiter(self._settings.API_RATE_LIMIT, window)

    async def dispatch(self, request: Request, call_next: Callable[[Request], Any]) -> Response:
        path = request.url.path
        if not self._settings.rate_limit_active or not path.startswith(self._settings.API_V1_STR):
            return await call_next(request)

        limiter = self.auth_limiter if path.startswith(self._auth_prefix) else self.api_limiter
        try:
            await limiter.hit(request.client.host if request.client else "unknown")
        except RateLimitExceeded as e:
            retry_after = max(1, math.ceil(e.retry_after or 0))
            return JSONResponse(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                content={
                    "error": True,
                    "message": "Too many requests, please try again later",
                    "status_code": status.HTTP_429_TOO_MANY_REQUESTS,
                },
                headers={"Retry-After": str(retry_after)},
            )

        return await call_next(request)
