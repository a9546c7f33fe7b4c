from .logging_middleware import RequestLoggingMiddleware
from .rate_limit import RateLimitMiddleware

__all__ = ["RequestLoggingMiddleware", "RateLimitMiddleware"]
