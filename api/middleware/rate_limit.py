"""
Rate Limiting Middleware

Throttles the model-backed endpoints per client address.
"""

from fastapi import FastAPI, Request, status
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from api.middleware.error_handler import error_response
from config.settings import settings

limiter = Limiter(key_func=get_remote_address)

# Usage: @limiter.limit(LIMIT_ANALYSIS); the route must accept `request: Request`
LIMIT_ANALYSIS = settings.rate_limit_analysis


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    """Reject with the standard error body instead of slowapi's plain one."""
    return error_response(
        status.HTTP_429_TOO_MANY_REQUESTS,
        "RATE_LIMIT_EXCEEDED",
        f"Rate limit exceeded: {exc.detail}"
    )


def setup_rate_limiting(app: FastAPI):
    """
    Set up rate limiting for the application.

    Args:
        app: FastAPI application instance
    """
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)
