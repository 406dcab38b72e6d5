"""
API Middleware Package

Error handling, rate limiting and request logging.
"""

from api.middleware.error_handler import (
    APIError,
    NotFoundError,
    ValidationError,
    UpstreamServiceError,
    ServiceUnavailableError,
    setup_error_handlers,
)
from api.middleware.logging import LoggingMiddleware
from api.middleware.rate_limit import setup_rate_limiting, limiter, LIMIT_ANALYSIS

__all__ = [
    "APIError",
    "NotFoundError",
    "ValidationError",
    "UpstreamServiceError",
    "ServiceUnavailableError",
    "setup_error_handlers",
    "LoggingMiddleware",
    "setup_rate_limiting",
    "limiter",
    "LIMIT_ANALYSIS",
]
