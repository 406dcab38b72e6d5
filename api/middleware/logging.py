"""
Logging Middleware

One log line per request and one per response, tied together by a short
correlation id. Callers may supply their own id in X-Correlation-ID.
"""

import logging
import time
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger("evidence_analyzer.api.requests")

CORRELATION_HEADER = "X-Correlation-ID"
TIMING_HEADER = "X-Response-Time-Ms"

# Polled by load balancers; logged at DEBUG only
QUIET_PATHS = frozenset({"/health"})


class LoggingMiddleware(BaseHTTPMiddleware):
    """Log requests and stamp correlation and timing headers on responses."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        correlation_id = request.headers.get(CORRELATION_HEADER) or uuid.uuid4().hex[:8]
        request.state.correlation_id = correlation_id

        path = request.url.path
        quiet = path in QUIET_PATHS
        client_ip = request.client.host if request.client else "unknown"
        started = time.perf_counter()

        logger.log(
            logging.DEBUG if quiet else logging.INFO,
            f"[{correlation_id}] {request.method} {path} from {client_ip}"
        )

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(f"[{correlation_id}] {request.method} {path} failed: {e} ({_elapsed_ms(started):.2f}ms)")
            raise

        elapsed = _elapsed_ms(started)
        response.headers[CORRELATION_HEADER] = correlation_id
        response.headers[TIMING_HEADER] = f"{elapsed:.2f}"

        if response.status_code >= 400:
            level = logging.WARNING
        else:
            level = logging.DEBUG if quiet else logging.INFO
        logger.log(level, f"[{correlation_id}] {request.method} {path} -> {response.status_code} ({elapsed:.2f}ms)")

        return response


def _elapsed_ms(started: float) -> float:
    return (time.perf_counter() - started) * 1000


def get_correlation_id(request: Request) -> str:
    """Correlation id assigned by LoggingMiddleware, or "unknown" outside it."""
    return getattr(request.state, "correlation_id", "unknown")
