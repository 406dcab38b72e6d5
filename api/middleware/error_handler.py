"""
Error Handler Middleware

Every failure leaves the API as ``{"error": {"code": ..., "message": ...}}``.
Routes raise the APIError subclasses below; anything else is reported as
INTERNAL_ERROR.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.middleware.logging import get_correlation_id
from config.settings import settings

logger = logging.getLogger("evidence_analyzer.api.errors")


class APIError(Exception):
    """Base API error; subclasses fix the HTTP status and error code."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_code = "INTERNAL_ERROR"
    default_message = "An internal error occurred"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(APIError):
    """A checklist (or other resource) does not exist."""
    status_code = status.HTTP_404_NOT_FOUND
    error_code = "NOT_FOUND"
    default_message = "Resource not found"


class ValidationError(APIError):
    """Blank or missing required input."""
    status_code = status.HTTP_400_BAD_REQUEST
    error_code = "VALIDATION_ERROR"
    default_message = "Validation failed"


class UpstreamServiceError(APIError):
    """The checklist service failed."""
    status_code = status.HTTP_502_BAD_GATEWAY
    error_code = "UPSTREAM_ERROR"
    default_message = "Upstream service failed"


class ServiceUnavailableError(APIError):
    """The language-model provider could not produce a result."""
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    error_code = "SERVICE_UNAVAILABLE"
    default_message = "Service unavailable"


def error_body(code: str, message: str, **extra) -> dict:
    return {"error": {"code": code, "message": message, **extra}}


def error_response(status_code: int, code: str, message: str, **extra) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=error_body(code, message, **extra))


def _describe_validation_errors(exc: RequestValidationError) -> list[dict]:
    return [
        {
            "field": ".".join(str(loc) for loc in error["loc"]),
            "message": error["msg"],
            "type": error["type"],
        }
        for error in exc.errors()
    ]


def setup_error_handlers(app: FastAPI):
    """
    Register exception handlers on the application.

    Client errors are logged at WARNING, server-side failures at ERROR,
    each tagged with the request's correlation id.
    """

    @app.exception_handler(APIError)
    async def api_error_handler(request: Request, exc: APIError):
        level = logging.ERROR if exc.status_code >= 500 else logging.WARNING
        logger.log(level, f"[{get_correlation_id(request)}] {exc.error_code}: {exc.message}")
        return error_response(exc.status_code, exc.error_code, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return error_response(exc.status_code, "HTTP_ERROR", str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return error_response(
            status.HTTP_422_UNPROCESSABLE_ENTITY,
            "VALIDATION_ERROR",
            "Request validation failed",
            details=_describe_validation_errors(exc)
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.exception(f"[{get_correlation_id(request)}] Unhandled exception: {exc}")

        # Internal details are only exposed in development
        message = str(exc) if settings.api_env == "development" else APIError.default_message
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "INTERNAL_ERROR", message)
