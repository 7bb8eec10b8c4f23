"""Global exception handlers for consistent error responses.

Design:
- AppError subclasses -> appropriate HTTP status (400, 404, 429, 500)
- Unexpected Exception -> generic 500 (safety net)
- Browsers get an HTML page; clients asking for JSON get
  ``{"error": {code, message, request_id, details?}}``
"""

import logging

from fastapi import Request
from fastapi.responses import HTMLResponse, JSONResponse, Response

from riddle_gate.core.config import settings
from riddle_gate.core.errors import (
    AppError,
    ArtifactMissingAppError,
    QuotaExceededAppError,
    StoreUnavailableAppError,
)
from riddle_gate.core.logging import get_request_id
from riddle_gate.services.pages import render_error, render_rate_limited

logger = logging.getLogger(__name__)


def status_for(exc: AppError) -> int:
    """Map a domain error to its HTTP status code."""
    if isinstance(exc, QuotaExceededAppError):
        return 429
    if isinstance(exc, ArtifactMissingAppError):
        return 404
    if isinstance(exc, StoreUnavailableAppError):
        return 500
    return 400


def _wants_json(request: Request) -> bool:
    accept = request.headers.get("accept", "")
    return "application/json" in accept and "text/html" not in accept


def _error_headers(exc: AppError) -> dict[str, str]:
    if not isinstance(exc, QuotaExceededAppError):
        return {}

    details = exc.details or {}
    headers = {"Retry-After": str(details.get("retry_after", 0))}
    if settings.rate_limit.include_headers:
        if "limit" in details:
            headers["X-RateLimit-Limit"] = str(details["limit"])
        if "remaining" in details:
            headers["X-RateLimit-Remaining"] = str(details["remaining"])
    return headers


def _render_html(exc: AppError, status_code: int) -> str:
    if isinstance(exc, QuotaExceededAppError):
        return render_rate_limited((exc.details or {}).get("retry_after", 0))
    if isinstance(exc, StoreUnavailableAppError):
        return render_error(
            "Internal server error",
            "The rate limiter is unavailable right now. Please try again later.",
        )
    if status_code == 404:
        return render_error("Not found", exc.message)
    return render_error("Something went wrong", exc.message)


async def app_error_handler(request: Request, exc: AppError) -> Response:
    """Turn a domain error into an HTML (or JSON) response.

    Args:
        request: FastAPI request object.
        exc: AppError instance (or subclass).

    Returns:
        Response with the mapped status code and, for quota errors, a
        Retry-After header.
    """
    status_code = status_for(exc)
    log = logger.error if status_code >= 500 else logger.warning
    log(
        "app_error_handled",
        extra={
            "error_code": exc.code,
            "error_message": exc.message,
            "status_code": status_code,
            "request_path": request.url.path,
            "request_id": get_request_id(),
        },
    )

    headers = _error_headers(exc)

    if _wants_json(request):
        error_content = {
            "code": exc.code,
            "message": exc.message,
            "request_id": get_request_id(),
        }
        if exc.details:
            error_content["details"] = exc.details
        return JSONResponse(
            status_code=status_code,
            content={"error": error_content},
            headers=headers,
        )

    return HTMLResponse(
        content=_render_html(exc, status_code),
        status_code=status_code,
        headers=headers,
    )


async def general_exception_handler(request: Request, exc: Exception) -> Response:
    """Fallback handler for unexpected errors.

    Logs the failure for debugging while returning a generic message, so
    no stack trace or exception text reaches the client. Called by the
    request id middleware so the response still carries the request id;
    the registration below only covers errors raised outside it.
    """
    logger.error(
        "unhandled_exception",
        exc_info=exc,
        extra={
            "error_type": type(exc).__name__,
            "error_msg": str(exc),
            "request_path": request.url.path,
            "request_method": request.method,
            "request_id": get_request_id(),
        },
    )

    message = "An unexpected error occurred. Please try again later."
    if _wants_json(request):
        return JSONResponse(
            status_code=500,
            content={
                "error": {
                    "code": "internal_server_error",
                    "message": message,
                    "request_id": get_request_id(),
                }
            },
        )
    return HTMLResponse(content=render_error("Internal server error", message), status_code=500)


def setup_exception_handlers(app) -> None:
    """Register all exception handlers with the FastAPI app.

    Args:
        app: FastAPI application instance.
    """
    app.exception_handler(AppError)(app_error_handler)
    app.exception_handler(Exception)(general_exception_handler)
