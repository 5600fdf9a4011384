"""Centralized exception handlers for the FastAPI app.

Register with register_exception_handlers(app). Maps domain and framework
exceptions to HTTP responses. classify_audit_failure reuses the same mapping
so an audited failure records the status the client actually receives.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.application.services.audit_recorder import AuditFailure
from app.core.config import get_settings
from app.domain.exceptions import DirectoryException

logger = logging.getLogger(__name__)

# Map domain error_code to HTTP status
_ERROR_CODE_STATUS: dict[str, int] = {
    "AUTHENTICATION_ERROR": 401,
    "PERMISSION_DENIED": 403,
    "RESOURCE_NOT_FOUND": 404,
    "CONFLICT": 409,
    "DUPLICATE_ASSIGNMENT": 409,
    "VALIDATION_ERROR": 400,
    "INFRASTRUCTURE_ERROR": 503,
}


def status_for(exc: DirectoryException) -> int:
    """HTTP status for a domain exception (400 for unmapped codes)."""
    return _ERROR_CODE_STATUS.get(exc.error_code, 400)


def classify_audit_failure(exc: Exception) -> AuditFailure | None:
    """Outcome of a failed audited attempt.

    Request payload validation is not a mutation attempt and returns None.
    """
    if isinstance(exc, RequestValidationError):
        return None
    if isinstance(exc, DirectoryException):
        return AuditFailure(status_code=status_for(exc), message=exc.message)
    if isinstance(exc, StarletteHTTPException):
        return AuditFailure(status_code=exc.status_code, message=str(exc.detail))
    return AuditFailure(status_code=500, message=str(exc) or type(exc).__name__)


def _directory_exception_handler(
    request: Request, exc: DirectoryException
) -> JSONResponse:
    """Return JSON from DirectoryException.to_dict() with appropriate status code."""
    status = status_for(exc)
    if status >= 500:
        logger.warning(
            "%s on %s %s: %s",
            exc.error_code,
            request.method,
            request.url.path,
            exc.message,
        )
    return JSONResponse(
        status_code=status,
        content=exc.to_dict(),
    )


def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return 422 with validation error details."""
    return JSONResponse(
        status_code=422,
        content={
            "error": "VALIDATION_ERROR",
            "message": "Request validation failed",
            "details": exc.errors(),
        },
    )


def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Return JSON for Starlette HTTP exceptions (status + detail)."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": "HTTP_ERROR", "message": exc.detail},
    )


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return 500; include detail only when debug is True."""
    logger.exception("Unhandled exception: %s", exc)
    settings = get_settings()
    detail: Any = str(exc) if settings.debug else "Internal server error"
    return JSONResponse(
        status_code=500,
        content={"error": "INTERNAL_ERROR", "message": detail},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app.

    Call once after creating the app. Handlers: DirectoryException (and
    subclasses), RequestValidationError, StarletteHTTPException, generic Exception.
    """
    app.add_exception_handler(DirectoryException, _directory_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
