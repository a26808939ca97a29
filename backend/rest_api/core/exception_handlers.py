"""
Exception handlers rendering every failure in the error envelope:

    {"success": false, "message": str, "code": str | null, "errors": list | null}
"""

from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic.alias_generators import to_snake
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from shared.config.settings import settings
from shared.config.logging import rest_api_logger as logger
from shared.security.rate_limit import rate_limit_exceeded_handler
from shared.utils.exceptions import AppException
from shared.utils.schemas import ErrorResponse, FieldError

# Location prefixes FastAPI adds in front of the actual field name
_LOCATION_PREFIXES = {"body", "query", "path", "header", "cookie"}

_STATUS_CODES = {
    status.HTTP_400_BAD_REQUEST: "BAD_REQUEST",
    status.HTTP_404_NOT_FOUND: "NOT_FOUND",
    status.HTTP_405_METHOD_NOT_ALLOWED: "METHOD_NOT_ALLOWED",
    status.HTTP_413_REQUEST_ENTITY_TOO_LARGE: "PAYLOAD_TOO_LARGE",
}


def _error_response(
    status_code: int,
    message: str,
    code: str | None = None,
    errors: list[Any] | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    body = ErrorResponse(message=message, code=code, errors=errors)
    return JSONResponse(status_code=status_code, content=body.model_dump(), headers=headers)


def _field_name(loc: tuple[Any, ...]) -> str:
    parts = [str(p) for p in loc]
    if len(parts) > 1 and parts[0] in _LOCATION_PREFIXES:
        # Body fields are reported by their camelCase alias; answer in snake_case
        if parts[0] == "body":
            parts = [to_snake(p) for p in parts[1:]]
        else:
            parts = parts[1:]
    return ".".join(parts) or "request"


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Domain errors: already logged when raised."""
    return _error_response(
        exc.status_code,
        str(exc.detail),
        code=exc.code,
        errors=exc.errors,
        headers=exc.headers,
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Framework errors such as unknown routes or wrong methods."""
    return _error_response(
        exc.status_code,
        str(exc.detail),
        code=_STATUS_CODES.get(exc.status_code),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Schema violations become 400 with one entry per offending field."""
    errors: list[FieldError] = [
        FieldError(field=_field_name(tuple(error.get("loc", ()))), message=error.get("msg", ""))
        for error in exc.errors()
    ]
    logger.warning(
        "Request validation failed",
        path=request.url.path,
        fields=[e.field for e in errors],
    )
    return _error_response(
        status.HTTP_400_BAD_REQUEST,
        "Validation failed",
        code="VALIDATION_ERROR",
        errors=[e.model_dump() for e in errors],
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last resort: log the traceback, hide the message outside development."""
    logger.error(
        "Unhandled exception",
        path=request.url.path,
        method=request.method,
        error=str(exc),
        exc_info=exc,
    )
    message = str(exc) if settings.environment == "development" else "Internal server error"
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        message,
        code="INTERNAL_ERROR",
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI application."""
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
