"""
Request context for logging.

Every request gets an ID (taken from X-Request-ID or generated) and, when
the caller names one, the restaurant it acts for. Both live in context
variables so log records can be tagged without passing them around.
"""

import logging
import uuid
from contextvars import ContextVar
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

REQUEST_ID_HEADER = "X-Request-ID"
RESTAURANT_ID_HEADER = "X-Restaurant-ID"

request_id_var: ContextVar[str] = ContextVar("request_id", default="")
restaurant_id_var: ContextVar[str] = ContextVar("restaurant_id", default="")


def get_request_id() -> str:
    """ID of the request being handled ('' outside a request)."""
    return request_id_var.get()


def get_log_restaurant_id() -> str:
    """Restaurant named by the current request's header ('' when absent)."""
    return restaurant_id_var.get()


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """
    Binds the request ID and restaurant header to the request context.

    The request ID is echoed back in the X-Request-ID response header.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        restaurant_id = (request.headers.get(RESTAURANT_ID_HEADER) or "").strip()

        request_token = request_id_var.set(request_id)
        restaurant_token = restaurant_id_var.set(restaurant_id)
        request.state.request_id = request_id

        try:
            response = await call_next(request)
        finally:
            restaurant_id_var.reset(restaurant_token)
            request_id_var.reset(request_token)

        response.headers[REQUEST_ID_HEADER] = request_id
        return response


class CorrelationIdFilter(logging.Filter):
    """
    Adds ``request_id`` and ``restaurant_id`` to every log record ('-' when unset).

    Usage:
        handler = logging.StreamHandler()
        handler.addFilter(CorrelationIdFilter())
    """

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get() or "-"
        record.restaurant_id = restaurant_id_var.get() or "-"
        return True
