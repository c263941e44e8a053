"""Helper functions for consistent JSON error responses."""

from __future__ import annotations

import logging

from starlette.exceptions import HTTPException
from starlette.requests import Request

from .metrics_log import inc_api_5xx
from .orjson_response import ORJSONResponse

logger = logging.getLogger(__name__)

_HTTP_ERROR_CODES = {
    404: "not_found",
    405: "method_not_allowed",
}


def error_response(
    code: str, message: str, status_code: int, headers: dict[str, str] | None = None
) -> ORJSONResponse:
    return ORJSONResponse(
        {"error": {"code": code, "message": message}},
        status_code=status_code,
        headers=headers,
    )


def invalid_request(message: str = "invalid request") -> ORJSONResponse:
    return error_response("invalid_request", message, 400)


def request_too_large(message: str = "request too large") -> ORJSONResponse:
    return error_response("request_too_large", message, 413)


def internal_error(message: str = "internal server error") -> ORJSONResponse:
    return error_response("internal_error", message, 500)


async def http_exception_handler(
    request: Request, exc: HTTPException
) -> ORJSONResponse:
    """Render Starlette ``HTTPException`` instances in the JSON error shape."""
    code = _HTTP_ERROR_CODES.get(exc.status_code, "http_error")
    return error_response(
        code, str(exc.detail), exc.status_code, headers=getattr(exc, "headers", None)
    )


async def unhandled_exception_handler(
    request: Request, exc: Exception
) -> ORJSONResponse:
    logger.exception(
        "unhandled_exception",
        exc_info=exc,
        extra={"method": request.method, "path": request.url.path},
    )
    inc_api_5xx()
    return internal_error()


exception_handlers = {
    HTTPException: http_exception_handler,
    Exception: unhandled_exception_handler,
}
