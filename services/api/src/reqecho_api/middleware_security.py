"""Security related middleware."""

from __future__ import annotations

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from .errors import invalid_request, request_too_large, unhandled_exception_handler


class SecurityMiddleware(BaseHTTPMiddleware):
    """Add security headers, enforce a request size limit and render unhandled
    errors as JSON 500 responses."""

    def __init__(self, app, max_request_bytes: int) -> None:
        super().__init__(app)
        self.max_request_bytes = max_request_bytes

    async def dispatch(self, request: Request, call_next) -> Response:  # type: ignore[override]
        length = request.headers.get("content-length")
        if length:
            try:
                if int(length) > self.max_request_bytes:
                    return request_too_large()
            except ValueError:
                return invalid_request("invalid Content-Length header")
        try:
            response = await call_next(request)
        except Exception as exc:
            response = await unhandled_exception_handler(request, exc)
        headers = response.headers
        headers.setdefault("X-Content-Type-Options", "nosniff")
        headers.setdefault("Referrer-Policy", "no-referrer")
        headers.setdefault("X-Frame-Options", "DENY")
        return response
