import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request


logger = logging.getLogger(__name__)


class AccessLogMiddleware(BaseHTTPMiddleware):
    """Log basic request/response details."""

    __slots__ = ()

    async def dispatch(self, request: Request, call_next):  # type: ignore[override]
        if request.url.path == "/health":
            return await call_next(request)

        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start) * 1000

        logger.info(
            "access",
            extra={
                "method": request.method,
                "path": request.url.path,
                "route": getattr(request.state, "route_name", None),
                "status": response.status_code,
                "duration_ms": round(duration_ms, 3),
                "request_id": getattr(request.state, "request_id", ""),
            },
        )

        return response
