"""API service entrypoint using Starlette."""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.routing import Route

from . import __version__
from .access_log import AccessLogMiddleware
from .config import cors_origins, settings
from .errors import exception_handlers
from .logging import setup_logging
from .metrics_log import get_counters
from .metrics_log import start as start_metrics
from .middleware_request_id import RequestIDMiddleware
from .middleware_scope import ScopeMiddleware
from .middleware_security import SecurityMiddleware
from .orjson_response import ORJSONResponse
from .routes import ECHO_ROUTES, RouteSpec, build_routes

logger = logging.getLogger(__name__)

_START_TIME = time.monotonic()


async def health(request: Request) -> ORJSONResponse:
    """Health check endpoint."""
    req_id = getattr(request.state, "request_id", "")
    payload = {
        "status": "ok",
        "request_id": req_id,
        "version": __version__,
        "uptime_ms": int((time.monotonic() - _START_TIME) * 1000),
    }
    return ORJSONResponse(payload)


async def metrics(request: Request) -> ORJSONResponse:
    """Expose internal metrics counters."""
    return ORJSONResponse(get_counters())


@asynccontextmanager
async def lifespan(app: Starlette) -> AsyncIterator[None]:
    setup_logging()
    stop_metrics = start_metrics()
    logger.info(
        "startup",
        extra={"routes": [spec.name for spec in app.state.echo_routes]},
    )
    try:
        yield
    finally:
        stop_metrics()
        logger.info("shutdown")


def create_app(
    specs: tuple[RouteSpec, ...] = ECHO_ROUTES,
    *,
    scopes: Optional[tuple[str, ...]] = None,
) -> Starlette:
    """Build the Starlette application serving the echo routes."""
    routes = build_routes(specs) + [
        Route("/health", health, name="health"),
        Route("/metrics", metrics, name="metrics"),
    ]
    middleware = [
        Middleware(RequestIDMiddleware),
        Middleware(SecurityMiddleware, max_request_bytes=settings.max_request_bytes),
        Middleware(AccessLogMiddleware),
        Middleware(ScopeMiddleware, scopes=scopes),
    ]
    origins = cors_origins()
    if origins:
        middleware.insert(0, Middleware(CORSMiddleware, allow_origins=origins))

    application = Starlette(
        routes=routes,
        middleware=middleware,
        exception_handlers=exception_handlers,
        lifespan=lifespan,
    )
    application.state.echo_routes = specs
    return application


app = create_app()


def run() -> None:  # pragma: no cover - convenience for manual runs
    import uvicorn

    setup_logging()
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        loop="asyncio",
        http="h11",
        access_log=False,
    )


if __name__ == "__main__":  # pragma: no cover - convenience for manual runs
    run()
