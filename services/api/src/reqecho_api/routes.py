"""Route table for the echo endpoints.

Routes are declared once in :data:`ECHO_ROUTES` and converted to Starlette
routes by :func:`build_routes` when the application is created.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterable

from starlette.requests import Request
from starlette.routing import Route

from . import controller
from .metrics_log import inc_echo_request
from .orjson_response import ORJSONResponse
from .scopes import ScopeContext

logger = logging.getLogger(__name__)

Handler = Callable[[Request, ScopeContext], Any]


@dataclass(frozen=True, slots=True)
class RouteSpec:
    """A handler bound to a URL path and a route name."""

    path: str
    name: str
    handler: Handler
    methods: tuple[str, ...] = ("GET",)


ECHO_ROUTES: tuple[RouteSpec, ...] = (
    RouteSpec("/get/query-params", "get.queryParams", controller.query_params),
    RouteSpec("/get/headers", "get.headers", controller.headers),
    RouteSpec("/get/scopes", "get.scopes", controller.scopes),
)


def _scope_context(request: Request) -> ScopeContext:
    context = getattr(request.state, "scope_context", None)
    if isinstance(context, ScopeContext):
        return context
    return ScopeContext.current()


def endpoint(spec: RouteSpec) -> Callable[[Request], Any]:
    """Wrap ``spec.handler`` into an async Starlette endpoint."""

    async def _endpoint(request: Request) -> ORJSONResponse:
        request.state.route_name = spec.name
        body = spec.handler(request, _scope_context(request))
        inc_echo_request(spec.name)
        logger.debug(
            "echo",
            extra={
                "route": spec.name,
                "headers": dict(request.headers),
                "query": request.url.query,
            },
        )
        return ORJSONResponse(body)

    _endpoint.__name__ = spec.handler.__name__
    _endpoint.__doc__ = spec.handler.__doc__
    return _endpoint


def build_routes(specs: Iterable[RouteSpec] = ECHO_ROUTES) -> list[Route]:
    """Return Starlette routes for ``specs``.

    Raises:
        ValueError: If two specs share a path or a name.
    """
    routes: list[Route] = []
    seen_paths: dict[str, str] = {}
    seen_names: set[str] = set()
    for spec in specs:
        if spec.path in seen_paths:
            raise ValueError(
                f"Duplicate route path {spec.path!r}: "
                f"registered by {seen_paths[spec.path]!r} and {spec.name!r}"
            )
        if spec.name in seen_names:
            raise ValueError(f"Duplicate route name {spec.name!r}")
        seen_paths[spec.path] = spec.name
        seen_names.add(spec.name)
        routes.append(
            Route(spec.path, endpoint(spec), methods=list(spec.methods), name=spec.name)
        )
    return routes
