"""Request echo handlers.

Each handler is a plain function of the request and the active
:class:`~reqecho_api.scopes.ScopeContext`. They only read their inputs and
return a JSON-serialisable value; serialisation and status codes belong to
the route adapters in :mod:`reqecho_api.routes`.
"""

from __future__ import annotations

from starlette.requests import Request

from .scopes import ScopeContext


def query_params(request: Request, context: ScopeContext) -> dict[str, str]:
    """Return the parsed query string; the last value wins for repeated keys."""
    return dict(request.query_params)


def headers(request: Request, context: ScopeContext) -> dict[str, list[str]]:
    """Return every header name mapped to its values in arrival order."""
    result: dict[str, list[str]] = {}
    for raw_name, raw_value in request.headers.raw:
        name = raw_name.decode("latin-1")
        result.setdefault(name, []).append(raw_value.decode("latin-1"))
    return result


def scopes(request: Request, context: ScopeContext) -> list[str]:
    return list(context.names)
