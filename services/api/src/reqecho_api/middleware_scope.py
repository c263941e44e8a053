from __future__ import annotations

from contextlib import ExitStack
from typing import Iterable, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from .config import echo_scopes
from .scopes import ScopeContext, enter_scope


class ScopeMiddleware(BaseHTTPMiddleware):
    """Enter the configured scopes around each request and expose a snapshot."""

    def __init__(self, app, scopes: Optional[Iterable[str]] = None) -> None:
        super().__init__(app)
        self.scopes = tuple(scopes) if scopes is not None else echo_scopes()

    async def dispatch(self, request: Request, call_next) -> Response:  # type: ignore[override]
        with ExitStack() as stack:
            context = ScopeContext()
            for name in self.scopes:
                context = stack.enter_context(enter_scope(name))
            request.state.scope_context = context
            return await call_next(request)
