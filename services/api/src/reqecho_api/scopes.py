"""Named execution scopes active while a request is handled.

Scopes are tracked on a :class:`~contextvars.ContextVar` so concurrent
requests on one event loop never observe each other's scopes. Handlers do
not read the context var themselves: middleware takes an immutable
:class:`ScopeContext` snapshot and the route adapters pass it in explicitly.
"""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Iterator

_active_scopes: ContextVar[tuple[str, ...]] = ContextVar("active_scopes", default=())


@dataclass(frozen=True, slots=True)
class ScopeContext:
    """Names of the active scopes, outermost first."""

    names: tuple[str, ...] = ()

    @classmethod
    def current(cls) -> "ScopeContext":
        return cls(_active_scopes.get())

    def __contains__(self, name: object) -> bool:
        return name in self.names


@contextmanager
def enter_scope(name: str) -> Iterator[ScopeContext]:
    """Push ``name`` onto the active scopes for the duration of the block."""
    if not name:
        raise ValueError("scope name must be a non-empty string")
    token = _active_scopes.set(_active_scopes.get() + (name,))
    try:
        yield ScopeContext.current()
    finally:
        _active_scopes.reset(token)


def scope_names() -> list[str]:
    return list(_active_scopes.get())
