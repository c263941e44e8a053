"""Utilities for scrubbing sensitive data from logs."""

from __future__ import annotations

import logging
from typing import Any, Mapping

SENSITIVE_HEADERS = {"authorization", "proxy-authorization", "x-api-key", "cookie"}

_REDACTED = "[redacted]"


def _redact(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return [_REDACTED for _ in value]
    return _REDACTED


def scrub_headers(headers: Mapping[str, Any]) -> Mapping[str, Any]:
    """Redact sensitive header values.

    Values may be plain strings or lists of strings, as produced by the
    headers echo endpoint. A new ``dict`` is only created when at least one
    sensitive header is present. Otherwise the original mapping is returned
    unchanged.
    """

    if not any(k.lower() in SENSITIVE_HEADERS for k in headers):
        return headers

    redacted = dict(headers)
    for k in headers:
        if k.lower() in SENSITIVE_HEADERS:
            redacted[k] = _redact(headers[k])
    return redacted


class LogSanitizerFilter(logging.Filter):
    """Logging filter that redacts sensitive headers and long queries."""

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        headers = getattr(record, "headers", None)
        if isinstance(headers, Mapping):
            record.headers = scrub_headers(headers)
        query = getattr(record, "query", None)
        if isinstance(query, str) and len(query) > 256:
            record.query = query[:256] + "…"
        return True
