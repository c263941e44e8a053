"""Logging setup shared by the API service and its CLI entry point."""

from __future__ import annotations

import logging
import os
import sys
import threading
from typing import Any, Dict

import orjson

from .log_sanitize import LogSanitizerFilter
from .middleware_request_id import RequestIDFilter

# Cache the standard LogRecord fields once so that formatters can
# efficiently filter out extra attributes on each log call.
_DEFAULT_LOG_FIELDS = set(logging.LogRecord("", 0, "", 0, "", (), None).__dict__) | {
    "message",
    "asctime",
}


def _extras(record: logging.LogRecord) -> Dict[str, Any]:
    return {
        k: v for k, v in record.__dict__.items() if k not in _DEFAULT_LOG_FIELDS
    }


class JsonFormatter(logging.Formatter):
    """Minimal JSON formatter for structured logs."""

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        payload: Dict[str, Any] = {
            "time": self.formatTime(record, "%Y-%m-%dT%H:%M:%SZ"),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(_extras(record))
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return orjson.dumps(payload, default=str).decode()


class PlainFormatter(logging.Formatter):
    """Plain formatter that appends extra fields."""

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        base = super().format(record)
        extras = [f"{k}={v}" for k, v in _extras(record).items()]
        if extras:
            if record.exc_info:
                first, *rest = base.splitlines()
                base = " ".join([first, " ".join(extras)])
                if rest:
                    base += "\n" + "\n".join(rest)
            else:
                base = " ".join([base, " ".join(extras)])
        return base


_LOG_LOCK = threading.Lock()


def setup_logging() -> None:
    """Configure the root logger once; later calls are no-ops."""
    root = logging.getLogger()
    if getattr(root, "_reqecho_logging_configured", False):
        return
    with _LOG_LOCK:
        if getattr(root, "_reqecho_logging_configured", False):
            return

        handler = logging.StreamHandler(sys.stdout)
        log_format = os.getenv("LOG_FORMAT", "plain")
        if log_format.lower() == "json":
            handler.setFormatter(JsonFormatter())
        else:
            handler.setFormatter(
                PlainFormatter("%(asctime)s %(levelname)s %(message)s")
            )
        handler.addFilter(LogSanitizerFilter())
        handler.addFilter(RequestIDFilter())

        root.handlers.clear()
        root.addHandler(handler)
        level = os.getenv("LOG_LEVEL", "INFO").upper()
        root.setLevel(getattr(logging, level, logging.INFO))

        for name in ("httpx", "asyncio"):
            logging.getLogger(name).setLevel(logging.WARNING)

        # Forward uvicorn's access logs through the same handler without propagating.
        access = logging.getLogger("uvicorn.access")
        access.handlers.clear()
        access.propagate = False
        access.addHandler(handler)

        root._reqecho_logging_configured = True  # type: ignore[attr-defined]
