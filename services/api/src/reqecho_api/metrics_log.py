from __future__ import annotations

import logging
import threading
from collections import Counter
from typing import Callable, Optional

from .config import settings

logger = logging.getLogger(__name__)

_counters: Counter[str] = Counter()
_prev_counters: Counter[str] = Counter()
_lock = threading.Lock()


def _label_key(name: str, labels: Optional[dict[str, str]]) -> str:
    if not labels:
        return name
    parts = ",".join(f"{k}={v}" for k, v in sorted(labels.items()))
    return f"{name}{{{parts}}}"


def inc(name: str, *, labels: Optional[dict[str, str]] = None, value: int = 1) -> None:
    key = _label_key(name, labels)
    with _lock:
        _counters[key] += value


def get_counters() -> dict[str, int]:
    """Return a snapshot of all counters."""
    with _lock:
        return dict(_counters)


def reset() -> None:
    with _lock:
        _counters.clear()
        _prev_counters.clear()


def emit_metrics() -> None:
    snapshot = get_counters()
    changed = False
    for k, v in snapshot.items():
        if _prev_counters.get(k) != v:
            logger.info(
                "Metric %s=%s",
                k,
                v,
                extra={"event": "metric", "metric": k, "value": v},
            )
            changed = True
    if changed:
        _prev_counters.clear()
        _prev_counters.update(snapshot)


def start(interval: int | None = None) -> Callable[[], None]:
    """Start a background metrics logger. Returns a stop callback."""

    if interval is None:
        interval = settings.metrics_log_interval
    if interval <= 0:
        return lambda: None
    stop = threading.Event()

    def run() -> None:
        while not stop.wait(interval):
            emit_metrics()

    thread = threading.Thread(target=run, daemon=True)
    thread.start()
    return stop.set


# Convenience wrappers


def inc_echo_request(route: str) -> None:
    inc("echo_requests_total", labels={"route": route})


def inc_api_5xx() -> None:
    inc("api_5xx_total")
