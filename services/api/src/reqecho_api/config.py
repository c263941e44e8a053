"""Environment configuration helpers."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from functools import lru_cache

logger = logging.getLogger(__name__)


DEFAULT_SCOPES: tuple[str, ...] = ("http", "request")


def _int_env(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        logger.warning("Invalid %s=%r, using default %s", name, value, default)
        return default


def _list_env(name: str) -> list[str]:
    value = os.getenv(name, "")
    return [v.strip() for v in value.split(",") if v.strip()]


@dataclass
class Settings:
    """Configuration settings loaded from the environment."""

    host: str = field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: _int_env("PORT", 8080))
    max_request_bytes: int = field(
        default_factory=lambda: _int_env("MAX_REQUEST_BYTES", 1_048_576)
    )
    metrics_log_interval: int = field(
        default_factory=lambda: _int_env("METRICS_LOG_INTERVAL", 60)
    )

    def __post_init__(self) -> None:
        if not 0 < self.port < 65536:
            logger.warning("PORT %s out of range, using 8080", self.port)
            self.port = 8080
        if self.max_request_bytes <= 0:
            logger.warning(
                "MAX_REQUEST_BYTES must be positive, got %s; using 1048576",
                self.max_request_bytes,
            )
            self.max_request_bytes = 1_048_576

    def reload(self) -> None:
        """Reload settings from the current environment."""
        new = type(self)()
        self.__dict__.update(vars(new))


settings = Settings()


@lru_cache()
def cors_origins() -> list[str]:
    return _list_env("CORS_ORIGINS")


@lru_cache()
def request_id_header() -> str:
    """Header name used for request correlation."""
    return os.getenv("REQUEST_ID_HEADER", "X-Request-ID")


def echo_scopes() -> tuple[str, ...]:
    """Scope names entered around every HTTP request, outermost first."""
    names = _list_env("ECHO_SCOPES")
    return tuple(names) if names else DEFAULT_SCOPES


def clear_caches() -> None:
    """Forget cached accessor values so the environment is read again."""
    cors_origins.cache_clear()
    request_id_header.cache_clear()
