"""Application configuration and defaults."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name, "").strip().lower()
    if not raw:
        return default
    if raw in _TRUE_VALUES:
        return True
    if raw in _FALSE_VALUES:
        return False
    logger.warning("Ignoring invalid boolean %s=%r, using %s", name, raw, default)
    return default


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring invalid integer %s=%r, using %s", name, raw, default)
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring invalid number %s=%r, using %s", name, raw, default)
        return default


def _env_str(name: str, default: str = "") -> str:
    return os.environ.get(name, default)


@dataclass
class Settings:
    """Runtime options, each resolved from a ``DRIFTWATCH_*`` env var when set.

    ``github_token`` is read from the plain ``GITHUB_TOKEN`` variable so the
    same token used by other GitHub tooling is picked up.
    """

    collect_on_startup: bool = field(default_factory=lambda: _env_bool("DRIFTWATCH_COLLECT_ON_STARTUP", True))
    refresh_on_startup: bool = field(default_factory=lambda: _env_bool("DRIFTWATCH_REFRESH_ON_STARTUP", True))
    refresh_interval_seconds: float = field(
        default_factory=lambda: _env_float("DRIFTWATCH_REFRESH_INTERVAL_SECONDS", 3600.0)
    )
    cache_validity_seconds: int = field(default_factory=lambda: _env_int("DRIFTWATCH_CACHE_VALIDITY_SECONDS", 3600))
    worker_count: int = field(default_factory=lambda: _env_int("DRIFTWATCH_WORKERS", 10))
    connect_timeout: float = field(default_factory=lambda: _env_float("DRIFTWATCH_CONNECT_TIMEOUT", 10.0))
    read_timeout: float = field(default_factory=lambda: _env_float("DRIFTWATCH_READ_TIMEOUT", 15.0))
    fetch_cache_size: int = field(default_factory=lambda: _env_int("DRIFTWATCH_FETCH_CACHE_SIZE", 512))
    fetch_cache_ttl_seconds: float = field(
        default_factory=lambda: _env_float("DRIFTWATCH_FETCH_CACHE_TTL_SECONDS", 3600.0)
    )
    github_token: str = field(default_factory=lambda: _env_str("GITHUB_TOKEN"))
    inventory_file: str = field(default_factory=lambda: _env_str("DRIFTWATCH_INVENTORY"))
    argo_namespace: str = field(default_factory=lambda: _env_str("DRIFTWATCH_ARGO_NAMESPACE"))
    log_level: str = field(default_factory=lambda: _env_str("DRIFTWATCH_LOG_LEVEL", "WARNING"))

    def __post_init__(self):
        if self.worker_count < 1:
            logger.warning("worker_count must be at least 1, got %d; using 1", self.worker_count)
            self.worker_count = 1

    @property
    def http_timeout(self) -> tuple[float, float]:
        """``(connect, read)`` tuple in the form ``requests`` expects."""
        return (self.connect_timeout, self.read_timeout)


# Global singleton
settings = Settings()
