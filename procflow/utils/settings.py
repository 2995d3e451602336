"""Runtime settings for the console's API connection.

Values come from typed defaults, then ``PROCFLOW_*`` environment variables,
then CLI flags applied by ``procflow.web_ui.main``.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from typing import Any, Mapping, Optional

from procflow.adapters.http_client import DEFAULT_API_BASE_URL, HttpConfig
from procflow.utils.logging import env_truthy

ENV_BASE_URL = "PROCFLOW_API_BASE_URL"
ENV_TIMEOUT = "PROCFLOW_REQUEST_TIMEOUT_S"
ENV_VERIFY_TLS = "PROCFLOW_VERIFY_TLS"
ENV_MAX_WORKERS = "PROCFLOW_MAX_WORKERS"

LOGGER = logging.getLogger(__name__)


def _as_int(value: Any, default: int) -> int:
    """Convert mixed values to int with deterministic fallback."""
    try:
        return int(value)
    except (TypeError, ValueError):
        return int(default)


def _as_float(value: Any, default: float) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return float(default)


@dataclass(frozen=True)
class ApiSettings:
    """Typed connection settings shared by every page of one runtime."""

    base_url: str = DEFAULT_API_BASE_URL
    request_timeout_s: float = 10.0
    verify_tls: bool = True
    max_workers: int = 4

    def __post_init__(self) -> None:
        if not str(self.base_url or "").strip():
            raise ValueError("API base URL must not be empty.")
        if self.request_timeout_s <= 0:
            raise ValueError("Request timeout must be positive.")
        if self.max_workers < 1:
            raise ValueError("max_workers must be at least 1.")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ApiSettings":
        """Build settings from ``PROCFLOW_*`` variables, falling back to defaults."""
        env = os.environ if environ is None else environ
        defaults = cls()
        verify_raw = env.get(ENV_VERIFY_TLS)
        timeout = _as_float(env.get(ENV_TIMEOUT), defaults.request_timeout_s)
        if timeout <= 0:
            LOGGER.warning("Ignoring %s=%r; using %s.", ENV_TIMEOUT, env.get(ENV_TIMEOUT), defaults.request_timeout_s)
            timeout = defaults.request_timeout_s
        workers = _as_int(env.get(ENV_MAX_WORKERS), defaults.max_workers)
        if workers < 1:
            LOGGER.warning("Ignoring %s=%r; using %s.", ENV_MAX_WORKERS, env.get(ENV_MAX_WORKERS), defaults.max_workers)
            workers = defaults.max_workers
        return cls(
            base_url=str(env.get(ENV_BASE_URL) or defaults.base_url).strip(),
            request_timeout_s=timeout,
            verify_tls=defaults.verify_tls if verify_raw is None else env_truthy(verify_raw),
            max_workers=workers,
        )

    def with_overrides(self, **overrides: Any) -> "ApiSettings":
        """Return a copy with non-``None`` overrides applied (CLI flags)."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **changes) if changes else self

    def to_http_config(self) -> HttpConfig:
        return HttpConfig(
            base_url=self.base_url,
            request_timeout_s=self.request_timeout_s,
            verify_tls=self.verify_tls,
        )


__all__ = ["ApiSettings"]
