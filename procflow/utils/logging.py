"""Root logging setup for the console process.

``configure_root`` is called once from ``procflow.web_ui.main``; every other
module only does ``logging.getLogger(__name__)``.
"""

from __future__ import annotations

import logging
import os
from typing import Mapping, Optional, Union

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
LOG_DATEFMT = "%H:%M:%S"
ENV_LOG_LEVEL = "PROCFLOW_LOG_LEVEL"
ENV_DEBUG = "PROCFLOW_DEBUG"

# Kept at WARNING unless the console itself runs at DEBUG.
THIRD_PARTY_LOGGERS = ("urllib3", "uvicorn.access", "watchfiles")

_TRUTHY = frozenset({"1", "true", "yes", "on"})


def env_truthy(value: Optional[str]) -> bool:
    return value is not None and value.strip().lower() in _TRUTHY


def parse_level(value: Union[int, str, None], fallback: int = logging.INFO) -> int:
    """Level from a number or a level name (``"debug"``, ``"30"``); unknown -> fallback."""
    if isinstance(value, int):
        return value
    text = (value or "").strip()
    if not text:
        return fallback
    if text.isdigit():
        return int(text)
    level = logging.getLevelName(text.upper())
    return level if isinstance(level, int) else fallback


def level_from_env(environ: Optional[Mapping[str, str]] = None) -> Optional[int]:
    """``PROCFLOW_LOG_LEVEL`` wins over ``PROCFLOW_DEBUG``; ``None`` when neither is set."""
    env = os.environ if environ is None else environ
    explicit = env.get(ENV_LOG_LEVEL)
    if explicit and explicit.strip():
        return parse_level(explicit)
    if env_truthy(env.get(ENV_DEBUG)):
        return logging.DEBUG
    return None


def quiet_third_party(level: int) -> None:
    third_party_level = logging.DEBUG if level <= logging.DEBUG else logging.WARNING
    for name in THIRD_PARTY_LOGGERS:
        logging.getLogger(name).setLevel(third_party_level)


def configure_root(
    default_level: Union[int, str] = logging.INFO,
    environ: Optional[Mapping[str, str]] = None,
) -> int:
    """Install the compact root format once and return the effective level."""
    env_level = level_from_env(environ)
    effective = env_level if env_level is not None else parse_level(default_level)

    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=effective, format=LOG_FORMAT, datefmt=LOG_DATEFMT)
    root.setLevel(effective)
    quiet_third_party(effective)
    return effective


def level_name(level: int) -> str:
    return logging.getLevelName(level)


__all__ = [
    "configure_root",
    "env_truthy",
    "level_from_env",
    "level_name",
    "parse_level",
    "quiet_third_party",
]
