"""Root logger setup for the desktop app.

Environment overrides win over the preferences toggle:

- ``FOLIO_LOG_LEVEL``: explicit level, by name (``"debug"``) or number.
- ``FOLIO_DEBUG_LOGGING`` / ``FOLIO_DEBUG``: truthy value forces DEBUG.
"""

from __future__ import annotations

import logging
import os
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_DATEFMT = "%H:%M:%S"
LEVEL_ENV = "FOLIO_LOG_LEVEL"
DEBUG_ENVS = ("FOLIO_DEBUG_LOGGING", "FOLIO_DEBUG")

# Image decoding and PDF writing chatter stays out of DEBUG sessions.
LIBRARY_LOGGERS = ("PIL", "reportlab")
LIBRARY_LEVEL = logging.INFO

_TRUTHY = {"1", "true", "yes", "on"}


def parse_level(value: Union[str, int, None], fallback: int = logging.INFO) -> int:
    if isinstance(value, int):
        return value
    text = (value or "").strip()
    if not text:
        return fallback
    if text.isdigit():
        return int(text)
    level = logging.getLevelName(text.upper())
    return level if isinstance(level, int) else fallback


def env_level() -> Optional[int]:
    """Level forced by the environment, or ``None`` when nothing is set."""
    explicit = os.getenv(LEVEL_ENV)
    if explicit and explicit.strip():
        return parse_level(explicit)
    for name in DEBUG_ENVS:
        if (os.getenv(name) or "").strip().lower() in _TRUTHY:
            return logging.DEBUG
    return None


def env_forces_debug() -> bool:
    level = env_level()
    return level is not None and level <= logging.DEBUG


def _tame_library_loggers() -> None:
    for name in LIBRARY_LOGGERS:
        logging.getLogger(name).setLevel(LIBRARY_LEVEL)


def configure_root(default_level: Union[int, str] = logging.INFO) -> int:
    """Install the compact handler once and set the effective root level."""
    level = env_level()
    if level is None:
        level = parse_level(default_level)
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=LOG_DATEFMT)
    root.setLevel(level)
    _tame_library_loggers()
    return level


def apply_gui_preferences(debug_enabled: bool) -> int:
    """Apply the preferences "debug logging" toggle; returns the effective level."""
    level = env_level()
    if level is None:
        level = logging.DEBUG if debug_enabled else logging.INFO
    logging.getLogger().setLevel(level)
    return level


def level_name(level: int) -> str:
    return logging.getLevelName(level)


__all__ = [
    "apply_gui_preferences",
    "configure_root",
    "env_forces_debug",
    "env_level",
    "level_name",
    "parse_level",
]
