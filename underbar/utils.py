"""Logging setup, exception types and settings loading for underbar."""

import logging
import os
from typing import Dict, Optional, Union

from pydantic import ValidationError

from .models import LogLevel, UnderbarSettings

logger = logging.getLogger(__name__)

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}

# Loaded lazily by get_settings()
_settings: Optional[UnderbarSettings] = None


class UnderbarError(Exception):
    """Base class for errors raised by underbar."""
    pass


class InvalidArgumentError(UnderbarError, ValueError):
    """Raised when an operation is called with arguments it cannot work with."""
    pass


class MethodLookupError(UnderbarError, AttributeError):
    """Raised when invoke() cannot find the named method on an element."""
    pass


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise InvalidArgumentError(f"{name} must be a boolean flag, got {raw!r}")


def load_settings(environ: Optional[Dict[str, str]] = None) -> UnderbarSettings:
    """Build settings from UNDERBAR_* environment variables"""
    env = os.environ if environ is None else environ
    values = {}

    if "UNDERBAR_LOG_LEVEL" in env:
        values["log_level"] = env["UNDERBAR_LOG_LEVEL"]
    if "UNDERBAR_DAEMON_TIMERS" in env:
        values["daemon_timers"] = _parse_bool("UNDERBAR_DAEMON_TIMERS", env["UNDERBAR_DAEMON_TIMERS"])

    try:
        return UnderbarSettings(**values)
    except ValidationError as e:
        raise InvalidArgumentError(f"Invalid underbar settings: {e}") from e


def get_settings() -> UnderbarSettings:
    """Return the process-wide settings, loading them on first use"""
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings


def reset_settings():
    """Forget loaded settings so the next get_settings() re-reads the environment"""
    global _settings
    _settings = None


def configure_logging(level: Optional[Union[str, int, LogLevel]] = None):
    """Configure root logging for applications and demos using underbar.

    The library never installs handlers on import; call this once from the
    application entry point if you want underbar's log output.
    """
    if level is None:
        level = get_settings().log_level
    if isinstance(level, LogLevel):
        level = level.value
    if isinstance(level, str):
        level = level.upper()

    logging.basicConfig(level=level)
    logging.getLogger("underbar").setLevel(level)
    logger.debug(f"Logging configured at level {logging.getLevelName(logging.getLogger('underbar').level)}")
