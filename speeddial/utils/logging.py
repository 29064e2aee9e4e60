"""Root logger setup for the speed-dial CLI.

``SPEEDDIAL_LOG_LEVEL`` (name or number) beats ``SPEEDDIAL_DEBUG`` (truthy
means DEBUG), and both beat ``-v`` flags. A level that does not parse is
ignored rather than allowed to break startup.
"""
from __future__ import annotations

import logging
import os
from typing import Optional, Union

LEVEL_ENV = "SPEEDDIAL_LOG_LEVEL"
DEBUG_ENV = "SPEEDDIAL_DEBUG"

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_DATEFMT = "%H:%M:%S"
_TRUTHY = {"1", "true", "yes", "on"}


def parse_level(value: Union[int, str, None], fallback: Optional[int]) -> Optional[int]:
    """``"debug"``, ``"10"`` or ``10`` -> 10; anything unrecognized -> ``fallback``."""
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    text = (value or "").strip() if isinstance(value, str) else ""
    if not text:
        return fallback
    try:
        return int(text)
    except ValueError:
        level = logging.getLevelName(text.upper())
    return level if isinstance(level, int) else fallback


def env_level() -> Optional[int]:
    """Level forced by the environment, or ``None`` when nothing usable is set."""
    level = parse_level(os.getenv(LEVEL_ENV), None)
    if level is not None:
        return level
    if (os.getenv(DEBUG_ENV) or "").strip().lower() in _TRUTHY:
        return logging.DEBUG
    return None


def configure_root(default_level: Union[int, str] = logging.WARNING) -> int:
    forced = env_level()
    level = forced if forced is not None else parse_level(default_level, logging.WARNING)
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=level, format=_FORMAT, datefmt=_DATEFMT)
    root.setLevel(level)
    return level


def apply_verbosity(verbose: int) -> int:
    """Apply ``-v``/``-vv`` unless the environment already picked a level."""
    level = env_level()
    if level is None:
        if verbose >= 2:
            level = logging.DEBUG
        elif verbose == 1:
            level = logging.INFO
        else:
            level = logging.getLogger().level
    logging.getLogger().setLevel(level)
    return level


def http_debug_enabled() -> bool:
    """True when the environment asks for DEBUG, which also turns on urllib3 wire logs."""
    level = env_level()
    return level is not None and level <= logging.DEBUG
