"""Runtime configuration read from the environment.

Values fall back deterministically when a variable is unset or malformed;
command-line flags override whatever is loaded here.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Mapping, Optional

log = logging.getLogger(__name__)

DEFAULT_QUOTA_BYTES = 5 * 1024 * 1024


def _default_data_dir() -> str:
    base = os.getenv("XDG_DATA_HOME") or os.path.join(Path.home(), ".local", "share")
    return os.path.join(base, "speeddial")


def _as_int(name: str, value: Any, default: Optional[int]) -> Optional[int]:
    """Convert mixed values to int with deterministic fallback."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        log.warning("Ignoring non-integer %s=%r", name, value)
        return default


@dataclass
class AppConfig:
    """Typed runtime settings for storage, HTTP and input debouncing."""

    data_dir: str = ""
    quota_bytes: Optional[int] = DEFAULT_QUOTA_BYTES
    request_timeout_s: int = 10
    http_retries: int = 2
    debounce_ms: int = 500

    def __post_init__(self) -> None:
        if not self.data_dir:
            self.data_dir = _default_data_dir()

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "AppConfig":
        env = os.environ if environ is None else environ
        defaults = cls()
        quota = _as_int("SPEEDDIAL_QUOTA_BYTES", env.get("SPEEDDIAL_QUOTA_BYTES"), defaults.quota_bytes)
        return cls(
            data_dir=(env.get("SPEEDDIAL_DATA_DIR") or "").strip() or defaults.data_dir,
            # 0 or a negative quota disables the cap
            quota_bytes=quota if quota and quota > 0 else None,
            request_timeout_s=max(
                1,
                _as_int("SPEEDDIAL_REQUEST_TIMEOUT_S", env.get("SPEEDDIAL_REQUEST_TIMEOUT_S"), 10) or 10,
            ),
            http_retries=max(0, _as_int("SPEEDDIAL_HTTP_RETRIES", env.get("SPEEDDIAL_HTTP_RETRIES"), 2) or 0),
            debounce_ms=max(1, _as_int("SPEEDDIAL_DEBOUNCE_MS", env.get("SPEEDDIAL_DEBOUNCE_MS"), 500) or 500),
        )

    def with_overrides(self, **changes: Any) -> "AppConfig":
        """Return a copy with non-``None`` overrides applied."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})


__all__ = ["AppConfig", "DEFAULT_QUOTA_BYTES"]
