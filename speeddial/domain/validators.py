"""Pure validators and coercers for user-editable dashboard fields.

Nothing here touches state or storage. Every function either returns a
normalized value or raises :class:`ValidationError` (or
:class:`ConstraintViolation` for the weather-city cap).
"""
from __future__ import annotations

import math
import re
from typing import Any, Iterable, Optional, Sequence
from urllib.parse import urlsplit

from .errors import ConstraintViolation, ValidationError

MIN_COLUMNS = 1
MAX_COLUMNS = 12
DEFAULT_COLUMNS = 4
MAX_WEATHER_CITIES = 5
FALLBACK_TITLE = "New Site"
# sorts after every real position
UNPOSITIONED = 2**31

_SCHEME_RE = re.compile(r"^https?://", re.IGNORECASE)
_HEX_RE = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


def clamp_columns(value: Any) -> int:
    """Clamp a grid column count to [1, 12]; non-numeric input yields 4."""
    if isinstance(value, bool):
        return DEFAULT_COLUMNS
    if isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            return DEFAULT_COLUMNS
        number = int(value)
    elif isinstance(value, str):
        # parseInt semantics: leading integer part only
        match = re.match(r"^\s*([+-]?\d+)", value)
        if not match:
            return DEFAULT_COLUMNS
        number = int(match.group(1))
    else:
        return DEFAULT_COLUMNS
    if number == 0:
        # 0 is treated like an empty field
        return DEFAULT_COLUMNS
    return max(MIN_COLUMNS, min(MAX_COLUMNS, number))


def normalize_url(value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError("URL is required.", field="url")
    text = value.strip()
    if not _SCHEME_RE.match(text):
        text = "https://" + text
    return text


def derive_title(url: str, title: Optional[str] = None) -> str:
    """Return ``title`` when given, else the URL host, else a placeholder."""
    if isinstance(title, str) and title.strip():
        return title.strip()
    try:
        host = urlsplit(url).hostname
    except ValueError:
        host = None
    return host or FALLBACK_TITLE


def ensure_city_capacity(cities: Sequence[Any]) -> None:
    if len(cities) >= MAX_WEATHER_CITIES:
        raise ConstraintViolation(
            "WEATHER_CITY_LIMIT",
            f"At most {MAX_WEATHER_CITIES} weather locations are supported.",
        )


# ---------------------------------------------------------------------------
# Field coercers used by Settings parsing and UpdateSettings
# ---------------------------------------------------------------------------
def coerce_bool(name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"1", "true", "yes", "on"}:
            return True
        if lowered in {"0", "false", "no", "off", ""}:
            return False
    raise ValidationError(f"{name} must be a boolean.", field=name)


def coerce_choice(name: str, value: Any, choices: Iterable[str]) -> str:
    allowed = tuple(choices)
    if isinstance(value, str) and value.strip() in allowed:
        return value.strip()
    raise ValidationError(f"{name} must be one of: {', '.join(allowed)}.", field=name)


def coerce_hex_color(name: str, value: Any) -> str:
    if isinstance(value, str) and _HEX_RE.match(value.strip()):
        return value.strip().lower()
    raise ValidationError(f"{name} must be a hex color like #1a2b3c.", field=name)


def coerce_opacity(name: str, value: Any) -> float:
    if isinstance(value, bool):
        raise ValidationError(f"{name} must be a number.", field=name)
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"{name} must be a number.", field=name) from exc
    if not math.isfinite(number):
        raise ValidationError(f"{name} must be a number.", field=name)
    return max(0.0, min(1.0, number))


def coerce_text(name: str, value: Any) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError(f"{name} must be a string.", field=name)
    return value.strip()


def coerce_coordinate(name: str, value: Any, limit: float) -> float:
    if isinstance(value, bool):
        raise ValidationError(f"{name} must be a number.", field=name)
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"{name} must be a number.", field=name) from exc
    if not math.isfinite(number) or abs(number) > limit:
        raise ValidationError(f"{name} is out of range.", field=name)
    return number


def coerce_position(value: Any) -> Optional[int]:
    """Best-effort integer position for imported records; ``None`` if unusable."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and math.isfinite(value):
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


__all__ = [
    "DEFAULT_COLUMNS",
    "MAX_COLUMNS",
    "MAX_WEATHER_CITIES",
    "MIN_COLUMNS",
    "UNPOSITIONED",
    "clamp_columns",
    "coerce_bool",
    "coerce_choice",
    "coerce_coordinate",
    "coerce_hex_color",
    "coerce_opacity",
    "coerce_position",
    "coerce_text",
    "derive_title",
    "ensure_city_capacity",
    "normalize_url",
]
