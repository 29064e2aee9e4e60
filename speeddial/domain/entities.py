from __future__ import annotations

"""Domain entities for the start page: settings, pages, tiles, widget data.

Persisted and exported records use the camelCase keys of the browser
extension's storage format; Python attributes are snake_case. ``to_dict`` and
``from_dict`` are the only places where the two meet.
"""

from dataclasses import dataclass, fields, replace
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .errors import ValidationError
from .validators import (
    MAX_WEATHER_CITIES,
    UNPOSITIONED,
    clamp_columns,
    coerce_bool,
    coerce_choice,
    coerce_coordinate,
    coerce_hex_color,
    coerce_opacity,
    coerce_position,
    coerce_text,
)

THEMES: Tuple[str, ...] = ("dark", "light")
NOTES_POSITIONS: Tuple[str, ...] = ("left", "right")
WEATHER_STYLES: Tuple[str, ...] = ("detailed", "compact")
WEATHER_UNITS: Tuple[str, ...] = ("imperial", "metric")


@dataclass(frozen=True)
class SearchProvider:
    """Web search engine the search bar submits to."""

    id: str
    name: str
    url: str
    """Query URL prefix; the url-encoded search text is appended."""


SEARCH_PROVIDERS: Tuple[SearchProvider, ...] = (
    SearchProvider("google", "Google", "https://www.google.com/search?q="),
    SearchProvider("duckduckgo", "DuckDuckGo", "https://duckduckgo.com/?q="),
    SearchProvider("bing", "Bing", "https://www.bing.com/search?q="),
    SearchProvider("brave", "Brave", "https://search.brave.com/search?q="),
    SearchProvider("ecosia", "Ecosia", "https://www.ecosia.org/search?q="),
)
SEARCH_PROVIDER_IDS: Tuple[str, ...] = tuple(p.id for p in SEARCH_PROVIDERS)


@dataclass(frozen=True)
class WeatherCity:
    """A configured weather location shown in the weather widget."""

    id: str
    location: str
    lat: float
    lng: float

    @classmethod
    def from_dict(cls, payload: Any) -> "WeatherCity":
        if not isinstance(payload, Mapping):
            raise ValidationError("Weather location must be an object.", field="weatherConfigs")
        raw_id = payload.get("id")
        if raw_id is None or (isinstance(raw_id, str) and not raw_id.strip()):
            raise ValidationError("Weather location requires an id.", field="weatherConfigs")
        location = coerce_text("location", payload.get("location"))
        if not location:
            raise ValidationError("Weather location requires a name.", field="weatherConfigs")
        return cls(
            id=str(raw_id),
            location=location,
            lat=coerce_coordinate("lat", payload.get("lat"), 90.0),
            lng=coerce_coordinate("lng", payload.get("lng"), 180.0),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "location": self.location, "lat": self.lat, "lng": self.lng}


DEFAULT_WEATHER_CITY = WeatherCity(
    id="ny-weather", location="New York, NY", lat=40.7128, lng=-74.0060
)

# attribute name -> persisted key
_SETTINGS_KEYS: Dict[str, str] = {
    "cols": "cols",
    "search_provider": "searchProvider",
    "theme": "theme",
    "theme_color": "themeColor",
    "background_color": "backgroundColor",
    "background_image": "backgroundImage",
    "tile_opacity": "tileOpacity",
    "time_format_24h": "timeFormat24h",
    "open_in_new_tab": "openInNewTab",
    "show_weather": "showWeather",
    "weather_configs": "weatherConfigs",
    "show_notes": "showNotes",
    "notes_position": "notesPosition",
    "weather_style": "weatherStyle",
    "weather_unit": "weatherUnit",
}
SETTINGS_FIELDS: Dict[str, str] = {v: k for k, v in _SETTINGS_KEYS.items()}
"""Persisted key -> attribute name."""


@dataclass(frozen=True)
class Settings:
    """Global dashboard preferences. Immutable; updates go through ``merged``."""

    cols: int = 4
    search_provider: str = "google"
    theme: str = "dark"
    theme_color: str = "#f97316"
    background_color: str = "#020617"
    background_image: str = ""
    tile_opacity: float = 0.8
    time_format_24h: bool = True
    open_in_new_tab: bool = True
    show_weather: bool = True
    weather_configs: Tuple[WeatherCity, ...] = (DEFAULT_WEATHER_CITY,)
    show_notes: bool = True
    notes_position: str = "right"
    weather_style: str = "detailed"
    weather_unit: str = "imperial"

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if f.name == "weather_configs":
                value = [city.to_dict() for city in value]
            payload[_SETTINGS_KEYS[f.name]] = value
        return payload

    def merged(self, partial: Mapping[str, Any]) -> "Settings":
        """Return a copy with ``partial`` (persisted keys) validated and applied.

        Raises:
            ValidationError: On unknown keys or malformed values.
        """
        if not isinstance(partial, Mapping):
            raise ValidationError("Settings payload must be a mapping of flat keys.")
        unknown = [str(key) for key in partial if key not in SETTINGS_FIELDS]
        if unknown:
            raise ValidationError(f"Unsupported settings keys: {', '.join(sorted(unknown))}")
        updates = {SETTINGS_FIELDS[key]: coerce_setting(key, value) for key, value in partial.items()}
        return replace(self, **updates)

    @classmethod
    def from_dict(cls, payload: Any, *, strict: bool = True) -> "Settings":
        """Build settings from a persisted/exported mapping over the defaults.

        With ``strict=False`` unknown keys are dropped instead of rejected, which
        lets stored records written by newer versions still load.
        """
        if not isinstance(payload, Mapping):
            raise ValidationError("Settings must be a JSON object.")
        if not strict:
            payload = {k: v for k, v in payload.items() if k in SETTINGS_FIELDS}
        return cls().merged(payload)


def coerce_setting(key: str, value: Any) -> Any:
    """Validate a single persisted settings value."""
    if key == "cols":
        return clamp_columns(value)
    if key == "searchProvider":
        return coerce_choice(key, value, SEARCH_PROVIDER_IDS)
    if key == "theme":
        return coerce_choice(key, value, THEMES)
    if key in {"themeColor", "backgroundColor"}:
        return coerce_hex_color(key, value)
    if key == "backgroundImage":
        return coerce_text(key, value)
    if key == "tileOpacity":
        return coerce_opacity(key, value)
    if key in {"timeFormat24h", "openInNewTab", "showWeather", "showNotes"}:
        return coerce_bool(key, value)
    if key == "weatherConfigs":
        if not isinstance(value, (list, tuple)):
            raise ValidationError("weatherConfigs must be a list.", field=key)
        cities = tuple(WeatherCity.from_dict(item) for item in value)
        if len(cities) > MAX_WEATHER_CITIES:
            # surfaced as ConstraintViolation by UpdateSettings before this point
            raise ValidationError(
                f"At most {MAX_WEATHER_CITIES} weather locations are supported.", field=key
            )
        return cities
    if key == "notesPosition":
        return coerce_choice(key, value, NOTES_POSITIONS)
    if key == "weatherStyle":
        return coerce_choice(key, value, WEATHER_STYLES)
    if key == "weatherUnit":
        return coerce_choice(key, value, WEATHER_UNITS)
    raise ValidationError(f"Unhandled settings field: {key}")


@dataclass
class Page:
    """A named tab of tiles. Order lives in the owning list."""

    id: str
    name: str

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name}

    @classmethod
    def from_dict(cls, payload: Any) -> "Page":
        if not isinstance(payload, Mapping):
            raise ValidationError("Page must be an object.")
        raw_id = payload.get("id")
        if raw_id is None or str(raw_id) == "":
            raise ValidationError("Page requires an id.")
        name = payload.get("name")
        return cls(id=str(raw_id), name="" if name is None else str(name))


@dataclass
class Tile:
    """A shortcut on a page. ``position`` is dense per ``page_id``."""

    id: str
    title: str
    url: str
    page_id: str
    position: int = 0
    image_url: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "url": self.url,
            "imageUrl": self.image_url,
            "position": self.position,
            "pageId": self.page_id,
        }

    @classmethod
    def from_dict(cls, payload: Any) -> "Tile":
        if not isinstance(payload, Mapping):
            raise ValidationError("Tile must be an object.")
        raw_id = payload.get("id")
        if raw_id is None or str(raw_id) == "":
            raise ValidationError("Tile requires an id.")
        page_id = payload.get("pageId")
        if page_id is None:
            raise ValidationError("Tile requires a pageId.")
        rank = coerce_position(payload.get("position"))
        position = UNPOSITIONED if rank is None else rank
        url = payload.get("url")
        title = payload.get("title")
        image_url = payload.get("imageUrl")
        return cls(
            id=str(raw_id),
            title="" if title is None else str(title),
            url="" if url is None else str(url),
            page_id=str(page_id),
            position=position,
            image_url="" if image_url is None else str(image_url),
        )


@dataclass(frozen=True)
class WeatherObservation:
    """Current conditions returned by the weather collaborator."""

    temperature: float
    """Degrees in the unit that was requested (Fahrenheit or Celsius)."""
    humidity_pct: float
    wind_speed: float
    """mph for imperial requests, km/h for metric."""
    is_day: bool


@dataclass(frozen=True)
class CityMatch:
    """A geocoding hit the user can add as a weather location."""

    name: str
    admin_region: Optional[str]
    country: Optional[str]
    latitude: float
    longitude: float

    @property
    def label(self) -> str:
        """Display label, e.g. ``"Portland, Oregon"``."""
        suffix = self.admin_region or self.country
        return f"{self.name}, {suffix}" if suffix else self.name


@dataclass(frozen=True)
class WeatherReport:
    """Weather widget row: a city plus its observation or a failure note."""

    city: WeatherCity
    observation: Optional[WeatherObservation] = None
    error: Optional[str] = None


__all__: List[str] = [
    "CityMatch",
    "DEFAULT_WEATHER_CITY",
    "NOTES_POSITIONS",
    "Page",
    "SEARCH_PROVIDERS",
    "SEARCH_PROVIDER_IDS",
    "SETTINGS_FIELDS",
    "SearchProvider",
    "Settings",
    "THEMES",
    "Tile",
    "WEATHER_STYLES",
    "WEATHER_UNITS",
    "WeatherCity",
    "WeatherObservation",
    "WeatherReport",
    "coerce_setting",
]
