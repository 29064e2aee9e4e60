"""Open-Meteo adapters for the weather widget.

``OpenMeteoWeather`` implements :class:`speeddial.domain.ports.WeatherPort` via
the forecast API's ``current`` block; ``OpenMeteoGeocoding`` implements
:class:`speeddial.domain.ports.GeocodingPort` via the geocoding search API.
Neither needs an API key.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from speeddial.adapters.api_errors import ApiPayloadError, raise_for_status
from speeddial.adapters.http_client import RetryingSession
from speeddial.domain.entities import CityMatch, WeatherObservation
from speeddial.domain.ports import GeocodingPort, WeatherPort

FORECAST_URL = "https://api.open-meteo.com/v1/forecast"
GEOCODING_URL = "https://geocoding-api.open-meteo.com/v1/search"
_CURRENT_FIELDS = "temperature_2m,weather_code,relative_humidity_2m,wind_speed_10m,is_day"


def _json_body(resp: Any, ctx: str) -> Dict[str, Any]:
    try:
        body = resp.json()
    except ValueError as exc:
        raise ApiPayloadError(f"{ctx}: response is not JSON", context=ctx) from exc
    if not isinstance(body, dict):
        raise ApiPayloadError(f"{ctx}: unexpected response shape", context=ctx)
    return body


class OpenMeteoWeather(WeatherPort):
    def __init__(self, http: RetryingSession, base_url: str = FORECAST_URL) -> None:
        self.http = http
        self.base_url = base_url
        self._log = logging.getLogger(__name__)

    def current(self, lat: float, lng: float, unit: str) -> WeatherObservation:
        params: Dict[str, Any] = {"latitude": lat, "longitude": lng, "current": _CURRENT_FIELDS}
        if unit == "imperial":
            params["temperature_unit"] = "fahrenheit"
            params["wind_speed_unit"] = "mph"
        ctx = f"weather {lat},{lng}"
        resp = self.http.get(self.base_url, params=params)
        raise_for_status(resp, ctx)
        current = _json_body(resp, ctx).get("current")
        if not isinstance(current, dict):
            raise ApiPayloadError(f"{ctx}: missing 'current' block", context=ctx)
        try:
            return WeatherObservation(
                temperature=float(current["temperature_2m"]),
                humidity_pct=float(current["relative_humidity_2m"]),
                wind_speed=float(current["wind_speed_10m"]),
                is_day=bool(current.get("is_day", 1)),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise ApiPayloadError(f"{ctx}: incomplete 'current' block", payload=current, context=ctx) from exc


class OpenMeteoGeocoding(GeocodingPort):
    def __init__(self, http: RetryingSession, base_url: str = GEOCODING_URL, language: str = "en") -> None:
        self.http = http
        self.base_url = base_url
        self.language = language
        self._log = logging.getLogger(__name__)

    def search(self, query: str, count: int = 5) -> List[CityMatch]:
        ctx = f"geocode '{query}'"
        resp = self.http.get(
            self.base_url,
            params={"name": query, "count": count, "language": self.language, "format": "json"},
        )
        raise_for_status(resp, ctx)
        # no "results" key at all when nothing matches
        results = _json_body(resp, ctx).get("results") or []
        matches: List[CityMatch] = []
        for item in results:
            match = self._to_match(item)
            if match is not None:
                matches.append(match)
            else:
                self._log.debug("Skipping malformed geocoding hit: %r", item)
        return matches

    @staticmethod
    def _to_match(item: Any) -> Optional[CityMatch]:
        if not isinstance(item, dict):
            return None
        try:
            return CityMatch(
                name=str(item["name"]),
                admin_region=item.get("admin1"),
                country=item.get("country"),
                latitude=float(item["latitude"]),
                longitude=float(item["longitude"]),
            )
        except (KeyError, TypeError, ValueError):
            return None


__all__ = ["FORECAST_URL", "GEOCODING_URL", "OpenMeteoGeocoding", "OpenMeteoWeather"]
