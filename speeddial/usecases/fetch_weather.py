from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List

from ..adapters.api_errors import ApiError
from ..domain.entities import WeatherReport
from ..domain.ports import WeatherPort
from ..domain.state import StateContainer
from .error_mapping import map_api_error

log = logging.getLogger(__name__)


@dataclass
class FetchWeather:
    """Look up current conditions for every configured location.

    A failing location yields a report with ``error`` set; it never hides the
    other locations. Returns an empty list while the widget is switched off.
    """

    container: StateContainer
    weather: WeatherPort

    def __call__(self) -> List[WeatherReport]:
        settings = self.container.state.settings
        if not settings.show_weather:
            return []
        reports: List[WeatherReport] = []
        for city in settings.weather_configs:
            try:
                observation = self.weather.current(city.lat, city.lng, settings.weather_unit)
            except ApiError as exc:
                err = map_api_error(exc, default_code="WEATHER_FAILED")
                log.warning("Weather lookup for %s failed: %s", city.location, err.message)
                reports.append(WeatherReport(city=city, error=err.message))
                continue
            reports.append(WeatherReport(city=city, observation=observation))
        return reports
