from __future__ import annotations

from dataclasses import dataclass, replace

from ..domain.entities import CityMatch, WeatherCity
from ..domain.errors import NotFound, ValidationError
from ..domain.naming import make_entity_id
from ..domain.state import StateContainer
from ..domain.validators import coerce_coordinate, coerce_text, ensure_city_capacity


@dataclass
class AddWeatherCity:
    container: StateContainer

    def __call__(self, location: str, lat: float, lng: float) -> WeatherCity:
        state = self.container.state
        cities = state.settings.weather_configs
        ensure_city_capacity(cities)
        name = coerce_text("location", location)
        if not name:
            raise ValidationError("Location name must not be empty.", field="location")
        city = WeatherCity(
            id=make_entity_id("w", {c.id for c in cities}),
            location=name,
            lat=coerce_coordinate("lat", lat, 90.0),
            lng=coerce_coordinate("lng", lng, 180.0),
        )
        state.settings = replace(state.settings, weather_configs=cities + (city,))
        self.container.persist()
        return city

    def from_match(self, match: CityMatch) -> WeatherCity:
        return self(match.label, match.latitude, match.longitude)


@dataclass
class RemoveWeatherCity:
    container: StateContainer

    def __call__(self, city_id: str) -> None:
        state = self.container.state
        cities = state.settings.weather_configs
        remaining = tuple(city for city in cities if city.id != str(city_id))
        if len(remaining) == len(cities):
            raise NotFound("Weather location", str(city_id))
        state.settings = replace(state.settings, weather_configs=remaining)
        self.container.persist()
