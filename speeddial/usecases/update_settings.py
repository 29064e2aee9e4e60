from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping

from ..domain.entities import Settings
from ..domain.errors import ConstraintViolation, ValidationError
from ..domain.state import StateContainer
from ..domain.validators import MAX_WEATHER_CITIES

log = logging.getLogger(__name__)


@dataclass
class UpdateSettings:
    """Merge a partial settings mapping (persisted camelCase keys).

    Every value passes its field validator; unknown keys are rejected and a
    weather list longer than the cap is refused before anything changes.
    """

    container: StateContainer

    def __call__(self, partial: Mapping[str, Any]) -> Settings:
        if not isinstance(partial, Mapping):
            raise ValidationError("Settings payload must be a mapping of flat keys.")
        cities = partial.get("weatherConfigs")
        if isinstance(cities, (list, tuple)) and len(cities) > MAX_WEATHER_CITIES:
            raise ConstraintViolation(
                "WEATHER_CITY_LIMIT",
                f"At most {MAX_WEATHER_CITIES} weather locations are supported.",
            )
        state = self.container.state
        state.settings = state.settings.merged(partial)
        log.debug("Settings updated: %s", ", ".join(sorted(partial)))
        self.container.persist()
        return state.settings
