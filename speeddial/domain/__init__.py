"""Domain package exports for entities, errors and the state container."""

from .entities import (
    CityMatch,
    Page,
    SearchProvider,
    Settings,
    Tile,
    WeatherCity,
    WeatherObservation,
    WeatherReport,
)
from .errors import (
    ConstraintViolation,
    ImportDocumentError,
    NotFound,
    QuotaExceeded,
    StoreError,
    StoreUnavailable,
    UseCaseError,
    ValidationError,
)
from .state import DashboardState, StateContainer

__all__ = [
    "CityMatch",
    "ConstraintViolation",
    "DashboardState",
    "ImportDocumentError",
    "NotFound",
    "Page",
    "QuotaExceeded",
    "SearchProvider",
    "Settings",
    "StateContainer",
    "StoreError",
    "StoreUnavailable",
    "Tile",
    "UseCaseError",
    "ValidationError",
    "WeatherCity",
    "WeatherObservation",
    "WeatherReport",
]
