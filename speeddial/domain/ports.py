from __future__ import annotations

from typing import Callable, List, Optional, Protocol

from .entities import CityMatch, WeatherObservation
from .errors import UseCaseError


# ---- Ports (Hexagonal boundaries) ----
class KeyValueStorePort(Protocol):
    """Synchronous string key-value store (browser localStorage semantics).

    ``save`` is atomic per key: either the new value is recorded or the old
    one is untouched. Failures raise ``QuotaExceeded`` or ``StoreUnavailable``.
    """

    def load(self, key: str) -> Optional[str]: ...
    def save(self, key: str, value: str) -> None: ...
    def remove(self, key: str) -> None: ...
    def clear(self) -> None: ...


class WeatherPort(Protocol):
    """Current-conditions lookup for one coordinate pair."""

    def current(self, lat: float, lng: float, unit: str) -> WeatherObservation: ...


class GeocodingPort(Protocol):
    """City name search used when adding a weather location."""

    def search(self, query: str, count: int = 5) -> List[CityMatch]: ...


class SchedulerPort(Protocol):
    """Keyed one-shot timers; scheduling a key again replaces its pending timer."""

    def schedule(self, key: str, delay_ms: int, callback: Callable[[], None]) -> None: ...
    def cancel(self, key: str) -> None: ...


__all__ = ["GeocodingPort", "KeyValueStorePort", "SchedulerPort", "UseCaseError", "WeatherPort"]
