from __future__ import annotations

import logging
import threading
from typing import Callable, List, Optional

from ..adapters.api_errors import ApiError
from ..domain.entities import CityMatch
from ..domain.errors import UseCaseError
from ..domain.ports import GeocodingPort, SchedulerPort
from .error_mapping import map_api_error

log = logging.getLogger(__name__)

DEBOUNCE_KEY = "city-search"


class CitySearch:
    """Debounced, stale-safe city lookup behind the "add location" box.

    Every keystroke bumps a request id and (re)schedules one lookup after
    ``delay_ms``. A lookup only reports back if its id is still the latest,
    so a slow response for an old query never overwrites a newer one.
    Callbacks run on whatever thread the scheduler fires on; UI callers
    marshal them onto their event loop.
    """

    def __init__(
        self,
        geocoder: GeocodingPort,
        scheduler: SchedulerPort,
        on_results: Callable[[List[CityMatch]], None],
        on_error: Optional[Callable[[UseCaseError], None]] = None,
        *,
        delay_ms: int = 500,
        min_chars: int = 2,
        count: int = 5,
    ) -> None:
        self.geocoder = geocoder
        self.scheduler = scheduler
        self.on_results = on_results
        self.on_error = on_error
        self.delay_ms = delay_ms
        self.min_chars = min_chars
        self.count = count
        self._lock = threading.Lock()
        self._latest = 0

    def query_changed(self, text: str) -> int:
        """Register new search text; returns the request id it was tagged with."""
        query = (text or "").strip()
        with self._lock:
            self._latest += 1
            request_id = self._latest
        if len(query) < self.min_chars:
            self.scheduler.cancel(DEBOUNCE_KEY)
            self.on_results([])
            return request_id
        self.scheduler.schedule(DEBOUNCE_KEY, self.delay_ms, lambda: self.lookup(request_id, query))
        return request_id

    def lookup(self, request_id: int, query: str) -> None:
        try:
            matches = self.geocoder.search(query, self.count)
        except ApiError as exc:
            err = map_api_error(exc, default_code="CITY_SEARCH_FAILED")
            if self.is_current(request_id):
                log.warning("City search for %r failed: %s", query, err.message)
                if self.on_error is not None:
                    self.on_error(err)
            return
        self.deliver(request_id, matches)

    def deliver(self, request_id: int, matches: List[CityMatch]) -> bool:
        """Hand results to ``on_results`` unless a newer request superseded them."""
        if not self.is_current(request_id):
            log.debug("Dropping stale city results for request %d", request_id)
            return False
        self.on_results(matches)
        return True

    def is_current(self, request_id: int) -> bool:
        with self._lock:
            return request_id == self._latest
