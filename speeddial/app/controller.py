"""Adapter and use-case wiring for the start-page runtime.

This module owns construction of the store, the state container, every
mutation use case, and the lazily built Open-Meteo adapters. UI front ends
(and the CLI in :mod:`speeddial.app.main`) create one instance and call its
use cases; nothing here renders anything.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional

from ..adapters.http_client import HttpConfig, RetryingSession
from ..adapters.open_meteo import OpenMeteoGeocoding, OpenMeteoWeather
from ..adapters.storage_local import StorageLocal
from ..domain.entities import CityMatch
from ..domain.errors import UseCaseError
from ..domain.ports import GeocodingPort, KeyValueStorePort, SchedulerPort, WeatherPort
from ..domain.state import DashboardState, StateContainer
from ..usecases.build_search_url import BuildSearchUrl
from ..usecases.create_page import CreatePage
from ..usecases.create_tile import CreateTile
from ..usecases.delete_page import DeletePage
from ..usecases.delete_tile import DeleteTile
from ..usecases.export_backup import ExportBackup
from ..usecases.fetch_weather import FetchWeather
from ..usecases.import_backup import ImportBackup
from ..usecases.migrate_legacy import MigrateLegacy
from ..usecases.quick_note import LoadQuickNote, SaveQuickNote
from ..usecases.rename_page import RenamePage
from ..usecases.reorder_pages import ReorderPages
from ..usecases.reorder_tiles import ReorderTiles
from ..usecases.reset_dashboard import ResetDashboard
from ..usecases.search_cities import CitySearch
from ..usecases.select_page import SelectPage
from ..usecases.set_background_image import SetBackgroundImage
from ..usecases.sort_pages import SortPages
from ..usecases.toggle_theme import ToggleTheme
from ..usecases.update_settings import UpdateSettings
from ..usecases.update_tile import UpdateTile
from ..usecases.weather_cities import AddWeatherCity, RemoveWeatherCity
from ..utils.logging import http_debug_enabled
from .config import AppConfig
from .debounce import Debouncer


class AppController:
    """Create and hold the runtime store, state container and use cases.

    Call chain:
        Front ends create one instance, call ``load()`` once, then invoke the
        use-case attributes (``create_tile``, ``reorder_tiles``, ...) in
        response to user events.
    """

    def __init__(
        self,
        config: Optional[AppConfig] = None,
        *,
        store: Optional[KeyValueStorePort] = None,
        weather: Optional[WeatherPort] = None,
        geocoder: Optional[GeocodingPort] = None,
    ) -> None:
        """Wire use cases around a single state container.

        Args:
            config: Runtime configuration; read from the environment if omitted.
            store: Key-value store override (tests pass ``StorageMemory``).
            weather: Weather port override; Open-Meteo is built on first use.
            geocoder: Geocoding port override; Open-Meteo is built on first use.
        """
        self._log = logging.getLogger(__name__)
        self.config = config or AppConfig.from_env()
        self.store = store or StorageLocal(self.config.data_dir, quota_bytes=self.config.quota_bytes)
        self.container = StateContainer(self.store)
        self._weather = weather
        self._geocoder = geocoder
        self._http: Optional[RetryingSession] = None

        self.create_tile = CreateTile(self.container)
        self.update_tile = UpdateTile(self.container)
        self.delete_tile = DeleteTile(self.container)
        self.reorder_tiles = ReorderTiles(self.container)
        self.create_page = CreatePage(self.container)
        self.rename_page = RenamePage(self.container)
        self.delete_page = DeletePage(self.container)
        self.reorder_pages = ReorderPages(self.container)
        self.select_page = SelectPage(self.container)
        self.sort_pages = SortPages(self.container)
        self.update_settings = UpdateSettings(self.container)
        self.toggle_theme = ToggleTheme(self.container)
        self.set_background_image = SetBackgroundImage(self.container)
        self.add_weather_city = AddWeatherCity(self.container)
        self.remove_weather_city = RemoveWeatherCity(self.container)
        self.export_backup = ExportBackup(self.container)
        self.import_backup = ImportBackup(self.container)
        self.migrate_legacy = MigrateLegacy(self.container)
        self.reset = ResetDashboard(self.container)
        self.build_search_url = BuildSearchUrl(self.container)
        self.load_note = LoadQuickNote(self.store)
        self.save_note = SaveQuickNote(self.store)

    @property
    def state(self) -> DashboardState:
        return self.container.state

    def load(self) -> DashboardState:
        """Load persisted state (or defaults) into the container."""
        state = self.container.initialize()
        self._log.info("Dashboard loaded from %s", getattr(self.store, "root", "memory"))
        return state

    # ------------------------------------------------------------------
    # Weather collaborators
    # ------------------------------------------------------------------
    def _session(self) -> RetryingSession:
        if self._http is None:
            if http_debug_enabled():
                logging.getLogger("urllib3").setLevel(logging.DEBUG)
            self._http = RetryingSession(
                HttpConfig(
                    request_timeout_s=self.config.request_timeout_s,
                    retries=self.config.http_retries,
                )
            )
        return self._http

    @property
    def weather(self) -> WeatherPort:
        if self._weather is None:
            self._weather = OpenMeteoWeather(self._session())
        return self._weather

    @property
    def geocoder(self) -> GeocodingPort:
        if self._geocoder is None:
            self._geocoder = OpenMeteoGeocoding(self._session())
        return self._geocoder

    def build_fetch_weather(self) -> FetchWeather:
        return FetchWeather(self.container, self.weather)

    def build_city_search(
        self,
        on_results: Callable[[List[CityMatch]], None],
        on_error: Optional[Callable[[UseCaseError], None]] = None,
        scheduler: Optional[SchedulerPort] = None,
    ) -> CitySearch:
        return CitySearch(
            self.geocoder,
            scheduler or Debouncer(),
            on_results,
            on_error,
            delay_ms=self.config.debounce_ms,
        )


__all__ = ["AppController"]
