from __future__ import annotations

from typing import List

from speeddial.adapters.open_meteo import OpenMeteoGeocoding, OpenMeteoWeather
from speeddial.adapters.storage_local import StorageLocal
from speeddial.adapters.storage_memory import StorageMemory
from speeddial.app.config import AppConfig
from speeddial.app.controller import AppController
from speeddial.domain.entities import CityMatch, WeatherObservation


class _Weather:
    def current(self, lat: float, lng: float, unit: str) -> WeatherObservation:
        return WeatherObservation(temperature=55.0, humidity_pct=60.0, wind_speed=4.0, is_day=True)


class _Geocoder:
    def search(self, query: str, count: int = 5) -> List[CityMatch]:
        return [CityMatch(query.title(), None, "Nowhere", 1.0, 2.0)]


class _Scheduler:
    def __init__(self) -> None:
        self.delays: List[int] = []
        self.callbacks = []

    def schedule(self, key, delay_ms, callback) -> None:
        self.delays.append(delay_ms)
        self.callbacks.append(callback)

    def cancel(self, key) -> None:
        pass


def test_controller_wires_usecases_around_one_container(tmp_path) -> None:
    store = StorageMemory()
    ctl = AppController(AppConfig(data_dir=str(tmp_path)), store=store)

    ctl.load()
    tile = ctl.create_tile("home-group", "example.com")
    ctl.select_page("work-group")

    assert ctl.state.find_tile(tile.id) is tile
    assert ctl.state.active_page_id == "work-group"
    assert ctl.create_tile.container is ctl.container
    assert ctl.import_backup.container is ctl.container
    assert store.data
    ctl.save_note("hello")
    assert ctl.load_note() == "hello"


def test_controller_defaults_to_local_storage(tmp_path) -> None:
    ctl = AppController(AppConfig(data_dir=str(tmp_path)))

    ctl.load()
    ctl.create_page("Reading")

    assert isinstance(ctl.store, StorageLocal)
    assert (tmp_path / "speeddial_pages.sdkv").exists()
    reloaded = AppController(AppConfig(data_dir=str(tmp_path)))
    reloaded.load()
    assert [p.name for p in reloaded.state.pages] == ["Home", "Work", "Reading"]


def test_controller_builds_open_meteo_lazily(tmp_path) -> None:
    ctl = AppController(AppConfig(data_dir=str(tmp_path), request_timeout_s=3, http_retries=1), store=StorageMemory())

    weather = ctl.weather
    geocoder = ctl.geocoder

    assert isinstance(weather, OpenMeteoWeather)
    assert isinstance(geocoder, OpenMeteoGeocoding)
    assert weather.http is geocoder.http
    assert weather.http.cfg.request_timeout_s == 3
    assert weather.http.cfg.retries == 1


def test_controller_weather_and_city_search_use_injected_ports(tmp_path) -> None:
    ctl = AppController(
        AppConfig(data_dir=str(tmp_path), debounce_ms=120),
        store=StorageMemory(),
        weather=_Weather(),
        geocoder=_Geocoder(),
    )
    ctl.load()

    reports = ctl.build_fetch_weather()()
    found: List[List[CityMatch]] = []
    scheduler = _Scheduler()
    search = ctl.build_city_search(found.append, scheduler=scheduler)
    search.query_changed("lima")
    scheduler.callbacks[-1]()

    assert reports[0].observation.temperature == 55.0
    assert scheduler.delays == [120]
    assert found[0][0].name == "Lima"
    ctl.add_weather_city.from_match(found[0][0])
    assert ctl.state.settings.weather_configs[-1].location == "Lima, Nowhere"
