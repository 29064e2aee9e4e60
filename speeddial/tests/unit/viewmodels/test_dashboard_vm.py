from __future__ import annotations

from typing import List
from urllib.parse import quote

from speeddial.adapters.storage_memory import StorageMemory
from speeddial.app.config import AppConfig
from speeddial.app.controller import AppController
from speeddial.domain.errors import QuotaExceeded, StoreUnavailable
from speeddial.viewmodels.dashboard_vm import FAVICON_URL, DashboardVM


def _vm(tmp_path, store=None):
    notices: List[str] = []
    ctl = AppController(AppConfig(data_dir=str(tmp_path)), store=store or StorageMemory())
    ctl.load()
    return DashboardVM(ctl, on_notice=notices.append), ctl, notices


def test_projection_of_active_page(tmp_path) -> None:
    vm, ctl, _ = _vm(tmp_path)
    ctl.update_tile("t2", {"imageUrl": "https://img.test/reddit.png"})

    tabs = vm.tabs()
    tiles = vm.tiles()

    assert [(t.id, t.active) for t in tabs] == [("home-group", True), ("work-group", False)]
    assert [t.title for t in tiles] == ["YouTube", "Reddit", "GitHub", "ChatGPT"]
    assert tiles[0].icon_url == FAVICON_URL + quote("https://youtube.com", safe="")
    assert tiles[1].icon_url == "https://img.test/reddit.png"
    assert vm.columns == 4
    assert vm.open_target(2) == ("https://github.com", True)


def test_drop_events_reorder(tmp_path) -> None:
    vm, ctl, notices = _vm(tmp_path)

    assert vm.on_tile_drop(0, 3) is True
    assert vm.on_tab_drop(1, 0) is True

    assert [t.title for t in vm.tiles()] == ["Reddit", "GitHub", "ChatGPT", "YouTube"]
    assert [t.name for t in vm.tabs()] == ["Work", "Home"]
    assert notices == []


def test_tab_click_switches_page(tmp_path) -> None:
    vm, ctl, _ = _vm(tmp_path)

    assert vm.on_tab_click("work-group") is True

    assert vm.tiles() == []
    assert ctl.state.active_page_id == "work-group"


def test_use_case_error_becomes_notice(tmp_path) -> None:
    vm, _, notices = _vm(tmp_path)

    assert vm.on_tab_click("missing") is False

    assert notices == ["Page 'missing' not found."]
    assert vm.last_notice == "Page 'missing' not found."


def test_storage_failure_keeps_change_and_notifies(tmp_path) -> None:
    store = StorageMemory(fail_with=lambda key, value: StoreUnavailable(key))
    vm, ctl, notices = _vm(tmp_path, store)

    assert vm.on_tab_click("work-group") is False

    assert ctl.state.active_page_id == "work-group"
    assert notices == ["An error occurred while saving. Please check the log for details."]


def test_quota_failure_message_and_recovery(tmp_path) -> None:
    failing = {"on": True}
    store = StorageMemory(fail_with=lambda key, value: QuotaExceeded(key) if failing["on"] else None)
    vm, ctl, notices = _vm(tmp_path, store)

    assert vm.run(ctl.set_background_image, b"x" * 1000, "image/jpeg") is False
    assert notices[-1].startswith("Local storage is full!")

    failing["on"] = False
    assert vm.run(ctl.toggle_theme) is True
    assert vm.last_notice is None
