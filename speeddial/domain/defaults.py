"""Compiled-in first-run state and persisted key names."""
from __future__ import annotations

from typing import List

from .entities import Page, Settings, Tile

SETTINGS_KEY = "speeddial_settings"
TILES_KEY = "speeddial_tiles"
PAGES_KEY = "speeddial_pages"
ACTIVE_PAGE_KEY = "speeddial_active_page"
QUICK_NOTE_KEY = "speeddial_quicknote"

LIGHT_BACKGROUND = "#f3f4f6"
DARK_BACKGROUND = "#020617"


def default_settings() -> Settings:
    return Settings()


def default_pages() -> List[Page]:
    return [Page(id="home-group", name="Home"), Page(id="work-group", name="Work")]


def default_tiles() -> List[Tile]:
    seeds = (
        ("t1", "YouTube", "https://youtube.com"),
        ("t2", "Reddit", "https://reddit.com"),
        ("t3", "GitHub", "https://github.com"),
        ("t4", "ChatGPT", "https://chatgpt.com"),
    )
    return [
        Tile(id=tid, title=title, url=url, page_id="home-group", position=index)
        for index, (tid, title, url) in enumerate(seeds)
    ]


def default_active_page_id() -> str:
    return default_pages()[0].id
