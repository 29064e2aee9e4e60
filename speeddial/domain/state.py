"""State container: the single owner of settings, pages, tiles and the active page.

The container loads each persisted key independently (a corrupt ``tiles``
value does not cost the user their settings) and writes all four keys back on
``persist``. Persistence is best effort: when a write fails the in-memory state
keeps the mutation and the caller is told through the raised ``StoreError``.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, TypeVar

from .defaults import (
    ACTIVE_PAGE_KEY,
    PAGES_KEY,
    SETTINGS_KEY,
    TILES_KEY,
    default_active_page_id,
    default_pages,
    default_settings,
    default_tiles,
)
from .entities import Page, Settings, Tile
from .errors import NotFound, StoreError, ValidationError
from .ports import KeyValueStorePort
from .reorder import renumber_all

T = TypeVar("T")


@dataclass
class DashboardState:
    """Mutable aggregate. Only use cases mutate it."""

    settings: Settings = field(default_factory=default_settings)
    pages: List[Page] = field(default_factory=default_pages)
    tiles: List[Tile] = field(default_factory=default_tiles)
    active_page_id: str = field(default_factory=default_active_page_id)

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------
    def find_page(self, page_id: str) -> Optional[Page]:
        return next((page for page in self.pages if page.id == page_id), None)

    def find_tile(self, tile_id: str) -> Optional[Tile]:
        return next((tile for tile in self.tiles if tile.id == tile_id), None)

    def require_page(self, page_id: str) -> Page:
        page = self.find_page(page_id)
        if page is None:
            raise NotFound("Page", page_id)
        return page

    def require_tile(self, tile_id: str) -> Tile:
        tile = self.find_tile(tile_id)
        if tile is None:
            raise NotFound("Tile", tile_id)
        return tile

    def count_tiles_on(self, page_id: str) -> int:
        return sum(1 for tile in self.tiles if tile.page_id == page_id)

    def ensure_active_page(self) -> None:
        """Point the active page at the first page when its target is gone."""
        if self.find_page(self.active_page_id) is None:
            self.active_page_id = self.pages[0].id


def parse_pages(raw: Any) -> List[Page]:
    if not isinstance(raw, list):
        raise ValidationError("pages must be a list.")
    pages = [Page.from_dict(item) for item in raw]
    if not pages:
        raise ValidationError("pages must not be empty.")
    return pages


def parse_tiles(raw: Any) -> List[Tile]:
    if not isinstance(raw, list):
        raise ValidationError("tiles must be a list.")
    return [Tile.from_dict(item) for item in raw]


class StateContainer:
    """Own a ``DashboardState`` and its durability against a key-value store."""

    def __init__(self, store: KeyValueStorePort) -> None:
        self._log = logging.getLogger(__name__)
        self.store = store
        self.state = DashboardState()

    # ------------------------------------------------------------------
    def initialize(self) -> DashboardState:
        """Load every key independently, seeding defaults where needed."""
        settings = self._load_json(SETTINGS_KEY, lambda raw: Settings.from_dict(raw, strict=False))
        pages = self._load_json(PAGES_KEY, parse_pages)
        tiles = self._load_json(TILES_KEY, parse_tiles)
        active = self._load_text(ACTIVE_PAGE_KEY)

        state = DashboardState(
            settings=settings if settings is not None else default_settings(),
            pages=pages if pages is not None else default_pages(),
            tiles=tiles if tiles is not None else default_tiles(),
            active_page_id=active or default_active_page_id(),
        )
        renumber_all(state.tiles)
        state.ensure_active_page()
        self.state = state
        self._log.debug(
            "Loaded dashboard: %d page(s), %d tile(s), active=%s",
            len(state.pages),
            len(state.tiles),
            state.active_page_id,
        )
        return state

    def persist(self) -> None:
        """Write settings, tiles, pages and the active page id.

        Raises:
            StoreError: From the first failing write. Earlier keys may already
                hold the new values; the in-memory state is not rolled back.
        """
        state = self.state
        writes = (
            (SETTINGS_KEY, json.dumps(state.settings.to_dict())),
            (TILES_KEY, json.dumps([tile.to_dict() for tile in state.tiles])),
            (PAGES_KEY, json.dumps([page.to_dict() for page in state.pages])),
            (ACTIVE_PAGE_KEY, state.active_page_id),
        )
        for key, value in writes:
            try:
                self.store.save(key, value)
            except StoreError as err:
                self._log.error("Failed to persist %s: %s", key, err.message)
                raise

    def reset(self) -> DashboardState:
        """Wipe the store and return to first-run defaults in memory."""
        self.store.clear()
        self.state = DashboardState()
        self._log.info("Dashboard reset to defaults")
        return self.state

    # ------------------------------------------------------------------
    def _load_text(self, key: str) -> Optional[str]:
        try:
            return self.store.load(key)
        except StoreError as err:
            self._log.warning("Could not read %s, using default: %s", key, err.message)
            return None

    def _load_json(self, key: str, parse: Callable[[Any], T]) -> Optional[T]:
        text = self._load_text(key)
        if text is None:
            return None
        try:
            return parse(json.loads(text))
        except (json.JSONDecodeError, ValidationError) as err:
            self._log.warning("Ignoring corrupt %s value, using default: %s", key, err)
            return None


__all__ = ["DashboardState", "StateContainer", "parse_pages", "parse_tiles"]
