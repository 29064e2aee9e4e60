from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Tuple
from urllib.parse import quote

from ..domain.errors import StoreError, UseCaseError, storage_error_message
from ..domain.reorder import tiles_on_page

FAVICON_URL = "https://www.google.com/s2/favicons?sz=128&domain="


@dataclass(frozen=True)
class PageTab:
    id: str
    name: str
    active: bool


@dataclass(frozen=True)
class TileView:
    id: str
    title: str
    url: str
    icon_url: str
    position: int


class DashboardVM:
    """Projects the dashboard state for a renderer and routes UI events.

    Holds no state of its own besides the last notice. Every event handler
    returns ``True`` when the action fully succeeded; on failure the message
    to show is passed to ``on_notice``. A storage failure still leaves the
    change applied in memory (it is only unsaved), so the renderer should
    refresh either way.
    """

    def __init__(self, controller: Any, on_notice: Optional[Callable[[str], None]] = None) -> None:
        self.controller = controller
        self.on_notice = on_notice
        self.last_notice: Optional[str] = None
        self._log = logging.getLogger(__name__)

    # ------------------------------------------------------------------
    # Projections
    # ------------------------------------------------------------------
    @property
    def columns(self) -> int:
        return self.controller.state.settings.cols

    def tabs(self) -> List[PageTab]:
        state = self.controller.state
        return [PageTab(p.id, p.name, p.id == state.active_page_id) for p in state.pages]

    def tiles(self) -> List[TileView]:
        state = self.controller.state
        return [
            TileView(
                id=tile.id,
                title=tile.title,
                url=tile.url,
                icon_url=tile.image_url or FAVICON_URL + quote(tile.url, safe=""),
                position=tile.position,
            )
            for tile in tiles_on_page(state.tiles, state.active_page_id)
        ]

    def open_target(self, index: int) -> Tuple[str, bool]:
        """Return ``(url, new_tab)`` for the tile shown at grid ``index``."""
        tile = self.tiles()[index]
        return tile.url, self.controller.state.settings.open_in_new_tab

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------
    def on_tile_drop(self, old_index: int, new_index: int) -> bool:
        page_id = self.controller.state.active_page_id
        return self.run(self.controller.reorder_tiles, page_id, old_index, new_index)

    def on_tab_drop(self, old_index: int, new_index: int) -> bool:
        return self.run(self.controller.reorder_pages, old_index, new_index)

    def on_tab_click(self, page_id: str) -> bool:
        return self.run(self.controller.select_page, page_id)

    def run(self, action: Callable[..., Any], *args: Any, **kwargs: Any) -> bool:
        """Invoke a use case and convert its errors into a user notice."""
        try:
            action(*args, **kwargs)
        except StoreError as err:
            self._notify(storage_error_message(err))
            return False
        except UseCaseError as err:
            self._notify(err.message)
            return False
        self.last_notice = None
        return True

    def _notify(self, message: str) -> None:
        self.last_notice = message
        self._log.info("Notice: %s", message)
        if self.on_notice is not None:
            self.on_notice(message)


__all__ = ["DashboardVM", "FAVICON_URL", "PageTab", "TileView"]
