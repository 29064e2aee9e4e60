from __future__ import annotations

import logging
from dataclasses import dataclass

from ..domain.errors import ConstraintViolation
from ..domain.state import StateContainer

log = logging.getLogger(__name__)


@dataclass
class DeletePage:
    """Remove a page together with its tiles.

    The last remaining page cannot be deleted. When the active page goes away
    the first remaining page becomes active.
    """

    container: StateContainer

    def __call__(self, page_id: str) -> None:
        state = self.container.state
        page = state.require_page(page_id)
        if len(state.pages) <= 1:
            raise ConstraintViolation("LAST_PAGE", "The last page cannot be deleted.")
        state.pages.remove(page)
        before = len(state.tiles)
        state.tiles = [tile for tile in state.tiles if tile.page_id != page_id]
        state.ensure_active_page()
        log.info("Deleted page %s and %d tile(s)", page_id, before - len(state.tiles))
        self.container.persist()
