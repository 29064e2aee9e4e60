from __future__ import annotations

import logging
from dataclasses import dataclass

from ..domain.reorder import renumber, tiles_on_page
from ..domain.state import StateContainer

log = logging.getLogger(__name__)


@dataclass
class DeleteTile:
    """Remove a tile and renumber its former siblings to close the gap."""

    container: StateContainer

    def __call__(self, tile_id: str) -> None:
        state = self.container.state
        tile = state.require_tile(tile_id)
        state.tiles.remove(tile)
        renumber(tiles_on_page(state.tiles, tile.page_id))
        log.info("Deleted tile %s from page %s", tile_id, tile.page_id)
        self.container.persist()
