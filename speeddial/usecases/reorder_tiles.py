from __future__ import annotations

from dataclasses import dataclass

from ..domain.reorder import move_item, renumber, splice_page_tiles, tiles_on_page
from ..domain.state import StateContainer


@dataclass
class ReorderTiles:
    """Apply a drag-and-drop move inside one page's grid.

    Indices address the page's tiles sorted by position, i.e. the order the
    grid shows them in.
    """

    container: StateContainer

    def __call__(self, page_id: str, old_index: int, new_index: int) -> None:
        state = self.container.state
        state.require_page(page_id)
        page_tiles = move_item(tiles_on_page(state.tiles, page_id), old_index, new_index)
        renumber(page_tiles)
        state.tiles = splice_page_tiles(state.tiles, page_id, page_tiles)
        self.container.persist()
