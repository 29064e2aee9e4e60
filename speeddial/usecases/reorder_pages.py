from __future__ import annotations

from dataclasses import dataclass

from ..domain.reorder import move_item
from ..domain.state import StateContainer


@dataclass
class ReorderPages:
    """Apply a drag-and-drop move to the page tab strip."""

    container: StateContainer

    def __call__(self, old_index: int, new_index: int) -> None:
        state = self.container.state
        state.pages = move_item(state.pages, old_index, new_index)
        self.container.persist()
