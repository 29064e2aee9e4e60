from __future__ import annotations

from dataclasses import dataclass

from ..domain.state import StateContainer


@dataclass
class SortPages:
    """Order pages alphabetically by name (case-insensitive, stable)."""

    container: StateContainer

    def __call__(self) -> None:
        state = self.container.state
        state.pages = sorted(state.pages, key=lambda page: page.name.casefold())
        self.container.persist()
