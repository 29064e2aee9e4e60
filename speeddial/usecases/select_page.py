from __future__ import annotations

from dataclasses import dataclass

from ..domain.entities import Page
from ..domain.state import StateContainer


@dataclass
class SelectPage:
    container: StateContainer

    def __call__(self, page_id: str) -> Page:
        state = self.container.state
        page = state.require_page(page_id)
        state.active_page_id = page.id
        self.container.persist()
        return page
