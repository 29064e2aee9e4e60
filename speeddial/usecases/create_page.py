from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ..domain.entities import Page
from ..domain.naming import make_entity_id
from ..domain.state import StateContainer
from ..domain.validators import coerce_text

log = logging.getLogger(__name__)

DEFAULT_PAGE_NAME = "New Group"


@dataclass
class CreatePage:
    container: StateContainer

    def __call__(self, name: Optional[str] = None) -> Page:
        state = self.container.state
        page = Page(
            id=make_entity_id("p", {p.id for p in state.pages}),
            name=coerce_text("name", name) or DEFAULT_PAGE_NAME,
        )
        state.pages.append(page)
        log.info("Created page %s (%s)", page.id, page.name)
        self.container.persist()
        return page
