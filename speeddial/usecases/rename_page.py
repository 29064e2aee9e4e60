from __future__ import annotations

from dataclasses import dataclass

from ..domain.entities import Page
from ..domain.errors import ValidationError
from ..domain.state import StateContainer
from ..domain.validators import coerce_text


@dataclass
class RenamePage:
    container: StateContainer

    def __call__(self, page_id: str, name: str) -> Page:
        page = self.container.state.require_page(page_id)
        cleaned = coerce_text("name", name)
        if not cleaned:
            raise ValidationError("Page name must not be empty.", field="name")
        page.name = cleaned
        self.container.persist()
        return page
