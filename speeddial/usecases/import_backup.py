from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Union

from ..domain.documents import ParsedDocument, parse_native
from ..domain.state import StateContainer

log = logging.getLogger(__name__)


def apply_document(container: StateContainer, parsed: ParsedDocument) -> None:
    """Swap in every collection the document provided and reset the active page."""
    state = container.state
    if parsed.settings is not None:
        state.settings = parsed.settings
    if parsed.pages is not None:
        state.pages = parsed.pages
    if parsed.tiles is not None:
        state.tiles = parsed.tiles
    state.active_page_id = state.pages[0].id
    log.info(
        "Imported %s; now %d page(s), %d tile(s)",
        ", ".join(
            name
            for name, value in (
                ("settings", parsed.settings),
                ("pages", parsed.pages),
                ("tiles", parsed.tiles),
            )
            if value is not None
        )
        or "nothing",
        len(state.pages),
        len(state.tiles),
    )
    container.persist()


@dataclass
class ImportBackup:
    """Restore a native backup. A malformed document leaves state untouched."""

    container: StateContainer

    def __call__(self, text: Union[str, bytes]) -> None:
        apply_document(self.container, parse_native(text))
