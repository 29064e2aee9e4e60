from __future__ import annotations

from dataclasses import dataclass

from ..domain.documents import export_document
from ..domain.state import StateContainer


@dataclass
class ExportBackup:
    """Serialize settings, tiles and pages to the native backup document."""

    container: StateContainer

    def __call__(self) -> str:
        state = self.container.state
        return export_document(state.settings, state.pages, state.tiles)
