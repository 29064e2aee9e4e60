from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from ..domain.documents import parse_legacy
from ..domain.state import StateContainer
from .import_backup import apply_document


@dataclass
class MigrateLegacy:
    """One-way import of a Speed Dial 2 export (``groups`` + ``dials``).

    Empty ``groups`` or ``dials`` leave the current pages or tiles in place.
    """

    container: StateContainer

    def __call__(self, text: Union[str, bytes]) -> None:
        apply_document(self.container, parse_legacy(text))
