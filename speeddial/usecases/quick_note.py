from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..domain.defaults import QUICK_NOTE_KEY
from ..domain.errors import ValidationError
from ..domain.ports import KeyValueStorePort


@dataclass
class LoadQuickNote:
    store: KeyValueStorePort

    def __call__(self) -> str:
        return self.store.load(QUICK_NOTE_KEY) or ""


@dataclass
class SaveQuickNote:
    """Persist the free-text note. Saved on every edit, independent of the dashboard state."""

    store: KeyValueStorePort

    def __call__(self, text: Optional[str]) -> None:
        if text is None:
            text = ""
        if not isinstance(text, str):
            raise ValidationError("Note must be text.", field="note")
        self.store.save(QUICK_NOTE_KEY, text)
