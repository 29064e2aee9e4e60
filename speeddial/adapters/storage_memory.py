from __future__ import annotations

from typing import Callable, Dict, Optional

from speeddial.domain.errors import QuotaExceeded, StoreError
from speeddial.domain.ports import KeyValueStorePort

FailureHook = Callable[[str, str], Optional[StoreError]]


class StorageMemory(KeyValueStorePort):
    """In-memory key-value store used for tests and offline development.

    ``fail_with`` lets a test inject a ``StoreError`` for selected writes: it is
    called with ``(key, value)`` and the returned error (if any) is raised
    before anything is recorded.
    """

    def __init__(
        self,
        initial: Optional[Dict[str, str]] = None,
        *,
        quota_bytes: Optional[int] = None,
        fail_with: Optional[FailureHook] = None,
    ) -> None:
        self.data: Dict[str, str] = dict(initial or {})
        self.quota_bytes = quota_bytes
        self.fail_with = fail_with
        self.writes: list = []

    def load(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def save(self, key: str, value: str) -> None:
        if self.fail_with is not None:
            err = self.fail_with(key, value)
            if err is not None:
                raise err
        if self.quota_bytes is not None:
            used = sum(len(v.encode("utf-8")) for k, v in self.data.items() if k != key)
            if used + len(value.encode("utf-8")) > self.quota_bytes:
                raise QuotaExceeded(key)
        self.data[key] = value
        self.writes.append(key)

    def remove(self, key: str) -> None:
        self.data.pop(key, None)

    def clear(self) -> None:
        self.data.clear()


__all__ = ["StorageMemory"]
