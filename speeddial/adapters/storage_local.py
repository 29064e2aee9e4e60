from __future__ import annotations

import errno
import logging
import os
import tempfile
from typing import Iterator, Optional
from urllib.parse import quote, unquote

from speeddial.domain.errors import QuotaExceeded, StoreUnavailable
from speeddial.domain.ports import KeyValueStorePort

_SUFFIX = ".sdkv"
_QUOTA_ERRNOS = {errno.ENOSPC, getattr(errno, "EDQUOT", errno.ENOSPC)}


class StorageLocal(KeyValueStorePort):
    """Local filesystem key-value store: one UTF-8 ``<key>.sdkv`` file per key under ``root_dir``.

    Only ``.sdkv`` files count as keys, so ``clear`` leaves other files in a
    shared directory alone.

    Writes go to a temp file in the same directory and are moved into place with
    ``os.replace`` so a reader never sees half a value. ``quota_bytes`` caps the
    total size of all stored values the way a browser caps localStorage.
    """

    def __init__(self, root_dir: str = ".", quota_bytes: Optional[int] = None) -> None:
        self.root = root_dir
        self.quota_bytes = quota_bytes
        self._log = logging.getLogger(__name__)

    # ---- Paths ----
    def _path(self, key: str) -> str:
        return os.path.join(self.root, quote(key, safe="") + _SUFFIX)

    def keys(self) -> Iterator[str]:
        if not os.path.isdir(self.root):
            return iter(())
        names = sorted(n for n in os.listdir(self.root) if n.endswith(_SUFFIX))
        return (unquote(name[: -len(_SUFFIX)]) for name in names)

    # ---- KeyValueStorePort ----
    def load(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not os.path.exists(path):
            return None
        try:
            with open(path, "r", encoding="utf-8") as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as exc:
            self._log.warning("Unreadable value for %s, treating as absent: %s", key, exc)
            return None

    def save(self, key: str, value: str) -> None:
        data = value.encode("utf-8")
        self._check_quota(key, len(data))
        tmp_path: Optional[str] = None
        try:
            os.makedirs(self.root, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(prefix=f"{quote(key, safe='')}_", suffix=".tmp", dir=self.root)
            with os.fdopen(fd, "wb") as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self._path(key))
            tmp_path = None
        except OSError as exc:
            if exc.errno in _QUOTA_ERRNOS:
                raise QuotaExceeded(key, f"Disk full while writing '{key}'.") from exc
            raise StoreUnavailable(key, f"Could not write '{key}': {exc.strerror or exc}") from exc
        finally:
            if tmp_path is not None:
                try:
                    os.unlink(tmp_path)
                except OSError:
                    self._log.debug("Temp file %s already gone", tmp_path)

    def remove(self, key: str) -> None:
        try:
            os.unlink(self._path(key))
        except FileNotFoundError:
            return
        except OSError as exc:
            raise StoreUnavailable(key, f"Could not remove '{key}': {exc.strerror or exc}") from exc

    def clear(self) -> None:
        for key in list(self.keys()):
            self.remove(key)

    # ---- Quota ----
    def used_bytes(self, exclude: Optional[str] = None) -> int:
        total = 0
        for key in self.keys():
            if key == exclude:
                continue
            try:
                total += os.path.getsize(self._path(key))
            except OSError:
                continue
        return total

    def _check_quota(self, key: str, size: int) -> None:
        if self.quota_bytes is None:
            return
        if self.used_bytes(exclude=key) + size > self.quota_bytes:
            raise QuotaExceeded(key)


__all__ = ["StorageLocal"]
