import errno
import os

import pytest

from speeddial.adapters import storage_local
from speeddial.adapters.storage_local import StorageLocal
from speeddial.domain.errors import QuotaExceeded, StoreUnavailable


def test_save_and_load_round_trip(tmp_path):
    storage = StorageLocal(root_dir=str(tmp_path))

    storage.save("speeddial_settings", '{"cols": 6}')

    assert storage.load("speeddial_settings") == '{"cols": 6}'
    assert (tmp_path / "speeddial_settings.sdkv").read_text(encoding="utf-8") == '{"cols": 6}'


def test_load_missing_key_returns_none(tmp_path):
    storage = StorageLocal(root_dir=str(tmp_path / "not-created-yet"))

    assert storage.load("speeddial_tiles") is None
    assert list(storage.keys()) == []


def test_keys_are_quoted_on_disk(tmp_path):
    storage = StorageLocal(root_dir=str(tmp_path))

    storage.save("a/b", "x")
    storage.save("plain", "y")

    assert (tmp_path / "a%2Fb.sdkv").exists()
    assert list(storage.keys()) == ["a/b", "plain"]


def test_no_temp_files_left_behind(tmp_path):
    storage = StorageLocal(root_dir=str(tmp_path))

    storage.save("speeddial_pages", "[]")
    storage.save("speeddial_pages", '[{"id": "p"}]')

    assert list(tmp_path.glob("*.tmp")) == []
    assert storage.load("speeddial_pages") == '[{"id": "p"}]'


def test_quota_counts_other_keys_only(tmp_path):
    storage = StorageLocal(root_dir=str(tmp_path), quota_bytes=10)
    storage.save("a", "12345")

    with pytest.raises(QuotaExceeded) as exc:
        storage.save("b", "123456")

    assert exc.value.code == "STORAGE_QUOTA_EXCEEDED"
    assert storage.load("b") is None
    storage.save("a", "1234567890")
    assert storage.used_bytes() == 10


def test_failed_replace_keeps_previous_value(tmp_path, monkeypatch):
    storage = StorageLocal(root_dir=str(tmp_path))
    storage.save("speeddial_tiles", "old")

    def _deny(src, dst):
        raise PermissionError(errno.EACCES, "Permission denied")

    monkeypatch.setattr(storage_local.os, "replace", _deny)
    with pytest.raises(StoreUnavailable) as exc:
        storage.save("speeddial_tiles", "new")
    monkeypatch.undo()

    assert exc.value.code == "STORAGE_UNAVAILABLE"
    assert storage.load("speeddial_tiles") == "old"
    assert list(tmp_path.glob("*.tmp")) == []


def test_disk_full_maps_to_quota_error(tmp_path, monkeypatch):
    storage = StorageLocal(root_dir=str(tmp_path))

    def _full(fd):
        raise OSError(errno.ENOSPC, "No space left on device")

    monkeypatch.setattr(storage_local.os, "fsync", _full)
    with pytest.raises(QuotaExceeded):
        storage.save("speeddial_settings", "{}")
    monkeypatch.undo()

    assert storage.load("speeddial_settings") is None


def test_unreadable_value_is_treated_as_absent(tmp_path):
    storage = StorageLocal(root_dir=str(tmp_path))
    (tmp_path / "speeddial_settings.sdkv").write_bytes(b"\xff\xfe\x00bad")

    assert storage.load("speeddial_settings") is None


def test_remove_and_clear(tmp_path):
    storage = StorageLocal(root_dir=str(tmp_path))
    storage.save("a", "1")
    storage.save("b", "2")
    (tmp_path / "unrelated.json").write_text("{}", encoding="utf-8")

    storage.remove("a")
    storage.remove("missing")
    assert storage.load("a") is None

    storage.clear()
    assert list(storage.keys()) == []
    assert os.path.exists(tmp_path / "unrelated.json")


def test_clear_leaves_foreign_text_files(tmp_path):
    storage = StorageLocal(root_dir=str(tmp_path))
    storage.save("speeddial_note", "hi")
    (tmp_path / "my_notes.txt").write_text("keep me", encoding="utf-8")

    assert list(storage.keys()) == ["speeddial_note"]
    storage.clear()

    assert (tmp_path / "my_notes.txt").read_text(encoding="utf-8") == "keep me"
    assert list(storage.keys()) == []
