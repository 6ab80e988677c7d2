from __future__ import annotations

import json
from pathlib import Path

import pytest

from pysasta.exceptions import StorageError, StorageQuotaExceededError, StorageUnavailableError
from pysasta.storage import FileStorage, MemoryStorage, StorageBackend


def test_backends_satisfy_protocol(tmp_path: Path) -> None:
    assert isinstance(MemoryStorage(), StorageBackend)
    assert isinstance(FileStorage(tmp_path / "area.json"), StorageBackend)


def test_memory_storage_basic_operations() -> None:
    storage = MemoryStorage()
    storage.set_item("a", "1")
    storage.set_item("b", "2")

    assert storage.get_item("a") == "1"
    assert storage.get_item("missing") is None
    assert sorted(storage.keys()) == ["a", "b"]

    storage.remove_item("a")
    storage.remove_item("a")
    assert storage.keys() == ["b"]

    storage.clear()
    assert storage.keys() == []


def test_memory_storage_quota_counts_replaced_value_once() -> None:
    storage = MemoryStorage(quota_bytes=10)
    storage.set_item("k", "12345")
    storage.set_item("k", "123456789")
    assert storage.used_bytes == 10

    with pytest.raises(StorageQuotaExceededError) as excinfo:
        storage.set_item("k2", "x")
    assert excinfo.value.key == "k2"
    assert storage.get_item("k2") is None


def test_memory_storage_unavailable_refuses_every_access() -> None:
    storage = MemoryStorage(available=False)

    with pytest.raises(StorageUnavailableError):
        storage.get_item("a")
    with pytest.raises(StorageError):
        storage.set_item("a", "1")
    with pytest.raises(StorageUnavailableError):
        storage.keys()


def test_file_storage_persists_between_instances(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "area.json"
    FileStorage(path).set_item("sasta-logo", "data:image/png;base64,AA")

    other = FileStorage(path)

    assert other.get_item("sasta-logo") == "data:image/png;base64,AA"
    assert json.loads(path.read_text(encoding="utf-8")) == {"sasta-logo": "data:image/png;base64,AA"}


def test_file_storage_missing_or_empty_file_is_empty(tmp_path: Path) -> None:
    path = tmp_path / "area.json"
    assert FileStorage(path).keys() == []

    path.write_text("  \n", encoding="utf-8")
    assert FileStorage(path).get_item("x") is None


def test_file_storage_remove_and_clear(tmp_path: Path) -> None:
    storage = FileStorage(tmp_path / "area.json")
    storage.set_item("a", "1")
    storage.set_item("b", "2")

    storage.remove_item("a")
    storage.remove_item("never-there")
    assert storage.keys() == ["b"]

    storage.clear()
    assert storage.keys() == []


@pytest.mark.parametrize("content", ["{broken", "[1, 2]", '{"a": 1}'])
def test_file_storage_corrupt_file_is_unavailable(tmp_path: Path, content: str) -> None:
    path = tmp_path / "area.json"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(StorageUnavailableError):
        FileStorage(path).get_item("a")


def test_file_storage_quota(tmp_path: Path) -> None:
    storage = FileStorage(tmp_path / "area.json", quota_bytes=8)
    storage.set_item("key", "abc")

    with pytest.raises(StorageQuotaExceededError):
        storage.set_item("key", "abcdef")
    assert storage.get_item("key") == "abc"


def test_file_storage_leaves_no_temp_files(tmp_path: Path) -> None:
    storage = FileStorage(tmp_path / "area.json")
    for i in range(3):
        storage.set_item(f"k{i}", str(i))

    assert [p.name for p in tmp_path.iterdir()] == ["area.json"]
