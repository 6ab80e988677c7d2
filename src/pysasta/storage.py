"""Key-value storage areas.

A storage area maps string keys to string values, the same contract as a
browser origin's ``localStorage``. Every session of the portal shares one
area. Backends raise :class:`~pysasta.exceptions.StorageError` subclasses;
deciding whether a failure is fatal is left to the caller.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Protocol, runtime_checkable

from pysasta.config import DEFAULT_STORAGE_QUOTA
from pysasta.exceptions import StorageQuotaExceededError, StorageUnavailableError

_logger = logging.getLogger(__name__)


@runtime_checkable
class StorageBackend(Protocol):
    """Synchronous string key-value area."""

    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...

    def keys(self) -> list[str]: ...

    def clear(self) -> None: ...


def _area_size(items: dict[str, str]) -> int:
    return sum(len(key) + len(value) for key, value in items.items())


def _check_quota(items: dict[str, str], key: str, value: str, quota: int) -> None:
    size = _area_size(items) - (len(key) + len(items[key]) if key in items else 0)
    size += len(key) + len(value)
    if size > quota:
        raise StorageQuotaExceededError(
            f"Writing {key!r} needs {size} units, quota is {quota}",
            key=key,
        )


class MemoryStorage:
    """In-process storage area.

    ``available=False`` mimics a context where storage exists but every
    access is refused (private browsing, no browser at all).
    """

    def __init__(self, *, quota_bytes: int = DEFAULT_STORAGE_QUOTA, available: bool = True) -> None:
        self._items: dict[str, str] = {}
        self.quota_bytes = quota_bytes
        self.available = available

    def _require_available(self, key: str | None = None) -> None:
        if not self.available:
            raise StorageUnavailableError("Storage area is not available", key=key)

    def get_item(self, key: str) -> str | None:
        self._require_available(key)
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._require_available(key)
        _check_quota(self._items, key, value, self.quota_bytes)
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._require_available(key)
        self._items.pop(key, None)

    def keys(self) -> list[str]:
        self._require_available()
        return list(self._items)

    def clear(self) -> None:
        self._require_available()
        self._items.clear()

    @property
    def used_bytes(self) -> int:
        return _area_size(self._items)


class FileStorage:
    """Storage area persisted as one JSON object file.

    The file is re-read on every access, so several processes pointed at
    the same path share one area the way browser tabs share an origin.
    Writes replace the file atomically; there is no locking, so two
    processes writing at once follow "last write wins".
    """

    def __init__(self, path: str | os.PathLike[str], *, quota_bytes: int = DEFAULT_STORAGE_QUOTA) -> None:
        self.path = Path(path)
        self.quota_bytes = quota_bytes

    def _read(self) -> dict[str, str]:
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as exc:
            raise StorageUnavailableError(f"Cannot read storage file {self.path}: {exc}") from exc

        if not text.strip():
            return {}
        try:
            decoded = json.loads(text)
        except json.JSONDecodeError as exc:
            raise StorageUnavailableError(f"Storage file {self.path} is not valid JSON") from exc
        if not isinstance(decoded, dict) or not all(isinstance(v, str) for v in decoded.values()):
            raise StorageUnavailableError(f"Storage file {self.path} is not a string mapping")
        return decoded

    def _write(self, items: dict[str, str]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{self.path.name}.", dir=self.path.parent)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    json.dump(items, handle, ensure_ascii=False)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise StorageUnavailableError(f"Cannot write storage file {self.path}: {exc}") from exc
        _logger.debug("Storage file written path=%s keys=%d", self.path, len(items))

    def get_item(self, key: str) -> str | None:
        return self._read().get(key)

    def set_item(self, key: str, value: str) -> None:
        items = self._read()
        _check_quota(items, key, value, self.quota_bytes)
        items[key] = value
        self._write(items)

    def remove_item(self, key: str) -> None:
        items = self._read()
        if key in items:
            del items[key]
            self._write(items)

    def keys(self) -> list[str]:
        return list(self._read())

    def clear(self) -> None:
        self._write({})
