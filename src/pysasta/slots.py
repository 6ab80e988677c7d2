"""Single-value storage keys (site logo, signed-in user)."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from typing import Generic, TypeVar

from pydantic import BaseModel, ValidationError

from pysasta.exceptions import StorageError
from pysasta.state.events import ChangeBus, StorageChangeEvent
from pysasta.storage import StorageBackend

_logger = logging.getLogger(__name__)

T = TypeVar("T")
ModelT = TypeVar("ModelT", bound=BaseModel)


class ValueSlot(Generic[T]):
    """One value under one key, followed across sessions like a collection.

    Unlike collections a malformed stored value is removed, so the next
    read starts clean (a corrupt signed-in user means "signed out").
    """

    def __init__(
        self,
        storage: StorageBackend,
        bus: ChangeBus,
        key: str,
        *,
        decode: Callable[[str], T],
        encode: Callable[[T], str],
        session_id: str | None = None,
    ) -> None:
        self._storage = storage
        self._bus = bus
        self._key = key
        self._decode = decode
        self._encode = encode
        self._session_id = session_id
        self._value: T | None = None
        self._listeners: list[Callable[[T | None], None]] = []
        self._unsubscribe: Callable[[], None] | None = bus.subscribe(self._on_storage_change, key=key)
        self.reload()

    @classmethod
    def for_text(
        cls, storage: StorageBackend, bus: ChangeBus, key: str, *, session_id: str | None = None
    ) -> ValueSlot[str]:
        """Slot holding a raw string (the logo data URL)."""
        return ValueSlot(storage, bus, key, decode=str, encode=str, session_id=session_id)

    @classmethod
    def for_model(
        cls,
        storage: StorageBackend,
        bus: ChangeBus,
        key: str,
        model: type[ModelT],
        *,
        session_id: str | None = None,
    ) -> ValueSlot[ModelT]:
        """Slot holding a pydantic model stored as a JSON object."""

        def _encode(value: ModelT) -> str:
            return json.dumps(value.model_dump(mode="json", by_alias=True, exclude_none=True), ensure_ascii=False)

        return ValueSlot(storage, bus, key, decode=model.model_validate_json, encode=_encode, session_id=session_id)

    @property
    def key(self) -> str:
        return self._key

    @property
    def value(self) -> T | None:
        return self._value

    def get(self) -> T | None:
        return self._value

    def load(self) -> T | None:
        """Read the stored value; ``None`` when absent or unusable."""
        try:
            raw = self._storage.get_item(self._key)
        except StorageError:
            _logger.error("Failed to read key=%s", self._key, exc_info=True)
            return None
        if raw is None:
            return None
        try:
            return self._decode(raw)
        except (ValidationError, ValueError):
            _logger.error("Discarding malformed value key=%s", self._key, exc_info=True)
            try:
                self._storage.remove_item(self._key)
            except StorageError:
                _logger.error("Failed to remove malformed value key=%s", self._key, exc_info=True)
            return None

    def reload(self) -> None:
        self._value = self.load()
        self._notify()

    def set(self, value: T | None) -> None:
        """Store *value*; ``None`` clears the key."""
        if value is None:
            self.clear()
            return
        self._write(value, self._encode(value))

    def clear(self) -> None:
        self._write(None, None)

    def _write(self, value: T | None, raw: str | None) -> None:
        self._value = value
        try:
            old_raw = self._storage.get_item(self._key)
            if raw is None:
                self._storage.remove_item(self._key)
            else:
                self._storage.set_item(self._key, raw)
        except StorageError:
            _logger.error("Failed to persist key=%s", self._key, exc_info=True)
            self._notify()
            return
        self._bus.publish(
            StorageChangeEvent(key=self._key, old_value=old_raw, new_value=raw, source=self._session_id)
        )

    def _on_storage_change(self, event: StorageChangeEvent) -> None:
        if event.key is None or event.key == self._key:
            self.reload()

    def subscribe(self, listener: Callable[[T | None], None]) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            try:
                self._listeners.remove(listener)
            except ValueError:
                pass

        return _unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self._value)
            except Exception:
                _logger.warning("Value listener failed key=%s", self._key, exc_info=True)

    def close(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self._listeners.clear()
