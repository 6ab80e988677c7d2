"""Entity store: one JSON array per collection, kept in sync across sessions.

Every mutation is a full read-modify-write of the collection:

1. re-read the whole array from the storage area (not the in-memory view),
2. apply the add/update/delete,
3. write the whole array back,
4. publish a :class:`~pysasta.state.events.StorageChangeEvent`.

Every store subscribed to the key, including the writer's own, reloads
when the event arrives. There is no locking between steps 1 and 3: two
sessions interleaving on the same key follow "last write wins" and one of
the writes can be lost.

Rows a mutation does not touch are written back exactly as they were read,
including rows the record model rejects. Those are hidden from the view but
never dropped from storage.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ValidationError

from pysasta._redact import redact_for_log
from pysasta.exceptions import StorageError
from pysasta.models._base import RecordModel
from pysasta.state.events import ChangeBus, StorageChangeEvent
from pysasta.state.policy import SortOrder, find_index, next_record_id, sort_records
from pysasta.storage import StorageBackend

_logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=RecordModel)

SnapshotListener = Callable[[list[Any]], None]


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True, slots=True)
class Collection(Generic[RecordT]):
    """Definition of one entity collection.

    ``seed`` records are returned (and written back) when the key has
    never been written.
    """

    name: str
    key: str
    model: type[RecordT]
    sort: SortOrder | None = None
    seed: tuple[Mapping[str, Any], ...] = ()


@dataclass(frozen=True, slots=True)
class _Row:
    """One element of the stored array.

    ``raw`` is the element as read (``None`` for rows this session created
    or changed); ``record`` is ``None`` when ``raw`` did not validate.
    """

    raw: Any
    record: Any

    @property
    def record_id(self) -> Any:
        if self.record is not None:
            return self.record.id
        if isinstance(self.raw, dict):
            return self.raw.get("id")
        return None

    def to_json(self) -> Any:
        if self.raw is not None:
            return self.raw
        return self.record.to_storage()


def _row_record(row: _Row) -> Any:
    return row.record


class EntityStore(Generic[RecordT]):
    """Load/mutate/persist/notify over one collection for one session.

    The store subscribes to the bus on construction and loads its initial
    snapshot; :meth:`close` tears the subscription down.
    """

    def __init__(
        self,
        storage: StorageBackend,
        bus: ChangeBus,
        collection: Collection[RecordT],
        *,
        clock: Callable[[], datetime] = _utcnow,
        session_id: str | None = None,
    ) -> None:
        self._storage = storage
        self._bus = bus
        self._collection = collection
        self._clock = clock
        self._session_id = session_id
        self._records: list[RecordT] = []
        self._listeners: list[SnapshotListener] = []
        self._unsubscribe: Callable[[], None] | None = bus.subscribe(self._on_storage_change, key=collection.key)
        self.reload()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def __enter__(self) -> EntityStore[RecordT]:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    def close(self) -> None:
        """Stop following storage changes. Safe to call twice."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self._listeners.clear()

    @property
    def closed(self) -> bool:
        return self._unsubscribe is None

    @property
    def key(self) -> str:
        return self._collection.key

    @property
    def collection(self) -> Collection[RecordT]:
        return self._collection

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def _seed_rows(self) -> list[_Row]:
        model = self._collection.model
        return [_Row(raw=dict(item), record=model.model_validate(dict(item))) for item in self._collection.seed]

    def _parse(self, blob: str) -> list[_Row] | None:
        try:
            decoded = json.loads(blob)
        except json.JSONDecodeError:
            _logger.error("Stored collection is not valid JSON key=%s", self.key, exc_info=True)
            return None
        if not isinstance(decoded, list):
            _logger.error("Stored collection is not a JSON array key=%s type=%s", self.key, type(decoded).__name__)
            return None

        rows: list[_Row] = []
        for index, item in enumerate(decoded):
            if not isinstance(item, dict):
                _logger.warning("Skipping non-object record key=%s index=%d", self.key, index)
                rows.append(_Row(raw=item, record=None))
                continue
            try:
                record = self._collection.model.model_validate(item)
            except ValidationError as exc:
                _logger.warning(
                    "Skipping malformed record key=%s index=%d errors=%d",
                    self.key,
                    index,
                    exc.error_count(),
                )
                _logger.debug("Malformed record payload: %s", redact_for_log(item))
                record = None
            rows.append(_Row(raw=item, record=record))
        return rows

    def _load_rows(self) -> list[_Row]:
        try:
            blob = self._storage.get_item(self.key)
        except StorageError:
            _logger.error("Failed to read collection key=%s", self.key, exc_info=True)
            return self._seed_rows()

        if blob is None:
            seed = self._seed_rows()
            if seed:
                self._write_seed(seed)
            return seed

        rows = self._parse(blob)
        if rows is None:
            return self._seed_rows()
        return rows

    def load(self) -> list[RecordT]:
        """Read the persisted collection.

        Never raises: an unreadable area or a malformed blob yields the
        seed (empty for unseeded collections). A seeded collection whose
        key was never written gets its seed written back. Rows that do not
        validate are left out.
        """
        return self._visible(self._load_rows())

    def _visible(self, rows: list[_Row]) -> list[RecordT]:
        return sort_records((r.record for r in rows if r.record is not None), self._collection.sort)

    def _write_seed(self, seed: list[_Row]) -> None:
        try:
            self._storage.set_item(self.key, self._serialize(seed))
        except StorageError:
            _logger.error("Failed to write seed collection key=%s", self.key, exc_info=True)
        else:
            _logger.debug("Seeded collection key=%s records=%d", self.key, len(seed))

    def reload(self) -> None:
        """Replace the in-memory view with the persisted collection."""
        self._records = self.load()
        self._notify()

    def list_records(self) -> list[RecordT]:
        """The in-memory view, in collection order."""
        return list(self._records)

    @property
    def records(self) -> tuple[RecordT, ...]:
        return tuple(self._records)

    def get(self, record_id: int) -> RecordT | None:
        index = find_index(self._records, record_id)
        return None if index is None else self._records[index]

    def __len__(self) -> int:
        return len(self._records)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add(self, data: Mapping[str, Any] | BaseModel) -> RecordT:
        """Create a record from *data* (any ``id`` in it is replaced).

        Raises :class:`pydantic.ValidationError` when *data* does not fit
        the record model; storage is not touched in that case.
        """
        if isinstance(data, BaseModel):
            fields = data.model_dump(exclude={"id"})
        else:
            fields = {k: v for k, v in data.items() if k != "id"}
        fields["id"] = next_record_id(self._clock())
        record = self._collection.model.model_validate(fields)

        rows = self._load_rows()
        rows.append(_Row(raw=None, record=record))
        self._sync(rows)
        _logger.debug("Record added key=%s id=%d", self.key, record.id)
        return record

    def update(self, record: RecordT | Mapping[str, Any]) -> None:
        """Replace the record that has the same id. Unknown ids change nothing."""
        if not isinstance(record, self._collection.model):
            record = self._collection.model.model_validate(record)

        replaced = False
        rows: list[_Row] = []
        for row in self._load_rows():
            if row.record is not None and row.record.id == record.id:
                rows.append(_Row(raw=None, record=record))
                replaced = True
            else:
                rows.append(row)
        if not replaced:
            _logger.debug("Update matched no record key=%s id=%d", self.key, record.id)
        self._sync(rows)

    def delete(self, record_id: int) -> None:
        """Remove the row with *record_id*, valid or not; unknown ids are a no-op."""
        self._sync([row for row in self._load_rows() if row.record_id != record_id])

    def remove_where(self, predicate: Callable[[RecordT], bool]) -> int:
        """Remove every valid record matching *predicate*; return how many went."""
        current = self._load_rows()
        kept = [row for row in current if row.record is None or not predicate(row.record)]
        self._sync(kept)
        return len(current) - len(kept)

    # ------------------------------------------------------------------
    # Persistence and notification
    # ------------------------------------------------------------------

    @staticmethod
    def _serialize(rows: list[_Row]) -> str:
        # Compact separators match JSON.stringify, so untouched rows keep their bytes.
        return json.dumps([row.to_json() for row in rows], ensure_ascii=False, separators=(",", ":"))

    def _sync(self, rows: list[_Row]) -> None:
        ordered = sort_records(rows, self._collection.sort, select=_row_record)
        self._records = [row.record for row in ordered if row.record is not None]
        new_value = self._serialize(ordered)
        try:
            old_value = self._storage.get_item(self.key)
            self._storage.set_item(self.key, new_value)
        except StorageError:
            # The mutation stays visible in this session only.
            _logger.error("Failed to persist collection key=%s", self.key, exc_info=True)
            self._notify()
            return

        self._bus.publish(
            StorageChangeEvent(
                key=self.key,
                old_value=old_value,
                new_value=new_value,
                source=self._session_id,
                occurred_at=self._clock(),
            )
        )

    def _on_storage_change(self, event: StorageChangeEvent) -> None:
        if event.key is None or event.key == self.key:
            self.reload()

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """Call *listener* with the new snapshot after every change."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            try:
                self._listeners.remove(listener)
            except ValueError:
                pass

        return _unsubscribe

    def _notify(self) -> None:
        snapshot = list(self._records)
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                _logger.warning("Collection listener failed key=%s", self.key, exc_info=True)
