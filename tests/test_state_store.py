from __future__ import annotations

import json
import logging
from datetime import UTC, date, datetime, timedelta

import pytest
from pydantic import ValidationError

from pysasta.models import AuditEntry, Holiday
from pysasta.registry import build_collection
from pysasta.state.events import ChangeBus, StorageChangeEvent
from pysasta.state.store import EntityStore
from pysasta.storage import MemoryStorage


class _Clock:
    """Deterministic clock advancing one millisecond per call."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2026, 1, 1, tzinfo=UTC)

    def __call__(self) -> datetime:
        self.now += timedelta(milliseconds=1)
        return self.now


def _store(
    name: str,
    storage: MemoryStorage | None = None,
    bus: ChangeBus | None = None,
    clock: _Clock | None = None,
) -> EntityStore:
    return EntityStore(
        storage if storage is not None else MemoryStorage(),
        bus if bus is not None else ChangeBus(),
        build_collection(name),
        clock=clock or _Clock(),
    )


def _audit(sgs_date: str, **overrides: object) -> dict[str, object]:
    data: dict[str, object] = {
        "scheme": "MGNREGS",
        "roundNo": "1",
        "district": "Ariyalur",
        "block": "Ariyalur",
        "panchayat": "226362",
        "startDate": "2025-01-01",
        "endDate": "2025-01-05",
        "sgsDate": sgs_date,
    }
    data.update(overrides)
    return data


def test_add_then_list_contains_exactly_one_new_record() -> None:
    store = _store("calendars")
    data = {
        "scheme": "MGNREGS",
        "year": "2025",
        "district": "Madurai",
        "type": "Audit",
        "originalFilename": "plan.pdf",
        "filename": "madurai-2025.pdf",
        "dataUrl": "data:application/pdf;base64,AAAA",
        "uploadedAt": "2025-03-01T10:00:00Z",
    }

    created = store.add(data)
    records = store.list_records()

    assert len(records) == 1
    assert records[0] == created
    assert created.district == "Madurai"
    assert created.uploaded_at == datetime(2025, 3, 1, 10, tzinfo=UTC)
    assert {k: v for k, v in created.to_storage().items() if k != "id"} == data


def test_add_assigns_epoch_millisecond_id_and_ignores_given_id() -> None:
    clock = _Clock(datetime(2025, 1, 1, tzinfo=UTC))
    store = _store("holidays", clock=clock)

    created = store.add({"id": 7, "date": "2025-12-25", "name": "Christmas"})

    assert created.id == int(datetime(2025, 1, 1, 0, 0, 0, 1000, tzinfo=UTC).timestamp() * 1000)
    assert created.id != 7


def test_add_rereads_storage_instead_of_memory_view() -> None:
    storage = MemoryStorage()
    store = _store("feedback", storage=storage)
    # Written behind the store's back (another process, devtools, ...).
    storage.set_item(store.key, json.dumps([{"id": 1, "name": "A", "email": "a@x.com", "feedback": "hi"}]))

    store.add({"name": "B", "email": "b@x.com", "feedback": "hello"})

    assert [r.name for r in store.list_records()] == ["A", "B"]


def test_update_replaces_only_matching_record() -> None:
    store = _store("calendars")
    base = {
        "scheme": "PMAY-G",
        "year": "2025",
        "type": "Audit",
        "originalFilename": "a.pdf",
        "filename": "a.pdf",
        "dataUrl": "data:,",
    }
    first = store.add({**base, "district": "Theni"})
    second = store.add({**base, "district": "Karur"})
    third = store.add({**base, "district": "Salem"})
    before = {r.id: r.to_storage() for r in store.list_records()}

    store.update(second.model_copy(update={"district": "Erode"}))

    records = store.list_records()
    assert [r.id for r in records] == [first.id, second.id, third.id]
    assert store.get(second.id).district == "Erode"  # type: ignore[union-attr]
    assert store.get(first.id).to_storage() == before[first.id]  # type: ignore[union-attr]
    assert store.get(third.id).to_storage() == before[third.id]  # type: ignore[union-attr]


def test_update_unknown_id_changes_nothing() -> None:
    store = _store("holidays")
    before = store.list_records()

    store.update(Holiday(id=999, date=date(2025, 5, 1), name="May Day"))

    assert store.list_records() == before


def test_delete_removes_record_and_unknown_id_is_noop() -> None:
    store = _store("holidays")
    target = store.list_records()[0]

    store.delete(target.id)
    assert store.get(target.id) is None
    assert len(store) == 5

    store.delete(123456789)
    assert len(store) == 5


def test_round_trip_through_storage_is_equal_and_sorted() -> None:
    storage = MemoryStorage()
    bus = ChangeBus()
    writer = _store("audits", storage=storage, bus=bus)
    writer.add(_audit("2025-02-10"))
    writer.add(_audit("2025-04-01", comment="late"))
    writer.add(_audit("2025-01-20"))

    reader = _store("audits", storage=storage, bus=ChangeBus())

    assert reader.list_records() == writer.list_records()
    assert [r.sgs_date for r in reader.list_records()] == [date(2025, 4, 1), date(2025, 2, 10), date(2025, 1, 20)]


def test_load_is_idempotent() -> None:
    store = _store("holidays")
    assert store.load() == store.load()


def test_holidays_are_seeded_once_and_sorted_ascending() -> None:
    storage = MemoryStorage()
    store = _store("holidays", storage=storage)

    names = [h.name for h in store.list_records()]
    assert names[0] == "Pongal"
    assert names[-1] == "Gandhi Jayanti"
    assert [h.date for h in store.list_records()] == sorted(h.date for h in store.list_records())
    assert len(json.loads(storage.get_item(store.key) or "[]")) == 6


def test_unseeded_collection_starts_empty_without_writing() -> None:
    storage = MemoryStorage()
    store = _store("audits", storage=storage)

    assert store.list_records() == []
    assert storage.get_item(store.key) is None


def test_malformed_blob_yields_empty_and_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    storage = MemoryStorage()
    storage.set_item("sasta-audit-entries", "{not json")

    with caplog.at_level(logging.ERROR):
        store = _store("audits", storage=storage)

    assert store.list_records() == []
    assert "not valid JSON" in caplog.text


def test_malformed_seeded_collection_falls_back_to_seed_without_overwriting() -> None:
    storage = MemoryStorage()
    storage.set_item("sasta-holidays", '{"oops": true}')

    store = _store("holidays", storage=storage)

    assert len(store) == 6
    assert storage.get_item("sasta-holidays") == '{"oops": true}'


def test_invalid_records_are_skipped(caplog: pytest.LogCaptureFixture) -> None:
    storage = MemoryStorage()
    storage.set_item(
        "sasta-holidays",
        json.dumps([{"id": 1, "date": "2025-01-14", "name": "Pongal"}, {"id": 2, "name": "no date"}, "junk"]),
    )

    with caplog.at_level(logging.WARNING):
        store = _store("holidays", storage=storage)

    assert [h.name for h in store.list_records()] == ["Pongal"]
    assert "Skipping malformed record" in caplog.text
    assert "Skipping non-object record" in caplog.text


def test_invalid_rows_are_written_back_unchanged() -> None:
    storage = MemoryStorage()
    legacy = [{"id": 2, "name": "no date"}, "junk", {"date": "2025-03-03", "name": "no id"}]
    storage.set_item("sasta-holidays", json.dumps([{"id": 1, "date": "2025-01-14", "name": "Pongal"}, *legacy]))
    store = _store("holidays", storage=storage)

    created = store.add({"date": "2025-04-14", "name": "Tamil New Year"})
    store.remove_where(lambda h: h.name == "Pongal")

    stored = json.loads(storage.get_item("sasta-holidays") or "[]")
    assert [h.id for h in store.list_records()] == [created.id]
    for row in legacy:
        assert row in stored


def test_delete_can_remove_an_invalid_row_by_id() -> None:
    storage = MemoryStorage()
    storage.set_item("sasta-holidays", json.dumps([{"id": 1, "date": "2025-01-14", "name": "Pongal"}, {"id": 2}]))
    store = _store("holidays", storage=storage)

    store.delete(2)

    assert json.loads(storage.get_item("sasta-holidays") or "[]") == [{"id": 1, "date": "2025-01-14", "name": "Pongal"}]


def test_update_leaves_other_rows_byte_for_byte_unchanged() -> None:
    storage = MemoryStorage()
    untouched = {
        "id": 1,
        "scheme": "MGNREGS",
        "roundNo": "1",
        "district": "Ariyalur",
        "block": "Ariyalur",
        "panchayat": "226362",
        "startDate": "2024-01-15T00:00:00.000Z",
        "endDate": "2024-01-20T00:00:00.000Z",
        "sgsDate": "2024-01-25T00:00:00.000Z",
        "comment": None,
    }
    storage.set_item("sasta-audit-entries", json.dumps([untouched, {**_audit("2024-02-10"), "id": 2}]))
    store = _store("audits", storage=storage)

    store.update(store.get(2).model_copy(update={"comment": "rescheduled"}))  # type: ignore[union-attr]

    blob = storage.get_item("sasta-audit-entries") or ""
    assert json.dumps(untouched, separators=(",", ":")) in blob
    assert store.get(1).start_date == date(2024, 1, 15)  # type: ignore[union-attr]
    assert store.get(2).comment == "rescheduled"  # type: ignore[union-attr]


def test_get_finds_records_by_id() -> None:
    store = _store("holidays")

    assert store.get(4).name == "Republic Day"  # type: ignore[union-attr]
    assert store.get(99) is None


def test_unknown_fields_survive_round_trip() -> None:
    storage = MemoryStorage()
    storage.set_item(
        "sasta-holidays",
        json.dumps([{"id": 1, "date": "2025-01-14", "name": "Pongal", "region": "TN"}]),
    )
    store = _store("holidays", storage=storage)

    store.add({"date": "2025-04-14", "name": "Tamil New Year"})

    stored = json.loads(storage.get_item("sasta-holidays") or "[]")
    assert stored[0]["region"] == "TN"


def test_invalid_input_raises_and_leaves_storage_untouched() -> None:
    storage = MemoryStorage()
    store = _store("audits", storage=storage)

    with pytest.raises(ValidationError):
        store.add({"scheme": "MGNREGS"})

    assert storage.get_item(store.key) is None


def test_unavailable_storage_keeps_mutation_in_memory_only(caplog: pytest.LogCaptureFixture) -> None:
    storage = MemoryStorage(available=False)
    bus = ChangeBus()
    events: list[StorageChangeEvent] = []
    bus.subscribe(events.append)

    with caplog.at_level(logging.ERROR):
        store = _store("audits", storage=storage, bus=bus)
        created = store.add(_audit("2025-02-01"))

    assert store.list_records() == [created]
    assert events == []
    assert "Failed to persist collection" in caplog.text

    storage.available = True
    assert storage.get_item(store.key) is None


def test_quota_exceeded_notifies_local_listeners_only() -> None:
    storage = MemoryStorage(quota_bytes=200)
    bus = ChangeBus()
    store = _store("library", storage=storage, bus=bus)
    snapshots: list[list[object]] = []
    store.subscribe(snapshots.append)

    created = store.add(
        {
            "scheme": "MGNREGS",
            "category": "Handbooks",
            "filename": "big.pdf",
            "size": 4096,
            "dataUrl": "data:application/pdf;base64," + "A" * 400,
        }
    )

    assert snapshots == [[created]]
    assert storage.get_item(store.key) is None


def test_remove_where_returns_removed_count() -> None:
    store = _store("holidays")

    removed = store.remove_where(lambda h: h.date.month == 1)

    assert removed == 4
    assert [h.name for h in store.list_records()] == ["Independence Day", "Gandhi Jayanti"]


def test_close_unsubscribes_from_bus() -> None:
    bus = ChangeBus()
    store = _store("audits", bus=bus)
    assert bus.subscriber_count(store.key) == 1

    store.close()
    store.close()

    assert bus.subscriber_count(store.key) == 0
    assert store.closed


def test_failing_listener_does_not_break_mutation() -> None:
    store = _store("holidays")
    seen: list[int] = []

    def _boom(_snapshot: list[object]) -> None:
        raise RuntimeError("listener bug")

    store.subscribe(_boom)
    store.subscribe(lambda snapshot: seen.append(len(snapshot)))

    store.add({"date": "2025-12-25", "name": "Christmas"})

    assert seen == [7]


class _InterleavingStorage(MemoryStorage):
    """Runs a hook right after the next read has captured its value."""

    def __init__(self) -> None:
        super().__init__()
        self.after_next_read = None

    def get_item(self, key: str) -> str | None:
        value = super().get_item(key)
        hook, self.after_next_read = self.after_next_read, None
        if hook is not None:
            hook()
        return value


def test_interleaved_adds_from_two_sessions_can_lose_a_write() -> None:
    """Read-modify-write without locking: the later writer wins.

    Session B writes between session A's read and A's write, so A writes
    back a collection that never contained B's record. This documents the
    hazard; it is not a guarantee either way.
    """
    storage = _InterleavingStorage()
    bus = ChangeBus()
    clock = _Clock()
    session_a: EntityStore[AuditEntry] = _store("audits", storage=storage, bus=bus, clock=clock)
    session_b: EntityStore[AuditEntry] = _store("audits", storage=storage, bus=bus, clock=clock)
    lost: list[AuditEntry] = []

    storage.after_next_read = lambda: lost.append(session_b.add(_audit("2025-03-01", comment="from B")))
    kept = session_a.add(_audit("2025-03-02", comment="from A"))

    assert len(lost) == 1
    stored_ids = [item["id"] for item in json.loads(storage.get_item(session_a.key) or "[]")]
    assert stored_ids == [kept.id]
    assert session_b.list_records() == [kept]
