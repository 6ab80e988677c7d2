"""Identifier and ordering policy for entity collections.

This module intentionally holds *no* storage access. The store decides when
to assign ids and when to sort; this module only decides how.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Any, TypeVar

T = TypeVar("T")


def next_record_id(now: datetime) -> int:
    """Identifier for a record created at *now*: epoch milliseconds.

    Two records created within the same millisecond get the same id; no
    collision check is made.
    """
    return int(now.timestamp() * 1000)


@dataclass(frozen=True, slots=True)
class SortOrder:
    """Ordering applied to a collection on every load and every write.

    ``field`` is the record attribute (snake_case) to order by. Records
    lacking a value always sort last, whatever the direction.
    """

    field: str
    descending: bool = False


def _sort_value(record: Any, field: str) -> Any:
    return getattr(record, field, None)


def sort_records(
    records: Iterable[T],
    order: SortOrder | None,
    *,
    select: Callable[[T], Any] | None = None,
) -> list[T]:
    """Return *records* ordered by *order*; stable for equal values.

    *select* maps an item to the object whose field is compared, for
    items that wrap a record.
    """
    items = list(records)
    if order is None:
        return items

    def value(item: T) -> Any:
        return _sort_value(select(item) if select is not None else item, order.field)

    present = [r for r in items if value(r) is not None]
    missing = [r for r in items if value(r) is None]
    present.sort(key=value, reverse=order.descending)
    return present + missing


def find_index(records: Sequence[Any], record_id: int) -> int | None:
    for index, record in enumerate(records):
        if getattr(record, "id", None) == record_id:
            return index
    return None
