"""Staff activity log: who signed in, and when."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from datetime import UTC, datetime

from pysasta.models._base import ensure_utc
from pysasta.models.activity import ActivityLog
from pysasta.state.store import EntityStore


def _reference(now: datetime | None) -> datetime:
    # Naive datetimes are UTC throughout the record models.
    return ensure_utc(now or datetime.now(UTC))


def _same_month(moment: datetime, reference: datetime) -> bool:
    moment = ensure_utc(moment)
    return moment.year == reference.year and moment.month == reference.month


def log_activity(store: EntityStore[ActivityLog], employee_code: str, *, now: datetime | None = None) -> ActivityLog:
    if not employee_code.strip():
        raise ValueError("employee_code must be non-empty")
    data: dict[str, object] = {"employee_code": employee_code.strip()}
    if now is not None:
        data["timestamp"] = now
    return store.add(data)


def clear_monthly_activity(store: EntityStore[ActivityLog], *, now: datetime | None = None) -> int:
    """Drop every log of the current calendar month (UTC); return the count."""
    reference = _reference(now)
    return store.remove_where(lambda log: _same_month(log.timestamp, reference))


def monthly_activity_counts(logs: Iterable[ActivityLog], *, now: datetime | None = None) -> dict[str, int]:
    """Sign-ins per employee code within the month of *now*."""
    reference = _reference(now)
    return dict(Counter(log.employee_code for log in logs if _same_month(log.timestamp, reference)))
