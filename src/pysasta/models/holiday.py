"""Office holidays."""

from __future__ import annotations

from typing import Any

from pysasta.models._base import CalendarDate, RecordModel


class Holiday(RecordModel):
    date: CalendarDate
    name: str


#: Written to storage the first time the holiday list is read.
HOLIDAY_SEED: tuple[dict[str, Any], ...] = (
    {"id": 1, "date": "2025-01-14", "name": "Pongal"},
    {"id": 2, "date": "2025-01-15", "name": "Thiruvalluvar Day"},
    {"id": 3, "date": "2025-01-16", "name": "Uzhavar Thirunal"},
    {"id": 4, "date": "2025-01-26", "name": "Republic Day"},
    {"id": 5, "date": "2025-08-15", "name": "Independence Day"},
    {"id": 6, "date": "2025-10-02", "name": "Gandhi Jayanti"},
)
