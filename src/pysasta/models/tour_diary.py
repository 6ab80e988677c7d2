"""Monthly tour diary of field staff."""

from __future__ import annotations

from pydantic import Field

from pysasta.models._base import CalendarDate, RecordModel


class TourDiaryRecord(RecordModel):
    """A tour diary entry together with the month's attendance summary."""

    employee_code: str
    name: str
    role: str
    district: str
    date: CalendarDate
    departure_place: str = ""
    camp_place: str = ""
    vehicle_details: str = ""
    distance: float = Field(default=0, ge=0)
    work_summary: str = ""

    month: int = Field(..., ge=0, le=11, description="0-based month of the summary")
    year: int
    hq_work_days: int = 0
    field_visit_days: int = 0
    hlc_meeting_held: int = 0
    hlc_meeting_attended: int = 0
    total_camp_days: int = 0
    leave_days: int = 0
    holidays: int = 0
    total_days: int = 0
