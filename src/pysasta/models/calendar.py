"""Uploaded audit calendar files."""

from __future__ import annotations

from pydantic import Field

from pysasta.models._base import RecordModel, UtcDatetime, utcnow


class CalendarFile(RecordModel):
    scheme: str
    year: str
    district: str
    type: str
    original_filename: str
    filename: str
    data_url: str
    uploaded_at: UtcDatetime = Field(default_factory=utcnow)
