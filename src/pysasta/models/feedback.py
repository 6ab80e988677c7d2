"""Public feedback submitted through the portal."""

from __future__ import annotations

from pydantic import Field

from pysasta.models._base import RecordModel, UtcDatetime, utcnow


class Feedback(RecordModel):
    name: str
    email: str
    feedback: str
    submitted_at: UtcDatetime = Field(default_factory=utcnow)
