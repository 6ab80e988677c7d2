"""Staff sign-in activity."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import Field, model_validator

from pysasta.models._base import RecordModel, UtcDatetime, ensure_utc, utcnow
from pysasta.state.policy import next_record_id


class ActivityLog(RecordModel):
    employee_code: str
    timestamp: UtcDatetime = Field(default_factory=utcnow)

    @model_validator(mode="before")
    @classmethod
    def _derive_missing_id(cls, data: Any) -> Any:
        # Logs written before records carried ids are keyed by their timestamp.
        if not isinstance(data, dict) or data.get("id") is not None:
            return data
        raw = data.get("timestamp")
        if isinstance(raw, datetime):
            moment = raw
        elif isinstance(raw, str):
            try:
                moment = datetime.fromisoformat(raw)
            except ValueError:
                return data
        else:
            return data
        return {**data, "id": next_record_id(ensure_utc(moment))}
