"""Base models for persisted portal records.

Every persisted record inherits from :class:`RecordModel` which provides:

* ``alias_generator=to_camel`` so records are stored with the camelCase
  keys the portal has always written, while Python code uses snake_case.
* ``extra="allow"`` so fields written by a newer record shape survive a
  load/save cycle instead of being dropped.
* A mandatory integer ``id``.

Instants are coerced to timezone-aware UTC via :data:`UtcDatetime`;
date-only fields use :data:`CalendarDate`.
"""

from __future__ import annotations

import enum
from datetime import UTC, date, datetime
from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_camel


def ensure_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes and convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def utcnow() -> datetime:
    return datetime.now(UTC)


UtcDatetime = Annotated[datetime, AfterValidator(ensure_utc)]
"""Annotated type for instants; always timezone-aware UTC."""


def parse_calendar_date(value: Any) -> Any:
    """Accept ``YYYY-MM-DD`` as well as full ISO instants for date-only fields.

    Older entries were saved from JavaScript ``Date`` objects, which
    serialise as ``2024-01-15T00:00:00.000Z``; only the day is kept.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str) and len(value) > 10 and value[4:5] == "-" and value[10:11] == "T":
        return value[:10]
    return value


CalendarDate = Annotated[date, BeforeValidator(parse_calendar_date)]
"""Annotated type for date-only fields."""


class YesNo(enum.StrEnum):
    YES = "yes"
    NO = "no"


class ParaStatus(enum.StrEnum):
    PENDING = "PENDING"
    CLOSED = "CLOSED"


class SastaBaseModel(BaseModel):
    """Base for every model persisted to a storage area."""

    model_config = ConfigDict(
        frozen=True,
        extra="allow",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    def to_storage(self) -> dict[str, Any]:
        """JSON-ready dict with camelCase keys; unset optionals are omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class RecordModel(SastaBaseModel):
    """A record of an entity collection, keyed by ``id``."""

    id: int = Field(..., description="Creation time in epoch milliseconds")


class Attachment(SastaBaseModel):
    """A file embedded in a record as a data URL."""

    name: str
    type: str = ""
    size: int = 0
    data_url: str = ""
