"""Document library items."""

from __future__ import annotations

import enum

from pydantic import Field

from pysasta.models._base import RecordModel, UtcDatetime, utcnow


class LibraryCategory(enum.StrEnum):
    SCHEME_GUIDELINES = "Scheme Guidelines"
    HANDBOOKS = "Handbooks"
    GOVERNMENT_ORDERS = "GOs (Government Orders)"
    PRESENTATIONS = "Presentations"
    ACTS_AND_LAWS = "Relevant Acts & Laws"
    REPORTS_AND_FORMATS = "Social Audit Reports & Formats"
    TRAINING_MATERIALS = "Social Audit Training Materials"
    BANNERS = "Banners"
    OFFICE_FORMATS = "Office Formats"


class LibraryItem(RecordModel):
    scheme: str
    category: LibraryCategory
    filename: str
    size: int = Field(default=0, ge=0, description="File size in bytes")
    data_url: str
    uploaded_at: UtcDatetime = Field(default_factory=utcnow)
