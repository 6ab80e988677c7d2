"""Registry of well-known portal collections.

Each entry names a storage key suffix, the record model stored under it,
the order the portal lists it in, and the seed written on first read.
"""

from __future__ import annotations

from typing import Any

from pysasta.models import (
    DISTRICT_OFFICE_SEED,
    HOLIDAY_SEED,
    MGNREGS_SEED,
    USER_SEED,
    ActivityLog,
    AuditEntry,
    CalendarFile,
    CaseStudy,
    DistrictOffice,
    Feedback,
    GalleryItem,
    Grievance,
    HlcEntry,
    Holiday,
    LibraryItem,
    MgnregsEntry,
    PmaygEntry,
    PmaygIssue,
    StaffUser,
    TourDiaryRecord,
    Vrp,
)
from pysasta.state.policy import SortOrder
from pysasta.state.store import Collection

_NEWEST_SUBMITTED_FIRST = SortOrder("submitted_at", descending=True)

# name -> (key suffix, model, sort, seed)
_COLLECTIONS: dict[str, tuple[str, type[Any], SortOrder | None, tuple[dict[str, Any], ...]]] = {
    "audits": ("audit-entries", AuditEntry, SortOrder("sgs_date", descending=True), ()),
    "calendars": ("calendars", CalendarFile, None, ()),
    "case_studies": ("case-studies", CaseStudy, None, ()),
    "feedback": ("feedback", Feedback, None, ()),
    "holidays": ("holidays", Holiday, SortOrder("date"), HOLIDAY_SEED),
    "library": ("library-items", LibraryItem, SortOrder("uploaded_at", descending=True), ()),
    "mgnregs": ("mgnregs-entries", MgnregsEntry, _NEWEST_SUBMITTED_FIRST, MGNREGS_SEED),
    "pmayg": ("pmayg-entries", PmaygEntry, _NEWEST_SUBMITTED_FIRST, ()),
    "pmayg_issues": ("pmayg-issues", PmaygIssue, None, ()),
    "tour_diary": ("tour-diary", TourDiaryRecord, SortOrder("date", descending=True), ()),
    "grievances": ("grievances", Grievance, _NEWEST_SUBMITTED_FIRST, ()),
    "activity": ("activity-logs", ActivityLog, None, ()),
    "users": ("users", StaffUser, None, USER_SEED),
    "district_offices": ("district-offices", DistrictOffice, None, DISTRICT_OFFICE_SEED),
    "hlc": ("hlc-entries", HlcEntry, None, ()),
    "vrps": ("vrps", Vrp, None, ()),
    "gallery": ("gallery-items", GalleryItem, SortOrder("uploaded_at", descending=True), ()),
}

COLLECTION_NAMES: tuple[str, ...] = tuple(_COLLECTIONS)

LOGO_KEY_SUFFIX = "logo"
USER_KEY_SUFFIX = "user"
CASE_STUDY_COUNTER_SUFFIX = "case-study-counter"
PMAYG_ISSUE_COUNTER_SUFFIX = "pmayg-issue-counter"


def build_collection(name: str, *, key_prefix: str = "sasta-") -> Collection[Any]:
    """Return the :class:`Collection` definition registered as *name*."""
    try:
        suffix, model, sort, seed = _COLLECTIONS[name]
    except KeyError:
        raise KeyError(f"Unknown collection {name!r}; expected one of {', '.join(COLLECTION_NAMES)}") from None
    return Collection(name=name, key=f"{key_prefix}{suffix}", model=model, sort=sort, seed=seed)


def build_collections(*, key_prefix: str = "sasta-") -> dict[str, Collection[Any]]:
    return {name: build_collection(name, key_prefix=key_prefix) for name in COLLECTION_NAMES}
