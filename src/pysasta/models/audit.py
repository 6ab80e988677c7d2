"""Social audit schedule entries."""

from __future__ import annotations

import enum

from pysasta.models._base import CalendarDate, RecordModel


class NirnayStatus(enum.StrEnum):
    YES = "Yes"
    NO = "No"


class MisStatus(enum.StrEnum):
    UPLOADED = "Uploaded"
    NOT_UPLOADED = "Not Uploaded"


class AuditEntry(RecordModel):
    """One scheduled audit of a panchayat.

    ``panchayat`` holds the LGD code the entry was filed against;
    ``panchayat_name`` is the display name.
    """

    scheme: str
    round_no: str
    district: str
    block: str
    panchayat: str
    lgd_code: str = ""
    panchayat_name: str = ""
    start_date: CalendarDate
    end_date: CalendarDate
    sgs_date: CalendarDate
    audit_venue: str = ""
    sgs_venue: str = ""
    nirnay_status: NirnayStatus = NirnayStatus.NO
    mis_status: MisStatus = MisStatus.NOT_UPLOADED
    comment: str | None = None
