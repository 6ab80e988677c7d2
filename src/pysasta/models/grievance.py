"""Grievances filed by the public, and replies to them."""

from __future__ import annotations

import enum

from pydantic import Field

from pysasta.models._base import Attachment, RecordModel, SastaBaseModel, UtcDatetime, utcnow


class GrievanceStatus(enum.StrEnum):
    SUBMITTED = "Submitted"
    IN_PROGRESS = "In Progress"
    RESOLVED = "Resolved"
    REJECTED = "Rejected"
    ANONYMOUS_NO_REPLY = "Anonymous - No Reply"


class PetitionerFeedback(enum.StrEnum):
    SATISFIED = "Satisfied"
    PARTIALLY_SATISFIED = "Partially Satisfied"
    NOT_SATISFIED = "Not Satisfied"


class GrievanceReply(SastaBaseModel):
    content: str
    attachment: Attachment | None = None
    replied_by: str
    replied_at: UtcDatetime = Field(default_factory=utcnow)


class Grievance(RecordModel):
    reg_no: str
    from_name: str = ""
    from_address: str = ""
    district: str = ""
    pincode: str = ""
    contact_number: str = ""
    aadhaar_number: str | None = None
    email: str = ""
    subject: str
    content: str
    date: str = ""
    place: str = ""
    sincerely_name: str = ""
    attachment: Attachment | None = None
    is_anonymous: bool = False
    status: GrievanceStatus = GrievanceStatus.SUBMITTED
    submitted_at: UtcDatetime = Field(default_factory=utcnow)
    reply: GrievanceReply | None = None
    petitioner_feedback: PetitionerFeedback | None = None
