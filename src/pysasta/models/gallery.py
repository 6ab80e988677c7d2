"""Field activity gallery."""

from __future__ import annotations

import enum

from pydantic import Field

from pysasta.models._base import RecordModel, UtcDatetime, YesNo, utcnow


class GalleryActivityType(enum.StrEnum):
    ORIENTATION_MEETING = "Orientation Meeting"
    HABITATION_MEETING = "Habitation Meeting"
    RECORD_VERIFICATION = "Record Verification"
    DOOR_TO_DOOR_VISIT = "Door to Door Visit"
    COMMUNITY_ENGAGEMENT = "Community Engagement"
    REPORT_PREPARATION = "Report Preparation"
    SPECIAL_GRAMA_SABHA = "Special Grama Sabha"
    SOCIAL_JUSTICE_PROGRAM = "Social Justice Program"
    NOON_MEALS_PROGRAM = "Noon Meals Program"
    TRAINING = "Training"
    HLC_MEETING = "HLC Meeting"
    TEAM_VISIT = "Team Visit"
    BENEFICIARY_SABHA = "Beneficiary Sabha"
    DISTRICT_ASSEMBLY = "District Assembly"
    STATE_ASSEMBLY = "State Assembly"
    OTHERS = "Others"


class GalleryMediaType(enum.StrEnum):
    PHOTO = "photo"
    VIDEO = "video"
    NEWS = "news"
    BLOG = "blog"


class GalleryItem(RecordModel):
    scheme: str
    district: str
    block: str
    panchayat: str = Field(..., description="LGD code of the panchayat")
    activity_type: GalleryActivityType
    is_work_related: YesNo = YesNo.NO
    work_name: str | None = None
    work_code: str | None = None
    media_type: GalleryMediaType
    original_filename: str
    data_url: str
    uploaded_at: UtcDatetime = Field(default_factory=utcnow)
