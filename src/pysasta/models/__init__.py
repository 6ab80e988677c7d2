"""Record models persisted by the portal."""

from pysasta.models._base import (
    Attachment,
    CalendarDate,
    ParaStatus,
    RecordModel,
    SastaBaseModel,
    UtcDatetime,
    YesNo,
)
from pysasta.models.activity import ActivityLog
from pysasta.models.audit import AuditEntry, MisStatus, NirnayStatus
from pysasta.models.calendar import CalendarFile
from pysasta.models.case_study import CaseStudy, Photo
from pysasta.models.district_office import DISTRICT_OFFICE_SEED, DistrictOffice
from pysasta.models.feedback import Feedback
from pysasta.models.gallery import GalleryActivityType, GalleryItem, GalleryMediaType
from pysasta.models.grievance import Grievance, GrievanceReply, GrievanceStatus, PetitionerFeedback
from pysasta.models.hlc import HlcEntry, HlcMgnregsDetails, HlcMinutes
from pysasta.models.holiday import HOLIDAY_SEED, Holiday
from pysasta.models.library import LibraryCategory, LibraryItem
from pysasta.models.mgnregs import MGNREGS_SEED, DrpRole, MgnregsEntry, MgnregsParaParticulars, VrpDetail
from pysasta.models.pmayg import PmaygEntry, PmaygIssue, PmaygParaParticulars
from pysasta.models.tour_diary import TourDiaryRecord
from pysasta.models.user import USER_SEED, LocationType, Role, SignedInUser, StaffUser, UserStatus
from pysasta.models.vrp import FamilyRelation, Vrp

__all__ = [
    "ActivityLog",
    "Attachment",
    "AuditEntry",
    "CalendarDate",
    "CalendarFile",
    "CaseStudy",
    "DISTRICT_OFFICE_SEED",
    "DistrictOffice",
    "DrpRole",
    "FamilyRelation",
    "Feedback",
    "GalleryActivityType",
    "GalleryItem",
    "GalleryMediaType",
    "Grievance",
    "GrievanceReply",
    "GrievanceStatus",
    "HOLIDAY_SEED",
    "HlcEntry",
    "HlcMgnregsDetails",
    "HlcMinutes",
    "Holiday",
    "LibraryCategory",
    "LibraryItem",
    "LocationType",
    "MGNREGS_SEED",
    "MgnregsEntry",
    "MgnregsParaParticulars",
    "MisStatus",
    "NirnayStatus",
    "ParaStatus",
    "PetitionerFeedback",
    "Photo",
    "PmaygEntry",
    "PmaygIssue",
    "PmaygParaParticulars",
    "RecordModel",
    "Role",
    "SastaBaseModel",
    "SignedInUser",
    "StaffUser",
    "TourDiaryRecord",
    "USER_SEED",
    "UserStatus",
    "UtcDatetime",
    "Vrp",
    "VrpDetail",
    "YesNo",
]
