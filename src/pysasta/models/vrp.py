"""Village Resource Persons (VRPs) engaged for audits."""

from __future__ import annotations

import enum
from typing import Any

from pysasta.models._base import CalendarDate, RecordModel, YesNo
from pysasta.models.user import LocationType


class FamilyRelation(enum.StrEnum):
    FATHER = "father"
    HUSBAND = "husband"


class Vrp(RecordModel):
    """One VRP.

    A VRP who already holds an MGNREGA employee code keeps it
    (``has_employee_code == "yes"``); others are issued a ``TN-VRP-N-<n>``
    code on registration. Uploaded documents are data URLs kept as-is.
    """

    role: str = "VRP"
    name: str
    district: str
    address: str
    pincode: str
    family_relation: FamilyRelation
    family_name: str
    caste: str
    dob: CalendarDate
    age: int | None = None
    gender: str = "Female"
    is_differently_abled: YesNo = YesNo.NO
    qualification: str
    contact_number1: str
    contact_number2: str | None = None
    bank_name: str
    branch_name: str
    account_number: str
    ifsc_code: str
    aadhaar: str
    pan: str | None = None
    pfms_id: str
    aadhaar_upload: Any = None
    bank_passbook_upload: Any = None
    has_employee_code: YesNo
    employee_code: str
    block: str | None = None
    panchayat: str | None = None
    lgd_code: str | None = None
    panchayat_name: str | None = None
    mgnrega_job_card: str | None = None
    scheme: str | None = None
    location_type: LocationType | None = None
    urban_body_type: str | None = None
    urban_body_name: str | None = None
