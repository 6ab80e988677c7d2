"""MGNREGS social audit data entry."""

from __future__ import annotations

import enum
from typing import Any

from pydantic import Field

from pysasta.models._base import CalendarDate, ParaStatus, RecordModel, SastaBaseModel, UtcDatetime, YesNo, utcnow


class DrpRole(enum.StrEnum):
    DRP = "DRP"
    DRP_IN_CHARGE = "DRP I/C"


class VrpDetail(SastaBaseModel):
    vrp_search_value: str | None = None
    vrp_employee_code: str | None = None
    vrp_name: str | None = None
    vrp_contact_number: str | None = None
    vrp_district: str | None = None
    vrp_block: str | None = None
    vrp_panchayat: str | None = None


class MgnregsParaParticulars(SastaBaseModel):
    issue_number: str = Field(..., min_length=1)
    type: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
    sub_category: str = Field(..., min_length=1)
    code_number: str = ""
    grievances: float | None = None
    beneficiaries: float | None = None
    cases: float | None = None
    amount: float | None = None
    recovered_amount: float | None = None
    hlc_reg_no: str | None = None
    para_status: ParaStatus = ParaStatus.PENDING
    hlc_recovery_amount: float | None = None
    is_report_submitted: bool | None = None


class MgnregsEntry(RecordModel):
    """One MGNREGS audit filed by a block resource person (BRP)."""

    submitted_at: UtcDatetime = Field(default_factory=utcnow)

    brp_employee_code: str = Field(..., min_length=1)
    brp_name: str = ""
    brp_contact: str = ""
    brp_district: str = ""
    brp_block: str = ""

    district: str = Field(..., min_length=1)
    block: str = Field(..., min_length=1)
    panchayat: str = Field(..., min_length=1)
    lgd_code: str = ""
    round_no: str = Field(..., min_length=1)
    audit_start_date: CalendarDate
    audit_end_date: CalendarDate
    sgs_date: CalendarDate
    expenditure_year: str = ""
    audit_year: str = ""
    observer: YesNo = YesNo.NO
    observer_name: str | None = None
    observer_designation: str | None = None
    coram: int = Field(default=0, ge=0, le=999)

    drp_role: DrpRole | None = None
    drp_employee_code: str | None = None
    drp_name: str | None = None
    drp_contact: str | None = None
    drp_district: str | None = None
    vrp_details: list[VrpDetail] = Field(default_factory=list)

    total_works: float | None = None
    unskilled_amount: float | None = None
    skilled_semi_skilled_amount: float | None = None
    material_amount: float | None = None
    total_amount: float | None = None
    works_verified: float | None = None
    households_worked: float | None = None
    households_verified: float | None = None

    para_particulars: list[MgnregsParaParticulars] = Field(default_factory=list)


#: Sample entry written to storage the first time MGNREGS entries are read.
MGNREGS_SEED: tuple[dict[str, Any], ...] = (
    {
        "id": 1,
        "submittedAt": "2024-01-15T10:00:00Z",
        "brpEmployeeCode": "TN-729",
        "brpName": "M.Ravichandran",
        "brpContact": "9965537235",
        "brpDistrict": "Ariyalur",
        "brpBlock": "Ariyalur",
        "district": "Ariyalur",
        "block": "Ariyalur",
        "panchayat": "226362",
        "lgdCode": "226362",
        "roundNo": "1",
        "auditStartDate": "2024-01-01",
        "auditEndDate": "2024-01-10",
        "sgsDate": "2024-01-15",
        "expenditureYear": "2022-2023",
        "auditYear": "2023-2024",
        "observer": "yes",
        "observerName": "Observer One",
        "observerDesignation": "Designation One",
        "coram": 150,
        "drpRole": "DRP",
        "drpEmployeeCode": "TN-1022",
        "drpName": "D.Rajendran",
        "drpContact": "9994814897",
        "drpDistrict": "Chennai",
        "vrpDetails": [
            {"vrpSearchValue": "9876543210"},
            {"vrpSearchValue": "9876543211"},
            {"vrpSearchValue": "9876543212"},
        ],
        "totalWorks": 11,
        "unskilledAmount": 425000,
        "skilledSemiSkilledAmount": 25000,
        "materialAmount": 150000,
        "totalAmount": 600000,
        "worksVerified": 10,
        "householdsWorked": 50,
        "householdsVerified": 45,
        "paraParticulars": [
            {
                "issueNumber": "FM-ARI-001",
                "type": "FM - Financial Misappropriation",
                "category": "Work Related",
                "subCategory": "Work was done through machines",
                "codeNumber": "FM-3.7",
                "amount": 25000,
                "paraStatus": "PENDING",
                "isReportSubmitted": False,
            },
            {
                "issueNumber": "PV-ARI-001",
                "type": "PV - Process Violation",
                "category": "Denial Of Entitlements",
                "subCategory": "Work site facilities are not provided",
                "codeNumber": "PV-1.11",
                "amount": 0,
                "paraStatus": "PENDING",
                "isReportSubmitted": False,
            },
        ],
    },
)
