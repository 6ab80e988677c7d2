"""PMAY-G (rural housing) social audit data entry and issues."""

from __future__ import annotations

from pydantic import Field

from pysasta.models._base import CalendarDate, ParaStatus, RecordModel, SastaBaseModel, UtcDatetime, YesNo, utcnow


class PmaygParaParticulars(SastaBaseModel):
    id: int
    issue_number: str = ""
    type: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
    sub_category: str = ""
    code_number: str = ""
    description: str = Field(..., min_length=1, max_length=1000)
    beneficiaries: float = 0
    central_amount: float = 0
    state_amount: float = 0
    other_amount: float = 0
    grievances: float = 0
    hlc_reg_no: str | None = None
    para_status: ParaStatus = ParaStatus.PENDING
    recovery_amount: float = 0
    hlc_recovery_amount: float = 0


class PmaygEntry(RecordModel):
    """One PMAY-G audit filed by a block resource person (BRP)."""

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
    expenditure_year: str = "2016-2022"
    audit_year: str = ""
    observer: YesNo = YesNo.NO
    observer_name: str | None = None
    observer_designation: str | None = None
    coram: int = Field(default=0, ge=0, le=999)

    total_houses: int = 0
    first_installment: int = 0
    second_installment: int = 0
    third_installment: int = 0
    fourth_installment: int = 0
    not_completed_after_fourth: int = 0

    gs_decision: YesNo = YesNo.NO
    project_deficiencies: str | None = None
    special_remarks: str | None = None
    audit_outcome: str | None = None

    para_particulars: list[PmaygParaParticulars] = Field(default_factory=list)


class PmaygIssue(RecordModel):
    """A PMAY-G issue; ``issue_number`` comes from the issue serial counter."""

    issue_number: str
    type: str
    category: str
    sub_category: str = ""
    code_number: str = ""
    beneficiaries: float = 0
    central_amount: float = 0
    state_amount: float = 0
    other_amount: float = 0
    grievances: float = 0
    hlc_reg_no: str | None = None
    para_status: ParaStatus = ParaStatus.PENDING
    recovery_amount: float = 0
