"""Case studies written up from audit findings."""

from __future__ import annotations

from pydantic import Field

from pysasta.models._base import RecordModel, SastaBaseModel


class Photo(SastaBaseModel):
    data_url: str
    description: str = ""


class CaseStudy(RecordModel):
    """A case study.

    ``case_study_no`` comes from the case study serial counter
    (``CS-<DISTRICT PREFIX>-<NNN>``).
    """

    case_study_no: str
    scheme: str
    district: str
    block: str
    panchayat: str
    lgd_code: str = ""
    employee_code: str
    brp_name: str
    para_no: str | None = None
    issue_no: str | None = None
    issue_type: str | None = None
    issue_category: str | None = None
    sub_category: str | None = None
    issue_code: str | None = None
    beneficiaries: int | None = None
    description_english: str | None = None
    description_tamil: str | None = None
    table_rows: int | None = None
    table_cols: int | None = None
    table_data: list[list[str]] | None = None
    photo_layout: str | None = None
    photos: list[Photo] = Field(default_factory=list)
