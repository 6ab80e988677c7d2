"""High Level Committee (HLC) meeting register."""

from __future__ import annotations

from pydantic import Field

from pysasta.models._base import CalendarDate, RecordModel, SastaBaseModel, YesNo


class HlcMinutes(SastaBaseModel):
    """Uploaded minutes of the meeting, embedded as a data URL."""

    name: str
    original_name: str
    data_url: str


class HlcMgnregsDetails(SastaBaseModel):
    """Paras and amounts per category, recorded for MGNREGS meetings only."""

    fm_paras: int | None = None
    fm_amount: float | None = None
    fd_paras: int | None = None
    fd_amount: float | None = None
    pv_paras: int | None = None
    pv_amount: float | None = None
    gr_paras: int | None = None
    gr_amount: float | None = None


class HlcEntry(RecordModel):
    reg_no: str
    scheme: str
    district: str
    drp_name: str
    hlc_no: str
    hlc_date: CalendarDate
    proceeding_no: str
    proceeding_date: CalendarDate
    placed_paras: int = Field(default=0, ge=0)
    closed_paras: int = Field(default=0, ge=0)
    pending_paras: int = Field(default=0, ge=0)
    recovered_amount: float | None = None
    fir: YesNo = YesNo.NO
    fir_no: str | None = None
    charges: YesNo = YesNo.NO
    charge_details: str | None = None
    action_taken: str | None = None
    hlc_minutes: HlcMinutes | None = None
    mgnregs_details: HlcMgnregsDetails | None = None
