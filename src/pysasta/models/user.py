"""Portal users: the staff roster and the signed-in user."""

from __future__ import annotations

import enum
from typing import Any

from pydantic import ConfigDict, Field

from pysasta.models._base import CalendarDate, RecordModel, SastaBaseModel, YesNo


class UserStatus(enum.StrEnum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class Role(enum.StrEnum):
    DIRECTOR = "DIRECTOR"
    JD_NR = "JD (NR)"
    JD_SR = "JD (SR)"
    AD = "AD"
    SUPERINTENDENT_ADMIN = "SUPERINTENDENT (ADMIN)"
    SUPERINTENDENT_AUDIT = "SUPERINTENDENT (AUDIT)"
    AO = "AO"
    CONSULTANT = "CONSULTANT"
    SS = "SS"
    AAO = "AAO"
    SLM = "SLM"
    ADMIN = "ADMIN"
    MIS_ASSISTANT = "MIS ASSISTANT"
    DRP = "DRP"
    DRP_IC = "DRP I/C"
    BRP = "BRP"
    VRP = "VRP"
    CREATOR = "CREATOR"


class LocationType(enum.StrEnum):
    RURAL = "rural"
    URBAN = "urban"


class StaffUser(RecordModel):
    """A member of staff on the portal roster.

    Profile sections (education, work history, training, complaints) are
    free-form lists kept as extra fields. A ``password`` written by older
    builds is kept as an extra field too; it is never read here.
    """

    name: str
    employee_code: str = Field(..., min_length=1)
    designation: Role
    mobile_number: str
    date_of_birth: CalendarDate
    email: str | None = None
    status: UserStatus = UserStatus.ACTIVE
    profile_picture: str | None = None
    recruitment_type: str | None = None
    location_type: LocationType | None = None
    district: str | None = None
    block: str | None = None
    panchayat: str | None = None
    panchayat_name: str | None = None
    lgd_code: str | None = None
    urban_body_type: str | None = None
    urban_body_name: str | None = None
    pincode: str | None = None
    gender: str | None = None
    is_differently_abled: YesNo | None = None
    joining_date: CalendarDate | None = None


class SignedInUser(SastaBaseModel):
    """Who is signed in on this storage area.

    Stored under the signed-in user key; the password is never part of it.
    """

    model_config = ConfigDict(extra="ignore")

    id: int
    name: str
    employee_code: str = Field(..., min_length=1)
    designation: str
    mobile_number: str = ""
    email: str | None = None
    status: UserStatus = UserStatus.ACTIVE
    district: str | None = None
    profile_picture: str | None = None


# id, name, employee code, designation, mobile, date of birth[, district[, block]]
_ROSTER: tuple[tuple[Any, ...], ...] = (
    (1, "M.Ravichandran", "TN-729", "BRP", "9965537235", "1972-06-10", "Ariyalur", "Ariyalur"),
    (2, "S.Kanagathara", "TN-767", "BRP", "9840639323", "1978-05-30", "Coimbatore"),
    (3, "D.Rajendran", "TN-1022", "DRP", "9994814897", "1968-10-06", "Chennai"),
    (4, "T.Sankar", "TN-755", "DRP I/C", "8220588742", "1978-05-13", "Dharmapuri"),
    (5, "S.Malarvizhi", "TN-759", "SLM", "7010621372", "1986-05-03", "Chennai"),
    (6, "P.K.Bhoopalan", "TN-837", "BRP", "944487005", "1977-06-07", "Erode"),
    (497, "Creator User", "TN-CREATOR", "CREATOR", "9944892005", "1986-03-31", "Chennai"),
    (537, "S. Manimaran", "TN-1087-IC", "DRP I/C", "9626205694", "1986-01-18"),
    (538, "G.Kalilur Rehman", "TN-957-IC", "DRP I/C", "8072267181", "1986-07-11"),
    (539, "K.Ramanajothi", "TN-752", "DRP", "9585973351", "1975-06-03"),
    (540, "P.Prema", "TN-1268-IC", "DRP I/C", "8667232805", "1968-07-16"),
    (541, "G.Ashok Kumar", "TN-881", "DRP", "9489042846", "1984-10-24"),
    (542, "N.Senthil", "TN-753", "DRP", "9443074060", "1974-07-22"),
    (543, "T.Rajinikanthan", "TN-1197-IC", "DRP I/C", "9843125659", "1977-06-01"),
    (544, "P.Venkatesan", "TN-889-IC", "DRP I/C", "8220248808", "1982-03-01"),
    (545, "M.Pugalenthi", "TN-998 -IC", "DRP I/C", "7010836348", "1977-07-04"),
    (546, "P.Govindarajan", "TN-913", "DRP", "9843843807", "1983-09-26"),
    (547, "M.Subbaiah", "TN-790", "DRP", "7200002721", "1976-06-09"),
    (548, "S.Ramesh", "TN-1287-IC", "DRP I/C", "8056328310", "1984-06-17"),
    (549, "G.Vinoth", "TN-1008-IC", "DRP I/C", "7904706149", "1985-06-10"),
    (550, "P.Vajjiravel", "TN-1105-IC", "DRP I/C", "8148868321", "1977-09-06"),
    (551, "K.Abdul Kadhar Jailani", "TN-706", "DRP", "9342666803", "1982-05-31"),
    (552, "K.Sundararajan", "TN-997", "DRP", "8015801694", "1981-07-15"),
    (553, "S.Maharajan", "TN-732-IC", "DRP I/C", "8220826461", "1989-11-23"),
    (554, "M.Ghouskhan", "TN-982-IC", "DRP I/C", "9047705380", "1990-10-22"),
    (555, "T.Muthukumaran", "TN-21", "DRP", "9944817100", "1978-09-11"),
    (556, "S.Vijayalakshmi", "TN-1349", "DRP", "9944111187", "1978-05-16"),
    (557, "J.Sathya", "TN-763", "DRP", "8012109906", "1985-07-15"),
    (558, "K.Sivasubramanian", "TN-1016", "DRP", "9655859638", "1979-08-18"),
    (559, "P.Prabhakar", "TN-839-IC", "DRP I/C", "9952688998", "1977-06-12"),
    (560, "M.Alagumurugan", "TN-667", "DRP", "6385132063", "1972-02-17"),
    (561, "T.Saravanan", "TN-1345-IC", "DRP I/C", "9842519503", "1984-01-26"),
    (562, "S.Pandiyan", "TN-1017-IC", "DRP I/C", "9790590043", "1971-06-30"),
    (563, "S.Sivakumar", "TN-896-IC", "DRP I/C", "8807115346", "1973-05-20"),
    (564, "K.Velthai", "TN-14", "DRP", "9791776165", "1973-05-22"),
    (565, "C.Manimaran", "TN-1163", "DRP", "9941557767", "1976-03-25"),
    (566, "S.James Billa Mary", "TN-731-IC", "DRP I/C", "8608007171", "1976-05-17"),
    (567, "T.Sekar", "TN-975", "DRP", "9943398201", "1982-02-17"),
    (568, "M.Chinnsamy", "TN-1095", "DRP", "9790291322", "1976-04-10"),
    (569, "A.Pushpalatha", "TN-1013", "DRP", "8610494781", "1983-06-01"),
    (570, "S.Mani", "TN-1350", "DRP", "9976880100", "1973-12-17"),
    (571, "V.Sekar", "TN-867", "DRP", "9994836638", "1978-03-11"),
    (572, "E.Mohan", "TN-22", "DRP", "9894915623", "1984-06-02"),
    (573, "M.Kanson", "TN-683-IC", "DRP I/C", "9994574681", "1975-09-16"),
    (574, "K.Yogamangalam", "TN-1378", "ADMIN", "8056943916", "1983-01-12"),
    (575, "KARUNA", "TN-CON", "CONSULTANT", "9444839240", "1976-01-01"),
)

_ROSTER_EMAILS = {497: "creator@sasta.com"}


def _roster_entry(
    user_id: int, name: str, code: str, designation: str, mobile: str, dob: str, *place: str
) -> dict[str, Any]:
    entry: dict[str, Any] = {
        "id": user_id,
        "name": name,
        "employeeCode": code,
        "designation": designation,
        "mobileNumber": mobile,
        "dateOfBirth": dob,
        "status": "active",
    }
    if user_id in _ROSTER_EMAILS:
        entry["email"] = _ROSTER_EMAILS[user_id]
    entry.update(zip(("district", "block"), place))
    return entry


#: Written to storage the first time the staff roster is read.
USER_SEED: tuple[dict[str, Any], ...] = tuple(_roster_entry(*row) for row in _ROSTER)
