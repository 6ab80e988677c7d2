"""District office directory."""

from __future__ import annotations

from typing import Any

from pydantic import Field

from pysasta.models._base import RecordModel


class DistrictOffice(RecordModel):
    district: str
    building_name: str
    address: str
    pincode: str
    latitude: float | None = None
    longitude: float | None = None
    maps_link: str | None = None
    contact_person: str
    contact_numbers: list[str] = Field(default_factory=list)
    email: str


#: Written to storage the first time the office directory is read.
DISTRICT_OFFICE_SEED: tuple[dict[str, Any], ...] = (
    {
        "id": 1,
        "district": "Chennai",
        "buildingName": "District Collectorate",
        "address": "123, Rajaji Salai, George Town",
        "pincode": "600001",
        "latitude": 13.0827,
        "longitude": 80.2707,
        "mapsLink": "https://maps.google.com/?q=13.0827,80.2707",
        "contactPerson": "Thiru. Admin",
        "contactNumbers": ["9876543210"],
        "email": "collector.chn@tn.gov.in",
    },
)
