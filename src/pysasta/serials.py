"""Serial and registration numbers issued by the portal.

Case study and PMAY-G issue numbers come from per-district counters.

Counters are stored as one JSON object (bucket -> last issued serial) under
their own key and only ever increase, so deleting a case study never frees
its number for reuse. Issuing is a read-increment-write with no locking:
two sessions issuing for the same district at the same moment can get the
same number.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Iterable
from datetime import date

from pysasta.exceptions import StorageError
from pysasta.models._base import YesNo
from pysasta.models.vrp import Vrp
from pysasta.storage import StorageBackend

_logger = logging.getLogger(__name__)


class SerialCounter:
    """Issue formatted serial numbers, one sequence per bucket.

    ``bucket`` maps the caller's scope (a district name) to the counter
    bucket; ``render`` builds the serial from ``(bucket, serial)``.
    """

    def __init__(
        self,
        storage: StorageBackend,
        key: str,
        *,
        bucket: Callable[[str], str],
        render: Callable[[str, int], str],
    ) -> None:
        self._storage = storage
        self._key = key
        self._bucket = bucket
        self._render = render

    @property
    def key(self) -> str:
        return self._key

    def _read(self) -> dict[str, int]:
        try:
            raw = self._storage.get_item(self._key)
        except StorageError:
            _logger.error("Failed to read counters key=%s", self._key, exc_info=True)
            return {}
        if raw is None:
            return {}
        try:
            decoded = json.loads(raw)
        except json.JSONDecodeError:
            _logger.error("Counters are not valid JSON key=%s", self._key)
            return {}
        if not isinstance(decoded, dict):
            _logger.error("Counters are not a JSON object key=%s", self._key)
            return {}
        return {str(k): int(v) for k, v in decoded.items() if isinstance(v, int) and not isinstance(v, bool)}

    def current(self, scope: str) -> int:
        """Last serial issued for *scope* (0 when none)."""
        return self._read().get(self._bucket(scope), 0)

    def next(self, scope: str) -> str:
        """Issue the next serial for *scope*.

        The serial is returned even when the counter cannot be persisted;
        the next call will then issue it again.
        """
        if not scope.strip():
            raise ValueError("scope must be non-empty")
        counters = self._read()
        bucket = self._bucket(scope)
        serial = counters.get(bucket, 0) + 1
        counters[bucket] = serial
        try:
            self._storage.set_item(self._key, json.dumps(counters))
        except StorageError:
            _logger.error("Failed to persist counters key=%s", self._key, exc_info=True)
        return self._render(bucket, serial)


def _case_study_bucket(district: str) -> str:
    return district.strip().upper()[:3]


def _case_study_render(bucket: str, serial: int) -> str:
    return f"CS-{bucket}-{serial:03d}"


def _pmayg_issue_bucket(district: str) -> str:
    return district.strip()


def _pmayg_issue_render(bucket: str, serial: int) -> str:
    return f"PMAY-G-{bucket.upper()}-ISSUE-{serial}"


def case_study_counter(storage: StorageBackend, key: str) -> SerialCounter:
    """``CS-ARI-001`` style numbers, one sequence per 3-letter district prefix."""
    return SerialCounter(storage, key, bucket=_case_study_bucket, render=_case_study_render)


def pmayg_issue_counter(storage: StorageBackend, key: str) -> SerialCounter:
    """``PMAY-G-ARIYALUR-ISSUE-1`` style numbers, one sequence per district."""
    return SerialCounter(storage, key, bucket=_pmayg_issue_bucket, render=_pmayg_issue_render)


SCHEMES: tuple[str, ...] = ("MGNREGS", "PMAY-G", "NSAP", "NMP", "15th CFC Grant", "DSJE", "Other")

#: Two-digit district codes used in HLC registration numbers.
DISTRICT_CODES: dict[str, str] = {
    "Ariyalur": "16", "Chengalpattu": "33", "Chennai": "00", "Coimbatore": "09", "Cuddalore": "17",
    "Dharmapuri": "06", "Dindigul": "25", "Erode": "11", "Kallakurichi": "32", "Kancheepuram": "02",
    "Kanniyakumari": "30", "Karur": "14", "Krishnagiri": "07", "Madurai": "23", "Mayiladuthurai": "36",
    "Nagapattinam": "18", "Namakkal": "08", "Nilgiris": "10", "Perambalur": "15", "Pudukkottai": "21",
    "Ramanathapuram": "26", "Ranipet": "34", "Salem": "08", "Sivaganga": "22", "Tenkasi": "31",
    "Thanjavur": "20", "Theni": "24", "Thoothukudi": "29", "Tiruchirappalli": "13", "Tirunelveli": "28",
    "Tirupathur": "35", "Tiruppur": "12", "Tiruvallur": "01", "Tiruvannamalai": "04", "Tiruvarur": "19",
    "Vellore": "03", "Viluppuram": "05", "Virudhunagar": "27",
}  # fmt: skip


def hlc_reg_no(scheme: str, district: str, hlc_no: str, held_on: date) -> str:
    """Registration number of an HLC meeting, e.g. ``HLC-MGNR-16-03-05.02.2025``.

    Unknown schemes render as ``NA`` and unknown districts as ``XX``.
    """
    scheme_code = scheme[:4].upper() if scheme in SCHEMES else "NA"
    district_code = DISTRICT_CODES.get(district, "XX")
    return f"HLC-{scheme_code}-{district_code}-{hlc_no.rjust(2, '0')}-{held_on:%d.%m.%Y}"


def vrp_employee_code(vrps: Iterable[Vrp]) -> str:
    """Code for the next VRP registered without an MGNREGA employee code.

    Counted from the VRPs already on file, so deleting one can reissue a code.
    """
    issued = sum(1 for vrp in vrps if vrp.has_employee_code is YesNo.NO)
    return f"TN-VRP-N-{issued + 1}"
