"""Grievance workflow on top of the grievances collection."""

from __future__ import annotations

import secrets
import string
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from pysasta.exceptions import RecordNotFoundError
from pysasta.models._base import Attachment
from pysasta.models.grievance import Grievance, GrievanceReply, GrievanceStatus
from pysasta.state.store import EntityStore

_REG_NO_ALPHABET = string.ascii_uppercase + string.digits
_REG_NO_LENGTH = 6

# Fields the workflow assigns itself; caller-supplied values are dropped.
_ASSIGNED_FIELDS = ("reg_no", "regNo", "status", "submitted_at", "submittedAt")


def generate_reg_no(choice: Callable[[Sequence[str]], str] = secrets.choice) -> str:
    """Registration number such as ``GRV-7QK2ZD``."""
    return "GRV-" + "".join(choice(_REG_NO_ALPHABET) for _ in range(_REG_NO_LENGTH))


def submit_grievance(
    store: EntityStore[Grievance],
    data: Mapping[str, Any],
    *,
    choice: Callable[[Sequence[str]], str] = secrets.choice,
) -> Grievance:
    """File a new grievance.

    Petitioners who leave no contact number cannot be replied to, so their
    grievance is filed as ``Anonymous - No Reply``.
    """
    fields = {k: v for k, v in data.items() if k not in _ASSIGNED_FIELDS}
    contact = fields.get("contact_number", fields.get("contactNumber")) or ""
    fields["reg_no"] = generate_reg_no(choice)
    fields["status"] = GrievanceStatus.SUBMITTED if contact.strip() else GrievanceStatus.ANONYMOUS_NO_REPLY
    return store.add(fields)


def _require(store: EntityStore[Grievance], grievance_id: int) -> Grievance:
    for grievance in store.load():
        if grievance.id == grievance_id:
            return grievance
    raise RecordNotFoundError(
        f"No grievance with id {grievance_id}",
        key=store.key,
        record_id=grievance_id,
    )


def reply_to_grievance(
    store: EntityStore[Grievance],
    grievance_id: int,
    content: str,
    replied_by: str,
    attachment: Attachment | Mapping[str, Any] | None = None,
) -> Grievance:
    """Attach (or replace) the office's reply to a grievance."""
    grievance = _require(store, grievance_id)
    reply = GrievanceReply.model_validate(
        {"content": content, "replied_by": replied_by, "attachment": attachment},
    )
    updated = grievance.model_copy(update={"reply": reply})
    store.update(updated)
    return updated


def set_grievance_status(
    store: EntityStore[Grievance],
    grievance_id: int,
    status: GrievanceStatus | str,
) -> Grievance:
    grievance = _require(store, grievance_id)
    updated = grievance.model_copy(update={"status": GrievanceStatus(status)})
    store.update(updated)
    return updated
