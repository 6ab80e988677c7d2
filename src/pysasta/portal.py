"""Composition root: one portal per process, one session per open view.

Usage::

    portal = Portal(SastaConfig.from_env())
    with portal.open_session() as session:
        session.holidays.add({"date": "2025-12-25", "name": "Christmas"})
        for holiday in session.holidays.list_records():
            ...

Every session opened from one portal shares the portal's storage area and
change bus, so a write in one session is visible in all of them as soon as
it returns.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import Any

from pysasta.config import SastaConfig
from pysasta.models import (
    ActivityLog,
    AuditEntry,
    CalendarFile,
    CaseStudy,
    DistrictOffice,
    Feedback,
    GalleryItem,
    Grievance,
    HlcEntry,
    Holiday,
    LibraryItem,
    MgnregsEntry,
    PmaygEntry,
    PmaygIssue,
    SignedInUser,
    StaffUser,
    TourDiaryRecord,
    Vrp,
)
from pysasta.otp import HttpOtpSender, OtpService
from pysasta.registry import (
    CASE_STUDY_COUNTER_SUFFIX,
    LOGO_KEY_SUFFIX,
    PMAYG_ISSUE_COUNTER_SUFFIX,
    USER_KEY_SUFFIX,
    build_collections,
)
from pysasta.serials import SerialCounter, case_study_counter, pmayg_issue_counter
from pysasta.slots import ValueSlot
from pysasta.state.events import ChangeBus
from pysasta.state.store import EntityStore
from pysasta.storage import FileStorage, MemoryStorage, StorageBackend

_logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


def build_storage(config: SastaConfig) -> StorageBackend:
    """Storage area described by *config*: a file when a path is set, memory otherwise."""
    if config.storage_path is not None:
        return FileStorage(config.storage_path, quota_bytes=config.storage_quota)
    return MemoryStorage(quota_bytes=config.storage_quota)


class PortalSession:
    """Everything one open view of the portal reads and writes.

    Equivalent to one browser tab: its own in-memory views, kept current by
    the shared change bus.
    """

    audits: EntityStore[AuditEntry]
    calendars: EntityStore[CalendarFile]
    case_studies: EntityStore[CaseStudy]
    feedback: EntityStore[Feedback]
    holidays: EntityStore[Holiday]
    library: EntityStore[LibraryItem]
    mgnregs: EntityStore[MgnregsEntry]
    pmayg: EntityStore[PmaygEntry]
    pmayg_issues: EntityStore[PmaygIssue]
    tour_diary: EntityStore[TourDiaryRecord]
    grievances: EntityStore[Grievance]
    activity: EntityStore[ActivityLog]
    users: EntityStore[StaffUser]
    district_offices: EntityStore[DistrictOffice]
    hlc: EntityStore[HlcEntry]
    vrps: EntityStore[Vrp]
    gallery: EntityStore[GalleryItem]

    def __init__(
        self,
        storage: StorageBackend,
        bus: ChangeBus,
        config: SastaConfig,
        *,
        session_id: str | None = None,
        clock: Callable[[], datetime] = _utcnow,
        on_close: Callable[[PortalSession], None] | None = None,
    ) -> None:
        self.session_id = session_id or uuid.uuid4().hex
        self._on_close = on_close
        self._stores: dict[str, EntityStore[Any]] = {}
        for name, collection in build_collections(key_prefix=config.key_prefix).items():
            store: EntityStore[Any] = EntityStore(
                storage,
                bus,
                collection,
                clock=clock,
                session_id=self.session_id,
            )
            self._stores[name] = store
            setattr(self, name, store)

        self.logo: ValueSlot[str] = ValueSlot.for_text(
            storage, bus, config.key(LOGO_KEY_SUFFIX), session_id=self.session_id
        )
        self.user: ValueSlot[SignedInUser] = ValueSlot.for_model(
            storage, bus, config.key(USER_KEY_SUFFIX), SignedInUser, session_id=self.session_id
        )
        self.case_study_numbers: SerialCounter = case_study_counter(storage, config.key(CASE_STUDY_COUNTER_SUFFIX))
        self.pmayg_issue_numbers: SerialCounter = pmayg_issue_counter(
            storage, config.key(PMAYG_ISSUE_COUNTER_SUFFIX)
        )
        self._closed = False
        _logger.debug("Portal session opened id=%s", self.session_id)

    def __enter__(self) -> PortalSession:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    def store(self, name: str) -> EntityStore[Any]:
        """Entity store registered as *name* (``"holidays"``, ``"audits"``, ...)."""
        return self._stores[name]

    @property
    def stores(self) -> dict[str, EntityStore[Any]]:
        return dict(self._stores)

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Unsubscribe every view from the change bus."""
        if self._closed:
            return
        for store in self._stores.values():
            store.close()
        self.logo.close()
        self.user.close()
        self._closed = True
        if self._on_close is not None:
            self._on_close(self)
        _logger.debug("Portal session closed id=%s", self.session_id)


class Portal:
    """Process-wide owner of the storage area, change bus and OTP service.

    Construct once and pass it to whatever needs a session.
    """

    def __init__(
        self,
        config: SastaConfig | None = None,
        *,
        storage: StorageBackend | None = None,
        otp: OtpService | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.config = config or SastaConfig()
        self.storage: StorageBackend = storage if storage is not None else build_storage(self.config)
        self.bus = ChangeBus()
        self._clock = clock
        if otp is None:
            sender = HttpOtpSender(self.config.otp_webhook_url) if self.config.otp_webhook_url else None
            otp = OtpService(sender, ttl=timedelta(seconds=self.config.otp_ttl), clock=clock)
        self.otp = otp
        self._sessions: list[PortalSession] = []

    def __enter__(self) -> Portal:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    def open_session(self, session_id: str | None = None) -> PortalSession:
        session = PortalSession(
            self.storage,
            self.bus,
            self.config,
            session_id=session_id,
            clock=self._clock,
            on_close=self._forget,
        )
        self._sessions.append(session)
        return session

    def _forget(self, session: PortalSession) -> None:
        try:
            self._sessions.remove(session)
        except ValueError:
            pass

    @property
    def sessions(self) -> list[PortalSession]:
        """Sessions opened from this portal and not yet closed."""
        return list(self._sessions)

    def close(self) -> None:
        for session in list(self._sessions):
            session.close()
        self._sessions.clear()
