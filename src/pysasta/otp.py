"""One-time password issue and verification for email sign-up.

Pending codes live in process memory only: a restart forgets every code
that has been sent. Expiry is checked lazily when a code is verified;
nothing is evicted in the background.
"""

from __future__ import annotations

import enum
import json
import logging
import re
import secrets
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol

import aiohttp
from pydantic import BaseModel, ConfigDict

from pysasta.exceptions import OtpDeliveryError

_logger = logging.getLogger(__name__)

OTP_LENGTH = 6
DEFAULT_OTP_TTL = timedelta(minutes=10)

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _utcnow() -> datetime:
    return datetime.now(UTC)


def generate_code() -> str:
    """Six digits, never starting with zero (100000-999999)."""
    return str(100000 + secrets.randbelow(900000))


class OtpResult(enum.StrEnum):
    SUCCESS = "success"
    NOT_FOUND = "not_found"
    EXPIRED = "expired"
    MISMATCH = "mismatch"

    @property
    def ok(self) -> bool:
        return self is OtpResult.SUCCESS

    @property
    def message(self) -> str:
        """Text shown to the person verifying."""
        return _RESULT_MESSAGES[self]


_RESULT_MESSAGES: dict[OtpResult, str] = {
    OtpResult.SUCCESS: "OTP verified successfully.",
    OtpResult.NOT_FOUND: "OTP not found or expired. Please request a new one.",
    OtpResult.EXPIRED: "OTP has expired. Please request a new one.",
    OtpResult.MISMATCH: "Invalid OTP.",
}


class OtpTicket(BaseModel):
    """Receipt for a sent code. The code itself is not part of it."""

    model_config = ConfigDict(frozen=True)

    email: str
    expires_at: datetime


class OtpSender(Protocol):
    """Delivery channel for a freshly issued code."""

    def __call__(self, email: str, code: str, expires_at: datetime) -> Awaitable[None]: ...


async def log_sender(email: str, code: str, expires_at: datetime) -> None:
    """Default channel: nothing is delivered, the code only reaches DEBUG logs."""
    _logger.info("OTP issued for %s (valid until %s)", email, expires_at.isoformat())
    _logger.debug("OTP for %s: %s", email, code)


class HttpOtpSender:
    """Hand codes to a mail relay by POSTing JSON to *url*.

    Body: ``{"email": ..., "code": ..., "expiresAt": <ISO 8601>}``. Any
    non-2xx reply or transport failure raises :class:`OtpDeliveryError`.
    """

    def __init__(
        self,
        url: str,
        *,
        session: aiohttp.ClientSession | None = None,
        timeout: float = 10.0,
    ) -> None:
        self._url = url
        self._session = session
        self._timeout = timeout

    async def __call__(self, email: str, code: str, expires_at: datetime) -> None:
        body = json.dumps({"email": email, "code": code, "expiresAt": expires_at.isoformat()})
        headers = {"content-type": "application/json; charset=UTF-8"}

        session = self._session
        owns_session = session is None
        if session is None:
            session = aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=self._timeout))

        _logger.debug("POST %s (OTP delivery for %s)", self._url, email)
        try:
            async with session.post(self._url, data=body, headers=headers) as resp:
                if not 200 <= resp.status < 300:
                    text = await resp.text()
                    raise OtpDeliveryError(
                        f"HTTP {resp.status} from OTP relay: {text[:200]}",
                        status_code=resp.status,
                    )
        except OtpDeliveryError:
            raise
        except (aiohttp.ClientError, TimeoutError) as exc:
            raise OtpDeliveryError(f"OTP relay request failed: {exc}") from exc
        finally:
            if owns_session:
                await session.close()


@dataclass(slots=True)
class _PendingCode:
    code: str
    expires_at: datetime


class OtpService:
    """Issue and verify six-digit codes, one pending code per email."""

    def __init__(
        self,
        sender: OtpSender | None = None,
        *,
        ttl: timedelta = DEFAULT_OTP_TTL,
        clock: Callable[[], datetime] = _utcnow,
        code_factory: Callable[[], str] = generate_code,
    ) -> None:
        self._sender: OtpSender = sender or log_sender
        self._ttl = ttl
        self._clock = clock
        self._code_factory = code_factory
        self._pending: dict[str, _PendingCode] = {}

    @staticmethod
    def _normalize_email(email: str) -> str:
        value = email.strip()
        if not _EMAIL_RE.match(value):
            raise ValueError(f"Invalid email address: {email!r}")
        return value

    async def send(self, email: str) -> OtpTicket:
        """Issue a code for *email*, replacing any code still pending.

        If delivery fails the new code is withdrawn and the
        :class:`OtpDeliveryError` propagates.
        """
        address = self._normalize_email(email)
        pending = _PendingCode(code=self._code_factory(), expires_at=self._clock() + self._ttl)
        self._pending[address] = pending
        try:
            await self._sender(address, pending.code, pending.expires_at)
        except OtpDeliveryError:
            if self._pending.get(address) is pending:
                del self._pending[address]
            raise
        return OtpTicket(email=address, expires_at=pending.expires_at)

    async def verify(self, email: str, code: str) -> OtpResult:
        """Check *code* for *email*. A successful code cannot be used twice."""
        address = self._normalize_email(email)
        submitted = code.strip()
        if len(submitted) != OTP_LENGTH or not submitted.isdigit():
            raise ValueError(f"OTP must be {OTP_LENGTH} digits")

        pending = self._pending.get(address)
        if pending is None:
            return OtpResult.NOT_FOUND

        if self._clock() > pending.expires_at:
            del self._pending[address]
            _logger.debug("OTP expired for %s", address)
            return OtpResult.EXPIRED

        if secrets.compare_digest(pending.code, submitted):
            del self._pending[address]
            _logger.debug("OTP verified for %s", address)
            return OtpResult.SUCCESS

        return OtpResult.MISMATCH

    def is_pending(self, email: str) -> bool:
        return email.strip() in self._pending

    def __len__(self) -> int:
        return len(self._pending)
