"""Helpers for safe debug logging.

Portal records carry secrets (user passwords, one-time codes) and large
embedded files (calendars, library items and photos are stored as data
URLs). This module redacts the former and collapses the latter before a
payload is emitted in a DEBUG log.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

_SENSITIVE_VALUE_KEYS: frozenset[str] = frozenset(
    {
        "password",
        "otp",
        "code",
        "aadhaar",
        "aadhaarnumber",
        "accountnumber",
        "pan",
        "token",
        "authorization",
        "cookie",
    }
)

_DATA_URL_PREFIX = "data:"


def _describe_data_url(value: str) -> str:
    header, _, body = value.partition(",")
    media_type = header[len(_DATA_URL_PREFIX) :].split(";", 1)[0] or "application/octet-stream"
    return f"<data-url:{media_type}:{len(body)}b>"


def redact_for_log(value: Any, *, max_string: int = 512, _depth: int = 0) -> Any:
    """Return a redacted copy of *value* suitable for debug logs."""
    if _depth > 20:
        return "<max-depth>"

    if value is None:
        return None

    if isinstance(value, str):
        if value.startswith(_DATA_URL_PREFIX):
            return _describe_data_url(value)
        if len(value) > max_string:
            return f"{value[:max_string]}…<truncated>"
        return value

    if isinstance(value, (int, float, bool)):
        return value

    if isinstance(value, bytes):
        return f"<bytes:{len(value)}b>"

    if isinstance(value, Mapping):
        redacted: dict[str, Any] = {}
        for k, v in value.items():
            key = str(k)
            if key.lower() in _SENSITIVE_VALUE_KEYS:
                redacted[key] = "<redacted>"
            else:
                redacted[key] = redact_for_log(v, max_string=max_string, _depth=_depth + 1)
        return redacted

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return [redact_for_log(v, max_string=max_string, _depth=_depth + 1) for v in value]

    return repr(value)
