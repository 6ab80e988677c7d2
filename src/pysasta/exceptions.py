"""Custom exception hierarchy for pysasta."""

from __future__ import annotations


class SastaError(Exception):
    """Base exception for all pysasta errors."""


class SastaConfigError(SastaError):
    """Invalid or missing configuration."""


class StorageError(SastaError):
    """A storage area could not be read or written."""

    def __init__(self, message: str, *, key: str | None = None) -> None:
        self.key = key
        super().__init__(message)


class StorageUnavailableError(StorageError):
    """The storage area cannot be used at all.

    Covers the cases a browser reports as ``SecurityError`` (private
    browsing, disabled storage) plus unreadable or corrupt backing files.
    """


class StorageQuotaExceededError(StorageError):
    """A write would push the storage area past its quota."""


class RecordNotFoundError(SastaError):
    """No record with the requested id exists in the collection."""

    def __init__(self, message: str, *, key: str = "", record_id: int | None = None) -> None:
        self.key = key
        self.record_id = record_id
        super().__init__(message)


class OtpDeliveryError(SastaError):
    """The one-time password could not be handed to the delivery channel."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)
