"""pysasta - persistence core of the social audit unit portal."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pysasta")
except PackageNotFoundError:
    __version__ = "0+local"
from pysasta.config import SastaConfig
from pysasta.exceptions import (
    OtpDeliveryError,
    RecordNotFoundError,
    SastaConfigError,
    SastaError,
    StorageError,
    StorageQuotaExceededError,
    StorageUnavailableError,
)
from pysasta.otp import HttpOtpSender, OtpResult, OtpService, OtpTicket
from pysasta.portal import Portal, PortalSession, build_storage
from pysasta.slots import ValueSlot
from pysasta.state.events import ChangeBus, StorageChangeEvent
from pysasta.state.policy import SortOrder
from pysasta.state.store import Collection, EntityStore
from pysasta.storage import FileStorage, MemoryStorage, StorageBackend

__all__ = [
    "__version__",
    "ChangeBus",
    "Collection",
    "EntityStore",
    "FileStorage",
    "HttpOtpSender",
    "MemoryStorage",
    "OtpDeliveryError",
    "OtpResult",
    "OtpService",
    "OtpTicket",
    "Portal",
    "PortalSession",
    "RecordNotFoundError",
    "SastaConfig",
    "SastaConfigError",
    "SastaError",
    "SortOrder",
    "StorageBackend",
    "StorageChangeEvent",
    "StorageError",
    "StorageQuotaExceededError",
    "StorageUnavailableError",
    "ValueSlot",
    "build_storage",
]
