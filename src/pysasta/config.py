"""Portal configuration for pysasta."""

from __future__ import annotations

import dataclasses
import os
from pathlib import Path
from typing import Any

from pysasta.exceptions import SastaConfigError

#: Roughly what browsers grant a single origin for ``localStorage``.
DEFAULT_STORAGE_QUOTA: int = 5_000_000

#: One-time passwords stay valid for ten minutes.
DEFAULT_OTP_TTL: float = 10 * 60


def _env_float(env_key: str, value: str) -> float:
    try:
        return float(value)
    except ValueError as exc:
        raise SastaConfigError(f"{env_key} must be a number, got {value!r}") from exc


def _env_int(env_key: str, value: str) -> int:
    try:
        return int(value)
    except ValueError as exc:
        raise SastaConfigError(f"{env_key} must be an integer, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class SastaConfig:
    """Portal configuration.

    Parameters
    ----------
    storage_path : Path or None
        JSON file backing the storage area. ``None`` keeps everything in
        process memory (lost on exit).
    key_prefix : str
        Prefix of every well-known storage key (``"sasta-"`` gives
        ``sasta-holidays``, ``sasta-audit-entries``, ...).
    storage_quota : int
        Size limit of the storage area, counted as the summed length of
        keys and values.
    otp_ttl : float
        Seconds a one-time password stays valid.
    otp_webhook_url : str or None
        When set, one-time passwords are POSTed to this URL for delivery
        instead of only being logged.
    """

    storage_path: Path | None = None
    key_prefix: str = "sasta-"
    storage_quota: int = DEFAULT_STORAGE_QUOTA
    otp_ttl: float = DEFAULT_OTP_TTL
    otp_webhook_url: str | None = None

    def __post_init__(self) -> None:
        if self.storage_quota <= 0:
            raise SastaConfigError("storage_quota must be positive")
        if self.otp_ttl <= 0:
            raise SastaConfigError("otp_ttl must be positive")
        if not self.key_prefix:
            raise SastaConfigError("key_prefix must be non-empty")

    def key(self, name: str) -> str:
        """Return the full storage key for a collection suffix."""
        return f"{self.key_prefix}{name}"

    @classmethod
    def from_env(cls, **overrides: Any) -> SastaConfig:
        """Create configuration from ``SASTA_*`` environment variables.

        Explicit keyword arguments take precedence over the environment.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        path_env = env.get("SASTA_STORAGE_PATH")
        if path_env:
            config_kwargs["storage_path"] = Path(path_env).expanduser()

        prefix_env = env.get("SASTA_KEY_PREFIX")
        if prefix_env is not None:
            config_kwargs["key_prefix"] = prefix_env

        quota_env = env.get("SASTA_STORAGE_QUOTA")
        if quota_env is not None:
            config_kwargs["storage_quota"] = _env_int("SASTA_STORAGE_QUOTA", quota_env)

        ttl_env = env.get("SASTA_OTP_TTL")
        if ttl_env is not None:
            config_kwargs["otp_ttl"] = _env_float("SASTA_OTP_TTL", ttl_env)

        webhook_env = env.get("SASTA_OTP_WEBHOOK_URL")
        if webhook_env:
            config_kwargs["otp_webhook_url"] = webhook_env

        config_kwargs.update(overrides)
        if isinstance(config_kwargs.get("storage_path"), str):
            config_kwargs["storage_path"] = Path(config_kwargs["storage_path"])

        return cls(**config_kwargs)
