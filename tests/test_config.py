from __future__ import annotations

from pathlib import Path

import pytest

from pysasta.config import DEFAULT_OTP_TTL, DEFAULT_STORAGE_QUOTA, SastaConfig
from pysasta.exceptions import SastaConfigError

_ENV_KEYS = (
    "SASTA_STORAGE_PATH",
    "SASTA_KEY_PREFIX",
    "SASTA_STORAGE_QUOTA",
    "SASTA_OTP_TTL",
    "SASTA_OTP_WEBHOOK_URL",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_defaults() -> None:
    config = SastaConfig.from_env()

    assert config.storage_path is None
    assert config.key_prefix == "sasta-"
    assert config.storage_quota == DEFAULT_STORAGE_QUOTA
    assert config.otp_ttl == DEFAULT_OTP_TTL
    assert config.otp_webhook_url is None
    assert config.key("holidays") == "sasta-holidays"


def test_from_env_reads_every_variable(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("SASTA_STORAGE_PATH", str(tmp_path / "area.json"))
    monkeypatch.setenv("SASTA_KEY_PREFIX", "test-")
    monkeypatch.setenv("SASTA_STORAGE_QUOTA", "1000")
    monkeypatch.setenv("SASTA_OTP_TTL", "30.5")
    monkeypatch.setenv("SASTA_OTP_WEBHOOK_URL", "https://mail.example/otp")

    config = SastaConfig.from_env()

    assert config.storage_path == tmp_path / "area.json"
    assert config.key_prefix == "test-"
    assert config.storage_quota == 1000
    assert config.otp_ttl == 30.5
    assert config.otp_webhook_url == "https://mail.example/otp"


def test_overrides_win_over_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SASTA_KEY_PREFIX", "env-")

    config = SastaConfig.from_env(key_prefix="arg-", storage_path="relative/area.json")

    assert config.key_prefix == "arg-"
    assert config.storage_path == Path("relative/area.json")


@pytest.mark.parametrize(("key", "value"), [("SASTA_STORAGE_QUOTA", "lots"), ("SASTA_OTP_TTL", "soon")])
def test_bad_numeric_environment_raises(monkeypatch: pytest.MonkeyPatch, key: str, value: str) -> None:
    monkeypatch.setenv(key, value)

    with pytest.raises(SastaConfigError, match=key):
        SastaConfig.from_env()


@pytest.mark.parametrize(
    "kwargs",
    [{"storage_quota": 0}, {"otp_ttl": -1.0}, {"key_prefix": ""}],
)
def test_invalid_values_rejected(kwargs: dict[str, object]) -> None:
    with pytest.raises(SastaConfigError):
        SastaConfig(**kwargs)  # type: ignore[arg-type]
