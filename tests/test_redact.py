from __future__ import annotations

from pysasta._redact import redact_for_log


def test_redact_for_log_redacts_sensitive_keys() -> None:
    payload = {
        "employeeCode": "E1024",
        "password": "pw",
        "otp": "123456",
        "petitioner": {"aadhaarNumber": "1234 5678 9012", "name": "Selvi"},
    }

    redacted = redact_for_log(payload)
    assert redacted["employeeCode"] == "E1024"
    assert redacted["password"] == "<redacted>"
    assert redacted["otp"] == "<redacted>"
    assert redacted["petitioner"]["aadhaarNumber"] == "<redacted>"
    assert redacted["petitioner"]["name"] == "Selvi"


def test_redact_for_log_collapses_data_urls() -> None:
    redacted = redact_for_log([{"dataUrl": "data:application/pdf;base64,QUJDRA=="}, "data:,"])

    assert redacted[0]["dataUrl"] == "<data-url:application/pdf:8b>"
    assert redacted[1] == "<data-url:application/octet-stream:0b>"


def test_redact_for_log_truncates_long_strings() -> None:
    long_value = "x" * 600
    redacted = redact_for_log({"value": long_value}, max_string=10)
    assert redacted["value"].startswith("x" * 10)
    assert "<truncated>" in redacted["value"]


def test_redact_for_log_hides_vrp_identity_and_bank_fields() -> None:
    redacted = redact_for_log({"name": "Selvi", "aadhaar": "123412341234", "pan": "ABCDE1234F", "accountNumber": "42"})

    assert redacted == {"name": "Selvi", "aadhaar": "<redacted>", "pan": "<redacted>", "accountNumber": "<redacted>"}
