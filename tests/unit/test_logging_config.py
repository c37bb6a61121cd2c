"""Unit tests for logging configuration."""

import structlog

from invoice_gocardless.logging_config import configure_logging, get_logger, redact_secrets


def test_redact_secrets_masks_tokens() -> None:
    event = {"event": "gocardless_request", "session_token": "abc", "access_token": "xyz", "path": "/payments"}

    result = redact_secrets(None, "info", event)

    assert result["session_token"] == "[redacted]"
    assert result["access_token"] == "[redacted]"
    assert result["path"] == "/payments"


def test_redact_secrets_leaves_other_events_alone() -> None:
    event = {"event": "gocardless_charge_processing", "transaction_id": "PM1"}

    assert redact_secrets(None, "info", dict(event)) == event


def test_configure_logging_installs_redaction() -> None:
    configure_logging(log_level="DEBUG", format_as_json=False)
    try:
        assert redact_secrets in structlog.get_config()["processors"]
        assert get_logger(__name__) is not None
    finally:
        structlog.reset_defaults()
