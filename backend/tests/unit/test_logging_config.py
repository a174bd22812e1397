"""
Tests for structured logging and credential redaction.
"""

import json
import logging
import sys

from infrastructure.logging_config import (
    JSONFormatter,
    SensitiveDataFilter,
    redact,
    setup_logging,
)


def _record(msg: str, *args, **extra) -> logging.LogRecord:
    record = logging.LogRecord("newsletter", logging.INFO, __file__, 1, msg, args, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestSensitiveDataFilter:
    """Tests for SensitiveDataFilter."""

    def test_redacts_basic_credentials_in_message(self):
        record = _record("Authorization: Basic cGhpbDpzM2NyZXQ=")

        SensitiveDataFilter().filter(record)

        assert record.getMessage() == "Authorization: Basic [REDACTED]"

    def test_redacts_string_arguments(self):
        record = _record("payload %s", "password=hunter2")

        SensitiveDataFilter().filter(record)

        assert "hunter2" not in record.getMessage()

    def test_redacts_resend_api_keys(self):
        record = _record("using re_abcdefghijklmnopqrstuvwxyz")

        SensitiveDataFilter().filter(record)

        assert record.getMessage() == "using [REDACTED_API_KEY]"

    def test_leaves_ordinary_messages_alone(self):
        record = _record("Confirmed subscriber %s", "1234")

        SensitiveDataFilter().filter(record)

        assert record.getMessage() == "Confirmed subscriber 1234"


class TestJSONFormatter:
    """Tests for JSONFormatter."""

    def test_includes_request_fields(self):
        record = _record(
            "Sent confirmation email",
            request_id="req-1",
            subscriber_email="phil@nadon.io",
        )

        entry = json.loads(JSONFormatter().format(record))

        assert entry["message"] == "Sent confirmation email"
        assert entry["level"] == "INFO"
        assert entry["request_id"] == "req-1"
        assert entry["subscriber_email"] == "phil@nadon.io"
        assert "user_id" not in entry

    def test_exception_text_is_redacted(self):
        try:
            raise RuntimeError("bad header Authorization: Basic cGhpbDpzM2NyZXQ=")
        except RuntimeError:
            record = logging.LogRecord(
                "newsletter", logging.ERROR, __file__, 1, "failed", (), sys.exc_info()
            )

        entry = json.loads(JSONFormatter().format(record))

        assert "cGhpbDpzM2NyZXQ=" not in entry["exception"]
        assert "Authorization: Basic [REDACTED]" in entry["exception"]


class TestSetupLogging:
    """Tests for setup_logging()."""

    def test_installs_single_filtered_handler(self):
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        try:
            setup_logging(json_output=True, level="DEBUG")

            assert len(root.handlers) == 1
            handler = root.handlers[0]
            assert isinstance(handler.formatter, JSONFormatter)
            assert any(isinstance(f, SensitiveDataFilter) for f in handler.filters)
            assert root.level == logging.DEBUG
        finally:
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)


class TestRedact:
    """Tests for redact()."""

    def test_bearer_and_secret_values(self):
        text = redact("Authorization: Bearer abc.def secret=topsecret")

        assert "abc.def" not in text
        assert "topsecret" not in text
