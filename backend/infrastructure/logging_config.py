"""
Logging setup for the newsletter service.

One stdout handler on the root logger. Production emits one JSON object
per line carrying the request and subscriber fields the workflows attach
through ``extra``; development keeps a plain text layout. Either way the
handler scrubs credentials first: publishers authenticate with HTTP Basic
and the Resend key lives in the environment, and neither may reach a log.
"""

import json
import logging
import re
import sys
from datetime import UTC, datetime

REDACTED = "[REDACTED]"

# (pattern, replacement) pairs applied in order to messages and string args
_REDACTIONS = [
    (re.compile(r"(Authorization:\s*(?:Basic|Bearer)\s+)\S+", re.IGNORECASE), rf"\1{REDACTED}"),
    (re.compile(r"re_[a-zA-Z0-9_]{20,}"), "[REDACTED_API_KEY]"),
    (
        re.compile(r'((?:api[_-]?key|password|secret)["\s:=]+)[^\s&"\']+', re.IGNORECASE),
        rf"\1{REDACTED}",
    ),
]

# Attributes the workflows and middleware pass via ``extra``
CONTEXT_FIELDS = (
    "request_id",
    "method",
    "path",
    "status_code",
    "duration_ms",
    "user_id",
    "subscriber_email",
)

# Third-party loggers that are too chatty at INFO
_QUIET_LOGGERS = ("uvicorn.access", "sqlalchemy.engine", "httpx")

_TEXT_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def redact(text: str) -> str:
    for pattern, replacement in _REDACTIONS:
        text = pattern.sub(replacement, text)
    return text


class SensitiveDataFilter(logging.Filter):
    """Strip Basic/Bearer credentials, Resend keys and passwords from a record."""

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = redact(record.msg)
        if isinstance(record.args, dict):
            record.args = {
                key: redact(value) if isinstance(value, str) else value
                for key, value in record.args.items()
            }
        elif isinstance(record.args, tuple):
            record.args = tuple(
                redact(arg) if isinstance(arg, str) else arg for arg in record.args
            )
        return True


class JSONFormatter(logging.Formatter):
    """One JSON object per record; context fields appear only when set."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(
            {field: getattr(record, field) for field in CONTEXT_FIELDS if hasattr(record, field)}
        )
        if record.exc_info and record.exc_info[0] is not None:
            entry["exception"] = redact(self.formatException(record.exc_info))
        return json.dumps(entry, default=str)


def setup_logging(json_output: bool = False, level: str = "INFO") -> None:
    """
    Replace the root logger's handlers with a single scrubbed stdout handler.

    Args:
        json_output: JSON lines (production) instead of plain text.
        level: Root log level name; unknown names fall back to INFO.
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        JSONFormatter() if json_output else logging.Formatter(_TEXT_FORMAT, "%Y-%m-%d %H:%M:%S")
    )
    # On the handler, not the root logger, so records from child loggers pass through it
    handler.addFilter(SensitiveDataFilter())

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
