"""Structured Logging — one JSON object per record for task, lockout and audit events.

Invariants:
    - Every line carries timestamp, level, logger name, and message
    - Domain extras (user_id, task_id, action, error_code, from_status, to_status,
      failed_attempts) appear only when the caller passed them via extra=
    - Non-JSON values such as UUIDs and datetimes are rendered with str()

Design Decisions:
    - Field list lives in EXTRA_FIELDS so services and the formatter agree on names
    - setup_logging(fmt="text") gives a plain line format for local runs
"""

import json
import logging
from datetime import datetime, timezone


EXTRA_FIELDS = (
    "user_id", "task_id", "action", "error_code",
    "from_status", "to_status", "failed_attempts",
)


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json"):
    """Configure logging for the application."""
    handler = logging.StreamHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s — %(message)s",
        ))
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
