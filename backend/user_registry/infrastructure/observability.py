"""Structured Logging: JSON formatter and setup for the registry process.

Invariants:
    - Every record carries timestamp, level, logger name and message
    - Known extra fields (username, error_code, batch_size, ...) are emitted only when set
    - setup_logging() is idempotent: calling it again replaces its own handler

Design Decisions:
    - JSONFormatter over third-party libs: stdlib logging only
    - httpx request logs lowered to WARNING: one INFO line per generator call is
      already written by the random user client
"""

import json
import logging
from datetime import datetime, timezone

_EXTRA_FIELDS = (
    "username", "error_code", "path", "status_code",
    "requested_count", "batch_size", "accepted",
)
_TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"
_HANDLER_NAME = "user_registry"


class JSONFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(
            (key, getattr(record, key)) for key in _EXTRA_FIELDS
            if getattr(record, key, None) is not None
        )
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    """Install the registry handler on the root logger."""
    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(
        JSONFormatter() if fmt == "json" else logging.Formatter(_TEXT_FORMAT)
    )
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    logging.getLogger("httpx").setLevel(logging.WARNING)
