"""Structured Logging — JSON formatter and one-time setup for the process.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Extra fields (error_code, path, status_code, ...) surfaced when present
    - setup_logging installs at most one handler per process, however often it is called

Design Decisions:
    - JSONFormatter on stdlib logging: no extra dependency, full control
    - Init-once guarded by a lock + flag: lifespan and test fixtures may both call it
    - Test runs can silence output by passing a NullHandler sink
"""

import logging
import json
import threading
from datetime import datetime, timezone

EXTRA_FIELDS = (
    "error_code", "path", "status_code", "subscription_id",
    "recipient_domain", "elapsed_ms",
)

_setup_lock = threading.Lock()
_handler: logging.Handler | None = None


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
        return json.dumps(log, ensure_ascii=False)


def setup_logging(
    level: str = "INFO",
    fmt: str = "json",
    handler: logging.Handler | None = None,
) -> bool:
    """Configure root logging once. Returns False if already configured."""
    global _handler
    with _setup_lock:
        if _handler is not None:
            return False
        handler = handler or logging.StreamHandler()
        if fmt == "json":
            handler.setFormatter(JSONFormatter())
        else:
            handler.setFormatter(logging.Formatter(
                "%(asctime)s %(levelname)s %(name)s - %(message)s",
            ))
        logging.root.addHandler(handler)
        logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
        _handler = handler
        return True


def reset_logging() -> None:
    """Remove the installed handler (test helper)."""
    global _handler
    with _setup_lock:
        if _handler is not None:
            logging.root.removeHandler(_handler)
            _handler = None
