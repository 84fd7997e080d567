# roadmap_engine/logging_config.py
"""
Stderr-only JSON logging configuration.

stdout carries roadmap output (tables, JSON, markdown), so ALL logging
must go to stderr.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

_LEVELS = {
    "quiet": logging.WARNING,
    "normal": logging.INFO,
    "verbose": logging.DEBUG,
}


class JsonFormatter(logging.Formatter):
    """Formats log records as JSON for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON line."""
        log_data: dict[str, Any] = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }

        # Structured error payloads attached via extra={"error": ...}
        error = getattr(record, "error", None)
        if error is not None:
            log_data["error"] = error

        if record.exc_info:
            log_data["exc"] = self.formatException(record.exc_info)

        return json.dumps(log_data)


def configure_logging(verbosity: str = "normal") -> None:
    """
    Configure logging to output JSON to stderr only.

    Clears existing handlers to prevent stdout pollution.

    Args:
        verbosity: quiet, normal or verbose
    """
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JsonFormatter())

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(_LEVELS.get(verbosity, logging.INFO))
