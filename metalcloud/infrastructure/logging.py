"""
Centralized Logging

Architectural Intent:
- Provides structured JSON logging for all metalcloud components
- Centralizes log configuration to avoid scattered print() calls
- Supports configurable log levels via CLI flags (--verbose, --debug) or the
  log_level config key
"""

import json
import logging
import sys
from datetime import datetime, UTC
from typing import Union

# LogRecord attributes copied into JSON output when passed via extra=
CONTEXT_FIELDS = ("operation", "lookup", "node")


class JSONFormatter(logging.Formatter):
    """Structured JSON log formatter."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for name in CONTEXT_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                log_entry[name] = str(value)
        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry)


def resolve_level(level: Union[int, str]) -> int:
    """Accept a logging constant or a name such as "debug"/"WARNING"."""
    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.strip().upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return value


def configure_logging(
    level: Union[int, str] = logging.INFO,
    json_format: bool = False,
) -> None:
    """Configure logging for metalcloud.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, etc.), as int or name
        json_format: If True, use JSON structured output. Otherwise human-readable.
    """
    level = resolve_level(level)
    root = logging.getLogger("metalcloud")
    root.setLevel(level)

    # Remove existing handlers
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)

    if json_format:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
        )

    root.addHandler(handler)
