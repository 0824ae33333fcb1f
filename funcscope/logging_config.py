"""
Logging configuration for the command line and the MCP server.

Logs always go to stderr so that reports printed on stdout (and the MCP
transport) stay clean. An optional JSON formatter produces one structured
entry per line for log collectors.
"""

import json
import logging
import sys
from typing import Any

from .constants import LOG_LEVEL

LOG_FORMAT = "[%(asctime)s] %(name)s %(levelname)s: %(message)s"
LOG_DATE_FORMAT = "%H:%M:%S"


class JSONLogFormatter(logging.Formatter):
    """Formatter emitting one JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log records with structured data."""
        log_entry: dict[str, Any] = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        # Context passed through `extra=`
        for field in ["root_directory", "file_path", "function", "lint_mode"]:
            if hasattr(record, field):
                log_entry[field] = getattr(record, field)

        if record.exc_info:
            log_entry["error"] = self.formatException(record.exc_info)

        return json.dumps(log_entry)


def configure_logging(
    log_level: str = LOG_LEVEL,
    json_format: bool = False,
) -> None:
    """
    Configure the ``funcscope`` logger hierarchy.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        json_format: Emit JSON lines instead of the plain text format
    """
    logger = logging.getLogger("funcscope")
    logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))
    logger.propagate = False

    # Clear existing handlers
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    if json_format:
        handler.setFormatter(JSONLogFormatter())
    else:
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    logger.addHandler(handler)
