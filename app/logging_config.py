# =============================================================================
# app/logging_config.py - Logging Setup
# =============================================================================
# Console logging for everything, plus two optional JSON-lines files:
# - REQUEST_LOG_FILE: one line per request (logger "wtwr.requests")
# - ERROR_LOG_FILE: one line per error response (logger "wtwr.errors")
#
# Never logs request bodies, passwords or tokens.
# =============================================================================

import json
import logging
from datetime import datetime, timezone

from app.config import Settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

REQUEST_LOGGER = "wtwr.requests"
ERROR_LOGGER = "wtwr.errors"

# Attributes passed through `extra=` that belong in the JSON line
_EXTRA_FIELDS = (
    "method",
    "path",
    "status_code",
    "duration_ms",
    "client",
    "error_code",
    "details",
)


class JsonLineFormatter(logging.Formatter):
    """Render a record as a single JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
        }
        for field in _EXTRA_FIELDS:
            if hasattr(record, field):
                entry[field] = getattr(record, field)
        if record.exc_info:
            entry["stack"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def _attach_file(logger_name: str, filename: str) -> None:
    logger = logging.getLogger(logger_name)
    # configure_logging() may run more than once in one process
    for handler in logger.handlers:
        if getattr(handler, "wtwr_file", None) == filename:
            return
    handler = logging.FileHandler(filename, encoding="utf-8")
    handler.setFormatter(JsonLineFormatter())
    handler.wtwr_file = filename
    logger.addHandler(handler)


def configure_logging(settings: Settings) -> None:
    """
    Configure application logging.

    Args:
        settings: Application settings (log level and optional log files)
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format=LOG_FORMAT,
    )

    if settings.REQUEST_LOG_FILE:
        _attach_file(REQUEST_LOGGER, settings.REQUEST_LOG_FILE)
    if settings.ERROR_LOG_FILE:
        _attach_file(ERROR_LOGGER, settings.ERROR_LOG_FILE)

    # uvicorn's access log duplicates the request logger
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
