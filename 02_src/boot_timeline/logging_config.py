"""Structured logging configuration for the boot timeline analyzer.

Every record is written as one JSON object per line. Records emitted while
a pass or an activity is being processed carry it as ``extra`` fields,
e.g. ``logger.info("...", extra={"run": 2, "elapsed_ns": 1500})``, so a
log file can be filtered per pass.
"""

import json
import logging
import logging.config
import logging.handlers
import os
from datetime import datetime, timezone
from pathlib import Path

from .config import DEFAULT_LOG_PATH

# Optional per-record fields, in output order.
ANALYSIS_FIELDS = ("run", "activity", "elapsed_ns")

CONSOLE_FORMAT = "boot-timeline: %(levelname)s %(message)s"


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "function": record.funcName,
            "line": record.lineno,
        }

        for field in ANALYSIS_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                log_data[field] = value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data)


def _console_enabled() -> bool:
    return os.getenv("LOG_CONSOLE", "").lower() in ("1", "true", "yes")


def setup_logging(
    log_level: str | None = None,
    log_file: str | None = None,
    console: bool | None = None,
) -> None:
    """
    Setup structured logging for the analyzer.

    The report owns stdout. Log records go to a rotating JSON file; a
    short plain-text echo of warnings and errors on stderr is opt-in.

    Args:
        log_level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
                   Defaults to LOG_LEVEL env var or INFO.
        log_file: Path to log file. Defaults to 04_logs/boot_timeline.log.
        console: Echo warnings to stderr. Defaults to LOG_CONSOLE env var.
    """
    log_level = (log_level or os.getenv("LOG_LEVEL", "INFO")).upper()
    log_path = Path(log_file) if log_file else DEFAULT_LOG_PATH
    log_path.parent.mkdir(parents=True, exist_ok=True)
    if console is None:
        console = _console_enabled()

    handlers = {
        "file": {
            "class": "logging.handlers.RotatingFileHandler",
            "filename": str(log_path),
            "maxBytes": 5 * 1024 * 1024,
            "backupCount": 3,
            "formatter": "json",
            "encoding": "utf-8",
        },
    }
    if console:
        handlers["console"] = {
            "class": "logging.StreamHandler",
            "formatter": "text",
            "level": "WARNING",
            "stream": "ext://sys.stderr",
        }

    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {"()": "boot_timeline.logging_config.JSONFormatter"},
            "text": {"format": CONSOLE_FORMAT},
        },
        "handlers": handlers,
        "root": {"level": log_level, "handlers": list(handlers)},
    })


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance (typically for ``__name__``)."""
    return logging.getLogger(name)
