"""Logging setup for ghostcal.

A single ``ghostcal`` logger writes warnings to stderr. ``--log-dir`` adds a
debug-level file handler whose lines carry the ``extra`` fields as JSON.
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

LOGGER_NAME = "ghostcal"

# Attributes every LogRecord has; anything else on a record came from ``extra``.
_RESERVED_FIELDS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime"}

_file_handler: Optional[logging.FileHandler] = None


class ExtraFieldsFormatter(logging.Formatter):
    """Formatter with UTC ISO timestamps that appends ``extra`` fields as JSON."""

    def formatTime(self, record: logging.LogRecord, datefmt: Optional[str] = None) -> str:
        timestamp = datetime.fromtimestamp(record.created, tz=timezone.utc)
        return timestamp.strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        extras = {
            key: value
            for key, value in vars(record).items()
            if key not in _RESERVED_FIELDS and not key.startswith("_")
        }
        if not extras:
            return message
        return f"{message} | {json.dumps(extras, sort_keys=True, default=str)}"


def get_logger() -> logging.Logger:
    """Return the ``ghostcal`` logger, adding its stderr handler on first use."""
    logger = logging.getLogger(LOGGER_NAME)
    if not logger.handlers:
        level_name = os.getenv("GHOSTCAL_LOG_LEVEL", "WARNING").upper()
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(getattr(logging, level_name, logging.WARNING))
        console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
        logger.addHandler(console_handler)
        # The file handler takes debug lines; stderr filters on its own level.
        logger.setLevel(logging.DEBUG)
        logger.propagate = False
    return logger


def default_log_file(log_dir: Path, when: Optional[datetime] = None) -> Path:
    """Build the daily log file path inside ``log_dir``."""
    return log_dir / f"ghostcal_{(when or datetime.now()).strftime('%Y%m%d')}.log"


def enable_file_logging(log_dir: Path) -> Path:
    """Send debug logs to a daily file under ``log_dir``, replacing any earlier one."""
    global _file_handler
    logger = get_logger()
    log_file = default_log_file(log_dir)
    if _file_handler is not None:
        if _file_handler.baseFilename == os.path.abspath(log_file):
            return log_file
        logger.removeHandler(_file_handler)
        _file_handler.close()

    log_file.parent.mkdir(parents=True, exist_ok=True)
    _file_handler = logging.FileHandler(log_file, encoding="utf-8")
    _file_handler.setLevel(logging.DEBUG)
    _file_handler.setFormatter(ExtraFieldsFormatter("%(asctime)s [%(levelname)s] %(message)s"))
    logger.addHandler(_file_handler)
    logger.debug("[logging] File logging enabled at %s", log_file)
    return log_file


def disable_file_logging() -> None:
    """Detach and close the file handler added by ``enable_file_logging``."""
    global _file_handler
    if _file_handler is None:
        return
    get_logger().removeHandler(_file_handler)
    _file_handler.close()
    _file_handler = None
