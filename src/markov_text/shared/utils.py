"""Shared logging utilities for the command-line tool."""

import datetime
import json
import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Dict, Optional, Union

from .log_filter import configure_sensitive_logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_MAX_BYTES = 1_000_000
LOG_BACKUP_COUNT = 3

logger = logging.getLogger(__name__)

_event_loggers: Dict[str, logging.Logger] = {}


def setup_logging(level: Union[int, str] = logging.WARNING) -> None:
    """Configure stderr logging with credential masking on the root handler."""
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    configure_sensitive_logging(root_logger)


def _timestamp() -> str:
    return (
        datetime.datetime.now(datetime.timezone.utc).isoformat().replace("+00:00", "Z")
    )


def _get_event_logger(log_file: str) -> logging.Logger:
    event_logger = _event_loggers.get(log_file)
    if event_logger is None:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        handler = RotatingFileHandler(
            log_file,
            maxBytes=LOG_MAX_BYTES,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        event_logger = logging.getLogger(f"event.{log_file}")
        event_logger.addHandler(handler)
        event_logger.setLevel(logging.INFO)
        event_logger.propagate = False
        configure_sensitive_logging(event_logger)
        _event_loggers[log_file] = event_logger
    return event_logger


def log_error(
    message: str, exception: Optional[Exception] = None, log_file: str = ""
) -> None:
    """Log an error message and optional exception to a file."""
    log_entry = f"{_timestamp()} - ERROR: {message}"
    if exception:
        log_entry += f" | Exception: {type(exception).__name__}: {exception}"
    if not log_file:
        logger.error(log_entry)
        return
    try:
        _get_event_logger(log_file).error(log_entry)
    except OSError as log_e:
        logger.critical(
            "Could not write to error log file %s: %s | Original error: %s",
            log_file,
            log_e,
            log_entry,
        )


def log_event(log_file: str, event_type: str, data: dict) -> None:
    """Write a structured event entry to the specified log file."""
    try:
        serializable_data = json.loads(json.dumps(data, default=str))
        log_entry = {
            "timestamp": _timestamp(),
            "event_type": event_type,
            **serializable_data,
        }
        _get_event_logger(log_file).info(json.dumps(log_entry))
    except (OSError, TypeError, ValueError) as e:
        log_error(f"Failed to write to log file {log_file}", e)
