"""Logging configuration for the application.

Every named logger writes to stdout; the inventory, assistant and error
loggers also write to a rotating file outside production.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import List, Optional

from .config import get_config


class DetailsFormatter(logging.Formatter):
    """Appends ``extra={"details": {...}}`` to the formatted line."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        details = getattr(record, "details", None)
        if details:
            rendered = ", ".join(f"{key}={value!r}" for key, value in details.items())
            line = f"{line} [{rendered}]"
        return line


def _handlers(log_file: Optional[str], formatter: logging.Formatter) -> List[logging.Handler]:
    config = get_config()

    stdout = logging.StreamHandler(sys.stdout)
    stdout.setLevel(logging.INFO)
    handlers: List[logging.Handler] = [stdout]

    # Production logs go to stdout only
    if log_file and not config.is_production:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        rotating = RotatingFileHandler(
            log_file,
            maxBytes=config.logging.max_bytes,
            backupCount=config.logging.backup_count
        )
        rotating.setLevel(logging.DEBUG)
        handlers.append(rotating)

    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def setup_logger(
    name: str,
    log_file: Optional[str] = None,
    level: Optional[str] = None
) -> logging.Logger:
    """
    Configure a named logger once and return it.

    Args:
        name: Logger name
        log_file: Rotating log file, ignored in production
        level: Level name overriding ``logging.level`` from config

    Returns:
        The configured logger
    """
    config = get_config()

    logger = logging.getLogger(name)
    logger.setLevel((level or config.logging.level).upper())

    if not logger.handlers:
        for handler in _handlers(log_file, DetailsFormatter(config.logging.format)):
            logger.addHandler(handler)

    return logger


def get_inventory_logger() -> logging.Logger:
    """Stock writes and operation validation."""
    return setup_logger("inventory", get_config().logging.files.inventory)


def get_assistant_logger() -> logging.Logger:
    return setup_logger("assistant", get_config().logging.files.assistant)


def get_error_logger() -> logging.Logger:
    """Failures at the AI boundary, logged at ERROR and above."""
    return setup_logger("error", get_config().logging.files.error, "ERROR")


def get_api_logger() -> logging.Logger:
    return setup_logger("api")


def get_server_logger() -> logging.Logger:
    return setup_logger("server")


def get_scheduler_logger() -> logging.Logger:
    """Route APScheduler's own logger to stdout so job exceptions are visible."""
    return setup_logger("apscheduler")
