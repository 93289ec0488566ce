"""Logging utilities built on top of :mod:`loguru`."""
from __future__ import annotations

import logging
import sys
from typing import Optional

from loguru import logger

LOG_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {extra[origin]} - {message}"


class _LoguruBridge(logging.Handler):
    """Forward standard-library records to the loguru sink."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: object = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        logger.bind(origin=record.name).opt(exception=record.exc_info).log(level, record.getMessage())


def configure_logging(level: str = "INFO") -> None:
    """Configure loguru and route the standard logging tree through it."""

    logger.remove()
    logger.configure(extra={"origin": "archive"})
    logger.add(sys.stderr, level=level, format=LOG_FORMAT)
    logging.basicConfig(handlers=[_LoguruBridge()], level=level, force=True)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a standard-library logger tied to loguru."""

    return logging.getLogger(name or "archive")
