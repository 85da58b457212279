"""
Logging utilities: console setup and redirecting logs to a queue for GUI display.
"""
from __future__ import annotations

import logging
import sys
from queue import Queue
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"

PACKAGE_LOGGER = "cover_printer"


def source_of(logger_name: str) -> str:
    """
    Short area name for a package logger.

    "cover_printer.sheet.controller" -> "sheet", "cover_printer" -> "app".
    Loggers outside the package keep their top-level name.
    """
    parts = logger_name.split(".")
    if parts[0] != PACKAGE_LOGGER:
        return parts[0]
    return parts[1] if len(parts) > 1 else "app"


class QueueLogHandler(logging.Handler):
    """
    A logging handler that sends (message, level, source) tuples to a queue.

    Used to capture logs from the core and display them in the GUI console.
    DEBUG records are forwarded as-is; the console decides whether to show them.
    """

    def __init__(self, log_queue: Queue, level: int = logging.DEBUG):
        super().__init__(level)
        self.log_queue = log_queue
        self.setFormatter(logging.Formatter("%(message)s"))

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record)
            self.log_queue.put((message, record.levelname, source_of(record.name)))
        except Exception:
            self.handleError(record)


def configure_logging(level: int = logging.INFO, stream=None) -> logging.Handler:
    """
    Attach a stream handler to the package logger.

    The package logger itself passes DEBUG so the GUI console can reveal
    debug records on demand; the stream handler filters at ``level``.

    Args:
        level: Minimum level written to the stream
        stream: Target stream (default stderr)

    Returns:
        The attached handler (for later removal)
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.setLevel(level)
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    return handler


def attach_queue_handler(log_queue: Queue, logger_name: Optional[str] = PACKAGE_LOGGER) -> QueueLogHandler:
    """
    Attach a QueueLogHandler to the specified logger (or root logger if None).

    Args:
        log_queue: Queue to send log records to.
        logger_name: Name of logger to attach to. None = root logger.

    Returns:
        The attached handler (for later removal).
    """
    logger = logging.getLogger(logger_name)
    handler = QueueLogHandler(log_queue)
    logger.addHandler(handler)
    return handler


def detach_queue_handler(handler: QueueLogHandler, logger_name: Optional[str] = PACKAGE_LOGGER) -> None:
    """
    Remove a QueueLogHandler from the specified logger.

    Args:
        handler: The handler to remove.
        logger_name: Name of logger to detach from. None = root logger.
    """
    logger = logging.getLogger(logger_name)
    logger.removeHandler(handler)
