"""Logging configuration for the MCP server."""

import logging
from typing import Optional


# Log level constants
DEFAULT_LOG_LEVEL = logging.INFO
DEBUG_LOG_LEVEL = logging.DEBUG

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def setup_logging(log_level: Optional[int] = None, log_file: Optional[str] = None) -> None:
    """
    Configure logging for the MCP server.

    stdout carries the MCP stdio protocol, so logs only go to a file. Without
    a file they are suppressed entirely.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path to write logs to. If not provided, logs are suppressed.
    """
    if log_level is None:
        log_level = DEFAULT_LOG_LEVEL

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()

    # NullHandler keeps the last-resort stderr handler from kicking in
    root_logger.addHandler(logging.NullHandler())

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file)
        except OSError:
            # Nowhere to report this without touching the protocol streams
            file_handler = None
        if file_handler is not None:
            file_handler.setLevel(log_level)
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)

    # Set specific loggers to WARNING to minimize noise
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for a module."""
    return logging.getLogger(name)
