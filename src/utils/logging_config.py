"""
Logging configuration for the Graph Mapper backend.

This module sets up structured logging with consistent formatting across
the application, including the request ID of the HTTP call being served.
"""

from __future__ import annotations

import logging
import os
import sys
from contextvars import ContextVar
from typing import Optional

from .constants import DEFAULT_LOG_LEVEL, LOG_FORMAT

# Request ID of the HTTP call being served in the current context
request_id_var: ContextVar[str] = ContextVar("request_id", default="-")


def setup_logging(
    level: Optional[str] = None,
    format_string: Optional[str] = None,
    include_request_id: bool = True,
) -> None:
    """
    Configure application-wide logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to env var or INFO.
        format_string: Custom log format string. Defaults to standard format.
        include_request_id: Whether to include request ID in logs.

    Example:
        >>> setup_logging(level="DEBUG")
        >>> logger = logging.getLogger(__name__)
        >>> logger.info("Application started")
    """
    log_level = level or os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL)
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    log_format = format_string or LOG_FORMAT

    # If request ID not needed, use simpler format
    if not include_request_id:
        log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestIDFilter())

    logging.basicConfig(
        level=numeric_level,
        format=log_format,
        handlers=[handler],
        force=True,  # Override any existing configuration
    )

    # Set third-party library log levels to reduce noise
    logging.getLogger("neo4j").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    logger = logging.getLogger(__name__)
    logger.info(f"Logging configured with level: {log_level}")


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a module.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)


class RequestIDFilter(logging.Filter):
    """
    Logging filter that adds request ID to log records.

    Records without a request_id attribute get the ID of the request
    being served, or "-" outside of a request.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        """
        Add request_id to log record.

        Args:
            record: Log record to filter

        Returns:
            Always True (don't filter out any records)
        """
        if not hasattr(record, "request_id"):
            record.request_id = request_id_var.get()
        return True
