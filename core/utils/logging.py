"""Centralized logging configuration."""

import logging
import os
import sys
from typing import Optional

# Environment variable the CLI reads its default level from
LOG_LEVEL_ENV = "REGISTRY_LOG_LEVEL"

_FORMATS = {
    # Production - structured logging
    "json": '{"time": "%(asctime)s", "level": "%(levelname)s", "module": "%(name)s", "message": "%(message)s"}',
    # Development - human readable
    "standard": "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
}


def default_level() -> str:
    """Log level from REGISTRY_LOG_LEVEL, WARNING if unset."""
    return os.environ.get(LOG_LEVEL_ENV, "WARNING")


def setup_logging(
    level: str = "INFO", format_style: str = "standard", log_file: Optional[str] = None
) -> logging.Logger:
    """
    Configure logging for the application.

    Logs go to stderr so stdout stays clean for JSON output.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        format_style: 'standard' for dev, 'json' for production
        log_file: Optional file path to write logs

    Returns:
        Root logger

    Raises:
        ValueError: If level or format_style is unknown
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level: {level}")
    if format_style not in _FORMATS:
        raise ValueError(f"Unknown log format: {format_style}")

    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=numeric_level,
        format=_FORMATS[format_style],
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
        force=True,  # Override any existing config
    )

    return logging.getLogger()


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for a module.

    Usage:
        from core.utils.logging import get_logger
        logger = get_logger(__name__)
        logger.info("Registered backend")
    """
    return logging.getLogger(name)
