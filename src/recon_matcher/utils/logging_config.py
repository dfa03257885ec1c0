"""Logging setup for recon-matcher."""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s"

ROOT_LOGGER_NAME = "recon_matcher"

DEFAULT_MAX_BYTES = 10 * 1024 * 1024
DEFAULT_BACKUP_COUNT = 5


def _resolve_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    # getLevelName returns "Level X" for unknown names
    return resolved if isinstance(resolved, int) else logging.INFO


def _rotating_handler(log_file: Path, max_bytes: int, backup_count: int) -> logging.Handler:
    """File handler that records everything down to DEBUG with source locations."""
    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(log_file, maxBytes=max_bytes, backupCount=backup_count)
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(FILE_FORMAT))
    return handler


def setup_logging(
    level: Union[int, str] = logging.INFO,
    log_file: Optional[Path] = None,
    log_format: Optional[str] = None,
    max_bytes: int = DEFAULT_MAX_BYTES,
    backup_count: int = DEFAULT_BACKUP_COUNT,
) -> logging.Logger:
    """
    Configure the package logger.

    Args:
        level: Logging level, either a number or a name such as "DEBUG"
        log_file: Optional path of a rotating log file
        log_format: Optional console format string
        max_bytes: Size at which the log file rotates
        backup_count: Number of rotated log files kept

    Returns:
        The configured ``recon_matcher`` logger
    """
    numeric_level = _resolve_level(level)

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(numeric_level)

    # Re-running setup must not stack handlers
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler()
    console.setLevel(numeric_level)
    console.setFormatter(logging.Formatter(log_format or DEFAULT_FORMAT))
    logger.addHandler(console)

    if log_file:
        logger.addHandler(_rotating_handler(log_file, max_bytes, backup_count))

    return logger
