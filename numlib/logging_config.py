"""Logging configuration utilities for numlib.

numlib is silent by default (the package logger only carries a NullHandler).
Call one of the functions below to see what the integrators are doing; the
quadrature rules log their parameters at DEBUG and the Legendre root solver
logs non-convergence at ERROR.

Example usage:
    import numlib

    # Console output, including per-call debug lines
    numlib.enable_console_logging(level="DEBUG")

    # Rotating log file
    numlib.enable_file_logging("logs/quadrature.log", max_bytes=1_000_000)

    # One JSON object per line
    numlib.enable_json_logging()

    # Configure from environment variables
    numlib.configure_from_env()

Environment variables:
    NUMLIB_LOGGING: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    NUMLIB_LOG_FILE: Path to log file (enables rotating file logging)
    NUMLIB_LOG_JSON: Set to "1" for JSON output
"""

from __future__ import annotations

import json
import logging
import os
from datetime import UTC, datetime
from logging.handlers import RotatingFileHandler, TimedRotatingFileHandler
from pathlib import Path
from typing import Literal, TypeVar

__all__ = [
    "configure_from_env",
    "disable_logging",
    "enable_console_logging",
    "enable_file_logging",
    "enable_json_file_logging",
    "enable_json_logging",
    "enable_timed_file_logging",
    "set_level",
    "set_module_level",
]

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

DEFAULT_MAX_BYTES = 10 * 1024 * 1024  # 10 MB
DEFAULT_BACKUP_COUNT = 5

LOGGER_NAME = "numlib"

ENV_LEVEL = "NUMLIB_LOGGING"
ENV_FILE = "NUMLIB_LOG_FILE"
ENV_JSON = "NUMLIB_LOG_JSON"

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

H = TypeVar("H", bound=logging.Handler)


class JsonFormatter(logging.Formatter):
    """Formats log records as single-line JSON objects.

    Example output:
        {"timestamp": "2026-01-15T10:30:00.123456+00:00", "level": "DEBUG",
         "logger": "numlib.numerics.integration",
         "message": "Romberg integration on [0.0, 1.0] with n=5"}
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        if hasattr(record, "extra"):
            log_data["extra"] = record.extra

        return json.dumps(log_data)


def _get_level(level: str | int) -> int:
    """Convert a level string or int to a logging level constant."""
    if isinstance(level, int):
        return level
    return getattr(logging, level.upper(), logging.INFO)


def _get_logger() -> logging.Logger:
    """Get the numlib package logger."""
    return logging.getLogger(LOGGER_NAME)


def _clear_handlers() -> None:
    """Remove and close every handler on the package logger except NullHandler."""
    logger = _get_logger()
    for handler in logger.handlers[:]:
        if not isinstance(handler, logging.NullHandler):
            logger.removeHandler(handler)
            handler.close()


def _install(handler: H, level: LogLevel | int, formatter: logging.Formatter) -> H:
    """Attach ``handler`` to the package logger at ``level``."""
    logger = _get_logger()
    logger.setLevel(_get_level(level))

    handler.setLevel(_get_level(level))
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    return handler


def _prepare_path(path: str | Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def enable_console_logging(
    level: LogLevel | int = "INFO",
    format: str = DEFAULT_FORMAT,
    date_format: str = DEFAULT_DATE_FORMAT,
) -> logging.StreamHandler:
    """Log to stderr.

    Args:
        level: Log level name or int.
        format: Log message format string.
        date_format: Date format string for %(asctime)s.

    Returns:
        The created StreamHandler.
    """
    return _install(logging.StreamHandler(), level, logging.Formatter(format, date_format))


def enable_file_logging(
    path: str | Path,
    level: LogLevel | int = "INFO",
    max_bytes: int = DEFAULT_MAX_BYTES,
    backup_count: int = DEFAULT_BACKUP_COUNT,
    format: str = DEFAULT_FORMAT,
    date_format: str = DEFAULT_DATE_FORMAT,
) -> RotatingFileHandler:
    """Log to a size-rotated file.

    When the file reaches ``max_bytes`` it is renamed with a numeric suffix
    and a fresh one is started; ``backup_count`` old files are kept.

    Args:
        path: Log file path. Parent directories are created.
        level: Log level name or int.
        max_bytes: Maximum size of each file in bytes.
        backup_count: Number of rotated files to keep.
        format: Log message format string.
        date_format: Date format string for %(asctime)s.

    Returns:
        The created RotatingFileHandler.
    """
    handler = RotatingFileHandler(
        _prepare_path(path), maxBytes=max_bytes, backupCount=backup_count
    )
    return _install(handler, level, logging.Formatter(format, date_format))


def enable_timed_file_logging(
    path: str | Path,
    level: LogLevel | int = "INFO",
    when: str = "midnight",
    interval: int = 1,
    backup_count: int = DEFAULT_BACKUP_COUNT,
    format: str = DEFAULT_FORMAT,
    date_format: str = DEFAULT_DATE_FORMAT,
) -> TimedRotatingFileHandler:
    """Log to a file rotated on a schedule.

    Args:
        path: Log file path. Parent directories are created.
        level: Log level name or int.
        when: Rotation unit as understood by TimedRotatingFileHandler
            ('S', 'M', 'H', 'D', 'midnight', 'W0'-'W6').
        interval: Number of ``when`` units between rotations.
        backup_count: Number of rotated files to keep.
        format: Log message format string.
        date_format: Date format string for %(asctime)s.

    Returns:
        The created TimedRotatingFileHandler.
    """
    handler = TimedRotatingFileHandler(
        _prepare_path(path), when=when, interval=interval, backupCount=backup_count
    )
    return _install(handler, level, logging.Formatter(format, date_format))


def enable_json_logging(level: LogLevel | int = "INFO") -> logging.StreamHandler:
    """Log JSON lines to stderr.

    Returns:
        The created StreamHandler with JsonFormatter.
    """
    return _install(logging.StreamHandler(), level, JsonFormatter())


def enable_json_file_logging(
    path: str | Path,
    level: LogLevel | int = "INFO",
    max_bytes: int = DEFAULT_MAX_BYTES,
    backup_count: int = DEFAULT_BACKUP_COUNT,
) -> RotatingFileHandler:
    """Log JSON lines to a size-rotated file.

    Returns:
        The created RotatingFileHandler with JsonFormatter.
    """
    handler = RotatingFileHandler(
        _prepare_path(path), maxBytes=max_bytes, backupCount=backup_count
    )
    return _install(handler, level, JsonFormatter())


def configure_from_env() -> None:
    """Configure logging from NUMLIB_LOGGING, NUMLIB_LOG_FILE and NUMLIB_LOG_JSON.

    Does nothing when neither a level nor a log file is set.

    Example:
        # In shell:
        export NUMLIB_LOGGING=DEBUG
        export NUMLIB_LOG_FILE=quadrature.log

        # In Python:
        >>> import numlib
        >>> numlib.configure_from_env()
    """
    level = os.environ.get(ENV_LEVEL, "").upper()
    log_file = os.environ.get(ENV_FILE, "")
    use_json = os.environ.get(ENV_JSON, "") == "1"

    if not level and not log_file:
        return

    level = level or "INFO"

    if use_json:
        if log_file:
            enable_json_file_logging(log_file, level=level)
        else:
            enable_json_logging(level=level)
    elif log_file:
        enable_file_logging(log_file, level=level)
    else:
        enable_console_logging(level=level)


def set_level(level: LogLevel | int) -> None:
    """Set the level of the numlib package logger."""
    _get_logger().setLevel(_get_level(level))


def set_module_level(module: str, level: LogLevel | int) -> None:
    """Set the level of one numlib submodule.

    Args:
        module: Module name relative to numlib (e.g., "numerics.root_finding").
        level: Log level name or int.

    Example:
        >>> import numlib
        >>> numlib.enable_console_logging(level="INFO")
        >>> numlib.set_module_level("numerics.root_finding", "DEBUG")
    """
    logging.getLogger(f"{LOGGER_NAME}.{module}").setLevel(_get_level(level))


def disable_logging() -> None:
    """Remove all handlers and silence the package logger."""
    logger = _get_logger()
    _clear_handlers()
    logger.addHandler(logging.NullHandler())
    logger.setLevel(logging.CRITICAL + 1)
