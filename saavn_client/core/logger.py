"""
Logging configuration for saavn-client.

The library itself only obtains loggers through get_logger() and never
installs handlers. Applications (and the bundled CLI) call setup_logging()
once at startup to get:
    - Console: colored, compact messages on stderr
    - Optional rotating log file: every record with timestamps
    - Optional error log: one JSON record per failed client operation,
      suitable for shipping to an observability sink

Usage:
    from saavn_client.core.logger import setup_logging, get_logger

    setup_logging(level="DEBUG", log_file=Path("saavn.log"))
    logger = get_logger(__name__)
    logger.info("Searching songs")
"""

import json
import logging
import logging.handlers
import re
import sys
from pathlib import Path
from typing import Any

from colorama import Fore, Style, just_fix_windows_console

from saavn_client.core.exceptions import format_error_record


# Log format for file output (detailed with timestamp)
FILE_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
FILE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Log format for console output (compact)
CONSOLE_LOG_FORMAT = "%(levelname)s: %(message)s"

# Attribute name carrying a flattened error on failure records
ERROR_RECORD_ATTR = "error_record"

# Loggers of third-party libraries that are too chatty at DEBUG
NOISY_LOGGERS = ("aiohttp.access", "aiohttp.client", "asyncio")


class ColoredConsoleFormatter(logging.Formatter):
    """
    Formatter that colors the level name for terminal output.

    Colors:
        - DEBUG: Cyan
        - INFO: Green
        - WARNING: Yellow
        - ERROR: Red
        - CRITICAL: Bright Red
    """

    COLORS = {
        "DEBUG": Fore.CYAN,
        "INFO": Fore.GREEN,
        "WARNING": Fore.YELLOW,
        "ERROR": Fore.RED,
        "CRITICAL": Fore.RED + Style.BRIGHT,
    }

    def __init__(self, fmt: str = CONSOLE_LOG_FORMAT, use_colors: bool = True) -> None:
        super().__init__(fmt)
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        """Format the record, coloring a copy so other handlers see plain text."""
        if not self.use_colors or record.levelname not in self.COLORS:
            return super().format(record)

        record_copy = logging.makeLogRecord(record.__dict__)
        record_copy.levelname = (
            f"{self.COLORS[record.levelname]}{record.levelname}{Style.RESET_ALL}"
        )
        return super().format(record_copy)


class ErrorOnlyFilter(logging.Filter):
    """
    Filter that only lets through records describing a failed operation.

    A record qualifies when it is ERROR or above, or when it carries an
    error_record attribute (client failures are logged at WARNING with one).
    """

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno >= logging.ERROR or hasattr(record, ERROR_RECORD_ATTR)


class ErrorRecordFormatter(logging.Formatter):
    """
    Formatter emitting one JSON object per record.

    When the record carries an error_record (see log_operation_failure) it
    is embedded as "error". Records logged with exc_info get their exception
    flattened the same way, so every line is serializable.
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": self.formatTime(record, FILE_DATE_FORMAT),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        error_record = getattr(record, ERROR_RECORD_ATTR, None)
        if error_record is not None:
            payload["error"] = error_record
        elif record.exc_info and record.exc_info[1] is not None:
            payload["error"] = format_error_record(record.exc_info[1])

        return json.dumps(payload, ensure_ascii=False, default=repr)


def parse_size(size: str) -> int:
    """
    Parse a human size string into bytes.

    Example:
        parse_size("10MB")  # 10485760
        parse_size("512")   # 512
    """
    match = re.fullmatch(r"\s*(\d+(?:\.\d+)?)\s*([KMG]?B?)?\s*", size.upper())
    if not match:
        raise ValueError(f"Invalid size: {size!r}")

    number = float(match.group(1))
    unit = (match.group(2) or "B").rstrip("B")
    multiplier = {"": 1, "K": 1024, "M": 1024 ** 2, "G": 1024 ** 3}[unit]
    return int(number * multiplier)


def setup_logging(
    level: str = "INFO",
    log_file: Path | None = None,
    error_log_file: Path | None = None,
    colored: bool = True,
    max_size: str = "10MB",
    backup_count: int = 3,
) -> None:
    """
    Configure the logging system for an application using the client.

    This function should be called ONCE at startup. It replaces any handlers
    already installed on the root logger.

    Args:
        level: Console level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional path of a rotating log file receiving every record.
        error_log_file: Optional path of a JSON-lines file receiving only
                        failed operations.
        colored: Whether console output uses ANSI colors.
        max_size: Rotation threshold for log_file (e.g. "10MB").
        backup_count: Number of rotated files to keep.
    """
    if colored:
        just_fix_windows_console()

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(getattr(logging, level.upper(), logging.INFO))
    console_handler.setFormatter(ColoredConsoleFormatter(use_colors=colored))
    root_logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=parse_size(max_size),
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT, FILE_DATE_FORMAT))
        root_logger.addHandler(file_handler)

    if error_log_file:
        error_log_file.parent.mkdir(parents=True, exist_ok=True)
        error_handler = logging.FileHandler(error_log_file, mode="a", encoding="utf-8")
        error_handler.setLevel(logging.DEBUG)  # Filter handles the level restriction
        error_handler.addFilter(ErrorOnlyFilter())
        error_handler.setFormatter(ErrorRecordFormatter())
        root_logger.addHandler(error_handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger("saavn_client").debug(
        f"Logging initialized - Level: {level}, File: {log_file}, Errors: {error_log_file}"
    )


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a module.

    Args:
        name: The logger name, typically __name__ of the calling module,
              giving a hierarchy like 'saavn_client.api.client'.

    Returns:
        logging.Logger: Without setup_logging() it has no handlers of its
        own and defers to whatever the host application configured.
    """
    return logging.getLogger(name)


def log_operation_failure(logger: logging.Logger, operation: str, error: Any) -> None:
    """
    Log a failed client operation with its flattened error attached.

    Args:
        logger: Logger to emit on.
        operation: Public operation name (e.g. "search_songs").
        error: The error that ended the operation, structured or not.
    """
    record = format_error_record(error)
    logger.warning(
        f"{operation} failed [{record['code']}]: {record['message']}",
        extra={ERROR_RECORD_ATTR: record},
    )


def shutdown_logging() -> None:
    """Flush, close and detach every handler on the root logger."""
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        handler.flush()
        handler.close()
        root_logger.removeHandler(handler)
