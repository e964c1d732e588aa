"""
Logging configuration for rural.

Log records go to stderr so they never mix with the rendered response on
stdout. File logging with rotation is available for debugging sessions.
"""

import logging
import sys
from pathlib import Path
from logging.handlers import RotatingFileHandler


class StructuredFormatter(logging.Formatter):
    """Structured formatter for easier log parsing."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with structured data."""
        if not hasattr(record, 'module_name'):
            record.module_name = record.module
        if not hasattr(record, 'function_name'):
            record.function_name = record.funcName

        return super().format(record)


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    max_bytes: int = 10485760,  # 10MB
    backup_count: int = 5,
) -> logging.Logger:
    """
    Set up logging for rural.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Log file path; file logging is off when omitted
        max_bytes: Maximum log file size before rotation
        backup_count: Number of backup log files to keep

    Returns:
        Configured package logger
    """
    logger = logging.getLogger("rural")
    logger.setLevel(logging.DEBUG if log_file else getattr(logging, level.upper()))

    # Close and clear existing handlers
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()

    console_fmt = logging.Formatter(
        fmt='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(getattr(logging, level.upper()))
    console_handler.setFormatter(console_fmt)
    logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_fmt = StructuredFormatter(
            fmt='%(asctime)s | %(levelname)-8s | %(name)-20s | %(module_name)-15s | '
                '%(function_name)-20s | %(lineno)-4d | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding='utf-8'
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(file_fmt)
        logger.addHandler(file_handler)

    # Prevent propagation to root logger
    logger.propagate = False

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for a specific module.

    Args:
        name: Module name (e.g., 'rural.http.client')

    Returns:
        Logger instance
    """
    return logging.getLogger(name)


def configure_logging(verbose: bool = False, level: str = "WARNING", log_file: str | None = None) -> None:
    """
    Quick logging configuration.

    Args:
        verbose: Log at DEBUG level regardless of level
        level: Logging level otherwise
        log_file: Optional log file path
    """
    setup_logging(
        level="DEBUG" if verbose else level,
        log_file=log_file,
    )
