"""Logging configuration for the shared-ssh command line tool."""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

DEFAULT_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
CONSOLE_LOG_FORMAT = "%(levelname)s: %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
DEFAULT_MAX_BYTES = 1024 * 1024  # 1 MB
DEFAULT_BACKUP_COUNT = 3
LOG_FILE_NAME = "shared-ssh.log"


def setup_logging(
    name: str,
    level: str = "INFO",
    log_file: str | Path | None = None,
    max_bytes: int = DEFAULT_MAX_BYTES,
    backup_count: int = DEFAULT_BACKUP_COUNT,
    stream: object = None,
    console_format: str = CONSOLE_LOG_FORMAT,
    log_format: str = DEFAULT_LOG_FORMAT,
    date_format: str = DEFAULT_DATE_FORMAT,
) -> logging.Logger:
    """
    Configure the tool's logger.

    Console output uses a short "LEVEL: message" format so progress lines read
    like the rest of the report. The optional log file keeps timestamps.

    Args:
        name: Logger name (usually the top-level package, e.g. 'provisioner')
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Path to log file. If None, only console logging.
        max_bytes: Maximum size of each log file before rotation
        backup_count: Number of rotated files to keep
        stream: Stream for console logging (default: stdout)
        console_format: Console message format
        log_format: File message format
        date_format: Timestamp format

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Reconfiguring must not stack handlers
    logger.handlers.clear()

    console_handler = logging.StreamHandler(stream or sys.stdout)
    console_handler.setFormatter(logging.Formatter(console_format))
    logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(logging.Formatter(log_format, datefmt=date_format))
        logger.addHandler(file_handler)

    logger.propagate = False

    return logger


def get_default_log_file(config_dir: Path) -> Path:
    """Default log file location, next to the tool's config file."""
    return Path(config_dir) / "logs" / LOG_FILE_NAME
