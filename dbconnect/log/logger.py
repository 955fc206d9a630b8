"""Logger configuration."""
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

DEFAULT_LOGGER_NAME = "dbconnect"


def setup_logger(
    name: str = DEFAULT_LOGGER_NAME,
    log_dir: Optional[str | Path] = "logs",
    level: int = logging.INFO,
    max_bytes: int = 10 * 1024 * 1024,  # 10 MB
    backup_count: int = 10
) -> logging.Logger:
    """
    Set up logger with file and console handlers.

    Args:
        name: Logger name
        log_dir: Directory for log files, or None to log to the console only
        level: Logging level
        max_bytes: Max size per log file before rotation
        backup_count: Number of backup files to keep

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Clear any existing handlers
    logger.handlers.clear()

    log_format = logging.Formatter(
        "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_dir / f"{name}.log",
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8"
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(log_format)
        logger.addHandler(file_handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(log_format)
    logger.addHandler(console_handler)

    return logger


def setup_logger_from_config(config=None) -> logging.Logger:
    """
    Set up the package logger from LOG_DIR / LOG_LEVEL settings.

    Args:
        config: Config instance (defaults to get_config())

    Returns:
        Configured logger
    """
    if config is None:
        from ..config import get_config
        config = get_config()

    # Convert log level string to logging constant
    level = getattr(logging, config.log_level.upper(), logging.INFO)
    return setup_logger(name=DEFAULT_LOGGER_NAME, log_dir=config.log_dir, level=level)


def get_logger(name: str = DEFAULT_LOGGER_NAME) -> logging.Logger:
    """
    Get existing logger by name.

    Args:
        name: Logger name

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
