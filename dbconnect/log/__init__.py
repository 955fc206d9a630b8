"""Logging helpers."""
from .logger import DEFAULT_LOGGER_NAME, get_logger, setup_logger, setup_logger_from_config

__all__ = ["DEFAULT_LOGGER_NAME", "get_logger", "setup_logger", "setup_logger_from_config"]
