"""Environment configuration."""
from .settings import Config, get_config

__all__ = ["Config", "get_config"]
