"""Configuration management for dbconnect."""
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from sqlalchemy.engine import URL


# Project root directory (parent of dbconnect/)
PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent


class Config:
    """
    Configuration class for dbconnect.
    Loads settings from environment variables and provides singleton access.
    """
    _instance: Optional['Config'] = None

    def __new__(cls):
        """Singleton pattern - only one instance of Config exists."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        """Initialize configuration from environment variables."""
        if self._initialized:
            return

        # Load .env file if it exists
        load_dotenv()

        # Database configuration
        self.database_url = os.getenv('DATABASE_URL', '') or self._build_database_url()

        # Logging configuration
        log_dir_env = os.getenv('LOG_DIR', 'logs')
        self.log_dir = self._resolve_path(log_dir_env)
        self.log_level = os.getenv('LOG_LEVEL', 'INFO')

        self._initialized = True

    @staticmethod
    def _build_database_url() -> str:
        """
        Assemble a PostgreSQL URL from DB_* variables.

        Returns:
            URL string, or empty string if DB_HOST or DB_NAME is missing
        """
        host = os.getenv('DB_HOST')
        name = os.getenv('DB_NAME')
        if not host or not name:
            return ''

        port = os.getenv('DB_PORT', '5432')
        try:
            port_number = int(port)
        except ValueError:
            raise ValueError(f"DB_PORT must be an integer, got {port!r}") from None

        url = URL.create(
            'postgresql',
            username=os.getenv('DB_USER') or None,
            password=os.getenv('DB_PASSWORD') or None,
            host=host,
            port=port_number,
            database=name,
        )
        return url.render_as_string(hide_password=False)

    def _resolve_path(self, path_str: str) -> Path:
        """
        Resolve a path string to an absolute Path.

        If the path is already absolute, returns it as-is.
        If relative, resolves it relative to PROJECT_ROOT.

        Args:
            path_str: Path string from environment variable

        Returns:
            Absolute Path object
        """
        path = Path(path_str)
        if path.is_absolute():
            return path
        return (PROJECT_ROOT / path).resolve()

    @classmethod
    def get_instance(cls) -> 'Config':
        """
        Get the singleton instance of Config.

        Returns:
            Config instance
        """
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Drop the singleton so the next access re-reads the environment."""
        cls._instance = None


# Convenience function to get config instance
def get_config() -> Config:
    """
    Get the configuration instance.

    Returns:
        Config instance
    """
    return Config.get_instance()
