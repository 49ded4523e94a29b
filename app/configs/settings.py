"""Application settings and configuration constants.

This module contains application settings, constants, and configuration
values for the Blog Posts backend application.
"""

from logging import INFO, Logger
from logging.handlers import RotatingFileHandler
from pathlib import Path

from pydantic_settings.main import BaseSettings, SettingsConfigDict
from pythonjsonlogger.json import JsonFormatter

ENV_FILE = Path(__file__).parent.parent.parent / ".env"

# --- Constants ---
MAX_TITLE_LENGTH = 200
MAX_CONTENT_LENGTH = 50000
MAX_NAME_LENGTH = 100

# Response constants
DEFAULT_ERROR_MESSAGE = "Internal Server Error"

LOG_MAX_BYTES = 5 * 1024 * 1024
LOG_BACKUP_COUNT = 5


class Settings(BaseSettings):
    """Application settings with validation and default values."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    APP_NAME: str = "Blog Posts Backend"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False

    # Environment
    ENVIRONMENT: str = "development"
    LOG_TO_FILE: bool = False
    LOG_FILE: str = "logs/app.log"
    LOG_LEVEL: str = "info"
    PRODUCTION_FRONTEND_URL: str | None = None

    # Server
    HOST: str = "127.0.0.1"
    PORT: int = 8000

    # Database Configuration
    DATABASE_URL: str = "sqlite+aiosqlite:///./blog.db"
    TEST_DATABASE_URL: str = "sqlite+aiosqlite:///:memory:"
    DATABASE_ECHO: bool = False
    POOL_SIZE: int = 5
    MAX_OVERFLOW: int = 10
    POOL_TIMEOUT: int = 30  # seconds
    POOL_RECYCLE: int = 1800  # seconds


settings = Settings()


def file_logger(logger: Logger) -> Logger:
    """
    Attach the shared rotating JSON file handler to a logger.

    Does nothing unless ``LOG_TO_FILE`` is enabled. Calling it more than once
    on the same logger does not add duplicate handlers.

    Args:
        logger: Logger to extend

    Returns:
        Logger: The same logger, for assignment at module level
    """
    if not settings.LOG_TO_FILE:
        return logger

    log_file = Path(settings.LOG_FILE)
    if any(
        isinstance(h, RotatingFileHandler) and Path(h.baseFilename) == log_file.resolve()
        for h in logger.handlers
    ):
        return logger

    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        log_file,
        maxBytes=LOG_MAX_BYTES,
        backupCount=LOG_BACKUP_COUNT,
    )
    handler.setLevel(INFO)
    handler.setFormatter(JsonFormatter("%(asctime)s %(name)s %(levelname)s %(message)s"))
    logger.addHandler(handler)
    return logger
