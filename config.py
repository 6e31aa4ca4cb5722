"""
FastAPI Configuration Management

Settings for the user account service, loaded from the environment and an
optional ``.env`` file with Pydantic validation.
"""

import os
import json
import logging
from functools import lru_cache
from typing import Annotated, List, Optional
from logging import Handler
from logging.handlers import RotatingFileHandler, TimedRotatingFileHandler

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

# Read from the environment as "a,b" or as a JSON array
StrList = Annotated[List[str], NoDecode]


def setup_universal_logging(
    log_file: str = "logs/user_service.log",
    log_level: str = "INFO",
    rotation_type: str = "size",
    rotation_when: str | None = None,
    rotation_interval: int = 1,
    max_bytes: int = 10 * 1024 * 1024,
    backup_count: int = 5,
) -> None:
    """
    Universal logging setup for the FastAPI application.

    Args:
        log_file: Path to log file (creates directory if needed)
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        rotation_type: "size" for RotatingFileHandler, "time" for TimedRotatingFileHandler
    """
    log_dir = os.path.dirname(log_file)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

    level = getattr(logging, log_level.upper(), logging.INFO)
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove all existing handlers to prevent duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    try:
        file_handler: Handler
        if rotation_type and rotation_type.lower() in ("time", "timed"):
            file_handler = TimedRotatingFileHandler(
                filename=log_file,
                when=rotation_when or "midnight",
                interval=rotation_interval,
                backupCount=backup_count,
                encoding="utf-8",
            )
        else:
            file_handler = RotatingFileHandler(
                log_file,
                maxBytes=max_bytes,
                backupCount=backup_count,
                encoding="utf-8",
            )
        file_handler.setLevel(level)
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s [%(levelname)8s] %(name)s: %(message)s "
                "[%(filename)s:%(lineno)d in %(funcName)s()]"
            )
        )
        root_logger.addHandler(file_handler)
    except OSError as e:
        root_logger.warning("Could not setup file logging to %s: %s", log_file, e)

    # Console only shows warnings and errors
    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    root_logger.addHandler(console_handler)

    # Silence overly verbose loggers from dependencies
    for logger_name in ("sqlalchemy.engine", "sqlalchemy.pool", "aiosqlite", "uvicorn.access", "passlib"):
        logging.getLogger(logger_name).setLevel(logging.WARNING)

    root_logger.info(f"Universal logging initialized. Log file: {log_file}, Level: {log_level}")


class Settings(BaseSettings):
    """
    Application settings with automatic environment variable loading.

    ``JWT_SECRET`` has no default: a process started without it fails while
    loading settings.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # === CORE APPLICATION METADATA ===
    APP_NAME: str = "User Accounts"
    APP_VERSION: str = "1.0.0"
    APP_DESCRIPTION: str = "Registration, authentication and profile management for application users."
    DEBUG: bool = False
    TESTING: bool = False

    # Server configuration
    HOST: str = "127.0.0.1"
    PORT: int = 8000

    # === SECURITY ===
    JWT_SECRET: str
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    BCRYPT_ROUNDS: int = 10

    # Include raw failure details in 500 responses; unset follows DEBUG
    EXPOSE_ERROR_DETAILS: Optional[bool] = None

    # CORS and trusted hosts
    CORS_ORIGINS: StrList = ["http://localhost:3000", "http://localhost:8080"]
    ALLOWED_HOSTS: StrList = ["localhost", "127.0.0.1"]
    API_DOCS_URL: str = "/docs"
    API_REDOC_URL: str = "/redoc"

    # === DATABASE CONFIGURATION ===
    DATABASE_URL: str = "sqlite+aiosqlite:///./users.db"
    DB_ECHO: bool = False
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 20

    DB_TYPE: str = "sqlite"  # sqlite or postgres
    DB_USER: Optional[str] = None
    DB_PASSWORD: Optional[str] = None
    DB_HOST: Optional[str] = None
    DB_PORT: Optional[int] = None
    DB_NAME: Optional[str] = None
    DB_SSLMODE: Optional[str] = None

    # === LOGGING ===
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = "logs/user_service.log"
    LOG_ROTATION_TYPE: str = "size"
    LOG_ROTATION_WHEN: Optional[str] = None
    LOG_ROTATION_INTERVAL: int = 1
    LOG_MAX_SIZE: int = 10 * 1024 * 1024
    LOG_BACKUP_COUNT: int = 5

    @field_validator("JWT_SECRET")
    @classmethod
    def validate_jwt_secret(cls, v):
        if len(v) < 32:
            raise ValueError("JWT_SECRET must be at least 32 characters long")
        return v

    @field_validator("BCRYPT_ROUNDS")
    @classmethod
    def validate_bcrypt_rounds(cls, v):
        if not 4 <= v <= 31:
            raise ValueError("BCRYPT_ROUNDS must be between 4 and 31")
        return v

    @field_validator("CORS_ORIGINS", "ALLOWED_HOSTS", mode="before")
    @classmethod
    def parse_str_list(cls, v):
        if isinstance(v, str):
            if v.lstrip().startswith("["):
                return json.loads(v)
            return [item.strip() for item in v.split(",") if item.strip()]
        return v

    @model_validator(mode="after")
    def validate_database_config(self):
        """Auto-construct DATABASE_URL for PostgreSQL from the DB_* fields."""
        if self.DB_TYPE == "postgres" and not self.DATABASE_URL.startswith("postgresql"):
            if not all([self.DB_USER, self.DB_PASSWORD, self.DB_HOST, self.DB_NAME]):
                raise ValueError(
                    "For PostgreSQL, either provide DATABASE_URL or all of: "
                    "DB_USER, DB_PASSWORD, DB_HOST, DB_NAME"
                )
            port = self.DB_PORT or 5432
            self.DATABASE_URL = (
                f"postgresql+asyncpg://{self.DB_USER}:{self.DB_PASSWORD}@"
                f"{self.DB_HOST}:{port}/{self.DB_NAME}"
            )
            if self.DB_SSLMODE:
                self.DATABASE_URL += f"?ssl={self.DB_SSLMODE}"
        return self

    @property
    def expose_error_details(self) -> bool:
        if self.EXPOSE_ERROR_DETAILS is None:
            return self.DEBUG
        return self.EXPOSE_ERROR_DETAILS


class DevelopmentSettings(Settings):
    """Development environment settings."""
    DEBUG: bool = True
    LOG_LEVEL: str = "DEBUG"
    HOST: str = "0.0.0.0"
    CORS_ORIGINS: StrList = ["*"]
    ALLOWED_HOSTS: StrList = ["*"]


class ProductionSettings(Settings):
    """Production environment settings."""
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    BCRYPT_ROUNDS: int = 12


class TestingSettings(Settings):
    """Testing environment settings."""
    TESTING: bool = True
    DATABASE_URL: str = "sqlite+aiosqlite:///:memory:"
    BCRYPT_ROUNDS: int = 4
    ALLOWED_HOSTS: StrList = ["localhost", "127.0.0.1", "testserver"]


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings based on environment.
    Uses lru_cache to avoid recreating settings on every call.
    """
    env = os.getenv("FASTAPI_ENV", "development").lower()

    if env == "production":
        return ProductionSettings()
    if env == "testing":
        return TestingSettings()
    return DevelopmentSettings()
