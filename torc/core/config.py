"""
Application Configuration Module

Centralizes all configuration using environment variables with Pydantic Settings.
Every value can be overridden via environment variables or a local .env file.

The data directory holds the durable state of the service:

    <data_directory>/
        Sessions/               one sub-directory per session
            <session>/order-<orderId>.json
        popular.json            global drink popularity counts

Usage:
    from torc.core.config import get_settings

    settings = get_settings()
    store = SessionStore(settings.sessions_root)

Version: 1.0.0
"""

import logging
import sys
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        debug: Enable verbose logging and error details

        # Servers
        api_host / api_port: Bind address of the public ordering API
        admin_host / admin_port: Bind address of the admin API

        # Storage
        data_directory: Root directory for all durable state
        sessions_dirname: Name of the sessions folder inside data_directory
        popular_filename: Name of the popularity record inside data_directory
        menu_file: Path of the plain-text menu (one drink per line)
        popularity_lock_timeout: Seconds to wait for the popularity file lock
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ==========================================================================
    # APPLICATION
    # ==========================================================================

    app_name: str = Field(
        default="Torc Drink Orders",
        description="Application display name"
    )
    app_version: str = Field(
        default="1.0.0",
        description="Application version"
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode with verbose logging"
    )

    # ==========================================================================
    # SERVERS
    # ==========================================================================

    api_host: str = Field(
        default="0.0.0.0",
        description="Public API server host"
    )
    api_port: int = Field(
        default=8080,
        description="Public API server port"
    )
    admin_host: str = Field(
        default="0.0.0.0",
        description="Admin API server host"
    )
    admin_port: int = Field(
        default=9090,
        description="Admin API server port"
    )

    # ==========================================================================
    # FILE STORAGE
    # ==========================================================================

    data_directory: str = Field(
        default=".",
        description="Directory for durable data files"
    )
    sessions_dirname: str = Field(
        default="Sessions",
        description="Folder holding one sub-folder per session"
    )
    popular_filename: str = Field(
        default="popular.json",
        description="Popularity record filename"
    )
    menu_file: str = Field(
        default="menu.txt",
        description="Plain-text menu, one drink per line"
    )
    popularity_lock_timeout: float = Field(
        default=10.0,
        description="Seconds to wait for the popularity file lock"
    )

    # ==========================================================================
    # VALIDATORS
    # ==========================================================================

    @field_validator("api_port", "admin_port")
    @classmethod
    def validate_port(cls, v: int) -> int:
        if not 1 <= v <= 65535:
            raise ValueError("Port must be between 1 and 65535")
        return v

    @field_validator("popularity_lock_timeout")
    @classmethod
    def validate_lock_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("popularity_lock_timeout must be positive")
        return v

    # ==========================================================================
    # COMPUTED PROPERTIES
    # ==========================================================================

    @property
    def data_path(self) -> Path:
        return Path(self.data_directory)

    @property
    def sessions_root(self) -> Path:
        """Directory containing one sub-directory per session."""
        return self.data_path / self.sessions_dirname

    @property
    def popular_path(self) -> Path:
        """Location of the global popularity record."""
        return self.data_path / self.popular_filename

    @property
    def menu_path(self) -> Path:
        return Path(self.menu_file)


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    Settings are loaded once per process so every component sees the
    same data directory. Call ``get_settings.cache_clear()`` after
    changing the environment (tests do this).

    Returns:
        Settings: Configured application settings
    """
    return Settings()


# =============================================================================
# LOGGING CONFIGURATION
# =============================================================================

def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """
    Configure application-wide logging.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)

    Returns:
        Configured package logger
    """
    settings = get_settings()

    if settings.debug:
        level = logging.DEBUG

    log_format = "%(asctime)s │ %(levelname)-8s │ %(name)-25s │ %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"

    logging.basicConfig(
        level=level,
        format=log_format,
        datefmt=date_format,
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    # Reduce noise from third-party libraries
    logging.getLogger("filelock").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    return logging.getLogger("torc")
