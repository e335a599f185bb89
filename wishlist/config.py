"""
Configuration settings for the wishlist service.

Values come from environment variables, optionally via a ``.env`` file in
the repository root.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_REPO_ROOT = Path(__file__).resolve().parents[1]
load_dotenv(_REPO_ROOT / ".env")


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Application
    APP_NAME: str = "Wishlist"
    LOG_LEVEL: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    # Paths
    DATABASE_PATH: Path = Field(
        default=_REPO_ROOT / "data" / "wishlist.db",
        validation_alias="DATABASE_PATH",
    )
    STATIC_DIR: Path = Field(default=_REPO_ROOT / "static", validation_alias="STATIC_DIR")

    # Server
    API_HOST: str = Field(default="0.0.0.0", validation_alias="API_HOST")
    API_PORT: int = Field(default=5000, validation_alias="API_PORT")
    CERT_FILE: Optional[Path] = Field(default=None, validation_alias="CERT_FILE")
    KEY_FILE: Optional[Path] = Field(default=None, validation_alias="KEY_FILE")

    # Authentication
    SESSION_EXPIRE_SECONDS: int = Field(default=7 * 24 * 3600, validation_alias="SESSION_EXPIRE_SECONDS")
    TOKEN_EXPIRE_SECONDS: int = Field(default=15 * 60, validation_alias="TOKEN_EXPIRE_SECONDS")

    # Long-poll events
    EVENTS_TIMEOUT_SECONDS: int = Field(default=30, validation_alias="EVENTS_TIMEOUT_SECONDS")
    EVENT_HISTORY_SIZE: int = Field(default=100, validation_alias="EVENT_HISTORY_SIZE")

    @property
    def tls_enabled(self) -> bool:
        return self.CERT_FILE is not None and self.KEY_FILE is not None


# Global settings instance
settings = Settings()


def get_db_path() -> Path:
    return settings.DATABASE_PATH


def configure_logging(level: Optional[str] = None) -> None:
    """Set up root logging once for scripts and the server."""
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
