# backend/app/config.py

"""
Application settings loaded from environment variables (or a .env file).

Usage:
    from app.config import settings

    db_path = settings.DB_PATH
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Folder containing this file (backend/app)
APP_DIR = Path(__file__).resolve().parent


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application Metadata
    APP_NAME: str = Field(default="Queensland Criminal Records API")
    APP_VERSION: str = Field(default="0.1.0")

    # Database Configuration
    DB_PATH: str = Field(default=str(APP_DIR / "offences.sqlite"))

    # Authentication
    # The default is a placeholder kept for local use; set JWT_SECRET (32+ bytes) everywhere else
    JWT_SECRET: str = Field(default="secretkey")
    JWT_ALGORITHM: str = Field(default="HS256")
    JWT_EXPIRES_IN: int = Field(default=86400)
    BCRYPT_ROUNDS: int = Field(default=12, ge=4, le=31)

    # HTTP
    CORS_ORIGINS: list[str] = Field(default=["*"])
    API_HOST: str = Field(default="0.0.0.0")
    API_PORT: int = Field(default=4000)

    # Logging Configuration
    LOG_LEVEL: str = Field(default="INFO")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
