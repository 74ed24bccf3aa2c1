"""Application configuration."""
from pathlib import Path
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings.

    Environment variables take precedence over .env file.
    This makes it compatible with Docker (uses env vars) and
    local development (uses .env file).
    """

    APP_NAME: str = "Storefront Admin"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False

    # Database
    DATABASE_URL: str = "sqlite:///./storefront.db"

    # Object storage
    STORAGE_ROOT: str = "./storage"
    STORAGE_BUCKET: str = "media"
    STORAGE_PUBLIC_URL: str = "/api/storage/object"
    SIGNING_SECRET: str = "your-signing-secret-change-in-production"
    SIGNED_URL_DEFAULT_TTL: int = 3600
    UPLOAD_MAX_BYTES: int = 5 * 1024 * 1024

    # Forward database error messages to API clients
    EXPOSE_BACKEND_ERRORS: bool = True

    # Base URL used by the settings HTTP client
    API_URL: str = "http://localhost:8000"

    CORS_ORIGINS: List[str] = ["*"]

    model_config = SettingsConfigDict(
        # Only load .env file if it exists (for local dev)
        # Docker will use environment variables directly
        env_file=".env" if Path(".env").exists() else None,
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()
