"""Application configuration via environment variables."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment variables or .env file."""
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Application
    app_name: str = "Life in Weeks"
    debug: bool = False
    secret_key: str = "change-me-in-production"  # Also signs attachment URLs

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    allowed_origins: str = "*"  # Comma-separated origins, or "*" for all

    # Database
    database_url: str = "sqlite:///./lifeweeks.db"

    # Blob storage
    storage_dir: Path = Path("./storage")
    signed_url_ttl_seconds: int = 3600
    max_upload_bytes: int = 50 * 1024 * 1024

    # Timeline
    expected_lifespan_years: int = 80
    look_ahead_weeks: int = 520

    # Identity: header set by the upstream auth proxy
    user_header: str = "X-User-Id"

    # Anniversary reminders
    anniversary_check_hour: int = 8

    # Logging
    log_dir: Path = Path.home() / ".logs" / "lifeweeks"


settings = Settings()
