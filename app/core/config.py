"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Required fields (e.g. SECRET_KEY) are validated at
load time.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    All settings are optional with defaults except those validated in
    validate_required (secret_key, database_url).
    """

    # App
    app_name: str = "hotel-directory"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # Database: any SQLAlchemy async URL (postgresql+asyncpg in production)
    database_url: str = "sqlite+aiosqlite:///./directory.db"
    database_echo: bool = False
    # Optional pool/driver overrides (None = use defaults in database.py; Postgres only)
    db_pool_size: int | None = None
    db_max_overflow: int | None = None
    db_command_timeout: int | None = None

    # Security
    secret_key: SecretStr = SecretStr("")
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 480  # 8 hours

    # CORS
    allowed_origins: str = "http://localhost:3000,http://localhost:8080"

    # Audit: device descriptor header and background writer
    device_mac_header: str = "X-Device-MAC"
    audit_queue_max_size: int = 10_000
    audit_shutdown_timeout_seconds: float = 10.0
    audit_page_size_default: int = 25
    audit_page_size_max: int = 100

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_required(self) -> "Settings":
        """Validate required env.

        - DATABASE_URL must be set.
        - SECRET_KEY must be set (JWT verification).
        """
        if not self.database_url:
            raise ValueError(
                "DATABASE_URL is required. Set in environment or .env file."
            )
        if not self.secret_key.get_secret_value():
            raise ValueError(
                "SECRET_KEY is required. Generate with: openssl rand -hex 32."
            )
        if self.audit_page_size_default > self.audit_page_size_max:
            raise ValueError(
                "AUDIT_PAGE_SIZE_DEFAULT must not exceed AUDIT_PAGE_SIZE_MAX."
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
