"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Values are validated at load time.
"""

from functools import lru_cache

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    Everything has a default except database_url, which is only required
    once a session is actually requested (see persistence.database).
    """

    # App
    app_name: str = "changetrack"
    app_version: str = "1.0.0"
    debug: bool = False

    # Database
    database_url: str = ""
    database_echo: bool = False
    db_pool_size: int | None = None
    db_max_overflow: int | None = None

    # CORS
    allowed_origins: str = "http://localhost:3000,http://localhost:8080"

    # Document storage
    storage_root: str = "/var/changetrack/documents"
    document_url_base: str = "http://localhost:8000/documents/"

    # Display formatting (tenant override lives in organization.date_format)
    default_date_format: str = "MM/DD/YYYY"

    # Audit listing pagination
    default_page_size: int = 10
    max_page_size: int = 100

    # Event dispatcher
    dispatcher_queue_size: int = 1000
    dispatcher_drain_timeout_seconds: float = 10.0

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_limits(self) -> "Settings":
        """Reject pagination and queue settings that cannot work."""
        if self.default_page_size < 1:
            raise ValueError("DEFAULT_PAGE_SIZE must be at least 1")
        if self.max_page_size < self.default_page_size:
            raise ValueError(
                "MAX_PAGE_SIZE must be greater than or equal to DEFAULT_PAGE_SIZE"
            )
        if self.dispatcher_queue_size < 1:
            raise ValueError("DISPATCHER_QUEUE_SIZE must be at least 1")
        if not self.storage_root:
            raise ValueError("STORAGE_ROOT is required for document storage")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    In tests, call get_settings.cache_clear() before overriding env vars so
    the next get_settings() uses the new values.
    """
    return Settings()
