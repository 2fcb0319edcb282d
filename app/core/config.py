"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Search tuning (TTLs, limits, adapter timeout) lives
here so the aggregator and cache layers never hard-code them.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    Every field has a default so the app can be imported without a database;
    DATABASE_URL is only required once a session is actually requested
    (see app.infrastructure.persistence.database).
    """

    # App
    app_name: str = "practice-search"
    app_version: str = "1.0.0"
    debug: bool = False

    # Database (PostgreSQL with full-text search; asyncpg driver)
    database_url: str = ""
    database_echo: bool = False
    # Optional pool/driver overrides (None = use defaults in database.py)
    db_pool_size: int | None = None
    db_max_overflow: int | None = None
    db_command_timeout: int | None = None

    # CORS
    allowed_origins: str = "http://localhost:3000,http://localhost:8080"

    # Request / middleware
    request_timeout_seconds: int = 60
    request_id_header: str = "X-Request-ID"

    # Redis Cache
    redis_enabled: bool = True
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0
    redis_password: SecretStr | None = None

    # Search
    search_results_cache_ttl: int = 300
    search_suggestions_cache_ttl: int = 3600
    search_popular_terms_cache_ttl: int = 3600
    search_stats_cache_ttl: int = 3600
    search_default_limit: int = 50
    search_max_limit: int = 100
    search_adapter_timeout_seconds: float = 2.0
    search_adapter_retries: int = 1
    popular_terms_window_days: int = 30

    # OpenTelemetry
    telemetry_enabled: bool = False
    telemetry_exporter: str = "console"
    telemetry_otlp_endpoint: str | None = None
    telemetry_sample_rate: float = 1.0
    telemetry_environment: str = "development"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_search_bounds(self) -> "Settings":
        """Validate search limits and timeouts.

        - SEARCH_MAX_LIMIT must be positive and not below SEARCH_DEFAULT_LIMIT.
        - SEARCH_ADAPTER_TIMEOUT_SECONDS must be positive.
        - SEARCH_ADAPTER_RETRIES must be 0 or more.
        """
        if self.search_max_limit < 1:
            raise ValueError("SEARCH_MAX_LIMIT must be at least 1")
        if not 1 <= self.search_default_limit <= self.search_max_limit:
            raise ValueError(
                "SEARCH_DEFAULT_LIMIT must be between 1 and SEARCH_MAX_LIMIT "
                f"({self.search_max_limit}), got {self.search_default_limit}"
            )
        if self.search_adapter_timeout_seconds <= 0:
            raise ValueError("SEARCH_ADAPTER_TIMEOUT_SECONDS must be positive")
        if self.search_adapter_retries < 0:
            raise ValueError("SEARCH_ADAPTER_RETRIES must not be negative")
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
