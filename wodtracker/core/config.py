"""Application configuration from environment variables."""

from functools import lru_cache
from urllib.parse import quote_plus

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment (and .env file)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App
    app_name: str = "WOD Tracker API"
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"

    # API
    api_prefix: str = "/api"

    # Database (PostgreSQL)
    database_host: str = "localhost"
    database_port: int = 5432
    database_user: str = "postgres"
    database_password: str = ""  # Set in .env - never commit
    database_name: str = "entrenamiento"
    database_ssl_mode: str = "prefer"
    # Full async URL (e.g. sqlite+aiosqlite:///./dev.db); takes precedence when set
    database_url_override: str = ""

    # Pool: the hosting quota allows a single live connection
    database_pool_size: int = 1
    database_max_overflow: int = 0
    database_pool_timeout: float = 30.0

    # Retry on connection exhaustion: attempts, first delay (doubles each retry)
    db_retry_attempts: int = 3
    db_retry_initial_delay: float = 1.0

    # Domain defaults
    demo_user_id: int = 1
    benchmark_wod_category_id: int = 7

    # CORS: comma-separated list of allowed origins in production
    cors_origins: str = ""

    def _build_db_url(self, scheme: str = "postgresql", query: str = "") -> str:
        user = quote_plus(self.database_user)
        password = quote_plus(self.database_password)
        url = (
            f"{scheme}://{user}:{password}@{self.database_host}:{self.database_port}"
            f"/{self.database_name}"
        )
        return f"{url}?{query}" if query else url

    @property
    def database_url(self) -> str:
        """Synchronous URL for Alembic and tooling."""
        return self._build_db_url(scheme="postgresql", query=f"sslmode={self.database_ssl_mode}")

    @property
    def async_database_url(self) -> str:
        """Async URL for FastAPI (asyncpg driver unless overridden)."""
        if self.database_url_override:
            return self.database_url_override
        return self._build_db_url(scheme="postgresql+asyncpg")


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance."""
    return Settings()
