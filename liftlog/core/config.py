"""Application configuration from environment variables."""

import uuid
from functools import lru_cache
from urllib.parse import quote_plus

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from liftlog.core.constants import (
    DEFAULT_HISTORY_LOOKBACK,
    DEFAULT_WARMUP_LOAD_PERCENTAGES,
    DEFAULT_WARMUP_REPS_PER_SET,
    DEFAULT_WARMUP_SETS,
    DEFAULT_WORKING_LOAD_KG,
)


class Settings(BaseSettings):
    """Settings loaded from environment (and .env file)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App
    app_name: str = "Liftlog API"
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"

    # API
    api_v1_prefix: str = "/api/v1"

    # Database (PostgreSQL)
    database_host: str = "localhost"
    database_port: int = 5432
    database_user: str = "liftlog"
    database_password: str = ""  # Set in .env - never commit
    database_name: str = "liftlog"
    database_ssl_mode: str = "prefer"

    # Pool (production tuning)
    database_pool_size: int = 5
    database_max_overflow: int = 10

    # CORS: comma-separated list of allowed origins in production
    cors_origins: str = ""

    # Identity is issued upstream; requests without X-User-Id act as this user
    default_user_id: uuid.UUID = uuid.UUID("00000000-0000-0000-0000-000000000001")

    # Warmup curve (index-aligned: percentage i is performed for reps i)
    warmup_load_percentages: list[float] = Field(
        default_factory=lambda: list(DEFAULT_WARMUP_LOAD_PERCENTAGES)
    )
    warmup_reps_per_set: list[int] = Field(default_factory=lambda: list(DEFAULT_WARMUP_REPS_PER_SET))
    warmup_default_working_load: float = DEFAULT_WORKING_LOAD_KG
    default_warmup_sets: int = Field(default=DEFAULT_WARMUP_SETS, ge=0)

    # History attached to each exercise in the session detail view
    history_lookback: int = Field(default=DEFAULT_HISTORY_LOOKBACK, ge=1)

    @model_validator(mode="after")
    def _check_warmup_curve(self) -> "Settings":
        if len(self.warmup_load_percentages) != len(self.warmup_reps_per_set):
            raise ValueError("warmup_load_percentages and warmup_reps_per_set must have the same length")
        return self

    def _build_db_url(self, scheme: str = "postgresql", ssl_query: str = "sslmode=prefer") -> str:
        user = quote_plus(self.database_user)
        password = quote_plus(self.database_password)
        return (
            f"{scheme}://{user}:{password}@{self.database_host}:{self.database_port}"
            f"/{self.database_name}?{ssl_query}"
        )

    @property
    def database_url(self) -> str:
        """Synchronous URL for Alembic and tooling."""
        return self._build_db_url(scheme="postgresql", ssl_query=f"sslmode={self.database_ssl_mode}")

    @property
    def async_database_url(self) -> str:
        """Async URL for FastAPI (asyncpg driver)."""
        return self._build_db_url(scheme="postgresql+asyncpg", ssl_query=f"ssl={self.database_ssl_mode}")


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance."""
    return Settings()
