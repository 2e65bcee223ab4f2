"""Application configuration using Pydantic Settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SESSION_SECRET = "change-me-in-production"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ============== Environment ==============
    environment: Literal["development", "staging", "production", "test"] = "development"

    # ============== Database ==============
    # No URL means the store starts in the unavailable state.
    database_url: str | None = None
    db_echo: bool = False
    db_pool_size: int = Field(default=5, ge=1, le=100)
    db_max_overflow: int = Field(default=10, ge=0, le=100)
    db_pool_timeout: float = Field(default=10.0, gt=0)
    db_command_timeout: float = Field(default=30.0, gt=0)

    @property
    def db_url_sync(self) -> str | None:
        """Synchronous database URL for Alembic migrations."""
        if not self.database_url:
            return None
        return self.database_url.replace("postgresql+asyncpg://", "postgresql://")

    # ============== API ==============
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    cors_origins_str: str = Field(default="http://localhost:3000,http://localhost:8000", alias="cors_origins")

    @property
    def cors_origins(self) -> list[str]:
        """Parse CORS origins from comma-separated string."""
        return [origin.strip() for origin in self.cors_origins_str.split(",") if origin.strip()]

    # ============== Session ==============
    session_cookie_name: str = "app_session_id"
    session_secret: str = Field(default=DEFAULT_SESSION_SECRET, min_length=8)

    # ============== Logging ==============
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "console"] = "console"

    @model_validator(mode="after")
    def _require_session_secret_in_production(self) -> "Settings":
        if self.environment == "production" and self.session_secret == DEFAULT_SESSION_SECRET:
            raise ValueError("SESSION_SECRET must be set in production")
        return self

    # ============== Computed Properties ==============
    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
