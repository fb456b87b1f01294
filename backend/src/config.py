"""Application configuration via environment variables.

Provides type-safe settings loading using pydantic-settings.
Environment variables can be loaded from a .env file.

Secrets used by the auth module (JWT_SECRET, JWT_EXPIRY_MINUTES,
PASSWORD_PEPPER) are read from the environment at call time by
auth.jwt / auth.password so tests can override them per test.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Environment Variables:
        DATABASE_URL: SQLAlchemy database URL (SQLite file by default, PostgreSQL in production)
        DB_ECHO: Log all SQL statements (default False)
        ENVIRONMENT: development | production
        LOG_LEVEL: Logging level (default INFO)
        LOG_JSON: Emit JSON log lines (default True)
        CORS_ORIGINS: Comma-separated list of allowed origins
    """

    # Database
    DATABASE_URL: str = "sqlite:///./bakery.db"
    DB_ECHO: bool = False

    # Application
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:8080"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @property
    def cors_origins(self) -> list[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance.

    Call get_settings.cache_clear() to reload settings.
    """
    return Settings()


# Module-level settings instance
settings = get_settings()
