"""
Application settings loaded from environment variables.
Uses pydantic-settings for type-safe configuration.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with defaults for development."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database
    database_url: str = "sqlite:///./costing.db"
    # Echo SQL statements (development only)
    database_echo: bool = False

    # Redis
    redis_url: str = "redis://localhost:6379"
    redis_pool_max_connections: int = 20
    redis_socket_timeout: int = 5  # Socket timeout in seconds (connect and read/write)

    # Price cache
    # "redis" shares cached prices between workers, "memory" keeps them per process
    price_cache_backend: str = "redis"
    # Cached latest prices may be stale by up to this many seconds
    price_cache_ttl_seconds: int = 300

    # Audit: actor recorded when the caller does not identify itself
    system_user_id: str = "00000000-0000-0000-0000-000000000000"

    # Server
    rest_api_port: int = 8000

    # Environment
    environment: str = "development"
    debug: bool = True

    def validate_production_settings(self) -> list[str]:
        """
        Validate that the configuration is safe for production.
        Returns a list of validation errors. Empty list means all checks pass.
        """
        errors = []

        if self.price_cache_backend not in ("redis", "memory"):
            errors.append(
                f"PRICE_CACHE_BACKEND must be 'redis' or 'memory', got '{self.price_cache_backend}'"
            )

        if self.price_cache_ttl_seconds <= 0:
            errors.append("PRICE_CACHE_TTL_SECONDS must be greater than zero")

        if self.environment == "production":
            if self.debug:
                errors.append("DEBUG must be False in production")

            # Per-process caches diverge between workers
            if self.price_cache_backend == "memory":
                errors.append("PRICE_CACHE_BACKEND must be 'redis' in production")

            if self.database_url.startswith("sqlite"):
                errors.append("DATABASE_URL must not point to SQLite in production")

        return errors


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Convenience exports
settings = get_settings()

# Direct access to commonly used settings
DATABASE_URL = settings.database_url
REDIS_URL = settings.redis_url
