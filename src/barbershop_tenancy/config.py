"""Library configuration using pydantic-settings."""

from functools import lru_cache

from pydantic import RedisDsn, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from barbershop_tenancy.core.constants import (
    APPOINTMENT_CACHE_TTL_SECONDS,
    BARBER_CACHE_TTL_SECONDS,
    COMMENT_CACHE_TTL_SECONDS,
    DEFAULT_TENANT_CACHE_TTL_SECONDS,
    SERVICE_CACHE_TTL_SECONDS,
)


class Settings(BaseSettings):
    """Settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Barbershop Tenancy"
    environment: str = "development"  # development, staging, production

    # Backend API
    api_base_url: str = "http://localhost:3001/api"
    api_timeout_seconds: float = 10.0

    # Durable storage
    cache_backend: str = "memory"  # memory, redis
    redis_url: RedisDsn = RedisDsn("redis://localhost:6379")

    # Cache TTLs
    tenant_cache_ttl_seconds: float = DEFAULT_TENANT_CACHE_TTL_SECONDS
    appointment_cache_ttl_seconds: float = APPOINTMENT_CACHE_TTL_SECONDS
    barber_cache_ttl_seconds: float = BARBER_CACHE_TTL_SECONDS
    comment_cache_ttl_seconds: float = COMMENT_CACHE_TTL_SECONDS
    service_cache_ttl_seconds: float = SERVICE_CACHE_TTL_SECONDS

    # Routing
    public_paths: list[str] = [
        "/",
        "/showcase",
        "/about",
        "/services",
        "/contacts",
        "/login",
        "/register-barbershop",
        "/verify-email",
    ]
    reserved_path_segments: list[str] = [
        "about",
        "services",
        "contacts",
        "login",
        "register-barbershop",
        "verify-email",
        "showcase",
        "dashboard",
        "agenda",
        "analytics",
        "trocar-senha",
        "register",
        "gerenciar-comentarios",
        "servicos",
        "gerenciar-horarios",
    ]

    # Observability
    log_level: str = "INFO"

    @field_validator("cache_backend")
    @classmethod
    def validate_cache_backend(cls, v: str) -> str:
        """Only the memory and redis backends exist."""
        v = v.lower()
        if v not in ("memory", "redis"):
            raise ValueError("CACHE_BACKEND must be 'memory' or 'redis'")
        return v

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
