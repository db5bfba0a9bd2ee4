"""Application configuration via Pydantic BaseSettings."""

from __future__ import annotations

from enum import Enum
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    development = "development"
    staging = "staging"
    production = "production"


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Environment
    ENVIRONMENT: Environment = Environment.development

    # Logging
    LOG_LEVEL: str = "INFO"

    # CORS
    CORS_ALLOWED_ORIGINS: str = "*"

    # Monitoring
    SENTRY_DSN: str = ""

    # Audit trail actor used when a request carries no X-User-Id header
    AUDIT_DEFAULT_USER_ID: str = "hr-manager-1"
    AUDIT_DEFAULT_USER_NAME: str = "HR Manager"

    # Analytics
    FORECAST_MONTHS: int = 12

    # App builder
    POPULAR_TEMPLATES_LIMIT: int = 10
    GENERATION_DELAY_SECONDS: float = 1.0
    DEFAULT_UI_LIBRARY: str = "tailwind"
    DEFAULT_GENERATION_TYPE: str = "full-stack"

    def cors_origins(self) -> list[str]:
        """Split CORS_ALLOWED_ORIGINS into a list ("*" stays a wildcard)."""
        if self.CORS_ALLOWED_ORIGINS == "*":
            return ["*"]
        return [o.strip() for o in self.CORS_ALLOWED_ORIGINS.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    """Singleton settings instance."""
    return Settings()
