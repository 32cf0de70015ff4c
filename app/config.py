"""
Application configuration using Pydantic settings.

This module contains all configuration settings for the application,
loaded from environment variables with sensible defaults.
"""

import os
import secrets
from pathlib import Path
from typing import List, Optional, Union

from pydantic import Field, field_validator, ValidationInfo, ConfigDict
from pydantic_settings import BaseSettings


DEFAULT_WEATHER_DATA_FILE = str(Path(__file__).parent / "data" / "weather-data.json")


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden with environment variables.
    """

    # API Configuration
    API_PREFIX: str = "/api"
    SERVER_NAME: str = "Weather Forecast API"
    DEBUG: bool = True

    # JWT Configuration
    SECRET_KEY: str = Field(
        default_factory=lambda: os.getenv("SECRET_KEY") or secrets.token_urlsafe(32),
        description="Secret key for JWT signing. MUST be set via SECRET_KEY environment variable in production!"
    )
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    JWT_ISSUER: str = "WeatherForecast.Api"
    JWT_AUDIENCE: str = "WeatherForecast.Client"

    # bcrypt work factor
    PASSWORD_HASH_ROUNDS: int = 12

    # CORS Configuration
    # Note: Using Union[str, List] to avoid pydantic-settings 2.6+ JSON parsing issues
    BACKEND_CORS_ORIGINS: Union[str, List[str]] = "http://localhost:3000,http://localhost:8080,http://localhost:5173"

    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    @classmethod
    def assemble_cors_origins(
        cls, v: Union[str, List[str]]
    ) -> List[str]:
        """
        Parse CORS origins from environment variable.

        Supports:
        - Comma-separated string: "http://localhost,http://example.com"
        - Already parsed list: ["http://localhost"]
        - Empty string: returns empty list
        """
        if v is None or v == "":
            return []
        if isinstance(v, str):
            return [i.strip() for i in v.split(",") if i.strip()]
        elif isinstance(v, list):
            return v
        raise ValueError(f"Invalid CORS origins format: {v}")

    # Database Configuration
    POSTGRES_SERVER: str = "localhost"
    POSTGRES_USER: str = "weather_user"
    POSTGRES_PASSWORD: str = "weather_password"
    POSTGRES_DB: str = "weather_forecast.db"
    POSTGRES_PORT: int = 5432

    SQLALCHEMY_DATABASE_URI: Optional[str] = None

    # Create tables at startup instead of relying on `alembic upgrade head`
    DB_AUTO_CREATE: bool = True

    @field_validator("SQLALCHEMY_DATABASE_URI", mode="before")
    @classmethod
    def assemble_db_connection(cls, v: Optional[str], info: ValidationInfo) -> str:
        """Assemble database connection string from individual components."""
        if isinstance(v, str) and v:
            return v

        # Check for DATABASE_URL (Render/Railway/Heroku style)
        database_url = os.getenv('DATABASE_URL')
        if database_url:
            if database_url.startswith('postgres://'):
                database_url = database_url.replace('postgres://', 'postgresql+asyncpg://', 1)
            elif database_url.startswith('postgresql://'):
                database_url = database_url.replace('postgresql://', 'postgresql+asyncpg://', 1)
            return database_url

        values = info.data
        db_name = values.get('POSTGRES_DB')

        # Check if it's a SQLite database (ends with .db)
        if db_name and db_name.endswith('.db'):
            return f"sqlite+aiosqlite:///{db_name}"

        return (
            f"postgresql+asyncpg://{values.get('POSTGRES_USER')}:"
            f"{values.get('POSTGRES_PASSWORD')}@"
            f"{values.get('POSTGRES_SERVER')}:"
            f"{values.get('POSTGRES_PORT')}/"
            f"{db_name}"
        )

    # Redis Configuration (only used when CACHE_PROVIDER == "redis")
    REDIS_HOST: str = "localhost"
    REDIS_PORT: int = 6379
    REDIS_PASSWORD: Optional[str] = None
    REDIS_DB: int = 0

    @property
    def redis_url(self) -> str:
        """Redis connection URL built from the REDIS_* settings."""
        if self.REDIS_PASSWORD:
            return f"redis://:{self.REDIS_PASSWORD}@{self.REDIS_HOST}:{self.REDIS_PORT}/{self.REDIS_DB}"
        return f"redis://{self.REDIS_HOST}:{self.REDIS_PORT}/{self.REDIS_DB}"

    # Weather cache
    CACHE_PROVIDER: str = "memory"  # "memory" or "redis"
    WEATHER_CACHE_TTL_MINUTES: int = 30
    REDIS_CACHE_TTL_MINUTES: int = 60

    @field_validator("CACHE_PROVIDER", mode="before")
    @classmethod
    def normalize_cache_provider(cls, v: str) -> str:
        """Accept the provider name in any case."""
        provider = (v or "memory").strip().lower()
        if provider not in ("memory", "redis"):
            raise ValueError(f"Unsupported cache provider: {v}")
        return provider

    # Weather data source
    WEATHER_DATA_FILE: str = DEFAULT_WEATHER_DATA_FILE

    # Account lockout
    MAX_FAILED_LOGIN_ATTEMPTS: int = 5
    ACCOUNT_LOCKOUT_DURATION_MINUTES: int = 15

    # Rate Limiting
    RATE_LIMIT_ENABLED: bool = True
    AUTH_RATE_LIMIT_PER_MINUTE: int = 5
    WEATHER_RATE_LIMIT_PER_MINUTE: int = 10

    # Localization
    DEFAULT_LANGUAGE: str = "en"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_TO_FILE: bool = True

    model_config = ConfigDict(
        env_file=".env",
        case_sensitive=True,
    )


# Create global settings instance
settings = Settings()
