"""
Stowage Configuration

Configuration management with environment variable support.
Implements validated defaults for Redis connections, cache groups and logging.
"""

from functools import lru_cache

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    """Toolkit settings with validation and defaults."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=True, extra="ignore"
    )

    # Environment settings
    ENVIRONMENT: str = Field(
        default="development", description="Runtime environment"
    )
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")

    # Redis configuration
    REDIS_URL: str = Field(
        default="redis://localhost:6379/0", description="Redis connection URL"
    )
    REDIS_MAX_CONNECTIONS: int = Field(
        default=10, ge=1, le=100, description="Redis connection pool size"
    )
    REDIS_CONNECTION_TIMEOUT: float = Field(
        default=10.0, gt=0, le=120, description="Socket connect timeout in seconds"
    )
    REDIS_OPERATION_TIMEOUT: float = Field(
        default=10.0, gt=0, le=120, description="Socket read/write timeout in seconds"
    )
    REDIS_HEALTH_CHECK_INTERVAL: int = Field(
        default=30, ge=0, le=3600, description="Connection health check interval"
    )

    # Cache configuration
    CACHE_ROOT_GROUP: str = Field(
        default="@global", description="Root group every cache key is scoped to"
    )
    CACHE_SCAN_COUNT: int = Field(
        default=1000,
        ge=10,
        le=100000,
        description="COUNT hint passed to SCAN while clearing a group",
    )

    # Event bus configuration
    EVENT_BUS_ROOT_GROUP: str = Field(
        default="@global", description="Root group every event channel is scoped to"
    )

    @field_validator("ENVIRONMENT")
    @classmethod
    def validate_environment(cls, v):
        """Validate environment value."""
        allowed = ["development", "test", "staging", "production"]
        if v not in allowed:
            raise ValueError(f"ENVIRONMENT must be one of: {allowed}")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        allowed = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in allowed:
            raise ValueError(f"LOG_LEVEL must be one of: {allowed}")
        return v.upper()

    @field_validator("REDIS_URL")
    @classmethod
    def validate_redis_url(cls, v):
        """Validate Redis URL scheme."""
        if not v.startswith(("redis://", "rediss://", "unix://")):
            raise ValueError("REDIS_URL must be a redis://, rediss:// or unix:// URL")
        return v

    @field_validator("CACHE_ROOT_GROUP", "EVENT_BUS_ROOT_GROUP")
    @classmethod
    def validate_root_group(cls, v):
        """Root groups must contain at least one non-delimiter character."""
        if not v.strip("/"):
            raise ValueError("Root group cannot be empty")
        return v

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
