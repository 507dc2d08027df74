"""
app/core/config.py

Purpose: Application configuration

- Loads environment variables
- Centralizes config values (todo API location, id guard, etc.)
- Validates configuration on startup
- Environment-specific settings
"""

from pydantic import Field, validator
from pydantic_settings import BaseSettings
from typing import Optional, Literal


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    Validates all required configs on startup.
    """

    # Environment
    ENVIRONMENT: Literal["development", "staging", "production"] = "development"

    # Remote todo API
    TODO_API_BASE_URL: str = Field(
        default="https://jsonplaceholder.typicode.com",
        description="Base URL of the remote users/todos REST API"
    )
    TODO_API_TIMEOUT: Optional[float] = Field(
        default=None,
        description="Request timeout in seconds (unset means wait indefinitely)"
    )
    TODO_API_MAX_TODO_ID: int = Field(
        default=200,
        description="Highest todo id the remote API actually stores"
    )
    TODO_API_DELETE_RESOURCE: str = Field(
        default="posts",
        description="Resource name used in DELETE /{resource}/{id}"
    )

    # Connectivity
    OFFLINE_MODE: bool = Field(
        default=False,
        description="Start with network connectivity marked as unavailable"
    )

    # Application
    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    API_PREFIX: str = Field(
        default="/api/v1",
        description="JSON API route prefix"
    )
    CORS_ORIGINS: list = Field(
        default=["*"],
        description="Allowed CORS origins"
    )

    @validator("TODO_API_BASE_URL")
    def strip_trailing_slash(cls, v):
        """Paths are joined as '{base}/{resource}'."""
        return v.rstrip("/")

    @validator("TODO_API_MAX_TODO_ID")
    def validate_max_todo_id(cls, v):
        if v < 1:
            raise ValueError("TODO_API_MAX_TODO_ID must be a positive integer")
        return v

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"

    class Config:
        env_file = ".env"
        case_sensitive = True
        env_file_encoding = "utf-8"


# Global settings instance
settings = Settings()


def validate_settings():
    """
    Validates critical settings on application startup.
    Raises ValueError if any required setting is missing or invalid.
    """
    errors = []

    if not settings.TODO_API_BASE_URL:
        errors.append("TODO_API_BASE_URL is required")
    elif not settings.TODO_API_BASE_URL.startswith(("http://", "https://")):
        errors.append("TODO_API_BASE_URL must be an http(s) URL")

    if not settings.TODO_API_DELETE_RESOURCE.strip("/"):
        errors.append("TODO_API_DELETE_RESOURCE is required")

    if settings.TODO_API_TIMEOUT is not None and settings.TODO_API_TIMEOUT <= 0:
        errors.append("TODO_API_TIMEOUT must be positive when set")

    if errors:
        raise ValueError(f"Configuration validation failed: {', '.join(errors)}")

    return True
