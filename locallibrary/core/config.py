import os
from functools import lru_cache
from typing import Any, Dict, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    # App config
    PROJECT_NAME: str = "Local Library"
    PROJECT_VERSION: str = "0.1.0"
    PROJECT_DESCRIPTION: str = "Catalog management for a local library"
    APP_ENV: str = "development"
    DEBUG: bool = True
    TEMPLATES_DIR: str = os.path.join(os.path.dirname(os.path.dirname(__file__)), "templates")

    # Document store
    STORE_BACKEND: str = "sql"  # memory, sql, mongo
    STORE_TIMEOUT_SECONDS: float = 10.0
    DATABASE_URL: str = "sqlite+aiosqlite:///./locallibrary.db"
    DB_ECHO: bool = False  # Log every SQL statement
    MONGODB_URL: str = "mongodb://localhost:27017"
    MONGODB_DB: str = "local_library"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "console"  # console, json
    LOG_DIR: str = "logs"
    LOG_FILE: Optional[str] = None

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @field_validator("APP_ENV")
    @classmethod
    def validate_app_env(cls, v: str) -> str:
        """Validate app environment."""
        allowed_envs = {"development", "testing", "staging", "production"}
        if v not in allowed_envs:
            raise ValueError(f"APP_ENV must be one of: {', '.join(sorted(allowed_envs))}")
        return v

    @field_validator("STORE_BACKEND")
    @classmethod
    def validate_store_backend(cls, v: str) -> str:
        allowed = {"memory", "sql", "mongo"}
        v = v.lower()
        if v not in allowed:
            raise ValueError(f"STORE_BACKEND must be one of: {', '.join(sorted(allowed))}")
        return v

    @field_validator("STORE_TIMEOUT_SECONDS")
    @classmethod
    def validate_store_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("STORE_TIMEOUT_SECONDS must be positive")
        return v

    @property
    def fastapi_kwargs(self) -> Dict[str, Any]:
        """
        Get FastAPI configuration.

        Returns:
            Dictionary with FastAPI configuration
        """
        return {
            "title": self.PROJECT_NAME,
            "version": self.PROJECT_VERSION,
            "description": self.PROJECT_DESCRIPTION,
            "docs_url": "/docs" if self.DEBUG else None,
            "redoc_url": None,
            "openapi_url": "/openapi.json" if self.DEBUG else None,
        }

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.APP_ENV == "production"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings instance
    """
    return Settings()
