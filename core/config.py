"""
Application configuration management.

Uses pydantic-settings for type-safe environment variable parsing.
All configuration is centralized here so route handlers and storage
backends never read os.environ directly.
"""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings with validation and type coercion.

    Values are loaded from environment variables or .env file.
    All fields have sensible defaults for local development.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Storage Backend Selection
    # Options: "mongodb", "memory"
    storage_backend: Literal["mongodb", "memory"] = "mongodb"

    # MongoDB Configuration (default backend)
    mongodb_url: str = "mongodb://localhost:27017"
    mongodb_database: str = "blog_list"

    # Authentication
    secret_key: str = "change-me-in-production"
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60
    bcrypt_rounds: int = 10

    # Server
    service_name: str = "blog-list"
    server_host: str = "0.0.0.0"
    server_port: int = 3003
    debug: bool = True
    cors_origins: list[str] = ["*"]

    # Environment
    environment: Literal["development", "test", "production"] = "development"

    @property
    def is_development(self) -> bool:
        return self.environment in ("development", "test")


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings singleton.

    Use this function to get settings instance throughout the application.
    The @lru_cache ensures we only parse environment once.
    """
    return Settings()


# Convenience export for direct import
settings = get_settings()
