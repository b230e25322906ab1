"""Environment-based client settings. Read-only; no business logic."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Client settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = Field(default="index-settings", description="Client name")
    environment: Literal["development", "staging", "production"] = Field(
        default="development", description="Runtime environment"
    )
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Log level name")

    # Search service (see config/storage/search for connection semantics)
    search_host: str = Field(default="http://localhost:7700", description="Search service base URL")
    search_api_key: str = Field(default="", description="API key sent as a bearer token; empty disables auth")
    search_timeout: int = Field(default=30, ge=1, description="Request timeout (seconds)")


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance. Use for process lifetime."""
    return Settings()
