"""
Configuration management for the subscription merger.
Uses pydantic-settings for environment variable loading.
"""
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API Configuration
    app_name: str = "Subscription Merger"
    app_version: str = "0.1.0"
    debug: bool = False

    # Server Configuration
    host: str = "0.0.0.0"
    port: int = 8000

    # CORS Configuration
    # Player clients fetch the merged config cross-origin
    cors_origins: list[str] = ["*"]

    # Rate Limiting
    rate_limit_per_minute: int = 60

    # Merged output
    cache_time: int = 7200  # Hint for downstream clients, seconds

    # Health probing
    probe_timeout_seconds: float = 5.0
    probe_verify_ssl: bool = False

    # Source fetching
    fetch_timeout_seconds: float = 15.0
    user_agent: str = "okhttp/3.15"

    # Pydantic V2 configuration
    model_config = SettingsConfigDict(env_prefix="SUBMERGE_", env_file=".env")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
