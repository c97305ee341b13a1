"""
API Configuration

Manages environment-based configuration for the API server.
"""

from functools import lru_cache
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Settings can be overridden with environment variables or .env file.
    """

    # API Settings
    app_name: str = "Demographic Digital Twin API"
    app_version: str = "1.0.0"
    debug: bool = False

    # Census API
    census_api_key: Optional[str] = None
    census_base_url: str = "https://api.census.gov/data"
    census_year: str = "2019"
    census_dataset: str = "acs/acs5"
    census_timeout: float = 30.0

    # CORS Settings
    cors_origins: list[str] = ["http://localhost:3000"]

    # Logging
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Using lru_cache ensures settings are loaded once and reused.
    """
    return Settings()
