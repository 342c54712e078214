"""
Application configuration using Pydantic Settings.

Loads configuration from environment variables (.env file).
"""

from typing import List, Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Project Info
    PROJECT_NAME: str = "Training Load Tracker"
    VERSION: str = "0.1.0"
    DESCRIPTION: str = "Records athlete training sessions and derived training load."

    DEBUG: bool = False

    # API
    API_PREFIX: str = "/api"
    CORS_ORIGINS: List[str] = ["*"]
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    # Storage
    STORE_BACKEND: Literal["sqlite", "json"] = "sqlite"
    DATABASE_PATH: str = "database.sqlite"
    DATA_FILE: str = "data.json"
    DEFAULT_DATASET_VERSION: str = "1.0"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")


# Global settings instance
settings = Settings()
