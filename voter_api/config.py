"""Configuration management for the Voter API service."""
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    # Service configuration
    SERVICE_NAME: str = "voter-api"
    API_VERSION: str = "1.0.0"
    DEBUG: bool = False

    # Server configuration
    HOST: str = "0.0.0.0"
    PORT: int = 1080

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None

    @property
    def effective_log_level(self) -> str:
        return "DEBUG" if self.DEBUG else self.LOG_LEVEL


settings = Settings()
