"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    diary_owner_id: str = "default"
    health_store_base_url: str | None = None
    health_store_token: str | None = None
    health_store_timeout_seconds: float = 15
    health_sync_window_days: int = 7
    health_sync_concurrency: int = 4
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def health_sync_enabled(self) -> bool:
        """Return True when a health store bridge is configured."""
        return bool(self.health_store_base_url)
