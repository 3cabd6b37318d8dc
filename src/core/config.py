"""Application configuration using Pydantic settings."""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_env: Literal["development", "staging", "production"] = "development"

    # Storage backend, chosen once at startup
    storage_backend: Literal["memory", "firestore"] = "memory"

    # Firestore
    firestore_emulator_host: str | None = None
    gcp_project_id: str = ""
    firestore_events_collection: str = "events"
    firestore_claims_collection: str = "token_claims"
    firestore_claim_keys_collection: str = "token_claim_keys"

    # Claim links
    claim_base_url: str = "http://localhost:5000"

    # Logging
    log_level: str = "INFO"
    log_format: Literal["json", "text"] = "json"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.app_env == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
