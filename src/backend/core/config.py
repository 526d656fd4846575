"""
Application configuration using Pydantic Settings.

All configuration is loaded from environment variables or a local .env file.
"""

import json
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Application
    APP_NAME: str = "CivicVoice"
    APP_ENV: str = "development"
    DEBUG: bool = False

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False  # JSON lines in production, console renderer locally

    # Proxies whose X-Forwarded-For is trusted (comma-separated IPs or CIDRs).
    # Empty means the socket peer is always the client address.
    FORWARDED_ALLOW_IPS: str = ""

    # CORS - stored as comma-separated string to avoid pydantic-settings JSON parsing issues
    CORS_ORIGINS: str = "http://localhost:5173"

    @property
    def cors_origins_list(self) -> list[str]:
        """Get CORS origins as a list."""
        try:
            return json.loads(self.CORS_ORIGINS)
        except json.JSONDecodeError:
            return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def is_production(self) -> bool:
        return self.APP_ENV.lower() in ("production", "prod")

    # OpenAI (email draft generation)
    OPENAI_API_KEY: str | None = None  # Drafts fall back to a fixed template when unset
    OPENAI_MODEL: str = "gpt-4o"
    OPENAI_TIMEOUT_SECONDS: float = 30.0

    # Azure Communication Services (outreach email delivery)
    AZURE_COMMUNICATION_CONNECTION_STRING: str | None = None
    AZURE_EMAIL_SENDER_ADDRESS: str | None = None
    # None lets the service decide: simulate unless running in production with ACS configured
    EMAIL_SIMULATE: bool | None = None
    DEFAULT_SENDER_ADDRESS: str = "noreply@civicvoice.org"

    # Community board
    SEED_SAMPLE_DATA: bool = True
    RECENT_ACTIVITY_DEFAULT_LIMIT: int = 10


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
