"""
Application Configuration
Loads settings from environment variables with validation
"""

from functools import lru_cache
from typing import List, Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    Uses pydantic-settings for validation and type coercion.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # ============================================
    # Application Settings
    # ============================================
    app_name: str = "FretDeck"
    app_version: str = "1.0.0"
    debug: bool = False
    environment: str = Field(
        default="development",
        validation_alias=AliasChoices("environment", "node_env"),
    )

    # ============================================
    # Server Settings
    # ============================================
    host: str = "0.0.0.0"
    port: int = 8000

    # ============================================
    # YouTube (Google) OAuth
    # ============================================
    youtube_client_id: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("youtube_oauth_client_id", "google_client_id"),
    )
    youtube_client_secret: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("youtube_oauth_client_secret", "google_client_secret"),
    )
    youtube_redirect_uri: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("youtube_oauth_redirect_uri"),
    )

    # ============================================
    # Spotify OAuth + Web API
    # ============================================
    spotify_client_id: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("next_public_spotify_client_id", "spotify_client_id"),
    )
    spotify_client_secret: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("spotify_client_secret"),
    )
    spotify_redirect_uri: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("spotify_oauth_redirect_uri"),
    )

    # ============================================
    # Outbound HTTP / Rate Limiting
    # ============================================
    http_timeout_seconds: float = 10.0
    oauth_rate_limit: str = "30/minute"

    # ============================================
    # CORS Settings
    # ============================================
    cors_origins: str = "http://localhost:3000"

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins string into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def is_production(self) -> bool:
        """Secure cookies are only issued in production."""
        return self.environment.strip().lower() == "production"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    Uses lru_cache to avoid loading .env file on every call.
    """
    return Settings()


# Export a default settings instance for convenience
settings = get_settings()
