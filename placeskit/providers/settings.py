"""
Configuration settings for the Google Places client using Pydantic Settings.

This module centralizes all configuration for the client, loading values
from environment variables (or a ``.env`` file) with validation and defaults.
"""

from pydantic import Field
from pydantic_settings import BaseSettings
from typing import Optional, Dict, Any


class PlacesSettings(BaseSettings):
    """
    Settings for the Google Places client.

    Uses Pydantic Settings to load and validate configuration from
    environment variables with proper type checking and defaults.
    """

    google_places_api_key: Optional[str] = Field(
        default=None,
        alias="GOOGLE_PLACES_API_KEY",
        description="Google Cloud API key with Places and Geocoding enabled"
    )

    # Cache configuration
    google_places_cache_enabled: bool = Field(
        default=True,
        alias="GOOGLE_PLACES_CACHE_ENABLED",
        description="Whether decoded responses are cached"
    )
    google_places_cache_expiration: int = Field(
        default=86400,   # 1 day
        ge=0,
        alias="GOOGLE_PLACES_CACHE_EXPIRATION",
        description="Cache lifetime in seconds (0 means no expiry)"
    )
    google_places_cache_backend: str = Field(
        default="memory",
        pattern="^(memory|file)$",
        alias="GOOGLE_PLACES_CACHE_BACKEND",
        description="Cache backend (memory, file)"
    )
    google_places_cache_dir: str = Field(
        default=".places_cache",
        alias="GOOGLE_PLACES_CACHE_DIR",
        description="Directory used by the file cache backend"
    )
    google_places_cache_prefix: str = Field(
        default="places_",
        alias="GOOGLE_PLACES_CACHE_PREFIX",
        description="Namespace prefix for this client's cache keys"
    )

    # HTTP configuration
    google_places_timeout: float = Field(
        default=15.0,
        gt=0,
        alias="GOOGLE_PLACES_TIMEOUT",
        description="HTTP request timeout in seconds"
    )

    # Photo defaults
    google_places_photo_max_width: int = Field(
        default=400,
        gt=0,
        alias="GOOGLE_PLACES_PHOTO_MAX_WIDTH",
        description="Default maximum photo width in pixels"
    )
    google_places_photo_max_height: int = Field(
        default=400,
        gt=0,
        alias="GOOGLE_PLACES_PHOTO_MAX_HEIGHT",
        description="Default maximum photo height in pixels"
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "env_prefix": "",
        "extra": "ignore",
        "populate_by_name": True,
    }

    def is_configured(self) -> bool:
        """Check whether an API key is available."""
        return bool(self.google_places_api_key)

    def to_dict(self) -> Dict[str, Any]:
        """Convert settings to dictionary."""
        return self.model_dump()


# Global settings instance
_settings: Optional[PlacesSettings] = None


def get_settings() -> PlacesSettings:
    """
    Get global settings instance (singleton pattern).

    Returns:
        Validated PlacesSettings instance
    """
    global _settings
    if _settings is None:
        _settings = PlacesSettings()
    return _settings


def reset_settings() -> None:
    """Reset global settings (useful for testing)."""
    global _settings
    _settings = None
