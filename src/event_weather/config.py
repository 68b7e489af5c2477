"""Application configuration.

Configuration is loaded from environment variables using pydantic-settings.
API keys should be provided via environment variables, not config files.

## Required Environment Variables

- GOOGLE_MAPS_API_KEY: Key for the Google Geocoding API. Without it every
  geocoding attempt fails with a GeocodeError.

## Optional Environment Variables

- SMHI_BASE_URL: Base URL of the SMHI point forecast API
- HTTP_TIMEOUT_SECONDS: Timeout for outbound provider calls (default: 10)
- REGION_MIN_LATITUDE / REGION_MAX_LATITUDE / REGION_MIN_LONGITUDE /
  REGION_MAX_LONGITUDE: Supported region bounding box (default: Sweden)
- LOG_LEVEL: Logging level for the CLI (default: INFO)
- DEBUG: Enable debug mode (default: false)

## Example .env file

```
GOOGLE_MAPS_API_KEY=your-google-maps-key
HTTP_TIMEOUT_SECONDS=8
```
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal, Self

from pydantic import Field, model_validator
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
    app_name: str = "Event Weather"
    app_version: str = "0.1.0"
    debug: bool = False
    environment: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    allowed_origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:8000"],
        description="CORS allowed origins",
    )

    # Outbound HTTP
    http_timeout_seconds: float = Field(default=10.0, gt=0, le=60)
    user_agent: str = Field(
        default="event-weather/0.1.0",
        description="User-Agent sent to geocoding and forecast providers",
    )

    # Geocoding (Google)
    google_maps_api_key: str | None = None
    geocoding_url: str = "https://maps.googleapis.com/maps/api/geocode/json"
    geocoding_country: str = Field(
        default="Sweden",
        description="Country qualifier appended to every free-text address",
    )
    geocoding_components: str = "country:SE"
    geocoding_language: str = "sv"

    # Forecast (SMHI)
    smhi_base_url: str = (
        "https://opendata-download-metfcst.smhi.se/api/category/pmp3g/version/2"
    )
    forecast_max_days: int = Field(default=10, ge=1, le=15)
    seasonal_estimate_after_days: int = Field(default=15, ge=1)

    # Supported region (Sweden)
    region_name: str = "Sweden"
    region_min_latitude: float = Field(default=55.0, ge=-90, le=90)
    region_max_latitude: float = Field(default=69.0, ge=-90, le=90)
    region_min_longitude: float = Field(default=11.0, ge=-180, le=180)
    region_max_longitude: float = Field(default=24.0, ge=-180, le=180)

    @model_validator(mode="after")
    def validate_region_bounds(self) -> Self:
        """Reject bounding boxes whose minimum exceeds their maximum."""
        if self.region_min_latitude > self.region_max_latitude:
            raise ValueError("region_min_latitude must not exceed region_max_latitude")
        if self.region_min_longitude > self.region_max_longitude:
            raise ValueError("region_min_longitude must not exceed region_max_longitude")
        return self

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def geocoding_configured(self) -> bool:
        """Check if the Google Geocoding API key is set."""
        return bool(self.google_maps_api_key)


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Settings are loaded once and cached. To reload, clear the cache:
    ```python
    get_settings.cache_clear()
    ```
    """
    return Settings()


def get_settings_uncached() -> Settings:
    """Get fresh settings without caching.

    Useful for testing when environment variables change.
    """
    return Settings()
