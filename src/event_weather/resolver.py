"""Location to weather resolution.

`LocationWeatherResolver` turns the free-text location of an event into a
compact daily forecast:

1. Geocode the text (Geocoder)
2. Reject coordinates outside the supported region (RegionBounds)
3. Fetch the forecast for the coordinates (ForecastProvider)

Steps run strictly in order and a failing step ends the pipeline, so the
forecast provider is never called for a location that did not geocode or
lies outside the region.

`resolve` never raises. Every failure, including unexpected ones, is
returned as a `ResolutionResult` with `is_valid=False` and an error
message, so request handlers can call it without a try/except.

## Usage

```python
async with LocationWeatherResolver.from_settings(get_settings()) as resolver:
    result = await resolver.resolve("Drottninggatan 1, Stockholm")
```

Without a shared client each provider opens its own, so the resolver
must be closed (`async with` or `aclose`). With one, the caller owns it:

```python
async with httpx.AsyncClient() as client:
    resolver = LocationWeatherResolver.from_settings(get_settings(), client=client)
    result = await resolver.resolve("Drottninggatan 1, Stockholm")
```
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from event_weather.config import Settings
from event_weather.models.location import LocationCoordinates, RegionBounds
from event_weather.models.weather import ResolutionResult
from event_weather.providers.base import ForecastProvider, Geocoder, ProviderError
from event_weather.providers.google import GoogleGeocoder
from event_weather.providers.smhi import SmhiProvider

logger = logging.getLogger(__name__)


class UnsupportedRegionError(Exception):
    """Raised when coordinates fall outside the supported region."""

    def __init__(self, coordinates: LocationCoordinates, region: RegionBounds):
        super().__init__(f"Location must be in {region.name}")
        self.coordinates = coordinates
        self.region = region


class UnknownError(Exception):
    """Wraps an unexpected exception raised inside the pipeline."""

    def __init__(self, cause: Exception):
        super().__init__(str(cause) or "Unknown error occurred")
        self.cause = cause


class LocationWeatherResolver:
    """Resolves free-text locations into coordinates and a daily forecast.

    The resolver keeps no per-call state; one instance can serve concurrent
    requests.
    """

    def __init__(
        self,
        geocoder: Geocoder,
        forecast_provider: ForecastProvider,
        region: RegionBounds | None = None,
    ):
        self.geocoder = geocoder
        self.forecast_provider = forecast_provider
        self.region = region or RegionBounds()

    async def __aenter__(self) -> LocationWeatherResolver:
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the collaborators' HTTP clients.

        Providers only close clients they created themselves; a client
        passed to `from_settings` stays open for its owner to close.
        """
        await self.geocoder.aclose()
        await self.forecast_provider.aclose()

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        client: httpx.AsyncClient | None = None,
    ) -> LocationWeatherResolver:
        """Build a resolver wired to Google geocoding and SMHI."""
        geocoder = GoogleGeocoder(
            api_key=settings.google_maps_api_key,
            url=settings.geocoding_url,
            country=settings.geocoding_country,
            components=settings.geocoding_components,
            language=settings.geocoding_language,
            client=client,
            user_agent=settings.user_agent,
            timeout=settings.http_timeout_seconds,
        )
        forecast_provider = SmhiProvider(
            base_url=settings.smhi_base_url,
            max_days=settings.forecast_max_days,
            client=client,
            user_agent=settings.user_agent,
            timeout=settings.http_timeout_seconds,
        )
        region = RegionBounds(
            name=settings.region_name,
            min_latitude=settings.region_min_latitude,
            max_latitude=settings.region_max_latitude,
            min_longitude=settings.region_min_longitude,
            max_longitude=settings.region_max_longitude,
        )
        return cls(geocoder, forecast_provider, region)

    async def locate(self, location_text: str) -> LocationCoordinates:
        """Geocode and region-check a location.

        Raises:
            GeocodeError: If geocoding fails
            UnsupportedRegionError: If the result is outside the region
        """
        coordinates = await self.geocoder.geocode(location_text)
        if not self.region.contains(coordinates):
            raise UnsupportedRegionError(coordinates, self.region)
        return coordinates

    async def resolve(self, location_text: str) -> ResolutionResult:
        """Resolve a location into coordinates and a daily forecast.

        Never raises; failures are reported through ``is_valid`` and ``error``.
        """
        try:
            coordinates = await self.locate(location_text)
            forecast = await self.forecast_provider.get_daily_forecast(coordinates)
        except (ProviderError, UnsupportedRegionError) as e:
            logger.warning(f"Could not resolve weather for '{location_text}': {e}")
            return ResolutionResult.failure(location_text, str(e) or type(e).__name__)
        except Exception as e:
            error = UnknownError(e)
            logger.exception(f"Unexpected error resolving weather for '{location_text}'")
            return ResolutionResult.failure(location_text, str(error))

        return ResolutionResult.success(location_text, coordinates, forecast)

    async def resolve_coordinates_only(self, location_text: str) -> LocationCoordinates | None:
        """Geocode and region-check a location without fetching weather.

        Returns:
            Coordinates, or None on any failure
        """
        try:
            return await self.locate(location_text)
        except (ProviderError, UnsupportedRegionError) as e:
            logger.warning(f"Could not get coordinates for '{location_text}': {e}")
            return None
        except Exception:
            logger.exception(f"Unexpected error getting coordinates for '{location_text}'")
            return None
