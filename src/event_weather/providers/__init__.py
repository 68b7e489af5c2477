"""External geocoding and forecast providers."""

from event_weather.providers.base import (
    ForecastFetchError,
    ForecastProvider,
    GeocodeError,
    Geocoder,
    HttpProvider,
    ProviderError,
)
from event_weather.providers.google import GoogleGeocoder
from event_weather.providers.smhi import SmhiProvider

__all__ = [
    "ForecastFetchError",
    "ForecastProvider",
    "GeocodeError",
    "Geocoder",
    "HttpProvider",
    "ProviderError",
    "GoogleGeocoder",
    "SmhiProvider",
]
