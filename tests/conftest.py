"""Pytest fixtures for event weather tests.

This module provides test fixtures that ensure:
1. No external API calls are made (Google Geocoding, SMHI)
2. Isolated test environment with controlled configuration
"""

import asyncio
import os
from datetime import datetime, timedelta, timezone
from typing import Any, Callable

import httpx
import pytest

# Set test environment BEFORE importing application modules
os.environ.setdefault("GOOGLE_MAPS_API_KEY", "test-maps-key")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

from event_weather.models.location import Coordinates, LocationCoordinates
from event_weather.models.weather import DailyForecast
from event_weather.forecast.daily import summarize_daily
from event_weather.providers.base import ForecastProvider, Geocoder
from event_weather.providers.smhi import SmhiProvider
from event_weather.resolver import LocationWeatherResolver


# =============================================================================
# Test Isolation Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache():
    """Reset settings cache before each test to ensure clean state."""
    from event_weather.config import get_settings
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def run(coro):
    """Run a coroutine to completion."""
    return asyncio.run(coro)


# =============================================================================
# Provider Payloads
# =============================================================================


def smhi_entry(valid_time: str, temperature: float | None = None, symbol: int | None = None) -> dict:
    """Build one SMHI timeSeries entry."""
    parameters = []
    if temperature is not None:
        parameters.append(
            {"name": "t", "levelType": "hl", "level": 2, "unit": "Cel", "values": [temperature]}
        )
    if symbol is not None:
        parameters.append(
            {"name": "Wsymb2", "levelType": "hl", "level": 0, "unit": "category", "values": [symbol]}
        )
    parameters.append(
        {"name": "ws", "levelType": "hl", "level": 10, "unit": "m/s", "values": [3.2]}
    )
    return {"validTime": valid_time, "parameters": parameters}


def smhi_payload(entries: list[dict]) -> dict:
    """Wrap timeSeries entries in an SMHI response body."""
    return {
        "approvedTime": "2024-06-15T09:02:10Z",
        "referenceTime": "2024-06-15T09:00:00Z",
        "geometry": {"type": "Point", "coordinates": [[18.1, 59.3]]},
        "timeSeries": entries,
    }


def hourly_smhi_payload(start: datetime, hours: int, temperature: float = 15.0, symbol: int = 3) -> dict:
    """SMHI response with one entry per hour starting at ``start``."""
    return smhi_payload([
        smhi_entry(
            (start + timedelta(hours=i)).strftime("%Y-%m-%dT%H:%M:%SZ"),
            temperature=temperature,
            symbol=symbol,
        )
        for i in range(hours)
    ])


def google_payload(
    lat: float,
    lng: float,
    formatted_address: str = "Drottninggatan 1, 111 51 Stockholm, Sverige",
    components: list[dict] | None = None,
) -> dict:
    """Build a successful Google Geocoding response body."""
    if components is None:
        components = [
            {"long_name": "1", "short_name": "1", "types": ["street_number"]},
            {"long_name": "Drottninggatan", "short_name": "Drottninggatan", "types": ["route"]},
            {"long_name": "Stockholm", "short_name": "Stockholm", "types": ["locality", "political"]},
            {
                "long_name": "Stockholms län",
                "short_name": "Stockholms län",
                "types": ["administrative_area_level_1", "political"],
            },
            {"long_name": "Sverige", "short_name": "SE", "types": ["country", "political"]},
            {"long_name": "111 51", "short_name": "111 51", "types": ["postal_code"]},
        ]
    return {
        "status": "OK",
        "results": [
            {
                "formatted_address": formatted_address,
                "geometry": {"location": {"lat": lat, "lng": lng}},
                "address_components": components,
            }
        ],
    }


# =============================================================================
# HTTP Mocking
# =============================================================================


class RecordingTransport(httpx.MockTransport):
    """MockTransport that remembers every request it served."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.requests: list[httpx.Request] = []

        def recording_handler(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(recording_handler)


@pytest.fixture
def make_client() -> Callable[..., httpx.AsyncClient]:
    """Factory for AsyncClients backed by a handler function."""

    def factory(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=RecordingTransport(handler))

    return factory


def json_response(body: Any, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, json=body)


# =============================================================================
# Fake Collaborators
# =============================================================================


class FakeGeocoder(Geocoder):
    """Geocoder returning a fixed result (or raising a fixed error)."""

    def __init__(self, result: LocationCoordinates | None = None, error: Exception | None = None):
        self.result = result
        self.error = error
        self.calls: list[str] = []

    async def geocode(self, address: str) -> LocationCoordinates:
        self.calls.append(address)
        if self.error is not None:
            raise self.error
        return self.result


class FakeForecastProvider(ForecastProvider):
    """Forecast provider summarizing a fixed SMHI payload."""

    def __init__(self, payload: dict | None = None, error: Exception | None = None):
        self.payload = payload
        self.error = error
        self.calls: list[Coordinates] = []

    async def get_daily_forecast(self, coordinates: Coordinates) -> list[DailyForecast]:
        self.calls.append(coordinates)
        if self.error is not None:
            raise self.error
        samples = SmhiProvider()._translate_response(self.payload)
        return summarize_daily(samples)


@pytest.fixture
def stockholm() -> LocationCoordinates:
    """Geocoded Stockholm city centre."""
    return LocationCoordinates(
        latitude=59.3,
        longitude=18.1,
        formatted_address="Stockholm, Sverige",
        clean_address="Stockholm, Stockholms län",
    )


@pytest.fixture
def oslo() -> LocationCoordinates:
    """Geocoded Oslo, outside the Swedish bounding box."""
    return LocationCoordinates(
        latitude=59.9139,
        longitude=10.7522,
        formatted_address="Oslo, Norge",
    )


@pytest.fixture
def twelve_day_payload() -> dict:
    """SMHI payload covering twelve UTC days, hourly."""
    return hourly_smhi_payload(datetime(2024, 6, 15, 0, 0, tzinfo=timezone.utc), 12 * 24)


@pytest.fixture
def resolver_factory() -> Callable[..., tuple[LocationWeatherResolver, FakeGeocoder, FakeForecastProvider]]:
    """Build a resolver around fake collaborators."""

    def factory(
        coordinates: LocationCoordinates | None = None,
        geocode_error: Exception | None = None,
        payload: dict | None = None,
        forecast_error: Exception | None = None,
    ):
        geocoder = FakeGeocoder(coordinates, geocode_error)
        provider = FakeForecastProvider(payload, forecast_error)
        return LocationWeatherResolver(geocoder, provider), geocoder, provider

    return factory

