"""Base HTTP provider abstraction.

Both external collaborators of the resolver (the geocoder and the forecast
provider) are thin wrappers around a single HTTP GET. This module holds the
shared plumbing: client lifecycle, default headers, timeout handling and the
translation of transport failures into provider errors.

## Error Translation

Every failure that happens while talking to a provider is raised as the
provider's `error_class` (a `ProviderError` subclass):

- Timeouts (`httpx.TimeoutException`)
- Connection and protocol errors (`httpx.HTTPError`)
- Non-success HTTP status codes (>= 400)
- Bodies that are not valid JSON

A single failed attempt is terminal; nothing is retried.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

import httpx

if TYPE_CHECKING:
    from event_weather.models.location import Coordinates, LocationCoordinates
    from event_weather.models.weather import DailyForecast

logger = logging.getLogger(__name__)


class ProviderError(Exception):
    """Base exception for external provider errors."""

    def __init__(
        self,
        message: str,
        provider: str,
        status_code: int | None = None,
        response_body: str | None = None,
    ):
        super().__init__(message)
        self.provider = provider
        self.status_code = status_code
        self.response_body = response_body


class GeocodeError(ProviderError):
    """Raised when an address cannot be geocoded."""

    pass


class ForecastFetchError(ProviderError):
    """Raised when a forecast cannot be retrieved or parsed."""

    pass


class HttpProvider:
    """Base class for providers reached over HTTP.

    A client can be injected so that several providers share one connection
    pool (and so tests can pass an ``httpx.MockTransport``). Without one, the
    provider lazily creates and owns its own client.

    Attributes:
        name: Human-readable provider name
        error_class: ProviderError subclass raised on failure
    """

    name: str
    error_class: type[ProviderError] = ProviderError

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        user_agent: str | None = None,
        timeout: float = 10.0,
    ):
        """Initialize the provider.

        Args:
            client: Shared HTTP client; the provider will not close it
            user_agent: User-Agent string for requests
            timeout: Request timeout in seconds
        """
        self.user_agent = user_agent or "event-weather/0.1.0"
        self.timeout = timeout
        self._client = client
        self._owns_client = client is None

    async def __aenter__(self) -> HttpProvider:
        """Enter async context manager."""
        self._get_client()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Exit async context manager."""
        await self.aclose()

    async def aclose(self) -> None:
        """Close the HTTP client if this provider created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
            self._owns_client = True
        return self._client

    def _get_default_headers(self) -> dict[str, str]:
        """Get default headers for requests."""
        return {
            "User-Agent": self.user_agent,
            "Accept": "application/json",
        }

    def _error(self, message: str, **kwargs: Any) -> ProviderError:
        return self.error_class(message, provider=self.name, **kwargs)

    def _status_message(self, status_code: int) -> str:
        """Message used when the provider answers with an error status."""
        return f"{self.name} API error: {status_code}"

    async def _fetch_json(
        self,
        url: str,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """GET a URL and decode its JSON body.

        Args:
            url: Full URL to fetch
            params: Query parameters

        Returns:
            Decoded JSON body

        Raises:
            ProviderError: As ``error_class``, on any failure
        """
        client = self._get_client()

        try:
            response = await client.get(
                url,
                params=params,
                headers=self._get_default_headers(),
                timeout=self.timeout,
            )
        except httpx.TimeoutException as e:
            logger.warning(f"{self.name} request timed out after {self.timeout}s")
            raise self._error(f"{self.name} request timed out") from e
        except httpx.HTTPError as e:
            logger.warning(f"{self.name} request failed: {e}")
            raise self._error(f"{self.name} request failed: {e}") from e

        if response.status_code >= 400:
            logger.warning(f"{self.name} returned HTTP {response.status_code}")
            raise self._error(
                self._status_message(response.status_code),
                status_code=response.status_code,
                response_body=response.text,
            )

        try:
            return response.json()
        except ValueError as e:
            raise self._error(
                f"Failed to parse {self.name} response: {e}",
                status_code=response.status_code,
                response_body=response.text,
            ) from e


class Geocoder(ABC):
    """Turns a free-text address into coordinates."""

    @abstractmethod
    async def geocode(self, address: str) -> LocationCoordinates:
        """Geocode an address.

        Raises:
            GeocodeError: If the address cannot be resolved
        """

    async def aclose(self) -> None:
        """Release resources held by the geocoder."""


class ForecastProvider(ABC):
    """Supplies a daily forecast summary for a point."""

    @abstractmethod
    async def get_daily_forecast(self, coordinates: Coordinates) -> list[DailyForecast]:
        """Get the daily forecast for a location, ascending by date.

        Raises:
            ForecastFetchError: If the forecast cannot be retrieved
        """

    async def aclose(self) -> None:
        """Release resources held by the provider."""
