"""Google Geocoding provider.

## API Documentation Summary
Source: https://developers.google.com/maps/documentation/geocoding/requests-geocoding

## Endpoint
- URL: https://maps.googleapis.com/maps/api/geocode/json
- Query: address, key, components (e.g. country:SE), language (e.g. sv)

## Authentication
- API key in the `key` query parameter

## Response Format
```json
{
  "status": "OK",
  "results": [
    {
      "formatted_address": "Drottninggatan 1, 111 51 Stockholm, Sverige",
      "geometry": {"location": {"lat": 59.3301, "lng": 18.0631}},
      "address_components": [
        {"long_name": "1", "types": ["street_number"]},
        {"long_name": "Drottninggatan", "types": ["route"]},
        {"long_name": "Stockholm", "types": ["locality", "political"]},
        ...
      ]
    }
  ]
}
```

Any status other than `OK` (`ZERO_RESULTS`, `OVER_QUERY_LIMIT`,
`REQUEST_DENIED`, `INVALID_REQUEST`, ...) carries an optional
`error_message` and is reported as a GeocodeError.

## Clean Address
The clean address joins, in this order and with ", ", whichever of these
components are present: street_number, route, locality,
administrative_area_level_1, postal_code. When none are present the
provider's formatted_address is used instead.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from event_weather.models.location import LocationCoordinates
from event_weather.providers.base import GeocodeError, Geocoder, HttpProvider

logger = logging.getLogger(__name__)


# Component types used for the clean address, in output order
CLEAN_ADDRESS_COMPONENTS: tuple[str, ...] = (
    "street_number",
    "route",
    "locality",
    "administrative_area_level_1",
    "postal_code",
)


def build_clean_address(components: list[dict[str, Any]], fallback: str) -> str:
    """Build a display address from structured address components.

    A component is assigned to the first of CLEAN_ADDRESS_COMPONENTS that
    appears in its ``types``. Later components of the same type win.
    """
    found: dict[str, str] = {}
    for component in components:
        types = component.get("types", [])
        for component_type in CLEAN_ADDRESS_COMPONENTS:
            if component_type in types:
                found[component_type] = component.get("long_name", "")
                break

    parts = [found[t] for t in CLEAN_ADDRESS_COMPONENTS if found.get(t)]
    return ", ".join(parts) or fallback


class GoogleGeocoder(HttpProvider, Geocoder):
    """Geocoder backed by the Google Geocoding API.

    Every address is qualified with a fixed country so that short inputs
    such as "Centralstationen" resolve inside the supported region.

    Example:
        ```python
        async with GoogleGeocoder(api_key="...") as geocoder:
            coords = await geocoder.geocode("Drottninggatan 1, Stockholm")
        ```
    """

    name = "Google Geocoding"
    error_class = GeocodeError

    def __init__(
        self,
        api_key: str | None,
        url: str = "https://maps.googleapis.com/maps/api/geocode/json",
        country: str | None = "Sweden",
        components: str | None = "country:SE",
        language: str | None = "sv",
        client: httpx.AsyncClient | None = None,
        user_agent: str | None = None,
        timeout: float = 10.0,
    ):
        """Initialize the Google geocoder.

        Args:
            api_key: Google Maps API key
            url: Geocoding endpoint
            country: Qualifier appended to the address ("<address>, <country>")
            components: Component filter passed to the API
            language: Language of the returned address strings
            client: Shared HTTP client
            user_agent: User-Agent string for requests
            timeout: Request timeout in seconds
        """
        super().__init__(client=client, user_agent=user_agent, timeout=timeout)
        self.api_key = api_key
        self.url = url
        self.country = country
        self.components = components
        self.language = language

    def _status_message(self, status_code: int) -> str:
        return f"Geocoding failed: {status_code}"

    def build_params(self, address: str) -> dict[str, str]:
        """Build query parameters for an address lookup."""
        query = f"{address}, {self.country}" if self.country else address
        params = {"address": query, "key": self.api_key or ""}
        if self.components:
            params["components"] = self.components
        if self.language:
            params["language"] = self.language
        return params

    async def geocode(self, address: str) -> LocationCoordinates:
        """Geocode an address.

        Raises:
            GeocodeError: If the key is missing, the request fails, or the
                API returns a non-OK status or no results
        """
        if not address or not address.strip():
            raise GeocodeError("Address is required", provider=self.name)
        if not self.api_key:
            raise GeocodeError("Google Maps API key not configured", provider=self.name)

        data = await self._fetch_json(self.url, params=self.build_params(address.strip()))
        if not isinstance(data, dict):
            raise GeocodeError(
                "Unexpected response format from geocoding service", provider=self.name
            )

        status = data.get("status")
        results = data.get("results") or []
        logger.debug(
            f"Geocoding response for '{address}': status={status} results={len(results)}"
        )

        if status != "OK" or not results:
            error_message = data.get("error_message")
            logger.warning(
                f"Geocoding failed for '{address}' with status '{status}': {error_message}"
            )
            raise GeocodeError(
                error_message or f"Geocoding failed: {status}",
                provider=self.name,
            )

        return self._translate_result(results[0])

    def _translate_result(self, result: dict[str, Any]) -> LocationCoordinates:
        """Translate the first API result to LocationCoordinates."""
        try:
            location = result["geometry"]["location"]
            formatted_address = result.get("formatted_address", "")
            coordinates = LocationCoordinates(
                latitude=location["lat"],
                longitude=location["lng"],
                formatted_address=formatted_address,
                clean_address=build_clean_address(
                    result.get("address_components", []), formatted_address
                ),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise GeocodeError(
                f"Unexpected response format from geocoding service: {e}",
                provider=self.name,
            ) from e

        logger.info(f"Geocoded to {coordinates} ({coordinates.display_name()})")
        return coordinates
