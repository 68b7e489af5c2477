"""SMHI point forecast provider.

## API Documentation Summary
Source: https://opendata.smhi.se/apidocs/metfcst/index.html

## Endpoint
- Base URL: https://opendata-download-metfcst.smhi.se/api/category/pmp3g/version/2
- Full URL example:
  .../geotype/point/lon/18.1/lat/59.3/data.json

## Authentication
- None required

## Grid
The forecast is served on a fixed grid. Coordinates are rounded to the
nearest 0.1 degree (halves away from zero) before the request so that nearby
inputs hit the same grid point and the same URL.

## Response Format
```json
{
  "approvedTime": "2024-06-15T09:02:10Z",
  "referenceTime": "2024-06-15T09:00:00Z",
  "geometry": {"type": "Point", "coordinates": [[18.1, 59.3]]},
  "timeSeries": [
    {
      "validTime": "2024-06-15T10:00:00Z",
      "parameters": [
        {"name": "t", "levelType": "hl", "level": 2, "unit": "Cel", "values": [18.4]},
        {"name": "Wsymb2", "levelType": "hl", "level": 0, "unit": "category", "values": [3]},
        ...
      ]
    }
  ]
}
```

## Variable Translation (SMHI -> WeatherSample)
| SMHI Parameter | Sample Field | Unit |
|----------------|--------------|------|
| validTime | time | UTC instant |
| t | temperature_c | °C |
| Wsymb2 | symbol | category 1..27 |
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

import httpx

from event_weather.forecast.daily import DEFAULT_MAX_DAYS, summarize_daily
from event_weather.models.location import Coordinates
from event_weather.models.weather import DailyForecast, WeatherSample
from event_weather.providers.base import ForecastFetchError, ForecastProvider, HttpProvider

logger = logging.getLogger(__name__)

TEMPERATURE_PARAMETER = "t"
SYMBOL_PARAMETER = "Wsymb2"


def parse_valid_time(value: str) -> datetime:
    """Parse an ISO timestamp into an aware UTC datetime.

    Naive timestamps are taken to be UTC.
    """
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def _parameter_value(parameters: Any, name: str) -> Any:
    if not isinstance(parameters, list):
        return None
    for parameter in parameters:
        if isinstance(parameter, dict) and parameter.get("name") == name:
            values = parameter.get("values")
            if not isinstance(values, list) or not values:
                return None
            return values[0]
    return None


def _is_integral(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and float(value).is_integer()


class SmhiProvider(HttpProvider, ForecastProvider):
    """SMHI (Swedish Meteorological and Hydrological Institute) provider.

    Example:
        ```python
        async with SmhiProvider() as provider:
            days = await provider.get_daily_forecast(
                Coordinates(latitude=59.3293, longitude=18.0686)
            )
        ```
    """

    name = "SMHI"
    error_class = ForecastFetchError

    def __init__(
        self,
        base_url: str = "https://opendata-download-metfcst.smhi.se/api/category/pmp3g/version/2",
        max_days: int = DEFAULT_MAX_DAYS,
        client: httpx.AsyncClient | None = None,
        user_agent: str | None = None,
        timeout: float = 10.0,
    ):
        """Initialize the SMHI provider.

        Args:
            base_url: API base URL up to and including the version segment
            max_days: Maximum number of daily entries to return
            client: Shared HTTP client
            user_agent: User-Agent string for requests
            timeout: Request timeout in seconds
        """
        super().__init__(client=client, user_agent=user_agent, timeout=timeout)
        self.base_url = base_url.rstrip("/")
        self.max_days = max_days

    def build_url(self, coordinates: Coordinates) -> str:
        """Build the point forecast URL for the grid cell of ``coordinates``."""
        grid = coordinates.snap_to_grid()
        return (
            f"{self.base_url}/geotype/point"
            f"/lon/{grid.longitude}/lat/{grid.latitude}/data.json"
        )

    async def get_samples(self, coordinates: Coordinates) -> list[WeatherSample]:
        """Fetch the raw forecast time series.

        Raises:
            ForecastFetchError: If the request fails or the body is malformed
        """
        url = self.build_url(coordinates)
        logger.debug(f"Fetching SMHI forecast: {url}")
        data = await self._fetch_json(url)
        return self._translate_response(data)

    async def get_daily_forecast(self, coordinates: Coordinates) -> list[DailyForecast]:
        """Get the daily forecast summary for a location.

        Raises:
            ForecastFetchError: If the forecast cannot be retrieved
        """
        samples = await self.get_samples(coordinates)
        return summarize_daily(samples, max_days=self.max_days)

    def _translate_response(self, response_data: Any) -> list[WeatherSample]:
        """Translate an SMHI response into weather samples.

        Entries with an unparsable validTime, malformed values or a
        non-finite temperature are skipped.
        """
        if not isinstance(response_data, dict):
            raise ForecastFetchError(
                "Unexpected SMHI response format", provider=self.name
            )

        time_series = response_data.get("timeSeries") or []
        if not isinstance(time_series, list):
            raise ForecastFetchError(
                "Unexpected SMHI response format: timeSeries is not a list",
                provider=self.name,
            )

        samples: list[WeatherSample] = []
        for entry in time_series:
            try:
                time = parse_valid_time(entry.get("validTime", ""))
            except (AttributeError, TypeError, ValueError):
                continue

            parameters = entry.get("parameters") or []
            symbol = _parameter_value(parameters, SYMBOL_PARAMETER)
            try:
                sample = WeatherSample(
                    time=time,
                    temperature_c=_parameter_value(parameters, TEMPERATURE_PARAMETER),
                    symbol=int(symbol) if _is_integral(symbol) else None,
                )
            except ValueError:
                logger.debug(f"Skipping malformed SMHI entry at {time.isoformat()}")
                continue
            samples.append(sample)

        return samples
