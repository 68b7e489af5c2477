"""Weather for a specific event day.

Events are often planned further ahead than any forecast reaches. For those
the service falls back to a seasonal estimate based on Stockholm climate
normals, and `should_refresh_weather` tells callers when a stored value is
worth replacing with a real forecast.

Seasons by month:

| Months | Season | Temp (°C) |
|--------|--------|-----------|
| Dec-Mar | winter | 0 |
| Apr-May | spring | 7 |
| Jun-Sep | summer | 17 |
| Oct-Nov | autumn | 9 |
"""

from __future__ import annotations

import datetime as dt
import logging

from event_weather.models.weather import DailyForecast
from event_weather.resolver import LocationWeatherResolver

logger = logging.getLogger(__name__)

# Events this close always get a fresh forecast
REFRESH_ALWAYS_WITHIN_DAYS = 3

# (temperature, description, icon) per season
SEASONAL_NORMALS: dict[str, tuple[int, str, str]] = {
    "winter": (0, "Typical winter weather", "❄️"),
    "spring": (7, "Typical spring weather", "🌸"),
    "summer": (17, "Typical summer weather", "☀️"),
    "autumn": (9, "Typical autumn weather", "🍂"),
}


def season_for(day: dt.date) -> str:
    """Return the season name used for seasonal estimates."""
    if 6 <= day.month <= 9:
        return "summer"
    if day.month == 12 or day.month <= 3:
        return "winter"
    if day.month <= 5:
        return "spring"
    return "autumn"


def seasonal_estimate(event_date: dt.date) -> DailyForecast:
    """Build a climatological stand-in for a day beyond the forecast range."""
    temperature, description, icon = SEASONAL_NORMALS[season_for(event_date)]
    return DailyForecast(
        date=event_date,
        temperature=temperature,
        description=f"{description} (seasonal estimate)",
        icon=icon,
    )


def days_until(event_date: dt.date, today: dt.date | None = None) -> int:
    """Whole days from today (UTC) to the event; negative for past events."""
    today = today or dt.datetime.now(dt.timezone.utc).date()
    return (event_date - today).days


class EventWeatherService:
    """Looks up the weather for an event's location and date."""

    def __init__(
        self,
        resolver: LocationWeatherResolver,
        seasonal_estimate_after_days: int = 15,
    ):
        self.resolver = resolver
        self.seasonal_estimate_after_days = seasonal_estimate_after_days

    async def get_event_weather(
        self,
        location: str,
        event_date: dt.date,
        today: dt.date | None = None,
    ) -> DailyForecast | None:
        """Get the forecast for an event.

        Returns:
            The forecast entry for ``event_date`` when the forecast covers it;
            a seasonal estimate when the event is more than
            ``seasonal_estimate_after_days`` away; otherwise None. Also None
            when the location cannot be resolved.
        """
        result = await self.resolver.resolve(location)
        if not result.is_valid:
            logger.info(f"No event weather for '{location}': {result.error}")
            return None

        entry = result.forecast_for(event_date)
        if entry is not None:
            return entry

        remaining = days_until(event_date, today)
        if remaining > self.seasonal_estimate_after_days:
            logger.debug(f"Event {event_date} is {remaining} days away, using seasonal estimate")
            return seasonal_estimate(event_date)

        logger.info(
            f"Event {event_date} is {remaining} days away but not covered by "
            f"{len(result.forecast or [])} forecast days"
        )
        return None

    def should_refresh_weather(
        self,
        event_date: dt.date,
        current: DailyForecast | None,
        today: dt.date | None = None,
    ) -> bool:
        """Check whether stored event weather should be fetched again."""
        if current is None:
            return True

        remaining = days_until(event_date, today)
        if remaining <= self.seasonal_estimate_after_days and current.is_seasonal_estimate:
            return True
        return remaining <= REFRESH_ALWAYS_WITHIN_DAYS
