"""Domain models for event weather lookups."""

from event_weather.models.location import (
    Coordinates,
    LocationCoordinates,
    RegionBounds,
    round_half_away,
)
from event_weather.models.weather import (
    DailyForecast,
    ResolutionResult,
    WeatherSample,
)

__all__ = [
    # Location
    "Coordinates",
    "LocationCoordinates",
    "RegionBounds",
    "round_half_away",
    # Weather
    "DailyForecast",
    "ResolutionResult",
    "WeatherSample",
]
