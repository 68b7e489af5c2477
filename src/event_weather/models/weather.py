"""Weather and forecast models."""

from __future__ import annotations

import datetime as dt
from typing import Self

from pydantic import BaseModel, ConfigDict, Field, model_validator

from event_weather.models.location import LocationCoordinates


class WeatherSample(BaseModel):
    """A single instantaneous reading from the forecast time series.

    Times are always timezone-aware UTC.
    """

    model_config = ConfigDict(frozen=True)

    time: dt.datetime = Field(..., description="Valid time of the sample (UTC)")
    temperature_c: float | None = Field(
        default=None,
        allow_inf_nan=False,
        description="Air temperature in Celsius",
    )
    symbol: int | None = Field(default=None, description="Provider weather symbol code")

    @property
    def date(self) -> dt.date:
        """UTC calendar date of the sample."""
        return self.time.date()


class DailyForecast(BaseModel):
    """Compact summary of one forecast day."""

    model_config = ConfigDict(frozen=True)

    date: dt.date
    temperature: int = Field(..., description="Representative temperature in Celsius")
    description: str = Field(..., min_length=1)
    icon: str = Field(..., min_length=1)

    @property
    def is_seasonal_estimate(self) -> bool:
        """Check whether this entry is a climatological estimate, not a forecast."""
        return "seasonal estimate" in self.description


class ResolutionResult(BaseModel):
    """Outcome of resolving a free-text location into a daily forecast.

    Exactly one of (coordinates + forecast) or error is populated.
    """

    location: str
    coordinates: LocationCoordinates | None = None
    forecast: list[DailyForecast] | None = None
    is_valid: bool
    error: str | None = None

    @model_validator(mode="after")
    def validate_outcome(self) -> Self:
        """Reject partial-success combinations."""
        if self.is_valid:
            if self.coordinates is None or self.forecast is None:
                raise ValueError("A valid result requires coordinates and forecast")
            if self.error is not None:
                raise ValueError("A valid result cannot carry an error")
        else:
            if not self.error:
                raise ValueError("An invalid result requires an error message")
            if self.coordinates is not None or self.forecast is not None:
                raise ValueError("An invalid result cannot carry coordinates or forecast")
        return self

    @classmethod
    def success(
        cls,
        location: str,
        coordinates: LocationCoordinates,
        forecast: list[DailyForecast],
    ) -> Self:
        """Build a successful result."""
        return cls(location=location, coordinates=coordinates, forecast=forecast, is_valid=True)

    @classmethod
    def failure(cls, location: str, error: str) -> Self:
        """Build a failed result."""
        return cls(location=location, is_valid=False, error=error)

    def forecast_for(self, day: dt.date) -> DailyForecast | None:
        """Return the forecast entry for a given date, if present."""
        for entry in self.forecast or []:
            if entry.date == day:
                return entry
        return None
