"""Location models for event weather lookups."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Self

from pydantic import BaseModel, ConfigDict, Field, model_validator


# Resolution of the SMHI forecast grid, in degrees
GRID_STEP = Decimal("0.1")


def round_half_away(value: float, step: Decimal = GRID_STEP) -> float:
    """Round to a multiple of ``step``, halves away from zero.

    The value goes through its shortest decimal representation first so
    59.35 rounds to 59.4 rather than following the binary float below it.
    """
    return float(Decimal(repr(value)).quantize(step, rounding=ROUND_HALF_UP))


class Coordinates(BaseModel):
    """Geographic coordinates (latitude/longitude).

    Latitude:
        - Negative (-) = south of equator
        - Positive (+) = north of equator
        - Range: -90 to +90

    Longitude:
        - Negative (-) = west of prime meridian
        - Positive (+) = east of prime meridian
        - Range: -180 to +180
    """

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(..., ge=-90, le=90, description="Latitude in decimal degrees")
    longitude: float = Field(..., ge=-180, le=180, description="Longitude in decimal degrees")

    def __str__(self) -> str:
        return f"{self.latitude},{self.longitude}"

    def to_tuple(self) -> tuple[float, float]:
        """Return coordinates as (latitude, longitude) tuple."""
        return (self.latitude, self.longitude)

    def snap_to_grid(self) -> Coordinates:
        """Return coordinates rounded to the 0.1 degree forecast grid."""
        return Coordinates(
            latitude=round_half_away(self.latitude),
            longitude=round_half_away(self.longitude),
        )


class LocationCoordinates(Coordinates):
    """Coordinates produced by geocoding a free-text address."""

    formatted_address: str = Field(..., description="Address as formatted by the provider")
    clean_address: str | None = Field(
        default=None,
        description="Address rebuilt from its structured components",
    )

    def display_name(self) -> str:
        """Get a display name for this location."""
        return self.clean_address or self.formatted_address


class RegionBounds(BaseModel):
    """Inclusive latitude/longitude rectangle of the supported region."""

    model_config = ConfigDict(frozen=True)

    name: str = "Sweden"
    min_latitude: float = Field(default=55.0, ge=-90, le=90)
    max_latitude: float = Field(default=69.0, ge=-90, le=90)
    min_longitude: float = Field(default=11.0, ge=-180, le=180)
    max_longitude: float = Field(default=24.0, ge=-180, le=180)

    @model_validator(mode="after")
    def validate_ordering(self) -> Self:
        """Ensure minimums do not exceed maximums."""
        if self.min_latitude > self.max_latitude or self.min_longitude > self.max_longitude:
            raise ValueError("Region minimum bounds must not exceed maximum bounds")
        return self

    def contains(self, coordinates: Coordinates) -> bool:
        """Check whether coordinates fall inside the rectangle (edges included)."""
        return (
            self.min_latitude <= coordinates.latitude <= self.max_latitude
            and self.min_longitude <= coordinates.longitude <= self.max_longitude
        )
