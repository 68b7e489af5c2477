"""Geocoding and weather routes.

Thin handlers over `LocationWeatherResolver`; all pipeline logic lives there.
"""

from __future__ import annotations

import datetime as dt
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from event_weather.events import EventWeatherService
from event_weather.models.location import LocationCoordinates
from event_weather.models.weather import DailyForecast, ResolutionResult
from event_weather.providers.base import ProviderError
from event_weather.resolver import LocationWeatherResolver, UnsupportedRegionError

router = APIRouter()


class GeocodeResponse(BaseModel):
    """Geocoding result."""

    success: bool
    coordinates: LocationCoordinates | None = None
    error: str | None = None


def get_resolver(request: Request) -> LocationWeatherResolver:
    """Get the resolver built at application startup."""
    return request.app.state.resolver


def get_event_weather_service(request: Request) -> EventWeatherService:
    """Get the event weather service built at application startup."""
    return request.app.state.event_weather


@router.get("/geocode", response_model=GeocodeResponse)
async def geocode_address(
    address: Annotated[str, Query(min_length=1, description="Address or place name")],
    resolver: LocationWeatherResolver = Depends(get_resolver),
):
    """Geocode an address inside the supported region.

    Unlike `resolve_coordinates_only`, the reason for a failure is reported
    back to the caller.
    """
    try:
        coordinates = await resolver.locate(address)
    except (ProviderError, UnsupportedRegionError) as e:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=GeocodeResponse(success=False, error=str(e)).model_dump(mode="json"),
        )

    return GeocodeResponse(success=True, coordinates=coordinates)


@router.get("/weather", response_model=ResolutionResult)
async def get_weather(
    location: Annotated[str, Query(min_length=1, description="Free-text event location")],
    resolver: LocationWeatherResolver = Depends(get_resolver),
) -> ResolutionResult:
    """Get the daily forecast for a location.

    Always answers 200; check `is_valid` and `error` in the body.
    """
    return await resolver.resolve(location)


@router.get("/weather/event", response_model=DailyForecast | None)
async def get_event_weather(
    location: Annotated[str, Query(min_length=1, description="Free-text event location")],
    date: Annotated[dt.date, Query(description="Event date (YYYY-MM-DD)")],
    service: EventWeatherService = Depends(get_event_weather_service),
) -> DailyForecast | None:
    """Get the forecast, or a seasonal estimate, for an event day."""
    return await service.get_event_weather(location, date)
