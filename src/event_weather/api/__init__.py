"""FastAPI application and routes.

This module provides the REST API for event weather lookups.

## API Structure

- /health - Liveness check
- /api/geocode - Geocode an address inside the supported region
- /api/weather - Daily forecast for a free-text location
- /api/weather/event - Forecast or seasonal estimate for one event day

Authentication, rate limiting and the event store live in the surrounding
application and are not part of this service.
"""

from event_weather.api.app import create_app

__all__ = ["create_app"]
