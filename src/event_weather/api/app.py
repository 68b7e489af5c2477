"""FastAPI application factory.

Creates and configures the FastAPI application with all routes and middleware.

## Usage

```python
from event_weather.api import create_app

app = create_app()

# Run with uvicorn
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
```

## Configuration

The app is configured via environment variables. See `event_weather.config`
for available settings.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from event_weather.config import get_settings
from event_weather.events import EventWeatherService
from event_weather.resolver import LocationWeatherResolver

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Opens one HTTP client shared by both providers and closes it on
    shutdown. A resolver already placed on ``app.state`` (as tests do) is
    left untouched.
    """
    settings = get_settings()

    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    if not settings.geocoding_configured:
        logger.warning("GOOGLE_MAPS_API_KEY is not set; geocoding will fail")

    client: httpx.AsyncClient | None = None
    if getattr(app.state, "resolver", None) is None:
        client = httpx.AsyncClient(timeout=settings.http_timeout_seconds)
        app.state.resolver = LocationWeatherResolver.from_settings(settings, client=client)
    app.state.event_weather = EventWeatherService(
        app.state.resolver,
        seasonal_estimate_after_days=settings.seasonal_estimate_after_days,
    )

    yield

    # Shutdown
    logger.info("Shutting down")
    if client is not None:
        await client.aclose()


def create_app(resolver: LocationWeatherResolver | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        resolver: Pre-built resolver; built from settings at startup if omitted

    Returns:
        Configured FastAPI application
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Geocoding and SMHI weather lookups for event locations",
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
        lifespan=lifespan,
    )
    app.state.resolver = resolver

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    # Include routers
    from event_weather.api.routes import weather

    app.include_router(weather.router, prefix="/api", tags=["Weather"])

    # Health check endpoint
    @app.get("/health", tags=["Health"])
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "version": settings.app_version}

    return app
