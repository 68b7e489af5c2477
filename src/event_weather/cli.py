"""Command-line interface for event weather lookups."""

import argparse
import asyncio
import logging
import sys

import httpx

from event_weather.config import get_settings
from event_weather.models.weather import ResolutionResult
from event_weather.resolver import LocationWeatherResolver


def format_result(result: ResolutionResult) -> str:
    """Render a resolution result as plain text."""
    if not result.is_valid:
        return f"{result.location}: {result.error}"

    lines = [f"{result.coordinates.display_name()} ({result.coordinates})"]
    for day in result.forecast:
        lines.append(f"  {day.date.isoformat()}  {day.icon}  {day.temperature:>3}°C  {day.description}")
    return "\n".join(lines)


async def _run(args: argparse.Namespace) -> int:
    settings = get_settings()
    async with httpx.AsyncClient(timeout=settings.http_timeout_seconds) as client:
        resolver = LocationWeatherResolver.from_settings(settings, client=client)

        if args.command == "geocode":
            coordinates = await resolver.resolve_coordinates_only(args.location)
            if coordinates is None:
                print(f"Could not locate '{args.location}' in {resolver.region.name}")
                return 1
            if args.json:
                print(coordinates.model_dump_json(indent=2))
            else:
                print(f"{coordinates.display_name()} ({coordinates})")
            return 0

        result = await resolver.resolve(args.location)
        print(result.model_dump_json(indent=2) if args.json else format_result(result))
        return 0 if result.is_valid else 1


def _serve() -> int:
    import uvicorn

    from event_weather.api import create_app

    settings = get_settings()
    uvicorn.run(create_app(), host=settings.host, port=settings.port)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Event Weather - Forecasts for event locations in Sweden"
    )
    parser.add_argument(
        "--version",
        action="version",
        version="%(prog)s 0.1.0",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print results as JSON",
    )

    # Also accepted after the subcommand; SUPPRESS keeps a leading --json
    output_parser = argparse.ArgumentParser(add_help=False)
    output_parser.add_argument(
        "--json",
        action="store_true",
        default=argparse.SUPPRESS,
        help="Print results as JSON",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Forecast command
    forecast_parser = subparsers.add_parser(
        "forecast", parents=[output_parser], help="Get the daily forecast for a location"
    )
    forecast_parser.add_argument("location", help="Address or place name")

    # Geocode command
    geocode_parser = subparsers.add_parser(
        "geocode", parents=[output_parser], help="Get coordinates for a location"
    )
    geocode_parser.add_argument("location", help="Address or place name")

    # Serve command
    subparsers.add_parser("serve", help="Run the HTTP API")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    logging.basicConfig(
        level=get_settings().log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if args.command == "serve":
        return _serve()
    return asyncio.run(_run(args))


if __name__ == "__main__":
    sys.exit(main())
