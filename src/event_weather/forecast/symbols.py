"""SMHI weather symbol (Wsymb2) lookup.

Source: https://opendata.smhi.se/apidocs/metfcst/parameters.html#parameter-wsymb

Wsymb2 is an integer in 1..27. Codes outside that range map to
UNKNOWN_SYMBOL instead of raising.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, NamedTuple


class WeatherSymbol(NamedTuple):
    """Human-readable rendering of a weather symbol code."""

    description: str
    icon: str


UNKNOWN_SYMBOL = WeatherSymbol("Unknown weather", "❓")

WSYMB2_SYMBOLS: Mapping[int, WeatherSymbol] = MappingProxyType({
    1: WeatherSymbol("Clear sky", "☀️"),
    2: WeatherSymbol("Nearly clear sky", "🌤️"),
    3: WeatherSymbol("Variable cloudiness", "⛅"),
    4: WeatherSymbol("Halfclear sky", "🌥️"),
    5: WeatherSymbol("Cloudy sky", "☁️"),
    6: WeatherSymbol("Overcast", "☁️"),
    7: WeatherSymbol("Fog", "🌫️"),
    8: WeatherSymbol("Light rain showers", "🌦️"),
    9: WeatherSymbol("Moderate rain showers", "🌧️"),
    10: WeatherSymbol("Heavy rain showers", "⛈️"),
    11: WeatherSymbol("Thunderstorm", "⛈️"),
    12: WeatherSymbol("Light sleet showers", "🌨️"),
    13: WeatherSymbol("Moderate sleet showers", "🌨️"),
    14: WeatherSymbol("Heavy sleet showers", "🌨️"),
    15: WeatherSymbol("Light snow showers", "🌨️"),
    16: WeatherSymbol("Moderate snow showers", "🌨️"),
    17: WeatherSymbol("Heavy snow showers", "🌨️"),
    18: WeatherSymbol("Light rain", "🌦️"),
    19: WeatherSymbol("Moderate rain", "🌧️"),
    20: WeatherSymbol("Heavy rain", "🌧️"),
    21: WeatherSymbol("Thunder", "⛈️"),
    22: WeatherSymbol("Light sleet", "🌨️"),
    23: WeatherSymbol("Moderate sleet", "🌨️"),
    24: WeatherSymbol("Heavy sleet", "🌨️"),
    25: WeatherSymbol("Light snowfall", "🌨️"),
    26: WeatherSymbol("Moderate snowfall", "🌨️"),
    27: WeatherSymbol("Heavy snowfall", "🌨️"),
})


def lookup_symbol(code: int | float | None) -> WeatherSymbol:
    """Map a Wsymb2 code to its description and icon.

    SMHI serializes codes as numbers that may arrive as floats (``3.0``);
    non-integral values are treated as unknown.
    """
    if code is None or isinstance(code, bool):
        return UNKNOWN_SYMBOL
    if isinstance(code, float):
        if not code.is_integer():
            return UNKNOWN_SYMBOL
        code = int(code)
    return WSYMB2_SYMBOLS.get(code, UNKNOWN_SYMBOL)
