"""Forecast reshaping: symbol lookup and daily summaries."""

from event_weather.forecast.daily import (
    group_by_date,
    pick_representative,
    round_temperature,
    summarize_daily,
)
from event_weather.forecast.symbols import (
    UNKNOWN_SYMBOL,
    WSYMB2_SYMBOLS,
    WeatherSymbol,
    lookup_symbol,
)

__all__ = [
    "group_by_date",
    "pick_representative",
    "round_temperature",
    "summarize_daily",
    "UNKNOWN_SYMBOL",
    "WSYMB2_SYMBOLS",
    "WeatherSymbol",
    "lookup_symbol",
]
