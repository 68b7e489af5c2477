"""Daily forecast summarization.

The forecast provider returns instantaneous samples, several per day and at
irregular spacing. A day is summarized by one representative sample:

1. Samples are grouped by their UTC calendar date.
2. Within a date, the sample whose UTC hour is in [11, 13] and which is
   closest to 12:00 is used (earliest wins a tie).
3. A date with no sample in that window falls back to its first
   chronological sample.

All hours and dates are UTC. For Swedish locations (UTC+1/UTC+2) a sample
just after local midnight therefore lands on the previous calendar date.
"""

from __future__ import annotations

import datetime as dt
from collections import defaultdict
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from event_weather.forecast.symbols import lookup_symbol
from event_weather.models.weather import DailyForecast, WeatherSample

NOON_WINDOW_START_HOUR = 11
NOON_WINDOW_END_HOUR = 13
DEFAULT_MAX_DAYS = 10

_NOON_MINUTES = 12 * 60


def round_temperature(value: float) -> int:
    """Round a temperature to the nearest integer, halves away from zero."""
    return int(Decimal(repr(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def group_by_date(samples: Iterable[WeatherSample]) -> dict[dt.date, list[WeatherSample]]:
    """Group samples by UTC date, each group in chronological order."""
    groups: dict[dt.date, list[WeatherSample]] = defaultdict(list)
    for sample in samples:
        groups[sample.date].append(sample)
    for day_samples in groups.values():
        day_samples.sort(key=lambda s: s.time)
    return dict(groups)


def _minutes_from_noon(sample: WeatherSample) -> int:
    return abs(sample.time.hour * 60 + sample.time.minute - _NOON_MINUTES)


def pick_representative(day_samples: list[WeatherSample]) -> WeatherSample:
    """Pick the sample that stands for the whole day.

    Args:
        day_samples: Non-empty samples of one date, in chronological order
    """
    in_window = [
        s
        for s in day_samples
        if NOON_WINDOW_START_HOUR <= s.time.hour <= NOON_WINDOW_END_HOUR
    ]
    if in_window:
        # min() keeps the first of equal keys, so the earliest sample wins ties
        return min(in_window, key=_minutes_from_noon)
    return day_samples[0]


def to_daily_forecast(day: dt.date, sample: WeatherSample) -> DailyForecast:
    """Render a representative sample as a DailyForecast.

    A missing temperature reads as 0 degrees.
    """
    symbol = lookup_symbol(sample.symbol)
    return DailyForecast(
        date=day,
        temperature=round_temperature(sample.temperature_c or 0.0),
        description=symbol.description,
        icon=symbol.icon,
    )


def summarize_daily(
    samples: Iterable[WeatherSample],
    max_days: int = DEFAULT_MAX_DAYS,
) -> list[DailyForecast]:
    """Reduce a sample time series to at most ``max_days`` daily entries.

    Returns:
        One entry per distinct UTC date, ascending, truncated to the
        first ``max_days`` dates
    """
    groups = group_by_date(samples)
    return [
        to_daily_forecast(day, pick_representative(groups[day]))
        for day in sorted(groups)[:max_days]
    ]
