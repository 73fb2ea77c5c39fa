"""Forecast-vs-history window planning.

A trip that overlaps ``[today, today + horizon]`` gets a real forecast for
the overlapping days. Any other trip is looked up in last year's archive for
the same calendar span, as a seasonal proxy.
"""

import calendar
import logging
from datetime import date, timedelta

from weathernotes.models.weather import WeatherWindow, WindowMode

logger = logging.getLogger(__name__)

HORIZON_DAYS = 16  # Open-Meteo forecast API maximum lookahead


def shift_year_back(d: date) -> date:
    """Same month/day one year earlier; Feb 29 maps to Feb 28."""
    year = d.year - 1
    if d.month == 2 and d.day == 29 and not calendar.isleap(year):
        return date(year, 2, 28)
    return d.replace(year=year)


def plan_window(
    arrival: date,
    departure: date,
    today: date,
    horizon_days: int = HORIZON_DAYS,
) -> WeatherWindow:
    """Decide forecast or history mode and the span to query."""
    if arrival > departure:
        raise ValueError(f"arrival {arrival} is after departure {departure}")
    if horizon_days < 0:
        raise ValueError(f"horizon_days must be >= 0, got {horizon_days}")

    horizon_end = today + timedelta(days=horizon_days)

    if arrival <= horizon_end and departure >= today:
        window = WeatherWindow(
            mode=WindowMode.FORECAST,
            query_start=max(arrival, today),
            query_end=min(departure, horizon_end),
            display_start=arrival,
            display_end=departure,
        )
    else:
        window = WeatherWindow(
            mode=WindowMode.HISTORY,
            query_start=shift_year_back(arrival),
            query_end=shift_year_back(departure),
            display_start=arrival,
            display_end=departure,
        )

    logger.debug(
        "Planned %s window %s -> %s for trip %s -> %s (today %s)",
        window.mode, window.query_start, window.query_end,
        arrival, departure, today,
    )
    return window
