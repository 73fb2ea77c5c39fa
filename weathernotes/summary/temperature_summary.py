"""Temperature summarizer: overall extremes and ranges over a set of days."""

from weathernotes.errors import EmptyDatasetError
from weathernotes.models.weather import DayTemp, Summary


def summarize(days: list[DayTemp]) -> Summary:
    """Reduce daily readings to overall high/low and per-series ranges.

    Values are kept unrounded; rounding is a display concern.
    """
    if not days:
        raise EmptyDatasetError("cannot summarize an empty dataset")

    highs = [d.high for d in days]
    lows = [d.low for d in days]
    return Summary(
        overall_high=max(highs),
        overall_low=min(lows),
        day_count=len(days),
        high_range=(min(highs), max(highs)),
        low_range=(min(lows), max(lows)),
    )
