"""Weather data models: geocoding results, daily readings, windows, summaries."""

from dataclasses import dataclass
from datetime import date
from enum import StrEnum


class WindowMode(StrEnum):
    FORECAST = "forecast"
    HISTORY = "history"


@dataclass(frozen=True)
class GeoInfo:
    latitude: float
    longitude: float
    timezone: str
    name: str = ""


@dataclass(frozen=True)
class DayTemp:
    date: date
    high: float  # °C
    low: float  # °C


@dataclass(frozen=True)
class WeatherWindow:
    mode: WindowMode
    query_start: date
    query_end: date
    display_start: date
    display_end: date

    @property
    def query_days(self) -> int:
        """Number of daily readings expected for the query span."""
        return (self.query_end - self.query_start).days + 1

    @property
    def is_shifted(self) -> bool:
        return (self.query_start, self.query_end) != (
            self.display_start, self.display_end,
        )


@dataclass(frozen=True)
class Summary:
    overall_high: float
    overall_low: float
    day_count: int
    high_range: tuple[float, float]
    low_range: tuple[float, float]
