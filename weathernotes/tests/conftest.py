"""Shared test fixtures."""

from collections.abc import Callable
from datetime import date, timedelta
from pathlib import Path

import pytest
import yaml

from weathernotes.config.schema import AppConfig
from weathernotes.models.weather import DayTemp, GeoInfo


@pytest.fixture
def rome() -> GeoInfo:
    return GeoInfo(latitude=41.89, longitude=12.48, timezone="Europe/Rome", name="Rome")


@pytest.fixture
def make_note() -> Callable[..., str]:
    """Factory for note text with a frontmatter header and a body."""

    def _make(
        city: str = "Rome",
        arrival: str = "2025-08-20",
        departure: str = "2025-08-25",
        body: str = "# Packing list\n\n- sunscreen\n",
    ) -> str:
        return (
            "---\n"
            f"city: {city}\n"
            f"arrival: {arrival}\n"
            f"departure: {departure}\n"
            "---\n\n"
            f"{body}"
        )

    return _make


@pytest.fixture
def make_days() -> Callable[..., list[DayTemp]]:
    """Factory for contiguous daily readings starting at a date."""

    def _make(
        start: date, count: int, high: float = 30.0, low: float = 20.0
    ) -> list[DayTemp]:
        return [
            DayTemp(date=start + timedelta(days=i), high=high + i, low=low - i)
            for i in range(count)
        ]

    return _make


@pytest.fixture
def default_config() -> AppConfig:
    return AppConfig()


@pytest.fixture
def fast_config() -> AppConfig:
    """Config with test URLs and no retry delay."""
    return AppConfig(
        open_meteo={
            "geocode_url": "https://test-geo.example.com/v1/search",
            "forecast_url": "https://test-api.example.com/v1/forecast",
            "archive_url": "https://test-archive.example.com/v1/era5",
            "max_retries": 1,
            "retry_delay": 0.0,
        }
    )


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "open_meteo": {"country_code": "FR", "default_timezone": "Europe/Paris"},
        "planner": {"horizon_days": 7},
    }
    path = tmp_path / "weathernotes.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path
