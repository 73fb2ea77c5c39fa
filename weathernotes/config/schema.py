"""Pydantic v2 configuration schema with strict validation."""

from pydantic import BaseModel, Field

GEOCODE_BASE = "https://geocoding-api.open-meteo.com/v1"
FORECAST_BASE = "https://api.open-meteo.com/v1"
ARCHIVE_BASE = "https://archive-api.open-meteo.com/v1"


class OpenMeteoConfig(BaseModel):
    model_config = {"extra": "forbid"}

    geocode_url: str = f"{GEOCODE_BASE}/search"
    forecast_url: str = f"{FORECAST_BASE}/forecast"
    archive_url: str = f"{ARCHIVE_BASE}/era5"
    country_code: str = Field(default="IT", min_length=2, max_length=2)
    default_timezone: str = "Europe/Rome"
    timeout: float = Field(default=30.0, gt=0.0)
    max_retries: int = Field(default=2, ge=0, le=10)
    retry_delay: float = Field(default=0.1, ge=0.0)


class PlannerConfig(BaseModel):
    model_config = {"extra": "forbid"}

    horizon_days: int = Field(default=16, ge=1, le=16)


class ScanConfig(BaseModel):
    model_config = {"extra": "forbid"}

    extensions: list[str] = [".md"]
    skip_hidden: bool = True
    skip_missing_frontmatter: bool = True


class AppConfig(BaseModel):
    model_config = {"extra": "forbid"}

    open_meteo: OpenMeteoConfig = OpenMeteoConfig()
    planner: PlannerConfig = PlannerConfig()
    scan: ScanConfig = ScanConfig()
