"""YAML config loader with environment overrides for API base URLs."""

import os
from pathlib import Path
from typing import Any

import yaml

from weathernotes.config.schema import AppConfig

# env var -> (config key under open_meteo, endpoint path appended to the base)
ENV_BASE_OVERRIDES = {
    "OPEN_METEO_GEOCODE_BASE": ("geocode_url", "/search"),
    "OPEN_METEO_FORECAST_BASE": ("forecast_url", "/forecast"),
    "OPEN_METEO_ARCHIVE_BASE": ("archive_url", "/era5"),
}


def load_config(
    path: str | Path | None = None, env: dict[str, str] | None = None
) -> AppConfig:
    """Load and validate config from an optional YAML file.

    Base URL environment variables win over values from the file. Raises
    ValueError when the file is not a mapping, yaml.YAMLError when it is not
    valid YAML.
    """
    raw: dict[str, Any] = {}
    if path is not None:
        with open(Path(path)) as f:
            loaded = yaml.safe_load(f)
        if loaded is not None and not isinstance(loaded, dict):
            raise ValueError(
                f"config root must be a mapping, got {type(loaded).__name__}"
            )
        raw = loaded or {}

    if env is None:
        env = dict(os.environ)

    overrides = {
        key: env[var].rstrip("/") + suffix
        for var, (key, suffix) in ENV_BASE_OVERRIDES.items()
        if env.get(var)
    }
    if overrides:
        section = raw.get("open_meteo") or {}
        if not isinstance(section, dict):
            raise ValueError("'open_meteo' must be a mapping")
        raw["open_meteo"] = {**section, **overrides}

    return AppConfig.model_validate(raw)


def get_config_value(config: AppConfig, dotted_key: str) -> Any:
    """Look up a value by dotted path, e.g. 'open_meteo.country_code'."""
    value: Any = config.model_dump(mode="json")
    for part in dotted_key.split("."):
        if not isinstance(value, dict) or part not in value:
            raise KeyError(f"Config key not found: {dotted_key}")
        value = value[part]
    return value
