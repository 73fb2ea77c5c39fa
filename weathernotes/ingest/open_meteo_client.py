"""Open-Meteo geocoding, forecast and archive client with bounded retries."""

import logging
import time
from datetime import date, datetime

import httpx

from weathernotes.config.schema import OpenMeteoConfig
from weathernotes.errors import FetchError, GeocodeError
from weathernotes.models.weather import DayTemp, GeoInfo, WindowMode

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "weathernotes/0.1.0"
DAILY_FIELDS = "temperature_2m_max,temperature_2m_min"


def _is_retryable(status_code: int) -> bool:
    return status_code == 429 or status_code >= 500


class OpenMeteoClient:
    def __init__(
        self,
        config: OpenMeteoConfig | None = None,
        user_agent: str = DEFAULT_USER_AGENT,
    ):
        self.config = config or OpenMeteoConfig()
        self.user_agent = user_agent

    def _get_json(self, url: str, params: dict) -> dict:
        """GET a JSON document.

        Retries transport errors, 429 and 5xx up to ``max_retries`` times
        with a fixed delay between attempts.
        """
        headers = {"User-Agent": self.user_agent, "Accept": "application/json"}
        max_retries = self.config.max_retries

        for attempt in range(max_retries + 1):
            try:
                resp = httpx.get(
                    url, params=params, headers=headers,
                    timeout=self.config.timeout,
                )
            except httpx.RequestError as e:
                if attempt < max_retries:
                    logger.warning(
                        "Open-Meteo request error, retrying in %.1fs (attempt %d/%d): %s",
                        self.config.retry_delay, attempt + 1, max_retries, e,
                    )
                    time.sleep(self.config.retry_delay)
                    continue
                raise

            if _is_retryable(resp.status_code) and attempt < max_retries:
                logger.warning(
                    "Open-Meteo %s returned %d, retrying in %.1fs (attempt %d/%d)",
                    url, resp.status_code, self.config.retry_delay,
                    attempt + 1, max_retries,
                )
                time.sleep(self.config.retry_delay)
                continue
            resp.raise_for_status()
            return resp.json()

        raise AssertionError("retry loop exited without a response")

    def geocode(self, city: str) -> GeoInfo:
        """Resolve a city name within the configured country."""
        params = {
            "name": city,
            "country": self.config.country_code,
            "count": 1,
        }
        try:
            raw = self._get_json(self.config.geocode_url, params)
        except (httpx.HTTPError, ValueError) as e:
            raise GeocodeError(f"geocoding request failed for {city!r}: {e}") from e

        results = (raw.get("results") if isinstance(raw, dict) else None) or []
        if not results:
            raise GeocodeError(
                f"no match for city {city!r} in country {self.config.country_code}"
            )
        item = results[0]
        try:
            return GeoInfo(
                latitude=float(item["latitude"]),
                longitude=float(item["longitude"]),
                timezone=item.get("timezone") or self.config.default_timezone,
                name=item.get("name", city),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise GeocodeError(f"malformed geocoding result for {city!r}: {e}") from e

    def get_daily(
        self, geo: GeoInfo, start: date, end: date, mode: WindowMode
    ) -> list[DayTemp]:
        """Fetch daily highs/lows from the forecast or the archive API."""
        url = (
            self.config.forecast_url if mode == WindowMode.FORECAST
            else self.config.archive_url
        )
        params = {
            "latitude": geo.latitude,
            "longitude": geo.longitude,
            "daily": DAILY_FIELDS,
            "start_date": start.isoformat(),
            "end_date": end.isoformat(),
            "timezone": geo.timezone or self.config.default_timezone,
        }
        try:
            raw = self._get_json(url, params)
        except (httpx.HTTPError, ValueError) as e:
            raise FetchError(f"{mode} request failed for {start} -> {end}: {e}") from e
        return parse_daily(raw)


def parse_daily(raw: dict) -> list[DayTemp]:
    """Convert Open-Meteo ``daily`` arrays into DayTemp rows.

    Any deviation from the expected shape raises FetchError.
    """
    daily = raw.get("daily") if isinstance(raw, dict) else None
    if not isinstance(daily, dict):
        raise FetchError("response has no daily data")

    series = {}
    for key in ("time", "temperature_2m_max", "temperature_2m_min"):
        value = daily.get(key)
        if value is None:
            value = []
        if not isinstance(value, list):
            raise FetchError(f"daily '{key}' is not a list: {value!r}")
        series[key] = value

    times = series["time"]
    highs = series["temperature_2m_max"]
    lows = series["temperature_2m_min"]
    if not (len(times) == len(highs) == len(lows)):
        raise FetchError(
            f"daily arrays have mismatched lengths: time={len(times)}, "
            f"tmax={len(highs)}, tmin={len(lows)}"
        )

    out: list[DayTemp] = []
    for day, high, low in zip(times, highs, lows):
        if high is None or low is None:
            raise FetchError(f"missing temperature for {day}")
        try:
            parsed = datetime.strptime(day, "%Y-%m-%d").date()
        except (TypeError, ValueError) as e:
            raise FetchError(f"bad date in daily data: {day!r}") from e
        try:
            out.append(DayTemp(date=parsed, high=float(high), low=float(low)))
        except (TypeError, ValueError) as e:
            raise FetchError(
                f"non-numeric temperature for {day}: {high!r}/{low!r}"
            ) from e
    return out
