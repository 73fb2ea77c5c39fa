"""Weather fetcher: retrieves the daily readings for a planned window."""

import logging
from datetime import timedelta

from weathernotes.errors import FetchError
from weathernotes.ingest.open_meteo_client import OpenMeteoClient
from weathernotes.models.weather import DayTemp, GeoInfo, WeatherWindow

logger = logging.getLogger(__name__)


class WeatherFetcher:
    def __init__(self, client: OpenMeteoClient):
        self.client = client

    def fetch(self, geo: GeoInfo, window: WeatherWindow) -> list[DayTemp]:
        """Fetch exactly one reading per day of the window's query span.

        A response with a different number of days, or with dates that are
        missing, duplicated or outside the span, is rejected.
        """
        days = self.client.get_daily(
            geo, window.query_start, window.query_end, window.mode
        )
        if len(days) != window.query_days:
            raise FetchError(
                f"expected {window.query_days} days for "
                f"{window.query_start} -> {window.query_end}, got {len(days)}"
            )

        days = sorted(days, key=lambda d: d.date)
        expected = [
            window.query_start + timedelta(days=i)
            for i in range(window.query_days)
        ]
        got = [d.date for d in days]
        if got != expected:
            unexpected = sorted(set(got) - set(expected))
            missing = sorted(set(expected) - set(got))
            raise FetchError(
                f"dates do not cover {window.query_start} -> {window.query_end}: "
                f"missing={[str(d) for d in missing]} "
                f"unexpected={[str(d) for d in unexpected]}"
            )

        logger.debug(
            "Fetched %d %s days at %.4f,%.4f",
            len(days), window.mode, geo.latitude, geo.longitude,
        )
        return days
