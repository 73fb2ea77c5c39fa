"""Tests for the Open-Meteo client with mocked httpx."""

from datetime import date
from unittest.mock import patch

import httpx
import pytest
import respx

from weathernotes.config.schema import AppConfig
from weathernotes.errors import FetchError, GeocodeError
from weathernotes.ingest.open_meteo_client import OpenMeteoClient, parse_daily
from weathernotes.models.weather import WindowMode

GEO_URL = "https://test-geo.example.com/v1/search"
FORECAST_URL = "https://test-api.example.com/v1/forecast"
ARCHIVE_URL = "https://test-archive.example.com/v1/era5"

DAILY_JSON = {
    "daily": {
        "time": ["2025-08-20", "2025-08-21"],
        "temperature_2m_max": [30.1, 31.7],
        "temperature_2m_min": [19.0, 20.2],
    }
}


@pytest.fixture
def client(fast_config: AppConfig) -> OpenMeteoClient:
    return OpenMeteoClient(fast_config.open_meteo)


class TestGeocode:
    @respx.mock
    def test_success(self, client: OpenMeteoClient):
        route = respx.get(GEO_URL).mock(
            return_value=httpx.Response(200, json={"results": [
                {"name": "Rome", "latitude": 41.89, "longitude": 12.48, "timezone": "Europe/Rome"}
            ]})
        )
        geo = client.geocode("Rome")
        assert geo.latitude == 41.89
        assert geo.timezone == "Europe/Rome"
        params = route.calls[0].request.url.params
        assert params["name"] == "Rome"
        assert params["country"] == "IT"
        assert params["count"] == "1"

    @respx.mock
    def test_user_agent_header(self, client: OpenMeteoClient):
        route = respx.get(GEO_URL).mock(
            return_value=httpx.Response(200, json={"results": [
                {"latitude": 1.0, "longitude": 2.0, "timezone": "Europe/Rome"}
            ]})
        )
        client.geocode("Rome")
        assert "weathernotes" in route.calls[0].request.headers["user-agent"]

    @respx.mock
    def test_default_timezone(self, client: OpenMeteoClient):
        respx.get(GEO_URL).mock(
            return_value=httpx.Response(200, json={"results": [
                {"latitude": 45.46, "longitude": 9.19}
            ]})
        )
        assert client.geocode("Milan").timezone == "Europe/Rome"

    @respx.mock
    def test_not_found(self, client: OpenMeteoClient):
        respx.get(GEO_URL).mock(return_value=httpx.Response(200, json={"generationtime_ms": 0.5}))
        with pytest.raises(GeocodeError, match="no match"):
            client.geocode("Atlantis")

    @respx.mock
    def test_exhausted_retries(self, client: OpenMeteoClient):
        route = respx.get(GEO_URL).mock(return_value=httpx.Response(503))
        with patch("weathernotes.ingest.open_meteo_client.time.sleep"), pytest.raises(GeocodeError):
            client.geocode("Rome")
        assert route.call_count == 2

    @respx.mock
    def test_malformed_result(self, client: OpenMeteoClient):
        respx.get(GEO_URL).mock(
            return_value=httpx.Response(200, json={"results": [{"name": "Rome"}]})
        )
        with pytest.raises(GeocodeError, match="malformed"):
            client.geocode("Rome")


class TestGetDaily:
    @respx.mock
    def test_forecast_endpoint(self, client: OpenMeteoClient, rome):
        route = respx.get(FORECAST_URL).mock(return_value=httpx.Response(200, json=DAILY_JSON))
        days = client.get_daily(rome, date(2025, 8, 20), date(2025, 8, 21), WindowMode.FORECAST)
        assert [d.high for d in days] == [30.1, 31.7]
        params = route.calls[0].request.url.params
        assert params["start_date"] == "2025-08-20"
        assert params["end_date"] == "2025-08-21"
        assert params["daily"] == "temperature_2m_max,temperature_2m_min"
        assert params["timezone"] == "Europe/Rome"

    @respx.mock
    def test_history_uses_archive(self, client: OpenMeteoClient, rome):
        forecast = respx.get(FORECAST_URL).mock(return_value=httpx.Response(200, json=DAILY_JSON))
        archive = respx.get(ARCHIVE_URL).mock(return_value=httpx.Response(200, json=DAILY_JSON))
        client.get_daily(rome, date(2024, 8, 20), date(2024, 8, 21), WindowMode.HISTORY)
        assert archive.called
        assert not forecast.called

    @respx.mock
    def test_retry_on_503(self, client: OpenMeteoClient, rome):
        route = respx.get(FORECAST_URL).mock(
            side_effect=[httpx.Response(503), httpx.Response(200, json=DAILY_JSON)]
        )
        with patch("weathernotes.ingest.open_meteo_client.time.sleep") as sleep:
            days = client.get_daily(rome, date(2025, 8, 20), date(2025, 8, 21), WindowMode.FORECAST)
        assert len(days) == 2
        assert route.call_count == 2
        sleep.assert_called_once_with(0.0)

    @respx.mock
    def test_retry_on_network_error(self, client: OpenMeteoClient, rome):
        route = respx.get(FORECAST_URL).mock(
            side_effect=[httpx.ConnectError("boom"), httpx.Response(200, json=DAILY_JSON)]
        )
        with patch("weathernotes.ingest.open_meteo_client.time.sleep"):
            days = client.get_daily(rome, date(2025, 8, 20), date(2025, 8, 21), WindowMode.FORECAST)
        assert len(days) == 2
        assert route.call_count == 2

    @respx.mock
    def test_network_error_exhausted(self, client: OpenMeteoClient, rome):
        respx.get(FORECAST_URL).mock(side_effect=httpx.ConnectError("down"))
        with patch("weathernotes.ingest.open_meteo_client.time.sleep"), pytest.raises(FetchError):
            client.get_daily(rome, date(2025, 8, 20), date(2025, 8, 21), WindowMode.FORECAST)

    @respx.mock
    def test_client_error_not_retried(self, client: OpenMeteoClient, rome):
        route = respx.get(FORECAST_URL).mock(return_value=httpx.Response(400, json={"reason": "bad"}))
        with pytest.raises(FetchError, match="400"):
            client.get_daily(rome, date(2025, 8, 20), date(2025, 8, 21), WindowMode.FORECAST)
        assert route.call_count == 1

    @respx.mock
    def test_invalid_json(self, client: OpenMeteoClient, rome):
        respx.get(FORECAST_URL).mock(return_value=httpx.Response(200, text="not json"))
        with pytest.raises(FetchError):
            client.get_daily(rome, date(2025, 8, 20), date(2025, 8, 21), WindowMode.FORECAST)


class TestParseDaily:
    def test_empty_arrays(self):
        raw = {"daily": {"time": [], "temperature_2m_max": [], "temperature_2m_min": []}}
        assert parse_daily(raw) == []

    def test_mismatched_lengths(self):
        raw = {"daily": {
            "time": ["2025-01-01", "2025-01-02"],
            "temperature_2m_max": [10.0],
            "temperature_2m_min": [1.0, 2.0],
        }}
        with pytest.raises(FetchError, match="mismatched lengths"):
            parse_daily(raw)

    def test_missing_daily(self):
        with pytest.raises(FetchError, match="no daily data"):
            parse_daily({"error": True})

    def test_null_temperature(self):
        raw = {"daily": {
            "time": ["2025-01-01"],
            "temperature_2m_max": [None],
            "temperature_2m_min": [1.0],
        }}
        with pytest.raises(FetchError, match="missing temperature"):
            parse_daily(raw)

    def test_bad_date(self):
        raw = {"daily": {
            "time": ["01/01/2025"],
            "temperature_2m_max": [3.0],
            "temperature_2m_min": [1.0],
        }}
        with pytest.raises(FetchError, match="bad date"):
            parse_daily(raw)

    def test_non_numeric_temperature(self):
        raw = {"daily": {
            "time": ["2025-01-01"],
            "temperature_2m_max": ["hot"],
            "temperature_2m_min": [1.0],
        }}
        with pytest.raises(FetchError, match="non-numeric temperature"):
            parse_daily(raw)

    def test_nested_temperature(self):
        raw = {"daily": {
            "time": ["2025-01-01"],
            "temperature_2m_max": [[3.0]],
            "temperature_2m_min": [1.0],
        }}
        with pytest.raises(FetchError, match="non-numeric temperature"):
            parse_daily(raw)

    def test_series_not_a_list(self):
        raw = {"daily": {"time": 5, "temperature_2m_max": [], "temperature_2m_min": []}}
        with pytest.raises(FetchError, match="not a list"):
            parse_daily(raw)

    def test_non_string_date(self):
        raw = {"daily": {
            "time": [20250101],
            "temperature_2m_max": [3.0],
            "temperature_2m_min": [1.0],
        }}
        with pytest.raises(FetchError, match="bad date"):
            parse_daily(raw)

    def test_values(self):
        days = parse_daily(DAILY_JSON)
        assert days[0].date == date(2025, 8, 20)
        assert days[1].low == 20.2
