"""
Tests for the OpenWeatherMap current-conditions client.
"""

from __future__ import annotations

from typing import Any
from unittest.mock import Mock

import pytest
import requests

from dogwalk_safety.datasources.weather import (
    OPENWEATHER_API,
    SYNTHETIC_WEATHER,
    OpenWeatherClient,
    parse_current,
    synthetic_weather,
)
from dogwalk_safety.errors import SourceUnavailable
from dogwalk_safety.schemas import Coordinates

PAYLOAD: dict[str, Any] = {
    "coord": {"lon": -112.07, "lat": 33.45},
    "weather": [{"id": 800, "main": "Clear", "description": "clear sky", "icon": "01d"}],
    "main": {"temp": 104.2, "feels_like": 101.3, "humidity": 18},
    "name": "Phoenix",
    "cod": 200,
}


def _response(status: int = 200, body: object = PAYLOAD) -> Mock:
    resp = Mock()
    resp.status_code = status
    resp.ok = status < 400
    if isinstance(body, Exception):
        resp.json.side_effect = body
    else:
        resp.json.return_value = body
    return resp


def _client(resp: Mock | None = None, **kwargs: Any) -> tuple[OpenWeatherClient, Mock]:
    session = Mock()
    session.get.return_value = resp or _response()
    return OpenWeatherClient("test-key", session=session, **kwargs), session


class TestParseCurrent:
    """Test mapping the API body."""

    def test_parses_fields(self) -> None:
        weather = parse_current(PAYLOAD)
        assert weather.temperature_f == 104.2
        assert weather.humidity_pct == 18
        assert weather.condition == "clear sky"
        assert weather.location == "Phoenix"
        assert weather.icon == "01d"

    def test_missing_name(self) -> None:
        body = {**PAYLOAD, "name": ""}
        assert parse_current(body).location == "Unknown location"

    @pytest.mark.parametrize(
        "body",
        [
            {},
            {"main": {"temp": 80}, "weather": [{"description": "x"}]},
            {"main": {"temp": 80, "humidity": 50}, "weather": []},
            {"main": {"temp": "hot", "humidity": 50}, "weather": [{"description": "x"}]},
        ],
    )
    def test_bad_payload(self, body: dict[str, Any]) -> None:
        with pytest.raises(SourceUnavailable, match="Unexpected weather payload"):
            parse_current(body)


class TestOpenWeatherClient:
    """Test fetching current conditions."""

    def test_by_coordinates(self) -> None:
        client, session = _client(timeout=7)
        weather = client.by_coordinates(Coordinates(lat=33.45, lon=-112.07))

        assert weather.location == "Phoenix"
        session.get.assert_called_once()
        assert session.get.call_args.args[0] == OPENWEATHER_API
        params = session.get.call_args.kwargs["params"]
        assert params["lat"] == 33.45
        assert params["lon"] == -112.07
        assert params["units"] == "imperial"
        assert params["appid"] == "test-key"
        assert session.get.call_args.kwargs["timeout"] == 7

    def test_by_postal_code(self) -> None:
        client, session = _client()
        client.by_postal_code("85004")
        params = session.get.call_args.kwargs["params"]
        assert params["zip"] == "85004,us"
        assert "lat" not in params

    def test_error_message_from_body(self) -> None:
        resp = _response(404, {"cod": "404", "message": "city not found"})
        client, _ = _client(resp)
        with pytest.raises(SourceUnavailable, match="city not found") as exc_info:
            client.by_postal_code("00000")
        assert exc_info.value.status == 404

    def test_error_without_json_body(self) -> None:
        client, _ = _client(_response(502, ValueError("no json")))
        with pytest.raises(SourceUnavailable, match="Failed to fetch weather data"):
            client.by_postal_code("85004")

    def test_timeout(self) -> None:
        client, session = _client()
        session.get.side_effect = requests.Timeout("slow")
        with pytest.raises(SourceUnavailable, match="timed out"):
            client.by_postal_code("85004")

    def test_connection_error(self) -> None:
        client, session = _client()
        session.get.side_effect = requests.ConnectionError("refused")
        with pytest.raises(SourceUnavailable, match="refused"):
            client.by_postal_code("85004")

    def test_non_json_success(self) -> None:
        client, _ = _client(_response(200, ValueError("bad json")))
        with pytest.raises(SourceUnavailable, match="not JSON"):
            client.by_postal_code("85004")

    def test_missing_api_key(self) -> None:
        session = Mock()
        client = OpenWeatherClient("", session=session)
        with pytest.raises(SourceUnavailable, match="API key"):
            client.by_postal_code("85004")
        session.get.assert_not_called()

    def test_single_attempt(self) -> None:
        client, session = _client(_response(503, {"message": "busy"}))
        with pytest.raises(SourceUnavailable):
            client.by_postal_code("85004")
        assert session.get.call_count == 1


class TestSynthetic:
    """Test the fallback sample."""

    def test_sample_values(self) -> None:
        weather = synthetic_weather()
        assert weather is SYNTHETIC_WEATHER
        assert weather.temperature_f == 95.0
        assert weather.humidity_pct == 70.0
        assert weather.location == "Mockville, USA"
