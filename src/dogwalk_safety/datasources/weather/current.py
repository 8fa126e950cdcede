"""Current conditions from the OpenWeatherMap current-weather endpoint."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import requests
from pydantic import ValidationError

from dogwalk_safety.datasources.weather.client import COUNTRY_CODE, OPENWEATHER_API, UNITS
from dogwalk_safety.errors import SourceUnavailable
from dogwalk_safety.schemas import RawWeather
from dogwalk_safety.services.http import DEFAULT_TIMEOUT, create_session

if TYPE_CHECKING:
    from dogwalk_safety.schemas import Coordinates

logger = logging.getLogger(__name__)


def parse_current(data: dict[str, Any]) -> RawWeather:
    """Map an OpenWeatherMap response body to ``RawWeather``.

    Raises:
        SourceUnavailable: Required fields are missing or malformed.
    """
    try:
        main = data["main"]
        weather = data["weather"][0]
        return RawWeather(
            temperature_f=main["temp"],
            humidity_pct=main["humidity"],
            condition=weather["description"],
            location=data.get("name") or "Unknown location",
            icon=weather.get("icon"),
        )
    except (KeyError, IndexError, TypeError, ValidationError) as err:
        msg = f"Unexpected weather payload: {err}"
        raise SourceUnavailable(msg) from err


def _error_message(resp: requests.Response) -> str:
    # Error bodies look like {"cod": "404", "message": "city not found"}
    try:
        body = resp.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return "Failed to fetch weather data"


class OpenWeatherClient:
    """Fetches current conditions by coordinates or by US ZIP code.

    Each call is a single GET with a fixed deadline. Every failure (network
    error, timeout, non-2xx, bad body) is raised as ``SourceUnavailable``.
    """

    def __init__(
        self,
        api_key: str,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        self.api_key = api_key
        self.timeout = timeout
        self.session = session or create_session(timeout=timeout)

    def by_coordinates(self, coords: Coordinates) -> RawWeather:
        return self._fetch({"lat": coords.lat, "lon": coords.lon})

    def by_postal_code(self, postal_code: str) -> RawWeather:
        return self._fetch({"zip": f"{postal_code},{COUNTRY_CODE}"})

    def _fetch(self, query: dict[str, Any]) -> RawWeather:
        if not self.api_key:
            msg = "No OpenWeatherMap API key configured"
            raise SourceUnavailable(msg)

        params = {**query, "appid": self.api_key, "units": UNITS}
        try:
            resp = self.session.get(OPENWEATHER_API, params=params, timeout=self.timeout)
        except requests.Timeout as err:
            msg = f"Weather request timed out after {self.timeout}s"
            raise SourceUnavailable(msg) from err
        except requests.RequestException as err:
            msg = f"Weather request failed: {err}"
            raise SourceUnavailable(msg) from err

        if not resp.ok:
            raise SourceUnavailable(_error_message(resp), status=resp.status_code)

        try:
            data: dict[str, Any] = resp.json()
        except ValueError as err:
            msg = "Weather response is not JSON"
            raise SourceUnavailable(msg) from err

        weather = parse_current(data)
        logger.debug("Fetched weather for %s: %.1fF", weather.location, weather.temperature_f)
        return weather
