"""
Weather acquisition chain.

Tries each source once, in a fixed order, until one yields raw conditions:

    1. geo          device location -> weather by coordinates
    2. postal_code  weather by 5-digit US ZIP code (only if one was given)
    3. synthetic    fixed sample, tagged so callers can warn the user

Per-source failures (permission declined, network error, timeout, bad
response) are logged and swallowed. Providers should raise ``PermissionDenied``
or ``SourceUnavailable``; raw ``requests`` errors and ``TimeoutError`` are
treated the same way. Only when every source is exhausted does
``acquire_current`` raise ``AllSourcesExhausted``. The winning payload is
combined with the heat index and walk-time advice into a ``WeatherSnapshot``.
"""

from __future__ import annotations

import logging
import re
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Protocol

import requests

from dogwalk_safety import heat_index, walk_times
from dogwalk_safety.datasources.weather.synthetic import synthetic_weather
from dogwalk_safety.errors import (
    AllSourcesExhausted,
    InvalidPostalCode,
    PermissionDenied,
    SourceUnavailable,
)
from dogwalk_safety.schemas import RawWeather, SourceMethod, WeatherSnapshot

if TYPE_CHECKING:
    from collections.abc import Callable

    from dogwalk_safety.datasources.location import LocationProvider
    from dogwalk_safety.schemas import Coordinates

logger = logging.getLogger(__name__)

POSTAL_CODE_RE = re.compile(r"[0-9]{5}")

DEFAULT_LOCATION_TIMEOUT = 20.0  # seconds

# Failures that exhaust one source without ending the chain
SOURCE_ERRORS = (PermissionDenied, SourceUnavailable, TimeoutError, requests.RequestException)


class WeatherSource(Protocol):
    def by_coordinates(self, coords: Coordinates) -> RawWeather: ...

    def by_postal_code(self, postal_code: str) -> RawWeather: ...


def validate_postal_code(postal_code: str) -> str:
    """Return the code stripped of whitespace if it is exactly five digits.

    Raises:
        InvalidPostalCode: Anything else.
    """
    code = postal_code.strip()
    if not POSTAL_CODE_RE.fullmatch(code):
        msg = f"Postal code must be exactly 5 digits, got {postal_code!r}"
        raise InvalidPostalCode(msg)
    return code


def build_snapshot(
    raw: RawWeather,
    source: SourceMethod,
    captured_at: datetime | None = None,
) -> WeatherSnapshot:
    """Attach the heat index and walk-time advice to raw conditions."""
    return WeatherSnapshot(
        temperature_f=raw.temperature_f,
        humidity_pct=raw.humidity_pct,
        condition=raw.condition,
        location=raw.location,
        captured_at=captured_at or datetime.now(UTC),
        source=source,
        heat_index=heat_index.evaluate(raw.temperature_f, raw.humidity_pct),
        walk_times=tuple(walk_times.recommend(raw.temperature_f)),
    )


class WeatherAcquirer:
    """Runs the geo -> postal code -> synthetic chain.

    Args:
        weather: Provider of raw conditions (``OpenWeatherClient`` in production).
        location: Device-location provider. ``None`` skips the geo step.
        location_timeout: Deadline for one location fix, in seconds.
        allow_synthetic: Whether the synthetic sample may end the chain.
        clock: Returns the capture time of a snapshot.
    """

    def __init__(
        self,
        weather: WeatherSource,
        location: LocationProvider | None = None,
        *,
        location_timeout: float = DEFAULT_LOCATION_TIMEOUT,
        allow_synthetic: bool = True,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.weather = weather
        self.location = location
        self.location_timeout = location_timeout
        self.allow_synthetic = allow_synthetic
        self.clock = clock or (lambda: datetime.now(UTC))

    def acquire_current(
        self,
        postal_code: str | None = None,
        *,
        synthetic: bool = False,
    ) -> WeatherSnapshot:
        """Return current conditions from the first source that answers.

        Args:
            postal_code: Optional 5-digit US ZIP code tried after geolocation.
            synthetic: Skip the real sources and return the synthetic sample.

        Raises:
            InvalidPostalCode: ``postal_code`` is not exactly five digits.
                Raised before any source is tried.
            AllSourcesExhausted: No source produced data.
        """
        code = validate_postal_code(postal_code) if postal_code is not None else None

        if synthetic:
            logger.info("Synthetic weather requested")
            return build_snapshot(synthetic_weather(), SourceMethod.SYNTHETIC, self.clock())

        failures: dict[SourceMethod, str] = {}
        attempts: list[tuple[SourceMethod, Callable[[], RawWeather]]] = []
        location = self.location
        if location is not None:
            attempts.append((SourceMethod.GEO, lambda: self._from_geo(location)))
        if code is not None:
            attempts.append((SourceMethod.POSTAL_CODE, lambda: self.weather.by_postal_code(code)))

        for source, fetch in attempts:
            try:
                raw = fetch()
            except SOURCE_ERRORS as err:
                logger.warning("Weather source %s unavailable: %s", source, err)
                failures[source] = str(err)
                continue
            logger.info("Weather acquired from %s for %s", source, raw.location)
            return build_snapshot(raw, source, self.clock())

        if self.allow_synthetic:
            logger.warning("All real weather sources failed; using synthetic weather")
            return build_snapshot(synthetic_weather(), SourceMethod.SYNTHETIC, self.clock())

        raise AllSourcesExhausted(failures)

    def _from_geo(self, location: LocationProvider) -> RawWeather:
        if not location.has_permission() and not location.request_permission():
            msg = "Location permission denied"
            raise PermissionDenied(msg)
        coords = location.current_location(self.location_timeout)
        return self.weather.by_coordinates(coords)
