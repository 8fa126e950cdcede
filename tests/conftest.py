"""Shared fakes for the acquisition chain, the paw check and the walk log."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from dogwalk_safety.errors import PermissionDenied, SourceUnavailable
from dogwalk_safety.schemas import Coordinates, RawWeather, RiskTier, WalkLogEntry

PHOENIX = RawWeather(
    temperature_f=104.0,
    humidity_pct=20.0,
    condition="clear sky",
    location="Phoenix",
)
PORTLAND = RawWeather(
    temperature_f=72.0,
    humidity_pct=55.0,
    condition="few clouds",
    location="Portland",
)


class FakeWeather:
    """Weather source that records calls and can be told to fail."""

    def __init__(
        self,
        *,
        geo: RawWeather | Exception = PORTLAND,
        postal: RawWeather | Exception = PHOENIX,
    ) -> None:
        self.geo = geo
        self.postal = postal
        self.calls: list[tuple[str, object]] = []

    def by_coordinates(self, coords: Coordinates) -> RawWeather:
        self.calls.append(("coords", coords))
        if isinstance(self.geo, Exception):
            raise self.geo
        return self.geo

    def by_postal_code(self, postal_code: str) -> RawWeather:
        self.calls.append(("postal", postal_code))
        if isinstance(self.postal, Exception):
            raise self.postal
        return self.postal


class FakeLocation:
    """Location provider with scripted permission and fix behaviour."""

    def __init__(
        self,
        *,
        granted: bool = True,
        grant_on_request: bool = False,
        fix: Coordinates | Exception | None = None,
    ) -> None:
        self.granted = granted
        self.grant_on_request = grant_on_request
        self.fix = fix or Coordinates(lat=45.5, lon=-122.6)
        self.requested = False
        self.timeouts: list[float] = []

    def has_permission(self) -> bool:
        return self.granted

    def request_permission(self) -> bool:
        self.requested = True
        self.granted = self.grant_on_request
        return self.granted

    def current_location(self, timeout: float) -> Coordinates:
        self.timeouts.append(timeout)
        if not self.granted:
            msg = "not granted"
            raise PermissionDenied(msg)
        if isinstance(self.fix, Exception):
            raise self.fix
        return self.fix


class FakeClock:
    """Clock that records sleeps instead of waiting."""

    def __init__(self) -> None:
        self.sleeps: list[float] = []

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)


def make_entry(index: int, **overrides: object) -> WalkLogEntry:
    """Log entry with a predictable id and date."""
    fields: dict[str, object] = {
        "id": str(index),
        "date": datetime(2024, 7, 1, 12, 0, tzinfo=UTC) + timedelta(hours=index),
        "temperature_f": 85.0,
        "heat_index_f": 87,
        "risk_tier": RiskTier.CAUTION,
    }
    fields.update(overrides)
    return WalkLogEntry(**fields)  # type: ignore[arg-type]


@pytest.fixture
def fake_weather() -> FakeWeather:
    return FakeWeather()


@pytest.fixture
def unavailable() -> SourceUnavailable:
    return SourceUnavailable("connection refused")


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()
