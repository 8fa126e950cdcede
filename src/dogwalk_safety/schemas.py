"""
Domain models for dogwalk safety.

Pydantic models shared by the acquisition chain, the paw check and the walk
log. Providers normalize their API responses to ``RawWeather``; everything
downstream works with the derived, immutable models below.
"""

from __future__ import annotations

import threading
import time
from datetime import UTC, datetime
from enum import StrEnum

from pydantic import BaseModel, Field

# =============================================================================
# Risk
# =============================================================================


class RiskTier(StrEnum):
    """Heat-stress tiers, ordered from least to most dangerous."""

    SAFE = "safe"
    CAUTION = "caution"
    DANGER = "danger"
    EXTREME = "extreme"

    @property
    def severity(self) -> int:
        """Position in the tier ordering (0 = safe)."""
        return list(RiskTier).index(self)


class HeatIndexResult(BaseModel):
    """Heat index for one (temperature, humidity) pair."""

    model_config = {"frozen": True}

    heat_index_f: int
    risk_tier: RiskTier
    advisory: str


# =============================================================================
# Weather
# =============================================================================


class SourceMethod(StrEnum):
    """Which link of the acquisition chain produced a snapshot."""

    GEO = "geo"
    POSTAL_CODE = "postal_code"
    SYNTHETIC = "synthetic"


class Coordinates(BaseModel):
    """Geographic point reported by a location provider."""

    model_config = {"frozen": True}

    lat: float = Field(..., ge=-90, le=90)
    lon: float = Field(..., ge=-180, le=180)


class RawWeather(BaseModel):
    """Current conditions as reported by a provider, before derivation."""

    model_config = {"frozen": True, "str_strip_whitespace": True}

    temperature_f: float
    humidity_pct: float
    condition: str
    location: str
    icon: str | None = None


class WeatherSnapshot(BaseModel):
    """Current conditions plus everything derived from them."""

    model_config = {"frozen": True}

    temperature_f: float
    humidity_pct: float
    condition: str
    location: str
    captured_at: datetime
    source: SourceMethod
    heat_index: HeatIndexResult
    walk_times: tuple[str, ...]

    @property
    def risk_tier(self) -> RiskTier:
        return self.heat_index.risk_tier

    @property
    def is_synthetic(self) -> bool:
        """True when the data is the fallback sample, not a real reading."""
        return self.source is SourceMethod.SYNTHETIC


# =============================================================================
# Paw check
# =============================================================================


class PawMethod(StrEnum):
    """How the surface temperature was measured."""

    TIMED_HOLD_TEST = "timed_hold_test"
    DIRECT_READING = "direct_reading"


class PawVerdict(BaseModel):
    """Outcome of one paw-check session."""

    model_config = {"frozen": True}

    surface_temp_f: float
    method: PawMethod
    is_safe: bool

    @property
    def message(self) -> str:
        temp = f"{self.surface_temp_f:g}"
        if self.is_safe:
            return f"Surface temperature is {temp}°F - Safe for walking!"
        return (
            f"Surface temperature is {temp}°F - Too hot for paws! "
            "Wait for cooler conditions."
        )


# =============================================================================
# Walk log
# =============================================================================


_id_lock = threading.Lock()
_last_id_ms = 0


def _new_entry_id() -> str:
    # Millisecond epoch, like the ids the mobile app wrote, bumped past the
    # last issued id when the clock has not advanced.
    global _last_id_ms
    with _id_lock:
        _last_id_ms = max(time.time_ns() // 1_000_000, _last_id_ms + 1)
        return str(_last_id_ms)


class WalkLogEntry(BaseModel):
    """One recorded walk decision."""

    model_config = {"frozen": True}

    id: str = Field(default_factory=_new_entry_id)
    date: datetime = Field(default_factory=lambda: datetime.now(UTC))
    temperature_f: float
    heat_index_f: int
    surface_temp_f: float | None = None
    risk_tier: RiskTier
    duration_minutes: int | None = Field(default=None, ge=0)
    notes: str | None = None

    @classmethod
    def from_check(
        cls,
        snapshot: WeatherSnapshot,
        verdict: PawVerdict | None = None,
        *,
        duration_minutes: int | None = None,
        notes: str | None = None,
    ) -> WalkLogEntry:
        """Build an entry from the conditions and the paw check that preceded a walk."""
        return cls(
            temperature_f=snapshot.temperature_f,
            heat_index_f=snapshot.heat_index.heat_index_f,
            surface_temp_f=verdict.surface_temp_f if verdict is not None else None,
            risk_tier=snapshot.risk_tier,
            duration_minutes=duration_minutes,
            notes=notes,
        )
