"""Fixed sample conditions used when no real source is available.

The sample is deliberately hot so the danger path of the app is exercised.
Snapshots built from it are tagged ``SourceMethod.SYNTHETIC``.
"""

from __future__ import annotations

from dogwalk_safety.schemas import RawWeather

SYNTHETIC_WEATHER = RawWeather(
    temperature_f=95.0,
    humidity_pct=70.0,
    condition="Sunny",
    location="Mockville, USA",
    icon="01d",
)


def synthetic_weather() -> RawWeather:
    return SYNTHETIC_WEATHER
