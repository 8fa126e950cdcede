"""OpenWeatherMap current-conditions data source.

Public API:
  - current: OpenWeatherClient (by coordinates, by US ZIP code), parse_current
  - synthetic: fixed fallback sample
  - client: API URL and query constants
"""

from dogwalk_safety.datasources.weather.client import OPENWEATHER_API
from dogwalk_safety.datasources.weather.current import OpenWeatherClient, parse_current
from dogwalk_safety.datasources.weather.synthetic import SYNTHETIC_WEATHER, synthetic_weather

__all__ = [
    "OPENWEATHER_API",
    "SYNTHETIC_WEATHER",
    "OpenWeatherClient",
    "parse_current",
    "synthetic_weather",
]
