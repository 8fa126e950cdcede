"""Device location data source.

Public API:
  - providers: LocationProvider protocol, StaticLocation, IpLocation, NoLocation
  - location_from_settings: pick a provider from configuration
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from dogwalk_safety.datasources.location.providers import (
    IpLocation,
    LocationProvider,
    NoLocation,
    StaticLocation,
)

if TYPE_CHECKING:
    from dogwalk_safety.config import Settings


def location_from_settings(settings: Settings) -> LocationProvider:
    """Configured coordinates win, then IP lookup if enabled, else no location."""
    if settings.lat is not None and settings.lon is not None:
        return StaticLocation(settings.lat, settings.lon)
    if settings.use_ip_location:
        return IpLocation(consent=True)
    return NoLocation()


__all__ = [
    "IpLocation",
    "LocationProvider",
    "NoLocation",
    "StaticLocation",
    "location_from_settings",
]
