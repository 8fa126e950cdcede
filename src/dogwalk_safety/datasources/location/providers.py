"""Device-location collaborators.

A provider answers three questions, any of which may decline or time out:

    has_permission()            -> bool
    request_permission()        -> bool   (prompt; True if granted)
    current_location(timeout)   -> Coordinates

``current_location`` raises ``PermissionDenied`` when access is not granted
and ``SourceUnavailable`` when no fix could be obtained within ``timeout``.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

import requests
from pydantic import ValidationError

from dogwalk_safety.errors import PermissionDenied, SourceUnavailable
from dogwalk_safety.schemas import Coordinates
from dogwalk_safety.services.http import create_session

logger = logging.getLogger(__name__)

# Free IP geolocation, no key required (HTTP only on the free tier)
IP_API_URL = "http://ip-api.com/json/"


class LocationProvider(Protocol):
    def has_permission(self) -> bool: ...

    def request_permission(self) -> bool: ...

    def current_location(self, timeout: float) -> Coordinates: ...


class StaticLocation:
    """A fixed, user-configured position. Permission is implied by configuring it."""

    def __init__(self, lat: float, lon: float) -> None:
        self.coords = Coordinates(lat=lat, lon=lon)

    def has_permission(self) -> bool:
        return True

    def request_permission(self) -> bool:
        return True

    def current_location(self, timeout: float) -> Coordinates:  # noqa: ARG002
        return self.coords


class IpLocation:
    """Approximate position from the public IP address.

    Sending the IP to a third party needs the user's consent, which plays the
    role of the location permission.
    """

    def __init__(self, *, consent: bool, session: requests.Session | None = None) -> None:
        self.consent = consent
        self.session = session or create_session()

    def has_permission(self) -> bool:
        return self.consent

    def request_permission(self) -> bool:
        # Consent is given up front through configuration; there is no prompt.
        return self.consent

    def current_location(self, timeout: float) -> Coordinates:
        if not self.consent:
            msg = "IP geolocation not permitted"
            raise PermissionDenied(msg)
        try:
            resp = self.session.get(
                IP_API_URL, params={"fields": "status,message,lat,lon"}, timeout=timeout
            )
            resp.raise_for_status()
            data: dict[str, Any] = resp.json()
        except requests.Timeout as err:
            msg = f"Location lookup timed out after {timeout}s"
            raise SourceUnavailable(msg) from err
        except (requests.RequestException, ValueError) as err:
            msg = f"Location lookup failed: {err}"
            raise SourceUnavailable(msg) from err

        if data.get("status") != "success":
            msg = f"Location lookup failed: {data.get('message', 'unknown error')}"
            raise SourceUnavailable(msg)
        try:
            coords = Coordinates(lat=data["lat"], lon=data["lon"])
        except (KeyError, ValidationError) as err:
            msg = f"Location lookup returned bad coordinates: {err}"
            raise SourceUnavailable(msg) from err
        logger.debug("IP location resolved to (%.3f, %.3f)", coords.lat, coords.lon)
        return coords


class NoLocation:
    """No location service on this host: permission is always declined."""

    def has_permission(self) -> bool:
        return False

    def request_permission(self) -> bool:
        return False

    def current_location(self, timeout: float) -> Coordinates:  # noqa: ARG002
        msg = "Location services unavailable"
        raise PermissionDenied(msg)
