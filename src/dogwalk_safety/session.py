"""
Walk session: the operations a front end calls.

Ties the pieces together for one user on one device::

    session = WalkSession.from_settings(get_settings())
    snapshot = session.acquire_current("85004")
    verdict = session.submit_direct_reading("118")
    session.record_walk(duration_minutes=20)

The session remembers the latest snapshot and paw verdict so ``record_walk``
can combine them into a log entry.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from dogwalk_safety.acquire import WeatherAcquirer
from dogwalk_safety.datasources.location import location_from_settings
from dogwalk_safety.datasources.weather import OpenWeatherClient
from dogwalk_safety.errors import InvalidInput
from dogwalk_safety.paw_check import PawCheckEvaluator
from dogwalk_safety.schemas import RiskTier, WalkLogEntry
from dogwalk_safety.store import JsonFileSettings
from dogwalk_safety.walk_log import WalkLogStore

if TYPE_CHECKING:
    from dogwalk_safety.config import Settings
    from dogwalk_safety.paw_check import Clock
    from dogwalk_safety.schemas import PawMethod, PawVerdict, WeatherSnapshot

logger = logging.getLogger(__name__)


class WalkSession:
    """Current conditions, the paw check and the walk log for one user."""

    def __init__(
        self,
        acquirer: WeatherAcquirer,
        log: WalkLogStore,
        paw_check: PawCheckEvaluator | None = None,
    ) -> None:
        self.acquirer = acquirer
        self.log = log
        self.paw_check = paw_check or PawCheckEvaluator()
        self.snapshot: WeatherSnapshot | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> WalkSession:
        weather = OpenWeatherClient(settings.openweather_api_key, timeout=settings.http_timeout)
        acquirer = WeatherAcquirer(
            weather,
            location_from_settings(settings),
            location_timeout=settings.location_timeout,
            allow_synthetic=settings.allow_synthetic,
        )
        return cls(acquirer, WalkLogStore(JsonFileSettings(settings.settings_file)))

    # -- conditions ---------------------------------------------------------

    def acquire_current(
        self, postal_code: str | None = None, *, synthetic: bool = False
    ) -> WeatherSnapshot:
        self.snapshot = self.acquirer.acquire_current(postal_code, synthetic=synthetic)
        return self.snapshot

    @property
    def needs_confirmation(self) -> bool:
        """True when conditions are bad enough to confirm before a paw check."""
        if self.snapshot is None:
            return False
        return self.snapshot.risk_tier.severity >= RiskTier.DANGER.severity

    # -- paw check ----------------------------------------------------------

    def start_paw_check(self, mode: PawMethod) -> None:
        self.paw_check.start(mode)

    def abort_paw_check(self) -> PawVerdict:
        return self.paw_check.abort()

    def run_hold_test(self, clock: Clock | None = None) -> PawVerdict:
        return self.paw_check.run(clock)

    def submit_direct_reading(self, text: str) -> PawVerdict:
        return self.paw_check.submit(text)

    # -- history ------------------------------------------------------------

    def record_walk(
        self,
        *,
        duration_minutes: int | None = None,
        notes: str | None = None,
    ) -> WalkLogEntry:
        """Log the current snapshot together with the last paw verdict.

        Raises:
            InvalidInput: No conditions have been acquired yet.
        """
        if self.snapshot is None:
            msg = "Acquire current conditions before logging a walk"
            raise InvalidInput(msg)
        entry = WalkLogEntry.from_check(
            self.snapshot,
            self.paw_check.verdict,
            duration_minutes=duration_minutes,
            notes=notes,
        )
        self.log.append(entry)
        logger.info("Logged walk %s (%s)", entry.id, entry.risk_tier)
        return entry

    def get_history(self) -> list[WalkLogEntry]:
        """Logged walks, newest first."""
        return self.log.recent()

    def clear_history(self) -> None:
        self.log.clear()
