"""
Walk log: the last 50 walk decisions, persisted.

The log lives under one settings key as a JSON array, oldest first::

    [{"id": "1721401234567", "date": "2024-07-19T14:20:34.567000+00:00",
      "temperature": 91.0, "heatIndex": 99, "surfaceTemp": 120.0,
      "duration": 20, "notes": "shady route", "riskLevel": "danger"}, ...]

``surfaceTemp``, ``duration`` and ``notes`` are omitted when unset. A log
that cannot be decoded is reported and treated as empty; it is overwritten by
the next append.
"""

from __future__ import annotations

import json
import logging
import threading
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from dogwalk_safety.errors import StorageCorruption
from dogwalk_safety.schemas import WalkLogEntry

if TYPE_CHECKING:
    from dogwalk_safety.store import SettingsStore

logger = logging.getLogger(__name__)

WALK_LOGS_KEY = "walkLogs"
CAPACITY = 50


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------


def entry_to_dict(entry: WalkLogEntry) -> dict[str, Any]:
    result: dict[str, Any] = {
        "id": entry.id,
        "date": entry.date.isoformat(),
        "temperature": entry.temperature_f,
        "heatIndex": entry.heat_index_f,
    }
    if entry.surface_temp_f is not None:
        result["surfaceTemp"] = entry.surface_temp_f
    if entry.duration_minutes is not None:
        result["duration"] = entry.duration_minutes
    if entry.notes is not None:
        result["notes"] = entry.notes
    result["riskLevel"] = entry.risk_tier.value
    return result


def entry_from_dict(data: dict[str, Any]) -> WalkLogEntry:
    """Decode one stored entry.

    Raises:
        StorageCorruption: Missing fields or unparseable values.
    """
    try:
        raw_date = data["date"]
        # JavaScript clients write a trailing "Z"
        if isinstance(raw_date, str) and raw_date.endswith("Z"):
            raw_date = raw_date[:-1] + "+00:00"
        return WalkLogEntry(
            id=str(data["id"]),
            date=datetime.fromisoformat(raw_date),
            temperature_f=data["temperature"],
            heat_index_f=data["heatIndex"],
            surface_temp_f=data.get("surfaceTemp"),
            risk_tier=data["riskLevel"],
            duration_minutes=data.get("duration"),
            notes=data.get("notes"),
        )
    except (KeyError, TypeError, ValueError, ValidationError) as err:
        msg = f"Bad walk log entry {data!r}: {err}"
        raise StorageCorruption(msg) from err


def encode_entries(entries: list[WalkLogEntry]) -> str:
    return json.dumps([entry_to_dict(e) for e in entries])


def decode_entries(text: str) -> list[WalkLogEntry]:
    """Decode the stored JSON array.

    Raises:
        StorageCorruption: Not JSON, not an array, or any entry is invalid.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as err:
        msg = f"Walk log is not valid JSON: {err}"
        raise StorageCorruption(msg) from err
    if not isinstance(data, list):
        msg = f"Walk log must be a JSON array, got {type(data).__name__}"
        raise StorageCorruption(msg)
    entries = []
    for item in data:
        if not isinstance(item, dict):
            msg = f"Walk log entry must be an object, got {item!r}"
            raise StorageCorruption(msg)
        entries.append(entry_from_dict(item))
    return entries


def _stored_count(text: str) -> int:
    """Number of items in a stored array that failed to decode, 0 if not an array."""
    try:
        data = json.loads(text)
    except ValueError:
        return 0
    return len(data) if isinstance(data, list) else 0


def _sort_key(entry: WalkLogEntry) -> datetime:
    # Entries written without an offset are taken as UTC
    if entry.date.tzinfo is None:
        return entry.date.replace(tzinfo=UTC)
    return entry.date


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------


class WalkLogStore:
    """Append-only, capacity-bounded walk history.

    Entries are kept in insertion order; once more than ``capacity`` exist the
    oldest are dropped. Append and clear are serialized by one lock, so the
    persisted log never exceeds capacity and never holds a partial entry.
    """

    def __init__(self, settings: SettingsStore, capacity: int = CAPACITY) -> None:
        self.settings = settings
        self.capacity = capacity
        self._lock = threading.RLock()

    def append(self, entry: WalkLogEntry) -> None:
        """Add an entry, evicting the oldest beyond capacity. Never raises."""
        with self._lock:
            entries = self._load()
            entries.append(entry)
            if len(entries) > self.capacity:
                dropped = len(entries) - self.capacity
                entries = entries[dropped:]
                logger.debug("Walk log full; dropped %d oldest entries", dropped)
            try:
                self.settings.set_string(WALK_LOGS_KEY, encode_entries(entries))
            except OSError as err:
                logger.error("Failed to save walk log: %s", err)

    def list(self) -> list[WalkLogEntry]:
        """Entries in insertion order (oldest first)."""
        with self._lock:
            return self._load()

    def recent(self) -> list[WalkLogEntry]:
        """Entries newest first, for display."""
        return sorted(self.list(), key=_sort_key, reverse=True)

    def clear(self) -> None:
        with self._lock:
            try:
                self.settings.remove(WALK_LOGS_KEY)
            except OSError as err:
                logger.error("Failed to clear walk log: %s", err)

    def __len__(self) -> int:
        return len(self.list())

    def _load(self) -> list[WalkLogEntry]:
        try:
            text = self.settings.get_string(WALK_LOGS_KEY)
        except OSError as err:
            logger.error("Failed to read walk log: %s", err)
            return []
        if not text:
            return []
        try:
            return decode_entries(text)
        except StorageCorruption as err:
            logger.warning(
                "Discarding unreadable walk log (%d stored entries): %s",
                _stored_count(text),
                err,
            )
            return []
