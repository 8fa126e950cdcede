"""Error types for dogwalk safety.

Per-source failures (``PermissionDenied``, ``SourceUnavailable``) never leave
the acquisition chain; only ``AllSourcesExhausted`` does. Input errors are
raised straight to the caller.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from dogwalk_safety.schemas import SourceMethod


class DogWalkError(Exception):
    """Base error for dogwalk safety failures."""


class PermissionDenied(DogWalkError):
    """The user declined (or the device cannot grant) location access."""


class SourceUnavailable(DogWalkError):
    """One weather source failed: network error, timeout or bad response."""

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


class AcquisitionError(DogWalkError):
    """No weather snapshot could be produced."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class AllSourcesExhausted(AcquisitionError):
    """Every link of the acquisition chain failed."""

    def __init__(self, failures: dict[SourceMethod, str]) -> None:
        if failures:
            detail = "; ".join(f"{source}: {msg}" for source, msg in failures.items())
        else:
            detail = "no weather source is enabled"
        super().__init__(f"All weather sources exhausted ({detail})")
        self.failures = failures


class InvalidInput(DogWalkError):
    """Malformed user input. Never triggers a fallback."""


class InvalidPostalCode(InvalidInput):
    """Postal code is not exactly five digits."""


class ParseError(InvalidInput):
    """A manual temperature reading is not a finite number."""


class StorageCorruption(DogWalkError):
    """Persisted walk log could not be decoded."""


class PawCheckStateError(DogWalkError):
    """Illegal transition of the timed hold test."""
