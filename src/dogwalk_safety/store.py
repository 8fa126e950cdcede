"""Key-value settings storage.

The walk log is persisted as one named string value, the way a mobile app
keeps small state in its application settings. Two backends:

  - ``JsonFileSettings``: a flat JSON object on disk, one key per setting.
    Writes go to a temp file that replaces the original, so a crash never
    leaves a half-written file behind.
  - ``MemorySettings``: a dict, for tests and throwaway sessions.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class SettingsStore(Protocol):
    """Get/set/remove of named string values."""

    def get_string(self, key: str, default: str | None = None) -> str | None: ...

    def set_string(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class MemorySettings:
    """In-process settings; nothing survives the process."""

    def __init__(self, values: dict[str, str] | None = None) -> None:
        self.values: dict[str, str] = dict(values or {})

    def get_string(self, key: str, default: str | None = None) -> str | None:
        return self.values.get(key, default)

    def set_string(self, key: str, value: str) -> None:
        self.values[key] = value

    def remove(self, key: str) -> None:
        self.values.pop(key, None)


class JsonFileSettings:
    """Settings persisted to a single JSON file."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def get_string(self, key: str, default: str | None = None) -> str | None:
        value = self._load().get(key)
        return value if isinstance(value, str) else default

    def set_string(self, key: str, value: str) -> None:
        values = self._load()
        values[key] = value
        self._dump(values)

    def remove(self, key: str) -> None:
        values = self._load()
        if values.pop(key, None) is not None:
            self._dump(values)

    def _load(self) -> dict[str, object]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open(encoding="utf-8") as f:
                data = json.load(f)
        except ValueError as err:
            # JSONDecodeError and UnicodeDecodeError are both ValueErrors
            logger.warning(
                "Settings file %s is not valid JSON (%s); starting empty", self.path, err
            )
            return {}
        if not isinstance(data, dict):
            logger.warning("Settings file %s does not hold an object; starting empty", self.path)
            return {}
        return data

    def _dump(self, values: dict[str, object]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=self.path.parent, prefix=".settings-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(values, f, indent=2)
            os.replace(tmp, self.path)
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise
