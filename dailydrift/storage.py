# dailydrift/storage.py
"""JSON-file store for the anchor / daily-delay pair.

Document shape (schema_version 1):
  {
    "schema_version": 1,
    "start_time_rfc3339": "2024-01-01T20:00:00+00:00" | null,
    "interval_seconds": 900 | null
  }
"""

from __future__ import annotations

import datetime as dt
import json
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .projection import AnchorSetting
from .util.console import eprint, obs_enabled
from .util.timeparse import format_rfc3339, parse_rfc3339
from .validate import (
    SETTINGS_SCHEMA_VERSION,
    SettingsValidationError,
    assert_valid_settings,
    validate_daily_delay,
)

StorePath = Union[str, Path]


class StorageError(RuntimeError):
    """Raised when the settings file cannot be read, parsed or written."""


def default_store_path() -> Path:
    raw = (os.getenv("DAILYDRIFT_STORE", "") or "").strip()
    if raw:
        return Path(raw).expanduser()
    return Path.home() / ".dailydrift" / "settings.json"


def _empty_doc() -> Dict[str, Any]:
    return {
        "schema_version": SETTINGS_SCHEMA_VERSION,
        "start_time_rfc3339": None,
        "interval_seconds": None,
    }


class SettingsStore:
    def __init__(self, path: Optional[StorePath] = None) -> None:
        self.path = Path(path) if path is not None else default_store_path()
        self._doc: Dict[str, Any] = _empty_doc()
        self._load()

    def _load(self) -> None:
        if not self.path.exists():
            if obs_enabled():
                eprint(f"[dailydrift.storage] INFO: no settings at {self.path}; creating")
            # A missing store is the first-run state: write an empty one.
            self._save()
            return
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as ex:
            raise StorageError(f"Failed to read settings from {self.path}: {ex}") from ex
        try:
            assert_valid_settings(raw)
        except SettingsValidationError as ex:
            raise StorageError(f"Invalid settings in {self.path}: {ex}") from ex
        doc = _empty_doc()
        doc.update({k: raw.get(k) for k in ("start_time_rfc3339", "interval_seconds")})
        self._doc = doc
        if obs_enabled():
            eprint(
                f"[dailydrift.storage] INFO: loaded path={self.path} "
                f"start={doc['start_time_rfc3339']!r} interval_s={doc['interval_seconds']!r}"
            )

    def _save(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(self._doc, indent=2, sort_keys=True) + "\n", encoding="utf-8")
        except OSError as ex:
            raise StorageError(f"Failed to save settings to {self.path}: {ex}") from ex
        if obs_enabled():
            eprint(f"[dailydrift.storage] INFO: saved path={self.path}")

    # ------------------------------------------------------------------
    # Field access
    # ------------------------------------------------------------------

    def get_start_time(self) -> Optional[dt.datetime]:
        raw = self._doc.get("start_time_rfc3339")
        if not raw:
            return None
        return parse_rfc3339(raw)

    def get_daily_delay(self) -> Optional[dt.timedelta]:
        secs = self._doc.get("interval_seconds")
        if secs is None:
            return None
        return dt.timedelta(seconds=int(secs))

    def set_start_time(self, start_time: dt.datetime) -> None:
        self._doc["start_time_rfc3339"] = format_rfc3339(start_time)
        self._save()

    def set_daily_delay(self, delay: dt.timedelta) -> None:
        validate_daily_delay(delay)
        self._doc["interval_seconds"] = int(delay.total_seconds())
        self._save()

    # ------------------------------------------------------------------
    # Whole-setting access
    # ------------------------------------------------------------------

    def load(self) -> Optional[AnchorSetting]:
        """Stored anchor, or None until a start time has been set.

        A missing delay means zero.
        """
        start = self.get_start_time()
        if start is None:
            return None
        return AnchorSetting(start_instant=start, daily_delay=self.get_daily_delay() or dt.timedelta(0))

    def save(self, anchor: AnchorSetting) -> None:
        validate_daily_delay(anchor.daily_delay)
        self._doc["start_time_rfc3339"] = format_rfc3339(anchor.start_instant)
        self._doc["interval_seconds"] = int(anchor.daily_delay.total_seconds())
        self._save()

    def clear(self) -> None:
        self._doc = _empty_doc()
        self._save()

    def to_dict(self) -> Dict[str, Any]:
        return dict(self._doc)


__all__ = ["SettingsStore", "StorageError", "default_store_path"]
