"""Settings validation helpers (input boundary).

The projection engine accepts anything; this is where user-entered and
stored values are checked before they reach it.
"""

from __future__ import annotations

import datetime as dt
from typing import Any, Dict, List

from .util.timeparse import parse_rfc3339

SETTINGS_SCHEMA_VERSION = 1

# timedelta cannot hold more than ~999999999 days; keep stored delays far below.
MAX_DELAY_SECONDS = 24 * 3600


class SettingsValidationError(ValueError):
    """Raised when stored or entered settings are invalid."""


def _require(cond: bool, msg: str, errs: List[str]) -> None:
    if not cond:
        errs.append(msg)


def validate_daily_delay(delay: dt.timedelta) -> dt.timedelta:
    """Return `delay` unchanged, or raise for negative / oversized delays."""
    secs = delay.total_seconds()
    if secs < 0:
        raise SettingsValidationError(f"daily delay must not be negative (got {int(secs)}s)")
    if secs > MAX_DELAY_SECONDS:
        raise SettingsValidationError(
            f"daily delay must be at most {MAX_DELAY_SECONDS}s (got {int(secs)}s)"
        )
    return delay


def validate_settings(doc: Dict[str, Any], *, label: str = "settings") -> List[str]:
    if not isinstance(doc, dict):
        return [f"{label}: settings must be a dict/object"]

    errs: List[str] = []
    sv = doc.get("schema_version", SETTINGS_SCHEMA_VERSION)
    _require(
        sv == SETTINGS_SCHEMA_VERSION,
        f"Unsupported schema_version: {sv!r} (latest={SETTINGS_SCHEMA_VERSION})",
        errs,
    )

    start = doc.get("start_time_rfc3339")
    if start is not None:
        if not isinstance(start, str):
            errs.append(f"{label}: start_time_rfc3339 must be string")
        else:
            try:
                parse_rfc3339(start)
            except ValueError as ex:
                errs.append(f"{label}: start_time_rfc3339 invalid: {ex}")

    interval = doc.get("interval_seconds")
    if interval is not None:
        # bool is an int subclass; reject it explicitly.
        if not isinstance(interval, int) or isinstance(interval, bool):
            errs.append(f"{label}: interval_seconds must be int")
        elif interval < 0:
            errs.append(f"{label}: interval_seconds must not be negative")
        elif interval > MAX_DELAY_SECONDS:
            errs.append(f"{label}: interval_seconds must be at most {MAX_DELAY_SECONDS}")

    return errs


def assert_valid_settings(doc: Dict[str, Any]) -> None:
    errs = validate_settings(doc)
    if errs:
        raise SettingsValidationError(errs[0])


__all__ = [
    "MAX_DELAY_SECONDS",
    "SETTINGS_SCHEMA_VERSION",
    "SettingsValidationError",
    "assert_valid_settings",
    "validate_daily_delay",
    "validate_settings",
]
