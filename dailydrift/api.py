"""dailydrift.api

Stable *library* entrypoint for dailydrift.

Policy:
  - Only names listed in __all__ are considered public API.
  - Everything else is internal and may change without notice.
"""

from __future__ import annotations

import datetime as dt
from typing import Optional

from dailydrift.projection import (
    AnchorSetting,
    ProjectedStart,
    calendar_days_between,
    localize,
    project,
    upcoming,
)
from dailydrift.storage import SettingsStore, StorageError, StorePath
from dailydrift.util.duration import format_delay, parse_delay, parse_delay_amount
from dailydrift.util.timeparse import format_local_datetime, parse_local_datetime
from dailydrift.util.tz import resolve_tz
from dailydrift.validate import SettingsValidationError, validate_daily_delay


def make_anchor(start: str, delay: str = "0", *, tz: Optional[str] = "local") -> AnchorSetting:
    """Build a validated AnchorSetting from form-style strings.

    `start` is a local wall time (YYYY-MM-DDTHH:MM[:SS]) in `tz`; `delay`
    is anything `parse_delay` accepts. Negative delays are rejected here,
    not in the engine.
    """
    tzinfo = resolve_tz(tz)
    return AnchorSetting(
        start_instant=parse_local_datetime(start, tzinfo),
        daily_delay=validate_daily_delay(parse_delay(delay)),
    )


def project_from_store(
    path: Optional[StorePath] = None,
    *,
    now: Optional[dt.datetime] = None,
    tz: Optional[str] = "local",
) -> Optional[ProjectedStart]:
    """Projection for the anchor stored at `path`, or None if nothing is stored."""
    anchor = SettingsStore(path).load()
    if anchor is None:
        return None
    return project(anchor, now=now, tz=resolve_tz(tz))


__all__ = [
    "AnchorSetting",
    "ProjectedStart",
    "SettingsStore",
    "SettingsValidationError",
    "StorageError",
    "calendar_days_between",
    "format_delay",
    "format_local_datetime",
    "localize",
    "make_anchor",
    "parse_delay",
    "parse_delay_amount",
    "parse_local_datetime",
    "project",
    "project_from_store",
    "upcoming",
]
