# dailydrift/projection.py
"""Projection engine.

Given the moment a daily activity first happened (the anchor) and a fixed
delay added once per elapsed calendar day, compute when the activity should
start today.

Rules:
  - Elapsed days are counted between *local calendar dates* in the chosen
    timezone, not in 24h buckets. `now` before the anchor clamps to 0.
  - On the anchor day the result is the anchor instant itself.
  - Otherwise the anchor's wall-clock time is carried onto today's date and
    `daily_delay * elapsed_days` is added as an absolute duration. A sum that
    crosses midnight simply advances the date.

Everything here is pure: no I/O, no clock reads unless `now` is omitted.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .util.tz import local_date, to_local, wall_to_aware

_UTC = dt.timezone.utc


@dataclass(frozen=True)
class AnchorSetting:
    start_instant: dt.datetime
    daily_delay: dt.timedelta = dt.timedelta(0)


@dataclass(frozen=True)
class ProjectedStart:
    instant: dt.datetime
    elapsed_days: int
    cumulative_delay: dt.timedelta

    def to_dict(self) -> Dict[str, Any]:
        return {
            "instant": self.instant.isoformat(),
            "elapsed_days": self.elapsed_days,
            "cumulative_delay_s": int(self.cumulative_delay.total_seconds()),
        }


def localize(value: dt.datetime, tz: Optional[dt.tzinfo] = None) -> dt.datetime:
    """Aware datetime in `tz` (None = host local). Naive input is local wall time."""
    return to_local(value, tz)


def calendar_days_between(start: dt.datetime, end: dt.datetime, tz: Optional[dt.tzinfo] = None) -> int:
    """Signed number of local-date boundaries crossed going from `start` to `end`."""
    return (local_date(end, tz) - local_date(start, tz)).days


def _project_elapsed(
    start_local: dt.datetime,
    daily_delay: dt.timedelta,
    elapsed_days: int,
    tz: Optional[dt.tzinfo],
) -> ProjectedStart:
    if elapsed_days <= 0:
        return ProjectedStart(start_local, 0, dt.timedelta(0))

    cumulative = daily_delay * elapsed_days
    # Calendar days are added in wall time so DST changes keep the time-of-day.
    carried = wall_to_aware(start_local.replace(tzinfo=None) + dt.timedelta(days=elapsed_days), tz)
    instant = (carried.astimezone(_UTC) + cumulative).astimezone(tz)
    return ProjectedStart(instant, elapsed_days, cumulative)


def project(
    anchor: AnchorSetting,
    now: Optional[dt.datetime] = None,
    tz: Optional[dt.tzinfo] = None,
) -> ProjectedStart:
    """Recommended start for the local calendar day containing `now`."""
    if now is None:
        now = dt.datetime.now(_UTC)
    start_local = localize(anchor.start_instant, tz)
    elapsed = max(0, calendar_days_between(start_local, now, tz))
    return _project_elapsed(start_local, anchor.daily_delay, elapsed, tz)


def upcoming(
    anchor: AnchorSetting,
    now: Optional[dt.datetime] = None,
    days: int = 7,
    tz: Optional[dt.tzinfo] = None,
) -> List[ProjectedStart]:
    """Today's projection followed by the next `days - 1` days."""
    if now is None:
        now = dt.datetime.now(_UTC)
    start_local = localize(anchor.start_instant, tz)
    first = max(0, calendar_days_between(start_local, now, tz))
    return [
        _project_elapsed(start_local, anchor.daily_delay, first + i, tz)
        for i in range(max(0, int(days)))
    ]


__all__ = [
    "AnchorSetting",
    "ProjectedStart",
    "calendar_days_between",
    "localize",
    "project",
    "upcoming",
]
