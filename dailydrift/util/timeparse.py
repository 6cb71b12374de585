# dailydrift/util/timeparse.py
from __future__ import annotations

import datetime as dt
import re
from typing import Optional

from .tz import to_local

# HTML <input type="datetime-local" step="1"> value, seconds optional.
_LOCAL_DT_RE = re.compile(
    r"^(\d{4})-(\d{2})-(\d{2})[T ](\d{1,2}):(\d{2})(?::(\d{2}))?$"
)

LOCAL_DT_FORMAT = "%Y-%m-%dT%H:%M:%S"


def parse_naive_local(s: str) -> dt.datetime:
    m = _LOCAL_DT_RE.match((s or "").strip())
    if not m:
        raise ValueError(f"Invalid local date-time (want YYYY-MM-DDTHH:MM[:SS]): {s!r}")
    y, mo, d, hh, mm, ss = (int(g) if g is not None else 0 for g in m.groups())
    try:
        return dt.datetime(y, mo, d, hh, mm, ss)
    except ValueError as ex:
        raise ValueError(f"Invalid local date-time: {s!r} ({ex})") from ex


def parse_local_datetime(s: str, tz: Optional[dt.tzinfo] = None) -> dt.datetime:
    """Parse a wall-clock string as local time in `tz` (None = host local).

    A wall time that falls in a DST gap or fold has no single instant and is
    rejected with ValueError.
    """
    naive = parse_naive_local(s)
    early = to_local(naive.replace(fold=0), tz)
    late = to_local(naive.replace(fold=1), tz)
    if early.utcoffset() != late.utcoffset():
        raise ValueError(f"No single local time found for {s!r}")
    return early


def format_local_datetime(value: dt.datetime, tz: Optional[dt.tzinfo] = None) -> str:
    return to_local(value, tz).strftime(LOCAL_DT_FORMAT)


def parse_rfc3339(s: str) -> dt.datetime:
    """Parse an RFC 3339 timestamp into an aware UTC datetime."""
    raw = (s or "").strip()
    if not raw:
        raise ValueError("Empty RFC 3339 timestamp")
    try:
        d = dt.datetime.fromisoformat(raw.replace("Z", "+00:00").replace("z", "+00:00"))
    except ValueError as ex:
        raise ValueError(f"Invalid RFC 3339 timestamp: {s!r}") from ex
    if d.tzinfo is None:
        raise ValueError(f"RFC 3339 timestamp lacks an offset: {s!r}")
    return d.astimezone(dt.timezone.utc)


def format_rfc3339(value: dt.datetime) -> str:
    return to_local(value, dt.timezone.utc).isoformat()
