# dailydrift/util/tz.py
from __future__ import annotations

import datetime as dt
import re
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

_OFFSET_RE = re.compile(r"^([+-])(\d{2}):?(\d{2})$")


def normalize_tz_name(name: Optional[str]) -> str:
    """Normalize a timezone identifier.

    Supported forms:
      - None/"" -> "local"
      - "local" / "system" -> "local" (the host's local timezone rules)
      - "UTC" / "Z" / "GMT" -> "UTC"
      - IANA names, e.g. "Europe/Bucharest"
      - Fixed offsets: "+02:00", "+0200", "-05:00"
    """
    if name is None:
        return "local"
    s = str(name).strip()
    if not s:
        return "local"

    low = s.lower()
    if low in {"local", "system", "native"}:
        return "local"
    if low in {"utc", "z", "gmt", "utc0", "utc+0"}:
        return "UTC"

    return s


def resolve_tz(name: Optional[str]) -> Optional[dt.tzinfo]:
    """Resolve a timezone name into a tzinfo.

    "local" resolves to None: callers hand None to datetime.astimezone(),
    which applies the host's rules (DST included) instance by instance
    instead of freezing today's offset.

    Raises ValueError for invalid timezone identifiers.
    """
    tz_name = normalize_tz_name(name)

    if tz_name == "UTC":
        return dt.timezone.utc

    if tz_name == "local":
        return None

    m = _OFFSET_RE.match(tz_name)
    if m:
        sign_s, hh_s, mm_s = m.groups()
        hh = int(hh_s)
        mm = int(mm_s)
        if hh > 23 or mm > 59:
            raise ValueError(f"Invalid timezone offset: {tz_name!r}")
        sign = 1 if sign_s == "+" else -1
        off_min = sign * (hh * 60 + mm)
        return dt.timezone(dt.timedelta(minutes=off_min))

    try:
        return ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError) as ex:
        raise ValueError(f"Invalid timezone identifier: {tz_name!r}") from ex


def to_local(value: dt.datetime, tz: Optional[dt.tzinfo] = None) -> dt.datetime:
    """Express `value` as an aware datetime in `tz` (None = host local).

    Naive values are read as wall time in `tz`.
    """
    if value.tzinfo is None:
        if tz is None:
            return value.astimezone()
        return value.replace(tzinfo=tz)
    return value.astimezone(tz)


def wall_to_aware(naive: dt.datetime, tz: Optional[dt.tzinfo] = None) -> dt.datetime:
    """Attach `tz` to a wall-clock time, normalizing times that fall in a DST gap."""
    aware = to_local(naive.replace(tzinfo=None, fold=0), tz)
    return aware.astimezone(dt.timezone.utc).astimezone(tz)


def local_date(value: dt.datetime, tz: Optional[dt.tzinfo] = None) -> dt.date:
    return to_local(value, tz).date()


def today_date(tz: Optional[dt.tzinfo] = None) -> dt.date:
    return dt.datetime.now(dt.timezone.utc).astimezone(tz).date()


def local_utc_offset_seconds(tz: Optional[dt.tzinfo] = None, at: Optional[dt.datetime] = None) -> int:
    """Seconds east of UTC for `tz` at instant `at` (default: now)."""
    when = at if at is not None else dt.datetime.now(dt.timezone.utc)
    off = to_local(when, tz).utcoffset()
    return int(off.total_seconds()) if off is not None else 0
