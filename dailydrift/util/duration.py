# dailydrift/util/duration.py
from __future__ import annotations

import datetime as dt
import re

# ISO-8601 time-only durations: PT15M, PT1H30M, -PT90S
_ISO_RE = re.compile(r"^([+-])?P(?:T(?:(\d+)H)?(?:(\d+)M)?(?:(\d+)S)?)$", re.IGNORECASE)
# Compact form: 1h30m, 15m, 90s, -5m
_COMPACT_RE = re.compile(r"^([+-])?(?:(\d+)h)?(?:(\d+)m)?(?:(\d+)s)?$", re.IGNORECASE)
_INT_RE = re.compile(r"^[+-]?\d+$")

_UNIT_SECONDS = {
    "s": 1, "sec": 1, "secs": 1, "second": 1, "seconds": 1,
    "m": 60, "min": 60, "mins": 60, "minute": 60, "minutes": 60,
    "h": 3600, "hr": 3600, "hrs": 3600, "hour": 3600, "hours": 3600,
}


def _from_groups(sign: str | None, h: str | None, m: str | None, s: str | None) -> dt.timedelta:
    total = int(h or 0) * 3600 + int(m or 0) * 60 + int(s or 0)
    if sign == "-":
        total = -total
    return dt.timedelta(seconds=total)


def parse_delay(s: str | None) -> dt.timedelta:
    """Parse a per-day delay.

    Accepted:
      - ISO-8601 time durations: PT15M, PT1H30M, PT45S (optionally signed)
      - compact: 15m, 1h30m, 90s
      - bare integer: minutes
    """
    ss = str(s or "").strip()
    if not ss:
        raise ValueError("Empty delay")

    try:
        if _INT_RE.match(ss):
            return dt.timedelta(minutes=int(ss))

        for rx in (_ISO_RE, _COMPACT_RE):
            m = rx.match(ss)
            # Both patterns also match a bare sign/prefix with no components.
            if m and any(g is not None for g in m.groups()[1:]):
                return _from_groups(*m.groups())
    except OverflowError as ex:
        raise ValueError(f"Invalid delay: {s!r} (out of range)") from ex

    raise ValueError(f"Invalid delay: {s!r}")


def parse_delay_amount(amount: str | int | float, unit: str = "minutes") -> dt.timedelta:
    """Delay from a form-style amount + unit pair, e.g. ("15", "minutes")."""
    mult = _UNIT_SECONDS.get(str(unit or "").strip().lower())
    if mult is None:
        raise ValueError(f"Invalid delay unit: {unit!r}")
    try:
        n = float(amount)
    except (TypeError, ValueError) as ex:
        raise ValueError(f"Invalid delay amount: {amount!r}") from ex
    if n != n or n in (float("inf"), float("-inf")):
        raise ValueError(f"Invalid delay amount: {amount!r}")
    try:
        return dt.timedelta(seconds=round(n * mult))
    except OverflowError as ex:
        raise ValueError(f"Invalid delay amount: {amount!r} (out of range)") from ex


def format_delay(td: dt.timedelta) -> str:
    """Render as ISO-8601, e.g. PT1H30M, PT0S, -PT15M."""
    total = int(td.total_seconds())
    sign = "-" if total < 0 else ""
    total = abs(total)
    h, rem = divmod(total, 3600)
    m, s = divmod(rem, 60)
    parts = ""
    if h:
        parts += f"{h}H"
    if m:
        parts += f"{m}M"
    if s or not parts:
        parts += f"{s}S"
    return f"{sign}PT{parts}"
