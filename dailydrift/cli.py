from __future__ import annotations

import argparse
import datetime as dt
import json
import os
from pathlib import Path

from .projection import AnchorSetting, upcoming
from .storage import SettingsStore, StorageError, default_store_path
from .util.console import eprint, obs_enabled
from .util.duration import format_delay, parse_delay, parse_delay_amount
from .util.timeparse import format_local_datetime, parse_local_datetime
from .util.tz import normalize_tz_name, resolve_tz
from .validate import validate_daily_delay


def _fmt_line(p, tz) -> str:
    return (
        f"{format_local_datetime(p.instant, tz)}"
        f"  day={p.elapsed_days} delay={format_delay(p.cumulative_delay)}"
    )


def main(argv: list[str] | None = None) -> None:
    ap = argparse.ArgumentParser(
        description="Show today's start time for a daily activity that drifts by a fixed delay per day."
    )
    ap.add_argument("--start", default=None,
                    help="Set the anchor: first start as local YYYY-MM-DDTHH:MM[:SS], or 'now'")
    ap.add_argument("--delay", default=None, help="Set the per-day delay, e.g. 15m, PT1H30M, 90s, or minutes")
    ap.add_argument("--delay-unit", default=None,
                    help="Read --delay as a plain amount in this unit (seconds|minutes|hours)")
    ap.add_argument("--now", default=None, help="Evaluate as of this local date-time (default: current time)")
    ap.add_argument("--days", type=int, default=1, help="Number of days to show starting today (default: 1)")
    ap.add_argument("--json", action="store_true", help="Print projections as JSON")
    ap.add_argument("--clear", action="store_true", help="Forget the stored anchor and delay")

    ap.add_argument(
        "--tz",
        default=os.getenv("DAILYDRIFT_TZ", "local"),
        help="Timezone for calendar days and display (default: env DAILYDRIFT_TZ or 'local')",
    )
    ap.add_argument(
        "--store",
        default=None,
        help="Settings JSON path (default: env DAILYDRIFT_STORE or ~/.dailydrift/settings.json)",
    )

    args = ap.parse_args(argv)

    tz_name = normalize_tz_name(args.tz)
    try:
        tz = resolve_tz(tz_name)
    except ValueError as e:
        raise SystemExit(f"Invalid --tz value: {e}")

    if args.days < 1:
        raise SystemExit("--days must be at least 1")

    store_path = Path(args.store) if args.store else default_store_path()
    try:
        store = SettingsStore(store_path)
    except StorageError as e:
        raise SystemExit(str(e))

    if args.clear:
        try:
            store.clear()
        except StorageError as e:
            raise SystemExit(str(e))
        print(f"cleared {store.path}")
        return

    if args.start is not None:
        if args.start.strip().lower() == "now":
            start = dt.datetime.now(dt.timezone.utc)
        else:
            try:
                start = parse_local_datetime(args.start, tz)
            except ValueError as e:
                raise SystemExit(f"Invalid --start value: {e}")
        try:
            store.set_start_time(start)
        except StorageError as e:
            raise SystemExit(str(e))

    if args.delay is not None:
        try:
            if args.delay_unit:
                delay = parse_delay_amount(args.delay, args.delay_unit)
            else:
                delay = parse_delay(args.delay)
            validate_daily_delay(delay)
            store.set_daily_delay(delay)
        except ValueError as e:
            raise SystemExit(f"Invalid --delay value: {e}")
        except StorageError as e:
            raise SystemExit(str(e))

    if args.now:
        try:
            now = parse_local_datetime(args.now, tz)
        except ValueError as e:
            raise SystemExit(f"Invalid --now value: {e}")
    else:
        now = dt.datetime.now(dt.timezone.utc)

    anchor: AnchorSetting | None = store.load()
    if anchor is None:
        raise SystemExit("No start time stored yet; set one with --start YYYY-MM-DDTHH:MM")

    if obs_enabled():
        eprint(
            f"[dailydrift.cli] INFO: project start={anchor.start_instant.isoformat()} "
            f"delay_s={int(anchor.daily_delay.total_seconds())} now={now.isoformat()} tz={tz_name}"
        )

    rows = upcoming(anchor, now=now, days=args.days, tz=tz)

    if args.json:
        print(json.dumps({
            "tz": tz_name,
            "start": anchor.start_instant.isoformat(),
            "daily_delay": format_delay(anchor.daily_delay),
            "projections": [p.to_dict() for p in rows],
        }, indent=2))
        return

    for p in rows:
        print(_fmt_line(p, tz))


if __name__ == "__main__":
    main()
