from __future__ import annotations

import datetime as dt
import unittest
from zoneinfo import ZoneInfo

from dailydrift.util.timeparse import (
    format_local_datetime,
    format_rfc3339,
    parse_local_datetime,
    parse_rfc3339,
)

UTC = dt.timezone.utc


class TestLocalDatetimeContract(unittest.TestCase):
    def test_datetime_local_with_and_without_seconds(self) -> None:
        self.assertEqual(parse_local_datetime("2024-01-01T20:00:30", UTC), dt.datetime(2024, 1, 1, 20, 0, 30, tzinfo=UTC))
        self.assertEqual(parse_local_datetime("2024-01-01T20:00", UTC), dt.datetime(2024, 1, 1, 20, 0, tzinfo=UTC))
        self.assertEqual(parse_local_datetime("2024-01-01 7:05", UTC), dt.datetime(2024, 1, 1, 7, 5, tzinfo=UTC))

    def test_wall_time_is_read_in_zone(self) -> None:
        tz = dt.timezone(dt.timedelta(hours=3))
        out = parse_local_datetime("2024-06-01T08:00:00", tz)
        self.assertEqual(out.astimezone(UTC), dt.datetime(2024, 6, 1, 5, 0, tzinfo=UTC))

    def test_rejects_malformed_and_impossible_values(self) -> None:
        for bad in ("", "2024-01-01", "2024/01/01T20:00", "2024-13-01T00:00", "2024-02-30T10:00", "2024-01-01T25:00"):
            with self.assertRaises(ValueError, msg=bad):
                parse_local_datetime(bad, UTC)

    def test_rejects_times_without_a_single_instant(self) -> None:
        tz = ZoneInfo("America/New_York")
        with self.assertRaises(ValueError):
            parse_local_datetime("2024-03-10T02:30:00", tz)  # skipped hour
        with self.assertRaises(ValueError):
            parse_local_datetime("2024-11-03T01:30:00", tz)  # repeated hour

    def test_format_local(self) -> None:
        tz = dt.timezone(dt.timedelta(hours=-5))
        v = dt.datetime(2024, 1, 2, 1, 15, tzinfo=UTC)
        self.assertEqual(format_local_datetime(v, tz), "2024-01-01T20:15:00")


class TestRfc3339Contract(unittest.TestCase):
    def test_parse_normalizes_to_utc(self) -> None:
        self.assertEqual(parse_rfc3339("2024-01-01T20:00:00Z"), dt.datetime(2024, 1, 1, 20, tzinfo=UTC))
        self.assertEqual(parse_rfc3339("2024-01-01T22:00:00+02:00"), dt.datetime(2024, 1, 1, 20, tzinfo=UTC))

    def test_parse_requires_offset(self) -> None:
        with self.assertRaises(ValueError):
            parse_rfc3339("2024-01-01T20:00:00")
        with self.assertRaises(ValueError):
            parse_rfc3339("not a time")
        with self.assertRaises(ValueError):
            parse_rfc3339("")

    def test_format_is_utc(self) -> None:
        v = dt.datetime(2024, 1, 1, 22, 0, tzinfo=dt.timezone(dt.timedelta(hours=2)))
        self.assertEqual(format_rfc3339(v), "2024-01-01T20:00:00+00:00")


if __name__ == "__main__":
    unittest.main(verbosity=2)
