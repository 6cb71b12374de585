from __future__ import annotations

import datetime as dt
import unittest

from dailydrift.validate import (
    SettingsValidationError,
    assert_valid_settings,
    validate_daily_delay,
    validate_settings,
)


class TestValidateSettingsContract(unittest.TestCase):
    def test_empty_and_full_documents_are_valid(self) -> None:
        self.assertEqual(validate_settings({}), [])
        self.assertEqual(
            validate_settings({
                "schema_version": 1,
                "start_time_rfc3339": "2024-01-01T20:00:00+00:00",
                "interval_seconds": 900,
            }),
            [],
        )

    def test_reports_bad_fields(self) -> None:
        errs = validate_settings({"start_time_rfc3339": "yesterday", "interval_seconds": "15"})
        self.assertEqual(len(errs), 2)
        self.assertTrue(any("start_time_rfc3339" in e for e in errs))
        self.assertTrue(any("interval_seconds must be int" in e for e in errs))

    def test_rejects_negative_and_bool_interval(self) -> None:
        self.assertIn("settings: interval_seconds must not be negative", validate_settings({"interval_seconds": -60}))
        self.assertIn("settings: interval_seconds must be int", validate_settings({"interval_seconds": True}))

    def test_unsupported_schema_and_non_dict(self) -> None:
        self.assertIn("Unsupported schema_version: 9 (latest=1)", validate_settings({"schema_version": 9}))
        self.assertEqual(validate_settings([]), ["settings: settings must be a dict/object"])

    def test_assert_raises_first_error(self) -> None:
        with self.assertRaises(SettingsValidationError) as ctx:
            assert_valid_settings({"interval_seconds": -1})
        self.assertIn("must not be negative", str(ctx.exception))
        self.assertIsInstance(ctx.exception, ValueError)

    def test_daily_delay_bounds(self) -> None:
        self.assertEqual(validate_daily_delay(dt.timedelta(0)), dt.timedelta(0))
        self.assertEqual(validate_daily_delay(dt.timedelta(hours=24)), dt.timedelta(hours=24))
        with self.assertRaises(SettingsValidationError):
            validate_daily_delay(dt.timedelta(seconds=-1))
        with self.assertRaises(SettingsValidationError):
            validate_daily_delay(dt.timedelta(hours=24, seconds=1))


if __name__ == "__main__":
    unittest.main(verbosity=2)
