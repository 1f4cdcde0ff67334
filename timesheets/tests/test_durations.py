"""
Tests for shift arithmetic and the Period key.

Covers:
- duration_minutes / duration_hours incl. overnight and 24h edge
- minutes_to_hhmm / parse_time_value
- Period validation, previous month wrap, month bounds
"""
from datetime import date, time
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.test import SimpleTestCase

from timesheets.durations import (
    duration_hours,
    duration_minutes,
    minutes_to_hhmm,
    minutes_to_hours,
    parse_time_value,
)
from timesheets.periods import Period, month_days, previous_month


class DurationTest(SimpleTestCase):

    def test_day_shift(self):
        """09:00-17:00 is eight hours."""
        self.assertEqual(duration_minutes(time(9), time(17)), 480)
        self.assertEqual(duration_hours(time(9), time(17)), Decimal(8))

    def test_overnight_shift(self):
        """End before start runs past midnight."""
        self.assertEqual(duration_minutes(time(22), time(6)), 480)
        self.assertEqual(duration_hours(time(22), time(6)), Decimal(8))

    def test_equal_times_are_a_full_day(self):
        self.assertEqual(duration_minutes(time(9), time(9)), 1440)
        self.assertEqual(duration_hours(time(9), time(9)), Decimal(24))

    def test_short_shift(self):
        self.assertEqual(duration_minutes(time(9), time(9, 29)), 29)

    def test_result_always_positive_and_bounded(self):
        for start in (time(0), time(7, 15), time(23, 59)):
            for end in (time(0), time(7, 15), time(12, 30), time(23, 59)):
                m = duration_minutes(start, end)
                self.assertGreater(m, 0)
                self.assertLessEqual(m, 1440)

    def test_seconds_are_ignored(self):
        self.assertEqual(duration_minutes(time(9, 0, 59), time(9, 30, 1)), 30)

    def test_quarter_hours_are_exact(self):
        self.assertEqual(duration_hours(time(8, 45), time(17)), Decimal("8.25"))

    def test_minutes_to_hours_rounds_for_display(self):
        self.assertEqual(minutes_to_hours(500), Decimal("8.33"))

    def test_minutes_to_hhmm(self):
        self.assertEqual(minutes_to_hhmm(0), "0:00")
        self.assertEqual(minutes_to_hhmm(485), "8:05")
        self.assertEqual(minutes_to_hhmm(-90), "-1:30")

    def test_parse_time_value(self):
        self.assertEqual(parse_time_value("07:30"), time(7, 30))
        self.assertEqual(parse_time_value("07:30:15"), time(7, 30, 15))
        self.assertEqual(parse_time_value(time(6)), time(6))
        for bad in ("25:00", "7.30", "", None, 730):
            with self.assertRaises(ValueError):
                parse_time_value(bad)


class PeriodTest(SimpleTestCase):

    def test_month_out_of_range(self):
        """A bad month is reported like any other field error."""
        for month in (0, 13):
            with self.assertRaises(ValidationError) as ctx:
                Period(1, 2025, month)
            self.assertIn("month", ctx.exception.message_dict)

    def test_previous_month_wraps_into_december(self):
        self.assertEqual(previous_month(2025, 1), (2024, 12))
        self.assertEqual(previous_month(2025, 6), (2025, 5))

    def test_bounds(self):
        p = Period(7, 2024, 2)
        self.assertEqual(p.first_day, date(2024, 2, 1))
        self.assertEqual(p.last_day, date(2024, 2, 29))
        self.assertEqual(month_days(2025, 2), 28)

    def test_from_date_and_label(self):
        p = Period.from_date(3, date(2025, 5, 17))
        self.assertEqual((p.employee_id, p.year, p.month), (3, 2025, 5))
        self.assertEqual(p.label, "2025-05")
