"""Tests for cadence.tracking.formatting."""

from datetime import date, datetime

from cadence.tracking.formatting import format_clock, format_compact, format_duration, period_label

MINUTE = 60_000


class TestDurations:
    def test_format_duration(self):
        assert format_duration(65 * MINUTE) == "1h 5m"
        assert format_duration(59_999) == "0h 0m"

    def test_format_clock(self):
        assert format_clock(3_723_000) == "01:02:03"

    def test_format_compact(self):
        assert format_compact(120 * MINUTE) == "2h"
        assert format_compact(125 * MINUTE) == "2h5m"
        assert format_compact(45 * MINUTE) == "45m"

    def test_bad_values_render_as_zero(self):
        for bad in (-5 * MINUTE, None, float("nan"), float("inf")):
            assert format_duration(bad) == "0h 0m"
            assert format_clock(bad) == "00:00:00"
            assert format_compact(bad) == "0m"


class TestPeriodLabel:
    def test_today(self):
        assert period_label("day", date(2025, 6, 11), today=datetime(2025, 6, 11, 20, 0)) == "Today"

    def test_other_day(self):
        assert period_label("day", date(2025, 6, 11), today=date(2025, 6, 12)) == "Wednesday, Jun 11"

    def test_week(self):
        assert period_label("week", date(2025, 6, 15)) == "Jun 9 - Jun 15"

    def test_month_and_year(self):
        assert period_label("month", date(2025, 6, 11)) == "June 2025"
        assert period_label("year", date(2025, 6, 11)) == "2025"

    def test_unknown(self):
        assert period_label("decade", date(2025, 6, 11)) == ""
