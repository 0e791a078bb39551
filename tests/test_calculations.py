#!/usr/bin/env python3
"""Tests for calendar-day helper functions."""
from datetime import date, datetime

from expiry import days_until, today
from expiry.calculations import as_day


class TestDaysUntil:
    """Tests for days_until."""

    def test_future(self):
        assert days_until(date(2025, 7, 6), date(2025, 7, 1)) == 5

    def test_past_is_negative(self):
        assert days_until(date(2025, 6, 25), date(2025, 7, 1)) == -6

    def test_same_day_is_zero(self):
        assert days_until(date(2025, 7, 1), date(2025, 7, 1)) == 0

    def test_time_of_day_ignored(self):
        """Late-evening 'now' still counts whole calendar days."""
        assert days_until(date(2025, 7, 2), datetime(2025, 7, 1, 23, 59)) == 1

    def test_across_year_boundary(self):
        assert days_until(date(2026, 1, 2), date(2025, 12, 30)) == 3


class TestToday:
    """Tests for clock handling."""

    def test_injected_clock(self):
        assert today(lambda: date(2025, 7, 1)) == date(2025, 7, 1)

    def test_datetime_clock_is_truncated(self):
        assert today(lambda: datetime(2025, 7, 1, 15, 30)) == date(2025, 7, 1)

    def test_default_is_system_date(self):
        assert today() == date.today()

    def test_as_day_passes_dates_through(self):
        assert as_day(date(2025, 1, 1)) == date(2025, 1, 1)
