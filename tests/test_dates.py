"""Tests for calendar-day helpers."""

from __future__ import annotations

from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from daybook.services.dates import (
    InvalidRangeError,
    day_key,
    days_between,
    end_of_week,
    enumerate_days,
    is_past,
    is_same_calendar_day,
    is_today,
    is_tomorrow,
    local_date,
    start_of_week,
    view_period,
    view_range,
    weekday_name,
)

NEW_YORK = ZoneInfo("America/New_York")


class TestEnumerateDays:
    def test_single_day_range(self):
        day = date(2024, 6, 5)
        assert enumerate_days(day, day) == [day]

    def test_inclusive_range(self):
        days = enumerate_days(date(2024, 2, 27), date(2024, 3, 1))
        assert days == [date(2024, 2, 27), date(2024, 2, 28), date(2024, 2, 29), date(2024, 3, 1)]

    def test_reversed_range_raises(self):
        day = date(2024, 6, 5)
        with pytest.raises(InvalidRangeError) as exc_info:
            enumerate_days(day.replace(day=10), day)
        assert exc_info.value.start == date(2024, 6, 10)
        assert isinstance(exc_info.value, ValueError)


class TestLocalDays:
    def test_naive_datetime_is_read_as_utc(self):
        assert local_date(datetime(2024, 6, 5, 23, 30)) == date(2024, 6, 5)

    def test_timezone_moves_instant_to_local_day(self):
        instant = datetime(2024, 6, 6, 2, 0, tzinfo=timezone.utc)
        assert local_date(instant, NEW_YORK) == date(2024, 6, 5)
        assert day_key(instant, NEW_YORK) == "2024-06-05"
        assert day_key(instant) == "2024-06-06"

    def test_same_calendar_day_ignores_time(self):
        a = datetime(2024, 6, 5, 0, 1, tzinfo=timezone.utc)
        b = datetime(2024, 6, 5, 23, 59, tzinfo=timezone.utc)
        assert is_same_calendar_day(a, b)
        assert not is_same_calendar_day(a, date(2024, 6, 6))

    def test_days_between_counts_calendar_days(self):
        late = datetime(2024, 6, 5, 23, 59, tzinfo=timezone.utc)
        early = datetime(2024, 6, 6, 0, 1, tzinfo=timezone.utc)
        assert days_between(late, early) == 1
        assert days_between(early, late) == -1

    def test_weekday_name(self):
        assert weekday_name(date(2024, 6, 3)) == "Mon"
        assert weekday_name(date(2024, 6, 9)) == "Sun"

    def test_relative_day_checks(self):
        today = date(2024, 6, 5)
        assert is_today(datetime(2024, 6, 5, 8), today)
        assert is_tomorrow(date(2024, 6, 6), today)
        assert is_past(date(2024, 6, 4), today)
        assert not is_past(datetime(2024, 6, 5, 0, 0), today)


class TestViews:
    def test_week_starts_on_sunday(self):
        wednesday = date(2024, 6, 5)
        assert start_of_week(wednesday) == date(2024, 6, 2)
        assert end_of_week(wednesday) == date(2024, 6, 8)
        assert start_of_week(date(2024, 6, 2)) == date(2024, 6, 2)

    def test_month_view_pads_to_whole_weeks(self):
        start, end = view_range("month", date(2024, 6, 15))
        assert start == date(2024, 5, 26)
        assert end == date(2024, 7, 6)
        assert view_period("month", date(2024, 6, 15)) == (date(2024, 6, 1), date(2024, 6, 30))

    def test_year_and_day_views(self):
        assert view_range("year", date(2024, 6, 15)) == (date(2024, 1, 1), date(2024, 12, 31))
        assert view_range("day", date(2024, 6, 15)) == (date(2024, 6, 15), date(2024, 6, 15))

    def test_unknown_view_raises(self):
        with pytest.raises(ValueError):
            view_range("decade", date(2024, 6, 15))
