"""Tests for occurrence resolution."""

from datetime import date, datetime, timedelta

import pytest

from schedule_calendar.events import ScheduleEvent, Weekday
from schedule_calendar.occurrences import combine, next_weekday, resolve_occurrence


def test_next_weekday_later_this_week():
    # Wednesday -> Friday
    assert next_weekday(Weekday.FRIDAY, date(2026, 10, 21)) == date(2026, 10, 23)


def test_next_weekday_wraps_to_next_week():
    # Wednesday -> Monday
    assert next_weekday(Weekday.MONDAY, date(2026, 10, 21)) == date(2026, 10, 26)


def test_next_weekday_never_today():
    # Wednesday -> Wednesday rolls forward a full week
    assert next_weekday(Weekday.WEDNESDAY, datetime(2026, 10, 21, 0, 1)) == date(2026, 10, 28)


def test_next_weekday_from_sunday():
    assert next_weekday(Weekday.SATURDAY, date(2026, 10, 25)) == date(2026, 10, 31)
    assert next_weekday(Weekday.SUNDAY, date(2026, 10, 25)) == date(2026, 11, 1)


@pytest.mark.parametrize("offset", range(7))
@pytest.mark.parametrize("day", list(Weekday))
def test_next_weekday_window(offset, day):
    """Anchor is always 1-7 days ahead and on the requested weekday."""
    today = date(2026, 10, 19) + timedelta(days=offset)
    anchor = next_weekday(day, today)

    assert 1 <= (anchor - today).days <= 7
    assert Weekday.from_date(anchor) is day


def test_combine_zeroes_seconds():
    dt = combine(date(2026, 1, 5), datetime(2000, 1, 1, 9, 30, 45, 123).time())

    assert dt == datetime(2026, 1, 5, 9, 30)
    assert dt.tzinfo is None


def test_resolve_recurring(cs101, now):
    occurrence = resolve_occurrence(ScheduleEvent.from_dict(cs101), now)

    assert occurrence.start == datetime(2026, 10, 26, 9, 0)
    assert occurrence.end == datetime(2026, 10, 26, 9, 50)
    assert occurrence.weekday is Weekday.MONDAY


def test_resolve_dated_one_time_ignores_weekday(final_exam, now):
    occurrence = resolve_occurrence(ScheduleEvent.from_dict(final_exam), now)

    assert occurrence.start == datetime(2025, 12, 12, 14, 0)
    assert occurrence.end == datetime(2025, 12, 12, 16, 0)

    mismatched = ScheduleEvent.from_dict(final_exam | {"dayOfWeek": "Monday"})
    assert resolve_occurrence(mismatched, now).date == date(2025, 12, 12)


def test_resolve_undated_one_time_uses_next_weekday(final_exam, now):
    event = ScheduleEvent.from_dict(final_exam | {"date": None, "dayOfWeek": "Wednesday"})
    occurrence = resolve_occurrence(event, now)

    assert occurrence.start == datetime(2026, 10, 28, 14, 0)


def test_resolve_end_before_start_same_day(now):
    event = ScheduleEvent.from_dict(
        {"title": "Late", "dayOfWeek": "Friday", "startTime": "23:00", "endTime": "01:00"}
    )
    occurrence = resolve_occurrence(event, now)

    assert occurrence.start.date() == occurrence.end.date()
    assert occurrence.end < occurrence.start
