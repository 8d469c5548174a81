"""Tests for export request configuration."""

from datetime import date

import pytest

from schedule_calendar import config
from schedule_calendar.config import CalendarExportRequest, default_timezone
from schedule_calendar.errors import InvalidExportConfigError
from schedule_calendar.recurrence import MAX_REPEAT_WEEKS


def test_from_dict_defaults():
    request = CalendarExportRequest.from_dict({"events": [], "timezone": "UTC"})

    assert request.calendar_name == "Class Schedule"
    assert request.repeat_weeks == 16
    assert request.semester_end_date is None


def test_from_dict_sync_default_name():
    request = CalendarExportRequest.from_dict({"timezone": "UTC"}, default_name="My Schedule")

    assert request.calendar_name == "My Schedule"
    assert request.events == []


def test_from_dict_full_payload():
    request = CalendarExportRequest.from_dict(
        {
            "events": [{"title": "X"}],
            "calendarName": "Fall",
            "repeatWeeks": 12,
            "timezone": "America/Denver",
            "semesterEndDate": "2026-12-18",
        }
    )

    assert request.calendar_name == "Fall"
    assert request.repeat_weeks == 12
    assert request.timezone == "America/Denver"
    assert request.semester_end_date == date(2026, 12, 18)


@pytest.mark.parametrize(
    "payload, field",
    [
        ({"timezone": "Not/AZone"}, "timezone"),
        ({"timezone": "UTC", "repeatWeeks": 0}, "repeatWeeks"),
        ({"timezone": "UTC", "repeatWeeks": "16"}, "repeatWeeks"),
        ({"timezone": "UTC", "repeatWeeks": 600000}, "repeatWeeks"),
        ({"timezone": "UTC", "calendarName": 5}, "calendarName"),
        ({"timezone": "UTC", "semesterEndDate": "2026-02-31"}, "semesterEndDate"),
        ({"timezone": "UTC", "events": {"title": "X"}}, "events"),
    ],
)
def test_invalid_config(payload, field):
    with pytest.raises(InvalidExportConfigError) as exc_info:
        CalendarExportRequest.from_dict(payload)

    assert exc_info.value.field == field


def test_repeat_weeks_upper_bound():
    assert CalendarExportRequest(timezone="UTC", repeat_weeks=MAX_REPEAT_WEEKS).repeat_weeks == 520

    with pytest.raises(InvalidExportConfigError, match="repeatWeeks must be between"):
        CalendarExportRequest(timezone="UTC", repeat_weeks=MAX_REPEAT_WEEKS + 1)


def test_default_timezone_from_environment(monkeypatch):
    monkeypatch.setattr(config, "SCHEDULE_CALENDAR_TIMEZONE", "Asia/Kolkata")
    assert default_timezone() == "Asia/Kolkata"

    monkeypatch.setattr(config, "SCHEDULE_CALENDAR_TIMEZONE", None)
    monkeypatch.setenv("TZ", "Europe/Paris")
    assert default_timezone() == "Europe/Paris"

    monkeypatch.setenv("TZ", ":/etc/localtime")
    assert default_timezone() == "UTC"
