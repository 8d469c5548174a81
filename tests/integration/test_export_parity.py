"""End-to-end tests: file export round trip and file/remote parity."""

from datetime import date, timedelta

import pytest
from dateutil.rrule import rrulestr
from icalendar import Calendar as iCalendar
from icalendar import vRecur

from schedule_calendar.config import CalendarExportRequest
from schedule_calendar.ical import generate_ical
from schedule_calendar.materialize import materialize
from schedule_calendar.recurrence import expand_occurrences
from schedule_calendar.sync import build_event_body

TIMEZONE = "Europe/Berlin"


@pytest.fixture
def request_(cs101, lab, final_exam):
    return CalendarExportRequest(
        events=[cs101, lab, final_exam],
        calendar_name="Winter Term",
        timezone=TIMEZONE,
        repeat_weeks=16,
    )


def _vevents(ical_str):
    return [c for c in iCalendar.from_ical(ical_str).walk() if c.name == "VEVENT"]


@pytest.mark.integration
def test_round_trip_reconstructs_events(request_, now):
    vevents = _vevents(generate_ical(request_, now=now))

    assert [str(v["summary"]) for v in vevents] == ["CS 101", "Physics Lab", "Final Exam"]
    assert str(vevents[0]["location"]) == "Hall A"
    assert str(vevents[0]["description"]) == "Course: CS101\nInstructor: Dr. Rivera"

    resolved = materialize(request_, now)
    for vevent, item in zip(vevents, resolved):
        dtstart = vevent.decoded("dtstart")
        assert dtstart.replace(tzinfo=None) == item.occurrence.start

        if not item.policy.is_recurring:
            assert "rrule" not in vevent
            continue

        rule = rrulestr(vevent["rrule"].to_ical().decode(), dtstart=dtstart)
        parsed_starts = list(rule)
        assert parsed_starts == expand_occurrences(item.occurrence, item.policy, TIMEZONE)
        assert parsed_starts[-1].date() <= item.policy.until
        assert parsed_starts[-1].date() > item.policy.until - timedelta(days=7)


@pytest.mark.integration
def test_file_and_remote_rules_agree(request_, now):
    """The RRULE in the .ics file and the one sent to the API are identical."""
    vevents = _vevents(generate_ical(request_, now=now))
    resolved = materialize(request_, now)

    for vevent, item in zip(vevents, resolved):
        body = build_event_body(item, TIMEZONE)
        assert body["summary"] == str(vevent["summary"])
        assert body.get("description") == (
            str(vevent["description"]) if "description" in vevent else None
        )
        if "rrule" in vevent:
            (line,) = body["recurrence"]
            assert vRecur.from_ical(line.removeprefix("RRULE:")) == vevent["rrule"]
        else:
            assert "recurrence" not in body


@pytest.mark.integration
def test_recurring_events_end_in_same_week(request_, now):
    resolved = materialize(request_, now)
    last_dates = [
        expand_occurrences(item.occurrence, item.policy, TIMEZONE)[-1].date()
        for item in resolved
        if item.policy.is_recurring
    ]

    assert len(last_dates) == 2
    assert abs((last_dates[0] - last_dates[1]).days) < 7


@pytest.mark.integration
def test_semester_end_date_bounds_recurrence(cs101, now):
    request = CalendarExportRequest(
        events=[cs101], timezone=TIMEZONE, semester_end_date=date(2026, 12, 14)
    )
    (item,) = materialize(request, now)
    starts = expand_occurrences(item.occurrence, item.policy, TIMEZONE)

    # Monday 2026-12-14 itself is included
    assert starts[-1].date() == date(2026, 12, 14)
    assert len(starts) == 8
