"""Render resolved schedule events as an iCalendar (.ics) document."""

from __future__ import annotations

import hashlib
import re
from collections.abc import Sequence
from datetime import UTC, datetime

from icalendar import Calendar as iCalendar
from icalendar import Event as iEvent

from .config import CalendarExportRequest, load_timezone
from .debug import logger
from .materialize import ResolvedEvent, local_now, materialize
from .recurrence import to_vrecur

CALENDAR_MIME_TYPE = "text/calendar; charset=utf-8"
PRODID = "-//Schedule Calendar//Schedule Export//EN"
UID_DOMAIN = "schedule-calendar"


def ics_filename(calendar_name: str) -> str:
    """Build a download filename from a calendar name.

    Example:
        >>> ics_filename("Fall 2026: Classes")
        'fall-2026-classes.ics'
    """
    slug = re.sub(r"[^A-Za-z0-9]+", "-", calendar_name).strip("-").lower()
    return f"{slug or 'schedule'}.ics"


def event_uid(resolved: ResolvedEvent, index: int) -> str:
    """Generate a stable unique identifier for an event.

    The same event at the same position with the same anchor always gets
    the same UID, so re-exports stay byte-identical.
    """
    occurrence = resolved.occurrence
    unique_string = (
        f"{index}-{resolved.event.title}-"
        f"{occurrence.start.isoformat()}-{occurrence.end.isoformat()}"
    )
    return f"{hashlib.md5(unique_string.encode()).hexdigest()}@{UID_DOMAIN}"


def render_event(resolved: ResolvedEvent, index: int, timezone: str, dtstamp: datetime) -> iEvent:
    """Render one resolved event as a VEVENT component."""
    tz = load_timezone(timezone)
    event = resolved.event

    vevent = iEvent()
    vevent.add("uid", event_uid(resolved, index))
    vevent.add("dtstamp", dtstamp)
    vevent.add("summary", event.title)
    vevent.add("dtstart", resolved.occurrence.start.replace(tzinfo=tz))
    vevent.add("dtend", resolved.occurrence.end.replace(tzinfo=tz))

    if event.location:
        vevent.add("location", event.location)

    description = event.description
    if description:
        vevent.add("description", description)

    rrule = to_vrecur(resolved.policy, timezone)
    if rrule is not None:
        vevent.add("rrule", rrule)

    return vevent


def render_calendar(
    resolved_events: Sequence[ResolvedEvent],
    calendar_name: str,
    timezone: str,
    now: datetime,
) -> iCalendar:
    """Build a single VCALENDAR with one VEVENT per resolved event.

    Args:
        resolved_events: Events in output order
        calendar_name: Calendar display name (X-WR-CALNAME)
        timezone: IANA timezone all date-times are expressed in
        now: Generation time used for DTSTAMP. Naive values are local
            wall-clock time in *timezone*.

    Returns:
        icalendar Calendar including a VTIMEZONE for *timezone*
    """
    tz = load_timezone(timezone)
    if now.tzinfo is None:
        now = now.replace(tzinfo=tz)
    dtstamp = now.astimezone(UTC).replace(microsecond=0)

    cal = iCalendar()
    cal.add("prodid", PRODID)
    cal.add("version", "2.0")
    cal.add("calscale", "GREGORIAN")
    cal.add("method", "PUBLISH")
    cal.add("x-wr-calname", calendar_name)
    cal.add("x-wr-timezone", timezone)

    for index, resolved in enumerate(resolved_events):
        cal.add_component(render_event(resolved, index, timezone, dtstamp))

    cal.add_missing_timezones()
    return cal


def generate_ical(request: CalendarExportRequest, now: datetime | None = None) -> str:
    """Generate the iCalendar document for an export request.

    Nothing is written to disk; the caller decides how to deliver the text
    (see :data:`CALENDAR_MIME_TYPE` and :func:`ics_filename`).

    Raises:
        ScheduleValidationError: If any event is invalid (no output is produced)
    """
    current = local_now(request, now)
    resolved = materialize(request, current)
    cal = render_calendar(resolved, request.calendar_name, request.timezone, current)
    ical_str: str = cal.to_ical().decode("utf-8")

    logger.debug(f"Generated {len(ical_str)} bytes of iCalendar data for {len(resolved)} events")
    return ical_str
