"""Configuration for calendar export and remote calendar sync."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date
from typing import Any
from urllib.parse import quote
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .errors import InvalidDateFormatError, InvalidExportConfigError
from .events import ScheduleEvent, parse_date
from .recurrence import DEFAULT_REPEAT_WEEKS, MAX_REPEAT_WEEKS

SCHEDULE_CALENDAR_TIMEZONE = os.getenv("SCHEDULE_CALENDAR_TIMEZONE")
GOOGLE_CALENDAR_API_BASE_URL = os.getenv("GOOGLE_CALENDAR_API_BASE_URL")

FILE_CALENDAR_NAME = "Class Schedule"
SYNC_CALENDAR_NAME = "My Schedule"


def default_timezone() -> str:
    """Resolve the timezone used when a request does not name one.

    Tries SCHEDULE_CALENDAR_TIMEZONE, then TZ, skipping values that are not
    IANA names (TZ may hold a POSIX rule or a file path), then falls back to UTC.
    """
    for name in (SCHEDULE_CALENDAR_TIMEZONE, os.getenv("TZ")):
        if not name:
            continue
        try:
            ZoneInfo(name)
        except (ZoneInfoNotFoundError, ValueError):
            continue
        return name
    return "UTC"


def load_timezone(name: str) -> ZoneInfo:
    """Load an IANA timezone.

    Raises:
        InvalidExportConfigError: If *name* is not a known timezone
    """
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, TypeError) as e:
        raise InvalidExportConfigError(
            f"unknown timezone {name!r}", field="timezone", value=name
        ) from e


@dataclass
class CalendarExportRequest:
    """Everything needed to turn a list of events into a calendar.

    ``events`` may hold raw mappings; they are validated when the request is
    materialized. ``semester_end_date`` takes precedence over ``repeat_weeks``.
    """

    events: list[Mapping[str, Any] | ScheduleEvent] = field(default_factory=list)
    calendar_name: str = FILE_CALENDAR_NAME
    timezone: str = field(default_factory=default_timezone)
    repeat_weeks: int = DEFAULT_REPEAT_WEEKS
    semester_end_date: date | None = None

    def __post_init__(self) -> None:
        load_timezone(self.timezone)
        if isinstance(self.repeat_weeks, bool) or not isinstance(self.repeat_weeks, int):
            raise InvalidExportConfigError(
                f"repeatWeeks must be an integer, got {self.repeat_weeks!r}",
                field="repeatWeeks",
                value=self.repeat_weeks,
            )
        if not 1 <= self.repeat_weeks <= MAX_REPEAT_WEEKS:
            raise InvalidExportConfigError(
                f"repeatWeeks must be between 1 and {MAX_REPEAT_WEEKS}, got {self.repeat_weeks}",
                field="repeatWeeks",
                value=self.repeat_weeks,
            )
        if not isinstance(self.calendar_name, str):
            raise InvalidExportConfigError(
                f"calendarName must be a string, got {self.calendar_name!r}",
                field="calendarName",
                value=self.calendar_name,
            )

    @property
    def tzinfo(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)

    @classmethod
    def from_dict(
        cls, data: Mapping[str, Any], default_name: str = FILE_CALENDAR_NAME
    ) -> CalendarExportRequest:
        """Build a request from a camelCase JSON payload.

        Example payload::

            {"events": [...], "calendarName": "Fall", "repeatWeeks": 14,
             "timezone": "Europe/Berlin", "semesterEndDate": "2026-12-18"}

        Raises:
            InvalidExportConfigError: If an option is malformed
        """
        events = data.get("events")
        if events is None:
            events = []
        if not isinstance(events, list):
            raise InvalidExportConfigError("events must be a list", field="events")

        semester_end_date = None
        raw_end = data.get("semesterEndDate")
        if raw_end:
            try:
                semester_end_date = parse_date(raw_end, "semesterEndDate")
            except InvalidDateFormatError as e:
                raise InvalidExportConfigError(
                    e.message, field="semesterEndDate", value=raw_end
                ) from e

        repeat_weeks = data.get("repeatWeeks")
        return cls(
            events=events,
            calendar_name=data.get("calendarName") or default_name,
            timezone=data.get("timezone") or default_timezone(),
            repeat_weeks=DEFAULT_REPEAT_WEEKS if repeat_weeks is None else repeat_weeks,
            semester_end_date=semester_end_date,
        )


@dataclass
class GoogleCalendarConfig:
    """Configuration for the Google Calendar API client."""

    base_url: str = GOOGLE_CALENDAR_API_BASE_URL or "https://www.googleapis.com/calendar/v3"
    timeout: float = 30.0  # Request timeout in seconds
    share_url_template: str = "https://calendar.google.com/calendar/r?cid={calendar_id}"

    def calendar_url(self, calendar_id: str) -> str:
        """Build the user-shareable URL of a calendar."""
        return self.share_url_template.format(calendar_id=quote(calendar_id, safe=""))
