"""Schedule event model and input validation.

Events arrive as plain mappings in the camelCase shape produced by the image
extraction step::

    {
        "title": "CS 101",
        "dayOfWeek": "Monday",
        "startTime": "09:00",
        "endTime": "09:50",
        "location": "Room 12",
        "isOneTime": false
    }

:func:`validate_events` turns such a list into :class:`ScheduleEvent` objects,
failing on the first malformed event so that no partial output is ever
rendered.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import date, time
from enum import IntEnum
from typing import Any

from .errors import (
    InvalidDateFormatError,
    InvalidFieldTypeError,
    InvalidTimeFormatError,
    InvalidWeekdayError,
    MissingAnchorError,
    MissingFieldError,
    ScheduleValidationError,
)

_TIME_RE = re.compile(r"^([0-9]{1,2}):([0-9]{2})$")
_DATE_RE = re.compile(r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$")


class Weekday(IntEnum):
    """Day of the week, numbered like JavaScript's ``Date.getDay()``."""

    SUNDAY = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6

    @classmethod
    def from_name(cls, name: str) -> Weekday:
        """Look up a weekday by its English name (case-insensitive).

        Raises:
            InvalidWeekdayError: If *name* is not a weekday name
        """
        try:
            return cls[name.strip().upper()]
        except (KeyError, AttributeError):
            raise InvalidWeekdayError(
                f"invalid dayOfWeek {name!r}: expected Monday..Sunday",
                field="dayOfWeek",
                value=name,
            ) from None

    @classmethod
    def from_date(cls, day: date) -> Weekday:
        # date.weekday() is Monday=0
        return cls((day.weekday() + 1) % 7)

    @property
    def ical_code(self) -> str:
        """Two-letter iCalendar BYDAY code (e.g. ``MO``)."""
        return self.name[:2]

    @property
    def label(self) -> str:
        return self.name.capitalize()


def parse_time(value: Any, field: str = "startTime") -> time:
    """Parse a 24-hour ``HH:MM`` wall-clock time.

    Args:
        value: Time string such as ``"09:30"`` (a single-digit hour is accepted)
        field: Field name reported in the error

    Returns:
        Time with seconds and microseconds set to zero

    Raises:
        MissingFieldError: If the value is empty
        InvalidTimeFormatError: If the value is not a valid HH:MM time
    """
    if value is None or value == "":
        raise MissingFieldError(f"{field} is required", field=field)
    if not isinstance(value, str):
        raise InvalidTimeFormatError(
            f"invalid {field} {value!r}: expected HH:MM", field=field, value=value
        )

    match = _TIME_RE.match(value.strip())
    if not match:
        raise InvalidTimeFormatError(
            f"invalid {field} {value!r}: expected HH:MM", field=field, value=value
        )

    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        raise InvalidTimeFormatError(
            f"invalid {field} {value!r}: time out of range", field=field, value=value
        )
    return time(hours, minutes)


def parse_date(value: Any, field: str = "date") -> date:
    """Parse an ISO ``YYYY-MM-DD`` calendar date.

    Raises:
        InvalidDateFormatError: If the value is not a real calendar date
    """
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not _DATE_RE.match(value.strip()):
        raise InvalidDateFormatError(
            f"invalid {field} {value!r}: expected YYYY-MM-DD", field=field, value=value
        )
    try:
        return date.fromisoformat(value.strip())
    except ValueError as e:
        raise InvalidDateFormatError(
            f"invalid {field} {value!r}: {e}", field=field, value=value
        ) from e


def _get(data: Mapping[str, Any], camel: str, snake: str) -> Any:
    if camel in data:
        return data[camel]
    return data.get(snake)


def _check_anchor(day_of_week: Weekday | None, is_one_time: bool, event_date: date | None) -> None:
    if day_of_week is not None:
        return
    if not is_one_time:
        raise MissingAnchorError("recurring event requires dayOfWeek", field="dayOfWeek")
    if event_date is None:
        raise MissingAnchorError("one-time event requires date or dayOfWeek", field="date")


@dataclass(frozen=True)
class ScheduleEvent:
    """A validated schedule event.

    ``day_of_week`` may only be ``None`` for one-time events that carry an
    explicit ``date``. ``end_time`` is not required to be after ``start_time``.
    """

    title: str
    day_of_week: Weekday | None
    start_time: time
    end_time: time
    location: str | None = None
    instructor: str | None = None
    course_code: str | None = None
    is_one_time: bool = False
    date: date | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ScheduleEvent:
        """Build an event from its raw mapping, validating every required field.

        Both camelCase (``dayOfWeek``) and snake_case (``day_of_week``) keys
        are accepted. Optional descriptive fields are copied without checks.

        Raises:
            ScheduleValidationError: If any required or temporal field is invalid
        """
        title = data.get("title")
        if title is None or title == "":
            raise MissingFieldError("title is required", field="title")
        if not isinstance(title, str):
            raise InvalidFieldTypeError(
                f"title must be a string, got {title!r}", field="title", value=title
            )

        raw_one_time = _get(data, "isOneTime", "is_one_time")
        if raw_one_time is not None and not isinstance(raw_one_time, bool):
            raise InvalidFieldTypeError(
                f"isOneTime must be a boolean, got {raw_one_time!r}",
                field="isOneTime",
                value=raw_one_time,
            )
        is_one_time = bool(raw_one_time)

        raw_day = _get(data, "dayOfWeek", "day_of_week")
        day_of_week: Weekday | None
        if raw_day is None or raw_day == "":
            day_of_week = None
        elif isinstance(raw_day, Weekday):
            day_of_week = raw_day
        else:
            day_of_week = Weekday.from_name(raw_day)

        start_time = parse_time(_get(data, "startTime", "start_time"), "startTime")
        end_time = parse_time(_get(data, "endTime", "end_time"), "endTime")

        raw_date = data.get("date")
        event_date = None if raw_date is None or raw_date == "" else parse_date(raw_date)

        _check_anchor(day_of_week, is_one_time, event_date)

        return cls(
            title=title,
            day_of_week=day_of_week,
            start_time=start_time,
            end_time=end_time,
            location=data.get("location"),
            instructor=data.get("instructor"),
            course_code=_get(data, "courseCode", "course_code"),
            is_one_time=is_one_time,
            date=event_date,
        )

    @property
    def is_dated(self) -> bool:
        """True for one-time events pinned to an explicit calendar date."""
        return self.is_one_time and self.date is not None

    @property
    def description(self) -> str | None:
        """Description text shared by the file and remote renderings."""
        lines = []
        if self.course_code:
            lines.append(f"Course: {self.course_code}")
        if self.instructor:
            lines.append(f"Instructor: {self.instructor}")
        return "\n".join(lines) if lines else None

    def to_dict(self) -> dict[str, Any]:
        """Serialize back to the camelCase wire shape."""
        data: dict[str, Any] = {
            "title": self.title,
            "startTime": self.start_time.strftime("%H:%M"),
            "endTime": self.end_time.strftime("%H:%M"),
        }
        if self.day_of_week is not None:
            data["dayOfWeek"] = self.day_of_week.label
        for key, value in (
            ("location", self.location),
            ("instructor", self.instructor),
            ("courseCode", self.course_code),
        ):
            if value is not None:
                data[key] = value
        if self.is_one_time:
            data["isOneTime"] = True
        if self.date is not None:
            data["date"] = self.date.isoformat()
        return data


def validate_events(raw_events: Iterable[Mapping[str, Any] | ScheduleEvent]) -> list[ScheduleEvent]:
    """Validate a list of raw events.

    Every event is validated before anything is returned; the first invalid
    event aborts the whole request.

    Args:
        raw_events: Raw event mappings (already built events are only
            checked for an anchor)

    Returns:
        Validated events in input order

    Raises:
        ScheduleValidationError: For the first invalid event, with ``index`` set
    """
    events: list[ScheduleEvent] = []
    for index, raw in enumerate(raw_events):
        if not isinstance(raw, (ScheduleEvent, Mapping)):
            raise ScheduleValidationError(
                f"expected an object, got {type(raw).__name__}", index=index
            )
        try:
            if isinstance(raw, ScheduleEvent):
                _check_anchor(raw.day_of_week, raw.is_one_time, raw.date)
                events.append(raw)
            else:
                events.append(ScheduleEvent.from_dict(raw))
        except ScheduleValidationError as e:
            raise e.with_index(index) from None
    return events
