"""Recurrence planning and recurrence-rule translation.

A :class:`RecurrencePolicy` is the single source both renderers translate
from: :func:`to_vrecur` for the iCalendar file and :func:`to_rrule_line` for
the remote calendar API. Both encode the same UNTIL instant, computed once by
:func:`until_utc`.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, date, datetime, time, timedelta
from enum import Enum
from zoneinfo import ZoneInfo

from dateutil.rrule import rrulestr
from icalendar import vRecur

from .events import ScheduleEvent, Weekday
from .occurrences import ResolvedOccurrence

DEFAULT_REPEAT_WEEKS = 16
MAX_REPEAT_WEEKS = 520  # ten years


class RecurrenceKind(Enum):
    NONE = "none"
    WEEKLY_UNTIL = "weekly_until"


@dataclass(frozen=True)
class RecurrencePolicy:
    """How an event repeats: not at all, or weekly on a weekday until a date."""

    kind: RecurrenceKind
    until: date | None = None
    weekday: Weekday | None = None

    @classmethod
    def none(cls) -> RecurrencePolicy:
        return cls(RecurrenceKind.NONE)

    @classmethod
    def weekly_until(cls, until: date, weekday: Weekday) -> RecurrencePolicy:
        return cls(RecurrenceKind.WEEKLY_UNTIL, until=until, weekday=weekday)

    @property
    def is_recurring(self) -> bool:
        return self.kind is RecurrenceKind.WEEKLY_UNTIL


def recurrence_horizon(
    now: datetime | date,
    repeat_weeks: int = DEFAULT_REPEAT_WEEKS,
    semester_end_date: date | None = None,
) -> date:
    """Get the date on which weekly recurrences stop.

    An explicit *semester_end_date* wins over *repeat_weeks*. One horizon is
    shared by every recurring event of a request.
    """
    if semester_end_date is not None:
        return semester_end_date
    today = now.date() if isinstance(now, datetime) else now
    return today + timedelta(weeks=repeat_weeks)


def plan_recurrence(event: ScheduleEvent, horizon: date) -> RecurrencePolicy:
    """Derive the recurrence policy of an event.

    One-time events never repeat; everything else repeats weekly on its
    weekday until *horizon*.
    """
    if event.is_one_time:
        return RecurrencePolicy.none()
    assert event.day_of_week is not None
    return RecurrencePolicy.weekly_until(horizon, event.day_of_week)


def until_utc(policy: RecurrencePolicy, timezone: str) -> datetime:
    """Get the UNTIL instant of a weekly policy in UTC.

    The until date is inclusive: the instant is the last second of that day
    in *timezone*. RFC 5545 requires UTC for UNTIL when DTSTART carries a
    TZID.

    Raises:
        ValueError: If the policy does not recur
    """
    if not policy.is_recurring or policy.until is None:
        raise ValueError("policy has no recurrence end")
    local_end = datetime.combine(policy.until, time(23, 59, 59), tzinfo=ZoneInfo(timezone))
    return local_end.astimezone(UTC)


def to_vrecur(policy: RecurrencePolicy, timezone: str) -> vRecur | None:
    """Translate a policy into an iCalendar RRULE value (``None`` if not recurring)."""
    if not policy.is_recurring:
        return None
    assert policy.weekday is not None
    return vRecur(
        {
            "freq": ["WEEKLY"],
            "byday": [policy.weekday.ical_code],
            "until": [until_utc(policy, timezone)],
        }
    )


def to_rrule_line(policy: RecurrencePolicy, timezone: str) -> str | None:
    """Translate a policy into an ``RRULE:`` line for the remote calendar API.

    Example:
        >>> policy = RecurrencePolicy.weekly_until(date(2027, 2, 8), Weekday.MONDAY)
        >>> to_rrule_line(policy, "UTC")
        'RRULE:FREQ=WEEKLY;BYDAY=MO;UNTIL=20270208T235959Z'
    """
    if not policy.is_recurring:
        return None
    assert policy.weekday is not None
    until = until_utc(policy, timezone).strftime("%Y%m%dT%H%M%SZ")
    return f"RRULE:FREQ=WEEKLY;BYDAY={policy.weekday.ical_code};UNTIL={until}"


def expand_occurrences(
    occurrence: ResolvedOccurrence, policy: RecurrencePolicy, timezone: str
) -> list[datetime]:
    """List the start of every occurrence described by an occurrence and policy.

    Returns:
        Timezone-aware start datetimes in *timezone*, first occurrence first
    """
    tz = ZoneInfo(timezone)
    start = occurrence.start.replace(tzinfo=tz)
    rrule_line = to_rrule_line(policy, timezone)
    if rrule_line is None:
        return [start]
    rule = rrulestr(rrule_line, dtstart=start)
    return list(rule)
