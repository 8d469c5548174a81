"""Resolve schedule events to concrete wall-clock occurrences."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

from .events import ScheduleEvent, Weekday


@dataclass(frozen=True)
class ResolvedOccurrence:
    """First (or only) occurrence of an event.

    ``start`` and ``end`` are naive local wall-clock datetimes on the same
    calendar date. They are tagged with the export timezone only when rendered.
    """

    start: datetime
    end: datetime

    @property
    def date(self) -> date:
        return self.start.date()

    @property
    def weekday(self) -> Weekday:
        return Weekday.from_date(self.start.date())


def next_weekday(day: Weekday, now: datetime | date) -> date:
    """Get the next date falling on *day*, strictly after *now*.

    If *now* already falls on *day* the result is one week later, so the
    result is always 1 to 7 days ahead.

    Example:
        >>> next_weekday(Weekday.MONDAY, date(2026, 10, 19))  # a Monday
        datetime.date(2026, 10, 26)
    """
    today = now.date() if isinstance(now, datetime) else now
    current = Weekday.from_date(today)
    days_ahead = (day - current + 7) % 7
    if days_ahead == 0:
        days_ahead = 7
    return today + timedelta(days=days_ahead)


def combine(day: date, wall_time: time) -> datetime:
    """Combine a date and a wall-clock time, seconds zeroed."""
    return datetime.combine(day, time(wall_time.hour, wall_time.minute))


def anchor_date(event: ScheduleEvent, now: datetime) -> date:
    """Get the calendar date an event's first occurrence falls on.

    Dated one-time events use their explicit date verbatim, ignoring
    ``day_of_week``. Every other event anchors on the next occurrence of its
    weekday after *now*.
    """
    if event.is_dated:
        assert event.date is not None
        return event.date

    if event.day_of_week is None:
        # validate_events rejects this combination
        raise ValueError(f"event {event.title!r} has no weekday to anchor on")
    return next_weekday(event.day_of_week, now)


def resolve_occurrence(event: ScheduleEvent, now: datetime) -> ResolvedOccurrence:
    """Resolve an event to its first concrete occurrence.

    Args:
        event: Validated schedule event
        now: Current local wall-clock time in the export timezone

    Returns:
        Start/end datetimes on the anchor date. ``end`` is computed from
        ``end_time`` independently and may precede ``start``.
    """
    day = anchor_date(event, now)
    return ResolvedOccurrence(
        start=combine(day, event.start_time),
        end=combine(day, event.end_time),
    )
