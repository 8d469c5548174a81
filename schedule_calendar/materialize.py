"""Turn an export request into resolved events both renderers consume."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from .config import CalendarExportRequest
from .debug import logger
from .events import ScheduleEvent, validate_events
from .occurrences import ResolvedOccurrence, resolve_occurrence
from .recurrence import RecurrencePolicy, plan_recurrence, recurrence_horizon


@dataclass(frozen=True)
class ResolvedEvent:
    """An event together with its first occurrence and recurrence policy."""

    event: ScheduleEvent
    occurrence: ResolvedOccurrence
    policy: RecurrencePolicy


def local_now(request: CalendarExportRequest, now: datetime | None = None) -> datetime:
    """Get "now" as a naive wall-clock time in the request's timezone.

    Args:
        request: Export request supplying the timezone
        now: Injected current time. Aware values are converted into the
            request timezone; naive values are taken as local already.
            ``None`` reads the system clock.
    """
    tz = request.tzinfo
    if now is None:
        now = datetime.now(tz)
    elif now.tzinfo is None:
        return now
    return now.astimezone(tz).replace(tzinfo=None)


def materialize(
    request: CalendarExportRequest, now: datetime | None = None
) -> list[ResolvedEvent]:
    """Validate, resolve and plan every event of a request.

    Validation of all events completes before anything is resolved, so a
    single bad event yields no output at all.

    Raises:
        ScheduleValidationError: If any event is invalid
    """
    events = validate_events(request.events)
    current = local_now(request, now)
    horizon = recurrence_horizon(current, request.repeat_weeks, request.semester_end_date)

    logger.debug(
        "Materializing %d events (now=%s, horizon=%s, tz=%s)",
        len(events),
        current.isoformat(),
        horizon.isoformat(),
        request.timezone,
    )

    return [
        ResolvedEvent(
            event=event,
            occurrence=resolve_occurrence(event, current),
            policy=plan_recurrence(event, horizon),
        )
        for event in events
    ]
