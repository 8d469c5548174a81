"""Turn extracted schedule events into iCalendar files and Google calendars."""

from .config import CalendarExportRequest, GoogleCalendarConfig
from .errors import (
    CalendarAPIError,
    CalendarSyncError,
    InsufficientCalendarScopeError,
    InvalidDateFormatError,
    InvalidExportConfigError,
    InvalidFieldTypeError,
    InvalidTimeFormatError,
    InvalidWeekdayError,
    MissingAnchorError,
    MissingFieldError,
    RemoteCalendarCreationFailedError,
    RemoteEventCreationFailedError,
    ScheduleCalendarError,
    ScheduleValidationError,
)
from .events import ScheduleEvent, Weekday, validate_events
from .google_calendar import GoogleCalendarClient
from .ical import CALENDAR_MIME_TYPE, generate_ical, ics_filename, render_calendar
from .materialize import ResolvedEvent, materialize
from .occurrences import ResolvedOccurrence, next_weekday, resolve_occurrence
from .recurrence import (
    RecurrenceKind,
    RecurrencePolicy,
    plan_recurrence,
    recurrence_horizon,
)
from .sync import CalendarSynchronizer, SyncResult, sync_to_google_calendar

__version__ = "0.1.0"

__all__ = [
    "CalendarExportRequest",
    "GoogleCalendarConfig",
    "CalendarAPIError",
    "CalendarSyncError",
    "InsufficientCalendarScopeError",
    "InvalidDateFormatError",
    "InvalidExportConfigError",
    "InvalidFieldTypeError",
    "InvalidTimeFormatError",
    "InvalidWeekdayError",
    "MissingAnchorError",
    "MissingFieldError",
    "RemoteCalendarCreationFailedError",
    "RemoteEventCreationFailedError",
    "ScheduleCalendarError",
    "ScheduleValidationError",
    "ScheduleEvent",
    "Weekday",
    "validate_events",
    "GoogleCalendarClient",
    "CALENDAR_MIME_TYPE",
    "generate_ical",
    "ics_filename",
    "render_calendar",
    "ResolvedEvent",
    "materialize",
    "ResolvedOccurrence",
    "next_weekday",
    "resolve_occurrence",
    "RecurrenceKind",
    "RecurrencePolicy",
    "plan_recurrence",
    "recurrence_horizon",
    "CalendarSynchronizer",
    "SyncResult",
    "sync_to_google_calendar",
]
