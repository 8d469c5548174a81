"""Error types raised while materializing and syncing schedule calendars."""

from __future__ import annotations


class ScheduleCalendarError(Exception):
    """Base class for all schedule calendar errors."""

    kind = "ScheduleCalendarError"


class ScheduleValidationError(ScheduleCalendarError):
    """An input event or export option failed validation.

    Raised before any output is produced.
    """

    kind = "ValidationError"

    def __init__(
        self,
        message: str,
        field: str | None = None,
        index: int | None = None,
        value: object = None,
    ) -> None:
        self.message = message
        self.field = field
        self.index = index
        self.value = value
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.index is not None:
            return f"event {self.index}: {self.message}"
        return self.message

    def with_index(self, index: int) -> ScheduleValidationError:
        """Return a copy of this error attributed to event *index*."""
        return type(self)(self.message, field=self.field, index=index, value=self.value)


class InvalidDateFormatError(ScheduleValidationError):
    """A ``date`` value is not a valid ``YYYY-MM-DD`` calendar date."""

    kind = "InvalidDateFormat"


class InvalidTimeFormatError(ScheduleValidationError):
    """A ``startTime``/``endTime`` value is not a valid ``HH:MM`` time."""

    kind = "InvalidTimeFormat"


class MissingAnchorError(ScheduleValidationError):
    """An event has neither an explicit date nor a weekday to anchor it."""

    kind = "MissingAnchor"


class MissingFieldError(ScheduleValidationError):
    kind = "MissingField"


class InvalidWeekdayError(ScheduleValidationError):
    kind = "InvalidWeekday"


class InvalidFieldTypeError(ScheduleValidationError):
    """A field holds a value of the wrong JSON type (e.g. ``"false"`` for a boolean)."""

    kind = "InvalidFieldType"


class InvalidExportConfigError(ScheduleValidationError):
    """Timezone, repeat horizon or end date of an export request is unusable."""

    kind = "InvalidExportConfig"


class CalendarAPIError(ScheduleCalendarError):
    """Non-success response from the remote calendar service."""

    kind = "CalendarAPIError"

    def __init__(self, status_code: int, message: str, reason: str | None = None) -> None:
        self.status_code = status_code
        self.message = message
        self.reason = reason
        super().__init__(str(self))

    def __str__(self) -> str:
        s = f"{self.status_code}: {self.message}"
        if self.reason:
            return f"{s} ({self.reason})"
        return s

    @property
    def is_scope_error(self) -> bool:
        """Check if the credential lacks the scope needed for calendar writes."""
        if self.status_code != 403:
            return False
        if self.reason in ("insufficientPermissions", "ACCESS_TOKEN_SCOPE_INSUFFICIENT"):
            return True
        return "insufficient authentication scopes" in self.message.lower()


class CalendarSyncError(ScheduleCalendarError):
    """Base class for remote synchronization failures."""

    kind = "CalendarSyncError"

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class RemoteCalendarCreationFailedError(CalendarSyncError):
    """The remote service did not return a usable calendar identifier."""

    kind = "RemoteCalendarCreationFailed"


class InsufficientCalendarScopeError(CalendarSyncError):
    """The access credential was not granted calendar write permission.

    The user has to reconnect their account with calendar access enabled;
    retrying with the same credential will not help.
    """

    kind = "InsufficientCalendarScope"

    def __init__(self, message: str | None = None, status_code: int | None = 403) -> None:
        super().__init__(
            message
            or "Calendar permission not granted. Reconnect your account with calendar access enabled.",
            status_code=status_code,
        )


class RemoteEventCreationFailedError(CalendarSyncError):
    """Creating one event failed; remaining events were not attempted."""

    kind = "RemoteEventCreationFailed"

    def __init__(
        self,
        message: str,
        index: int,
        title: str,
        status_code: int | None = None,
        created: int = 0,
    ) -> None:
        self.index = index
        self.title = title
        self.created = created
        super().__init__(f"event {index} ({title!r}): {message}", status_code=status_code)
