"""Replay resolved schedule events against a remote calendar service.

Events are created one at a time, in input order. The first failure aborts
the run: nothing is retried and calendars or events already created on the
remote side are left in place.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

import httpx

from .config import CalendarExportRequest, GoogleCalendarConfig
from .debug import logger
from .errors import (
    CalendarAPIError,
    InsufficientCalendarScopeError,
    RemoteCalendarCreationFailedError,
    RemoteEventCreationFailedError,
)
from .google_calendar import GoogleCalendarClient
from .materialize import ResolvedEvent, materialize
from .recurrence import to_rrule_line


@dataclass
class SyncResult:
    """Outcome of a successful sync."""

    calendar_id: str
    calendar_url: str
    event_ids: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, str]:
        return {"calendarId": self.calendar_id, "calendarUrl": self.calendar_url}


def build_calendar_body(calendar_name: str, timezone: str) -> dict[str, Any]:
    return {"summary": calendar_name, "timeZone": timezone}


def build_event_body(resolved: ResolvedEvent, timezone: str) -> dict[str, Any]:
    """Translate a resolved event into a Calendar API event resource.

    Date-times are sent as local wall-clock values tagged with *timezone*.
    Recurring events get a single RRULE line; one-time events get none.

    Example:
        >>> build_event_body(resolved, "UTC")["recurrence"]
        ['RRULE:FREQ=WEEKLY;BYDAY=MO;UNTIL=20270208T235959Z']
    """
    event = resolved.event
    body: dict[str, Any] = {
        "summary": event.title,
        "start": {
            "dateTime": resolved.occurrence.start.isoformat(timespec="seconds"),
            "timeZone": timezone,
        },
        "end": {
            "dateTime": resolved.occurrence.end.isoformat(timespec="seconds"),
            "timeZone": timezone,
        },
    }

    if event.location:
        body["location"] = event.location

    description = event.description
    if description:
        body["description"] = description

    rrule_line = to_rrule_line(resolved.policy, timezone)
    if rrule_line is not None:
        body["recurrence"] = [rrule_line]

    return body


class CalendarSynchronizer:
    """Creates a remote calendar and fills it with resolved events."""

    def __init__(
        self, client: GoogleCalendarClient, config: GoogleCalendarConfig | None = None
    ) -> None:
        self.client = client
        self.config = config or client.config

    async def create_calendar(self, calendar_name: str, timezone: str) -> str:
        """Create the remote calendar container.

        Returns:
            Remote calendar identifier

        Raises:
            InsufficientCalendarScopeError: If the credential lacks calendar scope
            RemoteCalendarCreationFailedError: If no identifier came back
        """
        try:
            data = await self.client.create_calendar(build_calendar_body(calendar_name, timezone))
        except CalendarAPIError as e:
            if e.is_scope_error:
                raise InsufficientCalendarScopeError(status_code=e.status_code) from e
            raise RemoteCalendarCreationFailedError(
                f"failed to create calendar: {e.message}", status_code=e.status_code
            ) from e
        except httpx.HTTPError as e:
            raise RemoteCalendarCreationFailedError(f"failed to create calendar: {e}") from e

        calendar_id = data.get("id")
        if not calendar_id:
            raise RemoteCalendarCreationFailedError("failed to create calendar: no id returned")
        return str(calendar_id)

    async def insert_events(
        self, calendar_id: str, resolved_events: list[ResolvedEvent], timezone: str
    ) -> list[str]:
        """Create every event, strictly one after another.

        Raises:
            InsufficientCalendarScopeError: On a scope failure (remaining events skipped)
            RemoteEventCreationFailedError: On any other failure (remaining events skipped)
        """
        event_ids: list[str] = []
        for index, resolved in enumerate(resolved_events):
            body = build_event_body(resolved, timezone)
            title = resolved.event.title
            try:
                created = await self.client.insert_event(calendar_id, body)
            except CalendarAPIError as e:
                logger.warning(f"Event {index} ({title!r}) failed after {index} created: {e}")
                if e.is_scope_error:
                    raise InsufficientCalendarScopeError(status_code=e.status_code) from e
                raise RemoteEventCreationFailedError(
                    e.message, index, title, status_code=e.status_code, created=index
                ) from e
            except httpx.HTTPError as e:
                logger.warning(f"Event {index} ({title!r}) failed after {index} created: {e}")
                raise RemoteEventCreationFailedError(str(e), index, title, created=index) from e

            event_ids.append(str(created.get("id", "")))
        return event_ids

    async def sync(self, request: CalendarExportRequest, now: datetime | None = None) -> SyncResult:
        """Sync an export request to a new remote calendar.

        All events are validated and resolved before the first remote call.

        Args:
            request: Events and export options
            now: Injected current time (see :func:`materialize.local_now`)

        Returns:
            Identifier and share URL of the new calendar

        Raises:
            ScheduleValidationError: If any event is invalid (no remote calls made)
            CalendarSyncError: If a remote call fails
        """
        resolved = materialize(request, now)

        calendar_id = await self.create_calendar(request.calendar_name, request.timezone)
        logger.info(f"Created calendar {calendar_id!r} ({request.calendar_name})")

        event_ids = await self.insert_events(calendar_id, resolved, request.timezone)
        logger.info(f"Synced {len(event_ids)} events to calendar {calendar_id!r}")

        return SyncResult(
            calendar_id=calendar_id,
            calendar_url=self.config.calendar_url(calendar_id),
            event_ids=event_ids,
        )


async def sync_to_google_calendar(
    access_token: str,
    request: CalendarExportRequest,
    now: datetime | None = None,
    config: GoogleCalendarConfig | None = None,
    debug: bool = False,
) -> SyncResult:
    """Create a Google calendar holding every event of *request*."""
    async with GoogleCalendarClient(access_token, config, debug=debug) as client:
        return await CalendarSynchronizer(client).sync(request, now)
