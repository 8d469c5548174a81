"""HTTP endpoints for calendar export and sync.

    POST /ical  -> text/calendar attachment
    POST /sync  -> {"calendarId": ..., "calendarUrl": ...}

Both endpoints take the same JSON body::

    {"events": [...], "calendarName": "...", "repeatWeeks": 16,
     "semesterEndDate": "2026-12-18", "timezone": "Europe/Berlin"}

``/sync`` additionally requires ``Authorization: Bearer <google access token>``.
"""

from __future__ import annotations

from typing import Any

from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.routing import Route

from .config import (
    FILE_CALENDAR_NAME,
    SYNC_CALENDAR_NAME,
    CalendarExportRequest,
    GoogleCalendarConfig,
)
from .debug import logger
from .errors import (
    CalendarSyncError,
    InsufficientCalendarScopeError,
    ScheduleValidationError,
)
from .ical import CALENDAR_MIME_TYPE, generate_ical, ics_filename
from .sync import sync_to_google_calendar


def _error_response(status_code: int, kind: str, message: str, **extra: Any) -> JSONResponse:
    content: dict[str, Any] = {"error": kind, "message": message}
    content.update({k: v for k, v in extra.items() if v is not None})
    return JSONResponse(content, status_code=status_code)


def _validation_error_response(e: ScheduleValidationError) -> JSONResponse:
    return _error_response(400, e.kind, str(e), field=e.field, index=e.index)


def _bearer_token(request: Request) -> str | None:
    header = request.headers.get("authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


class ScheduleCalendarHandler:
    """Request handlers for the export and sync endpoints."""

    def __init__(
        self, google_config: GoogleCalendarConfig | None = None, debug: bool = False
    ) -> None:
        self.google_config = google_config or GoogleCalendarConfig()
        self.debug = debug

    async def _read_export_request(
        self, request: Request, default_name: str
    ) -> CalendarExportRequest | JSONResponse:
        try:
            payload = await request.json()
        except ValueError:
            return _error_response(400, "InvalidRequest", "request body must be JSON")
        if not isinstance(payload, dict):
            return _error_response(400, "InvalidRequest", "request body must be a JSON object")

        try:
            return CalendarExportRequest.from_dict(payload, default_name=default_name)
        except ScheduleValidationError as e:
            return _validation_error_response(e)

    async def handle_ical(self, request: Request) -> Response:
        """Handle POST /ical: render the events as a downloadable .ics file."""
        export = await self._read_export_request(request, FILE_CALENDAR_NAME)
        if isinstance(export, JSONResponse):
            return export

        try:
            ical_content = generate_ical(export)
        except ScheduleValidationError as e:
            return _validation_error_response(e)

        filename = ics_filename(export.calendar_name)
        return Response(
            content=ical_content,
            media_type=CALENDAR_MIME_TYPE,
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )

    async def handle_sync(self, request: Request) -> Response:
        """Handle POST /sync: create a Google calendar holding the events."""
        token = _bearer_token(request)
        if token is None:
            return _error_response(
                401, "Unauthorized", "missing bearer token for the calendar service"
            )

        export = await self._read_export_request(request, SYNC_CALENDAR_NAME)
        if isinstance(export, JSONResponse):
            return export

        try:
            result = await sync_to_google_calendar(
                token, export, config=self.google_config, debug=self.debug
            )
        except ScheduleValidationError as e:
            return _validation_error_response(e)
        except InsufficientCalendarScopeError as e:
            return _error_response(403, e.kind, e.message)
        except CalendarSyncError as e:
            logger.error(f"Calendar sync failed: {e}")
            return _error_response(502, e.kind, e.message)

        return JSONResponse({"success": True, **result.to_dict()})


def create_app(
    google_config: GoogleCalendarConfig | None = None, debug: bool = False
) -> Starlette:
    """Create the Starlette application."""
    handler = ScheduleCalendarHandler(google_config, debug=debug)
    return Starlette(
        debug=debug,
        routes=[
            Route("/ical", handler.handle_ical, methods=["POST"]),
            Route("/sync", handler.handle_sync, methods=["POST"]),
        ],
    )
