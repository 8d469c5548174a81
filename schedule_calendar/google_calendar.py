"""Google Calendar API client for creating calendars and events.

The client is handed an OAuth2 access token obtained elsewhere; it never
acquires or refreshes tokens itself.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

import httpx

from .config import GoogleCalendarConfig
from .debug import log_api_request, log_api_response
from .errors import CalendarAPIError


def _error_from_response(response: httpx.Response) -> CalendarAPIError:
    """Build a CalendarAPIError from a Google error payload.

    Google wraps errors as ``{"error": {"code", "message", "errors": [{"reason"}],
    "details": [{"reason"}]}}``; anything else falls back to the body text.
    """
    message = ""
    reason = None
    try:
        payload = response.json()
    except ValueError:
        payload = None

    if isinstance(payload, dict):
        error = payload.get("error")
        if isinstance(error, dict):
            message = str(error.get("message") or "")
            reasons = [
                item["reason"]
                for item in [*(error.get("errors") or []), *(error.get("details") or [])]
                if isinstance(item, dict) and item.get("reason")
            ]
            if "ACCESS_TOKEN_SCOPE_INSUFFICIENT" in reasons:
                reason = "ACCESS_TOKEN_SCOPE_INSUFFICIENT"
            elif reasons:
                reason = reasons[0]
        elif isinstance(error, str):
            message = error

    if not message:
        message = " ".join(response.text.split())[:200] or response.reason_phrase

    return CalendarAPIError(response.status_code, message, reason)


class GoogleCalendarClient:
    """Minimal Google Calendar v3 client.

    Example:
        >>> async with GoogleCalendarClient(token) as client:
        ...     calendar = await client.create_calendar({"summary": "My Schedule", "timeZone": "UTC"})
    """

    def __init__(
        self,
        access_token: str,
        config: GoogleCalendarConfig | None = None,
        http_client: httpx.AsyncClient | None = None,
        debug: bool = False,
    ) -> None:
        """Initialize Google Calendar client.

        Args:
            access_token: OAuth2 bearer token with calendar scope
            config: API configuration (uses default if None)
            http_client: Preconfigured HTTP client; closed by the caller
            debug: Log API requests and responses
        """
        self.access_token = access_token
        self.config = config or GoogleCalendarConfig()
        self.debug = debug
        self._http_client = http_client
        self._owns_http_client = http_client is None

    async def _get_http_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                timeout=self.config.timeout,
                headers={"Content-Type": "application/json"},
            )
        return self._http_client

    async def close(self) -> None:
        """Close HTTP client and cleanup resources."""
        if self._http_client is not None and self._owns_http_client:
            await self._http_client.aclose()
            self._http_client = None

    async def __aenter__(self) -> GoogleCalendarClient:
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    async def _make_request(
        self,
        method: str,
        path: str,
        **kwargs: Any,
    ) -> dict[str, Any]:
        """Make authenticated request to the Calendar API.

        Args:
            method: HTTP method (GET, POST, etc.)
            path: API path relative to the base URL (e.g., "/calendars")
            **kwargs: Additional arguments for httpx request

        Returns:
            Decoded JSON response body ({} for empty responses)

        Raises:
            CalendarAPIError: If the API answers with a non-2xx status
            httpx.HTTPError: If the request could not be sent
        """
        client = await self._get_http_client()
        url = f"{self.config.base_url.rstrip('/')}{path}"

        headers = kwargs.pop("headers", {})
        headers["Authorization"] = f"Bearer {self.access_token}"

        if self.debug:
            log_api_request(method, url, headers, kwargs.get("json"))

        response = await client.request(method, url, headers=headers, **kwargs)

        body: Any = None
        if response.content:
            try:
                body = response.json()
            except ValueError:
                body = response.text

        if self.debug:
            log_api_response(response.status_code, body)

        if response.is_error:
            raise _error_from_response(response)

        if not isinstance(body, dict):
            return {}
        return body

    async def create_calendar(self, calendar: dict[str, Any]) -> dict[str, Any]:
        """Create a secondary calendar.

        Args:
            calendar: Calendar resource body ("summary" and "timeZone")

        Returns:
            Calendar resource (contains "id" on success)
        """
        return await self._make_request("POST", "/calendars", json=calendar)

    async def insert_event(self, calendar_id: str, event: dict[str, Any]) -> dict[str, Any]:
        """Create an event in a calendar.

        Args:
            calendar_id: Target calendar identifier
            event: Event resource body

        Returns:
            Created event resource
        """
        return await self._make_request(
            "POST",
            f"/calendars/{quote(calendar_id, safe='')}/events",
            json=event,
        )
