"""Debug logging utilities for calendar export and sync."""

from __future__ import annotations

import json
import logging
from typing import Any

logger = logging.getLogger("schedule_calendar")
api_logger = logging.getLogger("schedule_calendar.google")

REDACTED = "[REDACTED]"


def redact_headers(headers: dict[str, Any]) -> dict[str, Any]:
    """Copy *headers* with the Authorization value hidden."""
    return {k: REDACTED if k.lower() == "authorization" else v for k, v in headers.items()}


def log_api_request(method: str, url: str, headers: dict[str, Any], body: Any) -> None:
    """Log an outgoing calendar API request in JSON format.

    Args:
        method: HTTP method
        url: Request URL
        headers: Request headers
        body: Request body (dict, list, or None)
    """
    request_data: dict[str, Any] = {
        "type": "request",
        "method": method,
        "url": url,
        "headers": redact_headers(headers),
    }

    if body is not None:
        request_data["body"] = body

    api_logger.info(json.dumps(request_data, indent=2, ensure_ascii=False, default=str))


def log_api_response(status_code: int, body: Any) -> None:
    """Log an incoming calendar API response in JSON format."""
    response_data: dict[str, Any] = {
        "type": "response",
        "status_code": status_code,
    }

    if body is not None:
        response_data["body"] = body

    api_logger.info(json.dumps(response_data, indent=2, ensure_ascii=False, default=str))


def _attach_console_handler(target: logging.Logger) -> None:
    target.setLevel(logging.DEBUG)

    handler = logging.StreamHandler()
    handler.setLevel(logging.DEBUG)

    # Messages are preformatted
    handler.setFormatter(logging.Formatter("%(message)s"))

    target.addHandler(handler)
    target.propagate = False


def setup_debug_logging() -> None:
    """Configure debug logging for export and sync."""
    _attach_console_handler(logger)


def setup_api_debug_logging() -> None:
    """Configure debug logging for calendar API requests/responses."""
    _attach_console_handler(api_logger)
