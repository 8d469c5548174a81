"""Schedule calendar server command-line tool."""

import argparse


def main() -> None:
    """Main entry point for the schedule calendar server."""
    parser = argparse.ArgumentParser(
        description="Schedule-to-calendar export and sync server",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Start server on the default port
  schedule-calendar-server

  # Start server on a specific port with debug logging
  schedule-calendar-server --port 8080 --debug

Endpoints:
  - POST /ical  render events as an .ics file
  - POST /sync  create a Google calendar (Authorization: Bearer <token>)

The default timezone comes from SCHEDULE_CALENDAR_TIMEZONE, then TZ, then UTC.
        """,
    )
    parser.add_argument(
        "--addr",
        default="127.0.0.1",
        help="listening address (default: 127.0.0.1)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8080,
        help="listening port (default: 8080)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="enable debug logging (logs calendar API requests/responses as JSON)",
    )

    args = parser.parse_args()

    if args.debug:
        from schedule_calendar.debug import setup_api_debug_logging, setup_debug_logging

        setup_debug_logging()
        setup_api_debug_logging()

    import uvicorn

    from schedule_calendar.app import create_app

    app = create_app(debug=args.debug)

    print(f"Schedule calendar server listening on {args.addr}:{args.port}")

    uvicorn.run(
        app,
        host=args.addr,
        port=args.port,
        log_level="info",
    )


if __name__ == "__main__":
    main()
