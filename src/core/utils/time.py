"""
Time-related utilities for the application.

Response timestamps are generated in UTC. Object metadata dates are
rendered as RFC 7231 HTTP dates (``Tue, 15 Nov 1994 08:12:31 GMT``).
"""

from datetime import datetime, timezone
from email.utils import format_datetime, parsedate_to_datetime


def utc_now_iso() -> str:
    """Return current UTC time in ISO-8601 format.

    Example:
        2024-01-15T10:42:31.123456+00:00
    """
    return datetime.now(timezone.utc).isoformat()


def to_http_date(value: datetime | str) -> str:
    """Normalize a datetime or date string to an HTTP date in GMT.

    Strings are parsed as HTTP dates first, then as ISO-8601.
    Naive datetimes are treated as UTC.

    Raises:
        ValueError: If the string is not a recognizable date
    """
    if isinstance(value, str):
        try:
            parsed = parsedate_to_datetime(value)
        except (TypeError, ValueError):
            parsed = datetime.fromisoformat(value)
    else:
        parsed = value

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)

    return format_datetime(parsed.astimezone(timezone.utc), usegmt=True)
