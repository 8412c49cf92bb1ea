"""RFC 3339 date-time strings as used by ActivityStreams.

Timestamps are written in UTC at second precision with a trailing ``Z``
(``2024-01-02T03:04:05Z``). Fractional seconds are truncated on write.

A leap second (``23:59:60``) is read as the last second of its minute, since
``datetime`` cannot represent it.
"""

from __future__ import annotations

import re
from datetime import UTC, datetime

from aswire.errors import InvalidValueError

_RFC3339 = re.compile(
    r"\d{4}-\d{2}-\d{2}[Tt ]\d{2}:\d{2}:(?P<second>\d{2})"
    r"(\.\d+)?([Zz]|[+-]\d{2}:\d{2})",
)


def format_datetime(dt: datetime) -> str:
    """Format an aware datetime as an RFC 3339 UTC string.

    Raises:
        InvalidValueError: If dt is naive

    """
    if dt.tzinfo is None or dt.utcoffset() is None:
        msg = f"Cannot format naive datetime {dt.isoformat()}; attach a timezone"
        raise InvalidValueError(msg)
    utc = dt.astimezone(UTC)
    return (
        f"{utc.year:04d}-{utc.month:02d}-{utc.day:02d}"
        f"T{utc.hour:02d}:{utc.minute:02d}:{utc.second:02d}Z"
    )


def parse_datetime(s: str) -> datetime:
    """Parse an RFC 3339 string into an aware UTC datetime.

    Raises:
        InvalidValueError: If s is not a valid RFC 3339 date-time

    """
    match = _RFC3339.fullmatch(s)
    if not match:
        msg = f"Not an RFC 3339 date-time: {s!r}"
        raise InvalidValueError(msg)
    text = s.upper().replace(" ", "T")
    if match["second"] == "60":
        start, end = match.span("second")
        text = text[:start] + "59" + text[end:]
    try:
        parsed = datetime.fromisoformat(text)
        return parsed.astimezone(UTC)
    except (ValueError, OverflowError) as err:
        msg = f"Not an RFC 3339 date-time: {s!r} ({err})"
        raise InvalidValueError(msg) from err
