"""Date handling utilities for JourneyShare.

Journey files carry ISO-8601 timestamps. Always route timestamp strings through
parse_iso8601() when reading and format_iso8601() when writing, so readers and
writers on either side of the share agree on the encoding.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Optional
from zoneinfo import ZoneInfo

from dateutil import parser as dateutil_parser

from config.defaults import DISPLAY_TIMEZONE

_ISO_DATETIME = re.compile(
    r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d+)?(Z|[+-]\d{2}:?\d{2})$"
)


def parse_iso8601(raw: object) -> datetime:
    """Parse an ISO-8601 timestamp string into a timezone-aware datetime.

    Accepts the form the exporter writes (``2024-01-15T12:00:00Z``) as well as
    fractional seconds and explicit offsets. A full date and time with a zone
    designator is required: bare dates and naive times are rejected.

    Args:
        raw: Value taken from a JSON document.

    Returns:
        Timezone-aware datetime.

    Raises:
        ValueError: If raw is not a string or is not a zoned ISO-8601 date-time.
    """
    if not isinstance(raw, str):
        raise ValueError(f"Expected ISO-8601 string, got {type(raw).__name__}")
    text = raw.strip()
    if not _ISO_DATETIME.match(text):
        raise ValueError(f"Invalid ISO-8601 timestamp: {raw!r}")
    try:
        dt = dateutil_parser.isoparse(text)
    except (ValueError, OverflowError) as exc:
        raise ValueError(f"Invalid ISO-8601 timestamp: {raw!r}") from exc
    try:
        return dt.astimezone(timezone.utc)
    except OverflowError as exc:
        raise ValueError(f"Timestamp out of range: {raw!r}") from exc


def format_iso8601(dt: datetime) -> str:
    """Format a datetime as a UTC ISO-8601 string with second precision.

    Args:
        dt: Datetime. If naive, it is treated as UTC.

    Returns:
        String in the form ``YYYY-MM-DDTHH:MM:SSZ``.
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def format_medium_date(dt: datetime, tz_name: str = DISPLAY_TIMEZONE) -> str:
    """Render a date in medium style, e.g. ``Jan 15, 2024``.

    Args:
        dt: Timezone-aware datetime.
        tz_name: IANA timezone the date is shown in.
    """
    local = dt.astimezone(ZoneInfo(tz_name))
    return f"{local.strftime('%b')} {local.day}, {local.year}"


def format_date_range(
    earliest: Optional[datetime],
    latest: Optional[datetime],
    tz_name: str = DISPLAY_TIMEZONE,
) -> Optional[str]:
    """Render ``"<earliest> - <latest>"`` in medium date style.

    Returns None when either bound is missing.
    """
    if earliest is None or latest is None:
        return None
    return f"{format_medium_date(earliest, tz_name)} - {format_medium_date(latest, tz_name)}"


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime, truncated to seconds."""
    return datetime.now(timezone.utc).replace(microsecond=0)
