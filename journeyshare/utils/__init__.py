"""JourneyShare utilities package.

Date utilities are stateless pure functions with no side effects.
"""

from journeyshare.utils.date_utils import (
    format_date_range,
    format_iso8601,
    format_medium_date,
    parse_iso8601,
    utc_now,
)
from journeyshare.utils.logging_utils import configure_logging, get_logger

__all__ = [
    "parse_iso8601",
    "format_iso8601",
    "format_medium_date",
    "format_date_range",
    "utc_now",
    "configure_logging",
    "get_logger",
]
