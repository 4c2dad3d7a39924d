"""Journey file decoder for JourneyShare.

Recognizes journey files and projects them to a display summary:
  1. strip an optional magic header
  2. parse JSON once
  3. try each schema in SCHEMA_ATTEMPTS order; the first structural success wins
  4. reject with NotAJourneyFileError if none accepts the payload

Decoding is pure: no I/O, no shared state, identical bytes give identical
results. Field plausibility is not validated; structure is the only gate.
"""

from __future__ import annotations

import json
import logging
import math
from typing import Any, Callable, Optional, Tuple

from config.defaults import DEFAULT_SENDER_NAME, DISPLAY_TIMEZONE
from journeyshare.codec.headers import strip_magic_header
from journeyshare.exceptions import NotAJourneyFileError
from journeyshare.models.journey import JourneyExport, ShareableJourneyExport
from journeyshare.models.summary import DecodedJourney, JourneySummary, SchemaTag
from journeyshare.utils.date_utils import format_date_range

logger = logging.getLogger(__name__)

DecodeFn = Callable[[Any], DecodedJourney]


def _decode_shareable(obj: Any) -> DecodedJourney:
    journey = ShareableJourneyExport.from_dict(obj)
    return DecodedJourney(
        schema=SchemaTag.SHAREABLE,
        sender_name=journey.sender_name,
        export=journey.export_data,
    )


def _decode_legacy(obj: Any) -> DecodedJourney:
    return DecodedJourney(
        schema=SchemaTag.LEGACY,
        sender_name=DEFAULT_SENDER_NAME,
        export=JourneyExport.from_dict(obj),
    )


# Closed set of schema variants, in preference order
SCHEMA_ATTEMPTS: Tuple[Tuple[SchemaTag, DecodeFn], ...] = (
    (SchemaTag.SHAREABLE, _decode_shareable),
    (SchemaTag.LEGACY, _decode_legacy),
)


def _reject_constant(name: str) -> float:
    raise ValueError(f"Non-standard JSON constant {name}")


def _finite_float(text: str) -> float:
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"Number out of range: {text}")
    return value


def _parse_json(payload: bytes) -> Optional[Any]:
    # Strict RFC 8259: NaN, Infinity and overflowing numbers are not JSON
    try:
        return json.loads(
            payload.decode("utf-8"),
            parse_constant=_reject_constant,
            parse_float=_finite_float,
        )
    except (ValueError, RecursionError) as exc:
        logger.debug("Payload is not JSON: %s", exc)
        return None


def decode_payload(payload: bytes) -> DecodedJourney:
    """Run the schema attempts over header-free payload bytes.

    Raises:
        NotAJourneyFileError: If no schema accepts the payload.
    """
    obj = _parse_json(payload)
    if obj is None:
        raise NotAJourneyFileError("Payload is not valid UTF-8 JSON")

    failures = []
    for tag, decode_fn in SCHEMA_ATTEMPTS:
        try:
            decoded = decode_fn(obj)
        except (ValueError, TypeError) as exc:
            failures.append(f"{tag.value}: {exc}")
            continue
        logger.debug("Decoded journey with %s schema", tag.value)
        return decoded

    raise NotAJourneyFileError("No journey schema matched (" + "; ".join(failures) + ")")


class FormatDecoder:
    """Classifies raw bytes as a journey file and summarizes them.

    Args:
        display_timezone: IANA timezone used to render the date range.
    """

    def __init__(self, display_timezone: str = DISPLAY_TIMEZONE) -> None:
        self.display_timezone = display_timezone

    def decode_journey(self, data: bytes) -> DecodedJourney:
        """Strip any magic header and decode the full journey.

        Raises:
            NotAJourneyFileError: If the bytes are not a journey file.
        """
        payload, header = strip_magic_header(data)
        if header is not None:
            logger.debug("Stripped magic header %r", header)
        return decode_payload(payload)

    def summarize(self, decoded: DecodedJourney) -> JourneySummary:
        """Project a decoded journey to its display summary."""
        date_range = decoded.export.date_range
        date_range_text = None
        if date_range is not None:
            try:
                date_range_text = format_date_range(
                    date_range.earliest, date_range.latest, self.display_timezone
                )
            except OverflowError:
                # Dates at the edge of the calendar cannot shift into every timezone
                date_range_text = (
                    f"{date_range.earliest.date().isoformat()} - "
                    f"{date_range.latest.date().isoformat()}"
                )
        return JourneySummary(
            sender_name=decoded.sender_name,
            location_count=decoded.export.total_locations,
            date_range_text=date_range_text,
        )

    def decode(self, data: bytes) -> JourneySummary:
        """Decode raw bytes to a JourneySummary.

        Raises:
            NotAJourneyFileError: If neither schema accepts the payload.
        """
        return self.summarize(self.decode_journey(data))

    def is_journey_file(self, data: bytes) -> bool:
        """True if data decodes under any known schema."""
        try:
            self.decode_journey(data)
        except NotAJourneyFileError:
            return False
        return True


def decode_summary(data: bytes, display_timezone: str = DISPLAY_TIMEZONE) -> JourneySummary:
    """Convenience wrapper: FormatDecoder(display_timezone).decode(data)."""
    return FormatDecoder(display_timezone).decode(data)
