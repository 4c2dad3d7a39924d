"""Journey file writer for JourneyShare.

Builds a JourneyExport from location samples and serializes it the way the
decoder expects: ISO-8601 timestamps, optional sender wrapper, magic header.
"""

from __future__ import annotations

import json
import logging
import re
from datetime import datetime
from pathlib import Path
from typing import Iterable, Optional, Tuple

from config.defaults import CURRENT_MAGIC_HEADER, JOURNEY_FILENAME_SUFFIX
from journeyshare.codec.headers import prepend_magic_header
from journeyshare.io.persistence import write_bytes_atomic
from journeyshare.models.journey import (
    DateRange,
    JourneyExport,
    Location,
    ShareableJourneyExport,
)
from journeyshare.utils.date_utils import utc_now

logger = logging.getLogger(__name__)

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9_]")

Sample = Tuple[float, float, datetime]


def build_export(
    samples: Iterable[Sample],
    export_date: Optional[datetime] = None,
) -> JourneyExport:
    """Build a JourneyExport from (latitude, longitude, timestamp) samples.

    Args:
        samples: Location samples in exporter order.
        export_date: Export instant (defaults to now, UTC).

    Returns:
        JourneyExport with total_locations and date_range derived from samples.
    """
    locations = [
        Location(latitude=float(lat), longitude=float(lon), timestamp=ts)
        for lat, lon, ts in samples
    ]
    timestamps = [loc.timestamp for loc in locations]
    date_range = DateRange(earliest=min(timestamps), latest=max(timestamps)) if timestamps else None
    return JourneyExport(
        locations=locations,
        export_date=export_date or utc_now(),
        total_locations=len(locations),
        date_range=date_range,
    )


def encode_journey(
    export: JourneyExport,
    sender_name: Optional[str] = None,
    header: Optional[bytes] = CURRENT_MAGIC_HEADER,
    pretty: bool = True,
) -> bytes:
    """Serialize a journey to file bytes.

    Args:
        export: The journey to write.
        sender_name: Wrap in the shareable schema with this sender. None writes
            the bare legacy schema.
        header: Magic header to prepend. None writes a headerless file.
        pretty: Indent the JSON body.
    """
    if sender_name is not None:
        body = ShareableJourneyExport(sender_name=sender_name, export_data=export).to_dict()
    else:
        body = export.to_dict()
    payload = json.dumps(body, indent=2 if pretty else None, ensure_ascii=False).encode("utf-8")
    return prepend_magic_header(payload, header)


def shareable_filename(sender_name: str) -> str:
    """File name for a shared journey, e.g. ``Alex_Smith_Journey.mapped``.

    Spaces become underscores; any other character outside [A-Za-z0-9_] is dropped.
    """
    sanitized = _UNSAFE_FILENAME_CHARS.sub("", sender_name.replace(" ", "_"))
    return f"{sanitized}{JOURNEY_FILENAME_SUFFIX}"


def write_journey_file(directory: str | Path, sender_name: str, data: bytes) -> Path:
    """Atomically write journey bytes under their shareable file name.

    Returns:
        Path of the written file.
    """
    path = Path(directory) / shareable_filename(sender_name)
    write_bytes_atomic(data, path)
    logger.info("Created shareable file %s (%d bytes)", path, len(data))
    return path
