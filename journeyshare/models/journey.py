"""Journey export data models for JourneyShare.

Defines the two versioned journey schemas: the bare JourneyExport written by
early exporters, and the ShareableJourneyExport wrapper that adds the sender
name. ``from_dict`` is a strict structural decoder: a missing required key or a
value of the wrong JSON type raises ValueError. Field plausibility (coordinate
bounds, count consistency, range order) is never checked.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional

from journeyshare.utils.date_utils import format_iso8601, parse_iso8601


def _require(obj: Mapping[str, Any], key: str) -> Any:
    if key not in obj:
        raise ValueError(f"Missing required field {key!r}")
    return obj[key]


def _require_mapping(value: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(value, dict):
        raise ValueError(f"{what} must be a JSON object, got {type(value).__name__}")
    return value


def _as_float(value: Any, key: str) -> float:
    # bool is an int subclass but never a JSON number
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{key!r} must be a number, got {type(value).__name__}")
    try:
        number = float(value)
    except OverflowError as exc:
        raise ValueError(f"{key!r} is out of range") from exc
    if not math.isfinite(number):
        raise ValueError(f"{key!r} must be finite")
    return number


def _as_int(value: Any, key: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{key!r} must be an integer, got {type(value).__name__}")
    return value


@dataclass
class Location:
    """A single geolocation sample."""

    latitude: float
    longitude: float
    timestamp: datetime

    @classmethod
    def from_dict(cls, raw: Any) -> "Location":
        obj = _require_mapping(raw, "location")
        return cls(
            latitude=_as_float(_require(obj, "latitude"), "latitude"),
            longitude=_as_float(_require(obj, "longitude"), "longitude"),
            timestamp=parse_iso8601(_require(obj, "timestamp")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "latitude": self.latitude,
            "longitude": self.longitude,
            "timestamp": format_iso8601(self.timestamp),
        }


@dataclass
class DateRange:
    """Earliest and latest sample timestamps. Order is not enforced."""

    earliest: datetime
    latest: datetime

    @classmethod
    def from_dict(cls, raw: Any) -> "DateRange":
        obj = _require_mapping(raw, "dateRange")
        return cls(
            earliest=parse_iso8601(_require(obj, "earliest")),
            latest=parse_iso8601(_require(obj, "latest")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "earliest": format_iso8601(self.earliest),
            "latest": format_iso8601(self.latest),
        }


@dataclass
class JourneyExport:
    """The legacy (bare) journey schema.

    ``total_locations`` is expected, not required, to equal ``len(locations)``.
    """

    locations: List[Location] = field(default_factory=list)
    export_date: Optional[datetime] = None
    total_locations: int = 0
    date_range: Optional[DateRange] = None

    @classmethod
    def from_dict(cls, raw: Any) -> "JourneyExport":
        """Decode the legacy schema from a parsed JSON value.

        Raises:
            ValueError: If the value does not have the legacy structure.
        """
        obj = _require_mapping(raw, "journey export")
        raw_locations = _require(obj, "locations")
        if not isinstance(raw_locations, list):
            raise ValueError("'locations' must be a JSON array")

        raw_range = obj.get("dateRange")
        return cls(
            locations=[Location.from_dict(item) for item in raw_locations],
            export_date=parse_iso8601(_require(obj, "exportDate")),
            total_locations=_as_int(_require(obj, "totalLocations"), "totalLocations"),
            date_range=DateRange.from_dict(raw_range) if raw_range is not None else None,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "locations": [loc.to_dict() for loc in self.locations],
            "exportDate": format_iso8601(self.export_date) if self.export_date else None,
            "totalLocations": self.total_locations,
            "dateRange": self.date_range.to_dict() if self.date_range else None,
        }


@dataclass
class ShareableJourneyExport:
    """The current journey schema: a JourneyExport plus the sender's name.

    ``sender_name`` is free-form user text; no length or charset rule applies.
    """

    sender_name: str
    export_data: JourneyExport

    @classmethod
    def from_dict(cls, raw: Any) -> "ShareableJourneyExport":
        """Decode the shareable schema from a parsed JSON value.

        Raises:
            ValueError: If the value does not have the shareable structure.
        """
        obj = _require_mapping(raw, "shareable journey")
        sender_name = _require(obj, "senderName")
        if not isinstance(sender_name, str):
            raise ValueError("'senderName' must be a string")
        return cls(
            sender_name=sender_name,
            export_data=JourneyExport.from_dict(_require(obj, "exportData")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "senderName": self.sender_name,
            "exportData": self.export_data.to_dict(),
        }
