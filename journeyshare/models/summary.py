"""Decoder output models for JourneyShare.

Defines the closed set of schema tags the decoder tries, the full decode
result, and the display summary projected from it.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from journeyshare.models.journey import JourneyExport


class SchemaTag(str, Enum):
    """Journey schemas the decoder recognizes, in preference order."""

    SHAREABLE = "shareable"
    LEGACY = "legacy"


@dataclass
class DecodedJourney:
    """A journey file accepted by one of the schema attempts."""

    schema: SchemaTag
    sender_name: str
    export: JourneyExport


@dataclass
class JourneySummary:
    """What a preview shows for a journey file."""

    sender_name: str
    location_count: int
    date_range_text: Optional[str] = None   # None when the export has no range
