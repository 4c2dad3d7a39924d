"""JourneyShare data models package.

All decoder, staging and handler schemas are defined here as typed dataclasses.
"""

from journeyshare.models.journey import (
    DateRange,
    JourneyExport,
    Location,
    ShareableJourneyExport,
)
from journeyshare.models.staging import ImportResult, StageReceipt, StagingRecord
from journeyshare.models.summary import DecodedJourney, JourneySummary, SchemaTag

__all__ = [
    # journey
    "Location",
    "DateRange",
    "JourneyExport",
    "ShareableJourneyExport",
    # decoder
    "SchemaTag",
    "DecodedJourney",
    "JourneySummary",
    # staging
    "StagingRecord",
    "StageReceipt",
    "ImportResult",
]
