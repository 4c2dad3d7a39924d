"""Staging and import data models for JourneyShare.

StagingRecord is the only state that crosses the process boundary. At most one
exists at a time; a new stage overwrites it.
"""

from __future__ import annotations

from dataclasses import dataclass

from journeyshare.models.journey import JourneyExport


@dataclass
class StagingRecord:
    """Raw bytes handed from an extension to the application."""

    payload: bytes
    filename: str   # original base name, advisory only


@dataclass
class StageReceipt:
    """Outcome of a successful stage() call."""

    filename: str
    size_bytes: int
    wake_delivered: bool = False


@dataclass
class ImportResult:
    """A staged journey decoded on the consumer side, ready for the app importer."""

    sender_name: str
    export: JourneyExport
    export_json: bytes   # the inner JourneyExport re-encoded for the app's own decoder
    filename: str
