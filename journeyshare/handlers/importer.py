"""ImportHandler — consumer-side entry point for JourneyShare.

Runs in the application whenever it activates, with or without a wake signal:
takes the staged record, decodes it, and hands the inner JourneyExport (as JSON
bytes) to the application's own importer. Only ``*.mapped`` and ``*.mapped.json``
names are imported; the ``.json`` form may wrap the journey in
``{"_mapped_file": true, "_data": {...}}``.
"""

from __future__ import annotations

import json
import logging
from typing import Optional

from config.defaults import JOURNEY_FILE_EXTENSION, JSON_WRAPPER_DATA, JSON_WRAPPER_MARKER
from config.settings import JourneyConfig
from journeyshare.codec.decoder import decode_payload
from journeyshare.codec.headers import strip_magic_header
from journeyshare.exceptions import (
    JourneyShareError,
    NotAJourneyFileError,
    UnsupportedExtensionError,
)
from journeyshare.handlers.base import BaseHandler, HandlerResult, HandlerStatus
from journeyshare.models.staging import ImportResult, StagingRecord
from journeyshare.staging.channel import StagingChannel

logger = logging.getLogger(__name__)


def is_importable_filename(filename: str) -> bool:
    """True for ``*.mapped`` names and ``*.mapped.json`` names, ignoring case.

    The ``.mapped.json`` form is what some messaging apps turn a shared
    journey into.
    """
    name = filename.lower()
    return name.endswith("." + JOURNEY_FILE_EXTENSION) or (
        name.endswith(".json") and f".{JOURNEY_FILE_EXTENSION}.json" in name
    )


def unwrap_json_container(payload: bytes) -> bytes:
    """Extract the journey from a ``_mapped_file`` JSON wrapper.

    Payloads that are not such a wrapper, or that cannot be parsed, are
    returned unchanged for the decoder to judge.
    """
    try:
        obj = json.loads(payload.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError, RecursionError) as exc:
        logger.debug("JSON wrapper check skipped: %s", exc)
        return payload

    if not isinstance(obj, dict) or obj.get(JSON_WRAPPER_MARKER) is not True:
        return payload
    if JSON_WRAPPER_DATA not in obj:
        logger.warning("Wrapped journey file has no %s field", JSON_WRAPPER_DATA)
        return payload

    try:
        inner = json.dumps(obj[JSON_WRAPPER_DATA])
    except RecursionError as exc:
        logger.warning("Cannot re-encode wrapped journey: %s", exc)
        return payload
    logger.info("Extracted journey from JSON wrapper")
    return inner.encode("utf-8")


def decode_staged_record(record: StagingRecord) -> ImportResult:
    """Decode a staged record into an ImportResult.

    Raises:
        UnsupportedExtensionError: If the staged filename is not a journey file name.
        NotAJourneyFileError: If the staged bytes are not a journey file.
    """
    if not is_importable_filename(record.filename):
        raise UnsupportedExtensionError(f"Refusing staged file {record.filename!r}")

    payload, _ = strip_magic_header(record.payload)
    if record.filename.lower().endswith(".json"):
        payload = unwrap_json_container(payload)

    decoded = decode_payload(payload)
    export_json = json.dumps(decoded.export.to_dict()).encode("utf-8")
    return ImportResult(
        sender_name=decoded.sender_name,
        export=decoded.export,
        export_json=export_json,
        filename=record.filename,
    )


class ImportHandler(BaseHandler):
    """Take and decode the staged journey, if any.

    Args:
        channel: Staging channel. When None, one is opened from config on first use.
        config: Configuration used to open the channel.
    """

    name = "ImportHandler"

    def __init__(
        self,
        channel: Optional[StagingChannel] = None,
        config: Optional[JourneyConfig] = None,
    ) -> None:
        self.channel = channel
        self.config = config or JourneyConfig()

    def failure_status(self, exc: JourneyShareError) -> str:
        if isinstance(exc, (NotAJourneyFileError, UnsupportedExtensionError)):
            return HandlerStatus.REJECTED
        return HandlerStatus.FAILED

    def handle(self) -> HandlerResult:
        if self.channel is None:
            self.channel = StagingChannel.from_config(self.config)

        record = self.channel.take_staged()
        if record is None:
            return HandlerResult(
                handler_name=self.name,
                status=HandlerStatus.EMPTY,
                message="No pending import",
            )

        logger.info("Found pending import: %s (%d bytes)", record.filename, len(record.payload))
        result = decode_staged_record(record)
        return HandlerResult(
            handler_name=self.name,
            status=HandlerStatus.OK,
            message=f"Import {result.sender_name}'s journey?",
            data=result,
        )
