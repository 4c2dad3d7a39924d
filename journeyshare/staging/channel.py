"""Staging channel for JourneyShare.

Hands a file's raw bytes from a short-lived extension process to the
long-lived application through a shared key-value store.

The channel holds a single slot made of two keys: the base64-encoded payload
and the original filename. Staging overwrites whatever is in the slot, so an
unconsumed earlier record is silently lost. Taking a record clears the slot,
so each record is consumed at most once.
"""

from __future__ import annotations

import base64
import binascii
import logging
from typing import TYPE_CHECKING, Optional

from config.defaults import (
    DEFAULT_IMPORT_FILENAME,
    PENDING_IMPORT_DATA_KEY,
    PENDING_IMPORT_FILENAME_KEY,
)
from journeyshare.exceptions import WakeFailedError
from journeyshare.models.staging import StageReceipt, StagingRecord
from journeyshare.staging.store import KeyValueStore, open_shared_store
from journeyshare.staging.wake import NullWakeSignal, UrlWakeSignal, WakeSignal

if TYPE_CHECKING:
    from config.settings import JourneyConfig

logger = logging.getLogger(__name__)


def encode_payload(payload: bytes) -> str:
    """Base64-encode payload for text-oriented stores."""
    return base64.b64encode(payload).decode("ascii")


def decode_payload_text(text: str) -> Optional[bytes]:
    """Decode a staged base64 payload, or None if it is not valid base64."""
    try:
        return base64.b64decode(text.encode("ascii"), validate=True)
    except (binascii.Error, UnicodeEncodeError, ValueError):
        return None


class StagingChannel:
    """Single-slot staging over a shared KeyValueStore.

    Args:
        store: Store reachable by both the staging and consuming processes.
        wake_signal: Signal sent after each successful stage. Defaults to none.
    """

    def __init__(self, store: KeyValueStore, wake_signal: Optional[WakeSignal] = None) -> None:
        self.store = store
        self.wake_signal = wake_signal or NullWakeSignal()

    @classmethod
    def from_config(cls, config: "JourneyConfig") -> "StagingChannel":
        """Open the shared store and wake signal described by config.

        Raises:
            StoreUnavailableError: If the shared store cannot be opened.
        """
        store = open_shared_store(config.app_group_id, config.store_root)
        wake: WakeSignal = NullWakeSignal()
        if config.wake_uri:
            wake = UrlWakeSignal(config.wake_uri, config.wake_timeout)
        return cls(store, wake)

    def stage(self, payload: bytes, filename: str) -> StageReceipt:
        """Persist payload and filename, then wake the consumer.

        The payload is not validated. Any previously staged record is
        overwritten. A failed wake is logged and reported on the receipt; it
        never rolls back the write.

        Raises:
            StoreUnavailableError: If the store cannot be written.
        """
        self.store.set_many(
            {
                PENDING_IMPORT_DATA_KEY: encode_payload(payload),
                PENDING_IMPORT_FILENAME_KEY: filename,
            }
        )
        logger.info("Staged %s (%d bytes)", filename, len(payload))

        receipt = StageReceipt(filename=filename, size_bytes=len(payload))
        try:
            receipt.wake_delivered = self.wake_signal.send()
        except WakeFailedError as exc:
            logger.warning("Wake signal failed, record stays staged: %s", exc)
        return receipt

    def peek(self) -> Optional[StagingRecord]:
        """Read the staged record without consuming it."""
        text = self.store.get(PENDING_IMPORT_DATA_KEY)
        if text is None:
            return None

        payload = decode_payload_text(text)
        if payload is None:
            logger.warning("Staged payload is not valid base64; leaving slot untouched")
            return None

        filename = self.store.get(PENDING_IMPORT_FILENAME_KEY) or DEFAULT_IMPORT_FILENAME
        return StagingRecord(payload=payload, filename=filename)

    def take_staged(self) -> Optional[StagingRecord]:
        """Read and clear the staged record.

        Returns None when nothing is staged or the payload does not decode; in
        the latter case the slot is left as is for the next writer to replace.
        """
        record = self.peek()
        if record is None:
            logger.debug("No pending import found")
            return None

        self.clear()
        logger.info("Took staged import %s (%d bytes)", record.filename, len(record.payload))
        return record

    def clear(self) -> None:
        """Drop the staged record, if any."""
        self.store.remove(PENDING_IMPORT_DATA_KEY, PENDING_IMPORT_FILENAME_KEY)

    def has_pending(self) -> bool:
        return self.store.get(PENDING_IMPORT_DATA_KEY) is not None
