"""Unit tests for journeyshare.staging.channel.

Covers:
- stage then take returns the exact bytes and filename
- last writer wins; take clears the slot; peek does not
- wake signal: sent after the write, failure never rolls the write back
- corrupt payloads and missing filenames
- from_config wiring
"""

from __future__ import annotations

import base64

import pytest

from config.defaults import (
    DEFAULT_IMPORT_FILENAME,
    PENDING_IMPORT_DATA_KEY,
    PENDING_IMPORT_FILENAME_KEY,
)
from journeyshare.exceptions import StoreUnavailableError
from journeyshare.staging.channel import StagingChannel, decode_payload_text, encode_payload
from journeyshare.staging.store import JsonFileStore, MemoryStore
from journeyshare.staging.wake import NullWakeSignal, UrlWakeSignal


# ── Payload encoding ──────────────────────────────────────────────────────────────

class TestPayloadEncoding:
    def test_encode_is_standard_base64(self):
        assert encode_payload(b"\x00\xffjourney") == base64.b64encode(b"\x00\xffjourney").decode()

    def test_decode_invalid_returns_none(self):
        assert decode_payload_text("not base64!!") is None

    def test_decode_non_ascii_returns_none(self):
        assert decode_payload_text("Zoë") is None

    def test_decode_empty(self):
        assert decode_payload_text("") == b""


# ── Stage / take ──────────────────────────────────────────────────────────────────

class TestStageAndTake:
    def test_roundtrip(self, memory_channel, v1_shareable_file):
        memory_channel.stage(v1_shareable_file, "Alex_Journey.mapped")

        record = memory_channel.take_staged()

        assert record.payload == v1_shareable_file
        assert record.filename == "Alex_Journey.mapped"

    def test_arbitrary_bytes_survive(self, memory_channel):
        """The channel never validates or alters the payload."""
        payload = bytes(range(256)) * 4
        memory_channel.stage(payload, "noise.bin")
        assert memory_channel.take_staged().payload == payload

    def test_empty_payload(self, memory_channel):
        memory_channel.stage(b"", "empty.mapped")
        record = memory_channel.take_staged()
        assert record.payload == b""

    def test_store_keys(self, memory_store, memory_channel):
        memory_channel.stage(b"{}", "a.mapped")
        assert memory_store.snapshot() == {
            PENDING_IMPORT_DATA_KEY: base64.b64encode(b"{}").decode(),
            PENDING_IMPORT_FILENAME_KEY: "a.mapped",
        }

    def test_last_writer_wins(self, memory_channel):
        memory_channel.stage(b"first", "first.mapped")
        memory_channel.stage(b"second", "second.mapped")

        record = memory_channel.take_staged()

        assert record.payload == b"second"
        assert record.filename == "second.mapped"

    def test_take_clears_slot(self, memory_store, memory_channel):
        memory_channel.stage(b"once", "once.mapped")

        assert memory_channel.take_staged() is not None
        assert memory_channel.take_staged() is None
        assert memory_store.snapshot() == {}

    def test_take_on_empty_store(self, memory_channel):
        assert memory_channel.take_staged() is None

    def test_peek_does_not_consume(self, memory_channel):
        memory_channel.stage(b"data", "a.mapped")

        assert memory_channel.peek().payload == b"data"
        assert memory_channel.has_pending() is True
        assert memory_channel.take_staged().payload == b"data"
        assert memory_channel.has_pending() is False

    def test_clear(self, memory_channel):
        memory_channel.stage(b"data", "a.mapped")
        memory_channel.clear()
        assert memory_channel.take_staged() is None

    def test_receipt(self, memory_channel):
        receipt = memory_channel.stage(b"12345", "a.mapped")
        assert receipt.filename == "a.mapped"
        assert receipt.size_bytes == 5
        assert receipt.wake_delivered is True


# ── Corrupt slot contents ─────────────────────────────────────────────────────────

class TestCorruptSlot:
    def test_invalid_base64_returns_none_and_keeps_slot(self):
        store = MemoryStore({PENDING_IMPORT_DATA_KEY: "%%%", PENDING_IMPORT_FILENAME_KEY: "x.mapped"})
        channel = StagingChannel(store)

        assert channel.take_staged() is None
        assert store.get(PENDING_IMPORT_DATA_KEY) == "%%%"

    def test_next_stage_replaces_corrupt_slot(self):
        store = MemoryStore({PENDING_IMPORT_DATA_KEY: "%%%"})
        channel = StagingChannel(store)

        channel.stage(b"fresh", "fresh.mapped")

        assert channel.take_staged().payload == b"fresh"

    def test_missing_filename_uses_default(self):
        store = MemoryStore({PENDING_IMPORT_DATA_KEY: encode_payload(b"{}")})
        record = StagingChannel(store).take_staged()
        assert record.filename == DEFAULT_IMPORT_FILENAME

    def test_unreadable_store_raises(self, tmp_path):
        path = tmp_path / "group.json"
        path.mkdir()

        with pytest.raises(StoreUnavailableError):
            StagingChannel(JsonFileStore(path)).take_staged()

    def test_filename_alone_is_not_pending(self):
        store = MemoryStore({PENDING_IMPORT_FILENAME_KEY: "orphan.mapped"})
        assert StagingChannel(store).take_staged() is None


# ── Wake signal ───────────────────────────────────────────────────────────────────

class TestWake:
    def test_wake_sent_once_per_stage(self, memory_channel, recording_wake):
        memory_channel.stage(b"a", "a.mapped")
        memory_channel.stage(b"b", "b.mapped")
        assert recording_wake.sent == 2

    def test_wake_failure_keeps_record(self, memory_store, failing_wake):
        channel = StagingChannel(memory_store, failing_wake)

        receipt = channel.stage(b"kept", "kept.mapped")

        assert receipt.wake_delivered is False
        assert failing_wake.sent == 1
        assert channel.take_staged().payload == b"kept"

    def test_default_wake_is_null(self, memory_store):
        channel = StagingChannel(memory_store)
        assert isinstance(channel.wake_signal, NullWakeSignal)
        assert channel.stage(b"x", "x.mapped").wake_delivered is False

    def test_store_failure_skips_wake(self, tmp_path, monkeypatch, recording_wake):
        import os

        def failing_replace(src, dst):
            raise OSError("disk full")

        monkeypatch.setattr(os, "replace", failing_replace)
        channel = StagingChannel(JsonFileStore(tmp_path / "group.json"), recording_wake)

        with pytest.raises(StoreUnavailableError):
            channel.stage(b"x", "x.mapped")
        assert recording_wake.sent == 0


# ── from_config ───────────────────────────────────────────────────────────────────

class TestFromConfig:
    def test_opens_file_store_without_wake(self, test_config):
        channel = StagingChannel.from_config(test_config)

        assert isinstance(channel.store, JsonFileStore)
        assert isinstance(channel.wake_signal, NullWakeSignal)

    def test_wake_uri_configures_url_signal(self, test_config):
        test_config.wake_uri = "mapped://import"
        channel = StagingChannel.from_config(test_config)

        assert isinstance(channel.wake_signal, UrlWakeSignal)
        assert channel.wake_signal.uri == "mapped://import"

    def test_two_channels_share_the_slot(self, test_config, v1_shareable_file):
        """Stager and consumer opened separately see the same record."""
        StagingChannel.from_config(test_config).stage(v1_shareable_file, "Alex_Journey.mapped")

        record = StagingChannel.from_config(test_config).take_staged()

        assert record.payload == v1_shareable_file

    def test_invalid_group_raises(self, test_config):
        test_config.app_group_id = "../nope"
        with pytest.raises(StoreUnavailableError):
            StagingChannel.from_config(test_config)
