"""Shared pytest fixtures for JourneyShare tests.

- Journey fixtures are built from plain dicts so the wire shape is explicit
- memory_store / recording_wake keep staging tests process-local
- No test opens a real URL or performs real network I/O
"""

from __future__ import annotations

import json
from typing import Any, Dict, List

import pytest

from config.defaults import MAGIC_HEADER_FILE, MAGIC_HEADER_V1


# ── Raw journey documents ────────────────────────────────────────────────────────

@pytest.fixture
def legacy_journey_dict() -> Dict[str, Any]:
    """Bare JourneyExport document with 3 locations across two days."""
    return {
        "locations": [
            {"latitude": 37.7749, "longitude": -122.4194, "timestamp": "2024-01-15T09:30:00Z"},
            {"latitude": 37.8044, "longitude": -122.2712, "timestamp": "2024-01-15T17:05:00Z"},
            {"latitude": 38.5816, "longitude": -121.4944, "timestamp": "2024-03-02T12:00:00Z"},
        ],
        "exportDate": "2024-03-03T08:00:00Z",
        "totalLocations": 3,
        "dateRange": {
            "earliest": "2024-01-15T09:30:00Z",
            "latest": "2024-03-02T12:00:00Z",
        },
    }


@pytest.fixture
def empty_legacy_journey_dict() -> Dict[str, Any]:
    """Legacy JourneyExport with no locations and a null date range."""
    return {
        "locations": [],
        "exportDate": "2024-03-03T08:00:00Z",
        "totalLocations": 0,
        "dateRange": None,
    }


@pytest.fixture
def shareable_journey_dict(legacy_journey_dict) -> Dict[str, Any]:
    """ShareableJourneyExport wrapping legacy_journey_dict, sent by Alex."""
    return {"senderName": "Alex", "exportData": legacy_journey_dict}


# ── Encoded bytes ────────────────────────────────────────────────────────────────

def _dump(doc: Any) -> bytes:
    return json.dumps(doc, indent=2).encode("utf-8")


@pytest.fixture
def shareable_payload(shareable_journey_dict) -> bytes:
    """Headerless shareable JSON bytes."""
    return _dump(shareable_journey_dict)


@pytest.fixture
def legacy_payload(legacy_journey_dict) -> bytes:
    """Headerless legacy JSON bytes."""
    return _dump(legacy_journey_dict)


@pytest.fixture
def v1_shareable_file(shareable_payload) -> bytes:
    """Shareable journey as written by the current exporter (V1 header)."""
    return MAGIC_HEADER_V1 + shareable_payload


@pytest.fixture
def file_header_legacy_file(legacy_payload) -> bytes:
    """Legacy journey behind the older MAPPED_JOURNEY_FILE header."""
    return MAGIC_HEADER_FILE + legacy_payload


@pytest.fixture
def non_journey_inputs() -> List[bytes]:
    """Inputs that must be rejected as not-a-journey."""
    return [
        b"",
        b"{}",
        b'{}"',
        b'{"foo": 1}',
        b"[]",
        b"null",
        b"not json at all",
        b"\xff\xfe\x00garbage",
        MAGIC_HEADER_V1,
        MAGIC_HEADER_V1 + b'{"senderName": "Alex"}',
        b'{"locations": [], "exportDate": "2024", "totalLocations": 0}',
        b'{"locations": [], "exportDate": "2024-03-03T08:00:00", "totalLocations": 0}',
        b'{"locations": [{"latitude": NaN, "longitude": 1.0, "timestamp": "2024-01-15T09:30:00Z"}],'
        b' "exportDate": "2024-03-03T08:00:00Z", "totalLocations": 1}',
        b'{"locations": [{"latitude": 1.0, "longitude": -Infinity, "timestamp": "2024-01-15T09:30:00Z"}],'
        b' "exportDate": "2024-03-03T08:00:00Z", "totalLocations": 1}',
        b'{"locations": [{"latitude": 1e999, "longitude": 1.0, "timestamp": "2024-01-15T09:30:00Z"}],'
        b' "exportDate": "2024-03-03T08:00:00Z", "totalLocations": 1}',
    ]


# ── Staging fixtures ─────────────────────────────────────────────────────────────

@pytest.fixture
def memory_store():
    """Empty process-local KeyValueStore."""
    from journeyshare.staging.store import MemoryStore

    return MemoryStore()


class RecordingWakeSignal:
    """WakeSignal test double that counts sends and can be told to fail."""

    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.sent = 0

    def send(self) -> bool:
        from journeyshare.exceptions import WakeFailedError

        self.sent += 1
        if self.fail:
            raise WakeFailedError("consumer not reachable")
        return True


@pytest.fixture
def recording_wake() -> RecordingWakeSignal:
    return RecordingWakeSignal()


@pytest.fixture
def failing_wake() -> RecordingWakeSignal:
    return RecordingWakeSignal(fail=True)


@pytest.fixture
def memory_channel(memory_store, recording_wake):
    """StagingChannel over memory_store with a recording wake signal."""
    from journeyshare.staging.channel import StagingChannel

    return StagingChannel(memory_store, recording_wake)


@pytest.fixture
def test_config(tmp_path):
    """JourneyConfig wired to a temp store root with the wake signal disabled."""
    from config.settings import JourneyConfig

    return JourneyConfig(
        app_group_id="group.test.journeyshare",
        store_root=str(tmp_path / "shared"),
        wake_uri="",
        display_timezone="UTC",
        log_level="WARNING",
    )
