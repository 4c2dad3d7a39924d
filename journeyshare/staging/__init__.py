"""JourneyShare staging package.

Cross-process handoff of raw journey bytes through a shared single-slot store.
"""

from journeyshare.staging.channel import StagingChannel
from journeyshare.staging.store import JsonFileStore, KeyValueStore, MemoryStore, open_shared_store
from journeyshare.staging.wake import NullWakeSignal, UrlWakeSignal, WakeSignal

__all__ = [
    "StagingChannel",
    "KeyValueStore",
    "MemoryStore",
    "JsonFileStore",
    "open_shared_store",
    "WakeSignal",
    "UrlWakeSignal",
    "NullWakeSignal",
]
