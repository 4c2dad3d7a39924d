"""Shared key-value stores for the JourneyShare staging slot.

A store is a flat string-to-string namespace addressable by every process that
knows the sharing-group identifier. The contract is deliberately small:

- single-key reads, multi-key writes, key removal
- last writer wins; there is no queueing, versioning or conflict detection
- no cross-process lock: a reader may observe a pairing from two different
  writers and must validate what it reads
"""

from __future__ import annotations

import logging
import re
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Mapping, Optional

from config.defaults import APP_GROUP_ID, STORE_ROOT
from journeyshare.exceptions import StoreUnavailableError
from journeyshare.io.persistence import load_json, save_json

logger = logging.getLogger(__name__)

_GROUP_ID_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]*$")


class KeyValueStore(ABC):
    """Abstract process-shared key-value namespace."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the value stored under key, or None.

        Raises:
            StoreUnavailableError: If the store exists but cannot be read.
        """

    @abstractmethod
    def set_many(self, values: Mapping[str, str]) -> None:
        """Write every key in values, overwriting existing entries.

        Raises:
            StoreUnavailableError: If the store cannot be written.
        """

    @abstractmethod
    def remove(self, *keys: str) -> None:
        """Delete keys. Missing keys are ignored."""

    def set(self, key: str, value: str) -> None:
        self.set_many({key: value})


class MemoryStore(KeyValueStore):
    """Process-local store. Useful for tests and single-process hosts."""

    def __init__(self, initial: Optional[Mapping[str, str]] = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._data.get(key)

    def set_many(self, values: Mapping[str, str]) -> None:
        with self._lock:
            self._data.update(values)

    def remove(self, *keys: str) -> None:
        with self._lock:
            for key in keys:
                self._data.pop(key, None)

    def snapshot(self) -> Dict[str, str]:
        with self._lock:
            return dict(self._data)


class JsonFileStore(KeyValueStore):
    """Store backed by one JSON file per sharing group.

    Every write replaces the file atomically, so a reader never sees a torn
    file. Read-modify-write cycles from separate processes are not serialized.

    Args:
        path: Location of the group's JSON file.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def _load(self) -> Dict[str, str]:
        """Read the group file. Missing or malformed content reads as empty.

        Raises:
            StoreUnavailableError: If the file exists but cannot be read.
        """
        try:
            data = load_json(self.path)
        except OSError as exc:
            raise StoreUnavailableError(f"Cannot read store {self.path}: {exc}") from exc
        if data is None:
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring malformed store file %s", self.path)
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _save(self, data: Dict[str, str]) -> None:
        try:
            save_json(data, self.path)
        except OSError as exc:
            raise StoreUnavailableError(f"Cannot write store {self.path}: {exc}") from exc

    def get(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set_many(self, values: Mapping[str, str]) -> None:
        data = self._load()
        data.update(values)
        self._save(data)

    def remove(self, *keys: str) -> None:
        data = self._load()
        if not any(key in data for key in keys):
            return
        for key in keys:
            data.pop(key, None)
        self._save(data)


def open_shared_store(group_id: str = APP_GROUP_ID, root: str | Path = STORE_ROOT) -> JsonFileStore:
    """Open the file store for a sharing group.

    Args:
        group_id: Sharing-group identifier, e.g. ``group.com.novalco.mapped``.
        root: Directory shared by all participating processes.

    Raises:
        StoreUnavailableError: If group_id is empty or malformed, or root
            cannot be created.
    """
    if not group_id or not _GROUP_ID_PATTERN.match(group_id):
        raise StoreUnavailableError(f"Invalid sharing group identifier: {group_id!r}")

    root_path = Path(root).expanduser()
    try:
        root_path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise StoreUnavailableError(f"Cannot open store root {root_path}: {exc}") from exc

    path = root_path / f"{group_id}.json"
    logger.debug("Opened shared store %s", path)
    return JsonFileStore(path)
