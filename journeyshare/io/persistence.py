"""Persistence utilities for JourneyShare.

Provides atomic file writes (write-to-temp-then-rename), safe JSON load/save
and raw input reads. No business logic — file I/O only.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Optional

from journeyshare.exceptions import UnreadableInputError

logger = logging.getLogger(__name__)


def write_bytes_atomic(data: bytes, path: str | Path) -> None:
    """Atomically write bytes to path.

    The content lands in a temp file in the target directory and is renamed
    over the target, so readers see either the old or the new file.
    Creates parent directories if they do not exist.

    Raises:
        OSError: If the directory cannot be created or the rename fails.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with tempfile.NamedTemporaryFile(
        mode="wb",
        dir=path.parent,
        delete=False,
        suffix=".tmp",
    ) as tmp:
        tmp.write(data)
        tmp_path = tmp.name

    try:
        os.replace(tmp_path, path)
    except OSError as exc:
        os.unlink(tmp_path)
        logger.error("Atomic rename failed for %s: %s", path, exc)
        raise


def save_json(data: Any, path: str | Path, indent: Optional[int] = 2) -> None:
    """Atomically write data to a JSON file.

    Args:
        data: JSON-serializable data.
        path: Output file path.
        indent: JSON indentation level (default: 2).

    Raises:
        TypeError: If data is not JSON-serializable.
        OSError: If the file cannot be written.
    """
    path = Path(path)
    try:
        serialized = json.dumps(data, indent=indent, ensure_ascii=False)
    except (TypeError, ValueError) as exc:
        logger.error("JSON serialization failed for %s: %s", path, exc)
        raise

    write_bytes_atomic(serialized.encode("utf-8"), path)
    logger.debug("Saved JSON to %s (%d bytes)", path, len(serialized))


def load_json(path: str | Path) -> Optional[Any]:
    """Load and parse a JSON file.

    Returns None if the file does not exist or its content is not valid JSON.

    Args:
        path: Path to the JSON file.

    Returns:
        Parsed Python object, or None.

    Raises:
        OSError: If the file exists but cannot be read.
    """
    path = Path(path)
    if not path.exists():
        logger.debug("JSON file not found: %s", path)
        return None

    with open(path, "r", encoding="utf-8") as f:
        try:
            return json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError, RecursionError) as exc:
            logger.warning("Failed to parse JSON from %s: %s", path, exc)
            return None


def read_input_bytes(path: str | Path) -> bytes:
    """Read the raw bytes behind a host file reference.

    Raises:
        UnreadableInputError: If the file cannot be read.
    """
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as exc:
        logger.warning("Failed to read %s: %s", path, exc)
        raise UnreadableInputError(f"Failed to read {path}: {exc}") from exc
    logger.debug("Read %s (%d bytes)", path, len(data))
    return data
