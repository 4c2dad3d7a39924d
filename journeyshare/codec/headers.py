"""Magic-header handling for journey files.

A journey file may start with a format-generation tag followed by a newline.
Headerless files are legacy exports and pass through unchanged.
"""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

from config.defaults import MAGIC_HEADERS


def detect_magic_header(data: bytes, headers: Sequence[bytes] = MAGIC_HEADERS) -> Optional[bytes]:
    """Return the first known header that is an exact prefix of data, or None."""
    for header in headers:
        if data.startswith(header):
            return header
    return None


def strip_magic_header(
    data: bytes, headers: Sequence[bytes] = MAGIC_HEADERS
) -> Tuple[bytes, Optional[bytes]]:
    """Remove a leading magic header if one is present.

    Headers are checked in priority order and the first match wins.

    Args:
        data: Raw file bytes.
        headers: Known headers in priority order.

    Returns:
        (payload, matched_header). matched_header is None for headerless input.
    """
    header = detect_magic_header(data, headers)
    if header is None:
        return bytes(data), None
    return bytes(data[len(header):]), header


def prepend_magic_header(payload: bytes, header: Optional[bytes]) -> bytes:
    """Prefix payload with header. A None header yields a headerless file."""
    if header is None:
        return bytes(payload)
    return header + payload
