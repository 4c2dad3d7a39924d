"""JourneyShare I/O package.

File read/write operations only — no business logic in this layer.
"""

from journeyshare.io.persistence import (
    load_json,
    read_input_bytes,
    save_json,
    write_bytes_atomic,
)

__all__ = [
    "save_json",
    "load_json",
    "read_input_bytes",
    "write_bytes_atomic",
]
