"""JourneyShare — All default values and wire-format constants.

All fixed identifiers live here. Never hard-code header bytes, store keys or
group identifiers in source files. Import constants from this module; override
via JourneyConfig at runtime.
"""

from typing import Tuple

# ── Journey file format ────────────────────────────────────────────────────────
# Magic headers, checked in this order. None is a prefix of another.
MAGIC_HEADER_FILE: bytes = b"MAPPED_JOURNEY_FILE\n"
MAGIC_HEADER_V1: bytes = b"MAPPED_JOURNEY_V1\n"
MAGIC_HEADERS: Tuple[bytes, ...] = (MAGIC_HEADER_FILE, MAGIC_HEADER_V1)

# Header written by the current exporter
CURRENT_MAGIC_HEADER: bytes = MAGIC_HEADER_V1

# Sender shown for legacy files, which carry no sender field
DEFAULT_SENDER_NAME: str = "Friend"

# File extension accepted by the share entry point (compared case-insensitively)
JOURNEY_FILE_EXTENSION: str = "mapped"

# Suffix appended to the sanitized sender name when writing a shareable file
JOURNEY_FILENAME_SUFFIX: str = "_Journey.mapped"

# Marker and payload fields of a journey wrapped inside a generic .json file
JSON_WRAPPER_MARKER: str = "_mapped_file"
JSON_WRAPPER_DATA: str = "_data"

# ── Shared staging store ───────────────────────────────────────────────────────
# Sharing-group identifier addressed by both the extension and the app
APP_GROUP_ID: str = "group.com.novalco.mapped"

# Fixed keys of the single staging slot
PENDING_IMPORT_DATA_KEY: str = "pendingImportData"
PENDING_IMPORT_FILENAME_KEY: str = "pendingImportFilename"

# Filename used when the staged record carries none
DEFAULT_IMPORT_FILENAME: str = "import.mapped"

# Root directory that holds one store file per sharing group
STORE_ROOT: str = "~/.journeyshare/shared"

# ── Wake signal ────────────────────────────────────────────────────────────────
# URI opened against the consumer after staging. Carries no payload.
WAKE_URI: str = "mapped://import"

# Seconds to wait on an http(s) wake endpoint
WAKE_TIMEOUT: float = 5.0

# ── Display ────────────────────────────────────────────────────────────────────
# IANA timezone used to render the preview date range
DISPLAY_TIMEZONE: str = "UTC"

# ── Logging ────────────────────────────────────────────────────────────────────
DEFAULT_LOG_LEVEL: str = "INFO"
