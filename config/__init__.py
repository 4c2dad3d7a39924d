"""JourneyShare configuration package."""

from config.defaults import (
    APP_GROUP_ID,
    DEFAULT_SENDER_NAME,
    MAGIC_HEADERS,
    PENDING_IMPORT_DATA_KEY,
    PENDING_IMPORT_FILENAME_KEY,
    WAKE_URI,
)
from config.settings import JourneyConfig

__all__ = [
    "JourneyConfig",
    "APP_GROUP_ID",
    "DEFAULT_SENDER_NAME",
    "MAGIC_HEADERS",
    "PENDING_IMPORT_DATA_KEY",
    "PENDING_IMPORT_FILENAME_KEY",
    "WAKE_URI",
]
