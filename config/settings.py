"""JourneyShare — JourneyConfig and environment-based configuration loading.

All runtime configuration flows through JourneyConfig. Deployment-specific
values (sharing group, store location, wake URI) come from environment
variables so the extension and the application resolve the same store.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

from config.defaults import (
    APP_GROUP_ID,
    DEFAULT_LOG_LEVEL,
    DISPLAY_TIMEZONE,
    STORE_ROOT,
    WAKE_TIMEOUT,
    WAKE_URI,
)

logger = logging.getLogger(__name__)

# Load .env file if present; silently skip if missing
load_dotenv()


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring non-numeric %s=%r, using %s", name, raw, default)
        return default


@dataclass
class JourneyConfig:
    """Single configuration object shared by the decoder, the staging channel
    and the host entry points."""

    # ── Shared store ──────────────────────────────────────────────────────────
    app_group_id: str = field(
        default_factory=lambda: os.getenv("JOURNEYSHARE_APP_GROUP", APP_GROUP_ID)
    )
    store_root: str = field(
        default_factory=lambda: os.getenv("JOURNEYSHARE_STORE_ROOT", STORE_ROOT)
    )

    # ── Wake signal ───────────────────────────────────────────────────────────
    wake_uri: str = field(default_factory=lambda: os.getenv("JOURNEYSHARE_WAKE_URI", WAKE_URI))
    wake_timeout: float = field(
        default_factory=lambda: _env_float("JOURNEYSHARE_WAKE_TIMEOUT", WAKE_TIMEOUT)
    )

    # ── Display ───────────────────────────────────────────────────────────────
    display_timezone: str = field(
        default_factory=lambda: os.getenv("JOURNEYSHARE_DISPLAY_TZ", DISPLAY_TIMEZONE)
    )

    # ── Logging ───────────────────────────────────────────────────────────────
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL))

    def __post_init__(self) -> None:
        self.store_root = os.path.expanduser(self.store_root)
        try:
            ZoneInfo(self.display_timezone)
        except (ZoneInfoNotFoundError, ValueError):
            logger.warning(
                "Unknown display timezone %r, falling back to %s",
                self.display_timezone,
                DISPLAY_TIMEZONE,
            )
            self.display_timezone = DISPLAY_TIMEZONE
        if self.wake_timeout <= 0:
            self.wake_timeout = WAKE_TIMEOUT
