"""ShareHandler — share-sheet entry point for JourneyShare.

Accepts only ``.mapped`` files, stages their raw bytes for the application and
wakes it. The payload is not decoded here; the application decodes it when it
takes the staged record.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from config.defaults import JOURNEY_FILE_EXTENSION
from config.settings import JourneyConfig
from journeyshare.exceptions import JourneyShareError, UnsupportedExtensionError
from journeyshare.handlers.base import BaseHandler, HandlerResult, HandlerStatus
from journeyshare.io.persistence import read_input_bytes
from journeyshare.staging.channel import StagingChannel

logger = logging.getLogger(__name__)


def has_journey_extension(path: str | Path) -> bool:
    """True if the advisory extension is ``.mapped``, ignoring case."""
    return Path(path).suffix.lstrip(".").lower() == JOURNEY_FILE_EXTENSION


class ShareHandler(BaseHandler):
    """Stage a shared file for the application.

    Args:
        channel: Staging channel. When None, one is opened from config on
            first use so an unreachable store surfaces as a handler failure.
        config: Configuration used to open the channel.
        require_extension: Reject files without the ``.mapped`` extension.
    """

    name = "ShareHandler"

    def __init__(
        self,
        channel: Optional[StagingChannel] = None,
        config: Optional[JourneyConfig] = None,
        require_extension: bool = True,
    ) -> None:
        self.channel = channel
        self.config = config or JourneyConfig()
        self.require_extension = require_extension

    def failure_status(self, exc: JourneyShareError) -> str:
        if isinstance(exc, UnsupportedExtensionError):
            return HandlerStatus.REJECTED
        return HandlerStatus.FAILED

    def handle(self, path: str | Path) -> HandlerResult:
        path = Path(path)
        if self.require_extension and not has_journey_extension(path):
            raise UnsupportedExtensionError(f"Refusing {path.name}: not a .{JOURNEY_FILE_EXTENSION} file")

        data = read_input_bytes(path)
        if self.channel is None:
            self.channel = StagingChannel.from_config(self.config)

        receipt = self.channel.stage(data, path.name)
        if receipt.wake_delivered:
            return HandlerResult(
                handler_name=self.name,
                status=HandlerStatus.OK,
                message="Your friend's journey is being imported!",
                data=receipt,
            )
        return HandlerResult(
            handler_name=self.name,
            status=HandlerStatus.PARTIAL,
            message="Journey saved. Open Mapped to finish importing.",
            data=receipt,
        )
