"""PreviewHandler — quick-look entry point for JourneyShare.

Accepts any file and defers entirely to the decoder: a file that decodes is
previewed, anything else is rejected so the host declines to render it.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from journeyshare.codec.decoder import FormatDecoder
from journeyshare.exceptions import JourneyShareError, NotAJourneyFileError, StoreUnavailableError
from journeyshare.handlers.base import BaseHandler, HandlerResult, HandlerStatus
from journeyshare.handlers.share import ShareHandler
from journeyshare.io.persistence import read_input_bytes
from journeyshare.staging.channel import StagingChannel

logger = logging.getLogger(__name__)


class PreviewHandler(BaseHandler):
    """Decode a file for display and optionally hand it to the app.

    Args:
        decoder: Decoder used for the summary.
        channel: Channel used by open_in_app(). None disables that action.
    """

    name = "PreviewHandler"

    def __init__(
        self,
        decoder: Optional[FormatDecoder] = None,
        channel: Optional[StagingChannel] = None,
    ) -> None:
        self.decoder = decoder or FormatDecoder()
        self.channel = channel

    def failure_status(self, exc: JourneyShareError) -> str:
        if isinstance(exc, NotAJourneyFileError):
            return HandlerStatus.REJECTED
        return HandlerStatus.FAILED

    def handle(self, path: str | Path) -> HandlerResult:
        data = read_input_bytes(path)
        summary = self.decoder.decode(data)
        logger.info(
            "Previewing journey from %s (%d locations)",
            summary.sender_name,
            summary.location_count,
        )
        return HandlerResult(
            handler_name=self.name,
            status=HandlerStatus.OK,
            message=f"{summary.sender_name} wants to share their journey",
            data=summary,
        )

    def open_in_app(self, path: str | Path) -> HandlerResult:
        """Stage the previewed file for the application (the "Open in app" action)."""
        if self.channel is None:
            return HandlerResult(
                handler_name=self.name,
                status=HandlerStatus.FAILED,
                message=StoreUnavailableError.user_message,
            )
        return ShareHandler(self.channel, require_extension=False).run(path)
