"""BaseHandler ABC and HandlerStatus constants for JourneyShare.

Host entry points (preview, share, import) inherit from BaseHandler. Each one
wraps the core decoder or staging channel, turns JourneyShareError into a
HandlerResult with a user-facing message, and logs its elapsed time.
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from journeyshare.exceptions import JourneyShareError

logger = logging.getLogger(__name__)


class HandlerStatus:
    """Status codes used in HandlerResult.status."""

    OK = "OK"
    PARTIAL = "PARTIAL"      # succeeded, but a non-fatal step (the wake) failed
    EMPTY = "EMPTY"          # nothing to import
    REJECTED = "REJECTED"    # input is not an acceptable journey file
    FAILED = "FAILED"


@dataclass
class HandlerResult:
    """Outcome of one host entry point invocation."""

    handler_name: str
    status: str = HandlerStatus.OK
    message: str = ""        # user-facing text, never a raw exception
    data: Any = None         # JourneySummary, StageReceipt or ImportResult
    elapsed_seconds: float = 0.0

    @property
    def ok(self) -> bool:
        return self.status in (HandlerStatus.OK, HandlerStatus.PARTIAL)


class BaseHandler(ABC):
    """Abstract base class for JourneyShare host entry points."""

    name: str = "BaseHandler"

    @abstractmethod
    def handle(self, *args: Any, **kwargs: Any) -> HandlerResult:
        """Do the work and return a result. May raise JourneyShareError."""

    def failure_status(self, exc: JourneyShareError) -> str:
        """Map an error to a result status. Override for handler-specific mapping."""
        return HandlerStatus.FAILED

    def run(self, *args: Any, **kwargs: Any) -> HandlerResult:
        """Execute handle(), translate errors and log elapsed time."""
        start = time.monotonic()
        try:
            result = self.handle(*args, **kwargs)
        except JourneyShareError as exc:
            logger.warning("Handler %s failed: %s", self.name, exc)
            result = HandlerResult(
                handler_name=self.name,
                status=self.failure_status(exc),
                message=exc.user_message,
            )
        result.elapsed_seconds = time.monotonic() - start
        logger.info(
            "Handler %s completed in %.3fs (status=%s)",
            self.name,
            result.elapsed_seconds,
            result.status,
        )
        return result
