"""Error taxonomy for JourneyShare.

Every failure is terminal for the operation that raised it; nothing is retried
since inputs are static byte blobs. Each error carries a ``user_message`` that
the host entry points show instead of the raw exception text.
"""

from __future__ import annotations


class JourneyShareError(Exception):
    """Base class for all JourneyShare errors."""

    user_message: str = "Something went wrong"
    fatal: bool = True

    def __init__(self, detail: str = "", user_message: str = "") -> None:
        super().__init__(detail or self.user_message)
        if user_message:
            self.user_message = user_message


class UnreadableInputError(JourneyShareError):
    """The input bytes could not be obtained from the host file reference."""

    user_message = "Could not read file"


class NotAJourneyFileError(JourneyShareError):
    """Neither the shareable nor the legacy schema accepted the payload."""

    user_message = "Not a valid Mapped journey file"


class StoreUnavailableError(JourneyShareError):
    """The shared staging store could not be opened, read or written."""

    user_message = "Could not access app storage"


class WakeFailedError(JourneyShareError):
    """The wake signal did not reach the consumer. The staged record is intact."""

    user_message = "Could not open Mapped"
    fatal = False


class UnsupportedExtensionError(JourneyShareError):
    """The share entry point was handed a file without the journey extension."""

    user_message = "Please select a .mapped file"
