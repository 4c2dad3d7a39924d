"""Wake signals for JourneyShare.

A wake signal asks the consuming application to activate. It carries no data;
everything travels through the staging store. Delivery is best-effort, and the
consumer also checks the store on its own activation.
"""

from __future__ import annotations

import logging
import webbrowser
from abc import ABC, abstractmethod
from urllib.parse import urlparse

import requests

from config.defaults import WAKE_TIMEOUT, WAKE_URI
from journeyshare.exceptions import WakeFailedError

logger = logging.getLogger(__name__)


class WakeSignal(ABC):
    """Notifies the consumer that a record was staged."""

    @abstractmethod
    def send(self) -> bool:
        """Deliver the signal.

        Returns:
            True if a signal went out, False if there was nothing to send.

        Raises:
            WakeFailedError: If the signal could not be delivered.
        """


class NullWakeSignal(WakeSignal):
    """Sends nothing. The consumer relies on polling the store."""

    def send(self) -> bool:
        logger.debug("Wake signal disabled; consumer will poll the store")
        return False


class UrlWakeSignal(WakeSignal):
    """Opens a well-known URI against the consumer.

    http(s) URIs are POSTed to (a local listener in the consumer); custom
    schemes such as ``mapped://import`` are handed to the platform URL opener.

    Args:
        uri: Wake URI.
        timeout: Seconds to wait for an http(s) endpoint.
    """

    def __init__(self, uri: str = WAKE_URI, timeout: float = WAKE_TIMEOUT) -> None:
        self.uri = uri
        self.timeout = timeout
        self.scheme = urlparse(uri).scheme.lower()

    def send(self) -> bool:
        if not self.scheme:
            raise WakeFailedError(f"Wake URI has no scheme: {self.uri!r}")
        if self.scheme in ("http", "https"):
            self._post()
        else:
            self._open()
        logger.info("Wake signal delivered to %s", self.uri)
        return True

    def _post(self) -> None:
        try:
            resp = requests.post(self.uri, timeout=self.timeout)
        except requests.RequestException as exc:
            raise WakeFailedError(f"Wake request to {self.uri} failed: {exc}") from exc
        if resp.status_code >= 400:
            raise WakeFailedError(f"Wake endpoint {self.uri} returned HTTP {resp.status_code}")

    def _open(self) -> None:
        try:
            opened = webbrowser.open(self.uri)
        except webbrowser.Error as exc:
            raise WakeFailedError(f"No handler for {self.uri}: {exc}") from exc
        if not opened:
            raise WakeFailedError(f"No handler accepted {self.uri}")
