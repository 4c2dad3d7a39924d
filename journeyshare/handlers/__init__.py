"""JourneyShare host entry points.

Thin wrappers that compose the decoder and the staging channel for each host
callback and translate errors into user-facing results.
"""

from journeyshare.handlers.base import BaseHandler, HandlerResult, HandlerStatus
from journeyshare.handlers.importer import ImportHandler
from journeyshare.handlers.preview import PreviewHandler
from journeyshare.handlers.share import ShareHandler

__all__ = [
    "BaseHandler",
    "HandlerResult",
    "HandlerStatus",
    "PreviewHandler",
    "ShareHandler",
    "ImportHandler",
]
