"""JourneyShare — journey file recognition and cross-process import staging.

Public API surface:
    - JourneyConfig: Runtime configuration
    - FormatDecoder: Recognize and summarize journey files
    - StagingChannel: Single-slot handoff of raw bytes to the application
"""

__version__ = "1.0.0"
__author__ = "JourneyShare Contributors"

from config.settings import JourneyConfig
from journeyshare.codec.decoder import FormatDecoder, decode_summary
from journeyshare.staging.channel import StagingChannel

__all__ = [
    "__version__",
    "JourneyConfig",
    "FormatDecoder",
    "decode_summary",
    "StagingChannel",
]
