"""JourneyShare journey file codec.

Header detection, tiered schema decoding and the writer side of the format.
"""

from journeyshare.codec.decoder import FormatDecoder, decode_payload, decode_summary
from journeyshare.codec.encoder import (
    build_export,
    encode_journey,
    shareable_filename,
    write_journey_file,
)
from journeyshare.codec.headers import detect_magic_header, prepend_magic_header, strip_magic_header

__all__ = [
    "FormatDecoder",
    "decode_payload",
    "decode_summary",
    "build_export",
    "encode_journey",
    "shareable_filename",
    "write_journey_file",
    "detect_magic_header",
    "strip_magic_header",
    "prepend_magic_header",
]
