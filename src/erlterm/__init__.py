"""erlterm: decoder for the Erlang external term format.

Typical usage::

    from erlterm import binary_to_term

    term = binary_to_term(payload)  # payload starts with the 131 marker
"""

__version__ = "0.1.0"

from erlterm.encoding.decoder import SUPPORTED_TAGS, binary_to_term, decode_root, decode_term
from erlterm.errors import (
    BufferTooLargeError,
    DepthLimitError,
    InvalidVersionError,
    MalformedTermError,
    TermDecodeError,
    TrailingBytesError,
    TruncatedTermError,
    UnsupportedTagError,
)
from erlterm.options import DEFAULT_OPTIONS, DecoderOptions
from erlterm.serialization import deserialize, serialize
from erlterm.types.terms import Atom, ErlangString, ImproperList, format_term

__all__ = [
    "DEFAULT_OPTIONS",
    "SUPPORTED_TAGS",
    "Atom",
    "BufferTooLargeError",
    "DecoderOptions",
    "DepthLimitError",
    "ErlangString",
    "ImproperList",
    "InvalidVersionError",
    "MalformedTermError",
    "TermDecodeError",
    "TrailingBytesError",
    "TruncatedTermError",
    "UnsupportedTagError",
    "__version__",
    "binary_to_term",
    "decode_root",
    "decode_term",
    "deserialize",
    "format_term",
    "serialize",
]
