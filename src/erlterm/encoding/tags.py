"""External term format tag bytes and bounds-checked field readers."""

from __future__ import annotations

import logging
from enum import IntEnum

from erlterm.errors import TruncatedTermError

logger = logging.getLogger(__name__)

VERSION_MARKER = 131
"""Leading byte of every externally encoded root term."""


class ExtTag(IntEnum):
    """Tag bytes of the external term format.

    Only a subset is decoded (see :data:`erlterm.encoding.decoder.SUPPORTED_TAGS`);
    the rest are listed so unsupported terms can be reported by name.
    """

    NEW_FLOAT = 70
    BIT_BINARY = 77
    SMALL_INTEGER = 97
    INTEGER = 98
    FLOAT = 99
    ATOM = 100
    REFERENCE = 101
    PORT = 102
    PID = 103
    SMALL_TUPLE = 104
    LARGE_TUPLE = 105
    NIL = 106
    STRING = 107
    LIST = 108
    BINARY = 109
    SMALL_BIG = 110
    LARGE_BIG = 111
    NEW_FUN = 112
    EXPORT = 113
    NEW_REFERENCE = 114
    SMALL_ATOM = 115
    MAP = 116
    FUN = 117
    ATOM_UTF8 = 118
    SMALL_ATOM_UTF8 = 119


def tag_name(tag: int) -> str | None:
    """Return the :class:`ExtTag` name for *tag*, or ``None`` if unknown."""
    try:
        return ExtTag(tag).name
    except ValueError:
        return None


def as_memoryview(data: bytes | bytearray | memoryview) -> memoryview:
    """Ensure *data* is a byte-format :class:`memoryview` for zero-copy slicing.

    Views with a wider item format (e.g. ``cast("H")``) are recast to
    unsigned bytes so indexing and ``len`` count octets.

    :param data: Input bytes-like object.
    :returns: A :class:`memoryview` of unsigned bytes over *data*.
    """
    view = data if isinstance(data, memoryview) else memoryview(data)
    return view if view.format == "B" else view.cast("B")


def ensure_available(buf: memoryview, offset: int, needed: int, what: str) -> None:
    """Raise :class:`TruncatedTermError` unless *needed* bytes remain at *offset*.

    :param buf: Buffer being decoded.
    :param offset: Position of the first byte to be read.
    :param needed: Number of bytes the caller is about to consume.
    :param what: Short description of the field, used in the error message.
    """
    available = len(buf) - offset
    if needed > available:
        err = TruncatedTermError(
            what, offset=offset, needed=needed, available=max(available, 0)
        )
        logger.warning(str(err))
        raise err


def read_u8(buf: memoryview, offset: int, what: str = "u8 field") -> tuple[int, int]:
    """Read one unsigned byte.

    :returns: Tuple of (value, offset past the byte).
    :raises TruncatedTermError: If the buffer is exhausted.
    """
    ensure_available(buf, offset, 1, what)
    return buf[offset], offset + 1


def read_u16(buf: memoryview, offset: int, what: str = "u16 field") -> tuple[int, int]:
    """Read a 2-byte big-endian unsigned integer.

    :returns: Tuple of (value, offset past the field).
    :raises TruncatedTermError: If fewer than 2 bytes remain.
    """
    ensure_available(buf, offset, 2, what)
    return (buf[offset] << 8) | buf[offset + 1], offset + 2


def read_u32(buf: memoryview, offset: int, what: str = "u32 field") -> tuple[int, int]:
    """Read a 4-byte big-endian unsigned integer.

    :returns: Tuple of (value, offset past the field).
    :raises TruncatedTermError: If fewer than 4 bytes remain.
    """
    ensure_available(buf, offset, 4, what)
    return int.from_bytes(buf[offset : offset + 4], "big"), offset + 4


def read_bytes(
    buf: memoryview, offset: int, length: int, what: str = "payload"
) -> tuple[bytes, int]:
    """Copy *length* bytes starting at *offset* into an owned :class:`bytes`.

    This is the only reader that materialises a copy; it is used for
    payloads handed back to the caller (atom text, binaries, strings).

    :returns: Tuple of (copied bytes, offset past the payload).
    :raises TruncatedTermError: If fewer than *length* bytes remain.
    """
    ensure_available(buf, offset, length, what)
    end = offset + length
    return bytes(buf[offset:end]), end
