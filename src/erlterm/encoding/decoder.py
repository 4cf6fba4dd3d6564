"""Recursive-descent decoder for the external term format.

Every sub-decoder takes ``(buf, offset, depth, options)`` and returns
``(value, new_offset)``.  The buffer is wrapped in a :class:`memoryview`
once at the entry point and is never re-sliced for scanning; copies are
made only for payloads returned to the caller.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from erlterm.encoding.tags import (
    VERSION_MARKER,
    ExtTag,
    as_memoryview,
    ensure_available,
    read_bytes,
    read_u8,
    read_u16,
    read_u32,
    tag_name,
)
from erlterm.errors import (
    BufferTooLargeError,
    DepthLimitError,
    InvalidVersionError,
    MalformedTermError,
    TrailingBytesError,
    UnsupportedTagError,
)
from erlterm.options import DEFAULT_OPTIONS, DecoderOptions
from erlterm.types.terms import Atom, ErlangString, ImproperList, format_term

if TYPE_CHECKING:
    from collections.abc import Callable

    _TermDecoder = Callable[[memoryview, int, int, DecoderOptions], tuple[Any, int]]

logger = logging.getLogger(__name__)


def _descend(offset: int, depth: int, options: DecoderOptions) -> int:
    """Return the depth for the children of a composite, enforcing the limit."""
    if depth >= options.max_depth:
        err = DepthLimitError(options.max_depth, offset=offset)
        logger.warning(str(err))
        raise err
    return depth + 1


def _check_count(buf: memoryview, offset: int, count: int, min_size: int, what: str) -> None:
    """Reject element counts that cannot fit in the remaining bytes.

    Each element occupies at least *min_size* bytes (one tag byte per
    term), so an oversized count is caught before any element is decoded.
    """
    ensure_available(buf, offset, count * min_size, what)


# --- Integers ---


def _decode_small_integer(
    buf: memoryview, offset: int, depth: int, options: DecoderOptions
) -> tuple[int, int]:
    return read_u8(buf, offset, "small integer")


def _decode_integer(
    buf: memoryview, offset: int, depth: int, options: DecoderOptions
) -> tuple[int, int]:
    # Read unsigned: senders of this format only emit non-negative values here.
    return read_u32(buf, offset, "integer")


def _decode_small_big(
    buf: memoryview, offset: int, depth: int, options: DecoderOptions
) -> tuple[int, int]:
    """Decode an arbitrary-precision integer: u8 length, u8 sign, LE magnitude."""
    length, offset = read_u8(buf, offset, "small big length")
    sign, offset = read_u8(buf, offset, "small big sign")
    if sign not in (0, 1):
        msg = f"Invalid small big sign byte {sign} at offset {offset - 1}"
        logger.warning(msg)
        raise MalformedTermError(msg, offset=offset - 1)
    ensure_available(buf, offset, length, "small big magnitude")
    end = offset + length
    value = int.from_bytes(buf[offset:end], "little")
    return (-value if sign else value), end


# --- Atoms ---


def _decode_atom_text(raw: bytes, encoding: str, offset: int) -> Atom:
    try:
        return Atom(raw.decode(encoding))
    except UnicodeDecodeError as exc:
        msg = f"Atom text at offset {offset} is not valid {encoding}"
        logger.warning(msg)
        raise MalformedTermError(msg, offset=offset) from exc


def _decode_atom(
    buf: memoryview, offset: int, depth: int, options: DecoderOptions
) -> tuple[Atom, int]:
    length, offset = read_u16(buf, offset, "atom length")
    raw, end = read_bytes(buf, offset, length, "atom text")
    return _decode_atom_text(raw, "latin-1", offset), end


def _decode_small_atom_utf8(
    buf: memoryview, offset: int, depth: int, options: DecoderOptions
) -> tuple[Atom, int]:
    length, offset = read_u8(buf, offset, "small atom length")
    raw, end = read_bytes(buf, offset, length, "small atom text")
    return _decode_atom_text(raw, "utf-8", offset), end


# --- Byte payloads ---


def _decode_binary(
    buf: memoryview, offset: int, depth: int, options: DecoderOptions
) -> tuple[bytes, int]:
    length, offset = read_u32(buf, offset, "binary length")
    return read_bytes(buf, offset, length, "binary payload")


def _decode_string(
    buf: memoryview, offset: int, depth: int, options: DecoderOptions
) -> tuple[ErlangString, int]:
    length, offset = read_u16(buf, offset, "string length")
    raw, end = read_bytes(buf, offset, length, "string payload")
    return ErlangString(raw), end


# --- Composites ---


def _decode_small_tuple(
    buf: memoryview, offset: int, depth: int, options: DecoderOptions
) -> tuple[tuple[Any, ...], int]:
    inner = _descend(offset - 1, depth, options)
    arity, offset = read_u8(buf, offset, "small tuple arity")
    _check_count(buf, offset, arity, 1, "small tuple elements")
    items: list[Any] = []
    for _ in range(arity):
        item, offset = _decode(buf, offset, inner, options)
        items.append(item)
    return tuple(items), offset


def _decode_large_tuple(
    buf: memoryview, offset: int, depth: int, options: DecoderOptions
) -> tuple[tuple[Any, ...], int]:
    inner = _descend(offset - 1, depth, options)
    arity, offset = read_u32(buf, offset, "large tuple arity")
    _check_count(buf, offset, arity, 1, "large tuple elements")
    items: list[Any] = []
    for _ in range(arity):
        item, offset = _decode(buf, offset, inner, options)
        items.append(item)
    return tuple(items), offset


def _decode_nil(
    buf: memoryview, offset: int, depth: int, options: DecoderOptions
) -> tuple[list[Any], int]:
    return [], offset


def _decode_list(
    buf: memoryview, offset: int, depth: int, options: DecoderOptions
) -> tuple[list[Any] | ImproperList, int]:
    """Decode N elements followed by a tail term.

    An empty tail gives a proper ``list``; any other tail (including a
    non-empty list) gives an :class:`ImproperList`.
    """
    inner = _descend(offset - 1, depth, options)
    length, offset = read_u32(buf, offset, "list length")
    # N elements plus the tail.
    _check_count(buf, offset, length + 1, 1, "list elements")
    items: list[Any] = []
    for _ in range(length):
        item, offset = _decode(buf, offset, inner, options)
        items.append(item)
    tail, offset = _decode(buf, offset, inner, options)
    if isinstance(tail, list) and not tail:
        return items, offset
    return ImproperList(tuple(items), tail), offset


def _decode_map(
    buf: memoryview, offset: int, depth: int, options: DecoderOptions
) -> tuple[dict[str, Any], int]:
    """Decode *arity* key/value pairs, keying the result by display form.

    Keys that render alike collide; the later value wins.
    """
    inner = _descend(offset - 1, depth, options)
    arity, offset = read_u32(buf, offset, "map arity")
    _check_count(buf, offset, arity, 2, "map pairs")
    result: dict[str, Any] = {}
    for _ in range(arity):
        key_offset = offset
        key, offset = _decode(buf, offset, inner, options)
        value, offset = _decode(buf, offset, inner, options)
        text = format_term(key)
        if text in result:
            logger.debug("Map key %r at offset %d overwrites an earlier entry", text, key_offset)
        result[text] = value
    return result, offset


_DECODERS: dict[int, _TermDecoder] = {
    ExtTag.SMALL_INTEGER: _decode_small_integer,
    ExtTag.INTEGER: _decode_integer,
    ExtTag.ATOM: _decode_atom,
    ExtTag.SMALL_TUPLE: _decode_small_tuple,
    ExtTag.LARGE_TUPLE: _decode_large_tuple,
    ExtTag.NIL: _decode_nil,
    ExtTag.STRING: _decode_string,
    ExtTag.LIST: _decode_list,
    ExtTag.BINARY: _decode_binary,
    ExtTag.SMALL_BIG: _decode_small_big,
    ExtTag.MAP: _decode_map,
    ExtTag.SMALL_ATOM_UTF8: _decode_small_atom_utf8,
}

SUPPORTED_TAGS: frozenset[int] = frozenset(_DECODERS)
"""Tag bytes this decoder understands; every other tag raises."""


def _decode(
    buf: memoryview, offset: int, depth: int, options: DecoderOptions
) -> tuple[Any, int]:
    tag, payload_offset = read_u8(buf, offset, "term tag")
    decoder = _DECODERS.get(tag)
    if decoder is None:
        err = UnsupportedTagError(tag, offset=offset, name=tag_name(tag))
        logger.warning(str(err))
        raise err
    return decoder(buf, payload_offset, depth, options)


def decode_term(
    data: bytes | bytearray | memoryview,
    offset: int = 0,
    *,
    depth: int = 0,
    options: DecoderOptions | None = None,
) -> tuple[Any, int]:
    """Decode one tagged term at *offset* (no version marker expected).

    Useful for framed protocols that strip the version marker themselves
    or pack several terms back to back.

    :param data: Buffer to decode from.
    :param offset: Position of the term's tag byte.
    :param depth: Nesting depth already consumed by the caller.
    :param options: Decoder limits (defaults to :data:`DEFAULT_OPTIONS`).
    :returns: Tuple of (decoded term, offset past the term).
    :raises ValueError: If *offset* or *depth* is negative.
    :raises TermDecodeError: On truncated, malformed or unsupported data.
    """
    if offset < 0:
        msg = f"Offset must be non-negative, got {offset}"
        logger.warning(msg)
        raise ValueError(msg)
    if depth < 0:
        msg = f"Depth must be non-negative, got {depth}"
        logger.warning(msg)
        raise ValueError(msg)
    return _decode(as_memoryview(data), offset, depth, options or DEFAULT_OPTIONS)


def decode_root(
    data: bytes | bytearray | memoryview,
    options: DecoderOptions | None = None,
) -> tuple[Any, int]:
    """Decode a version-marked root term.

    Validates the leading version marker (131) and decodes exactly one
    term after it.  Bytes after the term are left unread.

    :param data: Buffer whose first byte is the version marker.
    :param options: Decoder limits (defaults to :data:`DEFAULT_OPTIONS`).
    :returns: Tuple of (decoded term, number of bytes consumed including
        the version marker).
    :raises InvalidVersionError: If the buffer is empty or the marker is wrong.
    :raises TermDecodeError: On truncated, malformed or unsupported data.

    Example::

        from erlterm import decode_root

        term, consumed = decode_root(b"\\x83a\\x05")  # -> (5, 3)
    """
    if options is None:
        options = DEFAULT_OPTIONS
    buf = as_memoryview(data)

    limit = options.max_buffer_size
    if limit is not None and len(buf) > limit:
        too_large = BufferTooLargeError(len(buf), limit=limit)
        logger.warning(str(too_large))
        raise too_large
    if len(buf) == 0 or buf[0] != VERSION_MARKER:
        bad_version = InvalidVersionError(buf[0] if len(buf) else None, expected=VERSION_MARKER)
        logger.warning(str(bad_version))
        raise bad_version

    term, end = _decode(buf, 1, 0, options)
    logger.debug("Decoded root term of type %s (%d bytes)", type(term).__name__, end)
    return term, end


def binary_to_term(
    data: bytes | bytearray | memoryview,
    options: DecoderOptions | None = None,
) -> Any:
    """Decode a buffer holding exactly one version-marked term.

    Like :func:`decode_root` but the whole buffer must be consumed.

    :param data: Buffer whose first byte is the version marker.
    :param options: Decoder limits (defaults to :data:`DEFAULT_OPTIONS`).
    :returns: The decoded term.
    :raises TrailingBytesError: If bytes remain after the root term.
    :raises TermDecodeError: On any other decode failure.
    """
    term, end = decode_root(data, options)
    remaining = len(as_memoryview(data)) - end
    if remaining:
        err = TrailingBytesError(remaining, offset=end)
        logger.warning(str(err))
        raise err
    return term
