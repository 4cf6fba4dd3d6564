"""Shared wire builders for erlterm tests.

A minimal reference encoder for the tags the decoder supports, so tests
can describe payloads by value rather than by hand-written byte strings.
"""

from __future__ import annotations

import struct

VERSION = b"\x83"
NIL = b"j"


def root(term: bytes) -> bytes:
    """Prefix an encoded term with the version marker."""
    return VERSION + term


def small_int(value: int) -> bytes:
    return bytes([97, value])


def integer(value: int) -> bytes:
    return b"b" + struct.pack(">I", value)


def atom(name: str) -> bytes:
    raw = name.encode("latin-1")
    return b"d" + struct.pack(">H", len(raw)) + raw


def small_atom_utf8(name: str) -> bytes:
    raw = name.encode("utf-8")
    return bytes([119, len(raw)]) + raw


def binary(data: bytes) -> bytes:
    return b"m" + struct.pack(">I", len(data)) + data


def string(data: bytes) -> bytes:
    return b"k" + struct.pack(">H", len(data)) + data


def small_big(value: int) -> bytes:
    magnitude = abs(value)
    raw = magnitude.to_bytes((magnitude.bit_length() + 7) // 8, "little")
    return bytes([110, len(raw), 1 if value < 0 else 0]) + raw


def small_tuple(*elements: bytes) -> bytes:
    return bytes([104, len(elements)]) + b"".join(elements)


def large_tuple(*elements: bytes) -> bytes:
    return b"i" + struct.pack(">I", len(elements)) + b"".join(elements)


def list_(*elements: bytes, tail: bytes = NIL) -> bytes:
    return b"l" + struct.pack(">I", len(elements)) + b"".join(elements) + tail


def map_(*pairs: tuple[bytes, bytes]) -> bytes:
    body = b"".join(k + v for k, v in pairs)
    return b"t" + struct.pack(">I", len(pairs)) + body
