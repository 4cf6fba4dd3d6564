"""Exception types raised while decoding external term format data."""

from __future__ import annotations


class TermDecodeError(ValueError):
    """Base exception for malformed or unsupported term data.

    Subclasses :class:`ValueError` so callers that treat any malformed
    payload alike can catch the builtin.

    :param message: Human-readable description.
    :param offset: Buffer position at which the problem was detected.
    """

    def __init__(self, message: str, *, offset: int) -> None:
        self.offset = offset
        super().__init__(message)


class TruncatedTermError(TermDecodeError):
    """A declared payload length runs past the end of the buffer."""

    def __init__(self, what: str, *, offset: int, needed: int, available: int) -> None:
        self.needed = needed
        self.available = available
        super().__init__(
            f"Truncated {what} at offset {offset}: need {needed} bytes, "
            f"only {available} remain",
            offset=offset,
        )


class UnsupportedTagError(TermDecodeError):
    """The tag byte names a term type this package does not decode."""

    def __init__(self, tag: int, *, offset: int, name: str | None = None) -> None:
        self.tag = tag
        label = f"{name} ({tag})" if name else f"{tag}"
        super().__init__(f"Unsupported term tag {label} at offset {offset}", offset=offset)


class InvalidVersionError(TermDecodeError):
    """The leading byte is not the external format version marker."""

    def __init__(self, marker: int | None, *, expected: int) -> None:
        self.marker = marker
        if marker is None:
            message = "Empty buffer: missing version marker"
        else:
            message = f"Invalid version marker {marker} (expected {expected})"
        super().__init__(message, offset=0)


class DepthLimitError(TermDecodeError):
    """Nested composites exceed the configured maximum depth."""

    def __init__(self, max_depth: int, *, offset: int) -> None:
        self.max_depth = max_depth
        super().__init__(
            f"Term nesting exceeds maximum depth {max_depth} at offset {offset}",
            offset=offset,
        )


class MalformedTermError(TermDecodeError):
    """The payload is structurally impossible (bad sign byte, invalid text, ...)."""


class TrailingBytesError(TermDecodeError):
    """Bytes remain after the root term in a whole-buffer decode."""

    def __init__(self, remaining: int, *, offset: int) -> None:
        self.remaining = remaining
        super().__init__(
            f"{remaining} trailing bytes after root term at offset {offset}",
            offset=offset,
        )


class BufferTooLargeError(TermDecodeError):
    """The input buffer exceeds the configured maximum size."""

    def __init__(self, size: int, *, limit: int) -> None:
        self.size = size
        self.limit = limit
        super().__init__(f"Buffer of {size} bytes exceeds maximum {limit}", offset=0)
