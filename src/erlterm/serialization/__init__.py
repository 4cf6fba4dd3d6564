"""External format serialization (JSON, etc.) for decoded terms.

This module provides a pluggable serialization API for exporting decoded
term trees to interchange formats.  It never produces the external term
format itself.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

__all__ = ["Serializer", "deserialize", "get_serializer", "serialize"]


@runtime_checkable
class Serializer(Protocol):
    """Interface for format-specific serialization backends."""

    def encode(self, term: Any) -> bytes:
        """Encode a decoded term to the target format."""
        ...

    def decode(self, raw: bytes) -> Any:
        """Decode bytes in the target format to plain Python values."""
        ...

    @property
    def content_type(self) -> str:
        """MIME type for the output format (e.g. 'application/json')."""
        ...


def get_serializer(format: str = "json", **kwargs: Any) -> Serializer:
    """Get a serializer instance for the given format.

    Args:
        format: Output format. Currently supported: ``"json"``.
        **kwargs: Format-specific options passed to the serializer constructor.

    Returns:
        A Serializer instance.

    Raises:
        ValueError: If the format is not supported.
    """
    if format == "json":
        from erlterm.serialization.json import JsonSerializer

        return JsonSerializer(**kwargs)
    msg = f"Unsupported serialization format: {format}"
    raise ValueError(msg)


def serialize(term: Any, format: str = "json", **kwargs: Any) -> bytes:
    """Serialize a decoded term to the specified format.

    Args:
        term: Term returned by :func:`erlterm.decode_root` or
            :func:`erlterm.binary_to_term`.
        format: Output format (default ``"json"``).
        **kwargs: Format-specific options.

    Returns:
        Serialized bytes.
    """
    serializer = get_serializer(format, **kwargs)
    return serializer.encode(term)


def deserialize(raw: bytes, format: str = "json") -> Any:
    """Deserialize bytes to plain Python values.

    Args:
        raw: Bytes to deserialize.
        format: Input format (default ``"json"``).

    Returns:
        Deserialized value.
    """
    serializer = get_serializer(format)
    return serializer.decode(raw)
