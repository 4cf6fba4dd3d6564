"""JSON serializer backed by orjson."""

from __future__ import annotations

import logging
from typing import Any

import orjson

from erlterm.types.terms import Atom, ErlangString, ImproperList

logger = logging.getLogger(__name__)

# orjson serializes integers natively only within this range.
_JSON_INT_MIN = -(2**63)
_JSON_INT_MAX = 2**64 - 1


def json_value(term: Any) -> Any:
    """Convert a decoded term into values orjson can serialize.

    Handles:

    * :class:`Atom` -> its name.
    * ``bytes`` and ``memoryview`` -> hex string.
    * :class:`ErlangString` -> list of ints.
    * :class:`ImproperList` -> ``{"elements": [...], "tail": ...}``.
    * ``tuple`` -> list.
    * ``int`` outside the 64-bit range -> decimal string.

    :param term: The decoded term to convert.
    :returns: A JSON-serializable representation.
    :raises TypeError: If *term* contains a value that is not a decoded term.
    """
    match term:
        case int():
            if _JSON_INT_MIN <= term <= _JSON_INT_MAX:
                return term
            return str(term)
        case Atom(name=name):
            return name
        case bytes():
            return term.hex()
        case memoryview():
            return bytes(term).hex()
        case ErlangString():
            return term.to_list()
        case ImproperList(elements=elements, tail=tail):
            return {"elements": [json_value(t) for t in elements], "tail": json_value(tail)}
        case list() | tuple():
            return [json_value(t) for t in term]
        case dict():
            return {str(k): json_value(v) for k, v in term.items()}
        case str() | None:
            return term
    msg = f"Cannot serialize {type(term).__name__}"
    logger.warning("serialize failed: %s", msg)
    raise TypeError(msg)


class JsonSerializer:
    """JSON serializer using orjson for high-performance encoding.

    Binaries are encoded as hex strings and atoms as their names.
    Since JSON has neither type, deserialization returns them as plain
    strings; the conversion is one-way.

    :param pretty: Indent output with 2 spaces.
    :param sort_keys: Sort dict keys alphabetically.
    """

    def __init__(
        self,
        *,
        pretty: bool = False,
        sort_keys: bool = False,
    ) -> None:
        self._options = 0
        if pretty:
            self._options |= orjson.OPT_INDENT_2
        if sort_keys:
            self._options |= orjson.OPT_SORT_KEYS

    def encode(self, term: Any) -> bytes:
        """Encode a decoded term to JSON bytes."""
        return orjson.dumps(json_value(term), option=self._options)

    def decode(self, raw: bytes) -> Any:
        """Decode JSON bytes to plain Python values."""
        return orjson.loads(raw)

    @property
    def content_type(self) -> str:
        """MIME content type for JSON."""
        return "application/json"
