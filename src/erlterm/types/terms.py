"""Python representations of external term format values.

Most terms decode straight to builtins:

    small integer / integer / small big  -> ``int``
    binary                               -> ``bytes``
    tuple                                -> ``tuple``
    nil / proper list                    -> ``list``
    map                                  -> ``dict[str, ...]``

The classes here cover the variants with no faithful builtin equivalent.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any, overload


@dataclass(frozen=True, slots=True)
class Atom:
    """A named constant (``ok``, ``error``, ``'Elixir.Foo'``).

    Kept distinct from ``str`` so that consumers can tell the atom ``ok``
    apart from the binary ``<<"ok">>`` or the string ``"ok"``.
    """

    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True, slots=True)
class ErlangString:
    """A list of small integers sent in the compact ``STRING_EXT`` form.

    Behaves as a read-only sequence of ``int`` (0-255) in wire order.
    """

    data: bytes

    def __len__(self) -> int:
        return len(self.data)

    def __iter__(self) -> Iterator[int]:
        return iter(self.data)

    @overload
    def __getitem__(self, index: int) -> int: ...

    @overload
    def __getitem__(self, index: slice) -> list[int]: ...

    def __getitem__(self, index: int | slice) -> int | list[int]:
        if isinstance(index, slice):
            return list(self.data[index])
        return self.data[index]

    def __str__(self) -> str:
        return _bytes_text(self.data)

    def to_list(self) -> list[int]:
        """Return the elements as a plain list of ints."""
        return list(self.data)


@dataclass(frozen=True, slots=True)
class ImproperList:
    """A list whose final cell holds a non-list *tail* instead of ``[]``.

    Iterating yields the elements followed by the tail, so
    ``list(ImproperList((1, 2), 3)) == [1, 2, 3]``; the tail remains
    distinguishable through :attr:`tail`.
    """

    elements: tuple[Any, ...]
    tail: Any

    def __len__(self) -> int:
        return len(self.elements) + 1

    def __iter__(self) -> Iterator[Any]:
        yield from self.elements
        yield self.tail


def _bytes_text(data: bytes) -> str:
    return data.decode("utf-8", errors="backslashreplace")


def format_term(term: Any) -> str:
    """Render *term* in its display form.

    Map keys are stored under this form, so two keys that render alike
    collide (the atom ``a`` and the binary ``<<"a">>`` both give ``"a"``).

    :param term: A decoded term.
    :returns: Display string.
    :raises TypeError: If *term* is not a decoded term type.
    """
    match term:
        case bool():
            msg = f"Not a decoded term: {term!r}"
            raise TypeError(msg)
        case int():
            return str(term)
        case Atom(name=name):
            return name
        case bytes() | bytearray():
            return _bytes_text(bytes(term))
        case ErlangString(data=data):
            return _bytes_text(data)
        case list():
            return "[" + ",".join(format_term(t) for t in term) + "]"
        case ImproperList(elements=elements, tail=tail):
            head = ",".join(format_term(t) for t in elements)
            return f"[{head}|{format_term(tail)}]"
        case tuple():
            return "{" + ",".join(format_term(t) for t in term) + "}"
        case dict():
            pairs = ",".join(f"{k} => {format_term(v)}" for k, v in term.items())
            return "#{" + pairs + "}"
    msg = f"Not a decoded term: {term!r}"
    raise TypeError(msg)
