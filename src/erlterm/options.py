"""Decoder configuration."""

from __future__ import annotations

import sys
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class DecoderOptions:
    """Hardening limits applied while decoding.

    Each nesting level costs two interpreter frames (the dispatch plus the
    composite decoder), so *max_depth* is capped at a third of the current
    recursion limit to leave headroom for the caller's own stack.
    """

    max_depth: int = 256
    """Maximum nesting of tuples, lists and maps below the root term."""

    max_buffer_size: int | None = None
    """Reject input buffers larger than this many bytes (``None`` = unbounded)."""

    def __post_init__(self) -> None:
        ceiling = sys.getrecursionlimit() // 3
        if not 1 <= self.max_depth <= ceiling:
            msg = f"max_depth must be 1-{ceiling}, got {self.max_depth}"
            raise ValueError(msg)
        if self.max_buffer_size is not None and self.max_buffer_size < 2:
            msg = f"max_buffer_size must be >= 2, got {self.max_buffer_size}"
            raise ValueError(msg)


DEFAULT_OPTIONS = DecoderOptions()
