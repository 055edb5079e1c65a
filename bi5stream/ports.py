"""
Hexagonal interface (Port) for tick sources.

Presentation layers (CLI, CSV writers, notebooks) depend on this Protocol
rather than on the filesystem adapter, so they are easy to feed with fakes
in tests.
"""

from __future__ import annotations

from typing import Iterator, Protocol

from .dto import TimestampedTick


class TickSourcePort(Protocol):
    """
    Supplies a time-ordered, single-pass sequence of (base_ts, Tick) pairs.
    """

    def is_file(self) -> bool:
        """True if the source denotes one regular file rather than a directory."""
        ...

    def iter(self) -> Iterator[TimestampedTick]:
        """
        Begin iteration. Construction-time failures (missing path, corrupt
        first file) are raised here, before any item is produced.
        """
        ...
