"""
Data Transfer Objects (DTOs) used across the tick reader.

These are intentionally small, immutable, and independent of any I/O or
decompression libraries.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import datetime
from typing import NamedTuple, Optional


# === Wire record ===
@dataclass(frozen=True)
class Tick:
    """One fixed-width price/volume observation (20 bytes on the wire)."""
    offset_ms: int       # milliseconds since the start of the owning file's period
    ask: int             # integer-scaled price; scale is an upstream convention
    bid: int
    ask_size: float
    bid_size: float


# === Unit flowing through the iterator ===
class TimestampedTick(NamedTuple):
    """
    (base_ts, tick) pair. `base_ts` is the period start of the file the tick
    came from, or None when no timestamp was supplied for a single file.
    Absolute time is base_ts + offset_ms; the reader never adds them.
    """
    base_ts: Optional[datetime]
    tick: Tick


# === Input handle ===
@dataclass(frozen=True)
class SourceHandle:
    """A file-or-directory path plus an optional period-start timestamp."""
    path: str
    timestamp: Optional[datetime] = None  # only meaningful for a single file

    @classmethod
    def of(cls, path: str | os.PathLike, timestamp: Optional[datetime] = None) -> "SourceHandle":
        return cls(path=os.fspath(path), timestamp=timestamp)
