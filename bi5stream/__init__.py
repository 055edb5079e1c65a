"""
bi5stream: lazy, time-ordered reading of LZMA-compressed bi5 tick files.

Public API (stable):
- Bi5Source              (file-or-directory tick source)
- read_tick_file         (decode one file eagerly)
- ReaderConfig           (configuration)
- TickSourcePort         (source interface)
- ChainedTickIterator    (the lazy sequence returned by Bi5Source.iter)
- resolve_timestamp      (period start from a YYYY/MM0/DD/HH path)
- DTOs: Tick, TimestampedTick, SourceHandle
- Errors: Bi5Error, SourceError, DecompressionError, RecordFormatError

Presentation (CLI, CSV, separators) and absolute-time arithmetic live
outside this package.
"""

from __future__ import annotations

# Configuration
from .config import ReaderConfig

# Ports
from .ports import TickSourcePort

# Adapters
from .source_fs import Bi5Source, read_tick_file

# Core
from .intake.path_time import resolve_timestamp
from .pipeline.iterator import ChainedTickIterator

# DTOs
from .dto import SourceHandle, Tick, TimestampedTick

# Errors
from .errors import Bi5Error, DecompressionError, RecordFormatError, SourceError

__version__ = "0.1.0"

__all__ = [
    "ReaderConfig",
    "TickSourcePort",
    "Bi5Source",
    "read_tick_file",
    "resolve_timestamp",
    "ChainedTickIterator",
    "SourceHandle",
    "Tick",
    "TimestampedTick",
    "Bi5Error",
    "DecompressionError",
    "RecordFormatError",
    "SourceError",
]
