"""
Filesystem-backed tick source.

Wraps one path, either a single compressed tick file or the root of a tree
laid out like:
  <root>/<YYYY>/<MM0>/<DD>/<HH>h_ticks.bi5

Construction is free of I/O; nothing is opened until `iter()` is called,
and every call to `iter()` starts a fresh, independent traversal.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from .config import ReaderConfig
from .dto import SourceHandle, Tick
from .pipeline.iterator import ChainedTickIterator
from .ports import TickSourcePort


@dataclass(frozen=True)
class Bi5Source(TickSourcePort):
    """
    Tick source over a file or directory.

    Parameters
    ----------
    path : str | os.PathLike
        File or directory.
    timestamp : Optional[datetime]
        Period start for a single file. Ignored for directories, where each
        file's timestamp is inferred from its path.
    config : ReaderConfig
        Error policy, LZMA format and walk limits.
    """

    path: str | os.PathLike
    timestamp: Optional[datetime] = None
    config: ReaderConfig = field(default_factory=ReaderConfig)

    @property
    def handle(self) -> SourceHandle:
        return SourceHandle.of(self.path, self.timestamp)

    def is_file(self) -> bool:
        return os.path.isfile(self.path)

    def iter(self) -> ChainedTickIterator:
        """
        Begin iteration; see ChainedTickIterator.open for what can be raised.
        """
        return ChainedTickIterator.open(self.handle, cfg=self.config)

    def __iter__(self) -> ChainedTickIterator:
        return self.iter()


def read_tick_file(
    path: str | os.PathLike,
    timestamp: Optional[datetime] = None,
    *,
    config: Optional[ReaderConfig] = None,
) -> List[Tick]:
    """
    Decompress and decode a whole tick file (or tree) into a list.

    The timestamps are dropped; use Bi5Source directly to keep them.
    """
    source = Bi5Source(path, timestamp, config or ReaderConfig())
    return [item.tick for item in source.iter()]
