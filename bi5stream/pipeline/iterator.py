"""
Chained tick iterator: one lazy, single-pass stream over a file or a tree.

State is an explicit stack of frames instead of nested iterators:
- `_FileFrame` walks one decompressed payload record by record.
- `_DirFrame` owns a SortedWalk and, whenever the frame above it runs dry,
  opens the next qualifying file and pushes it.

An empty stack is the terminal state. Only the top file frame holds a
payload, so memory is bounded by the largest single file regardless of how
many files the tree contains.

Error handling
--------------
Failures while *beginning* iteration propagate to the caller. Failures met
while moving from one file to the next are governed by ReaderConfig.on_error:
  - "stop":  log a warning and end the traversal
  - "skip":  log a warning and continue with the next file
  - "raise": re-raise from __next__; the iterator is exhausted afterwards
"""

from __future__ import annotations

import logging
import os
from datetime import datetime
from typing import List, Optional, Union

from ..config import ReaderConfig
from ..dto import SourceHandle, TimestampedTick
from ..errors import Bi5Error, SourceError
from ..intake.codec import TICK_SIZE, decode_tick
from ..intake.decompress import read_payload
from ..intake.walk import SortedWalk, next_qualifying

logger = logging.getLogger(__name__)


class _FileFrame:
    """Linear decode of one decompressed payload, tagged with a fixed timestamp."""

    __slots__ = ("path", "buf", "pos", "base_ts")

    def __init__(self, path: str, buf: bytes, base_ts: Optional[datetime]) -> None:
        self.path = path
        self.buf = buf
        self.pos = 0
        self.base_ts = base_ts

    def next(self) -> Optional[TimestampedTick]:
        decoded = decode_tick(self.buf, self.pos)
        if decoded is None:
            self.buf = b""  # release the payload as soon as the frame is spent
            return None
        tick, self.pos = decoded
        return TimestampedTick(self.base_ts, tick)


class _DirFrame:
    """Directory traversal; the frame above it on the stack is its active child."""

    __slots__ = ("path", "walk", "base_ts")

    def __init__(self, path: str, walk: SortedWalk, base_ts: Optional[datetime] = None) -> None:
        self.path = path
        self.walk = walk
        self.base_ts = base_ts  # timestamp of the active child


_Frame = Union[_FileFrame, _DirFrame]


class ChainedTickIterator:
    """
    Iterator of TimestampedTick over a single file or a directory tree.

    Build it with `ChainedTickIterator.open(handle)`; direct construction
    takes a ready-made frame stack and is meant for internal use.
    """

    def __init__(self, frames: List[_Frame], *, cfg: Optional[ReaderConfig] = None) -> None:
        self._stack: List[_Frame] = frames
        self._cfg = cfg or ReaderConfig()

    # --- construction ---

    @classmethod
    def empty(cls, *, cfg: Optional[ReaderConfig] = None) -> "ChainedTickIterator":
        return cls([], cfg=cfg)

    @classmethod
    def open(cls, handle: SourceHandle, *, cfg: Optional[ReaderConfig] = None) -> "ChainedTickIterator":
        """
        Begin iteration over `handle`.

        A file is decompressed eagerly. A directory is walked up to its first
        qualifying file, which is opened eagerly; a directory without one
        yields an empty iterator.

        Raises
        ------
        SourceError
            The path is neither a regular file nor a directory.
        OSError, DecompressionError, RecordFormatError
            Opening the (first) file failed.
        """
        cfg = cfg or ReaderConfig()
        path = handle.path

        if os.path.isfile(path):
            return cls([_open_file(path, handle.timestamp, cfg)], cfg=cfg)

        if os.path.isdir(path):
            logger.debug("Walking %s", path)
            walk = SortedWalk(path, follow_symlinks=cfg.follow_symlinks, max_depth=cfg.max_depth)
            entry = next_qualifying(walk)
            if entry is None:
                logger.debug("No tick files with a resolvable timestamp under %s", path)
                return cls.empty(cfg=cfg)
            child = _open_frame(entry.path, entry.timestamp, cfg)
            return cls([_DirFrame(path, walk, entry.timestamp), child], cfg=cfg)

        raise SourceError(f"{path} must be file or dir")

    # --- iteration ---

    def __iter__(self) -> "ChainedTickIterator":
        return self

    def __next__(self) -> TimestampedTick:
        while self._stack:
            top = self._stack[-1]
            if isinstance(top, _FileFrame):
                item = top.next()
                if item is not None:
                    return item
                self._stack.pop()
                continue

            # A directory frame on top means its child ran dry.
            child = self._advance(top)
            if child is not None:
                self._stack.append(child)
            elif self._stack:
                self._stack.pop()
        raise StopIteration

    @property
    def exhausted(self) -> bool:
        return not self._stack

    @property
    def depth(self) -> int:
        """Number of live frames (0 once exhausted)."""
        return len(self._stack)

    @property
    def current_timestamp(self) -> Optional[datetime]:
        """Base timestamp of the innermost live frame, if any."""
        return self._stack[-1].base_ts if self._stack else None

    # --- helpers ---

    def _advance(self, frame: _DirFrame) -> Optional[_Frame]:
        """Open the next qualifying entry of `frame`'s walk, applying the error policy."""
        while True:
            try:
                entry = next_qualifying(frame.walk)
                if entry is None:
                    return None
                child = _open_frame(entry.path, entry.timestamp, self._cfg)
            except (OSError, Bi5Error) as exc:
                if self._cfg.on_error == "raise":
                    self._stack.clear()
                    raise
                if self._cfg.on_error == "skip":
                    logger.warning("Skipping unreadable entry under %s: %s", frame.path, exc)
                    continue
                logger.warning("Stopping traversal of %s: %s", frame.path, exc)
                self._stack.clear()
                return None

            frame.base_ts = entry.timestamp
            return child


def _open_file(path: str, base_ts: Optional[datetime], cfg: ReaderConfig) -> _FileFrame:
    buf = read_payload(path, lzma_format=cfg.lzma_format_id)
    logger.debug("Opened %s (%s): %d records", path, base_ts, len(buf) // TICK_SIZE)
    return _FileFrame(path, buf, base_ts)


def _open_frame(path: str, base_ts: Optional[datetime], cfg: ReaderConfig) -> _Frame:
    if os.path.isfile(path):
        return _open_file(path, base_ts, cfg)
    if os.path.isdir(path):
        walk = SortedWalk(path, follow_symlinks=cfg.follow_symlinks, max_depth=cfg.max_depth)
        return _DirFrame(path, walk, base_ts)
    raise SourceError(f"{path} must be file or dir")
