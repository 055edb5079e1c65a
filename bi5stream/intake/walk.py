"""
Sorted, depth-first directory walk.

Enumerates every descendant of a root directory in pre-order (a directory
is yielded before its children). Siblings are ordered by the timestamp
their path resolves to; entries without one (directories, stray files)
sort as NO_TIMESTAMP, i.e. first, and ties fall back to a natural name
order so numeric directories like 2/10/11 come out chronologically.

The walk is a class rather than a generator so that an unreadable
subdirectory raises once from __next__ and the walk can still be resumed
with that subdirectory's siblings.
A directory already on the current path (a symlink back to an ancestor)
is yielded but not descended into.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from datetime import datetime
from typing import Iterator, List, Optional, Tuple

from .path_time import resolve_timestamp

logger = logging.getLogger(__name__)

# Sort-key stand-in for "no timestamp"; never handed out as a real value.
NO_TIMESTAMP = datetime.min


@dataclass(frozen=True)
class WalkEntry:
    """One entry met during the walk."""
    path: str
    name: str
    depth: int                     # root's children are depth 1
    is_dir: bool
    timestamp: Optional[datetime]  # resolved from the path; files only

    @property
    def qualifies(self) -> bool:
        """A regular file whose period start could be resolved."""
        return self.timestamp is not None


def sort_key(entry: WalkEntry) -> Tuple[datetime, Tuple[int, int, str]]:
    ts = entry.timestamp if entry.timestamp is not None else NO_TIMESTAMP
    return ts, _natural(entry.name)


def _natural(name: str) -> Tuple[int, int, str]:
    # all-digit names first, numerically; everything else by name
    if name.isascii() and name.isdigit():
        return 0, int(name), name
    return 1, 0, name


class SortedWalk:
    """
    Iterator over WalkEntry objects below `root`.

    Parameters
    ----------
    root : str | os.PathLike
        Directory to walk. It is listed immediately, so a missing or
        unreadable root raises from the constructor.
    follow_symlinks : bool
        Descend into symlinked directories.
    max_depth : Optional[int]
        Do not list directories deeper than this (root is depth 0).
    """

    def __init__(
        self,
        root: str | os.PathLike,
        *,
        follow_symlinks: bool = False,
        max_depth: Optional[int] = None,
    ) -> None:
        self._root = os.fspath(root)
        self._follow = bool(follow_symlinks)
        self._max_depth = max_depth
        self._pending: Optional[WalkEntry] = None
        # (children, (st_dev, st_ino)) for every directory on the current path
        self._stack: List[Tuple[Iterator[WalkEntry], Tuple[int, int]]] = []
        if self._may_descend(0):
            self._stack.append((iter(self._list_dir(self._root, 1)), _dir_key(self._root)))

    def __iter__(self) -> "SortedWalk":
        return self

    def __next__(self) -> WalkEntry:
        if self._pending is not None:
            # Clear first: if listing fails, the next pull resumes with siblings.
            entry, self._pending = self._pending, None
            key = _dir_key(entry.path)
            if any(key == k for _, k in self._stack):
                logger.warning("Not descending into %s: filesystem loop", entry.path)
            else:
                self._stack.append((iter(self._list_dir(entry.path, entry.depth + 1)), key))

        while self._stack:
            entry = next(self._stack[-1][0], None)
            if entry is None:
                self._stack.pop()
                continue
            if entry.is_dir and self._may_descend(entry.depth):
                self._pending = entry
            return entry
        raise StopIteration

    # --- helpers ---

    def _may_descend(self, depth: int) -> bool:
        return self._max_depth is None or depth < self._max_depth

    def _list_dir(self, path: str, depth: int) -> List[WalkEntry]:
        entries: List[WalkEntry] = []
        with os.scandir(path) as it:
            for de in it:
                is_dir = de.is_dir(follow_symlinks=self._follow)
                entries.append(
                    WalkEntry(
                        path=de.path,
                        name=de.name,
                        depth=depth,
                        is_dir=is_dir,
                        timestamp=None if is_dir else resolve_timestamp(de.path),
                    )
                )
        entries.sort(key=sort_key)
        return entries


def _dir_key(path: str) -> Tuple[int, int]:
    st = os.stat(path)
    return st.st_dev, st.st_ino


def next_qualifying(walk: Iterator[WalkEntry]) -> Optional[WalkEntry]:
    """
    Advance `walk` to the next regular file with a resolvable timestamp.
    Directories and unresolvable files are passed over silently.
    Returns None once the walk is exhausted; OSError from the walk propagates.
    """
    for entry in walk:
        if entry.qualifies:
            return entry
        if not entry.is_dir:
            logger.debug("Skipping %s: no timestamp in path", entry.path)
    return None
