"""
Timestamp inference from the on-disk layout.

Tick files are stored as:
  <root>/<YYYY>/<MM0>/<DD>/<HH>h_ticks.bi5

where MM0 is the ZERO-BASED month (0 = January) and only the first two
characters of the file name are read, as the hour. Nothing else about the
name is interpreted.

This is a best-effort convention, not a schema: any mismatch yields None,
never an exception.
"""

from __future__ import annotations

import os
from datetime import datetime
from pathlib import PurePath
from typing import Optional


def resolve_timestamp(path: str | os.PathLike) -> Optional[datetime]:
    """
    Return the period start encoded in `path`, or None.

    None when: `path` is not a regular file, fewer than four segments are
    available, a segment is not an integer, or the combination is not a
    valid calendar date/time (e.g. April 31st, hour 24).
    """
    if not os.path.isfile(path):
        return None
    return timestamp_from_parts(PurePath(path).parts)


def timestamp_from_parts(parts) -> Optional[datetime]:
    """Pure half of resolve_timestamp: interpret the last four path segments."""
    if len(parts) < 4:
        return None
    year_s, month_s, day_s, name = parts[-4:]
    if len(name) < 2:
        return None

    hour = _parse_uint(name[:2])
    day = _parse_uint(day_s)
    month0 = _parse_uint(month_s)
    year = _parse_uint(year_s)
    if hour is None or day is None or month0 is None or year is None:
        return None

    try:
        return datetime(year, month0 + 1, day, hour)
    except (ValueError, OverflowError):
        return None


def _parse_uint(s: str) -> Optional[int]:
    """Unsigned decimal integer, optionally '+'-prefixed; anything else is None."""
    if s.startswith("+"):
        s = s[1:]
    if not s or not (s.isascii() and s.isdigit()):
        return None
    return int(s)
