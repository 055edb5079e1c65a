"""
Tabular views of decoded ticks (pandas).

- ticks_to_frame(pairs)  -> DataFrame from any iterable of (base_ts, Tick)
- read_tick_frame(path)  -> DataFrame for one file, decoded in a single
                            numpy.frombuffer call instead of record by record

Columns: base_ts, offset_ms, ask, bid, ask_size, bid_size. Absolute times
are left to the caller (base_ts + offset_ms).
"""

from __future__ import annotations

import os
from datetime import datetime
from typing import Iterable, Optional

import numpy as np
import pandas as pd

from ..config import ReaderConfig
from ..dto import TimestampedTick
from ..errors import SourceError
from ..intake.codec import TICK_DTYPE
from ..intake.decompress import read_payload

COLUMNS = ["base_ts", "offset_ms", "ask", "bid", "ask_size", "bid_size"]


def ticks_to_frame(pairs: Iterable[TimestampedTick]) -> pd.DataFrame:
    """Materialize an iterable of (base_ts, Tick) pairs into a DataFrame."""
    rows = [
        (base_ts, t.offset_ms, t.ask, t.bid, t.ask_size, t.bid_size)
        for base_ts, t in pairs
    ]
    return _typed(pd.DataFrame(rows, columns=COLUMNS))


def read_tick_frame(
    path: str | os.PathLike,
    timestamp: Optional[datetime] = None,
    *,
    config: Optional[ReaderConfig] = None,
) -> pd.DataFrame:
    """
    Decode one tick file into a DataFrame.

    Raises SourceError if `path` is not a regular file; otherwise the same
    errors as read_payload.
    """
    cfg = config or ReaderConfig()
    if not os.path.isfile(path):
        raise SourceError(f"{os.fspath(path)} is not a file")

    buf = read_payload(path, lzma_format=cfg.lzma_format_id)
    arr = np.frombuffer(buf, dtype=TICK_DTYPE)

    frame = pd.DataFrame(
        {
            "base_ts": [timestamp] * len(arr),
            "offset_ms": arr["offset_ms"],
            "ask": arr["ask"],
            "bid": arr["bid"],
            "ask_size": arr["ask_size"],
            "bid_size": arr["bid_size"],
        },
        columns=COLUMNS,
    )
    return _typed(frame)


def _typed(frame: pd.DataFrame) -> pd.DataFrame:
    # native-endian, fixed widths regardless of how the frame was built
    return frame.astype(
        {
            "offset_ms": "uint32",
            "ask": "uint32",
            "bid": "uint32",
            "ask_size": "float32",
            "bid_size": "float32",
        }
    )
