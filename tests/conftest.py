from __future__ import annotations

import lzma
import logging
import struct
from datetime import datetime
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

import pytest

from bi5stream.dto import Tick

_FMT = ">IIIff"

TickRow = Tuple[int, int, int, float, float]  # offset_ms, ask, bid, ask_size, bid_size


def pack_rows(rows: Iterable[TickRow]) -> bytes:
    return b"".join(struct.pack(_FMT, *row) for row in rows)


def make_rows(n: int, *, start_ms: int = 0, ask: int = 133153, bid: int = 133117) -> List[TickRow]:
    return [(start_ms + i * 100, ask + i, bid + i, 0.015, 0.02) for i in range(n)]


def as_f32(x: float) -> float:
    return struct.unpack(">f", struct.pack(">f", x))[0]


@pytest.fixture
def write_bi5() -> Callable[..., Path]:
    """Factory: write rows (or raw payload bytes) as an LZMA-alone file, creating parents."""

    def _write(
        path: Path,
        rows: Sequence[TickRow] = (),
        *,
        payload: Optional[bytes] = None,
        fmt: int = lzma.FORMAT_ALONE,
    ) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        data = payload if payload is not None else pack_rows(rows)
        path.write_bytes(lzma.compress(data, format=fmt))
        return path

    return _write


@pytest.fixture
def hour_file(tmp_path: Path, write_bi5) -> Callable[..., Path]:
    """Factory: write rows under <tmp>/<root>/YYYY/MM0/DD/HHh_ticks.bi5 for a calendar datetime."""

    def _hour(dt: datetime, rows: Sequence[TickRow] = (), *, root: str = "ticks", **kw) -> Path:
        p = tmp_path / root / str(dt.year) / str(dt.month - 1) / f"{dt.day:02d}" / f"{dt.hour:02d}h_ticks.bi5"
        return write_bi5(p, rows, **kw)

    return _hour


@pytest.fixture
def reset_package_logger():
    """Undo init_logging so later tests see records through caplog again."""
    yield
    logger = logging.getLogger("bi5stream")
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


def tick_of(row: TickRow) -> Tick:
    offset_ms, ask, bid, ask_size, bid_size = row
    return Tick(offset_ms, ask, bid, as_f32(ask_size), as_f32(bid_size))
