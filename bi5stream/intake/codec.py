"""
Record codec: fixed-offset decoding of 20-byte big-endian tick records.

Wire layout (all big-endian):
  offset  size  field
  0       4     offset_ms  (u32)
  4       4     ask        (u32)
  8       4     bid        (u32)
  12      4     ask_size   (f32)
  16      4     bid_size   (f32)

This module does not decompress and does not check payload length; the
decompressor validates that before a buffer ever reaches the codec.
"""

from __future__ import annotations

import struct
from typing import Iterator, Optional, Tuple

import numpy as np

from ..dto import Tick

TICK_FORMAT = ">IIIff"
TICK_SIZE = struct.calcsize(TICK_FORMAT)  # 20

_TICK_STRUCT = struct.Struct(TICK_FORMAT)

# Same layout as TICK_FORMAT, for vectorised decoding of a whole payload.
TICK_DTYPE = np.dtype(
    [
        ("offset_ms", ">u4"),
        ("ask", ">u4"),
        ("bid", ">u4"),
        ("ask_size", ">f4"),
        ("bid_size", ">f4"),
    ]
)


def decode_tick(buf: bytes | bytearray | memoryview, pos: int = 0) -> Optional[Tuple[Tick, int]]:
    """
    Decode one Tick starting at `pos`.

    Returns (tick, new_pos) with new_pos == pos + TICK_SIZE, or None when
    fewer than TICK_SIZE bytes remain (end of data).
    """
    if len(buf) - pos < TICK_SIZE:
        return None
    offset_ms, ask, bid, ask_size, bid_size = _TICK_STRUCT.unpack_from(buf, pos)
    return Tick(offset_ms, ask, bid, ask_size, bid_size), pos + TICK_SIZE


def encode_tick(tick: Tick) -> bytes:
    """Pack a Tick into its 20-byte wire form."""
    return _TICK_STRUCT.pack(tick.offset_ms, tick.ask, tick.bid, tick.ask_size, tick.bid_size)


def iter_ticks(buf: bytes | bytearray | memoryview) -> Iterator[Tick]:
    """Yield every whole record in `buf`, in order."""
    pos = 0
    while True:
        decoded = decode_tick(buf, pos)
        if decoded is None:
            return
        tick, pos = decoded
        yield tick
