"""
Payload validation.

Two checks, both cheap and side-effect free:
- `validate_payload`: the decompressed buffer is a whole number of records.
  This is the only integrity check the format offers (no checksum).
- `looks_like_lzma`: magic/header sniffing on a file before we spend CPU
  decompressing it.
"""

from __future__ import annotations

import os
from typing import Final

from ..errors import RecordFormatError
from .codec import TICK_SIZE

# .xz container
MAGIC_XZ: Final[bytes] = bytes.fromhex("fd 37 7a 58 5a 00".replace(" ", ""))

# Legacy .lzma ("alone") has no magic; its first byte is the lc/lp/pb
# properties byte, which must be < 9 * 5 * 5.
_LZMA_ALONE_MAX_PROPS: Final[int] = 9 * 5 * 5
_LZMA_ALONE_HEADER_LEN: Final[int] = 13


def validate_payload(buf: bytes | bytearray, path: str | None = None) -> None:
    """
    Raise RecordFormatError unless len(buf) is a multiple of TICK_SIZE.
    An empty buffer is valid (zero records).
    """
    if len(buf) % TICK_SIZE != 0:
        raise RecordFormatError(len(buf), TICK_SIZE, path)


def _read_head(path: str, n: int) -> bytes:
    with open(path, "rb") as f:
        return f.read(n)


def _looks_like_xz(head: bytes) -> bool:
    return len(head) >= len(MAGIC_XZ) and head[: len(MAGIC_XZ)] == MAGIC_XZ


def _looks_like_lzma_alone(head: bytes) -> bool:
    return len(head) >= _LZMA_ALONE_HEADER_LEN and head[0] < _LZMA_ALONE_MAX_PROPS


def looks_like_lzma(path: str | os.PathLike) -> bool:
    """
    Quick check that `path` plausibly holds an LZMA stream.

    Returns True for empty files (they decode to zero records), False if the
    header matches neither container. OSError from stat or read propagates.
    """
    st = os.stat(path)

    if st.st_size == 0:
        return True

    head = _read_head(os.fspath(path), 16)
    return _looks_like_xz(head) or _looks_like_lzma_alone(head)
