"""
Compressed tick-file opener.

Provides `open_tick_file(path)`, a context manager yielding the raw binary
stream, and `decompress_stream(stream)`, which turns that stream into the
whole decompressed payload. `read_payload(path)` glues the two together and
applies the record-length check.

This module does not decode records; it only handles decompression.
"""

from __future__ import annotations

import logging
import lzma
import os
from contextlib import contextmanager
from typing import IO, Generator

from ..errors import DecompressionError
from .validator import looks_like_lzma, validate_payload

logger = logging.getLogger(__name__)


@contextmanager
def open_tick_file(path: str | os.PathLike) -> Generator[IO[bytes], None, None]:
    """
    Context manager yielding a readable binary stream for `path`.
    OSError from open() propagates unchanged.
    """
    f = open(path, "rb")
    try:
        yield f
    finally:
        f.close()


def decompress_stream(stream: IO[bytes], *, lzma_format: int = lzma.FORMAT_AUTO) -> bytes:
    """
    Read `stream` to the end and return its decompressed bytes.

    A zero-length stream yields b"" without touching the decompressor, so an
    empty file is distinguishable from a truncated one.
    """
    raw = stream.read()
    if not raw:
        return b""
    try:
        return lzma.decompress(raw, format=lzma_format)
    except (lzma.LZMAError, EOFError) as exc:
        raise DecompressionError(f"LZMA decompression failed: {exc}") from exc


def read_payload(path: str | os.PathLike, *, lzma_format: int = lzma.FORMAT_AUTO) -> bytes:
    """
    Decompress one tick file and validate its length.

    Raises
    ------
    OSError
        The file cannot be opened or read.
    DecompressionError
        The file is not a valid LZMA stream.
    RecordFormatError
        The payload is not a whole number of records.
    """
    path = os.fspath(path)
    if os.path.isfile(path) and not looks_like_lzma(path):
        raise DecompressionError(f"{path} does not look like an LZMA stream")

    with open_tick_file(path) as f:
        try:
            buf = decompress_stream(f, lzma_format=lzma_format)
        except DecompressionError as exc:
            raise DecompressionError(f"{path}: {exc}") from exc

    validate_payload(buf, path)
    logger.debug("Decompressed %s: %d bytes", path, len(buf))
    return buf
