"""
Exception types raised by the reader.

Everything derives from Bi5Error so callers can catch the whole family;
the extra bases (OSError, ValueError) keep the usual stdlib handling working.
"""

from __future__ import annotations


class Bi5Error(Exception):
    """Base class for all reader errors."""


class SourceError(Bi5Error, OSError):
    """Path does not exist or is neither a regular file nor a directory."""


class DecompressionError(Bi5Error):
    """The compressed stream is malformed or truncated."""


class RecordFormatError(Bi5Error, ValueError):
    """Decompressed payload length is not a whole number of records."""

    def __init__(self, length: int, record_size: int, path: str | None = None) -> None:
        self.length = int(length)
        self.record_size = int(record_size)
        self.path = path
        where = f" in {path}" if path else ""
        super().__init__(
            f"Decompressed buffer length {self.length} is not a multiple of {self.record_size}{where}"
        )
