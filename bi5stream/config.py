"""
Configuration schema for the tick reader.

Keep this lean: only the knobs the reader actually consults (mid-stream
error policy, LZMA container format, walk limits, logging).
"""

from __future__ import annotations

import lzma
import os
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

ErrorPolicy = Literal["stop", "skip", "raise"]
LzmaFormat = Literal["auto", "alone", "xz"]

_LZMA_FORMATS = {
    "auto": lzma.FORMAT_AUTO,
    "alone": lzma.FORMAT_ALONE,
    "xz": lzma.FORMAT_XZ,
}


class ReaderConfig(BaseModel):
    """
    Centralized, validated configuration for one traversal.
    Errors raised while *beginning* iteration always propagate; `on_error`
    governs only failures met after the first record has been handed out.
    """

    # === Traversal error policy ===
    on_error: ErrorPolicy = Field(
        default="stop",
        description="What a directory traversal does when a later file fails to open: "
        "'stop' ends the traversal, 'skip' moves to the next file, 'raise' propagates.",
    )

    # === Decompression ===
    lzma_format: LzmaFormat = Field(
        default="auto",
        description="LZMA container: legacy .lzma ('alone'), .xz, or autodetect.",
    )

    # === Directory walk ===
    follow_symlinks: bool = Field(
        default=False,
        description="Descend into symlinked directories during the walk.",
    )
    max_depth: Optional[int] = Field(
        default=None,
        ge=0,
        description="Deepest level the walk visits (the root directory is depth 0).",
    )

    # === Logging ===
    log_level: str = Field(default="INFO", description="Level for the package logger.")
    log_file: Optional[str] = Field(
        default=None,
        description="If set, also log to this file through a rotating handler.",
    )

    model_config = ConfigDict(frozen=True)

    @property
    def lzma_format_id(self) -> int:
        """The `lzma.FORMAT_*` constant for `lzma_format`."""
        return _LZMA_FORMATS[self.lzma_format]

    @classmethod
    def from_env(cls, **overrides) -> "ReaderConfig":
        """
        Build a config from BI5_* environment variables; keyword overrides win.

        Reads BI5_ON_ERROR, BI5_LZMA_FORMAT, BI5_FOLLOW_SYMLINKS, BI5_MAX_DEPTH,
        BI5_LOG_LEVEL and BI5_LOG_FILE. Unset or empty variables keep the default;
        pydantic coerces "true"/"0" and digit strings.
        """
        values = {
            "on_error": os.getenv("BI5_ON_ERROR"),
            "lzma_format": os.getenv("BI5_LZMA_FORMAT"),
            "log_level": os.getenv("BI5_LOG_LEVEL"),
            "log_file": os.getenv("BI5_LOG_FILE"),
            "follow_symlinks": os.getenv("BI5_FOLLOW_SYMLINKS"),
            "max_depth": os.getenv("BI5_MAX_DEPTH"),
        }
        values = {k: v for k, v in values.items() if v}
        values.update(overrides)
        return cls(**values)
