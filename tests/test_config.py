from __future__ import annotations

import logging
import lzma

import pytest
from pydantic import ValidationError

from bi5stream.config import ReaderConfig
from bi5stream.utils import LOGGER_NAME, init_logging


def test_defaults() -> None:
    cfg = ReaderConfig()
    assert cfg.on_error == "stop"
    assert cfg.lzma_format_id == lzma.FORMAT_AUTO
    assert cfg.follow_symlinks is False
    assert cfg.max_depth is None


def test_lzma_format_mapping() -> None:
    assert ReaderConfig(lzma_format="alone").lzma_format_id == lzma.FORMAT_ALONE
    assert ReaderConfig(lzma_format="xz").lzma_format_id == lzma.FORMAT_XZ


def test_invalid_values_rejected() -> None:
    with pytest.raises(ValidationError):
        ReaderConfig(on_error="ignore")
    with pytest.raises(ValidationError):
        ReaderConfig(max_depth=-1)


def test_frozen() -> None:
    cfg = ReaderConfig()
    with pytest.raises((TypeError, ValueError)):
        cfg.on_error = "skip"


def test_from_env(monkeypatch) -> None:
    monkeypatch.setenv("BI5_ON_ERROR", "skip")
    monkeypatch.setenv("BI5_LOG_LEVEL", "DEBUG")
    monkeypatch.delenv("BI5_LZMA_FORMAT", raising=False)
    monkeypatch.delenv("BI5_LOG_FILE", raising=False)
    monkeypatch.delenv("BI5_FOLLOW_SYMLINKS", raising=False)
    monkeypatch.delenv("BI5_MAX_DEPTH", raising=False)

    cfg = ReaderConfig.from_env(max_depth=6)
    assert cfg.on_error == "skip"
    assert cfg.log_level == "DEBUG"
    assert cfg.lzma_format == "auto"
    assert cfg.max_depth == 6

    assert ReaderConfig.from_env(on_error="raise").on_error == "raise"


def test_init_logging_is_idempotent(tmp_path, reset_package_logger) -> None:
    log_file = tmp_path / "logs" / "bi5.log"
    cfg = ReaderConfig(log_level="debug", log_file=str(log_file))

    init_logging(cfg)
    logger = init_logging(cfg)

    assert logger.name == LOGGER_NAME
    assert logger.level == logging.DEBUG
    assert logger.propagate is False
    assert len(logger.handlers) == 2

    logging.getLogger("bi5stream.pipeline.iterator").debug("hello %s", "file")
    for h in logger.handlers:
        h.flush()
    assert "hello file" in log_file.read_text()


def test_init_logging_console_only(reset_package_logger) -> None:
    logger = init_logging(ReaderConfig(log_level="WARNING"))
    assert logger.level == logging.WARNING
    assert len(logger.handlers) == 1


def test_model_config_is_frozen() -> None:
    assert ReaderConfig.model_config["frozen"] is True


def test_from_env_walk_settings(monkeypatch) -> None:
    monkeypatch.setenv("BI5_FOLLOW_SYMLINKS", "true")
    monkeypatch.setenv("BI5_MAX_DEPTH", "4")

    cfg = ReaderConfig.from_env()
    assert cfg.follow_symlinks is True
    assert cfg.max_depth == 4

    monkeypatch.setenv("BI5_MAX_DEPTH", "-2")
    with pytest.raises(ValidationError):
        ReaderConfig.from_env()
