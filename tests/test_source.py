from __future__ import annotations

from datetime import datetime

import pytest

from bi5stream import Bi5Source, ReaderConfig, SourceError, Tick, read_tick_file
from bi5stream.ports import TickSourcePort

from conftest import make_rows, tick_of


def test_is_file(tmp_path, write_bi5) -> None:
    p = write_bi5(tmp_path / "one.bi5", make_rows(1))
    assert Bi5Source(p).is_file()
    assert not Bi5Source(tmp_path).is_file()
    assert not Bi5Source(tmp_path / "missing").is_file()


def test_construction_does_no_io(tmp_path) -> None:
    src = Bi5Source(tmp_path / "missing")
    with pytest.raises(SourceError):
        src.iter()


def test_each_iter_call_starts_a_fresh_traversal(tmp_path, write_bi5) -> None:
    src = Bi5Source(write_bi5(tmp_path / "one.bi5", make_rows(4)), datetime(2020, 5, 5, 5))
    first = list(src.iter())
    second = list(src)
    assert first == second
    assert len(first) == 4


def test_timestamp_ignored_for_directories(hour_file) -> None:
    p = hour_file(datetime(2020, 1, 15, 7), make_rows(2))
    src = Bi5Source(p.parents[3], timestamp=datetime(1999, 1, 1))
    assert {ts for ts, _ in src} == {datetime(2020, 1, 15, 7)}


def test_read_tick_file_returns_plain_ticks(tmp_path, write_bi5) -> None:
    rows = make_rows(6)
    ticks = read_tick_file(write_bi5(tmp_path / "one.bi5", rows))
    assert ticks == [tick_of(r) for r in rows]
    assert all(isinstance(t, Tick) for t in ticks)


def test_source_satisfies_port(tmp_path) -> None:
    def consume(src: TickSourcePort) -> bool:
        return src.is_file()

    assert consume(Bi5Source(tmp_path, config=ReaderConfig(on_error="skip"))) is False
