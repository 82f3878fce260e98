from pathlib import Path

import pytest
from hypothesis import given
from hypothesis import strategies as st

from engbase.utils import (
    DateTime,
    datetime_from_dense_time,
    dense_time_from_datetime,
    directory_from_filepath,
    filename_from_filepath,
    fix_filepath,
    frame_arena,
    full_filepath,
    reset_frame_arena,
)

datetimes = st.builds(
    DateTime,
    ms=st.integers(0, 999),
    sec=st.integers(0, 59),
    minute=st.integers(0, 59),
    hour=st.integers(0, 23),
    day=st.integers(0, 30),
    month=st.integers(0, 11),
    year=st.integers(-0x8000, 100000),
)


@given(datetimes)
def test_dense_time_round_trip(dt):
    assert datetime_from_dense_time(dense_time_from_datetime(dt)) == dt


@given(datetimes, datetimes)
def test_dense_time_preserves_order(a, b):
    key = lambda d: (d.year, d.month, d.day, d.hour, d.minute, d.sec, d.ms)
    assert (key(a) < key(b)) == (dense_time_from_datetime(a) < dense_time_from_datetime(b))


def test_earliest_year_packs_to_zero():
    assert dense_time_from_datetime(DateTime(year=-0x8000)) == 0
    assert datetime_from_dense_time(0) == DateTime(year=-0x8000)


def test_fix_filepath_converts_backslashes():
    assert fix_filepath("a\\b\\c") == "a/b/c"


def test_fix_filepath_drops_current_dir():
    assert fix_filepath("a/./b") == fix_filepath("a/b") == "a/b"


def test_fix_filepath_collapses_parent():
    assert fix_filepath("a/b/../c") == "a/c"
    assert fix_filepath("/x/y/../z") == "/x/z"


def test_fix_filepath_rejects_climbing_out():
    with pytest.raises(ValueError):
        fix_filepath("../x")


def test_full_filepath_uses_cwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    result = full_filepath("notes.txt")
    assert result.endswith("/notes.txt")
    assert Path(result).parent.samefile(tmp_path)


def test_filename_from_filepath():
    assert filename_from_filepath("dir/sub/file.txt") == "file.txt"
    assert filename_from_filepath("dir\\file.txt") == "file.txt"
    assert filename_from_filepath("plain.txt") == "plain.txt"


def test_directory_from_filepath():
    assert directory_from_filepath("dir/sub/file.txt") == "dir/sub"
    assert directory_from_filepath("dir\\file.txt") == "dir"


def test_directory_from_filepath_without_separator():
    with pytest.raises(ValueError):
        directory_from_filepath("file.txt")


def test_frame_arena_reset():
    arena = frame_arena()
    arena.alloc(100)
    assert arena.alloc_position > 0
    reset_frame_arena()
    assert frame_arena() is arena
    assert arena.alloc_position == 0