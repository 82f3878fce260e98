"""Packed timestamps, file path helpers and a per-frame arena."""

from __future__ import annotations

import os
from dataclasses import dataclass

from engbase.mem import Arena
from engbase.strutil import find_first, find_last, replace_all

_U32 = 0xFFFFFFFF
_U64 = 0xFFFFFFFFFFFFFFFF
_YEAR_BIAS = 0x8000


@dataclass
class DateTime:
    """A broken-down time; ``month`` and ``day`` are stored as given."""

    ms: int = 0
    sec: int = 0
    minute: int = 0
    hour: int = 0
    day: int = 0
    month: int = 0
    year: int = 0


def dense_time_from_datetime(dt: DateTime) -> int:
    """Pack ``dt`` into one 64-bit integer that sorts chronologically."""
    result = (dt.year + _YEAR_BIAS) & _U32
    for radix, part in ((12, dt.month), (31, dt.day), (24, dt.hour),
                        (60, dt.minute), (60, dt.sec), (1000, dt.ms)):
        result = result * radix + part
    return result & _U64


def datetime_from_dense_time(dense: int) -> DateTime:
    """Unpack a value produced by :func:`dense_time_from_datetime`."""
    dense, ms = divmod(dense, 1000)
    dense, sec = divmod(dense, 60)
    dense, minute = divmod(dense, 60)
    dense, hour = divmod(dense, 24)
    dense, day = divmod(dense, 31)
    dense, month = divmod(dense, 12)
    year = dense & _U32
    if year >= 1 << 31:
        year -= 1 << 32
    return DateTime(ms, sec, minute, hour, day, month, year - _YEAR_BIAS)


def _encode(path: str) -> bytes:
    return path.encode("utf-8", "surrogateescape")


def _decode(data: bytes) -> str:
    return data.decode("utf-8", "surrogateescape")


def fix_filepath(path: str) -> str:
    """Normalise separators to '/', drop '/./' and collapse '<dir>/..' parts."""
    fixed = replace_all(_encode(path), b"\\", b"/")
    fixed = replace_all(fixed, b"/./", b"/")
    while True:
        dotdot = find_first(fixed, b"..", 0)
        if dotdot == len(fixed):
            break
        if dotdot == 0:
            raise ValueError(f"path {path!r} climbs above its start")
        last_slash = find_last(fixed, b"/", dotdot - 1)
        span = dotdot + 3 - last_slash
        if span > len(fixed):
            raise ValueError(f"path {path!r} climbs above its start")
        fixed = (fixed[:last_slash] + fixed[dotdot + 3:])[:len(fixed) - span]
    return _decode(fixed)


def full_filepath(filename: str) -> str:
    """Join ``filename`` to the working directory and normalise the result."""
    return fix_filepath(os.getcwd() + "/" + filename)


def filename_from_filepath(path: str) -> str:
    """Return the part after the last separator.

    A path with no separator, or one ending in '/', is returned whole.
    """
    data = _encode(path)
    last_slash = find_last(data, b"/", 0)
    if last_slash == len(data):
        last_slash = 0
    elif last_slash == 0:
        last_slash = find_last(data, b"\\", 0)
    return _decode(data[last_slash:])


def directory_from_filepath(path: str) -> str:
    """Return the part before the last separator."""
    data = _encode(path)
    last_slash = find_last(data, b"/", 0)
    if last_slash == 0:
        last_slash = find_last(data, b"\\", 0)
    if last_slash == 0:
        raise ValueError(f"path {path!r} has no directory separator")
    return _decode(data[:last_slash - 1])


_frame_arena = Arena()


def frame_arena() -> Arena:
    """The arena whose contents live for one frame."""
    return _frame_arena


def reset_frame_arena() -> None:
    """Release everything allocated from the frame arena."""
    _frame_arena.dealloc_to(0)