"""Byte-string search, hashing, UTF-8/UTF-16 transcoding and string lists."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

FNV_OFFSET_BASIS = 2166136261
FNV_PRIME = 16777619
REPLACEMENT = ord("#")

_UTF8_LENGTH = (
    1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1,
    0, 0, 0, 0, 0, 0, 0, 0,
    2, 2, 2, 2,
    3, 3,
    4,
    0,
)
_UTF8_FIRST_BYTE_MASK = (0, 0x7F, 0x1F, 0x0F, 0x07)
_UTF8_FINAL_SHIFT = (0, 18, 12, 6, 0)


def find_first(text: bytes, needle: bytes, offset: int = 0) -> int:
    """Index of the first ``needle`` at or after ``offset``, or ``len(text)``.

    An empty needle is found at index 0.
    """
    if not needle:
        return 0
    if len(text) < len(needle):
        return len(text)
    index = text.find(needle, offset)
    return len(text) if index < 0 else index


def substr_count(text: bytes, needle: bytes) -> int:
    """Count occurrences of ``needle``, overlapping ones included."""
    if not needle:
        raise ValueError("needle must not be empty")
    count = 0
    index = find_first(text, needle, 0)
    while index != len(text):
        count += 1
        index = find_first(text, needle, index + 1)
    return count


def find_last(text: bytes, needle: bytes, offset: int = 0) -> int:
    """Position just past the start of the last ``needle`` found before ``offset``.

    An ``offset`` of 0 means the whole text. Returns 0 when nothing is found.
    """
    if not needle:
        raise ValueError("needle must not be empty")
    if offset == 0:
        offset = len(text)
    index = 0
    while True:
        previous = index
        index = find_first(text, needle, index)
        if index >= offset:
            return previous
        index += 1


def replace_all(text: bytes, needle: bytes, replacement: bytes) -> bytes:
    """Replace every non-overlapping ``needle``, scanning left to right."""
    if not needle:
        return text
    return text.replace(needle, replacement)


def str_hash(data: bytes) -> int:
    """32-bit FNV-1a hash."""
    h = FNV_OFFSET_BASIS
    for byte in data:
        h = ((h ^ byte) * FNV_PRIME) & 0xFFFFFFFF
    return h


def str_hash_64(data: bytes) -> int:
    """FNV-1a with the 32-bit constants carried in 64-bit arithmetic."""
    h = FNV_OFFSET_BASIS
    for byte in data:
        h = ((h ^ byte) * FNV_PRIME) & 0xFFFFFFFFFFFFFFFF
    return h


def decode_utf8(data: bytes) -> tuple[int, int]:
    """Decode one code point from the front of ``data``.

    Returns ``(codepoint, bytes_used)``; ``(0, 0)`` for empty input and
    ``('#', 1)`` for an invalid or truncated sequence.
    """
    if not data:
        return 0, 0
    first = data[0]
    length = _UTF8_LENGTH[first >> 3]
    if not 0 < length <= len(data):
        return REPLACEMENT, 1
    cp = (first & _UTF8_FIRST_BYTE_MASK[length]) << 18
    if length >= 4:
        cp |= data[3] & 0x3F
    if length >= 3:
        cp |= (data[2] & 0x3F) << 6
    if length >= 2:
        cp |= (data[1] & 0x3F) << 12
    return cp >> _UTF8_FINAL_SHIFT[length], length


def encode_utf8(codepoint: int) -> bytes:
    """Encode one code point; anything below 256 is written as a single byte."""
    if codepoint < 1 << 8:
        return bytes((codepoint,))
    if codepoint < 1 << 11:
        return bytes((0xC0 | (codepoint >> 6), 0x80 | (codepoint & 0x3F)))
    if codepoint < 1 << 16:
        return bytes((
            0xE0 | (codepoint >> 12),
            0x80 | ((codepoint >> 6) & 0x3F),
            0x80 | (codepoint & 0x3F),
        ))
    if codepoint < 1 << 21:
        return bytes((
            0xF0 | (codepoint >> 18),
            0x80 | ((codepoint >> 12) & 0x3F),
            0x80 | ((codepoint >> 6) & 0x3F),
            0x80 | (codepoint & 0x3F),
        ))
    return bytes((REPLACEMENT,))


def decode_utf16(units: list[int] | tuple[int, ...]) -> tuple[int, int]:
    """Decode one code point from 16-bit units; returns ``(codepoint, units_used)``."""
    if not units:
        return 0, 0
    x = units[0]
    if x < 0xD800 or x > 0xDFFF:
        return x, 1
    if len(units) >= 2:
        y = units[1]
        if 0xD800 <= x < 0xDC00 and 0xDC00 <= y < 0xE000:
            return (((x - 0xD800) << 10) | (y - 0xDC00)) + 0x10000, 2
    return REPLACEMENT, 1


def encode_utf16(codepoint: int) -> tuple[int, ...]:
    """Encode one code point as one unit or a surrogate pair."""
    if codepoint < 0x10000:
        return (codepoint,)
    offset = codepoint - 0x10000
    return (((offset >> 10) + 0xD800) & 0xFFFF, (offset & 0x3FF) + 0xDC00)


def str16_from_str8(data: bytes) -> list[int]:
    """Transcode UTF-8 bytes to a list of UTF-16 units."""
    units: list[int] = []
    pos = 0
    while pos < len(data):
        codepoint, used = decode_utf8(data[pos:pos + 4])
        units.extend(encode_utf16(codepoint))
        pos += used
    return units


def str8_from_str16(units: list[int] | tuple[int, ...]) -> bytes:
    """Transcode UTF-16 units to UTF-8 bytes."""
    out = bytearray()
    pos = 0
    while pos < len(units):
        codepoint, used = decode_utf16(units[pos:pos + 2])
        out += encode_utf8(codepoint)
        pos += used
    return bytes(out)


class StringList:
    """An append-only list of byte strings that tracks its total size."""

    def __init__(self, items: Iterable[bytes] = ()) -> None:
        self._items: list[bytes] = []
        self.total_size = 0
        for item in items:
            self.push(item)

    def push(self, item: bytes) -> None:
        self._items.append(item)
        self.total_size += len(item)

    def contains(self, needle: bytes) -> bool:
        return needle in self._items

    def flatten(self) -> bytes:
        """Concatenate every item in order."""
        return b"".join(self._items)

    def __iter__(self) -> Iterator[bytes]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StringList):
            return NotImplemented
        return (
            self.total_size == other.total_size
            and len(self) == len(other)
            and self._items == other._items
        )

    def __repr__(self) -> str:
        return f"StringList({self._items!r})"