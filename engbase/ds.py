"""Stack, open-addressing hash table and fixed-slot chained hash table."""

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterator
from typing import Any

from engbase.strutil import str_hash

HASH_TABLE_MAX_LOAD = 0.75
_EMPTY = object()


def _double_capacity(cap: int) -> int:
    return 8 if cap <= 0 else cap * 2


def _default_hash(key: Hashable) -> int:
    """FNV-1a for byte and text keys, the built-in hash for anything else."""
    if isinstance(key, (bytes, bytearray)):
        return str_hash(bytes(key))
    if isinstance(key, str):
        return str_hash(key.encode("utf-8"))
    return hash(key)


class Stack:
    """A LIFO stack; popping or peeking an empty stack yields ``default``."""

    def __init__(self, default: Any = None) -> None:
        self.default = default
        self._items: list[Any] = []

    def push(self, item: Any) -> None:
        self._items.append(item)

    def pop(self) -> Any:
        return self._items.pop() if self._items else self.default

    def peek(self) -> Any:
        return self._items[-1] if self._items else self.default

    def clear(self) -> None:
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)


class HashTable:
    """Open-addressing hash table with linear probing and tombstones.

    The table grows (8 slots first, then doubling) when filled slots,
    tombstones included, would exceed three quarters of the capacity.
    Deleted slots hold ``tombstone`` and are reused by later insertions.
    """

    def __init__(
        self,
        hash_key: Callable[[Any], int] | None = None,
        tombstone: Any = None,
    ) -> None:
        self._hash_key = hash_key or _default_hash
        self._tombstone = object() if tombstone is None else tombstone
        self._slots: list[list[Any]] = []
        self._used = 0
        self._count = 0

    def _find_slot(self, slots: list[list[Any]], key: Any) -> list[Any]:
        cap = len(slots)
        index = self._hash_key(key) % cap
        tombstone = None
        while True:
            entry = slots[index]
            if entry[0] is _EMPTY:
                if entry[1] is _EMPTY:
                    return tombstone if tombstone is not None else entry
                if tombstone is None:
                    tombstone = entry
            elif entry[0] == key:
                return entry
            index = (index + 1) % cap

    def _adjust_capacity(self, cap: int) -> None:
        slots = [[_EMPTY, _EMPTY] for _ in range(cap)]
        live = 0
        for key, value in self._slots:
            if key is _EMPTY:
                continue
            dest = self._find_slot(slots, key)
            dest[0] = key
            dest[1] = value
            live += 1
        self._slots = slots
        self._used = live
        self._count = live

    def _lookup(self, key: Any) -> list[Any] | None:
        if key is None or not self._slots:
            return None
        entry = self._find_slot(self._slots, key)
        return None if entry[0] is _EMPTY else entry

    def set(self, key: Any, value: Any) -> bool:
        """Store ``value`` under ``key``; return True if the key was new."""
        if key is None:
            raise ValueError("hash table keys must not be None")
        if self._used + 1 > len(self._slots) * HASH_TABLE_MAX_LOAD:
            self._adjust_capacity(_double_capacity(len(self._slots)))
        entry = self._find_slot(self._slots, key)
        is_new_key = entry[0] is _EMPTY
        if is_new_key:
            if entry[1] is _EMPTY:
                self._used += 1
            self._count += 1
        entry[0] = key
        entry[1] = value
        return is_new_key

    def get(self, key: Any, default: Any = None) -> Any:
        """Return the value stored under ``key``, or ``default``."""
        entry = self._lookup(key)
        return default if entry is None else entry[1]

    def get_or_create(self, key: Any, factory: Callable[[], Any] = lambda: None) -> Any:
        """Return the value under ``key``, storing ``factory()`` first if absent."""
        entry = self._lookup(key)
        if entry is not None:
            return entry[1]
        value = factory()
        self.set(key, value)
        return value

    def delete(self, key: Any) -> bool:
        """Remove ``key``; return True if it was present."""
        entry = self._lookup(key)
        if entry is None:
            return False
        entry[0] = _EMPTY
        entry[1] = self._tombstone
        self._count -= 1
        return True

    def add_all(self, other: HashTable) -> None:
        """Copy every entry of ``other`` into this table."""
        for key, value in other._slots:
            if key is not _EMPTY:
                self.set(key, value)

    def capacity(self) -> int:
        """Number of slots currently allocated."""
        return len(self._slots)

    def __len__(self) -> int:
        return self._count

    def __contains__(self, key: object) -> bool:
        return self._lookup(key) is not None

    def __iter__(self) -> Iterator[Any]:
        return (key for key, _ in self._slots if key is not _EMPTY)


class StableTable:
    """A hash table with a fixed number of chained buckets.

    It never rehashes, so a value object stays where it was stored for as
    long as its key is present.
    """

    def __init__(self, num_slots: int, hash_key: Callable[[Any], int] | None = None) -> None:
        if num_slots <= 0:
            raise ValueError("num_slots must be positive")
        self.num_slots = num_slots
        self._hash_key = hash_key or _default_hash
        self._buckets: list[list[list[Any]]] = [[] for _ in range(num_slots)]

    def _bucket(self, key: Any) -> list[list[Any]]:
        return self._buckets[self._hash_key(key) % self.num_slots]

    def _entry(self, key: Any) -> list[Any] | None:
        return next((e for e in self._bucket(key) if e[0] == key), None)

    def get(self, key: Any) -> Any:
        """Return the value under ``key``, or None if it is absent."""
        entry = self._entry(key)
        return None if entry is None else entry[1]

    def get_guarantee(self, key: Any, factory: Callable[[], Any] = lambda: None) -> Any:
        """Return the value under ``key``, creating it with ``factory()`` if absent."""
        entry = self._entry(key)
        if entry is None:
            entry = [key, factory()]
            self._bucket(key).append(entry)
        return entry[1]

    def set(self, key: Any, value: Any) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""
        entry = self._entry(key)
        if entry is None:
            self._bucket(key).append([key, value])
        else:
            entry[1] = value

    def delete(self, key: Any) -> bool:
        """Remove ``key``; return True if it was present."""
        bucket = self._bucket(key)
        for position, entry in enumerate(bucket):
            if entry[0] == key:
                del bucket[position]
                return True
        return False

    def __contains__(self, key: object) -> bool:
        return self._entry(key) is not None