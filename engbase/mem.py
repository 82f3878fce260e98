"""Linear (arena) and pool allocators backed by growable byte buffers."""

from __future__ import annotations

from dataclasses import dataclass

KILOBYTE = 1024
GIGABYTE = 1024 * 1024 * 1024

DEFAULT_ALIGNMENT = 8
ARENA_MAX = GIGABYTE
ARENA_COMMIT_SIZE = 8 * KILOBYTE
POOL_MAX = GIGABYTE
POOL_COMMIT_CHUNK = 32


class OutOfMemoryError(MemoryError):
    """Raised when an arena or pool cannot satisfy an allocation."""


def is_power_of_two(x: int) -> bool:
    """Return True if ``x`` has at most one bit set (0 counts as true)."""
    return (x & (x - 1)) == 0


def align_forward(ptr: int, align: int) -> int:
    """Round ``ptr`` up to the next multiple of ``align`` (a power of two)."""
    if align <= 0 or not is_power_of_two(align):
        raise ValueError(f"alignment must be a positive power of two, got {align}")
    modulo = ptr & (align - 1)
    return ptr + (align - modulo) if modulo else ptr


class Arena:
    """A linear allocator handing out aligned offsets into one byte buffer.

    A growable arena commits memory in ``ARENA_COMMIT_SIZE`` steps; a static
    arena owns all of its memory up front and never grows.
    """

    def __init__(self, max_size: int = ARENA_MAX, static_size: bool = False) -> None:
        if max_size < 0:
            raise ValueError("max_size must not be negative")
        self.max_size = max_size
        self.static_size = static_size
        self.alloc_position = 0
        if static_size:
            self.memory = bytearray(max_size)
            self.commit_position = max_size
        else:
            self.memory = bytearray()
            self.commit_position = 0

    def alloc(self, size: int) -> int:
        """Reserve ``size`` bytes (rounded up to the alignment) and return their offset."""
        if size < 0:
            raise ValueError("size must not be negative")
        size = align_forward(size, DEFAULT_ALIGNMENT)
        if self.alloc_position + size > self.commit_position:
            if self.static_size:
                raise OutOfMemoryError("static-size arena is out of memory")
            if self.commit_position >= self.max_size:
                raise OutOfMemoryError("arena is out of memory")
            commit_size = -(-size // ARENA_COMMIT_SIZE) * ARENA_COMMIT_SIZE
            self.memory.extend(bytes(commit_size))
            self.commit_position += commit_size
        offset = self.alloc_position
        self.alloc_position += size
        return offset

    def alloc_zero(self, size: int) -> int:
        """Like :meth:`alloc`, but the first ``size`` bytes are zeroed."""
        offset = self.alloc(size)
        self.memory[offset:offset + size] = bytes(size)
        return offset

    def alloc_array(self, elem_size: int, count: int) -> int:
        """Reserve room for ``count`` elements of ``elem_size`` bytes."""
        return self.alloc(elem_size * count)

    def push(self, data: bytes) -> int:
        """Copy ``data`` into freshly allocated space and return its offset."""
        offset = self.alloc(len(data))
        self.memory[offset:offset + len(data)] = data
        return offset

    def dealloc(self, size: int) -> None:
        """Release the last ``size`` bytes, never going below the start."""
        self.alloc_position -= min(size, self.alloc_position)

    def dealloc_to(self, pos: int) -> None:
        """Move the allocation position to ``pos``, clamped to the arena bounds."""
        self.alloc_position = max(0, min(pos, self.max_size))

    def view(self, offset: int, size: int) -> bytes:
        """Return a copy of ``size`` bytes of committed memory at ``offset``."""
        if offset < 0 or size < 0 or offset + size > self.commit_position:
            raise IndexError("range lies outside committed memory")
        return bytes(self.memory[offset:offset + size])

    def clear(self) -> None:
        """Release every allocation."""
        self.dealloc(self.alloc_position)

    def begin_temp(self) -> ArenaTemp:
        """Remember the current position so it can be restored later."""
        return ArenaTemp(self, self.alloc_position)


@dataclass
class ArenaTemp:
    """A saved arena position; ending it frees everything allocated since."""

    arena: Arena
    pos: int

    def end(self) -> None:
        self.arena.dealloc_to(self.pos)

    def __enter__(self) -> ArenaTemp:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.end()


class Pool:
    """A fixed-size slot allocator with a LIFO free list.

    Slots are identified by their index; memory is committed
    ``POOL_COMMIT_CHUNK`` slots at a time.
    """

    def __init__(self, element_size: int) -> None:
        if element_size <= 0:
            raise ValueError("element_size must be positive")
        self.element_size = align_forward(element_size, DEFAULT_ALIGNMENT)
        self.max_size = POOL_MAX
        self.commit_position = 0
        self.memory = bytearray()
        self._free: list[int] = []

    @property
    def slot_count(self) -> int:
        """Number of slots committed so far."""
        return self.commit_position // self.element_size

    def alloc(self) -> int:
        """Take a slot from the free list, committing a new chunk if it is empty."""
        if not self._free:
            chunk = POOL_COMMIT_CHUNK * self.element_size
            if self.commit_position + chunk >= self.max_size:
                raise OutOfMemoryError("pool is out of memory")
            first = self.slot_count
            self.memory.extend(bytes(chunk))
            self.commit_position += chunk
            self.dealloc_range(first, POOL_COMMIT_CHUNK)
        return self._free.pop()

    def dealloc(self, slot: int) -> None:
        """Return ``slot`` to the pool; it is the next one handed out."""
        self._free.append(slot)

    def dealloc_range(self, start: int, count: int) -> None:
        """Return ``count`` consecutive slots starting at ``start``."""
        self._free.extend(range(start, start + count))

    def clear(self) -> None:
        """Mark every committed slot free; slot 0 is handed out first."""
        self._free = list(reversed(range(self.slot_count)))