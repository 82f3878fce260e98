"""Per-thread context holding reusable scratch arenas."""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass

from engbase.mem import KILOBYTE, Arena

SCRATCH_SIZE = 16 * KILOBYTE


@dataclass(eq=False)
class Scratch:
    """A fixed-size scratch arena lent out by a thread context."""

    arena: Arena
    offset: int


class ThreadContext:
    """Owns a backing arena and a free list of scratch blocks."""

    def __init__(self) -> None:
        self.arena = Arena()
        self.max_created = 0
        self._free: list[Scratch] = []

    def scratch_get(self) -> Scratch:
        """Lend out a scratch block, reusing a returned one when possible."""
        if self._free:
            scratch = self._free.pop()
            scratch.arena.dealloc_to(0)
            return scratch
        offset = self.arena.alloc(SCRATCH_SIZE)
        self.max_created += 1
        return Scratch(Arena(SCRATCH_SIZE, static_size=True), offset)

    def scratch_reset(self, scratch: Scratch) -> None:
        """Discard everything allocated from ``scratch``."""
        scratch.arena.dealloc_to(0)

    def scratch_return(self, scratch: Scratch) -> None:
        """Give ``scratch`` back so later requests can reuse it."""
        self._free.append(scratch)

    @contextmanager
    def scratch(self) -> Iterator[Scratch]:
        """Borrow a scratch block for the duration of a ``with`` block."""
        block = self.scratch_get()
        try:
            yield block
        finally:
            self.scratch_return(block)


_local = threading.local()


def current_context() -> ThreadContext:
    """Return this thread's context, creating one on first use."""
    ctx = getattr(_local, "context", None)
    if ctx is None:
        ctx = ThreadContext()
        _local.context = ctx
    return ctx


def set_current_context(ctx: ThreadContext) -> None:
    """Make ``ctx`` the context of the calling thread."""
    _local.context = ctx