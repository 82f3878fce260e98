"""Arenas, pools, string helpers, tables, vector math and a tetris model for small engines."""

__version__ = "0.1.0"
__all__ = ["mem", "tctx", "strutil", "ds", "utils", "vmath", "tetris"]