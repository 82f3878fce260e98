"""Game state and rules for a falling-block puzzle on a walled playfield."""

from __future__ import annotations

import random
from collections.abc import Iterator

FIELD_WIDTH = 12
FIELD_HEIGHT = 18
WALL = 9
EMPTY = 0
INITIAL_SPEED = 2.0
MIN_SPEED = 0.3
MAX_SPEED = 3.0
SPEED_STEP = 0.1

TETROMINOS = (
    "..X." "..X." "..X." "..X.",
    "..X." ".XX." ".X.." "....",
    ".X.." ".XX." "..X." "....",
    "...." ".XX." ".XX." "....",
    "..X." ".XX." "..X." "....",
    "...." ".XX." "..X." "..X.",
    "...." ".XX." ".X.." ".X..",
)


def index_with_rotate(x: int, y: int, r: int) -> int:
    """Index into a 4x4 piece string of cell ``(x, y)`` under rotation ``r``."""
    r %= 4
    if r == 0:
        return y * 4 + x
    if r == 1:
        return 12 + y - (x * 4)
    if r == 2:
        return 15 - (y * 4) - x
    return 3 - y + (x * 4)


def _clamp(lo: float, value: float, hi: float) -> float:
    return max(lo, min(value, hi))


class Tetris:
    """A playfield with walls on the sides and bottom, and one falling piece.

    ``field[y][x]`` holds 0 for an empty cell, ``WALL`` for the border and
    ``piece + 1`` for a locked block.
    """

    def __init__(self, width: int = FIELD_WIDTH, height: int = FIELD_HEIGHT,
                 rng: random.Random | None = None) -> None:
        if width < 3 or height < 2:
            raise ValueError("the field needs a width of at least 3 and a height of at least 2")
        self.width = width
        self.height = height
        self.rng = rng if rng is not None else random.Random()
        self.field: list[list[int]] = [
            [WALL if x in (0, width - 1) or y == height - 1 else EMPTY for x in range(width)]
            for y in range(height)
        ]
        self.game_over = False
        self.speed = INITIAL_SPEED
        self.speed_acc = 0.0
        self._spawn()

    def _spawn(self) -> None:
        self.piece = self.rng.randrange(len(TETROMINOS))
        self.rotation = 0
        self.x = self.width // 2 - 1
        self.y = 0

    def _in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def cell(self, x: int, y: int) -> int:
        """Value of the field cell at ``(x, y)``."""
        if not self._in_bounds(x, y):
            raise IndexError(f"cell ({x}, {y}) lies outside the field")
        return self.field[y][x]

    def _blocks(self, piece: int, rotation: int) -> Iterator[tuple[int, int]]:
        shape = TETROMINOS[piece]
        for py in range(4):
            for px in range(4):
                if shape[index_with_rotate(px, py, rotation)] == "X":
                    yield px, py

    def piece_fits(self, piece: int, rotation: int, pos_x: int, pos_y: int) -> bool:
        """True if ``piece`` placed at ``(pos_x, pos_y)`` overlaps no filled cell.

        Blocks that fall outside the field are not checked.
        """
        for px, py in self._blocks(piece, rotation):
            fx, fy = pos_x + px, pos_y + py
            if self._in_bounds(fx, fy) and self.field[fy][fx] != EMPTY:
                return False
        return True

    def _try_move(self, dx: int, dy: int, dr: int) -> bool:
        if not self.piece_fits(self.piece, self.rotation + dr, self.x + dx, self.y + dy):
            return False
        self.x += dx
        self.y += dy
        self.rotation += dr
        return True

    def move_left(self) -> bool:
        """Shift the piece one column left if it fits there."""
        return self._try_move(-1, 0, 0)

    def move_right(self) -> bool:
        """Shift the piece one column right if it fits there."""
        return self._try_move(1, 0, 0)

    def move_down(self) -> bool:
        """Drop the piece one row if it fits there."""
        return self._try_move(0, 1, 0)

    def rotate(self) -> bool:
        """Turn the piece a quarter if the turned piece fits."""
        return self._try_move(0, 0, 1)

    def _lock_piece(self) -> None:
        for x, y in self.piece_cells():
            if self._in_bounds(x, y):
                self.field[y][x] = self.piece + 1

    def _clear_lines(self) -> list[int]:
        cleared: list[int] = []
        for row in range(self.y, self.y + 4):
            if not 0 <= row < self.height - 1:
                continue
            interior = self.field[row][1:self.width - 1]
            if all(value != EMPTY for value in interior):
                self.field[row][1:self.width - 1] = [EMPTY] * (self.width - 2)
                cleared.append(row)
        for line in cleared:
            for row in range(line, 0, -1):
                self.field[row][1:self.width - 1] = self.field[row - 1][1:self.width - 1]
            self.field[0][1:self.width - 1] = [EMPTY] * (self.width - 2)
        return cleared

    def tick(self, dt: float) -> list[int]:
        """Advance time by ``dt`` seconds.

        Once the accumulated time reaches the fall interval the piece drops a
        row, or, if it cannot, locks into the field, full rows are cleared and
        a new piece appears. Returns the indices of the cleared rows.
        """
        if self.game_over:
            return []
        self.speed_acc += dt
        if self.speed_acc < self.speed:
            return []
        cleared: list[int] = []
        if not self.move_down():
            self._lock_piece()
            cleared = self._clear_lines()
            self._spawn()
            if not self.piece_fits(self.piece, self.rotation, self.x, self.y + 1):
                self.game_over = True
            else:
                self.speed = _clamp(MIN_SPEED, self.speed - SPEED_STEP, MAX_SPEED)
        self.speed_acc = 0.0
        return cleared

    def piece_cells(self) -> list[tuple[int, int]]:
        """Field coordinates of the falling piece's blocks."""
        return [(self.x + px, self.y + py) for px, py in self._blocks(self.piece, self.rotation)]