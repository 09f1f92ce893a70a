"""Terminal output helpers and small random and layout utilities."""

from __future__ import annotations

import random
import sys
from collections.abc import Sequence
from typing import Optional, TextIO

from snakegame.models import EMPTY, Coord

_CSI = "\x1b["

LOGO_LINES = (
    "    Welcome to Snake Game!   ",
    "*****************************",
    "                             ",
    "                             ",
)


class Console:
    """Writes text and cursor control sequences to a terminal stream."""

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self.stream = stream if stream is not None else sys.stdout

    def _emit(self, text: str) -> None:
        self.stream.write(text)
        self.stream.flush()

    def clear(self) -> None:
        self._emit(f"{_CSI}2J")

    def move_to_column(self, col: int) -> None:
        self._emit(f"{_CSI}{col + 1}G")

    def move_to_row(self, row: int) -> None:
        self._emit(f"{_CSI}{row + 1}d")

    def write(self, text: str) -> None:
        self._emit(text)

    def newline(self) -> None:
        self._emit("\n")

    def empty_lines(self, amount: int) -> None:
        self._emit("\n" * amount)

    def show_cursor(self, show: bool) -> None:
        self._emit(f"{_CSI}?25h" if show else f"{_CSI}?25l")

    def render_logo(self, offset_left: int) -> None:
        for line in LOGO_LINES:
            self.newline()
            self.move_to_column(offset_left)
            self.write(line)


def random_int(low: int, high: int) -> int:
    """Return a random integer in the half-open range [low, high)."""
    return random.randrange(low, high)


def random_free_cell(grid: Sequence[Sequence[int]]) -> Coord:
    """Pick a random empty cell of the grid."""
    free = [
        (i, j)
        for i, row in enumerate(grid)
        for j, value in enumerate(row)
        if value == EMPTY
    ]
    if not free:
        raise ValueError("grid has no free cell")
    return free[random_int(0, len(free))]


def view_offset(
    view_width: int, view_height: int, columns: int, rows: int
) -> tuple[int, int]:
    """Offsets that centre a view of the given size in a terminal."""
    return max(columns - view_width, 0) // 2, max(rows - view_height, 0) // 2