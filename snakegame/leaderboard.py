"""Persistent list of the best scores and its screen."""

from __future__ import annotations

import re
from collections.abc import Iterable
from pathlib import Path
from typing import Optional, Union

from snakegame.models import SCREEN_SIZE, Key, Screen, State
from snakegame.utils import Console

DEFAULT_PATH = "leaderboard.txt"
MAX_RECORDS = 10

_NUMBER = re.compile(r"\+?[0-9]+")
_MAX_SCORE = 2**64

PathLike = Union[str, Path]

_NO_RECORDS = (
    "There are no records set..",
    "Play Snake to set new scores",
)


def _parse(line: str) -> Optional[int]:
    text = line.strip()
    if not _NUMBER.fullmatch(text):
        return None
    value = int(text)
    return value if value < _MAX_SCORE else None


def load_leaderboard(path: PathLike = DEFAULT_PATH) -> list[int]:
    """Read the stored scores, best first, skipping lines that are not scores."""
    content = Path(path).read_text(encoding="utf-8")
    records = [v for v in map(_parse, content.splitlines()) if v is not None]
    return sorted(records, reverse=True)


def save_leaderboard(records: Iterable[int], path: PathLike = DEFAULT_PATH) -> None:
    """Write the scores, one per line."""
    Path(path).write_text("\n".join(str(r) for r in records), encoding="utf-8")


def check_if_new_record(state: State, score: int, path: PathLike = DEFAULT_PATH) -> None:
    """Store the score if it earns a place among the best ones."""
    top = load_leaderboard(path)
    is_new_record = not top or len(top) < MAX_RECORDS or score > top[-1]

    if not is_new_record or score == 0 or score in top:
        return

    top.append(score)
    top.sort(reverse=True)
    del top[MAX_RECORDS:]

    save_leaderboard(top, path)
    state.app_state.leaderboard = top


def process_key(state: State, key: Optional[Key]) -> None:
    """React to a key pressed on the leaderboard screen."""
    if key is Key.ESC:
        state.app_state.selected_screen = Screen.MENU
        state.app_state.screen_changed = True


def render(state: State, console: Console, path: PathLike = DEFAULT_PATH) -> None:
    """Draw the leaderboard, loading it from disk on first use."""
    app_state = state.app_state
    if app_state.leaderboard is None:
        app_state.leaderboard = load_leaderboard(path)
    records = app_state.leaderboard
    left = app_state.view_offset[0]

    console.move_to_column(left + (SCREEN_SIZE[0] - 12) // 2)
    console.write("LEADERBOARD")
    console.empty_lines(3)

    if not records:
        for line in _NO_RECORDS:
            console.move_to_column(left)
            console.write(line)
            console.newline()
        return

    for place in range(MAX_RECORDS):
        score = str(records[place]) if place < len(records) else " "
        console.move_to_column(left)
        console.write(f"{place + 1}. {score}")
        console.newline()