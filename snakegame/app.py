"""Application entry point: main loop, settings file and key translation."""

from __future__ import annotations

import argparse
import json
import sys
import time
from pathlib import Path
from typing import Any, Optional, Union

from snakegame import game, leaderboard, menu
from snakegame.game import new_game_state
from snakegame.models import SCREEN_SIZE, AppState, Key, Screen, State
from snakegame.utils import Console, view_offset

SETTINGS_PATH = "settings.json"
LEADERBOARD_PATH = "leaderboard.txt"
UPDATE_INTERVAL = 0.1
POLL_TIMEOUT = 0.01

PathLike = Union[str, Path]

_KEY_NAMES = {
    "KEY_UP": Key.UP,
    "KEY_DOWN": Key.DOWN,
    "KEY_LEFT": Key.LEFT,
    "KEY_RIGHT": Key.RIGHT,
    "KEY_ENTER": Key.ENTER,
    "KEY_ESCAPE": Key.ESC,
}

_KEY_CHARS = {"\r": Key.ENTER, "\n": Key.ENTER, "\x1b": Key.ESC}


def initial_state() -> State:
    """The state the application starts with before settings are applied."""
    difficulty, level = 1, 2
    return State(
        game_state=new_game_state(difficulty, level),
        app_state=AppState(difficulty=difficulty, level=level),
    )


def ensure_file(path: PathLike) -> None:
    """Create an empty file unless it already exists."""
    Path(path).touch(exist_ok=True)


def save_settings_if_dirty(state: State, path: PathLike = SETTINGS_PATH) -> None:
    """Write the state to the settings file when it has unsaved changes."""
    if not state.app_state.dirty:
        return
    Path(path).write_text(json.dumps(state.to_dict(), indent=2), encoding="utf-8")
    state.app_state.dirty = False


def apply_saved_settings(state: State, path: PathLike = SETTINGS_PATH) -> None:
    """Restore the saved round and settings, or save the current ones."""
    content = Path(path).read_text(encoding="utf-8")
    saved: Optional[State] = None
    if content:
        try:
            saved = State.from_dict(json.loads(content))
        except (ValueError, KeyError, TypeError):
            saved = None

    if saved is None:
        save_settings_if_dirty(state, path)
        return

    state.game_state = saved.game_state
    app, old = state.app_state, saved.app_state
    app.leaderboard = old.leaderboard
    app.difficulty = old.difficulty
    app.level = old.level
    app.game_started = old.game_started


def check_new_score(state: State, path: PathLike = LEADERBOARD_PATH) -> None:
    """Hand a finished round's score to the leaderboard."""
    score = state.app_state.new_score
    if score is not None:
        leaderboard.check_if_new_record(state, score, path)
        state.app_state.new_score = None


def translate_key(keystroke: Any) -> Optional[Key]:
    """Map a terminal keystroke to a game key, or None if it means nothing."""
    name = getattr(keystroke, "name", None)
    if name in _KEY_NAMES:
        return _KEY_NAMES[name]
    return _KEY_CHARS.get(str(keystroke))


def _update_view_offset(app_state: AppState, console: Console, columns: int, rows: int) -> None:
    offset = view_offset(SCREEN_SIZE[0], SCREEN_SIZE[1], columns, rows)
    if offset != tuple(app_state.view_offset):
        console.clear()
        app_state.view_offset = offset


def _clear_view(app_state: AppState, console: Console) -> None:
    if not app_state.screen_changed:
        return
    left, top = app_state.view_offset
    console.move_to_row(top)
    for _ in range(SCREEN_SIZE[1]):
        console.move_to_column(left)
        console.write(" " * SCREEN_SIZE[0])
        console.newline()
    app_state.screen_changed = False


def _dispatch_key(state: State, key: Optional[Key]) -> None:
    screen = state.app_state.selected_screen
    if screen is Screen.MENU:
        menu.process_key(state, key)
    elif screen is Screen.GAME:
        game.process_key(state, key)
    else:
        leaderboard.process_key(state, key)


def _render(state: State, console: Console, leaderboard_path: PathLike) -> None:
    app_state = state.app_state
    _clear_view(app_state, console)
    console.move_to_row(app_state.view_offset[1])
    console.render_logo(app_state.view_offset[0])

    screen = app_state.selected_screen
    if screen is Screen.GAME:
        game.render(state, console)
    elif screen is Screen.MENU:
        menu.render(state, console)
    else:
        leaderboard.render(state, console, leaderboard_path)


def _run(term: Any, console: Console, settings: Path, records: Path) -> None:
    state = initial_state()
    ensure_file(records)
    ensure_file(settings)
    apply_saved_settings(state, settings)

    last_update = time.monotonic()
    ticks = 0

    while state.app_state.app_running:
        ticks += 1

        save_settings_if_dirty(state, settings)
        check_new_score(state, records)
        _update_view_offset(state.app_state, console, term.width, term.height)

        keystroke = term.inkey(timeout=POLL_TIMEOUT)
        if keystroke:
            _dispatch_key(state, translate_key(keystroke))

        if time.monotonic() - last_update >= UPDATE_INTERVAL:
            if ticks >= state.game_state.required_ticks:
                if state.app_state.selected_screen is Screen.GAME:
                    game.update(state)
                ticks = 0
            _render(state, console, records)
            last_update = time.monotonic()


def main(argv: Optional[list[str]] = None) -> int:
    """Run the game in the terminal."""
    parser = argparse.ArgumentParser(prog="snakegame", description="Snake in the terminal.")
    parser.add_argument("--settings", default=SETTINGS_PATH, help="settings file")
    parser.add_argument("--leaderboard", default=LEADERBOARD_PATH, help="leaderboard file")
    args = parser.parse_args(argv)

    from blessed import Terminal

    term = Terminal()
    console = Console(sys.stdout)
    console.show_cursor(False)
    try:
        with term.cbreak():
            _run(term, console, Path(args.settings), Path(args.leaderboard))
    except KeyboardInterrupt:
        pass
    finally:
        console.show_cursor(True)
    return 0


if __name__ == "__main__":
    sys.exit(main())