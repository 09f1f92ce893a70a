"""Main, difficulty and level menus: navigation, selection and drawing."""

from __future__ import annotations

from typing import Optional

from snakegame.game import new_game_state
from snakegame.models import (
    DIFFICULTY_MENU_ITEMS,
    LEVEL_MENU_ITEMS,
    MAIN_MENU_ITEMS,
    SCREEN_SIZE,
    Key,
    MainMenuItem,
    Menu,
    MenuItem,
    Screen,
    State,
)
from snakegame.utils import Console


def main_menu_items(state: State) -> list[MenuItem[MainMenuItem]]:
    """Entries of the main menu; 'Continue' only while a round is going on."""
    started = state.app_state.game_started
    return [
        item
        for item in MAIN_MENU_ITEMS
        if started or item.value is not MainMenuItem.CONTINUE
    ]


def main_menu_item_index(state: State, item: MainMenuItem) -> int:
    """Position of an entry in the main menu as currently shown."""
    for index, entry in enumerate(main_menu_items(state)):
        if entry.value is item:
            return index
    raise ValueError(f"{item} is not in the main menu")


def _value_index(items: tuple[MenuItem[int], ...], value: int) -> int:
    for index, entry in enumerate(items):
        if entry.value == value:
            return index
    raise ValueError(f"no menu entry with value {value}")


def _labels(state: State) -> list[str]:
    menu = state.app_state.selected_menu
    if menu is Menu.MAIN_MENU:
        return [item.label for item in main_menu_items(state)]
    if menu is Menu.SELECT_DIFFICULTY:
        return [item.label for item in DIFFICULTY_MENU_ITEMS]
    return [item.label for item in LEVEL_MENU_ITEMS]


def move_selection(state: State, forward: bool) -> None:
    """Move the highlighted entry down or up, wrapping at the ends."""
    count = len(_labels(state))
    app_state = state.app_state
    step = 1 if forward else -1
    app_state.selected_menu_item = (app_state.selected_menu_item + step) % count


def _select_main(state: State) -> None:
    app_state = state.app_state
    choice = main_menu_items(state)[app_state.selected_menu_item].value

    if choice is MainMenuItem.CONTINUE:
        app_state.selected_menu_item = 0
        app_state.selected_screen = Screen.GAME
        state.game_state.freeze = True
    elif choice is MainMenuItem.NEW_GAME:
        app_state.selected_screen = Screen.GAME
        app_state.game_started = True
        app_state.selected_menu_item = 0
        state.game_state = new_game_state(app_state.difficulty, app_state.level)
    elif choice is MainMenuItem.LEADERBOARD:
        app_state.selected_menu_item = 0
        app_state.selected_screen = Screen.LEADERBOARD
    elif choice is MainMenuItem.DIFFICULTY:
        app_state.selected_menu = Menu.SELECT_DIFFICULTY
        app_state.selected_menu_item = _value_index(
            DIFFICULTY_MENU_ITEMS, app_state.difficulty
        )
    elif choice is MainMenuItem.LEVEL_SELECTION:
        app_state.selected_menu = Menu.SELECT_LEVEL
        app_state.selected_menu_item = _value_index(LEVEL_MENU_ITEMS, app_state.level)
    else:
        app_state.app_running = False
        app_state.selected_menu_item = 0


def _select_difficulty(state: State) -> None:
    app_state = state.app_state
    app_state.game_started = False
    app_state.difficulty = DIFFICULTY_MENU_ITEMS[app_state.selected_menu_item].value
    app_state.selected_menu = Menu.MAIN_MENU
    app_state.selected_menu_item = main_menu_item_index(state, MainMenuItem.DIFFICULTY)
    app_state.dirty = True


def _select_level(state: State) -> None:
    app_state = state.app_state
    app_state.game_started = False
    app_state.level = LEVEL_MENU_ITEMS[app_state.selected_menu_item].value
    app_state.selected_menu = Menu.MAIN_MENU
    app_state.selected_menu_item = main_menu_item_index(
        state, MainMenuItem.LEVEL_SELECTION
    )
    app_state.dirty = True


def process_selection(state: State) -> None:
    """Act on the highlighted entry of the current menu."""
    menu = state.app_state.selected_menu
    if menu is Menu.MAIN_MENU:
        _select_main(state)
    elif menu is Menu.SELECT_DIFFICULTY:
        _select_difficulty(state)
    else:
        _select_level(state)
    state.app_state.screen_changed = True


def process_key(state: State, key: Optional[Key]) -> None:
    """React to a key pressed on the menu screen."""
    if key is Key.DOWN:
        move_selection(state, True)
    elif key is Key.UP:
        move_selection(state, False)
    elif key is Key.ENTER:
        process_selection(state)
    elif key is Key.ESC:
        state.app_state.selected_menu = Menu.MAIN_MENU
        state.app_state.selected_menu_item = 0


def render(state: State, console: Console) -> None:
    """Draw the current menu with the selected entry highlighted."""
    app_state = state.app_state
    console.empty_lines(5)

    for index, label in enumerate(_labels(state)):
        offset = (SCREEN_SIZE[0] - (len(label) + 5)) // 2
        console.move_to_column(app_state.view_offset[0] + offset)
        if index == app_state.selected_menu_item:
            console.write(f">> {label} <<")
        else:
            console.write(f"   {label}   ")
        console.newline()
        console.newline()