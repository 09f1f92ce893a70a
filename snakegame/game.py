"""Rules, state transitions and drawing of a round of snake."""

from __future__ import annotations

from typing import Optional

from snakegame.models import (
    BONUS,
    EMPTY,
    FIELD_SIZE,
    FOOD,
    LEVELS,
    SCREEN_SIZE,
    SNAKE,
    WALL,
    AppState,
    Coord,
    Direction,
    GameState,
    Key,
    Screen,
    State,
)
from snakegame.utils import Console, random_free_cell, random_int

BONUS_START_VALUE = 100
BONUS_DECAY = 3
FOOD_PER_BONUS = 5

_REQUIRED_TICKS = {1: 20, 2: 15, 3: 10, 4: 2}
_FOOD_VALUES = {1: 1, 2: 3, 3: 5, 4: 8}
_STARTING_POSITIONS = {0: (7, 7), 1: (7, 7), 2: (4, 0), 3: (0, 0), 4: (0, 0)}

_OPPOSITES = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}

_DIRECTION_KEYS = {
    Key.UP: Direction.UP,
    Key.DOWN: Direction.DOWN,
    Key.LEFT: Direction.LEFT,
    Key.RIGHT: Direction.RIGHT,
}

_HEAD_SYMBOLS = {
    Direction.DOWN: "V ",
    Direction.LEFT: "< ",
    Direction.RIGHT: "> ",
    Direction.UP: "^ ",
}


def new_game_state(difficulty: int, level: int) -> GameState:
    """Create a fresh round for the given difficulty and level."""
    grid = gen_grid(FIELD_SIZE, level)
    return GameState(
        grid=grid,
        snake_direction=Direction.RIGHT,
        next_direction=Direction.RIGHT,
        snake_body=[starting_position(level)],
        food_position=random_free_cell(grid),
        bonus_position=None,
        bonus_value=50,
        food_eaten=0,
        ate_food=False,
        game_over=False,
        score=0,
        required_ticks=_REQUIRED_TICKS.get(difficulty, 2),
        food_for_bonus_needed=FOOD_PER_BONUS,
        freeze=False,
    )


def gen_grid(size: int, level: int) -> list[list[int]]:
    """Build a square grid with the walls of the given level."""
    if not 0 <= level < len(LEVELS):
        raise IndexError(f"unknown level {level}")
    grid = [[EMPTY] * size for _ in range(size)]
    for row, col in LEVELS[level]:
        grid[row][col] = WALL
    return grid


def starting_position(level: int) -> Coord:
    """Cell where the snake starts on the given level."""
    return _STARTING_POSITIONS.get(level, (0, 0))


def food_value(difficulty: int) -> int:
    """Points a piece of food is worth at the given difficulty."""
    return _FOOD_VALUES.get(difficulty, 8)


def next_head(direction: Direction, head: Coord) -> Coord:
    """The cell the head moves to, wrapping around the field edges."""
    last = FIELD_SIZE - 1
    row, col = head
    if direction is Direction.UP:
        row = last if row == 0 else row - 1
    elif direction is Direction.DOWN:
        row = 0 if row == last else row + 1
    elif direction is Direction.LEFT:
        col = last if col == 0 else col - 1
    else:
        col = 0 if col == last else col + 1
    return (row, col)


def is_bonus(game_state: GameState, coord: Coord) -> bool:
    """Whether the cell lies inside the 2x2 bonus block."""
    if game_state.bonus_position is None:
        return False
    x, y = game_state.bonus_position
    return coord in ((x, y), (x + 1, y), (x, y + 1), (x + 1, y + 1))


def bonus_position(game_state: GameState) -> Optional[Coord]:
    """A random top-left corner of a free 2x2 block, or None if there is none."""
    grid = game_state.grid
    free = [
        (i, j)
        for i in range(FIELD_SIZE - 1)
        for j in range(FIELD_SIZE - 1)
        if grid[i][j] == EMPTY
        and grid[i][j + 1] == EMPTY
        and grid[i + 1][j] == EMPTY
        and grid[i + 1][j + 1] == EMPTY
    ]
    if not free:
        return None
    return free[random_int(0, len(free))]


def set_grid_values(game_state: GameState) -> None:
    """Redraw food, snake and bonus onto the grid, keeping the walls."""
    body = set(game_state.snake_body)
    for i, row in enumerate(game_state.grid):
        for j, value in enumerate(row):
            if value == WALL:
                continue
            cell = (i, j)
            if cell == game_state.food_position:
                row[j] = FOOD
            elif cell in body:
                row[j] = SNAKE
            elif is_bonus(game_state, cell):
                row[j] = BONUS
            else:
                row[j] = EMPTY


def update_direction(game_state: GameState) -> None:
    """Take over the requested direction unless it reverses the snake."""
    if _OPPOSITES[game_state.snake_direction] is game_state.next_direction:
        return
    game_state.snake_direction = game_state.next_direction


def update_bonus_value(game_state: GameState) -> None:
    """Let an active bonus lose value, removing it once it is worthless."""
    if game_state.bonus_position is None:
        return
    game_state.bonus_value = max(game_state.bonus_value - BONUS_DECAY, 0)
    if game_state.bonus_value == 0:
        game_state.bonus_position = None


def _back_to_menu(app_state: AppState) -> None:
    app_state.selected_screen = Screen.MENU
    app_state.screen_changed = True
    app_state.dirty = True


def process_key(state: State, key: Optional[Key]) -> None:
    """React to a key pressed on the game screen."""
    game_state = state.game_state
    app_state = state.app_state
    game_state.freeze = False

    if key in _DIRECTION_KEYS:
        game_state.next_direction = _DIRECTION_KEYS[key]
    elif key is Key.ESC:
        _back_to_menu(app_state)
    elif key is Key.ENTER and game_state.game_over:
        state.game_state = new_game_state(app_state.difficulty, app_state.level)


def update(state: State) -> None:
    """Advance the round by one step."""
    gs = state.game_state
    ate_food = gs.ate_food

    if gs.game_over or gs.freeze:
        return

    gs.ate_food = False
    update_direction(gs)
    update_bonus_value(gs)

    head = next_head(gs.snake_direction, gs.snake_body[0])
    row, col = head

    if head in gs.snake_body or gs.grid[row][col] == WALL:
        gs.game_over = True
        state.app_state.game_started = False
        state.app_state.screen_changed = True
        state.app_state.new_score = gs.score
        return

    if not ate_food:
        gs.snake_body.pop()

    gs.snake_body.insert(0, head)
    set_grid_values(gs)

    if is_bonus(gs, head):
        gs.score += gs.bonus_value
        gs.bonus_position = None
        gs.bonus_value = BONUS_START_VALUE

    if gs.food_position == head:
        gs.ate_food = True
        gs.food_position = random_free_cell(gs.grid)
        gs.score += food_value(state.app_state.difficulty)
        gs.food_eaten += 1
        gs.food_for_bonus_needed = max(gs.food_for_bonus_needed - 1, 0)

    if gs.food_for_bonus_needed == 0:
        gs.ate_food = True
        gs.bonus_position = bonus_position(gs)
        gs.bonus_value = BONUS_START_VALUE
        gs.food_for_bonus_needed = FOOD_PER_BONUS

    set_grid_values(gs)


def _cell_symbol(game_state: GameState, cell: Coord, value: int) -> str:
    is_head = cell == game_state.snake_body[0]
    if value == BONUS:
        return "▒▒"
    if is_head:
        return _HEAD_SYMBOLS[game_state.snake_direction]
    if value == SNAKE:
        return "o "
    if value == FOOD:
        return "■ "
    if value == WALL:
        return "X "
    return "˙ "


def _render_game(state: State, console: Console) -> None:
    gs = state.game_state
    offset = state.app_state.view_offset[0] + (SCREEN_SIZE[0] - FIELD_SIZE * 2) // 2

    for i, row in enumerate(gs.grid):
        console.move_to_column(offset)
        console.write("".join(_cell_symbol(gs, (i, j), v) for j, v in enumerate(row)))
        console.newline()

    console.newline()
    console.move_to_column(offset)
    console.write(f"Score: {gs.score}")
    console.newline()


def _render_result(state: State, console: Console) -> None:
    console.empty_lines(3)
    offset = state.app_state.view_offset[0]
    lines = (
        "GAME OVER",
        f"YOUR SCORE: {state.game_state.score}",
        "",
        "'Enter' to start a new game",
        "'Esc' to open main menu",
    )
    for line in lines:
        console.move_to_column(offset + max(SCREEN_SIZE[0] - len(line), 0) // 2)
        console.write(line)
        console.newline()


def render(state: State, console: Console) -> None:
    """Draw the field, or the result screen once the round is over."""
    if state.game_state.game_over:
        _render_result(state, console)
    else:
        _render_game(state, console)