import io

import pytest

from snakegame import game
from snakegame.models import (
    BONUS,
    EMPTY,
    FIELD_SIZE,
    FOOD,
    LEVELS,
    SNAKE,
    WALL,
    AppState,
    Direction,
    Key,
    Screen,
    State,
)
from snakegame.utils import Console


def _state(difficulty=1, level=0):
    gs = game.new_game_state(difficulty, level)
    return State(game_state=gs, app_state=AppState(difficulty=difficulty, level=level))


def _place_food(state, cell):
    state.game_state.food_position = cell
    game.set_grid_values(state.game_state)


@pytest.mark.parametrize(
    "level, expected",
    [(0, (7, 7)), (1, (7, 7)), (2, (4, 0)), (3, (0, 0)), (4, (0, 0)), (9, (0, 0))],
)
def test_starting_position(level, expected):
    assert game.starting_position(level) == expected


@pytest.mark.parametrize(
    "difficulty, expected", [(1, 1), (2, 3), (3, 5), (4, 8), (7, 8)]
)
def test_food_value(difficulty, expected):
    assert game.food_value(difficulty) == expected


@pytest.mark.parametrize(
    "difficulty, ticks", [(1, 20), (2, 15), (3, 10), (4, 2)]
)
def test_new_game_state_ticks(difficulty, ticks):
    assert game.new_game_state(difficulty, 0).required_ticks == ticks


def test_new_game_state_defaults():
    gs = game.new_game_state(1, 2)
    assert gs.snake_body == [game.starting_position(2)]
    assert gs.snake_direction is Direction.RIGHT
    assert gs.next_direction is Direction.RIGHT
    assert gs.score == 0
    assert gs.bonus_position is None
    assert gs.food_for_bonus_needed == game.FOOD_PER_BONUS
    row, col = gs.food_position
    assert gs.grid[row][col] == EMPTY
    assert not gs.game_over


@pytest.mark.parametrize("level", range(len(LEVELS)))
def test_gen_grid_walls_match_level(level):
    grid = game.gen_grid(FIELD_SIZE, level)
    walls = {(i, j) for i, row in enumerate(grid) for j, v in enumerate(row) if v == WALL}
    assert walls == set(LEVELS[level])
    assert len(grid) == FIELD_SIZE
    assert all(len(row) == FIELD_SIZE for row in grid)


def test_gen_grid_unknown_level():
    with pytest.raises(IndexError):
        game.gen_grid(FIELD_SIZE, len(LEVELS))


def test_next_head_moves_and_wraps():
    last = FIELD_SIZE - 1
    assert game.next_head(Direction.UP, (0, 3)) == (last, 3)
    assert game.next_head(Direction.DOWN, (last, 3)) == (0, 3)
    assert game.next_head(Direction.LEFT, (4, 0)) == (4, last)
    assert game.next_head(Direction.RIGHT, (4, last)) == (4, 0)
    assert game.next_head(Direction.RIGHT, (4, 5)) == (4, 6)
    assert game.next_head(Direction.UP, (4, 5)) == (3, 5)


def test_is_bonus_covers_two_by_two():
    gs = game.new_game_state(1, 0)
    assert not game.is_bonus(gs, (3, 3))
    gs.bonus_position = (3, 3)
    for cell in [(3, 3), (4, 3), (3, 4), (4, 4)]:
        assert game.is_bonus(gs, cell)
    assert not game.is_bonus(gs, (5, 3))
    assert not game.is_bonus(gs, (2, 3))


def test_bonus_position_is_free_block():
    gs = game.new_game_state(1, 1)
    game.set_grid_values(gs)
    pos = game.bonus_position(gs)
    i, j = pos
    assert all(gs.grid[r][c] == EMPTY for r, c in [(i, j), (i + 1, j), (i, j + 1), (i + 1, j + 1)])


def test_bonus_position_none_when_full():
    gs = game.new_game_state(1, 0)
    gs.grid = [[WALL] * FIELD_SIZE for _ in range(FIELD_SIZE)]
    assert game.bonus_position(gs) is None


def test_set_grid_values_keeps_walls():
    gs = game.new_game_state(1, 1)
    gs.snake_body = [(7, 7), (7, 6)]
    gs.food_position = (3, 3)
    gs.bonus_position = (10, 10)
    game.set_grid_values(gs)
    assert gs.grid[0][0] == WALL
    assert gs.grid[7][7] == SNAKE
    assert gs.grid[7][6] == SNAKE
    assert gs.grid[3][3] == FOOD
    assert gs.grid[11][11] == BONUS
    assert gs.grid[5][5] == EMPTY


def test_update_direction_ignores_reversal():
    gs = game.new_game_state(1, 0)
    gs.next_direction = Direction.LEFT
    game.update_direction(gs)
    assert gs.snake_direction is Direction.RIGHT
    gs.next_direction = Direction.UP
    game.update_direction(gs)
    assert gs.snake_direction is Direction.UP


def test_update_bonus_value_decays_and_expires():
    gs = game.new_game_state(1, 0)
    gs.bonus_value = 10
    game.update_bonus_value(gs)
    assert gs.bonus_value == 10
    gs.bonus_position = (2, 2)
    game.update_bonus_value(gs)
    assert gs.bonus_value == 10 - game.BONUS_DECAY
    gs.bonus_value = 2
    game.update_bonus_value(gs)
    assert gs.bonus_value == 0
    assert gs.bonus_position is None


def test_update_moves_snake():
    state = _state()
    _place_food(state, (0, 0))
    game.update(state)
    assert state.game_state.snake_body == [(7, 8)]
    assert state.game_state.grid[7][8] == SNAKE
    assert state.game_state.grid[7][7] == EMPTY


def test_update_frozen_or_over_does_nothing():
    state = _state()
    state.game_state.freeze = True
    game.update(state)
    assert state.game_state.snake_body == [(7, 7)]
    state.game_state.freeze = False
    state.game_state.game_over = True
    game.update(state)
    assert state.game_state.snake_body == [(7, 7)]


def test_update_wall_collision_ends_game():
    state = _state(level=1)
    state.app_state.game_started = True
    state.game_state.snake_body = [(7, 13)]
    state.game_state.score = 12
    game.update(state)
    assert state.game_state.game_over
    assert not state.app_state.game_started
    assert state.app_state.screen_changed
    assert state.app_state.new_score == 12


def test_update_self_collision_ends_game():
    state = _state()
    state.game_state.snake_body = [(7, 7), (7, 8), (8, 8)]
    game.update(state)
    assert state.game_state.game_over


def test_update_eating_food_scores_and_grows():
    state = _state(difficulty=2)
    _place_food(state, (7, 8))
    game.update(state)
    gs = state.game_state
    assert gs.score == game.food_value(2)
    assert gs.food_eaten == 1
    assert gs.ate_food
    assert gs.food_position != (7, 8)
    r, c = gs.food_position
    assert gs.grid[r][c] == FOOD
    assert gs.food_for_bonus_needed == game.FOOD_PER_BONUS - 1
    _place_food(state, (0, 0))
    game.update(state)
    assert gs.snake_body == [(7, 9), (7, 8)]


def test_update_spawns_bonus_after_enough_food():
    state = _state()
    state.game_state.food_for_bonus_needed = 1
    _place_food(state, (7, 8))
    game.update(state)
    gs = state.game_state
    assert gs.bonus_position is not None
    assert gs.bonus_value == game.BONUS_START_VALUE
    assert gs.food_for_bonus_needed == game.FOOD_PER_BONUS
    assert any(BONUS in row for row in gs.grid)


def test_update_eating_bonus():
    state = _state()
    gs = state.game_state
    gs.bonus_position = (7, 8)
    gs.bonus_value = game.BONUS_START_VALUE
    _place_food(state, (0, 0))
    game.update(state)
    assert gs.score == game.BONUS_START_VALUE - game.BONUS_DECAY
    assert gs.bonus_position is None
    assert gs.bonus_value == game.BONUS_START_VALUE


def test_process_key_direction_and_unfreeze():
    state = _state()
    state.game_state.freeze = True
    game.process_key(state, Key.UP)
    assert state.game_state.next_direction is Direction.UP
    assert not state.game_state.freeze


def test_process_key_esc_returns_to_menu():
    state = _state()
    state.app_state.selected_screen = Screen.GAME
    game.process_key(state, Key.ESC)
    assert state.app_state.selected_screen is Screen.MENU
    assert state.app_state.screen_changed
    assert state.app_state.dirty


def test_process_key_enter_restarts_only_after_game_over():
    state = _state()
    state.game_state.score = 40
    game.process_key(state, Key.ENTER)
    assert state.game_state.score == 40
    state.game_state.game_over = True
    game.process_key(state, Key.ENTER)
    assert state.game_state.score == 0
    assert not state.game_state.game_over


def test_render_field():
    state = _state()
    _place_food(state, (0, 0))
    out = io.StringIO()
    game.render(state, Console(out))
    text = out.getvalue()
    assert "Score: 0" in text
    assert "> " in text
    assert "■ " in text


def test_render_game_over():
    state = _state()
    state.game_state.game_over = True
    state.game_state.score = 7
    out = io.StringIO()
    game.render(state, Console(out))
    text = out.getvalue()
    assert "GAME OVER" in text
    assert "YOUR SCORE: 7" in text
    assert "Score: " not in text