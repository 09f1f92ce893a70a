"""Game constants, enumerations and the serialisable application state."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Generic, Optional, TypeVar

Coord = tuple[int, int]

FIELD_SIZE = 15
SCREEN_SIZE = (30, 30)

EMPTY = 0
SNAKE = 1
FOOD = 2
BONUS = 3
WALL = 4


class Key(Enum):
    """Keys the game reacts to."""

    UP = auto()
    DOWN = auto()
    LEFT = auto()
    RIGHT = auto()
    ENTER = auto()
    ESC = auto()


class Direction(Enum):
    UP = "Up"
    DOWN = "Down"
    LEFT = "Left"
    RIGHT = "Right"


class Menu(Enum):
    MAIN_MENU = "MainMenu"
    SELECT_DIFFICULTY = "SelectDifficulty"
    SELECT_LEVEL = "SelectLevel"


class Screen(Enum):
    GAME = "Game"
    MENU = "Menu"
    LEADERBOARD = "Leaderboard"


class MainMenuItem(Enum):
    CONTINUE = "Continue"
    NEW_GAME = "NewGame"
    LEADERBOARD = "Leaderboard"
    DIFFICULTY = "Difficulty"
    LEVEL_SELECTION = "LevelSelection"
    EXIT = "Exit"


T = TypeVar("T")


@dataclass(frozen=True)
class MenuItem(Generic[T]):
    """A labelled entry of a menu."""

    label: str
    value: T


MAIN_MENU_ITEMS: tuple[MenuItem[MainMenuItem], ...] = (
    MenuItem("Continue", MainMenuItem.CONTINUE),
    MenuItem("New Game", MainMenuItem.NEW_GAME),
    MenuItem("Leaderboard", MainMenuItem.LEADERBOARD),
    MenuItem("Difficulty", MainMenuItem.DIFFICULTY),
    MenuItem("Select Level", MainMenuItem.LEVEL_SELECTION),
    MenuItem("Exit", MainMenuItem.EXIT),
)

DIFFICULTY_MENU_ITEMS: tuple[MenuItem[int], ...] = (
    MenuItem("Easy", 1),
    MenuItem("Medium", 2),
    MenuItem("Hard", 3),
    MenuItem("Extreme", 4),
)

LEVEL_MENU_ITEMS: tuple[MenuItem[int], ...] = (
    MenuItem("Plain Field", 0),
    MenuItem("Box", 1),
    MenuItem("Labyrinth", 2),
    MenuItem("Two Sides", 3),
    MenuItem("Roundabout", 4),
)


def _box() -> tuple[Coord, ...]:
    top = [(0, c) for c in range(FIELD_SIZE)]
    bottom = [(14, c) for c in range(FIELD_SIZE)]
    left = [(r, 0) for r in range(1, 14)]
    right = [(r, 14) for r in range(1, 14)]
    return tuple(top + bottom + left + right)


def _labyrinth() -> tuple[Coord, ...]:
    rows = [(r, c) for r in (6, 7, 8) for c in range(FIELD_SIZE)]
    cols = [
        (r, c)
        for c in (6, 7, 8)
        for r in (*range(0, 6), *range(9, FIELD_SIZE))
    ]
    corners = [
        (0, 0), (0, 1), (0, 2), (1, 0), (2, 0),
        (0, 12), (0, 13), (0, 14), (1, 14), (2, 14),
        (12, 0), (13, 0), (14, 0), (14, 1), (14, 2),
        (12, 14), (13, 14), (14, 14), (14, 12), (14, 13),
    ]
    return tuple(rows + cols + corners)


def _two_sides() -> tuple[Coord, ...]:
    return tuple((r, c) for r in range(FIELD_SIZE) for c in (6, 7, 8))


def _roundabout() -> tuple[Coord, ...]:
    return tuple((r, c) for r in range(5, 10) for c in range(5, 10))


LEVELS: tuple[tuple[Coord, ...], ...] = (
    (),
    _box(),
    _labyrinth(),
    _two_sides(),
    _roundabout(),
)


def _coord(value: Any) -> Coord:
    row, col = value
    return (int(row), int(col))


def _optional_coord(value: Any) -> Optional[Coord]:
    return None if value is None else _coord(value)


@dataclass
class GameState:
    """Everything that describes a running round of the game."""

    grid: list[list[int]]
    snake_direction: Direction
    next_direction: Direction
    snake_body: list[Coord]
    food_position: Coord
    bonus_position: Optional[Coord]
    bonus_value: int
    food_eaten: int
    ate_food: bool
    game_over: bool
    score: int
    required_ticks: int
    food_for_bonus_needed: int
    freeze: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "grid": [list(row) for row in self.grid],
            "snake_direction": self.snake_direction.value,
            "next_direction": self.next_direction.value,
            "snake_body": [list(c) for c in self.snake_body],
            "food_position": list(self.food_position),
            "bonus_position": (
                None if self.bonus_position is None else list(self.bonus_position)
            ),
            "bonus_value": self.bonus_value,
            "food_eaten": self.food_eaten,
            "ate_food": self.ate_food,
            "game_over": self.game_over,
            "score": self.score,
            "required_ticks": self.required_ticks,
            "food_for_bonus_needed": self.food_for_bonus_needed,
            "freeze": self.freeze,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GameState":
        return cls(
            grid=[[int(v) for v in row] for row in data["grid"]],
            snake_direction=Direction(data["snake_direction"]),
            next_direction=Direction(data["next_direction"]),
            snake_body=[_coord(c) for c in data["snake_body"]],
            food_position=_coord(data["food_position"]),
            bonus_position=_optional_coord(data["bonus_position"]),
            bonus_value=int(data["bonus_value"]),
            food_eaten=int(data["food_eaten"]),
            ate_food=bool(data["ate_food"]),
            game_over=bool(data["game_over"]),
            score=int(data["score"]),
            required_ticks=int(data["required_ticks"]),
            food_for_bonus_needed=int(data["food_for_bonus_needed"]),
            freeze=bool(data["freeze"]),
        )


@dataclass
class AppState:
    """State of the application around the game: screens, menus and settings."""

    app_running: bool = True
    selected_screen: Screen = Screen.MENU
    selected_menu: Menu = Menu.MAIN_MENU
    selected_menu_item: int = 0
    view_offset: tuple[int, int] = (0, 0)
    screen_changed: bool = False
    difficulty: int = 1
    level: int = 2
    game_started: bool = False
    new_score: Optional[int] = None
    leaderboard: Optional[list[int]] = None
    dirty: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "app_running": self.app_running,
            "selected_screen": self.selected_screen.value,
            "selected_menu": self.selected_menu.value,
            "selected_menu_item": self.selected_menu_item,
            "view_offset": list(self.view_offset),
            "screen_changed": self.screen_changed,
            "difficulty": self.difficulty,
            "level": self.level,
            "game_started": self.game_started,
            "new_score": self.new_score,
            "leaderboard": None if self.leaderboard is None else list(self.leaderboard),
            "dirty": self.dirty,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AppState":
        leaderboard = data["leaderboard"]
        new_score = data["new_score"]
        return cls(
            app_running=bool(data["app_running"]),
            selected_screen=Screen(data["selected_screen"]),
            selected_menu=Menu(data["selected_menu"]),
            selected_menu_item=int(data["selected_menu_item"]),
            view_offset=_coord(data["view_offset"]),
            screen_changed=bool(data["screen_changed"]),
            difficulty=int(data["difficulty"]),
            level=int(data["level"]),
            game_started=bool(data["game_started"]),
            new_score=None if new_score is None else int(new_score),
            leaderboard=None if leaderboard is None else [int(v) for v in leaderboard],
            dirty=bool(data["dirty"]),
        )


@dataclass
class State:
    """The complete state: the current round and the application around it."""

    game_state: GameState
    app_state: AppState = field(default_factory=AppState)

    def to_dict(self) -> dict[str, Any]:
        return {
            "game_state": self.game_state.to_dict(),
            "app_state": self.app_state.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "State":
        return cls(
            game_state=GameState.from_dict(data["game_state"]),
            app_state=AppState.from_dict(data["app_state"]),
        )