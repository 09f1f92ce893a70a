# snakegame

Snake in the terminal. Steer the snake around a 15×15 field, eat food to
grow and score points, and catch the bonus block before its value runs out.

## Installing

```
pip install .
```

## Playing

```
snakegame
```

The game keeps two files, by default in the working directory. Both are
created empty if they do not exist yet:

- `settings.json` holds the chosen difficulty and level, and the game you
  left unfinished, so that you can continue it later.
- `leaderboard.txt` holds the ten best scores, one per line.

Other locations can be given on the command line:

```
snakegame --settings path/to/settings.json --leaderboard path/to/leaderboard.txt
```

`Ctrl-C` quits at any time.

### Keys

Menus:

- `Up` / `Down` move the selection. It wraps around at either end.
- `Enter` picks the selected entry.
- `Esc` returns to the main menu from a submenu.

The main menu has these entries:

- **Continue** resumes a game in progress. It is shown only while a game
  is running.
- **New Game** starts a fresh game.
- **Leaderboard** shows the best scores. `Esc` goes back to the menu.
- **Difficulty** chooses Easy, Medium, Hard or Extreme.
- **Select Level** chooses Plain Field, Box, Labyrinth, Two Sides or
  Roundabout.
- **Exit** quits.

Changing the difficulty or the level ends the game in progress; the new
setting is saved and used for the next new game.

In a game:

- The arrow keys steer the snake. It cannot turn back on itself. Leaving
  the field on one side brings it back in on the other.
- `Esc` returns to the menu and saves the game.
- `Enter` starts a new game after a game over.

### Scoring

Each piece of food is worth 1, 3, 5 or 8 points, from Easy to Extreme.
A higher difficulty also makes the snake move faster. Every fifth piece
of food brings up a 2×2 bonus block where the field has room for one. It
starts at 100 points, loses 3 with every step, and disappears when its
value reaches zero. Running into a wall or into the snake's own body ends
the game; a score that makes the top ten is added to the leaderboard.

## Using the modules

- `snakegame.game` holds the rules: `new_game_state(difficulty, level)`
  creates a round, `process_key(state, key)` reacts to a `Key`, and
  `update(state)` advances the round by one step.
- `snakegame.models` holds the constants, enumerations and the `State`,
  `GameState` and `AppState` dataclasses, each with `to_dict()` and
  `from_dict()` for saving as JSON.
- `snakegame.leaderboard` reads and writes the score file with
  `load_leaderboard(path)`, `save_leaderboard(records, path)` and
  `check_if_new_record(state, score, path)`.
- `snakegame.menu` handles menu navigation and selection.
- `snakegame.utils.Console` writes text and cursor control sequences to a
  stream.
- `snakegame.app.main(argv=None)` runs the game.

## Running the tests

```
pip install .[test]
pytest
```