"""Terminal Snake game with levels, difficulties, saved settings and a leaderboard."""

__version__ = "0.1.0"