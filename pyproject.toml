[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "snakegame"
version = "0.1.0"
description = "A terminal Snake game with selectable levels, difficulties and a persistent leaderboard"
requires-python = ">=3.10"
keywords = ["snake", "game", "terminal", "arcade"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Arcade",
]
dependencies = [
    "blessed",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
snakegame = "snakegame.app:main"

[tool.hatch.build.targets.wheel]
packages = ["snakegame"]

[tool.pytest.ini_options]
addopts = "-ra"
