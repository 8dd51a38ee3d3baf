"""Loading and validating ``.ber`` maps: shape, walls, tiles and reachability."""

from __future__ import annotations

import os
from collections.abc import Sequence
from dataclasses import dataclass
from typing import NamedTuple, Union

from .lines import LineReadError, iter_lines

WALL = "1"
FLOOR = "0"
PLAYER = "P"
EXIT = "E"
COLLECTIBLE = "C"
ENEMY = "N"

MAP_SUFFIX = ".ber"

PathLike = Union[str, bytes, "os.PathLike[str]", "os.PathLike[bytes]"]


class MapError(Exception):
    """A map that cannot be loaded, is malformed, or cannot be won."""


@dataclass(frozen=True)
class Rules:
    """Limits and the set of tiles a map may use."""

    max_rows: int
    max_cols: int
    tiles: str = WALL + FLOOR + PLAYER + EXIT + COLLECTIBLE

    @property
    def tiles_message(self) -> str:
        return "Only " + " ".join(f"'{tile}'" for tile in self.tiles)


MANDATORY_RULES = Rules(max_rows=28, max_cols=51)
BONUS_RULES = Rules(max_rows=45, max_cols=80, tiles=WALL + FLOOR + PLAYER + EXIT + COLLECTIBLE + ENEMY)


class Reach(NamedTuple):
    """What a flood fill from the player's position can get to."""

    collectibles: int
    exit_found: bool


@dataclass(frozen=True)
class GameMap:
    """A validated, winnable map."""

    rows: tuple[str, ...]
    player: tuple[int, int]
    collectibles: int

    @property
    def height(self) -> int:
        return len(self.rows)

    @property
    def width(self) -> int:
        return len(self.rows[0]) if self.rows else 0

    def find(self, tile: str) -> list[tuple[int, int]]:
        """Positions (row, column) holding ``tile``, in reading order."""
        return [
            (r, c)
            for r, row in enumerate(self.rows)
            for c, value in enumerate(row)
            if value == tile
        ]

    def count(self, tile: str) -> int:
        """How many cells hold ``tile``."""
        return sum(row.count(tile) for row in self.rows)


def _check_size(height: int, width: int, rules: Rules) -> None:
    if height > rules.max_rows or width > rules.max_cols:
        raise MapError("Map size is Invalid")


def read_map_lines(path: PathLike, rules: Rules = MANDATORY_RULES) -> list[str]:
    """Read the rows of a map file, checking its name, row lengths and size."""
    name = os.fspath(path)
    if isinstance(name, bytes):
        name = os.fsdecode(name)
    if len(name) < len(MAP_SUFFIX) or not name.endswith(MAP_SUFFIX):
        raise MapError("Path is invalid")
    try:
        handle = open(name, "rb")
    except OSError as exc:
        raise MapError("Open failed") from exc
    with handle:
        try:
            raw = list(iter_lines(handle))
        except LineReadError as exc:
            raise MapError("Reading failed") from exc

    if not raw:
        raise MapError("Map is Invalid")
    lines = [line.decode("latin-1") for line in raw]
    # The width comes from the first line minus one character, its newline.
    width = len(lines[0]) - 1
    rows: list[str] = []
    for line in lines:
        body = line[:-1] if line.endswith("\n") else line
        if len(body) != width:
            raise MapError("Map is Invalid Check lines")
        rows.append(body)
    _check_size(len(rows), width, rules)
    return rows


def check_walls(grid: Sequence[str]) -> bool:
    """True when the first and last rows and columns are all walls."""
    if not grid or not grid[0]:
        return True
    edges_rows = all(tile == WALL for tile in grid[0]) and all(tile == WALL for tile in grid[-1])
    return edges_rows and all(row[0] == WALL and row[-1] == WALL for row in grid)


def flood_fill(grid: Sequence[str], start: tuple[int, int]) -> Reach:
    """Explore from ``start`` through non-wall cells; the exit is reached but not crossed."""
    height = len(grid)
    seen: set[tuple[int, int]] = set()
    stack = [start]
    collected = 0
    exit_found = False
    while stack:
        r, c = stack.pop()
        if not (0 <= r < height and 0 <= c < len(grid[r])):
            continue
        if (r, c) in seen:
            continue
        tile = grid[r][c]
        if tile == WALL:
            continue
        if tile == EXIT:
            exit_found = True
            continue
        seen.add((r, c))
        if tile == COLLECTIBLE:
            collected += 1
        stack.extend(((r + 1, c), (r - 1, c), (r, c + 1), (r, c - 1)))
    return Reach(collected, exit_found)


def parse_map(lines: Sequence[str], rules: Rules = MANDATORY_RULES) -> GameMap:
    """Validate map rows and return the playable map."""
    grid = [line[:-1] if line.endswith("\n") else line for line in lines]
    if not grid:
        raise MapError("Map is Invalid")
    width = len(grid[0])
    if any(len(row) != width for row in grid):
        raise MapError("Map is Invalid Check lines")
    _check_size(len(grid), width, rules)

    if not check_walls(grid):
        raise MapError("Map is Invalid")

    player: tuple[int, int] | None = None
    players = exits = collectibles = 0
    for r, row in enumerate(grid):
        for c, tile in enumerate(row):
            if tile == PLAYER:
                player = (r, c)
                players += 1
            elif tile == EXIT:
                exits += 1
            elif tile == COLLECTIBLE:
                collectibles += 1
            elif tile not in rules.tiles or tile in (PLAYER, EXIT, COLLECTIBLE):
                raise MapError(rules.tiles_message)

    if exits != 1 or players != 1 or collectibles <= 0 or player is None:
        raise MapError("Map is Invalid. arg needed")

    reach = flood_fill(grid, player)
    if reach.collectibles != collectibles or not reach.exit_found:
        raise MapError("Map is invalid\nYou can't WIN")

    return GameMap(rows=tuple(grid), player=player, collectibles=collectibles)


def load_map(path: PathLike, rules: Rules = MANDATORY_RULES) -> GameMap:
    """Read and validate the map stored at ``path``."""
    return parse_map(read_map_lines(path, rules), rules)