"""Game state and rules: player moves, collectibles, the exit, patrolling enemies."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any, Optional, TextIO

from .mapfile import COLLECTIBLE, ENEMY, EXIT, FLOOR, WALL, GameMap
from .printf import print_message

ENEMY_DELAY = 50
FRAME_DELAY = 5000
ANIMATION_FRAMES = 3


class Action(Enum):
    """What a key press asks the game to do."""

    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"
    QUIT = "quit"


class Facing(IntEnum):
    """Direction the player sprite faces; the value indexes the player images."""

    RIGHT = 0
    LEFT = 1
    UP = 2
    DOWN = 3


class Outcome(Enum):
    """What a step of the game led to."""

    CONTINUE = "continue"
    WON = "won"
    LOST = "lost"
    QUIT = "quit"


_KEYCODES = {
    0: Action.LEFT,
    123: Action.LEFT,
    2: Action.RIGHT,
    124: Action.RIGHT,
    13: Action.UP,
    126: Action.UP,
    1: Action.DOWN,
    125: Action.DOWN,
    53: Action.QUIT,
}

_STEPS = {
    Action.LEFT: (0, -1),
    Action.RIGHT: (0, 1),
    Action.UP: (-1, 0),
    Action.DOWN: (1, 0),
}

_ENEMY_BLOCKERS = frozenset((WALL, ENEMY, COLLECTIBLE, EXIT))


def action_for_keycode(keycode: int) -> Optional[Action]:
    """Map a keyboard code (WASD, arrows, Escape) to an action, or None."""
    return _KEYCODES.get(keycode)


def move_counter_text(moves: int) -> str:
    """The digits shown next to the on-screen move counter."""
    if moves < 0:
        raise ValueError("move count cannot be negative")
    return str(moves)


def _facing_towards(origin: tuple[int, int], target: tuple[int, int]) -> Facing | None:
    (row, col), (new_row, new_col) = origin, target
    if row < new_row:
        return Facing.DOWN
    if row > new_row:
        return Facing.UP
    if col < new_col:
        return Facing.RIGHT
    if col > new_col:
        return Facing.LEFT
    return None


@dataclass
class Game:
    """A running game on a mutable copy of a validated map."""

    grid: list[list[str]]
    player: tuple[int, int]
    total_collectibles: int
    bonus: bool = False
    collected: int = 0
    moves: int = 0
    facing: Facing = Facing.RIGHT
    door_open: bool = False
    frame: int = 0
    frame_count: int = 0
    enemy_clock: int = 0
    stream: Optional[TextIO] = field(default=None, repr=False, compare=False)

    @classmethod
    def from_map(cls, game_map: GameMap, bonus: bool = False) -> "Game":
        """Start a game on ``game_map``; the bonus variant has enemies and animation."""
        return cls(
            grid=[list(row) for row in game_map.rows],
            player=game_map.player,
            total_collectibles=game_map.collectibles,
            bonus=bonus,
            moves=0 if bonus else 1,
        )

    def _say(self, fmt: str, *args: Any) -> None:
        print_message(fmt, *args, stream=self.stream)

    @property
    def all_collected(self) -> bool:
        return self.collected == self.total_collectibles

    def handle_action(self, action: Optional[Action]) -> Outcome:
        """Apply a key press; None stands for a key that does nothing."""
        row, col = self.player
        self.grid[row][col] = FLOOR
        if action is Action.QUIT:
            return Outcome.QUIT
        if action is not None:
            d_row, d_col = _STEPS[action]
            row, col = row + d_row, col + d_col
        return self.move_to(row, col)

    def move_to(self, row: int, col: int) -> Outcome:
        """Try to step the player onto (row, col)."""
        if (row, col) == self.player:
            return Outcome.CONTINUE
        if self.bonus:
            return self._move_bonus(row, col)
        return self._move_plain(row, col)

    def _collect(self, row: int, col: int) -> None:
        if self.grid[row][col] == COLLECTIBLE:
            self.grid[row][col] = FLOOR
            self.collected += 1

    def _move_plain(self, row: int, col: int) -> Outcome:
        tile = self.grid[row][col]
        if tile not in (WALL, EXIT):
            self._collect(row, col)
            self.player = (row, col)
        elif tile == EXIT and self.all_collected:
            self._say("Moves = %d\nYou won\n", self.moves)
            return Outcome.WON
        if self.player == (row, col):
            self._say("Moves = %d\n", self.moves)
            self.moves += 1
        return Outcome.CONTINUE

    def _move_bonus(self, row: int, col: int) -> Outcome:
        if self.grid[row][col] in (FLOOR, COLLECTIBLE):
            self._collect(row, col)
            facing = _facing_towards(self.player, (row, col))
            if facing is not None:
                self.facing = facing
            self.player = (row, col)
        if self.all_collected:
            self.door_open = True
        tile = self.grid[row][col]
        if tile == ENEMY:
            self._say("You Lose \n")
            return Outcome.LOST
        if tile == EXIT and self.all_collected:
            self._say("You Win \n")
            return Outcome.WON
        if self.player == (row, col):
            self.moves += 1
        return Outcome.CONTINUE

    def _enemy_direction(self, row: int, col: int) -> tuple[int, int] | None:
        p_row, p_col = self.player
        grid = self.grid
        if row < p_row and grid[row + 1][col] not in _ENEMY_BLOCKERS:
            return (1, 0)
        if row > p_row and grid[row - 1][col] not in _ENEMY_BLOCKERS:
            return (-1, 0)
        if col < p_col and grid[row][col + 1] not in _ENEMY_BLOCKERS:
            return (0, 1)
        if col > p_col and grid[row][col - 1] not in _ENEMY_BLOCKERS:
            return (0, -1)
        return None

    def _step_enemy(self, row: int, col: int) -> tuple[Outcome, int, int]:
        """Move one enemy; also return where the sweep continues from."""
        direction = self._enemy_direction(row, col)
        if direction is None:
            return Outcome.CONTINUE, row, col
        d_row, d_col = direction
        target = (row + d_row, col + d_col)
        if target == self.player:
            self._say("You Lose \n")
            return Outcome.LOST, row, col
        self.grid[row][col] = FLOOR
        self.grid[target[0]][target[1]] = ENEMY
        # Moving right or down skips the cell just entered so it is not moved twice.
        return Outcome.CONTINUE, row + max(d_row, 0), col + max(d_col, 0)

    def move_enemies(self) -> Outcome:
        """Move every enemy one cell towards the player, scanning in reading order."""
        height = len(self.grid)
        width = len(self.grid[0]) if height else 0
        row = 0
        while row < height:
            col = 0
            while col < width:
                if self.grid[row][col] == ENEMY:
                    outcome, row, col = self._step_enemy(row, col)
                    if outcome is Outcome.LOST:
                        return outcome
                col += 1
            row += 1
        return Outcome.CONTINUE

    def _enemy_clock_step(self) -> Outcome:
        outcome = Outcome.CONTINUE
        if self.enemy_clock == ENEMY_DELAY:
            outcome = self.move_enemies()
            if outcome is Outcome.LOST:
                return outcome
            self.enemy_clock = 0
        self.enemy_clock += 1
        return outcome

    def tick(self) -> Outcome:
        """Run the per-frame updates: each enemy cell drives the enemy clock, each cell the animation."""
        if not self.bonus:
            return Outcome.CONTINUE
        for row in self.grid:
            for tile in row:
                if tile == ENEMY and self._enemy_clock_step() is Outcome.LOST:
                    return Outcome.LOST
                self.advance_frame()
        return Outcome.CONTINUE

    def advance_frame(self) -> int:
        """Count one animation tick and return the current enemy frame."""
        self.frame_count += 1
        if self.frame_count > FRAME_DELAY:
            self.frame = (self.frame + 1) % ANIMATION_FRAMES
            self.frame_count = 0
        return self.frame