"""Drawing a game with pygame and running its window loop."""

from __future__ import annotations

import os
from collections.abc import Callable, Iterable
from typing import Optional

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pygame  # noqa: E402

from .game import Action, Facing, Game, Outcome, move_counter_text  # noqa: E402
from .mapfile import COLLECTIBLE, ENEMY, EXIT, WALL  # noqa: E402

TILE_SIZE = 50
BONUS_TILE_SIZE = 32
WINDOW_TITLE = "So-Long"
DEFAULT_FPS = 60

FLOOR_COLOR = (46, 52, 64)
WALL_COLOR = (110, 110, 120)
COLLECTIBLE_COLOR = (235, 200, 60)
EXIT_COLORS = ((150, 70, 40), (80, 200, 120))
PLAYER_COLOR = (70, 140, 230)
FACING_COLOR = (240, 240, 240)
ENEMY_COLORS = ((200, 50, 50), (230, 90, 60), (170, 30, 70))
TEXT_COLOR = (255, 255, 255)

_PYGAME_KEYS = {
    pygame.K_a: Action.LEFT,
    pygame.K_LEFT: Action.LEFT,
    pygame.K_d: Action.RIGHT,
    pygame.K_RIGHT: Action.RIGHT,
    pygame.K_w: Action.UP,
    pygame.K_UP: Action.UP,
    pygame.K_s: Action.DOWN,
    pygame.K_DOWN: Action.DOWN,
    pygame.K_ESCAPE: Action.QUIT,
}

_FACING_OFFSETS = {
    Facing.RIGHT: (1, 0),
    Facing.LEFT: (-1, 0),
    Facing.UP: (0, -1),
    Facing.DOWN: (0, 1),
}

EventSource = Callable[[], Iterable[pygame.event.Event]]


def action_for_pygame_key(key: int) -> Optional[Action]:
    """Map a pygame key (WASD, arrows, Escape) to an action, or None."""
    return _PYGAME_KEYS.get(key)


class Renderer:
    """Shows a game in a window and feeds it keyboard input."""

    def __init__(
        self,
        game: Game,
        tile_size: Optional[int] = None,
        title: str = WINDOW_TITLE,
        fps: int = DEFAULT_FPS,
        events: Optional[EventSource] = None,
    ) -> None:
        self.game = game
        if tile_size is None:
            tile_size = BONUS_TILE_SIZE if game.bonus else TILE_SIZE
        if tile_size <= 0:
            raise ValueError("tile size must be positive")
        self.tile_size = tile_size
        self.title = title
        self.fps = fps
        self._events: EventSource = events or pygame.event.get
        self._font: Optional[pygame.font.Font] = None

    @property
    def size(self) -> tuple[int, int]:
        """Window size in pixels: (width, height)."""
        grid = self.game.grid
        width = len(grid[0]) if grid else 0
        return width * self.tile_size, len(grid) * self.tile_size

    def _cell(self, row: int, col: int) -> pygame.Rect:
        ts = self.tile_size
        return pygame.Rect(col * ts, row * ts, ts, ts)

    def _draw_tile(self, surface: pygame.Surface, tile: str, rect: pygame.Rect) -> None:
        ts = self.tile_size
        if tile == WALL:
            surface.fill(WALL_COLOR, rect)
        elif tile == COLLECTIBLE:
            pygame.draw.circle(surface, COLLECTIBLE_COLOR, rect.center, max(ts // 4, 1))
        elif tile == EXIT:
            color = EXIT_COLORS[1 if self.game.door_open else 0]
            surface.fill(color, rect.inflate(-2 * (ts // 8), -2 * (ts // 8)))
        elif tile == ENEMY:
            color = ENEMY_COLORS[self.game.frame % len(ENEMY_COLORS)]
            surface.fill(color, rect.inflate(-2 * (ts // 6), -2 * (ts // 6)))

    def _draw_player(self, surface: pygame.Surface) -> None:
        ts = self.tile_size
        rect = self._cell(*self.game.player)
        pygame.draw.circle(surface, PLAYER_COLOR, rect.center, max(ts // 3, 1))
        if not self.game.bonus:
            return
        dx, dy = _FACING_OFFSETS[self.game.facing]
        marker = max(ts // 5, 1)
        reach = ts // 3
        centre = (rect.centerx + dx * reach, rect.centery + dy * reach)
        indicator = pygame.Rect(0, 0, marker, marker)
        indicator.center = centre
        surface.fill(FACING_COLOR, indicator)

    def _counter_font(self) -> pygame.font.Font:
        if self._font is None:
            if not pygame.font.get_init():
                pygame.font.init()
            self._font = pygame.font.Font(None, 20)
        return self._font

    def _draw_move_counter(self, surface: pygame.Surface) -> None:
        surface.fill(FLOOR_COLOR, pygame.Rect(70, 0, 20 + self.tile_size, self.tile_size))
        font = self._counter_font()
        surface.blit(font.render("Moves:", True, TEXT_COLOR), (10, 0))
        surface.blit(font.render(move_counter_text(self.game.moves), True, TEXT_COLOR), (75, 0))

    def draw(self, surface: pygame.Surface) -> None:
        """Paint the whole board, the player and, in the bonus game, the move counter."""
        surface.fill(FLOOR_COLOR)
        for r, row in enumerate(self.game.grid):
            for c, tile in enumerate(row):
                self._draw_tile(surface, tile, self._cell(r, c))
        self._draw_player(surface)
        if self.game.bonus:
            self._draw_move_counter(surface)

    def _handle_event(self, event: pygame.event.Event) -> Outcome:
        if event.type == pygame.QUIT:
            return Outcome.QUIT
        if event.type == pygame.KEYDOWN:
            return self.game.handle_action(action_for_pygame_key(event.key))
        return Outcome.CONTINUE

    def run(self) -> Outcome:
        """Open the window and play until the game is won, lost or closed."""
        pygame.display.init()
        try:
            screen = pygame.display.set_mode(self.size)
            pygame.display.set_caption(self.title)
            clock = pygame.time.Clock()
            self.draw(screen)
            pygame.display.flip()
            while True:
                for event in self._events():
                    outcome = self._handle_event(event)
                    if outcome is not Outcome.CONTINUE:
                        return outcome
                if self.game.bonus and self.game.tick() is Outcome.LOST:
                    return Outcome.LOST
                self.draw(screen)
                pygame.display.flip()
                if self.fps:
                    clock.tick(self.fps)
        finally:
            pygame.display.quit()