"""Command-line entry points for the plain and the bonus game."""

from __future__ import annotations

import sys
from collections.abc import Sequence
from typing import Optional

import pygame

from .game import Game
from .mapfile import BONUS_RULES, MANDATORY_RULES, MapError, Rules, load_map
from .printf import print_message
from .render import Renderer


def _play(
    argv: Optional[Sequence[str]],
    *,
    program: str,
    rules: Rules,
    bonus: bool,
    failure: str,
) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 1:
        print_message("Erorr !!\n./%s  <Map name.ber>\n", program)
        return 0
    try:
        game_map = load_map(args[0], rules)
    except MapError as exc:
        print_message("Error\n%s\n", str(exc))
        return 0
    game = Game.from_map(game_map, bonus=bonus)
    try:
        Renderer(game).run()
    except pygame.error:
        print_message("Error\n%s\n", failure)
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Play the plain game on the map named by the single argument.

    Problems are reported on standard output; the status is always 0.
    """
    return _play(
        argv,
        program="solong",
        rules=MANDATORY_RULES,
        bonus=False,
        failure="mlx connection failed",
    )


def main_bonus(argv: Optional[Sequence[str]] = None) -> int:
    """Play the bonus game, with enemies and animation, on the named map.

    Problems are reported on standard output; the status is always 0.
    """
    return _play(
        argv,
        program="solong_bonus",
        rules=BONUS_RULES,
        bonus=True,
        failure="Mlx connection failed",
    )


if __name__ == "__main__":
    sys.exit(main())