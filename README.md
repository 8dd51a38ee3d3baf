# solongame

A small top-down tile puzzle game. You walk a player around a walled map,
pick up every coin, and then leave through the exit. Maps are plain text
files with the `.ber` extension. The window is drawn with pygame.

## Installing

```
pip install .
```

## Playing

Start the standard game with a map file:

```
solong maps/level.ber
```

The bonus edition adds enemies that step towards the player, an exit that
changes colour once every coin is collected, a player marker showing which
way it faces, enemies that cycle through colours, and an on-screen move
counter:

```
solong-bonus maps/level.ber
```

Both commands can also be started as `python -m solongame.cli` (standard game).

Move with `W` `A` `S` `D` or the arrow keys. `Esc` or closing the window quits.

- Standard game: after each step the move count is printed as `Moves = N`;
  stepping onto the exit with every coin collected prints the count and
  `You won`. The exit blocks the player until then.
- Bonus game: walking into an enemy, or an enemy walking into the player,
  prints `You Lose`; reaching the exit with every coin collected prints
  `You Win`.

Tiles are 50 pixels wide in the standard game and 32 in the bonus game.

If the command is not given exactly one argument it prints a usage line.
If the map breaks any of the rules below, it prints `Error` followed by the
reason and ends without opening a window. The exit status is always 0.

## Map format

Each line of a map is one row, and all rows must be the same length.

| Tile | Meaning                         |
|------|---------------------------------|
| `1`  | wall                            |
| `0`  | floor                           |
| `P`  | player start (exactly one)      |
| `E`  | exit (exactly one)              |
| `C`  | coin (at least one)             |
| `N`  | enemy (bonus edition only)      |

The outer border has to be made entirely of walls, and every coin and the
exit must be reachable from the player's start. The standard game accepts
maps up to 28 rows by 51 columns; the bonus edition accepts up to 45 rows
by 80 columns.

Example:

```
1111111111
1P00C00001
1000110E01
1111111111
```

## Using it as a library

Maps can be loaded and checked without opening a window:

```python
from solongame.mapfile import MANDATORY_RULES, MapError, load_map

try:
    game_map = load_map("maps/level.ber", MANDATORY_RULES)
except MapError as exc:
    print("bad map:", exc)
```

`BONUS_RULES` allows enemies and the larger size. `parse_map(lines, rules)`
validates rows already in memory, and the returned `GameMap` has `rows`,
`player`, `collectibles`, `find(tile)` and `count(tile)`.

`solongame.game.Game` holds the game state and can be driven without a
window:

```python
from solongame.game import Action, Game, Outcome

game = Game.from_map(game_map, bonus=False)
outcome = game.handle_action(Action.RIGHT)   # an Outcome
```

`Game.tick()` runs the bonus game's per-frame updates (enemy movement and
animation), and `Game.move_enemies()` moves every enemy one step at once.
`solongame.render.Renderer` draws a `Game` and runs the window loop.

Smaller helpers: `solongame.lines.iter_lines` / `LineReader` read a stream
line by line through a fixed-size buffer, and `solongame.printf.format_message`
fills in `%c %s %d %i %u %x %X %p %%` conversions.

## What it does not do

The board is drawn with plain coloured shapes; there are no sprite images
and no sound. There is no level selection, saving or high-score storage:
each run plays the one map named on the command line.