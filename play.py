"""Terminal driver for a Temple Antics session.

Stands in for the graphical board: prints the state after every input
and turns typed commands into engine inputs.

Usage:
    python play.py
    python play.py --seed 42

Commands:
    d1 / d2      select die 1 or 2
    nt / enc     place the selected die on Next Tile / Encounter
    c <cell>     click a cell (rotate walls, pick a move, pick a teleport)
    a            advance to the next phase
    e            drink the elixir
    q            quit

Environment variables:
    TEMPLE_SEED       Random seed (overridden by --seed)
    TEMPLE_LOG_LEVEL  Logging level (default: WARNING)
"""

import argparse
import logging
import random
import sys

from config import GRID_COLS, GRID_ROWS, LOG_LEVEL, RNG_SEED, TELEPORT_CELLS, TILE_EFFECT_CELLS, cell
from engine.errors import PlayerDied, TempleError
from engine.turn import GameEngine
from models.actions import GameInput, InputKind
from models.board import Wall
from models.game_state import Slot, WallDraft

COMMANDS = {
    "d1": GameInput(kind=InputKind.SELECT_DIE, die=1),
    "d2": GameInput(kind=InputKind.SELECT_DIE, die=2),
    "nt": GameInput(kind=InputKind.CHOOSE_SLOT, slot=Slot.NEXT_TILE),
    "enc": GameInput(kind=InputKind.CHOOSE_SLOT, slot=Slot.ENCOUNTER),
    "a": GameInput(kind=InputKind.ADVANCE),
    "e": GameInput(kind=InputKind.USE_ELIXIR),
}


def _cell_label(engine: GameEngine, cell_id: int) -> str:
    player = engine.state.player
    if cell_id == player.cell:
        return " @ "
    if cell_id in TELEPORT_CELLS:
        return " T "
    if cell_id in TILE_EFFECT_CELLS and cell_id not in player.discovered:
        return " * "
    return f"{cell_id:^3}"


def print_board(engine: GameEngine) -> None:
    """Draw the grid with standing walls as | and ---."""
    built = engine.state.built_walls
    walls = engine.wall_map

    def up(r: int, c: int) -> bool:
        return walls.is_wall_built(built, cell(r, c), Wall.TOP)

    def left(r: int, c: int) -> bool:
        return walls.is_wall_built(built, cell(r, c), Wall.LEFT)

    for r in range(GRID_ROWS):
        print("+" + "+".join("---" if up(r, c) else "   " for c in range(GRID_COLS)) + "+")
        row = ""
        for c in range(GRID_COLS):
            row += ("|" if left(r, c) else " ") + _cell_label(engine, cell(r, c))
        right = walls.is_wall_built(built, cell(r, GRID_COLS - 1), Wall.RIGHT)
        print(row + ("|" if right else " "))
    last = GRID_ROWS - 1
    print("+" + "+".join(
        "---" if walls.is_wall_built(built, cell(last, c), Wall.BOTTOM) else "   "
        for c in range(GRID_COLS)
    ) + "+")


def print_status(engine: GameEngine) -> None:
    """Print phase, dice, health, and inventory."""
    state = engine.state
    player = state.player
    dice = state.dice
    print("=" * 48)
    print(f"  TURN {player.turn} | Phase: {state.phase.value.upper()} | Health: {player.health}")
    print("=" * 48)
    print(
        f"Dice: d1={dice.die1} d2={dice.die2} selected={dice.selected_die} | "
        f"next tile={dice.next_tile} encounter={dice.encounter}"
    )
    items = {k: v for k, v in player.inventory.model_dump().items() if v}
    print(f"Inventory: {items or 'empty'}")
    if isinstance(state.pending, WallDraft):
        print(f"Walls: {[w.value for w in state.pending.walls]} (click your cell to rotate)")
    elif state.pending is not None:
        print(f"Pending: {state.pending.model_dump()}")
    print(f"Adjacent: {engine.adjacent_cells()}")


def parse_command(line: str) -> GameInput | None:
    """Turn one typed line into an engine input, or None if unrecognised."""
    parts = line.split()
    if not parts:
        return None
    if parts[0] == "c" and len(parts) == 2 and parts[1].isdigit():
        return GameInput(kind=InputKind.CLICK_CELL, cell=int(parts[1]))
    return COMMANDS.get(parts[0])


def main() -> None:
    parser = argparse.ArgumentParser(description="Play Temple Antics in the terminal")
    parser.add_argument("--seed", type=int, default=RNG_SEED, help="Random seed")
    args = parser.parse_args()

    logging.basicConfig(level=LOG_LEVEL)
    engine = GameEngine(rng=random.Random(args.seed))

    while True:
        print_board(engine)
        print_status(engine)
        try:
            line = input("> ").strip().lower()
        except EOFError:
            break
        if line == "q":
            break
        game_input = parse_command(line)
        if game_input is None:
            print("Unknown command")
            continue
        try:
            result = engine.apply(game_input)
        except PlayerDied as e:
            print(f"\n*** GAME OVER: {e} ***")
            sys.exit(1)
        except TempleError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(2)
        print(f"  -> {result.description}" if result.accepted else "  -> (ignored)")


if __name__ == "__main__":
    main()
