"""Board layout and rules constants for Temple Antics."""

import os

GRID_COLS = 8            # Columns on the board
GRID_ROWS = 4            # Rows on the board
CELL_BASE = 10           # Id of the top-left cell; ids run row-major from here


def cell(row: int, col: int) -> int:
    """Return the cell id for a (row, col) board position."""
    return CELL_BASE + row * GRID_COLS + col


START_CELL = cell(3, 0)
TELEPORT_CELLS = (cell(0, 0), cell(0, GRID_COLS - 1))

# Cell id -> one-time reward granted on first arrival
TILE_EFFECT_CELLS = {
    cell(0, 3): "idol",
    cell(1, 6): "pickaxe",
    cell(2, 1): "elixir",
    cell(3, 5): "machete",
}

MAX_HEALTH = 6
WALL_BREAK_COST = 4      # Health lost when walking through a built wall
ELIXIR_HEAL = 4
TURNS_PER_BAND = 6       # Encounters escalate every 6 turns

# Rows: turn band (1-6, 7-12, 13-18). Columns: roll band (1-2, 3-4, 5-6).
SNEAK_BEAST_DAMAGE = (
    (2, 3, 4),
    (3, 4, 5),
    (4, 5, 6),
)
BEAST_ATTACK_DAMAGE = (
    (1, 2, 3),
    (2, 3, 4),
    (3, 4, 5),
)
TRAP_DAMAGE = (1, 2, 3)  # By turn band, no roll

# Encounter "item" roll (1-6) -> (inventory field, granted value)
ITEM_TABLE = {
    1: ("charm", 2),
    2: ("machete", True),
    3: ("pickaxe", 2),
    4: ("shotgun", 2),
    5: ("bandage", 2),
    6: ("elixir", True),
}

NEXT_TILE_MAX_REROLLS = int(os.environ.get("TEMPLE_MAX_REROLLS", "1000"))
RNG_SEED = int(os.environ["TEMPLE_SEED"]) if os.environ.get("TEMPLE_SEED") else None
LOG_LEVEL = os.environ.get("TEMPLE_LOG_LEVEL", "WARNING")
