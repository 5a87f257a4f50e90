"""Cell addressing, adjacency, and wall identity for the 8x4 board."""

from __future__ import annotations

from config import CELL_BASE, GRID_COLS, GRID_ROWS, TELEPORT_CELLS, cell
from engine.errors import UnknownWall
from models.board import EdgeKey, Wall

# (row delta, col delta) for each wall side
_STEP = {
    Wall.TOP: (-1, 0),
    Wall.RIGHT: (0, 1),
    Wall.BOTTOM: (1, 0),
    Wall.LEFT: (0, -1),
}


def all_cells() -> list[int]:
    """Every cell id on the board, row-major."""
    return [cell(r, c) for r in range(GRID_ROWS) for c in range(GRID_COLS)]


def row_col(cell_id: int) -> tuple[int, int]:
    """Convert a cell id to its (row, col) position.

    Raises:
        ValueError: If the id is not on the board.
    """
    offset = cell_id - CELL_BASE
    if not 0 <= offset < GRID_ROWS * GRID_COLS:
        raise ValueError(f"Cell {cell_id} is out of bounds")
    return divmod(offset, GRID_COLS)


def is_on_board(cell_id: int) -> bool:
    """Check if an id names one of the board cells."""
    return 0 <= cell_id - CELL_BASE < GRID_ROWS * GRID_COLS


def _in_bounds(row: int, col: int) -> bool:
    """Check if coordinates are within grid bounds."""
    return 0 <= row < GRID_ROWS and 0 <= col < GRID_COLS


def neighbors(cell_id: int) -> list[tuple[Wall, int]]:
    """Get the orthogonal neighbours of a cell.

    Directions that would leave the board are skipped; there is no
    wraparound.

    Args:
        cell_id: The cell to look around.

    Returns:
        (direction, neighbour cell) pairs in TOP, RIGHT, BOTTOM, LEFT order.
    """
    row, col = row_col(cell_id)
    result = []
    for direction, (dr, dc) in _STEP.items():
        nr, nc = row + dr, col + dc
        if _in_bounds(nr, nc):
            result.append((direction, cell(nr, nc)))
    return result


def direction_to(src: int, dst: int) -> Wall | None:
    """The side of ``src`` that faces ``dst``, or None if not adjacent."""
    for direction, other in neighbors(src):
        if other == dst:
            return direction
    return None


def is_teleport(cell_id: int) -> bool:
    return cell_id in TELEPORT_CELLS


def edge_key(cell_id: int, direction: Wall) -> EdgeKey:
    """Compute the structural key of the edge on one side of a cell.

    A cell's RIGHT edge and its right neighbour's LEFT edge share a key.
    """
    row, col = row_col(cell_id)
    if direction == Wall.TOP:
        return EdgeKey(horizontal=True, line=row, offset=col)
    if direction == Wall.BOTTOM:
        return EdgeKey(horizontal=True, line=row + 1, offset=col)
    if direction == Wall.LEFT:
        return EdgeKey(horizontal=False, line=col, offset=row)
    return EdgeKey(horizontal=False, line=col + 1, offset=row)


class WallMap:
    """Deduplicated wall identities for every (cell, direction) pair.

    Built once; the mapping never changes afterwards.
    """

    def __init__(self) -> None:
        self._ids: dict[tuple[int, Wall], int] = {}
        self._edges: dict[int, EdgeKey] = {}
        by_key: dict[EdgeKey, int] = {}
        for cell_id in all_cells():
            for direction in Wall:
                key = edge_key(cell_id, direction)
                wall = by_key.get(key)
                if wall is None:
                    wall = len(by_key)
                    by_key[key] = wall
                    self._edges[wall] = key
                self._ids[(cell_id, direction)] = wall

    def __len__(self) -> int:
        return len(self._edges)

    def wall_id(self, cell_id: int, direction: Wall) -> int:
        """Get the wall identity on one side of a cell.

        Raises:
            UnknownWall: If the pair was never registered.
        """
        try:
            return self._ids[(cell_id, direction)]
        except KeyError:
            raise UnknownWall(cell_id, direction) from None

    def edge(self, wall: int) -> EdgeKey:
        """The physical edge a wall identity stands on."""
        return self._edges[wall]

    def is_wall_built(self, built: set[int], cell_id: int, direction: Wall) -> bool:
        """Check if the wall on one side of a cell is currently standing."""
        return self.wall_id(cell_id, direction) in built

    def walls_of(self, cell_id: int) -> dict[Wall, int]:
        """All four wall identities around a cell."""
        return {direction: self.wall_id(cell_id, direction) for direction in Wall}
