"""Wall shapes drawn from the next-tile face, and their placement."""

from __future__ import annotations

import logging

from engine.errors import InvariantViolation
from engine.grid import WallMap
from models.board import Wall
from models.game_state import WallDraft

logger = logging.getLogger(__name__)

# Next-tile face -> wall sides at orientation 0
BASE_SHAPES: dict[int, tuple[Wall, ...]] = {
    1: (Wall.LEFT, Wall.TOP, Wall.RIGHT),   # U
    2: (Wall.LEFT, Wall.BOTTOM),            # L
    3: (Wall.LEFT, Wall.RIGHT),             # parallel
    4: (Wall.LEFT,),
    5: (),
}

# One clockwise quarter turn
_ROTATE = {
    Wall.LEFT: Wall.TOP,
    Wall.TOP: Wall.RIGHT,
    Wall.RIGHT: Wall.BOTTOM,
    Wall.BOTTOM: Wall.LEFT,
}

_ORDER = list(Wall)


def wall_shape(face: int, orientation: int) -> list[Wall]:
    """Get the wall sides for a tile face at a given orientation.

    Args:
        face: Next-tile face (1..5).
        orientation: Quarter turns from the base shape (0..3).

    Returns:
        The wall sides, in TOP, RIGHT, BOTTOM, LEFT order.

    Raises:
        InvariantViolation: If the (face, orientation) pair is not in the table.
    """
    if face not in BASE_SHAPES or not 0 <= orientation < 4:
        raise InvariantViolation(
            f"No wall shape for face {face} at orientation {orientation}"
        )
    walls = set(BASE_SHAPES[face])
    for _ in range(orientation):
        walls = {_ROTATE[w] for w in walls}
    return sorted(walls, key=_ORDER.index)


def start_draft(face: int) -> WallDraft:
    """Seed the wall selection for a freshly drawn tile."""
    return WallDraft(face=face, orientation=0, walls=wall_shape(face, 0))


def cycle_orientation(draft: WallDraft) -> WallDraft:
    """Rotate the draft a quarter turn."""
    orientation = (draft.orientation + 1) % 4
    return WallDraft(
        face=draft.face,
        orientation=orientation,
        walls=wall_shape(draft.face, orientation),
    )


def commit_walls(
    draft: WallDraft,
    cell_id: int,
    wall_map: WallMap,
    built: set[int],
) -> list[int]:
    """Raise the drafted walls around a cell.

    Args:
        draft: The oriented wall selection.
        cell_id: The cell the walls surround.
        wall_map: Wall identity lookup.
        built: Standing walls (mutated in place).

    Returns:
        The wall identities that were newly raised.
    """
    raised = []
    for direction in draft.walls:
        wall = wall_map.wall_id(cell_id, direction)
        if wall not in built:
            built.add(wall)
            raised.append(wall)
    logger.info(
        "Raised %d wall(s) around cell %d: %s",
        len(raised), cell_id, [d.value for d in draft.walls],
    )
    return raised
