"""Wall direction and grid coordinate models for Temple Antics."""

from enum import Enum

from pydantic import BaseModel


class Wall(str, Enum):
    """Side of a cell a wall can stand on."""
    TOP = "top"
    RIGHT = "right"
    BOTTOM = "bottom"
    LEFT = "left"

    def opposite(self) -> "Wall":
        """The same physical wall seen from the neighbouring cell."""
        return _OPPOSITE[self]


_OPPOSITE = {
    Wall.TOP: Wall.BOTTOM,
    Wall.BOTTOM: Wall.TOP,
    Wall.LEFT: Wall.RIGHT,
    Wall.RIGHT: Wall.LEFT,
}


class EdgeKey(BaseModel, frozen=True):
    """Structural identity of one physical cell edge.

    Horizontal edges sit on a row line (0..rows), vertical edges on a
    column line (0..cols).
    """
    horizontal: bool
    line: int               # Row line for horizontal edges, column line otherwise
    offset: int             # Column for horizontal edges, row otherwise
