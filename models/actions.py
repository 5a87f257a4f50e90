"""Input and result models exchanged with the input/rendering layer."""

from enum import Enum
from typing import Literal

from pydantic import BaseModel

from models.game_state import Slot, TurnPhase


class InputKind(str, Enum):
    """Logical inputs a classified click can produce."""
    SELECT_DIE = "select_die"
    CHOOSE_SLOT = "choose_slot"
    CLICK_CELL = "click_cell"       # Orientation cycle, move target, or teleport pick
    ADVANCE = "advance"
    USE_ELIXIR = "use_elixir"


class GameInput(BaseModel):
    """One classified click."""
    kind: InputKind
    die: Literal[1, 2] | None = None        # For SELECT_DIE
    slot: Slot | None = None                # For CHOOSE_SLOT
    cell: int | None = None                 # For CLICK_CELL


class ApplyResult(BaseModel):
    """The engine's response after handling an input."""
    accepted: bool
    phase: TurnPhase                # Phase after the input
    description: str = ""           # Human-readable narrative
