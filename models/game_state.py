"""Turn, player, and event models for Temple Antics."""

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from config import MAX_HEALTH, START_CELL
from models.board import Wall


class GameStatus(str, Enum):
    """Lifecycle of a play session."""
    ACTIVE = "active"
    DEAD = "dead"                   # Health reached 0
    ABORTED = "aborted"             # Internal inconsistency


class TurnPhase(str, Enum):
    """The active step of the turn state machine."""
    ASSIGN_DICE = "assign_dice"
    DRAW_WALLS = "draw_walls"
    MOVEMENT = "movement"
    TILE_EFFECT = "tile_effect"
    ENCOUNTER = "encounter"
    CHOOSE_TELEPORT = "choose_teleport"
    SHORTCUT_DRAW_WALLS = "shortcut_draw_walls"
    SHORTCUT_MOVEMENT = "shortcut_movement"
    SHORTCUT_CHOOSE_TELEPORT = "shortcut_choose_teleport"
    SHORTCUT_TILE_EFFECT = "shortcut_tile_effect"
    END_TURN = "end_turn"


class Slot(str, Enum):
    """Where a die face can be placed for the turn."""
    NEXT_TILE = "next_tile"
    ENCOUNTER = "encounter"


class Inventory(BaseModel):
    """Items the player carries."""
    idol: bool = False
    elixir: bool = False
    machete: bool = False
    charm: int = Field(default=0, ge=0, le=2)
    pickaxe: int = Field(default=0, ge=0, le=2)
    shotgun: int = Field(default=0, ge=0, le=2)
    bandage: int = Field(default=0, ge=0, le=2)


class PlayerState(BaseModel):
    """The explorer's position, health, and belongings."""
    health: int = MAX_HEALTH
    cell: int = START_CELL
    turn: int = 1
    inventory: Inventory = Inventory()
    visited: list[int] = [START_CELL]   # Display only, duplicates allowed
    discovered: list[int] = []          # Tile-effect cells already claimed


class DiceState(BaseModel):
    """Both dice plus the two turn slots they are assigned into."""
    die1: int | None = None
    die2: int | None = None
    selected_die: Literal[1, 2] | None = None
    next_tile: int | None = None
    encounter: int | None = None


class WallDraft(BaseModel):
    """Wall shape being oriented during a draw-walls phase."""
    kind: Literal["walls"] = "walls"
    face: int
    orientation: int = 0
    walls: list[Wall] = []


class PendingMove(BaseModel):
    """A selected, not yet committed, movement step."""
    kind: Literal["move"] = "move"
    destination: int
    resulting_health: int
    wall_to_break: int | None = None    # WallId broken by this step


class PendingTeleport(BaseModel):
    """A selected teleport destination."""
    kind: Literal["teleport"] = "teleport"
    destination: int


Pending = Annotated[
    Union[WallDraft, PendingMove, PendingTeleport],
    Field(discriminator="kind"),
]


class GameEvent(BaseModel):
    """A logged, accepted input."""
    turn: int
    phase: TurnPhase
    description: str


class GameState(BaseModel):
    """The full state of a session."""
    status: GameStatus = GameStatus.ACTIVE
    phase: TurnPhase = TurnPhase.ASSIGN_DICE
    player: PlayerState = PlayerState()
    dice: DiceState = DiceState()
    built_walls: set[int] = set()       # WallIds currently standing
    pending: Pending | None = None
    event_log: list[GameEvent] = []
