"""Turn orchestration: dice assignment, phase transitions, session handling."""

from __future__ import annotations

import logging
import random

from config import RNG_SEED, TELEPORT_CELLS
from engine.dice import reroll_sixes, roll_d6
from engine.errors import InvariantViolation, PlayerDied, SessionEnded
from engine.grid import WallMap, direction_to, is_teleport, neighbors
from engine.rules import (
    apply_tile_effect,
    candidate_move,
    check_death,
    resolve_encounter,
    set_health,
    use_elixir,
)
from engine.walls import commit_walls, cycle_orientation, start_draft
from models.actions import ApplyResult, GameInput, InputKind
from models.game_state import (
    DiceState,
    GameEvent,
    GameState,
    GameStatus,
    PendingMove,
    PendingTeleport,
    Slot,
    TurnPhase,
    WallDraft,
)

logger = logging.getLogger(__name__)

# Returned by a phase handler when the input should leave the phase
_ADVANCE = "advance"

# The shortcut sub-loop reuses the normal handlers; these tables say
# where each family member goes next.
_DRAW_WALLS = {
    TurnPhase.DRAW_WALLS: TurnPhase.MOVEMENT,
    TurnPhase.SHORTCUT_DRAW_WALLS: TurnPhase.SHORTCUT_MOVEMENT,
}
_MOVEMENT = {
    TurnPhase.MOVEMENT: (TurnPhase.TILE_EFFECT, TurnPhase.CHOOSE_TELEPORT),
    TurnPhase.SHORTCUT_MOVEMENT: (
        TurnPhase.SHORTCUT_TILE_EFFECT,
        TurnPhase.SHORTCUT_CHOOSE_TELEPORT,
    ),
}
_TILE_EFFECT = {
    TurnPhase.TILE_EFFECT: TurnPhase.ENCOUNTER,
    TurnPhase.SHORTCUT_TILE_EFFECT: TurnPhase.END_TURN,
}
_CHOOSE_TELEPORT = {
    TurnPhase.CHOOSE_TELEPORT: TurnPhase.ENCOUNTER,
    TurnPhase.SHORTCUT_CHOOSE_TELEPORT: TurnPhase.END_TURN,
}


def create_game(rng: random.Random | None = None) -> GameState:
    """Start a new session: turn 1, full health, both dice rolled.

    Args:
        rng: Optional Random instance for seeded/testing rolls.

    Returns:
        A fresh GameState in the AssignDice phase.
    """
    return GameState(dice=DiceState(die1=roll_d6(rng), die2=roll_d6(rng)))


def select_die(dice: DiceState, which: int) -> bool:
    """Mark die 1 or 2 as the active selection.

    Returns:
        False if that die has no face to assign.
    """
    face = dice.die1 if which == 1 else dice.die2
    if face is None:
        return False
    dice.selected_die = which
    return True


def assign_to_slot(dice: DiceState, slot: Slot) -> bool:
    """Move the selected die's face into a slot.

    If the slot was empty the die is cleared; otherwise the slot's old
    face goes back onto the die (a swap). The selection is cleared.

    Returns:
        False if no die was selected.
    """
    which = dice.selected_die
    if which is None:
        return False

    face = dice.die1 if which == 1 else dice.die2
    if slot == Slot.NEXT_TILE:
        old, dice.next_tile = dice.next_tile, face
    else:
        old, dice.encounter = dice.encounter, face

    if which == 1:
        dice.die1 = old
    else:
        dice.die2 = old
    dice.selected_die = None
    return True


def end_turn(game_state: GameState, rng: random.Random | None = None) -> None:
    """Roll fresh dice, clear both slots, and start the next turn."""
    game_state.dice = DiceState(die1=roll_d6(rng), die2=roll_d6(rng))
    game_state.player.turn += 1
    game_state.pending = None
    game_state.phase = TurnPhase.ASSIGN_DICE


def commit_move(game_state: GameState, move: PendingMove) -> None:
    """Take a priced step.

    Raises:
        PlayerDied: If breaking a wall used the last of the player's health.
    """
    player = game_state.player
    player.visited.append(move.destination)
    player.cell = move.destination
    set_health(player, move.resulting_health)
    if move.wall_to_break is not None:
        game_state.built_walls.discard(move.wall_to_break)
        logger.info("Wall %d broken, health now %d", move.wall_to_break, player.health)
    game_state.pending = None

    if check_death(player):
        raise PlayerDied("crushed breaking through a wall", player.turn)

    tile_phase, teleport_phase = _MOVEMENT[game_state.phase]
    game_state.phase = teleport_phase if is_teleport(move.destination) else tile_phase


def _handle_assign_dice(game_state: GameState, game_input: GameInput) -> str | None:
    dice = game_state.dice

    if game_input.kind == InputKind.SELECT_DIE and game_input.die is not None:
        if select_die(dice, game_input.die):
            return f"Selected die {game_input.die}."
        return None

    if game_input.kind == InputKind.CHOOSE_SLOT and game_input.slot is not None:
        if assign_to_slot(dice, game_input.slot):
            return (
                f"Assigned to {game_input.slot.value}: "
                f"next tile {dice.next_tile}, encounter {dice.encounter}."
            )
        return None

    if game_input.kind == InputKind.ADVANCE:
        if dice.die1 is not None or dice.die2 is not None:
            return None
        return _ADVANCE

    return None


def _handle_draw_walls(game_state: GameState, game_input: GameInput) -> str | None:
    draft = game_state.pending
    if not isinstance(draft, WallDraft):
        raise InvariantViolation(f"{game_state.phase.value} without a wall draft")

    if game_input.kind == InputKind.CLICK_CELL:
        if game_input.cell != game_state.player.cell:
            return None
        game_state.pending = cycle_orientation(draft)
        return f"Rotated walls to orientation {game_state.pending.orientation}."

    if game_input.kind == InputKind.ADVANCE:
        return _ADVANCE

    return None


def _handle_movement(
    game_state: GameState,
    game_input: GameInput,
    wall_map: WallMap,
) -> str | None:
    player = game_state.player

    if game_input.kind == InputKind.CLICK_CELL and game_input.cell is not None:
        direction = direction_to(player.cell, game_input.cell)
        if direction is None:
            return None
        move = candidate_move(
            player, game_state.built_walls, wall_map, direction, game_input.cell
        )
        game_state.pending = move
        cost = player.health - move.resulting_health
        return f"Selected cell {move.destination} ({cost} health)."

    if game_input.kind == InputKind.ADVANCE:
        if not isinstance(game_state.pending, PendingMove):
            return None
        return _ADVANCE

    return None


def _handle_choose_teleport(game_state: GameState, game_input: GameInput) -> str | None:
    if game_input.kind == InputKind.CLICK_CELL:
        if game_input.cell not in TELEPORT_CELLS:
            return None
        game_state.pending = PendingTeleport(destination=game_input.cell)
        return f"Selected teleport to cell {game_input.cell}."

    if game_input.kind == InputKind.ADVANCE:
        if not isinstance(game_state.pending, PendingTeleport):
            return None
        return _ADVANCE

    return None


def _advance(
    game_state: GameState,
    wall_map: WallMap,
    rng: random.Random | None,
) -> str:
    """Leave the current phase. Preconditions have already been checked."""
    phase = game_state.phase
    player = game_state.player
    dice = game_state.dice

    if phase == TurnPhase.ASSIGN_DICE:
        if dice.next_tile is None or dice.encounter is None:
            raise InvariantViolation("Both dice placed but a slot is empty")
        dice.next_tile = reroll_sixes(dice.next_tile, rng)
        game_state.pending = start_draft(dice.next_tile)
        game_state.phase = TurnPhase.DRAW_WALLS
        return f"Drew tile {dice.next_tile}."

    if phase in _DRAW_WALLS:
        raised = commit_walls(
            game_state.pending, player.cell, wall_map, game_state.built_walls
        )
        game_state.pending = None
        game_state.phase = _DRAW_WALLS[phase]
        return f"Raised {len(raised)} wall(s)."

    if phase in _MOVEMENT:
        move = game_state.pending
        commit_move(game_state, move)
        return f"Moved to cell {player.cell}, health {player.health}."

    if phase in _TILE_EFFECT:
        reward = apply_tile_effect(player)
        game_state.phase = _TILE_EFFECT[phase]
        return f"Found the {reward}!" if reward else "Nothing here."

    if phase in _CHOOSE_TELEPORT:
        destination = game_state.pending.destination
        player.visited.append(destination)
        player.cell = destination
        game_state.pending = None
        game_state.phase = _CHOOSE_TELEPORT[phase]
        return f"Teleported to cell {destination}."

    if phase == TurnPhase.ENCOUNTER:
        outcome = resolve_encounter(dice.encounter, player, rng)
        if check_death(player):
            raise PlayerDied(outcome.name, player.turn)
        if outcome.shortcut_tile is not None:
            dice.next_tile = outcome.shortcut_tile
            game_state.pending = start_draft(outcome.shortcut_tile)
            game_state.phase = TurnPhase.SHORTCUT_DRAW_WALLS
        else:
            game_state.phase = TurnPhase.END_TURN
        return outcome.description

    if phase == TurnPhase.END_TURN:
        end_turn(game_state, rng)
        return f"Turn {player.turn} begins."

    raise InvariantViolation(f"No transition out of {phase.value}")


def process_input(
    game_state: GameState,
    game_input: GameInput,
    wall_map: WallMap,
    rng: random.Random | None = None,
) -> ApplyResult:
    """Route one classified click by phase and apply it.

    Inputs that are not legal in the active phase are ignored and leave
    the state untouched.

    Args:
        game_state: Current game state (mutated in place).
        game_input: The classified click.
        wall_map: Wall identity lookup.
        rng: Optional Random instance for seeded/testing rolls.

    Returns:
        ApplyResult saying whether the input was accepted.

    Raises:
        PlayerDied: If health reaches 0.
        InvariantViolation: If the engine's tables do not cover the state.
    """
    phase = game_state.phase
    logger.info("Handling input %s in %s", game_input.kind.value, phase.value)

    if game_input.kind == InputKind.USE_ELIXIR:
        outcome = None
        if game_state.player.inventory.elixir:
            gained = use_elixir(game_state.player)
            outcome = f"Drank the elixir, +{gained} health."
    elif phase == TurnPhase.ASSIGN_DICE:
        outcome = _handle_assign_dice(game_state, game_input)
    elif phase in _DRAW_WALLS:
        outcome = _handle_draw_walls(game_state, game_input)
    elif phase in _MOVEMENT:
        outcome = _handle_movement(game_state, game_input, wall_map)
    elif phase in _CHOOSE_TELEPORT:
        outcome = _handle_choose_teleport(game_state, game_input)
    elif game_input.kind == InputKind.ADVANCE:
        outcome = _ADVANCE
    else:
        outcome = None

    if outcome is None:
        return ApplyResult(accepted=False, phase=phase)

    if outcome == _ADVANCE:
        outcome = _advance(game_state, wall_map, rng)
        logger.info("Phase %s -> %s", phase.value, game_state.phase.value)

    game_state.event_log.append(
        GameEvent(turn=game_state.player.turn, phase=phase, description=outcome)
    )
    return ApplyResult(accepted=True, phase=game_state.phase, description=outcome)


class GameEngine:
    """A single play session.

    Each input is applied to a copy of the state that replaces the live
    state only once the input has fully succeeded. A fatal error leaves
    the last consistent state in place, marks the session over, and
    re-raises.
    """

    def __init__(
        self,
        rng: random.Random | None = None,
        wall_map: WallMap | None = None,
    ) -> None:
        self.rng = rng or random.Random(RNG_SEED)
        self.wall_map = wall_map or WallMap()
        self._state = create_game(self.rng)

    @property
    def state(self) -> GameState:
        return self._state

    def adjacent_cells(self) -> list[int]:
        """Cells the player could step to from where they stand."""
        return [other for _, other in neighbors(self._state.player.cell)]

    def apply(self, game_input: GameInput) -> ApplyResult:
        """Handle one classified click.

        Raises:
            SessionEnded: If an earlier input already ended the session.
            PlayerDied: If health reaches 0.
            InvariantViolation: If the engine's tables do not cover the state.
        """
        if self._state.status != GameStatus.ACTIVE:
            raise SessionEnded(f"Session is over ({self._state.status.value})")

        draft = self._state.model_copy(deep=True)
        try:
            result = process_input(draft, game_input, self.wall_map, self.rng)
        except PlayerDied as e:
            logger.warning("%s", e)
            self._state.status = GameStatus.DEAD
            raise
        except InvariantViolation as e:
            logger.error("Aborting session: %s", e)
            self._state.status = GameStatus.ABORTED
            raise

        if result.accepted:
            self._state = draft
        return result
