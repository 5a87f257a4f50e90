"""Temple Antics rules: health, movement cost, tile effects, encounters."""

from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING

from pydantic import BaseModel

from config import (
    BEAST_ATTACK_DAMAGE,
    ELIXIR_HEAL,
    ITEM_TABLE,
    MAX_HEALTH,
    SNEAK_BEAST_DAMAGE,
    TILE_EFFECT_CELLS,
    TRAP_DAMAGE,
    TURNS_PER_BAND,
    WALL_BREAK_COST,
)
from engine.dice import roll_d6, roll_next_tile
from engine.errors import InvariantViolation
from models.game_state import PendingMove

if TYPE_CHECKING:
    from engine.grid import WallMap
    from models.board import Wall
    from models.game_state import Inventory, PlayerState

logger = logging.getLogger(__name__)

# Value granted by each tile-effect reward
TILE_REWARDS = {
    "idol": True,
    "pickaxe": 2,
    "elixir": True,
    "machete": True,
}


class EncounterOutcome(BaseModel):
    """What an encounter face did to the player."""
    face: int
    name: str
    roll: int | None = None
    damage: int = 0
    healed: int = 0
    item: str | None = None
    shortcut_tile: int | None = None    # Fresh next-tile face for a shortcut
    description: str


def turn_band(turn: int) -> int:
    """Difficulty band (0..2) for a turn number; turns past 18 stay in band 2."""
    return min((turn - 1) // TURNS_PER_BAND, 2)


def roll_band(face: int) -> int:
    """Band (0..2) for a d6 roll: 1-2, 3-4, 5-6."""
    return (face - 1) // 2


def set_health(player: PlayerState, value: int) -> PlayerState:
    """Store a new health value.

    Raises:
        InvariantViolation: If the value is outside 0..MAX_HEALTH.
    """
    if not 0 <= value <= MAX_HEALTH:
        raise InvariantViolation(f"Health {value} outside 0..{MAX_HEALTH}")
    player.health = value
    return player


def apply_damage(player: PlayerState, damage: int) -> PlayerState:
    """Reduce health, flooring at 0."""
    return set_health(player, max(0, player.health - damage))


def check_death(player: PlayerState) -> bool:
    return player.health <= 0


def heal(player: PlayerState, amount: int) -> int:
    """Raise health, capped at MAX_HEALTH.

    Returns:
        The health actually gained.
    """
    before = player.health
    set_health(player, min(MAX_HEALTH, before + amount))
    return player.health - before


def use_elixir(player: PlayerState) -> int:
    """Drink the elixir if carried.

    Returns:
        The health gained, or 0 if there was no elixir.
    """
    if not player.inventory.elixir:
        return 0
    player.inventory.elixir = False
    gained = heal(player, ELIXIR_HEAL)
    logger.info("Elixir used, +%d health (now %d)", gained, player.health)
    return gained


def grant_item(inventory: Inventory, item: str, value: bool | int) -> None:
    """Put an item into the inventory, replacing any previous count."""
    if not hasattr(inventory, item):
        raise InvariantViolation(f"Unknown item: {item}")
    setattr(inventory, item, value)
    logger.info("Granted %s=%s", item, value)


def candidate_move(
    player: PlayerState,
    built: set[int],
    wall_map: WallMap,
    direction: Wall,
    destination: int,
) -> PendingMove:
    """Price a step from the player's cell without committing it.

    Walking through a standing wall is allowed but costs WALL_BREAK_COST
    health (floored at 0) and knocks the wall down.
    """
    wall = wall_map.wall_id(player.cell, direction)
    if wall in built:
        return PendingMove(
            destination=destination,
            resulting_health=max(0, player.health - WALL_BREAK_COST),
            wall_to_break=wall,
        )
    return PendingMove(destination=destination, resulting_health=player.health)


def apply_tile_effect(player: PlayerState) -> str | None:
    """Claim the reward on the player's cell the first time it is reached.

    Returns:
        The reward name, or None if there was nothing to claim.
    """
    reward = TILE_EFFECT_CELLS.get(player.cell)
    if reward is None or player.cell in player.discovered:
        return None
    player.discovered.append(player.cell)
    grant_item(player.inventory, reward, TILE_REWARDS[reward])
    return reward


def resolve_encounter(
    face: int,
    player: PlayerState,
    rng: random.Random | None = None,
) -> EncounterOutcome:
    """Resolve the encounter die against the player.

    Health is floored at 0; the caller decides what death means.

    Args:
        face: Encounter face (1..6).
        player: The player (mutated in place).
        rng: Optional Random instance for seeded/testing rolls.

    Returns:
        EncounterOutcome describing what happened.

    Raises:
        InvariantViolation: If the face is not 1..6.
    """
    band = turn_band(player.turn)

    if face in (1, 3):
        name = "sneak beast" if face == 1 else "beast attack"
        table = SNEAK_BEAST_DAMAGE if face == 1 else BEAST_ATTACK_DAMAGE
        beast_roll = roll_d6(rng)
        damage = table[band][roll_band(beast_roll)]
        apply_damage(player, damage)
        return EncounterOutcome(
            face=face,
            name=name,
            roll=beast_roll,
            damage=damage,
            description=(
                f"A {name}! Roll {beast_roll} deals {damage} damage. "
                f"Health is {player.health}."
            ),
        )

    if face == 2:
        healed = heal(player, 1)
        return EncounterOutcome(
            face=face,
            name="rest",
            healed=healed,
            description=f"You rest and recover {healed} health.",
        )

    if face == 4:
        tile = roll_next_tile(rng)
        return EncounterOutcome(
            face=face,
            name="shortcut",
            shortcut_tile=tile,
            description=f"A shortcut! Draw tile {tile} and move again.",
        )

    if face == 5:
        if player.cell in TILE_EFFECT_CELLS:
            return EncounterOutcome(
                face=face,
                name="item",
                description="Nothing more to find here.",
            )
        item_roll = roll_d6(rng)
        item, value = ITEM_TABLE[item_roll]
        grant_item(player.inventory, item, value)
        return EncounterOutcome(
            face=face,
            name="item",
            roll=item_roll,
            item=item,
            description=f"You find a {item}.",
        )

    if face == 6:
        damage = TRAP_DAMAGE[band]
        apply_damage(player, damage)
        return EncounterOutcome(
            face=face,
            name="trap",
            damage=damage,
            description=f"A trap deals {damage} damage. Health is {player.health}.",
        )

    raise InvariantViolation(f"No encounter for face {face}")
