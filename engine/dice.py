"""Dice rolling utilities for Temple Antics."""

import logging
import random
import re

from pydantic import BaseModel

from config import NEXT_TILE_MAX_REROLLS
from engine.errors import InvariantViolation

logger = logging.getLogger(__name__)


class DiceResult(BaseModel):
    """Result of a dice roll."""
    total: int
    rolls: list[int]
    modifier: int
    notation: str


def roll(notation: str, rng: random.Random | None = None) -> DiceResult:
    """Parse and roll dice notation like '2d6+3', '1d6', '4d6-1'.

    Args:
        notation: Dice notation string (e.g. "2d6+3").
        rng: Optional Random instance for seeded/testing rolls.

    Returns:
        DiceResult with total, individual rolls, modifier, and notation.
    """
    rng = rng or random.Random()
    notation = notation.strip().lower()

    match = re.match(r"^(\d+)d(\d+)([+-]\d+)?$", notation)
    if not match:
        raise ValueError(f"Invalid dice notation: {notation}")

    num_dice = int(match.group(1))
    die_size = int(match.group(2))
    modifier = int(match.group(3)) if match.group(3) else 0

    rolls = [rng.randint(1, die_size) for _ in range(num_dice)]
    total = sum(rolls) + modifier

    return DiceResult(
        total=total,
        rolls=rolls,
        modifier=modifier,
        notation=notation,
    )


def roll_d6(rng: random.Random | None = None) -> int:
    """Roll a single die face in 1..6."""
    return roll("1d6", rng=rng).total


def reroll_sixes(
    face: int,
    rng: random.Random | None = None,
    max_rerolls: int = NEXT_TILE_MAX_REROLLS,
) -> int:
    """Keep rerolling a next-tile face while it shows 6.

    Args:
        face: The face currently in the next-tile slot.
        rng: Optional Random instance for seeded/testing rolls.
        max_rerolls: Bound on the loop for pathological random streams.

    Returns:
        A face in 1..5.

    Raises:
        InvariantViolation: If the stream produced only sixes for too long.
    """
    rerolls = 0
    while face == 6:
        if rerolls >= max_rerolls:
            raise InvariantViolation(f"Next tile still 6 after {rerolls} rerolls")
        face = roll_d6(rng)
        rerolls += 1
    if rerolls:
        logger.info("Next tile rerolled %d time(s) to %d", rerolls, face)
    return face


def roll_next_tile(rng: random.Random | None = None) -> int:
    """Roll a fresh next-tile face that is never 6."""
    return reroll_sixes(roll_d6(rng), rng)
