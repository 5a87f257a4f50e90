"""Tests for dice rolling utilities."""

import random

import pytest

from conftest import ScriptedRng
from engine.dice import DiceResult, reroll_sixes, roll, roll_d6, roll_next_tile
from engine.errors import InvariantViolation


class TestRoll:
    """Tests for the roll() function."""

    def test_basic_roll(self):
        """Roll 1d6 with a seeded RNG produces expected result."""
        rng = random.Random(42)
        result = roll("1d6", rng=rng)
        assert isinstance(result, DiceResult)
        assert len(result.rolls) == 1
        assert 1 <= result.rolls[0] <= 6
        assert result.modifier == 0
        assert result.total == result.rolls[0]

    def test_multiple_dice(self):
        """Roll 2d6 produces 2 individual rolls."""
        rng = random.Random(42)
        result = roll("2d6", rng=rng)
        assert len(result.rolls) == 2
        assert result.total == sum(result.rolls)

    def test_modifier(self):
        rng = random.Random(42)
        result = roll("1d6-1", rng=rng)
        assert result.modifier == -1
        assert result.total == result.rolls[0] - 1

    def test_invalid_notation(self):
        """Invalid notation raises ValueError."""
        with pytest.raises(ValueError):
            roll("bad")
        with pytest.raises(ValueError):
            roll("d6")

    def test_seeded_determinism(self):
        """Same seed produces same results."""
        result1 = roll("4d6", rng=random.Random(123))
        result2 = roll("4d6", rng=random.Random(123))
        assert result1.rolls == result2.rolls


class TestRollD6:
    """Tests for roll_d6()."""

    def test_range(self):
        rng = random.Random(7)
        faces = {roll_d6(rng) for _ in range(200)}
        assert faces == {1, 2, 3, 4, 5, 6}

    def test_uses_rng(self):
        assert roll_d6(ScriptedRng([4])) == 4


class TestRerollSixes:
    """Tests for reroll_sixes() and roll_next_tile()."""

    def test_non_six_kept(self):
        rng = ScriptedRng([])
        assert reroll_sixes(3, rng) == 3

    def test_six_rerolled_until_not_six(self):
        rng = ScriptedRng([6, 6, 2])
        assert reroll_sixes(6, rng) == 2
        assert rng.faces == []

    def test_bounded(self):
        """A stream of only sixes hits the reroll guard."""
        rng = ScriptedRng([6] * 5)
        with pytest.raises(InvariantViolation, match="still 6"):
            reroll_sixes(6, rng, max_rerolls=5)

    def test_roll_next_tile_never_six(self):
        rng = random.Random(99)
        assert all(roll_next_tile(rng) != 6 for _ in range(300))

    def test_roll_next_tile_scripted(self):
        assert roll_next_tile(ScriptedRng([6, 1])) == 1
