"""Tests for health, movement cost, tile effects, and encounters."""

import pytest

from conftest import ScriptedRng
from config import TILE_EFFECT_CELLS, cell
from engine.errors import InvariantViolation
from engine.grid import WallMap
from engine.rules import (
    apply_damage,
    apply_tile_effect,
    candidate_move,
    check_death,
    resolve_encounter,
    roll_band,
    set_health,
    turn_band,
    use_elixir,
)
from models.board import Wall
from models.game_state import Inventory, PlayerState

IDOL_CELL = cell(0, 3)
PLAIN_CELL = cell(2, 4)


def _make_player(health: int = 6, turn: int = 1, at: int = PLAIN_CELL, **items) -> PlayerState:
    """Helper to create a test player."""
    return PlayerState(health=health, turn=turn, cell=at, inventory=Inventory(**items))


class TestBands:
    """Tests for turn_band() and roll_band()."""

    def test_turn_bands(self):
        assert [turn_band(t) for t in (1, 6, 7, 12, 13, 18)] == [0, 0, 1, 1, 2, 2]

    def test_late_turns_stay_in_last_band(self):
        assert turn_band(40) == 2

    def test_roll_bands(self):
        assert [roll_band(f) for f in range(1, 7)] == [0, 0, 1, 1, 2, 2]


class TestHealth:
    """Tests for set_health(), apply_damage(), and use_elixir()."""

    def test_set_health(self):
        player = _make_player()
        set_health(player, 3)
        assert player.health == 3

    def test_set_health_above_max(self):
        with pytest.raises(InvariantViolation):
            set_health(_make_player(), 7)

    def test_damage_floors_at_zero(self):
        player = apply_damage(_make_player(health=2), 5)
        assert player.health == 0
        assert check_death(player)

    def test_elixir_heals_four(self):
        player = _make_player(health=1, elixir=True)
        assert use_elixir(player) == 4
        assert player.health == 5
        assert not player.inventory.elixir

    def test_elixir_clamped_at_six(self):
        player = _make_player(health=4, elixir=True)
        assert use_elixir(player) == 2
        assert player.health == 6

    def test_no_elixir(self):
        player = _make_player(health=2)
        assert use_elixir(player) == 0
        assert player.health == 2


class TestCandidateMove:
    """Tests for candidate_move()."""

    def test_open_side_is_free(self):
        walls = WallMap()
        player = _make_player(health=5)
        move = candidate_move(player, set(), walls, Wall.RIGHT, cell(2, 5))
        assert move.destination == cell(2, 5)
        assert move.resulting_health == 5
        assert move.wall_to_break is None

    def test_built_wall_costs_four(self):
        walls = WallMap()
        wall = walls.wall_id(PLAIN_CELL, Wall.RIGHT)
        player = _make_player(health=6)
        move = candidate_move(player, {wall}, walls, Wall.RIGHT, cell(2, 5))
        assert move.resulting_health == 2
        assert move.wall_to_break == wall

    def test_wall_cost_floors_at_zero(self):
        walls = WallMap()
        wall = walls.wall_id(PLAIN_CELL, Wall.TOP)
        player = _make_player(health=3)
        move = candidate_move(player, {wall}, walls, Wall.TOP, cell(1, 4))
        assert move.resulting_health == 0

    def test_does_not_mutate(self):
        walls = WallMap()
        wall = walls.wall_id(PLAIN_CELL, Wall.LEFT)
        built = {wall}
        player = _make_player(health=6)
        candidate_move(player, built, walls, Wall.LEFT, cell(2, 3))
        assert built == {wall}
        assert player.health == 6
        assert player.cell == PLAIN_CELL


class TestTileEffect:
    """Tests for apply_tile_effect()."""

    def test_rewards(self):
        expected = {
            "idol": ("idol", True),
            "pickaxe": ("pickaxe", 2),
            "elixir": ("elixir", True),
            "machete": ("machete", True),
        }
        for cell_id, reward in TILE_EFFECT_CELLS.items():
            player = _make_player(at=cell_id)
            assert apply_tile_effect(player) == reward
            field, value = expected[reward]
            assert getattr(player.inventory, field) == value

    def test_only_once(self):
        player = _make_player(at=IDOL_CELL)
        assert apply_tile_effect(player) == "idol"
        player.inventory.idol = False
        assert apply_tile_effect(player) is None
        assert not player.inventory.idol

    def test_plain_cell(self):
        player = _make_player()
        assert apply_tile_effect(player) is None
        assert player.inventory == Inventory()


class TestEncounters:
    """Tests for resolve_encounter()."""

    def test_sneak_beast_table(self):
        player = _make_player(turn=1)
        outcome = resolve_encounter(1, player, ScriptedRng([1]))
        assert outcome.damage == 2
        assert player.health == 4

        player = _make_player(turn=13)
        outcome = resolve_encounter(1, player, ScriptedRng([6]))
        assert outcome.damage == 6
        assert player.health == 0

    def test_beast_attack_one_less_than_sneak(self):
        for turn in (1, 7, 13):
            for face in range(1, 7):
                sneak = resolve_encounter(1, _make_player(turn=turn), ScriptedRng([face]))
                beast = resolve_encounter(3, _make_player(turn=turn), ScriptedRng([face]))
                assert beast.damage == sneak.damage - 1

    @pytest.mark.parametrize("encounter", [1, 3, 6])
    def test_damage_escalates_with_turn_band(self, encounter):
        for face in range(1, 7):
            damages = [
                resolve_encounter(encounter, _make_player(turn=turn), ScriptedRng([face])).damage
                for turn in (1, 7, 13)
            ]
            assert damages == sorted(damages)

    def test_rest_heals_one(self):
        player = _make_player(health=3)
        outcome = resolve_encounter(2, player)
        assert outcome.healed == 1
        assert player.health == 4

    def test_rest_never_above_six(self):
        player = _make_player(health=6)
        outcome = resolve_encounter(2, player)
        assert outcome.healed == 0
        assert player.health == 6

    def test_shortcut_rolls_non_six_tile(self):
        player = _make_player()
        outcome = resolve_encounter(4, player, ScriptedRng([6, 6, 3]))
        assert outcome.shortcut_tile == 3
        assert player.health == 6

    @pytest.mark.parametrize(
        "face,field,value",
        [
            (1, "charm", 2),
            (2, "machete", True),
            (3, "pickaxe", 2),
            (4, "shotgun", 2),
            (5, "bandage", 2),
            (6, "elixir", True),
        ],
    )
    def test_item_table(self, face, field, value):
        player = _make_player()
        outcome = resolve_encounter(5, player, ScriptedRng([face]))
        assert outcome.item == field
        assert getattr(player.inventory, field) == value

    def test_no_item_on_tile_effect_cell(self):
        player = _make_player(at=IDOL_CELL)
        rng = ScriptedRng([3])
        outcome = resolve_encounter(5, player, rng)
        assert outcome.item is None
        assert player.inventory == Inventory()
        assert rng.faces == [3]

    def test_trap_by_band(self):
        assert [
            resolve_encounter(6, _make_player(turn=turn)).damage
            for turn in (1, 7, 13)
        ] == [1, 2, 3]

    def test_trap_floors_at_zero(self):
        player = _make_player(health=2, turn=13)
        resolve_encounter(6, player)
        assert player.health == 0

    def test_unknown_face(self):
        with pytest.raises(InvariantViolation):
            resolve_encounter(7, _make_player())
