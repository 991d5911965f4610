"""
Tests for the Chance tile effects.
"""

import pytest

from boardgame import GameConfig, Variant, create_game
from boardgame.board import LANDMARK_GROUP
from boardgame.decisions import DecisionKind
from boardgame.exceptions import IllegalTileReferenceError
from boardgame.resolution import ChanceEffect, apply_chance, perform_action, resolve_chance


def test_chance_draw_uses_session_rng(property_game, monkeypatch):
    alice = property_game.players[0]
    monkeypatch.setattr(property_game.rng, "choice", lambda seq: ChanceEffect.CREDIT)

    perform_action(property_game, alice, 3)

    assert alice.money == 105000


def test_chance_draws_every_effect_eventually(two_players):
    """Over many draws each of the six effects comes up."""
    seen = set()
    for seed in range(120):
        game = create_game(Variant.PROPERTY, two_players, GameConfig(seed=seed))
        game.initialize_game()
        alice = game.players[0]
        alice.current_tile_id = 13
        seen.add(resolve_chance(game, alice, 13))
    assert seen == set(ChanceEffect)


def test_credit(property_game):
    alice = property_game.players[0]
    apply_chance(property_game, alice, 3, ChanceEffect.CREDIT)
    assert alice.money == 105000


def test_debit(property_game):
    alice = property_game.players[0]
    apply_chance(property_game, alice, 3, ChanceEffect.DEBIT)
    assert alice.money == 97000


def test_debit_unaffordable(property_game):
    alice = property_game.players[0]
    alice.money = 1000
    apply_chance(property_game, alice, 3, ChanceEffect.DEBIT)
    assert alice.bankrupt
    assert alice.money == 1000


def test_move_forward_triggers_landing_property(property_game):
    alice = property_game.players[0]
    alice.current_tile_id = 3

    apply_chance(property_game, alice, 3, ChanceEffect.MOVE_FORWARD)

    assert alice.current_tile_id == 6
    request = property_game.pending_decision
    assert request.kind == DecisionKind.PROPERTY_PURCHASE
    assert request.tile_id == 6


def test_move_forward_triggers_wealth_tax(property_game):
    alice = property_game.players[0]
    alice.current_tile_id = 34

    apply_chance(property_game, alice, 34, ChanceEffect.MOVE_FORWARD)

    assert alice.current_tile_id == 37
    assert alice.money == 90000


def test_move_forward_wraps_and_pays_pass_go(property_game):
    alice = property_game.players[0]
    alice.current_tile_id = 39

    apply_chance(property_game, alice, 39, ChanceEffect.MOVE_FORWARD)

    assert alice.current_tile_id == 2
    assert alice.money == 120000


def test_move_forward_does_not_retrigger_chance(property_game, monkeypatch):
    """A Chance move that lands on another Chance tile stops there."""
    alice = property_game.players[0]
    property_game.config.chance_move_steps = 5
    alice.current_tile_id = 3
    monkeypatch.setattr(property_game.rng, "choice", lambda seq: pytest.fail("drew a second card"))

    apply_chance(property_game, alice, 3, ChanceEffect.MOVE_FORWARD)

    assert alice.current_tile_id == 8


@pytest.mark.parametrize("chance_tile,landmark", [(3, 6), (8, 6), (13, 16), (18, 16), (23, 26), (29, 26), (34, 36), (39, 36)])
def test_landmark_teleport(property_game, chance_tile, landmark):
    alice = property_game.players[0]
    alice.current_tile_id = chance_tile

    apply_chance(property_game, alice, chance_tile, ChanceEffect.LANDMARK)

    assert alice.current_tile_id == landmark
    assert property_game.board.get_property(landmark).color_group == LANDMARK_GROUP
    assert property_game.pending_decision.tile_id == landmark


def test_landmark_teleport_does_not_pay_pass_go(property_game):
    alice = property_game.players[0]
    alice.current_tile_id = 39
    apply_chance(property_game, alice, 39, ChanceEffect.LANDMARK)
    assert alice.money == 100000


def test_landmark_teleport_pays_rent(property_game, give_property):
    alice, bob = property_game.players
    give_property(property_game, bob, 26)
    alice.current_tile_id = 29

    apply_chance(property_game, alice, 29, ChanceEffect.LANDMARK)

    assert alice.money == 100000 - 4000
    assert bob.money == 100000 + 4000


def test_landmark_teleport_outside_buckets_is_noop(property_game):
    alice = property_game.players[0]
    alice.current_tile_id = 12
    apply_chance(property_game, alice, 12, ChanceEffect.LANDMARK)
    assert alice.current_tile_id == 12
    assert property_game.pending_decision is None


def test_landmark_missing_tile_is_fatal(ladder_game):
    """On a board without the landmark tile the reference is illegal."""
    ladder_game.board.tiles.pop(6)
    alice = ladder_game.players[0]
    with pytest.raises(IllegalTileReferenceError):
        apply_chance(ladder_game, alice, 3, ChanceEffect.LANDMARK)


def test_pay_each_player(three_player_game):
    alice, bob, carol = three_player_game.players
    apply_chance(three_player_game, alice, 3, ChanceEffect.PAY_EACH)
    assert alice.money == 98000
    assert bob.money == 101000
    assert carol.money == 101000


def test_pay_each_player_shortfall_bankrupts_payer(three_player_game):
    alice, bob, carol = three_player_game.players
    alice.money = 1500

    apply_chance(three_player_game, alice, 3, ChanceEffect.PAY_EACH)

    assert bob.money == 101000
    assert alice.bankrupt
    assert alice.money == 500
    assert carol.money == 100000


def test_collect_from_each_player(three_player_game):
    alice, bob, carol = three_player_game.players
    apply_chance(three_player_game, alice, 3, ChanceEffect.COLLECT_FROM_EACH)
    assert alice.money == 102000
    assert bob.money == 99000
    assert carol.money == 99000


def test_collect_from_each_shortfall_bankrupts_only_that_payer(three_player_game):
    alice, bob, carol = three_player_game.players
    bob.money = 500

    apply_chance(three_player_game, alice, 3, ChanceEffect.COLLECT_FROM_EACH)

    assert bob.bankrupt
    assert bob.money == 500
    assert not alice.bankrupt
    assert carol.money == 99000
    assert alice.money == 101000
