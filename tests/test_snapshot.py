"""
Tests for the public game snapshot.
"""

import json

from boardgame.snapshot import serialize_snapshot


def test_snapshot_fields(property_game, give_property):
    alice = property_game.players[0]
    give_property(property_game, alice, 7)

    snapshot = serialize_snapshot(property_game)

    assert snapshot["variant"] == "monopolyGame"
    assert snapshot["phase"] == "in_progress"
    assert snapshot["current_player"] == "Alice"
    assert snapshot["winner"] is None
    assert snapshot["pending_decision"] is None
    first = snapshot["players"][0]
    assert first["name"] == "Alice"
    assert first["money"] == 100000
    assert first["tile_id"] == 1
    assert first["properties"] == [{"tile_id": 7, "name": "Sverres gate", "color_group": "pink"}]
    owners = {p["tile_id"]: p["owner"] for p in snapshot["properties"]}
    assert owners[7] == "Alice"
    assert owners[9] is None
    # JSON-serializable
    json.dumps(snapshot)


def test_snapshot_includes_pending_decision(property_game, script_dice):
    script_dice(property_game, 1, 5)
    property_game.process_turn()

    decision = serialize_snapshot(property_game)["pending_decision"]

    assert decision["kind"] == "property_purchase"
    assert decision["player"] == "Alice"
    assert decision["tile_id"] == 7


def test_snapshot_of_finished_game(property_game):
    property_game.declare_bankruptcy(property_game.players[1])
    snapshot = serialize_snapshot(property_game)
    assert snapshot["phase"] == "over"
    assert snapshot["winner"] == "Alice"
    assert snapshot["players"][1]["is_bankrupt"]
