"""
Tests for reading and writing board files.
"""

import json

import pytest

from boardgame.actions import LadderAction, PropertyAction, TaxAction
from boardgame.board import build_board, create_race_board
from boardgame.exceptions import BoardFileError
from boardgame.filehandling.board_file import (
    board_from_dict,
    board_to_dict,
    read_board_file,
    write_board_file,
)
from boardgame.variants import Variant


def test_ladder_round_trip():
    """A down-ladder 25 -> 7 survives a write/read against a rebuilt board."""
    board = create_race_board(Variant.LADDER_CLASSIC)
    board.set_action(25, LadderAction(7, "down"))

    restored = board_from_dict(board_to_dict(board))

    assert restored.get_action(25) == LadderAction(7, "down")
    assert restored.get_tile(25).next_id == 26


@pytest.mark.parametrize("variant", list(Variant))
def test_full_layout_round_trip(tmp_path, variant):
    board = build_board(variant)
    path = write_board_file(board, tmp_path / "board.json")

    restored = read_board_file(path)

    assert restored.variant == variant
    assert len(restored) == len(board)
    assert [(t.tile_id, t.action) for t in restored] == [(t.tile_id, t.action) for t in board]
    assert [(t.tile_id, t.next_id) for t in restored] == [(t.tile_id, t.next_id) for t in board]


def test_file_uses_camel_case_keys():
    data = board_to_dict(build_board(Variant.PROPERTY))

    assert data["variantId"] == "monopolyGame"
    assert data["name"] == "Monopoly Game"
    by_id = {tile["id"]: tile for tile in data["tiles"]}
    assert by_id[2] == {
        "id": 2,
        "actionType": "property",
        "propertyName": "Skolegata",
        "cost": 6000,
        "colorGroup": "blue",
    }
    assert by_id[31] == {"id": 31, "actionType": "goToJail", "jailTileId": 11}
    assert by_id[5] == {"id": 5, "actionType": "tax", "percent": 10, "fixed": 20000}
    assert by_id[1] == {"id": 1, "actionType": "start"}


def test_owners_are_not_stored():
    board = build_board(Variant.PROPERTY)
    data = board_to_dict(board)
    assert all("owner" not in tile for tile in data["tiles"])


def test_tiles_without_action_type_are_ignored():
    data = {
        "name": "Custom",
        "variantId": "ladderGame",
        "tiles": [{"id": 3}, {"id": 4, "actionType": "wait"}],
    }
    board = board_from_dict(data)
    assert board.get_action(3) is None
    assert board.get_action(4) is not None
    # Unlisted tiles carry no action
    assert board.get_action(25) is None


def test_property_and_tax_records():
    data = {
        "name": "Custom",
        "variantId": "monopolyGame",
        "tiles": [
            {"id": 2, "actionType": "property", "propertyName": "Home", "cost": 500, "colorGroup": "blue"},
            {"id": 5, "actionType": "tax", "percent": 15, "fixed": 100},
        ],
    }
    board = board_from_dict(data)
    assert board.get_action(2) == PropertyAction("Home", 500, "blue")
    assert board.get_action(5) == TaxAction(15, 100)


@pytest.mark.parametrize(
    "tile",
    [
        {"id": 3, "actionType": "teleport"},
        {"id": 3, "actionType": "ladder", "destinationId": 9},
        {"id": 3, "actionType": "ladder", "destinationId": 9, "direction": "sideways"},
        {"id": 3, "actionType": "wealthTax", "amount": -5},
        {"id": 95, "actionType": "wait"},
    ],
)
def test_bad_tiles_rejected(tile):
    data = {"name": "Broken", "variantId": "ladderGame", "tiles": [tile]}
    with pytest.raises(BoardFileError) as exc_info:
        board_from_dict(data, "broken.json")
    assert "broken.json" in str(exc_info.value)


def test_unknown_tile_error_names_tile():
    data = {"name": "Broken", "variantId": "ladderGame", "tiles": [{"id": 3, "actionType": "teleport"}]}
    with pytest.raises(BoardFileError) as exc_info:
        board_from_dict(data)
    assert exc_info.value.tile_id == 3


def test_unknown_variant_rejected():
    with pytest.raises(BoardFileError):
        board_from_dict({"name": "x", "variantId": "chess", "tiles": []})


def test_missing_fields_rejected():
    with pytest.raises(BoardFileError):
        board_from_dict({"tiles": []})


def test_malformed_json(tmp_path):
    path = tmp_path / "board.json"
    path.write_text("{not json")
    with pytest.raises(BoardFileError) as exc_info:
        read_board_file(path)
    assert exc_info.value.path == str(path)


def test_missing_file(tmp_path):
    with pytest.raises(BoardFileError):
        read_board_file(tmp_path / "nope.json")


def test_written_file_is_json(tmp_path):
    path = write_board_file(build_board(Variant.LADDER_ADVANCED), tmp_path / "nested" / "board.json")
    data = json.loads(path.read_text())
    assert data["variantId"] == "ladderGameAdvanced"
    assert data["tiles"]
