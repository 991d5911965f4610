"""
Tests for the player roster file.
"""

import pytest

from boardgame.board import build_board
from boardgame.exceptions import PlayerFileError
from boardgame.filehandling.player_file import (
    format_player_line,
    parse_player_lines,
    read_player_file,
    write_player_file,
)
from boardgame.player import PlayerState
from boardgame.variants import Variant


@pytest.fixture
def board():
    return build_board(Variant.PROPERTY)


def test_round_trip(tmp_path, board):
    alice = PlayerState("Alice", "Car", 45000)
    alice.current_tile_id = 11
    alice.owned_property_ids.update({2, 4})
    alice.jailed = True
    alice.jail_turn_count = 2
    bob = PlayerState("Bob", "Hat", 0)
    bob.current_tile_id = 40
    bob.free_parking = True
    bob.skip_next_turn = True

    path = write_player_file([alice, bob], tmp_path / "players.csv", current_player="Bob")
    players, current = read_player_file(path, board)

    assert current == "Bob"
    loaded_alice, loaded_bob = players
    assert loaded_alice.name == "Alice"
    assert loaded_alice.token == "Car"
    assert loaded_alice.money == 45000
    assert loaded_alice.current_tile_id == 11
    assert loaded_alice.owned_property_ids == {2, 4}
    assert loaded_alice.jailed
    assert loaded_alice.jail_turn_count == 2
    assert loaded_bob.free_parking
    assert loaded_bob.skip_next_turn
    assert board.get_property(2).owner is loaded_alice
    assert board.get_property(4).owner is loaded_alice


def test_line_format():
    player = PlayerState("Alice", "Car", 100)
    player.current_tile_id = 7
    player.owned_property_ids.update({9, 7})
    assert format_player_line(player) == "Alice, Car, 7, 100, 7;9, false, false, false, 0, false"


def test_short_lines_and_legacy_property_names(board):
    lines = [
        "CURRENT_PLAYER:Bob",
        "Alice, Car, 3, 80000, Skolegata;Brattorgata",
        "",
        "Bob, Hat, 12, 90000,",
    ]
    players, current = parse_player_lines(lines, board)

    assert current == "Bob"
    assert [p.name for p in players] == ["Alice", "Bob"]
    assert players[0].owned_property_ids == {2, 4}
    assert players[1].owned_property_ids == set()
    assert not players[0].jailed


def test_ownership_must_be_exclusive(board):
    lines = ["Alice, Car, 3, 1, 2", "Bob, Hat, 3, 1, 2"]
    with pytest.raises(PlayerFileError) as exc_info:
        parse_player_lines(lines, board, "players.csv")
    assert exc_info.value.line_number == 2


@pytest.mark.parametrize(
    "line",
    [
        "Alice, Car, 3",
        "Alice, Car, three, 100,",
        "Alice, Car, 3, lots,",
        "Alice, Car, 3, -5,",
        "Alice, Car, 99, 100,",
        "Alice, Car, 3, 100, Atlantis",
        "Alice, Car, 3, 100, 3",
        "Alice, Car, 3, 100, , maybe, false, false, 0, false",
        ", Car, 3, 100,",
    ],
)
def test_malformed_lines(board, line):
    with pytest.raises(PlayerFileError) as exc_info:
        parse_player_lines([line], board, "players.csv")
    assert exc_info.value.line_number == 1
    assert "players.csv" in str(exc_info.value)


def test_duplicate_names_rejected(board):
    with pytest.raises(PlayerFileError):
        parse_player_lines(["Alice, Car, 1, 1,", "Alice, Hat, 1, 1,"], board)


def test_unknown_current_player_rejected(board):
    with pytest.raises(PlayerFileError):
        parse_player_lines(["CURRENT_PLAYER:Zed", "Alice, Car, 1, 1,"], board)


def test_reserved_characters_rejected_on_write(tmp_path):
    player = PlayerState("Smith, Jr", "Car", 1)
    with pytest.raises(PlayerFileError):
        write_player_file([player], tmp_path / "players.csv")


def test_missing_file(tmp_path, board):
    with pytest.raises(PlayerFileError):
        read_player_file(tmp_path / "missing.csv", board)


def test_roster_without_players_rejected(board):
    with pytest.raises(PlayerFileError):
        parse_player_lines(["CURRENT_PLAYER:Alice", ""], board, "players.csv")


def test_landmark_legacy_name(board):
    players, _ = parse_player_lines(["Alice, Car, 3, 80000, Kristiansen Festning"], board)
    assert players[0].owned_property_ids == {26}
