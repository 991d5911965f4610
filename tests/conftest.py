"""Shared test fixtures for the board game engine tests."""

import random

import pytest

from boardgame import GameConfig, Player, Variant, create_game


class ScriptedRandom(random.Random):
    """Random source whose dice rolls come from a fixed list."""

    def __init__(self, rolls):
        super().__init__(0)
        self.rolls = list(rolls)

    def randint(self, a, b):
        return self.rolls.pop(0)


@pytest.fixture
def game_config():
    """Default game configuration with fixed seed for reproducibility."""
    return GameConfig(seed=42)


@pytest.fixture
def two_players():
    """Two test players."""
    return [Player("Alice", "Car"), Player("Bob", "Hat")]


@pytest.fixture
def three_players():
    """Three test players."""
    return [Player("Alice", "Car"), Player("Bob", "Hat"), Player("Carol", "Dog")]


@pytest.fixture
def property_game(game_config, two_players):
    """Initialized two-player property game."""
    game = create_game(Variant.PROPERTY, two_players, game_config)
    game.initialize_game()
    return game


@pytest.fixture
def three_player_game(game_config, three_players):
    """Initialized three-player property game."""
    game = create_game(Variant.PROPERTY, three_players, game_config)
    game.initialize_game()
    return game


@pytest.fixture
def ladder_game(game_config, two_players):
    """Initialized two-player classic ladder game."""
    game = create_game(Variant.LADDER_CLASSIC, two_players, game_config)
    game.initialize_game()
    return game


@pytest.fixture
def script_dice():
    """Return a function that makes a game's dice produce the given values in order."""

    def _script(game, *values):
        rng = ScriptedRandom(values)
        for die in game.dice.dice:
            die.rng = rng
        return rng

    return _script


@pytest.fixture
def give_property():
    """Return a function that hands a property tile to a player."""

    def _give(game, player, *tile_ids):
        for tile_id in tile_ids:
            prop = game.board.get_property(tile_id)
            prop.owner = player
            player.owned_property_ids.add(tile_id)

    return _give
