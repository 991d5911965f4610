"""
Tests for dice rolling.
"""

import random

import pytest

from boardgame.dice import Dice, Die


def test_die_value_before_first_roll():
    die = Die(6, random.Random(1))
    assert die.value is None


def test_die_rolls_within_range():
    die = Die(6, random.Random(7))
    for _ in range(200):
        value = die.roll()
        assert 1 <= value <= 6
        assert die.value == value


def test_die_rejects_too_few_sides():
    with pytest.raises(ValueError):
        Die(1)


def test_dice_total_and_last_values():
    """Total and last values reflect the most recent roll."""
    dice = Dice(2, 6, random.Random(3))
    values = dice.roll()

    assert len(values) == 2
    assert dice.last_values == values
    assert dice.total == sum(values)
    assert dice.get_die(0) == values[0]
    assert dice.get_die(1) == values[1]


def test_dice_total_is_zero_before_rolling():
    dice = Dice(2, 6, random.Random(3))
    assert dice.total == 0
    assert dice.get_die(0) == 0
    assert not dice.is_doubles


def test_dice_get_die_invalid_index():
    dice = Dice(2)
    with pytest.raises(ValueError):
        dice.get_die(2)
    with pytest.raises(ValueError):
        dice.get_die(-1)


def test_doubles_detection(script_dice, property_game):
    script_dice(property_game, 4, 4)
    property_game.dice.roll()
    assert property_game.dice.is_doubles

    script_dice(property_game, 4, 5)
    property_game.dice.roll()
    assert not property_game.dice.is_doubles


def test_single_die_never_doubles():
    dice = Dice(1, 6, random.Random(0))
    dice.roll()
    assert not dice.is_doubles


def test_seeded_dice_are_reproducible():
    first = Dice(2, 6, random.Random(42))
    second = Dice(2, 6, random.Random(42))
    assert [first.roll() for _ in range(20)] == [second.roll() for _ in range(20)]
