"""
Dice used to move players around the board.
"""

import random
from typing import List, Optional, Tuple


class Die:
    """A single die that remembers its last rolled value."""

    def __init__(self, sides: int = 6, rng: Optional[random.Random] = None):
        if sides < 2:
            raise ValueError("A die needs at least 2 sides")
        self.sides = sides
        self.rng = rng or random.Random()
        self.value: Optional[int] = None

    def roll(self) -> int:
        """Roll the die and return a value in 1..sides."""
        self.value = self.rng.randint(1, self.sides)
        return self.value

    def __repr__(self) -> str:
        return f"Die(sides={self.sides}, value={self.value})"


class Dice:
    """A set of independent dice rolled together."""

    def __init__(self, count: int = 2, sides: int = 6, rng: Optional[random.Random] = None):
        if count < 1:
            raise ValueError("Dice needs at least one die")
        rng = rng or random.Random()
        self.dice: List[Die] = [Die(sides, rng) for _ in range(count)]

    @property
    def count(self) -> int:
        return len(self.dice)

    def roll(self) -> Tuple[int, ...]:
        """Roll every die and return the individual values."""
        return tuple(die.roll() for die in self.dice)

    @property
    def last_values(self) -> Tuple[Optional[int], ...]:
        return tuple(die.value for die in self.dice)

    @property
    def total(self) -> int:
        """Sum of the last roll (0 before the first roll)."""
        return sum(die.value or 0 for die in self.dice)

    @property
    def is_doubles(self) -> bool:
        """True when at least two dice were rolled and all show the same value."""
        values = self.last_values
        if len(values) < 2 or values[0] is None:
            return False
        return all(v == values[0] for v in values)

    def get_die(self, index: int) -> int:
        """Get the last value of the die at the given index."""
        if index < 0 or index >= len(self.dice):
            raise ValueError(f"Invalid die index: {index}")
        value = self.dice[index].value
        return 0 if value is None else value
