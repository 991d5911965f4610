"""
Game configuration settings.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class GameConfig:
    """Rules configuration for a single game session."""

    starting_money: int = 100000
    pass_go_reward: int = 20000
    jail_bail: int = 5000
    max_jail_turns: int = 3

    dice_count: int = 2
    dice_sides: int = 6

    chance_move_steps: int = 3
    chance_credit: int = 5000
    chance_debit: int = 3000
    chance_transfer: int = 1000

    seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.dice_count < 1:
            raise ValueError("dice_count must be at least 1")
        if self.dice_sides < 2:
            raise ValueError("dice_sides must be at least 2")
        if self.starting_money < 0:
            raise ValueError("starting_money cannot be negative")
