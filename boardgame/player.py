"""
Player state and management.
"""

from typing import Optional, Set


class PlayerState:
    """Represents the complete state of a player in the game."""

    def __init__(self, name: str, token: str = "Default", money: int = 0):
        if money < 0:
            raise ValueError("Money cannot be negative")
        self.name = name
        self.token = token or "Default"
        self.money = money
        self.current_tile_id: Optional[int] = None
        self.owned_property_ids: Set[int] = set()
        self.skip_next_turn = False
        self.bankrupt = False
        self.jailed = False
        self.jail_turn_count = 0
        self.free_parking = False

    def receive(self, amount: int) -> None:
        """Add money to the player's balance."""
        if amount < 0:
            raise ValueError("Cannot receive a negative amount")
        self.money += amount

    def pay(self, amount: int) -> bool:
        """
        Deduct money from the player's balance.

        Returns True if successful, False if the player cannot afford it.
        A failed payment leaves the balance untouched.
        """
        if amount < 0:
            raise ValueError("Cannot pay a negative amount")
        if self.money < amount:
            return False
        self.money -= amount
        return True

    def can_afford(self, amount: int) -> bool:
        return self.money >= amount

    def place_on_tile(self, tile_id: int) -> None:
        self.current_tile_id = tile_id

    def send_to_jail(self, jail_tile_id: int) -> None:
        """Jail the player; the next turn is skipped."""
        self.current_tile_id = jail_tile_id
        self.jailed = True
        self.jail_turn_count = 0
        self.skip_next_turn = True

    def release_from_jail(self) -> None:
        self.jailed = False
        self.jail_turn_count = 0

    def __repr__(self) -> str:
        return (
            f"PlayerState(name='{self.name}', money={self.money}, "
            f"tile={self.current_tile_id}, bankrupt={self.bankrupt})"
        )


class Player:
    """
    Convenience wrapper for player information.
    This is what callers hand to `create_game` and `add_player`.
    """

    def __init__(self, name: str, token: str = "Default"):
        self.name = name
        self.token = token

    def __repr__(self) -> str:
        return f"Player(name='{self.name}', token='{self.token}')"
