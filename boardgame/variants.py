"""
Predefined board configurations.
"""

from enum import Enum


class Variant(Enum):
    """Board variants; the value is the `variantId` stored in board files."""

    LADDER_CLASSIC = "ladderGame"
    LADDER_ADVANCED = "ladderGameAdvanced"
    LADDER_EXTREME = "ladderGameExtreme"
    PROPERTY = "monopolyGame"

    @property
    def is_race(self) -> bool:
        """True for the ladder race layouts."""
        return self is not Variant.PROPERTY

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @property
    def description(self) -> str:
        if self.is_race:
            return "A ladder game with 90 tiles."
        return "A classic Monopoly game with 40 tiles."

    @property
    def game_type(self) -> str:
        """Save-directory name shared by all layouts of the same game."""
        return "ladder_game" if self.is_race else "monopoly_game"

    @classmethod
    def from_id(cls, value: str) -> "Variant":
        """Look up a variant by id or display name."""
        for variant in cls:
            if value in (variant.value, variant.display_name):
                return variant
        raise ValueError(f"Unknown game variant: {value}")


_DISPLAY_NAMES = {
    Variant.LADDER_CLASSIC: "Ladder Game Classic",
    Variant.LADDER_ADVANCED: "Ladder Game Advanced",
    Variant.LADDER_EXTREME: "Ladder Game Extreme",
    Variant.PROPERTY: "Monopoly Game",
}
