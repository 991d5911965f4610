"""
Tile action definitions.

A tile carries at most one action. The set of actions is closed: every
action class has a unique `ActionType` tag, and the effect of each one is
resolved in `boardgame.resolution`.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, ClassVar, Optional

if TYPE_CHECKING:
    from boardgame.player import PlayerState


class ActionType(Enum):
    """Tags of the tile action variants (also the board file `actionType`)."""

    LADDER = "ladder"
    BACK_TO_START = "backToStart"
    WAIT = "wait"
    PROPERTY = "property"
    CHANCE = "chance"
    TAX = "tax"
    WEALTH_TAX = "wealthTax"
    START = "start"
    JAIL = "jail"
    GO_TO_JAIL = "goToJail"
    FREE_PARKING = "freeParking"


LADDER_DIRECTIONS = ("up", "down")


@dataclass
class TileAction:
    """Base class for an action attached to a tile."""

    kind: ClassVar[ActionType]
    label: ClassVar[str] = ""

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


@dataclass(repr=False)
class LadderAction(TileAction):
    """Moves the player straight to another tile."""

    kind: ClassVar[ActionType] = ActionType.LADDER
    label: ClassVar[str] = "Ladder"

    destination_id: int
    direction: str

    def __post_init__(self) -> None:
        if self.direction not in LADDER_DIRECTIONS:
            raise ValueError(f"Ladder direction must be 'up' or 'down', got '{self.direction}'")

    def __repr__(self) -> str:
        return f"LadderAction(destination_id={self.destination_id}, direction='{self.direction}')"


@dataclass(repr=False)
class BackToStartAction(TileAction):
    """Sends the player back to the first tile."""

    kind: ClassVar[ActionType] = ActionType.BACK_TO_START
    label: ClassVar[str] = "Back to Start"


@dataclass(repr=False)
class WaitAction(TileAction):
    """The player sits out their next turn."""

    kind: ClassVar[ActionType] = ActionType.WAIT
    label: ClassVar[str] = "Wait"


@dataclass(repr=False)
class PropertyAction(TileAction):
    """An ownable property; the owner is the only mutable action state."""

    kind: ClassVar[ActionType] = ActionType.PROPERTY
    label: ClassVar[str] = "Property"

    name: str
    cost: int
    color_group: str
    owner: Optional["PlayerState"] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if self.cost < 0:
            raise ValueError(f"Property cost cannot be negative: {self.cost}")

    def is_owned(self) -> bool:
        """Check if property is owned by any player."""
        return self.owner is not None

    def base_rent(self) -> int:
        """Rent charged when the owner does not hold the whole group."""
        return self.cost * 2 // 10

    def __repr__(self) -> str:
        owner = self.owner.name if self.owner is not None else None
        return (
            f"PropertyAction(name='{self.name}', cost={self.cost}, "
            f"color_group='{self.color_group}', owner={owner!r})"
        )


@dataclass(repr=False)
class ChanceAction(TileAction):
    """Draws a random chance effect."""

    kind: ClassVar[ActionType] = ActionType.CHANCE
    label: ClassVar[str] = "Chance"


@dataclass(repr=False)
class TaxAction(TileAction):
    """Player chooses between a percentage of their money and a fixed amount."""

    kind: ClassVar[ActionType] = ActionType.TAX
    label: ClassVar[str] = "Tax"

    percent: int
    fixed: int

    def __post_init__(self) -> None:
        if not 0 <= self.percent <= 100:
            raise ValueError(f"Tax percent must be between 0 and 100, got {self.percent}")
        if self.fixed < 0:
            raise ValueError(f"Fixed tax cannot be negative: {self.fixed}")

    def percent_amount(self, money: int) -> int:
        return money * self.percent // 100

    def __repr__(self) -> str:
        return f"TaxAction(percent={self.percent}, fixed={self.fixed})"


@dataclass(repr=False)
class WealthTaxAction(TileAction):
    """Fixed, unconditional payment to the bank."""

    kind: ClassVar[ActionType] = ActionType.WEALTH_TAX
    label: ClassVar[str] = "Wealth Tax"

    amount: int

    def __post_init__(self) -> None:
        if self.amount < 0:
            raise ValueError(f"Wealth tax cannot be negative: {self.amount}")

    def __repr__(self) -> str:
        return f"WealthTaxAction(amount={self.amount})"


@dataclass(repr=False)
class StartAction(TileAction):
    """Pays the pass-go reward when landed on."""

    kind: ClassVar[ActionType] = ActionType.START
    label: ClassVar[str] = "Start"


@dataclass(repr=False)
class JailAction(TileAction):
    """Jail, or just visiting for players who are not jailed."""

    kind: ClassVar[ActionType] = ActionType.JAIL
    label: ClassVar[str] = "Jail"


@dataclass(repr=False)
class GoToJailAction(TileAction):
    """Sends the player directly to the jail tile."""

    kind: ClassVar[ActionType] = ActionType.GO_TO_JAIL
    label: ClassVar[str] = "Go To Jail"

    jail_tile_id: int

    def __repr__(self) -> str:
        return f"GoToJailAction(jail_tile_id={self.jail_tile_id})"


@dataclass(repr=False)
class FreeParkingAction(TileAction):
    """Grants one-shot immunity from the next rent payment."""

    kind: ClassVar[ActionType] = ActionType.FREE_PARKING
    label: ClassVar[str] = "Free Parking"
