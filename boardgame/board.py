"""
Tile graph and the per-variant board layouts.
"""

from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Tuple

from boardgame.actions import (
    BackToStartAction,
    ChanceAction,
    FreeParkingAction,
    GoToJailAction,
    JailAction,
    LadderAction,
    PropertyAction,
    StartAction,
    TaxAction,
    TileAction,
    WaitAction,
    WealthTaxAction,
)
from boardgame.exceptions import TileNotFoundError
from boardgame.variants import Variant

RACE_TILE_COUNT = 90
PROPERTY_TILE_COUNT = 40

LANDMARK_GROUP = "landmark"
JAIL_TILE_ID = 11

# Chance tile -> nearest landmark tile
CHANCE_LANDMARKS: Dict[int, int] = {
    3: 6,
    8: 6,
    13: 16,
    18: 16,
    23: 26,
    29: 26,
    34: 36,
    39: 36,
}


@dataclass
class Tile:
    """A node in the board graph. `next_id` is None on the last race tile."""

    tile_id: int
    next_id: Optional[int] = None
    action: Optional[TileAction] = None

    @property
    def name(self) -> str:
        if isinstance(self.action, PropertyAction):
            return self.action.name
        if self.action is not None:
            return self.action.label
        return f"Tile {self.tile_id}"

    def __repr__(self) -> str:
        return f"Tile(id={self.tile_id}, next={self.next_id}, action={self.action!r})"


class Board:
    """An id-keyed registry of tiles."""

    def __init__(self, variant: Optional[Variant] = None):
        self.variant = variant
        self.tiles: Dict[int, Tile] = {}

    def add_tile(self, tile: Tile) -> None:
        """Register a tile. Ids must be unique."""
        if tile.tile_id in self.tiles:
            raise ValueError(f"Tile {tile.tile_id} already exists")
        self.tiles[tile.tile_id] = tile

    def get_tile(self, tile_id: int) -> Tile:
        """Get the tile with the given id, raising TileNotFoundError if unknown."""
        try:
            return self.tiles[tile_id]
        except KeyError:
            raise TileNotFoundError(tile_id) from None

    def has_tile(self, tile_id: int) -> bool:
        return tile_id in self.tiles

    def __len__(self) -> int:
        return len(self.tiles)

    def __iter__(self) -> Iterator[Tile]:
        for tile_id in sorted(self.tiles):
            yield self.tiles[tile_id]

    @property
    def first_tile_id(self) -> int:
        if not self.tiles:
            raise TileNotFoundError(1)
        return min(self.tiles)

    @property
    def last_tile_id(self) -> int:
        if not self.tiles:
            raise TileNotFoundError(1)
        return max(self.tiles)

    def link(self, tile_id: int, next_id: int) -> None:
        """Point a tile's `next` at another registered tile."""
        self.get_tile(next_id)
        self.get_tile(tile_id).next_id = next_id

    def set_action(self, tile_id: int, action: Optional[TileAction]) -> None:
        self.get_tile(tile_id).action = action

    def get_action(self, tile_id: int) -> Optional[TileAction]:
        return self.get_tile(tile_id).action

    def walk(self, from_id: int, steps: int) -> Tuple[int, int]:
        """
        Follow the `next` chain up to `steps` times.

        Stops early at a tile without a `next` link.

        Returns:
            (destination id, steps actually taken)
        """
        current = self.get_tile(from_id)
        taken = 0
        for _ in range(max(steps, 0)):
            if current.next_id is None:
                break
            current = self.get_tile(current.next_id)
            taken += 1
        return current.tile_id, taken

    def get_property(self, tile_id: int) -> Optional[PropertyAction]:
        """Get the property on a tile, or None if the tile holds no property."""
        action = self.get_tile(tile_id).action
        return action if isinstance(action, PropertyAction) else None

    def property_tiles(self) -> List[Tuple[int, PropertyAction]]:
        """All (tile id, property) pairs in tile order."""
        return [
            (tile.tile_id, tile.action)
            for tile in self
            if isinstance(tile.action, PropertyAction)
        ]

    def get_color_group(self, color_group: str) -> List[int]:
        """Get all property tile ids in a color group."""
        return [tid for tid, prop in self.property_tiles() if prop.color_group == color_group]

    def find_property_by_name(self, name: str) -> Optional[int]:
        """Get the tile id holding the property with this name."""
        for tile_id, prop in self.property_tiles():
            if prop.name == name:
                return tile_id
        return None


def build_board(variant: Variant) -> Board:
    """Build the fixed topology for a variant and attach its action set."""
    if variant.is_race:
        board = create_race_board(variant)
        for tile_id, action in race_layout(variant):
            board.set_action(tile_id, action)
    else:
        board = create_property_board(variant)
        for tile_id, action in property_layout():
            board.set_action(tile_id, action)
    return board


def create_race_board(variant: Variant = Variant.LADDER_CLASSIC) -> Board:
    """Tiles 1..90 linked id -> id + 1; the last tile has no `next`."""
    board = Board(variant)
    for tile_id in range(1, RACE_TILE_COUNT + 1):
        board.add_tile(Tile(tile_id))
    for tile_id in range(1, RACE_TILE_COUNT):
        board.link(tile_id, tile_id + 1)
    return board


def create_property_board(variant: Variant = Variant.PROPERTY) -> Board:
    """Tiles 1..40 linked id -> id + 1, wrapping 40 -> 1."""
    board = Board(variant)
    for tile_id in range(1, PROPERTY_TILE_COUNT + 1):
        board.add_tile(Tile(tile_id))
    for tile_id in range(1, PROPERTY_TILE_COUNT + 1):
        board.link(tile_id, tile_id % PROPERTY_TILE_COUNT + 1)
    return board


def _common_race_actions() -> List[Tuple[int, TileAction]]:
    return [
        (25, LadderAction(7, "down")),
        (38, LadderAction(1, "down")),
        (48, LadderAction(13, "down")),
        (70, LadderAction(30, "down")),
        (79, LadderAction(27, "down")),
        (89, LadderAction(53, "down")),
        (37, WaitAction()),
        (54, WaitAction()),
        (71, WaitAction()),
        (10, BackToStartAction()),
        (81, BackToStartAction()),
    ]


def _advanced_hazards() -> List[Tuple[int, TileAction]]:
    """Extra wait and back-to-start tiles shared by the advanced and extreme layouts."""
    return [
        (18, WaitAction()),
        (28, WaitAction()),
        (45, WaitAction()),
        (58, WaitAction()),
        (75, WaitAction()),
        (88, WaitAction()),
        (34, BackToStartAction()),
        (56, BackToStartAction()),
        (68, BackToStartAction()),
    ]


def race_layout(variant: Variant) -> List[Tuple[int, TileAction]]:
    """The (tile id, action) pairs of a ladder layout."""
    if variant == Variant.LADDER_CLASSIC:
        specific: List[Tuple[int, TileAction]] = [
            (5, LadderAction(17, "up")),
            (12, LadderAction(49, "up")),
            (21, LadderAction(41, "up")),
            (43, LadderAction(61, "up")),
            (55, LadderAction(87, "up")),
            (65, LadderAction(84, "up")),
        ]
    elif variant == Variant.LADDER_ADVANCED:
        specific = [
            (5, LadderAction(17, "up")),
            (12, LadderAction(49, "up")),
            (14, LadderAction(47, "up")),
            (21, LadderAction(41, "up")),
            (43, LadderAction(61, "up")),
            (52, LadderAction(72, "up")),
            (65, LadderAction(84, "up")),
            (42, LadderAction(2, "down")),
            (46, LadderAction(15, "down")),
            (64, LadderAction(24, "down")),
        ] + _advanced_hazards()
    elif variant == Variant.LADDER_EXTREME:
        # Every up-ladder of the advanced layout flipped to point down
        specific = [
            (17, LadderAction(5, "down")),
            (41, LadderAction(21, "down")),
            (42, LadderAction(2, "down")),
            (46, LadderAction(15, "down")),
            (47, LadderAction(14, "down")),
            (49, LadderAction(12, "down")),
            (61, LadderAction(43, "down")),
            (64, LadderAction(24, "down")),
            (72, LadderAction(52, "down")),
            (82, LadderAction(63, "down")),
            (84, LadderAction(65, "down")),
            (87, LadderAction(55, "down")),
        ] + _advanced_hazards()
    else:
        raise ValueError(f"{variant.value} is not a ladder layout")
    return specific + _common_race_actions()


def property_layout() -> List[Tuple[int, TileAction]]:
    """The (tile id, action) pairs of the 40-tile property board."""
    return [
        (1, StartAction()),
        # Blue
        (2, PropertyAction("Skolegata", 6000, "blue")),
        (4, PropertyAction("Brattorgata", 6000, "blue")),
        # Pink
        (7, PropertyAction("Sverres gate", 10000, "pink")),
        (9, PropertyAction("Tormods gate", 10000, "pink")),
        (10, PropertyAction("Olav Kyrres gate", 12000, "pink")),
        # Green
        (12, PropertyAction("Ragnhilds gate", 14000, "green")),
        (14, PropertyAction("St. Olavs gate", 14000, "green")),
        (15, PropertyAction("Guttorms gate", 16000, "green")),
        # Gray
        (17, PropertyAction("Nygata", 18000, "gray")),
        (19, PropertyAction("Bakkegata", 18000, "gray")),
        (20, PropertyAction("Kirkegata", 20000, "gray")),
        # Red
        (22, PropertyAction("Krambugata", 22000, "red")),
        (24, PropertyAction("Fjordgata", 22000, "red")),
        (25, PropertyAction("Sandgata", 24000, "red")),
        # Yellow
        (27, PropertyAction("Klostergata", 26000, "yellow")),
        (28, PropertyAction("Munkegata", 26000, "yellow")),
        (30, PropertyAction("Bispegata", 28000, "yellow")),
        # Purple
        (32, PropertyAction("Sondre gate", 30000, "purple")),
        (33, PropertyAction("Erling Skakkes gate", 30000, "purple")),
        (35, PropertyAction("Kongens gate", 32000, "purple")),
        # Orange
        (38, PropertyAction("Prinsens gate", 35000, "orange")),
        (40, PropertyAction("Dronningens gate", 40000, "orange")),
        # Landmarks
        (6, PropertyAction("Nidarosdomen", 20000, LANDMARK_GROUP)),
        (16, PropertyAction("Gamle Bybro", 20000, LANDMARK_GROUP)),
        (26, PropertyAction("Kristiansen Festning", 20000, LANDMARK_GROUP)),
        (36, PropertyAction("Gloshaugen", 20000, LANDMARK_GROUP)),
        # Chance
        (3, ChanceAction()),
        (8, ChanceAction()),
        (13, ChanceAction()),
        (18, ChanceAction()),
        (23, ChanceAction()),
        (29, ChanceAction()),
        (34, ChanceAction()),
        (39, ChanceAction()),
        (5, TaxAction(10, 20000)),
        (JAIL_TILE_ID, JailAction()),
        (21, FreeParkingAction()),
        (31, GoToJailAction(JAIL_TILE_ID)),
        (37, WealthTaxAction(10000)),
    ]
