"""
Pydantic models for the board file.

Keys are camelCase on disk; every tile record carries an `actionType` tag
that selects the record model used to validate the rest of its fields.
"""

from typing import Any, Dict, List, Optional, Type

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from boardgame.actions import ActionType


class FileRecord(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class TileRecord(FileRecord):
    id: int
    action_type: Optional[str] = None


class LadderRecord(TileRecord):
    destination_id: int
    direction: str


class PropertyRecord(TileRecord):
    property_name: str
    cost: int = Field(ge=0)
    color_group: str


class TaxRecord(TileRecord):
    percent: int = Field(ge=0, le=100)
    fixed: int = Field(ge=0)


class WealthTaxRecord(TileRecord):
    amount: int = Field(ge=0)


class GoToJailRecord(TileRecord):
    jail_tile_id: int


class BoardFileModel(FileRecord):
    name: str
    description: str = ""
    variant_id: str
    tiles: List[Dict[str, Any]] = Field(default_factory=list)


# Action types without extra fields validate against the plain TileRecord
RECORD_MODELS: Dict[ActionType, Type[TileRecord]] = {
    ActionType.LADDER: LadderRecord,
    ActionType.BACK_TO_START: TileRecord,
    ActionType.WAIT: TileRecord,
    ActionType.PROPERTY: PropertyRecord,
    ActionType.CHANCE: TileRecord,
    ActionType.TAX: TaxRecord,
    ActionType.WEALTH_TAX: WealthTaxRecord,
    ActionType.START: TileRecord,
    ActionType.JAIL: TileRecord,
    ActionType.GO_TO_JAIL: GoToJailRecord,
    ActionType.FREE_PARKING: TileRecord,
}
