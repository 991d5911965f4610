"""
Board file reading and writing.

Only tile actions are stored. The tile chain is rebuilt from the variant id
with the same builders a fresh game uses, then the stored actions are
overlaid by tile id.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from pydantic import ValidationError

from boardgame.actions import (
    ActionType,
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
from boardgame.board import Board, create_property_board, create_race_board
from boardgame.exceptions import BoardFileError
from boardgame.filehandling.schemas import (
    RECORD_MODELS,
    BoardFileModel,
    GoToJailRecord,
    LadderRecord,
    PropertyRecord,
    TaxRecord,
    TileRecord,
    WealthTaxRecord,
)
from boardgame.variants import Variant

logger = logging.getLogger(__name__)


def action_to_record(tile_id: int, action: TileAction) -> TileRecord:
    kind = action.kind
    if isinstance(action, LadderAction):
        return LadderRecord(
            id=tile_id,
            action_type=kind.value,
            destination_id=action.destination_id,
            direction=action.direction,
        )
    if isinstance(action, PropertyAction):
        return PropertyRecord(
            id=tile_id,
            action_type=kind.value,
            property_name=action.name,
            cost=action.cost,
            color_group=action.color_group,
        )
    if isinstance(action, TaxAction):
        return TaxRecord(id=tile_id, action_type=kind.value, percent=action.percent, fixed=action.fixed)
    if isinstance(action, WealthTaxAction):
        return WealthTaxRecord(id=tile_id, action_type=kind.value, amount=action.amount)
    if isinstance(action, GoToJailAction):
        return GoToJailRecord(id=tile_id, action_type=kind.value, jail_tile_id=action.jail_tile_id)
    return TileRecord(id=tile_id, action_type=kind.value)


def record_to_action(record: TileRecord) -> TileAction:
    kind = ActionType(record.action_type)
    if kind == ActionType.LADDER:
        return LadderAction(record.destination_id, record.direction)
    if kind == ActionType.PROPERTY:
        return PropertyAction(record.property_name, record.cost, record.color_group)
    if kind == ActionType.TAX:
        return TaxAction(record.percent, record.fixed)
    if kind == ActionType.WEALTH_TAX:
        return WealthTaxAction(record.amount)
    if kind == ActionType.GO_TO_JAIL:
        return GoToJailAction(record.jail_tile_id)
    simple = {
        ActionType.BACK_TO_START: BackToStartAction,
        ActionType.WAIT: WaitAction,
        ActionType.CHANCE: ChanceAction,
        ActionType.START: StartAction,
        ActionType.JAIL: JailAction,
        ActionType.FREE_PARKING: FreeParkingAction,
    }
    return simple[kind]()


def board_to_dict(board: Board, name: Optional[str] = None, description: Optional[str] = None) -> Dict[str, Any]:
    """Serialize a board's variant id and tile actions to the board file layout."""
    if board.variant is None:
        raise BoardFileError("Board has no variant and cannot be saved")
    variant = board.variant
    model = BoardFileModel(
        name=name or variant.display_name,
        description=description if description is not None else variant.description,
        variant_id=variant.value,
        tiles=[
            action_to_record(tile.tile_id, tile.action).model_dump(by_alias=True)
            for tile in board
            if tile.action is not None
        ],
    )
    return model.model_dump(by_alias=True)


def board_from_dict(data: Any, path: Optional[str] = None) -> Board:
    """Rebuild a board from parsed board file content."""
    try:
        model = BoardFileModel.model_validate(data)
    except ValidationError as e:
        raise BoardFileError(f"invalid board file: {e}", path) from e

    try:
        variant = Variant.from_id(model.variant_id)
    except ValueError as e:
        raise BoardFileError(str(e), path) from e

    board = create_race_board(variant) if variant.is_race else create_property_board(variant)

    for entry in model.tiles:
        tile_id = entry.get("id")
        if entry.get("actionType") is None:
            logger.debug(f"Ignoring tile entry without an action: {entry!r}")
            continue

        try:
            kind = ActionType(entry["actionType"])
        except ValueError:
            raise BoardFileError(f"unknown action type '{entry['actionType']}'", path, tile_id) from None

        try:
            record = RECORD_MODELS[kind].model_validate(entry)
            action = record_to_action(record)
        except ValidationError as e:
            raise BoardFileError(f"invalid {kind.value} tile: {e}", path, tile_id) from e
        except ValueError as e:
            raise BoardFileError(str(e), path, tile_id) from e

        if not board.has_tile(record.id):
            raise BoardFileError(f"no such tile on a {variant.display_name} board", path, record.id)
        board.set_action(record.id, action)

    return board


def write_board_file(board: Board, path: Union[str, Path], name: Optional[str] = None) -> Path:
    path = Path(path)
    data = board_to_dict(board, name=name)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
    except OSError as e:
        raise BoardFileError(f"cannot write board file: {e}", str(path)) from e
    logger.debug(f"Wrote board file {path}")
    return path


def read_board_file(path: Union[str, Path]) -> Board:
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise BoardFileError("board file not found", str(path)) from e
    except json.JSONDecodeError as e:
        raise BoardFileError(f"malformed JSON: {e}", str(path)) from e
    except OSError as e:
        raise BoardFileError(f"cannot read board file: {e}", str(path)) from e
    return board_from_dict(data, str(path))
