"""
Player roster file.

One optional `CURRENT_PLAYER:<name>` line followed by one line per player:

    name, token, currentTileId, money, props[, skipNextTurn, bankrupt, jailed, jailTurnCount, freeParking]

`props` is a `;`-separated list of property tile ids. Older files list
property names instead; those are resolved against the board.
"""

import logging
from pathlib import Path
from typing import List, Optional, Tuple, Union

from boardgame.board import Board
from boardgame.exceptions import PlayerFileError
from boardgame.player import PlayerState

logger = logging.getLogger(__name__)

CURRENT_PLAYER_PREFIX = "CURRENT_PLAYER:"
FIELD_SEPARATOR = ","
PROPERTY_SEPARATOR = ";"

BASE_FIELD_COUNT = 5
FULL_FIELD_COUNT = 10

_TRUE = "true"
_FALSE = "false"


def _check_text(value: str, what: str, path: Optional[str]) -> str:
    for forbidden in (FIELD_SEPARATOR, PROPERTY_SEPARATOR, "\n", "\r"):
        if forbidden in value:
            raise PlayerFileError(f"{what} '{value}' contains a reserved character {forbidden!r}", path)
    return value


def _format_bool(value: bool) -> str:
    return _TRUE if value else _FALSE


def format_player_line(player: PlayerState, path: Optional[str] = None) -> str:
    name = _check_text(player.name, "Player name", path)
    token = _check_text(player.token, "Token", path)
    tile = "" if player.current_tile_id is None else str(player.current_tile_id)
    props = PROPERTY_SEPARATOR.join(str(tid) for tid in sorted(player.owned_property_ids))
    fields = [
        name,
        token,
        tile,
        str(player.money),
        props,
        _format_bool(player.skip_next_turn),
        _format_bool(player.bankrupt),
        _format_bool(player.jailed),
        str(player.jail_turn_count),
        _format_bool(player.free_parking),
    ]
    return f"{FIELD_SEPARATOR} ".join(fields)


def write_player_file(
    players: List[PlayerState],
    path: Union[str, Path],
    current_player: Optional[str] = None,
) -> Path:
    path = Path(path)
    lines = []
    if current_player:
        lines.append(f"{CURRENT_PLAYER_PREFIX}{current_player}")
    lines.extend(format_player_line(p, str(path)) for p in players)

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write("\n".join(lines) + "\n")
    except OSError as e:
        raise PlayerFileError(f"cannot write player file: {e}", str(path)) from e
    logger.debug(f"Wrote {len(players)} players to {path}")
    return path


def _parse_int(value: str, what: str, path: Optional[str], line_number: int) -> int:
    try:
        return int(value)
    except ValueError:
        raise PlayerFileError(f"{what} must be a whole number, got '{value}'", path, line_number) from None


def _parse_bool(value: str, what: str, path: Optional[str], line_number: int) -> bool:
    lowered = value.lower()
    if lowered not in (_TRUE, _FALSE):
        raise PlayerFileError(f"{what} must be true or false, got '{value}'", path, line_number)
    return lowered == _TRUE


def _resolve_property(board: Board, ref: str, path: Optional[str], line_number: int) -> int:
    if ref.isdigit():
        tile_id = int(ref)
        if board.has_tile(tile_id) and board.get_property(tile_id) is not None:
            return tile_id
        raise PlayerFileError(f"tile {tile_id} is not a property", path, line_number)

    tile_id = board.find_property_by_name(ref)
    if tile_id is None:
        raise PlayerFileError(f"unknown property '{ref}'", path, line_number)
    return tile_id


def parse_player_lines(
    lines: List[str],
    board: Board,
    path: Optional[str] = None,
) -> Tuple[List[PlayerState], Optional[str]]:
    """
    Parse roster lines and assign property owners on `board`.

    Returns:
        (players in file order, name of the current player or None)
    """
    players: List[PlayerState] = []
    current_player: Optional[str] = None
    names = set()

    for line_number, raw in enumerate(lines, start=1):
        line = raw.strip()
        if not line:
            continue

        if line.startswith(CURRENT_PLAYER_PREFIX):
            if players or current_player is not None:
                raise PlayerFileError("CURRENT_PLAYER must be the first line", path, line_number)
            current_player = line[len(CURRENT_PLAYER_PREFIX):].strip() or None
            continue

        fields = [field.strip() for field in line.split(FIELD_SEPARATOR)]
        if len(fields) not in (BASE_FIELD_COUNT, FULL_FIELD_COUNT):
            raise PlayerFileError(
                f"expected {BASE_FIELD_COUNT} or {FULL_FIELD_COUNT} fields, got {len(fields)}",
                path,
                line_number,
            )

        name, token, tile_field, money_field, props_field = fields[:BASE_FIELD_COUNT]
        if not name:
            raise PlayerFileError("player name is empty", path, line_number)
        if name in names:
            raise PlayerFileError(f"duplicate player '{name}'", path, line_number)

        money = _parse_int(money_field, "money", path, line_number)
        if money < 0:
            raise PlayerFileError(f"money cannot be negative, got {money}", path, line_number)

        player = PlayerState(name, token, money)
        if tile_field:
            tile_id = _parse_int(tile_field, "tile id", path, line_number)
            if not board.has_tile(tile_id):
                raise PlayerFileError(f"tile {tile_id} does not exist", path, line_number)
            player.current_tile_id = tile_id

        if len(fields) == FULL_FIELD_COUNT:
            player.skip_next_turn = _parse_bool(fields[5], "skipNextTurn", path, line_number)
            player.bankrupt = _parse_bool(fields[6], "bankrupt", path, line_number)
            player.jailed = _parse_bool(fields[7], "jailed", path, line_number)
            player.jail_turn_count = _parse_int(fields[8], "jailTurnCount", path, line_number)
            player.free_parking = _parse_bool(fields[9], "freeParking", path, line_number)

        for ref in filter(None, (p.strip() for p in props_field.split(PROPERTY_SEPARATOR))):
            tile_id = _resolve_property(board, ref, path, line_number)
            prop = board.get_property(tile_id)
            if prop.owner is not None:
                raise PlayerFileError(
                    f"{prop.name} is already owned by {prop.owner.name}", path, line_number
                )
            if player.bankrupt:
                logger.warning(f"{path}: ignoring {prop.name} listed for bankrupt player {name}")
                continue
            prop.owner = player
            player.owned_property_ids.add(tile_id)

        names.add(name)
        players.append(player)

    if not players:
        raise PlayerFileError("player file lists no players", path)
    if current_player is not None and current_player not in names:
        raise PlayerFileError(f"current player '{current_player}' is not in the roster", path)

    return players, current_player


def read_player_file(path: Union[str, Path], board: Board) -> Tuple[List[PlayerState], Optional[str]]:
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            lines = f.read().splitlines()
    except FileNotFoundError as e:
        raise PlayerFileError("player file not found", str(path)) from e
    except OSError as e:
        raise PlayerFileError(f"cannot read player file: {e}", str(path)) from e
    return parse_player_lines(lines, board, str(path))
