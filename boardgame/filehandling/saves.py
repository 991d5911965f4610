"""
Save slots.

A slot is a pair of companion files under `<saves_dir>/<game_type>/`:
`<slot>_board.json` and `<slot>_players.csv`.
"""

import logging
from pathlib import Path
from typing import TYPE_CHECKING, List, Optional, Tuple, Union

from boardgame.config import GameConfig
from boardgame.exceptions import (
    FileHandlerError,
    GameLoadError,
    GameSaveError,
    InvalidActionError,
    InvalidPlayerError,
)
from boardgame.filehandling.board_file import read_board_file, write_board_file
from boardgame.filehandling.player_file import read_player_file, write_player_file
from boardgame.settings import get_settings
from boardgame.variants import Variant

if TYPE_CHECKING:
    from boardgame.game import GameState

logger = logging.getLogger(__name__)

BOARD_SUFFIX = "_board.json"
PLAYERS_SUFFIX = "_players.csv"


def _as_variant(variant: Union[Variant, str]) -> Variant:
    return variant if isinstance(variant, Variant) else Variant.from_id(variant)


def _valid_slot(slot: str) -> bool:
    return bool(slot) and slot.strip() == slot and not any(c in slot for c in "/\\:") and slot not in (".", "..")


def save_directory(variant: Union[Variant, str], saves_dir: Optional[Path] = None) -> Path:
    root = Path(saves_dir) if saves_dir is not None else get_settings().saves_dir
    return root / _as_variant(variant).game_type


def save_paths(variant: Union[Variant, str], slot: str, saves_dir: Optional[Path] = None) -> Tuple[Path, Path]:
    """Return the (board file, player file) paths of a save slot."""
    directory = save_directory(variant, saves_dir)
    return directory / f"{slot}{BOARD_SUFFIX}", directory / f"{slot}{PLAYERS_SUFFIX}"


def save_game(game: "GameState", slot: str, saves_dir: Optional[Path] = None) -> Tuple[Path, Path]:
    """
    Write the board and roster of `game` to a save slot.

    Raises:
        GameSaveError: if the slot name is unusable or either file cannot be written
    """
    variant = game.variant
    if not _valid_slot(slot):
        raise GameSaveError("invalid save name", variant.value, slot)

    board_path, players_path = save_paths(variant, slot, saves_dir)
    current = game.get_current_player()
    current_name = current.name if current is not None and not current.bankrupt else None

    try:
        write_board_file(game.board, board_path)
        write_player_file(game.players, players_path, current_name)
    except FileHandlerError as e:
        logger.warning(f"Saving '{slot}' failed: {e}")
        raise GameSaveError(str(e), variant.value, slot, e.path) from e

    logger.info(f"Saved {variant.display_name} to slot '{slot}'")
    return board_path, players_path


def load_game(
    variant: Union[Variant, str],
    slot: str,
    saves_dir: Optional[Path] = None,
    config: Optional[GameConfig] = None,
) -> "GameState":
    """
    Load a save slot into a new, initialized session.

    The loaded session is independent of any game already running, which
    stays untouched if loading fails.

    Raises:
        GameLoadError: if either file is missing or malformed
    """
    from boardgame.game import GameState

    variant = _as_variant(variant)
    if not _valid_slot(slot):
        raise GameLoadError("invalid save name", variant.value, slot)

    board_path, players_path = save_paths(variant, slot, saves_dir)
    try:
        board = read_board_file(board_path)
        if board.variant.game_type != variant.game_type:
            raise GameLoadError(
                f"save holds a {board.variant.display_name}", variant.value, slot, str(board_path)
            )
        players, current_name = read_player_file(players_path, board)
    except GameLoadError:
        raise
    except FileHandlerError as e:
        logger.warning(f"Loading '{slot}' failed: {e}")
        raise GameLoadError(str(e), variant.value, slot, e.path) from e

    game = GameState(board.variant, config, board=board)
    try:
        for player in players:
            game.restore_player(player)
        game.initialize_game(resume=True, current_player_name=current_name)
    except (InvalidPlayerError, InvalidActionError) as e:
        raise GameLoadError(str(e), variant.value, slot, str(players_path)) from e

    logger.info(f"Loaded {board.variant.display_name} from slot '{slot}' with {len(players)} players")
    return game


def list_saves(variant: Union[Variant, str], saves_dir: Optional[Path] = None) -> List[str]:
    """Slot names that have both a board and a player file."""
    directory = save_directory(variant, saves_dir)
    if not directory.is_dir():
        return []
    slots = []
    for board_path in directory.glob(f"*{BOARD_SUFFIX}"):
        slot = board_path.name[: -len(BOARD_SUFFIX)]
        if (directory / f"{slot}{PLAYERS_SUFFIX}").exists():
            slots.append(slot)
    return sorted(slots)
