"""
Board and player file formats and save slots.
"""

from .board_file import board_from_dict, board_to_dict, read_board_file, write_board_file
from .player_file import read_player_file, write_player_file
from .saves import list_saves, load_game, save_game, save_paths

__all__ = [
    "board_from_dict",
    "board_to_dict",
    "read_board_file",
    "write_board_file",
    "read_player_file",
    "write_player_file",
    "list_saves",
    "load_game",
    "save_game",
    "save_paths",
]
