"""
Custom exception hierarchy for the board game engine and file handling.

Provides typed errors that can be handled consistently by the engine,
the persistence layer and whatever presentation layer drives them.
"""

from typing import Optional


class BoardGameError(Exception):
    """Base exception for all game-related errors."""


class TileNotFoundError(BoardGameError):
    """A tile id is not registered on the board."""

    def __init__(self, tile_id: int):
        super().__init__(f"Tile {tile_id} does not exist on this board")
        self.tile_id = tile_id


class IllegalTileReferenceError(BoardGameError):
    """A tile action points at a tile that does not exist (corrupt board asset)."""

    def __init__(self, tile_id: int, referenced_by: str):
        super().__init__(f"{referenced_by} references missing tile {tile_id}")
        self.tile_id = tile_id
        self.referenced_by = referenced_by


class InvalidPlayerError(BoardGameError):
    """Player registration was rejected."""


class InvalidActionError(BoardGameError):
    """Action is not legal in the current state."""


class FileHandlerError(BoardGameError):
    """Base class for save data problems, carrying the offending path."""

    def __init__(self, message: str, path: Optional[str] = None):
        if path:
            message = f"{path}: {message}"
        super().__init__(message)
        self.path = path


class BoardFileError(FileHandlerError):
    """Board file is missing, unreadable or malformed."""

    def __init__(self, message: str, path: Optional[str] = None, tile_id: Optional[int] = None):
        if tile_id is not None:
            message = f"tile {tile_id}: {message}"
        super().__init__(message, path)
        self.tile_id = tile_id


class PlayerFileError(FileHandlerError):
    """Player file is missing, unreadable or malformed."""

    def __init__(self, message: str, path: Optional[str] = None, line_number: Optional[int] = None):
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message, path)
        self.line_number = line_number


class GameSaveError(FileHandlerError):
    """Saving a game session failed."""

    def __init__(self, message: str, variant: str, save_name: str, path: Optional[str] = None):
        super().__init__(f"cannot save '{save_name}' ({variant}): {message}", path)
        self.variant = variant
        self.save_name = save_name


class GameLoadError(FileHandlerError):
    """Loading a saved game session failed."""

    def __init__(self, message: str, variant: str, save_name: str, path: Optional[str] = None):
        super().__init__(f"cannot load '{save_name}' ({variant}): {message}", path)
        self.variant = variant
        self.save_name = save_name
