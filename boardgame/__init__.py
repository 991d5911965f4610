"""
Board Game Engine

A shared turn-based engine for the ladder race games and the
Monopoly-style property game.
"""

from .board import Board, Tile, build_board
from .config import GameConfig
from .decisions import DecisionKind, DecisionRequest
from .events import EventType, GameEvent, GameObserver
from .game import GameState, Phase, TurnOutcome, create_game
from .player import Player, PlayerState
from .variants import Variant

__all__ = [
    "Board",
    "Tile",
    "build_board",
    "GameConfig",
    "DecisionKind",
    "DecisionRequest",
    "EventType",
    "GameEvent",
    "GameObserver",
    "GameState",
    "Phase",
    "TurnOutcome",
    "create_game",
    "Player",
    "PlayerState",
    "Variant",
]
