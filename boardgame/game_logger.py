"""
JSONL logger for board game events.

Subscribes to a game as an observer and writes every event to a JSONL file.
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Optional, Union

from boardgame.events import GameEvent, GameObserver
from boardgame.settings import get_settings
from boardgame.snapshot import serialize_snapshot

logger = logging.getLogger(__name__)


class GameLogger(GameObserver):
    """Observer that writes game events to a JSONL file."""

    def __init__(self, log_file: Optional[Union[str, Path]] = None, game_id: Optional[str] = None):
        """
        Initialize game logger.

        Args:
            log_file: Path to log file. If None, generates a timestamped
                filename in the configured event log directory.
            game_id: Optional identifier copied into every line
        """
        if log_file is None:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            directory = get_settings().event_log_dir or Path(".")
            log_file = Path(directory) / f"board_game_{timestamp}.jsonl"

        self.log_file = Path(log_file)
        self.game_id = game_id
        self.event_count = 0

        self.log_file.parent.mkdir(parents=True, exist_ok=True)
        # Create/clear log file
        with open(self.log_file, "w", encoding="utf-8"):
            pass
        logger.debug(f"Logging game events to {self.log_file}")

    def log_event(self, event_type: str, **kwargs: Any) -> None:
        """
        Log a game event to the JSONL file.

        Args:
            event_type: Type of event (e.g., "game_start", "move", "purchase")
            **kwargs: Additional event data
        """
        event = {
            "event_id": self.event_count,
            "timestamp": datetime.now().isoformat(),
            "event_type": event_type,
        }
        if self.game_id is not None:
            event["game_id"] = self.game_id
        event.update(kwargs)

        with open(self.log_file, "a", encoding="utf-8") as f:
            f.write(json.dumps(event, default=str) + "\n")

        self.event_count += 1

    def on_event(self, event: GameEvent) -> None:
        data = event.to_dict()
        event_type = data.pop("event_type")
        self.log_event(event_type, **data)

    def log_snapshot(self, game) -> None:
        """Write the full public state of `game` as one line."""
        self.log_event("snapshot", state=serialize_snapshot(game))
