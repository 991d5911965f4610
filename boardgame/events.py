"""
Event logging and the observer protocol.

The engine records every notable state change as a `GameEvent` in its
`EventLog` and fans the same change out to registered observers through a
`Notifier`. Observers never drive the engine from inside a dispatch; they
queue follow-up calls with `GameState.defer` instead.
"""

from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Deque, Dict, List, Optional, Tuple

if TYPE_CHECKING:
    from boardgame.decisions import DecisionRequest
    from boardgame.player import PlayerState


class EventType(Enum):
    """Types of game events."""

    GAME_START = "game_start"
    CURRENT_PLAYER_CHANGED = "current_player_changed"
    DICE_ROLL = "dice_roll"
    MOVE = "move"
    SKIP_TURN = "skip_turn"
    PASS_GO = "pass_go"
    TILE_ACTION = "tile_action"
    BALANCE_CHANGED = "balance_changed"

    PURCHASE = "purchase"
    RENT_PAYMENT = "rent_payment"
    TAX_PAYMENT = "tax_payment"
    CHANCE = "chance"

    GO_TO_JAIL = "go_to_jail"
    JAIL_ATTEMPT = "jail_attempt"
    JAIL_RELEASE = "jail_release"

    DECISION_REQUESTED = "decision_requested"
    DECISION_RESOLVED = "decision_resolved"

    BANKRUPTCY = "bankruptcy"
    GAME_END = "game_end"


@dataclass
class GameEvent:
    """A logged event in the game."""

    event_type: EventType
    player_name: Optional[str] = None
    details: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"event_type": self.event_type.value}
        if self.player_name is not None:
            data["player"] = self.player_name
        data.update(self.details)
        return data

    def __repr__(self) -> str:
        who = self.player_name if self.player_name is not None else "System"
        return f"[{who}] {self.event_type.value}: {self.details}"


class EventLog:
    """Manages the game event log."""

    def __init__(self):
        self.events: List[GameEvent] = []

    def log(self, event_type: EventType, player_name: Optional[str] = None, **details: Any) -> GameEvent:
        """Log a game event and return it."""
        event = GameEvent(event_type, player_name, details)
        self.events.append(event)
        return event

    def get_events(self) -> List[GameEvent]:
        """Get all logged events."""
        return self.events.copy()

    def get_recent_events(self, count: int = 10) -> List[GameEvent]:
        """Get the most recent N events."""
        return self.events[-count:]

    def of_type(self, event_type: EventType) -> List[GameEvent]:
        return [e for e in self.events if e.event_type == event_type]

    def clear(self) -> None:
        """Clear the event log."""
        self.events.clear()


class GameObserver:
    """
    Base class for objects that react to game state changes.

    Every hook is a no-op; subclasses override the ones they need.
    `on_event` receives the raw `GameEvent` for every notification,
    including those without a dedicated hook.
    """

    def on_player_move(self, player: "PlayerState", from_tile_id: int, to_tile_id: int, dice_value: int) -> None:
        pass

    def on_game_won(self, player: "PlayerState") -> None:
        pass

    def on_player_skip_turn(self, player: "PlayerState") -> None:
        pass

    def on_current_player_changed(self, player: "PlayerState") -> None:
        pass

    def on_player_bankrupt(self, player: "PlayerState") -> None:
        pass

    def on_decision_requested(self, request: "DecisionRequest") -> None:
        pass

    def on_balance_changed(self, player: "PlayerState", delta: int) -> None:
        pass

    def on_tile_action(self, player: "PlayerState", tile_id: int, message: str) -> None:
        pass

    def on_event(self, event: GameEvent) -> None:
        pass


class Notifier:
    """
    Synchronous fan-out to registered observers.

    Each dispatch iterates a snapshot of the observer list, so handlers may
    subscribe or unsubscribe without affecting the delivery in progress.
    Notifications raised while a dispatch is running are queued and
    delivered afterwards in the order they were raised.
    """

    def __init__(self):
        self._observers: List[Any] = []
        self._queue: Deque[Tuple[GameEvent, Optional[str], Tuple[Any, ...]]] = deque()
        self._dispatching = False

    @property
    def dispatching(self) -> bool:
        return self._dispatching

    @property
    def observers(self) -> List[Any]:
        return list(self._observers)

    def subscribe(self, observer: Any) -> None:
        if observer is None:
            raise ValueError("Observer cannot be None")
        if observer not in self._observers:
            self._observers.append(observer)

    def unsubscribe(self, observer: Any) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def notify(self, event: GameEvent, hook: Optional[str] = None, *args: Any) -> None:
        """Deliver `event` (and `hook(*args)` where observers define it) to every observer."""
        self._queue.append((event, hook, args))
        if self._dispatching:
            return

        self._dispatching = True
        try:
            while self._queue:
                queued_event, queued_hook, queued_args = self._queue.popleft()
                for observer in list(self._observers):
                    if queued_hook is not None:
                        handler = getattr(observer, queued_hook, None)
                        if handler is not None:
                            handler(*queued_args)
                    catch_all = getattr(observer, "on_event", None)
                    if catch_all is not None:
                        catch_all(queued_event)
        finally:
            self._dispatching = False
            self._queue.clear()
