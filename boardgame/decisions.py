"""
Decision port: how tile actions ask a human for a choice.

A tile action never blocks. It files a `DecisionRequest` carrying a resume
callback and returns; the turn is suspended until the presentation layer
answers through one of the engine's `resolve_*` methods, which hands the
answer to the callback.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Dict, Optional

from boardgame.exceptions import InvalidActionError

if TYPE_CHECKING:
    from boardgame.player import PlayerState


class DecisionKind(Enum):
    PROPERTY_PURCHASE = "property_purchase"
    TAX_CHOICE = "tax_choice"
    JAIL_CHOICE = "jail_choice"


@dataclass
class DecisionRequest:
    """An outstanding yes/no question for one player."""

    kind: DecisionKind
    player: "PlayerState"
    tile_id: int
    details: Dict[str, Any] = field(default_factory=dict)
    resume: Optional[Callable[[bool], None]] = field(default=None, repr=False, compare=False)


class DecisionPort:
    """Holds at most one pending decision."""

    def __init__(self):
        self.pending: Optional[DecisionRequest] = None

    def request(self, request: DecisionRequest) -> None:
        if self.pending is not None:
            raise InvalidActionError(
                f"Cannot request {request.kind.value}: {self.pending.kind.value} is still pending"
            )
        self.pending = request

    def take(self, kind: DecisionKind) -> DecisionRequest:
        """Remove and return the pending request, which must be of `kind`."""
        if self.pending is None:
            raise InvalidActionError(f"No decision is pending (tried to resolve {kind.value})")
        if self.pending.kind is not kind:
            raise InvalidActionError(
                f"Pending decision is {self.pending.kind.value}, not {kind.value}"
            )
        request, self.pending = self.pending, None
        return request
