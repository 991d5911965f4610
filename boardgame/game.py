"""
Main game engine and state management.
"""

import logging
import random
from collections import deque
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Deque, Iterator, List, Optional, Tuple

from boardgame.board import Board, build_board
from boardgame.config import GameConfig
from boardgame.decisions import DecisionKind, DecisionPort, DecisionRequest
from boardgame.dice import Dice
from boardgame.events import EventLog, EventType, GameEvent, Notifier
from boardgame.exceptions import InvalidActionError, InvalidPlayerError
from boardgame.player import Player, PlayerState
from boardgame.resolution import perform_action
from boardgame.variants import Variant

logger = logging.getLogger(__name__)


class Phase(Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    OVER = "over"


@dataclass
class TurnOutcome:
    """What happened during one call to `GameState.process_turn`."""

    player: PlayerState
    skipped: bool = False
    dice: Tuple[int, ...] = ()
    from_tile_id: Optional[int] = None
    to_tile_id: Optional[int] = None
    extra_turn: bool = False


class GameState:
    """
    Represents the complete state of one game session.
    This is the main interface for the game engine.

    Turn flow for a presentation layer:

        game.initialize_game()
        outcome = game.process_turn()
        if game.pending_decision:           # buy / tax / jail question
            game.resolve_property_purchase(True)
        game.end_turn()

    `play_turn()` combines the two turn calls when no decision comes up.
    """

    def __init__(self, variant: Variant, config: Optional[GameConfig] = None, board: Optional[Board] = None):
        self.variant = variant
        self.config = config or GameConfig()
        self.board = board if board is not None else build_board(variant)
        self.event_log = EventLog()

        # One RNG for dice and chance so seeded games replay exactly
        self.rng = random.Random(self.config.seed)
        self.dice = Dice(self.config.dice_count, self.config.dice_sides, self.rng)

        self.players: List[PlayerState] = []
        self.current_player_index = 0
        self.turn_number = 0
        self.phase = Phase.NOT_STARTED
        self.winner: Optional[PlayerState] = None

        self._notifier = Notifier()
        self._decisions = DecisionPort()
        self._deferred: Deque[Callable[[], Any]] = deque()
        self._depth = 0
        self._extra_turn = False

    # === PLAYERS ===

    def add_player(self, player: Player) -> PlayerState:
        """Register a new player with the configured starting money."""
        if player is None:
            raise InvalidPlayerError("Player cannot be None")
        state = PlayerState(player.name, player.token, self.config.starting_money)
        return self.restore_player(state)

    def restore_player(self, state: PlayerState) -> PlayerState:
        """Register a player whose state already exists (used when loading a save)."""
        if state is None:
            raise InvalidPlayerError("Player cannot be None")
        if self.phase != Phase.NOT_STARTED:
            raise InvalidPlayerError("Players can only join before the game starts")
        if not state.name:
            raise InvalidPlayerError("Player name cannot be empty")
        for existing in self.players:
            if existing is state:
                raise InvalidPlayerError(f"Player '{state.name}' was already added")
            if existing.name == state.name:
                raise InvalidPlayerError(f"A player named '{state.name}' already exists")

        self.players.append(state)
        logger.debug(f"Added player {state.name} ({state.token})")
        return state

    def get_player(self, name: str) -> Optional[PlayerState]:
        for player in self.players:
            if player.name == name:
                return player
        return None

    def get_current_player(self) -> Optional[PlayerState]:
        """Get the current active player."""
        if not self.players:
            return None
        return self.players[self.current_player_index % len(self.players)]

    def get_active_players(self) -> List[PlayerState]:
        """Get all non-bankrupt players, in turn order."""
        return [p for p in self.players if not p.bankrupt]

    def get_winner(self) -> Optional[PlayerState]:
        return self.winner

    @property
    def pending_decision(self) -> Optional[DecisionRequest]:
        return self._decisions.pending

    @property
    def is_over(self) -> bool:
        return self.phase == Phase.OVER

    # === OBSERVERS ===

    def subscribe(self, observer: Any) -> None:
        self._notifier.subscribe(observer)

    def unsubscribe(self, observer: Any) -> None:
        self._notifier.unsubscribe(observer)

    def defer(self, callback: Callable[[], Any]) -> None:
        """
        Run `callback` once the current engine call has finished.

        Observers use this to drive the engine (for example to answer a
        decision) without re-entering it from inside a notification.
        Outside of an engine call the callback runs immediately.
        """
        if self._depth == 0 and not self._notifier.dispatching:
            callback()
            return
        self._deferred.append(callback)

    @contextmanager
    def _driving(self) -> Iterator[None]:
        if self._notifier.dispatching:
            raise InvalidActionError("Observers must not drive the game; use defer() instead")
        self._depth += 1
        try:
            yield
        except Exception:
            if self._depth == 1:
                # Callbacks queued by a failed call must not leak into the next one
                self._deferred.clear()
            raise
        finally:
            self._depth -= 1
        if self._depth == 0:
            self._run_deferred()

    def _run_deferred(self) -> None:
        while self._deferred:
            self._deferred.popleft()()

    def _emit(self, event_type: EventType, player: Optional[PlayerState], hook: Optional[str] = None,
              hook_args: Tuple[Any, ...] = (), **details: Any) -> GameEvent:
        event = self.event_log.log(event_type, player.name if player is not None else None, **details)
        self._notifier.notify(event, hook, *hook_args)
        if self._depth == 0 and not self._notifier.dispatching:
            # Emitted outside any engine call (e.g. a direct charge)
            self._run_deferred()
        return event

    def notify_move(self, player: PlayerState, from_tile_id: Optional[int], to_tile_id: int, dice_value: int) -> None:
        logger.debug(f"{player.name} moved {from_tile_id} -> {to_tile_id} ({dice_value})")
        self._emit(
            EventType.MOVE,
            player,
            "on_player_move",
            (player, from_tile_id, to_tile_id, dice_value),
            from_tile=from_tile_id,
            to_tile=to_tile_id,
            dice_value=dice_value,
        )

    def notify_tile_action(self, player: PlayerState, tile_id: int, message: str) -> None:
        self._emit(
            EventType.TILE_ACTION,
            player,
            "on_tile_action",
            (player, tile_id, message),
            tile_id=tile_id,
            message=message,
        )

    def notify_balance(self, player: PlayerState, delta: int, reason: str = "") -> None:
        self._emit(
            EventType.BALANCE_CHANGED,
            player,
            "on_balance_changed",
            (player, delta),
            delta=delta,
            reason=reason,
            new_balance=player.money,
        )

    # === DECISIONS ===

    def request_decision(self, request: DecisionRequest) -> None:
        """File a decision for the presentation layer; the turn waits until it is resolved."""
        self._decisions.request(request)
        logger.debug(f"Decision requested from {request.player.name}: {request.kind.value}")
        self._emit(
            EventType.DECISION_REQUESTED,
            request.player,
            "on_decision_requested",
            (request,),
            kind=request.kind.value,
            tile_id=request.tile_id,
            **request.details,
        )

    def resolve_property_purchase(self, accept: bool) -> None:
        self._resolve(DecisionKind.PROPERTY_PURCHASE, accept)

    def resolve_tax_choice(self, use_percent: bool) -> None:
        self._resolve(DecisionKind.TAX_CHOICE, use_percent)

    def resolve_jail_choice(self, pay_bail: bool) -> None:
        self._resolve(DecisionKind.JAIL_CHOICE, pay_bail)

    def _resolve(self, kind: DecisionKind, choice: bool) -> None:
        with self._driving():
            request = self._decisions.take(kind)
            self._emit(EventType.DECISION_RESOLVED, request.player, kind=kind.value, choice=choice)
            if request.resume is not None:
                request.resume(choice)
            self._check_game_over()

    # === MONEY ===

    def credit(self, player: PlayerState, amount: int, reason: str = "") -> None:
        """Pay `amount` from the bank to a player."""
        player.receive(amount)
        self.notify_balance(player, amount, reason)

    def charge(self, player: PlayerState, amount: int, reason: str = "") -> bool:
        """
        Charge a player `amount` payable to the bank.

        Returns False, after running the bankruptcy sequence, if the player
        cannot pay in full.
        """
        if not player.pay(amount):
            logger.info(f"{player.name} cannot pay {amount} ({reason})")
            self.declare_bankruptcy(player)
            return False
        self.notify_balance(player, -amount, reason)
        return True

    def transfer(self, payer: PlayerState, payee: PlayerState, amount: int, reason: str = "") -> bool:
        """Move money between players, debiting the payer before crediting the payee."""
        if not payer.pay(amount):
            logger.info(f"{payer.name} cannot pay {amount} to {payee.name} ({reason})")
            self.declare_bankruptcy(payer)
            return False
        self.notify_balance(payer, -amount, reason)
        payee.receive(amount)
        self.notify_balance(payee, amount, reason)
        return True

    def calculate_rent(self, tile_id: int) -> int:
        """Rent for a property tile: full cost if the owner holds the whole group, else cost * 2 / 10."""
        prop = self.board.get_property(tile_id)
        if prop is None or prop.owner is None:
            return 0
        group = self.board.get_color_group(prop.color_group)
        if group and all(tid in prop.owner.owned_property_ids for tid in group):
            return prop.cost
        return prop.base_rent()

    def declare_bankruptcy(self, player: PlayerState) -> None:
        """
        Eliminate a player.

        Every property the player owns returns to the bank at once; the
        player stays in the roster but no longer takes turns.
        """
        if player.bankrupt:
            return

        player.bankrupt = True
        released = sorted(player.owned_property_ids)
        for tile_id in released:
            prop = self.board.get_property(tile_id)
            if prop is not None and prop.owner is player:
                prop.owner = None
        player.owned_property_ids.clear()
        player.skip_next_turn = False
        player.free_parking = False
        player.release_from_jail()

        logger.info(f"{player.name} is bankrupt")
        self._emit(
            EventType.BANKRUPTCY,
            player,
            "on_player_bankrupt",
            (player,),
            properties=released,
            money=player.money,
        )
        self._check_game_over()

    # === MOVEMENT ===

    def roll_dice(self) -> Tuple[int, ...]:
        """Roll the session dice and return the individual values."""
        with self._driving():
            values = self.dice.roll()
            current = self.get_current_player()
            self.event_log.log(
                EventType.DICE_ROLL,
                current.name if current is not None else None,
                dice=list(values),
                total=self.dice.total,
                doubles=self.dice.is_doubles,
            )
            return values

    def relocate(self, player: PlayerState, tile_id: int) -> None:
        """Put a player straight onto a tile (ladders, teleports). No pass-go."""
        from_id = player.current_tile_id
        player.place_on_tile(tile_id)
        self.notify_move(player, from_id, tile_id, 0)

    def move_player(self, player: PlayerState, steps: int) -> int:
        """
        Walk a player `steps` tiles along the board and return the destination.

        On the race board the walk stops at the last tile. On the property
        board wrapping past the end pays the pass-go reward, unless the player
        lands on the first tile itself (Start pays in that case).
        """
        from_id = player.current_tile_id
        if from_id is None:
            from_id = self.board.first_tile_id
        destination, _ = self.board.walk(from_id, steps)

        if not self.variant.is_race and destination < from_id and destination != self.board.first_tile_id:
            self.credit(player, self.config.pass_go_reward, reason="pass_go")
            self.event_log.log(EventType.PASS_GO, player.name, amount=self.config.pass_go_reward)

        player.place_on_tile(destination)
        self.notify_move(player, from_id, destination, steps)
        return destination

    # === TURNS ===

    def initialize_game(self, resume: bool = False, current_player_name: Optional[str] = None) -> None:
        """
        Start the session.

        A fresh game puts everyone on the first tile. A resumed game keeps the
        loaded positions and may name the player whose turn it is.
        """
        with self._driving():
            if self.phase != Phase.NOT_STARTED:
                raise InvalidActionError("Game has already been initialized")
            if not self.players:
                raise InvalidActionError("Cannot start a game without players")

            start_id = self.board.first_tile_id
            for player in self.players:
                if not resume or player.current_tile_id is None:
                    player.place_on_tile(start_id)

            self.current_player_index = 0
            named = self.get_player(current_player_name) if current_player_name else None
            if named is not None and not named.bankrupt:
                self.current_player_index = self.players.index(named)
            else:
                for index, player in enumerate(self.players):
                    if not player.bankrupt:
                        self.current_player_index = index
                        break

            self.phase = Phase.IN_PROGRESS
            logger.info(
                f"Starting {self.variant.display_name} with {len(self.players)} players"
                + (" (resumed)" if resume else "")
            )
            self._emit(
                EventType.GAME_START,
                None,
                players=[p.name for p in self.players],
                variant=self.variant.value,
                starting_money=self.config.starting_money,
                seed=self.config.seed,
                resumed=resume,
            )

            current = self.get_current_player()
            if current is not None and not current.bankrupt:
                self._emit(EventType.CURRENT_PLAYER_CHANGED, current, "on_current_player_changed", (current,))
            self._check_game_over()

    def _require_open_turn(self) -> None:
        if self.phase == Phase.NOT_STARTED:
            raise InvalidActionError("Game has not been initialized")
        if self.phase == Phase.OVER:
            raise InvalidActionError("Game is over")
        if self._decisions.pending is not None:
            raise InvalidActionError(
                f"Waiting for {self._decisions.pending.player.name} to resolve "
                f"{self._decisions.pending.kind.value}"
            )

    def _require_turn(self) -> PlayerState:
        self._require_open_turn()
        current = self.get_current_player()
        if current is None or current.bankrupt:
            raise InvalidActionError("No active player")
        return current

    def process_turn(self) -> TurnOutcome:
        """
        Play the current player's turn up to the end of the landing action.

        Does not advance to the next player; call `end_turn()` afterwards
        (once any pending decision has been resolved).
        """
        with self._driving():
            player = self._require_turn()
            self._extra_turn = False
            outcome = TurnOutcome(player=player, from_tile_id=player.current_tile_id)

            if player.skip_next_turn:
                player.skip_next_turn = False
                logger.debug(f"{player.name} skips this turn")
                self._emit(EventType.SKIP_TURN, player, "on_player_skip_turn", (player,))
                outcome.skipped = True
                outcome.to_tile_id = player.current_tile_id
                return outcome

            if player.jailed and not self.variant.is_race:
                perform_action(self, player, player.current_tile_id)
                outcome.to_tile_id = player.current_tile_id
                self._check_game_over()
                return outcome

            values = self.roll_dice()
            outcome.dice = values
            destination = self.move_player(player, self.dice.total)
            outcome.to_tile_id = destination

            perform_action(self, player, destination)
            outcome.to_tile_id = player.current_tile_id

            if not self.variant.is_race and self.dice.is_doubles and not player.bankrupt and not player.jailed:
                self._extra_turn = True
                outcome.extra_turn = True

            self._check_game_over()
            return outcome

    def end_turn(self) -> None:
        """Finish the turn: the same player goes again after doubles, otherwise play passes on."""
        with self._driving():
            # The mover may have gone bankrupt during the turn
            self._require_open_turn()
            current = self.get_current_player()
            if self._extra_turn and current is not None and not current.bankrupt:
                self._extra_turn = False
                logger.debug(f"{current.name} rolled doubles and goes again")
                return
            self._extra_turn = False
            self._advance()

    def play_turn(self) -> TurnOutcome:
        """Process a turn and end it unless a decision is outstanding or the game ended."""
        with self._driving():
            outcome = self.process_turn()
            if self.phase == Phase.IN_PROGRESS and self._decisions.pending is None:
                self.end_turn()
            return outcome

    def advance_to_next_player(self) -> None:
        with self._driving():
            if self.phase != Phase.IN_PROGRESS:
                raise InvalidActionError("Game is not in progress")
            self._extra_turn = False
            self._advance()

    def _advance(self) -> None:
        count = len(self.players)
        previous = self.get_current_player()

        index = self.current_player_index
        for _ in range(count):
            index = (index + 1) % count
            if not self.players[index].bankrupt:
                break
        else:
            # Nobody is left to take a turn
            index = self.current_player_index

        self.current_player_index = index
        self.turn_number += 1
        current = self.get_current_player()
        if current is not previous and current is not None:
            self._emit(
                EventType.CURRENT_PLAYER_CHANGED,
                current,
                "on_current_player_changed",
                (current,),
                turn=self.turn_number,
            )
        self._check_game_over()

    def _check_game_over(self) -> bool:
        if self.phase != Phase.IN_PROGRESS:
            return self.phase == Phase.OVER

        winner: Optional[PlayerState] = None
        if self.variant.is_race:
            last_id = self.board.last_tile_id
            for player in self.players:
                if not player.bankrupt and player.current_tile_id == last_id:
                    winner = player
                    break
        else:
            active = self.get_active_players()
            if len(self.players) > 1 and len(active) == 1:
                winner = active[0]

        if winner is None:
            return False

        self.phase = Phase.OVER
        self.winner = winner
        logger.info(f"{winner.name} won the game")
        self._emit(EventType.GAME_END, winner, "on_game_won", (winner,), winner=winner.name)
        return True

    # === PERSISTENCE ===

    def save(self, slot: str):
        """Write the board and player files for this session to a save slot."""
        from boardgame.filehandling.saves import save_game

        return save_game(self, slot)


def create_game(variant: Variant, players: List[Player], config: Optional[GameConfig] = None) -> GameState:
    """
    Create a new game with the given players.

    Args:
        variant: Board layout to play on
        players: Players in turn order
        config: Rules configuration (uses defaults if None)

    Returns:
        A GameState that still needs `initialize_game()`
    """
    game = GameState(variant, config)
    for player in players:
        game.add_player(player)
    return game
