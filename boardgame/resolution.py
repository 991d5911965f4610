"""
Tile action effects.

`perform_action` is the single dispatch point for the closed set of tile
actions. Effects that touch money go through the engine's `credit`,
`charge` and `transfer` helpers so failed payments always end in the full
bankruptcy sequence.
"""

import logging
from enum import Enum
from typing import TYPE_CHECKING

from boardgame.actions import (
    ActionType,
    GoToJailAction,
    LadderAction,
    PropertyAction,
    TaxAction,
    WealthTaxAction,
)
from boardgame.board import CHANCE_LANDMARKS
from boardgame.decisions import DecisionKind, DecisionRequest
from boardgame.events import EventType
from boardgame.exceptions import IllegalTileReferenceError

if TYPE_CHECKING:
    from boardgame.game import GameState
    from boardgame.player import PlayerState

logger = logging.getLogger(__name__)


class ChanceEffect(Enum):
    """The six outcomes of a Chance tile, drawn uniformly."""

    MOVE_FORWARD = "move_forward"
    CREDIT = "credit"
    DEBIT = "debit"
    LANDMARK = "landmark"
    PAY_EACH = "pay_each"
    COLLECT_FROM_EACH = "collect_from_each"


def perform_action(game: "GameState", player: "PlayerState", tile_id: int) -> None:
    """Run the action attached to `tile_id` for `player`, if any."""
    action = game.board.get_action(tile_id)
    if action is None or player.bankrupt:
        return

    kind = action.kind
    if kind == ActionType.LADDER:
        _ladder(game, player, tile_id, action)
    elif kind == ActionType.BACK_TO_START:
        start_id = game.board.first_tile_id
        game.relocate(player, start_id)
        game.notify_tile_action(player, tile_id, f"{player.name} goes back to start")
    elif kind == ActionType.WAIT:
        player.skip_next_turn = True
        game.notify_tile_action(player, tile_id, f"{player.name} must wait a turn")
    elif kind == ActionType.PROPERTY:
        _property(game, player, tile_id, action)
    elif kind == ActionType.CHANCE:
        resolve_chance(game, player, tile_id)
    elif kind == ActionType.TAX:
        _tax(game, player, tile_id, action)
    elif kind == ActionType.WEALTH_TAX:
        _wealth_tax(game, player, tile_id, action)
    elif kind == ActionType.START:
        game.credit(player, game.config.pass_go_reward, reason="start")
        game.notify_tile_action(
            player, tile_id, f"{player.name} landed on Start and collects {game.config.pass_go_reward}"
        )
    elif kind == ActionType.JAIL:
        _jail(game, player, tile_id)
    elif kind == ActionType.GO_TO_JAIL:
        _go_to_jail(game, player, tile_id, action)
    elif kind == ActionType.FREE_PARKING:
        player.free_parking = True
        game.notify_tile_action(player, tile_id, f"{player.name} gets free parking")
    else:
        raise ValueError(f"Unhandled action type: {kind}")


def _ladder(game: "GameState", player: "PlayerState", tile_id: int, action: LadderAction) -> None:
    if not game.board.has_tile(action.destination_id):
        raise IllegalTileReferenceError(action.destination_id, f"Ladder on tile {tile_id}")
    game.relocate(player, action.destination_id)
    game.notify_tile_action(
        player, tile_id, f"{player.name} takes the ladder {action.direction} to tile {action.destination_id}"
    )


def _property(game: "GameState", player: "PlayerState", tile_id: int, prop: PropertyAction) -> None:
    owner = prop.owner

    if owner is None:
        if not player.can_afford(prop.cost):
            game.notify_tile_action(player, tile_id, f"{player.name} cannot afford {prop.name}")
            return

        def resume(accept: bool) -> None:
            buy_property(game, player, tile_id, accept)

        game.request_decision(
            DecisionRequest(
                kind=DecisionKind.PROPERTY_PURCHASE,
                player=player,
                tile_id=tile_id,
                details={"property": prop.name, "cost": prop.cost, "color_group": prop.color_group},
                resume=resume,
            )
        )
        return

    if owner is player:
        return

    if player.free_parking:
        player.free_parking = False
        game.notify_tile_action(player, tile_id, f"{player.name} uses free parking on {prop.name}")
        return

    rent = game.calculate_rent(tile_id)
    paid = game.transfer(player, owner, rent, reason=f"rent:{prop.name}")
    game.event_log.log(
        EventType.RENT_PAYMENT,
        player.name,
        owner=owner.name,
        property=prop.name,
        tile_id=tile_id,
        amount=rent,
        paid=paid,
    )
    if paid:
        game.notify_tile_action(player, tile_id, f"{player.name} pays {rent} rent to {owner.name}")


def buy_property(game: "GameState", player: "PlayerState", tile_id: int, accept: bool) -> bool:
    """Complete a purchase decision. Returns True if the property changed hands."""
    prop = game.board.get_property(tile_id)
    if prop is None or prop.is_owned() or not accept:
        game.notify_tile_action(player, tile_id, f"{player.name} declines to buy")
        return False

    if not player.pay(prop.cost):
        game.notify_tile_action(player, tile_id, f"{player.name} cannot afford {prop.name}")
        return False

    prop.owner = player
    player.owned_property_ids.add(tile_id)
    logger.info(f"{player.name} bought {prop.name} for {prop.cost}")
    game.notify_balance(player, -prop.cost, reason=f"purchase:{prop.name}")
    game.event_log.log(
        EventType.PURCHASE,
        player.name,
        property=prop.name,
        tile_id=tile_id,
        price=prop.cost,
        new_balance=player.money,
    )
    game.notify_tile_action(player, tile_id, f"{player.name} bought {prop.name}")
    return True


def _tax(game: "GameState", player: "PlayerState", tile_id: int, action: TaxAction) -> None:
    def resume(use_percent: bool) -> None:
        amount = action.percent_amount(player.money) if use_percent else action.fixed
        paid = game.charge(player, amount, reason="tax")
        game.event_log.log(
            EventType.TAX_PAYMENT,
            player.name,
            amount=amount,
            use_percent=use_percent,
            paid=paid,
        )
        if paid:
            game.notify_tile_action(player, tile_id, f"{player.name} pays {amount} in tax")

    game.request_decision(
        DecisionRequest(
            kind=DecisionKind.TAX_CHOICE,
            player=player,
            tile_id=tile_id,
            details={
                "percent": action.percent,
                "percent_amount": action.percent_amount(player.money),
                "fixed": action.fixed,
            },
            resume=resume,
        )
    )


def _wealth_tax(game: "GameState", player: "PlayerState", tile_id: int, action: WealthTaxAction) -> None:
    paid = game.charge(player, action.amount, reason="wealth_tax")
    game.event_log.log(EventType.TAX_PAYMENT, player.name, amount=action.amount, paid=paid)
    if paid:
        game.notify_tile_action(player, tile_id, f"{player.name} pays {action.amount} in wealth tax")


def _jail(game: "GameState", player: "PlayerState", tile_id: int) -> None:
    if not player.jailed:
        game.notify_tile_action(player, tile_id, f"{player.name} is just visiting")
        return

    player.jail_turn_count += 1
    game.event_log.log(EventType.JAIL_ATTEMPT, player.name, attempt=player.jail_turn_count)

    if player.jail_turn_count >= game.config.max_jail_turns:
        player.release_from_jail()
        game.event_log.log(EventType.JAIL_RELEASE, player.name, method="served")
        game.notify_tile_action(player, tile_id, f"{player.name} has served their time")
        return

    def resume(pay_bail: bool) -> None:
        if pay_bail:
            _pay_bail(game, player, tile_id)
        else:
            _roll_for_doubles(game, player, tile_id)

    game.request_decision(
        DecisionRequest(
            kind=DecisionKind.JAIL_CHOICE,
            player=player,
            tile_id=tile_id,
            details={"bail": game.config.jail_bail, "attempt": player.jail_turn_count},
            resume=resume,
        )
    )


def _pay_bail(game: "GameState", player: "PlayerState", tile_id: int) -> None:
    if not game.charge(player, game.config.jail_bail, reason="bail"):
        return
    player.release_from_jail()
    game.event_log.log(EventType.JAIL_RELEASE, player.name, method="bail", amount=game.config.jail_bail)
    game.notify_tile_action(player, tile_id, f"{player.name} paid bail")


def _roll_for_doubles(game: "GameState", player: "PlayerState", tile_id: int) -> None:
    values = game.roll_dice()
    if not game.dice.is_doubles:
        game.notify_tile_action(player, tile_id, f"{player.name} rolled {values} and stays in jail")
        return

    player.release_from_jail()
    game.event_log.log(EventType.JAIL_RELEASE, player.name, method="doubles", dice=list(values))
    game.notify_tile_action(player, tile_id, f"{player.name} rolled doubles and leaves jail")
    destination = game.move_player(player, game.dice.total)
    perform_action(game, player, destination)


def _go_to_jail(game: "GameState", player: "PlayerState", tile_id: int, action: GoToJailAction) -> None:
    if not game.board.has_tile(action.jail_tile_id):
        raise IllegalTileReferenceError(action.jail_tile_id, f"Go To Jail on tile {tile_id}")
    from_id = player.current_tile_id
    player.send_to_jail(action.jail_tile_id)
    logger.info(f"{player.name} was sent to jail")
    game.event_log.log(EventType.GO_TO_JAIL, player.name, from_tile=from_id, jail_tile=action.jail_tile_id)
    game.notify_move(player, from_id, action.jail_tile_id, 0)
    game.notify_tile_action(player, tile_id, f"{player.name} goes to jail")


def resolve_chance(game: "GameState", player: "PlayerState", tile_id: int) -> ChanceEffect:
    """Draw and apply one chance effect for a player standing on `tile_id`."""
    effect = game.rng.choice(list(ChanceEffect))
    apply_chance(game, player, tile_id, effect)
    return effect


def apply_chance(game: "GameState", player: "PlayerState", tile_id: int, effect: ChanceEffect) -> None:
    config = game.config
    game.event_log.log(EventType.CHANCE, player.name, effect=effect.value, tile_id=tile_id)

    if effect == ChanceEffect.MOVE_FORWARD:
        game.notify_tile_action(player, tile_id, f"Chance: {player.name} moves {config.chance_move_steps} forward")
        destination = game.move_player(player, config.chance_move_steps)
        action = game.board.get_action(destination)
        if action is not None and action.kind != ActionType.CHANCE:
            perform_action(game, player, destination)

    elif effect == ChanceEffect.CREDIT:
        game.credit(player, config.chance_credit, reason="chance")
        game.notify_tile_action(player, tile_id, f"Chance: {player.name} receives {config.chance_credit}")

    elif effect == ChanceEffect.DEBIT:
        if game.charge(player, config.chance_debit, reason="chance"):
            game.notify_tile_action(player, tile_id, f"Chance: {player.name} pays {config.chance_debit}")

    elif effect == ChanceEffect.LANDMARK:
        landmark_id = CHANCE_LANDMARKS.get(tile_id)
        if landmark_id is None:
            game.notify_tile_action(player, tile_id, "Chance: no landmark nearby")
            return
        if not game.board.has_tile(landmark_id):
            raise IllegalTileReferenceError(landmark_id, f"Chance on tile {tile_id}")
        game.notify_tile_action(player, tile_id, f"Chance: {player.name} travels to tile {landmark_id}")
        game.relocate(player, landmark_id)
        perform_action(game, player, landmark_id)

    elif effect == ChanceEffect.PAY_EACH:
        game.notify_tile_action(player, tile_id, f"Chance: {player.name} pays {config.chance_transfer} to each player")
        for other in game.get_active_players():
            if other is player:
                continue
            if not game.transfer(player, other, config.chance_transfer, reason="chance"):
                break

    elif effect == ChanceEffect.COLLECT_FROM_EACH:
        game.notify_tile_action(
            player, tile_id, f"Chance: {player.name} collects {config.chance_transfer} from each player"
        )
        for other in game.get_active_players():
            if other is player:
                continue
            game.transfer(other, player, config.chance_transfer, reason="chance")
