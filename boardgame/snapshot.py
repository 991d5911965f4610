"""
Public snapshot serialization of GameState.

Produces a UI-friendly, JSON-compatible view of the current game.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List

if TYPE_CHECKING:
    from boardgame.game import GameState


def serialize_snapshot(game: GameState) -> Dict[str, Any]:
    """Serialize a GameState into a public, stable JSON dict.

    The snapshot includes:
    - variant, phase, turn_number and current player
    - players with public info (money, tile, flags, owned properties)
    - every property tile with its owner
    - the pending decision, if any
    """
    players: List[Dict[str, Any]] = []
    for pstate in game.players:
        props: List[Dict[str, Any]] = []
        for tile_id in sorted(pstate.owned_property_ids):
            prop = game.board.get_property(tile_id)
            if prop is None:
                continue
            props.append(
                {
                    "tile_id": tile_id,
                    "name": prop.name,
                    "color_group": prop.color_group,
                }
            )

        players.append(
            {
                "name": pstate.name,
                "token": pstate.token,
                "money": pstate.money,
                "tile_id": pstate.current_tile_id,
                "skip_next_turn": pstate.skip_next_turn,
                "jailed": pstate.jailed,
                "jail_turn_count": pstate.jail_turn_count,
                "free_parking": pstate.free_parking,
                "is_bankrupt": pstate.bankrupt,
                "properties": props,
            }
        )

    properties = [
        {
            "tile_id": tile_id,
            "name": prop.name,
            "cost": prop.cost,
            "color_group": prop.color_group,
            "owner": prop.owner.name if prop.owner is not None else None,
        }
        for tile_id, prop in game.board.property_tiles()
    ]

    decision = None
    pending = game.pending_decision
    if pending is not None:
        decision = {
            "kind": pending.kind.value,
            "player": pending.player.name,
            "tile_id": pending.tile_id,
            "details": dict(pending.details),
        }

    current = game.get_current_player()
    winner = game.get_winner()
    snapshot: Dict[str, Any] = {
        "variant": game.variant.value,
        "phase": game.phase.value,
        "turn_number": game.turn_number,
        "current_player": current.name if current is not None else None,
        "winner": winner.name if winner is not None else None,
        "players": players,
        "properties": properties,
        "pending_decision": decision,
    }
    return snapshot
