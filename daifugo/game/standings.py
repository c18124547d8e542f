"""Finish detection and turn order helpers."""

import logging
from typing import Sequence

from daifugo.models.game_state import GameState, Phase
from daifugo.models.player import PlayerState

logger = logging.getLogger(__name__)


def next_active_player(players: Sequence[PlayerState], current_id: int) -> int:
    """Find the next unfinished player after ``current_id`` in seat order.

    Returns ``current_id`` when nobody else is left.
    """
    index = next((i for i, p in enumerate(players) if p.player_id == current_id), -1)
    if index == -1:
        return next((p.player_id for p in players if not p.finished), current_id)

    for offset in range(1, len(players) + 1):
        candidate = players[(index + offset) % len(players)]
        if not candidate.finished:
            return candidate.player_id
    return current_id


def settle_finishes(state: GameState, preferred_next: int, last_actor: int) -> GameState:
    """Mark players with empty hands as finished and fix up the turn.

    Players are checked in seat order, so simultaneous finishes are ranked
    by seat index. When a single player remains, that player is finished
    too and the match ends.

    Args:
        state: State after a play or effect resolution
        preferred_next: Player who should act next if still in the game
        last_actor: Player whose action triggered this check

    Returns:
        Updated state
    """
    players = list(state.players)
    standings = list(state.standings)

    for i, player in enumerate(players):
        if not player.finished and player.hand_count() == 0:
            standings.append(player.player_id)
            players[i] = player.model_copy(
                update={"finished": True, "finish_order": len(standings)}
            )
            logger.info(f"Player {player.player_id} finished in position {len(standings)}")

    remaining = [i for i, p in enumerate(players) if not p.finished]
    if len(remaining) == 1:
        last = players[remaining[0]]
        standings.append(last.player_id)
        players[remaining[0]] = last.model_copy(
            update={"finished": True, "finish_order": len(standings)}
        )
        logger.info(f"Player {last.player_id} is the last one holding cards")

    if len(standings) == len(state.players):
        # Acting player is frozen at its last value; leftover effects are dropped
        logger.info(f"Match finished, standings: {standings}")
        return state.model_copy(
            update={
                "players": tuple(players),
                "standings": tuple(standings),
                "phase": Phase.FINISHED,
                "pending_effects": (),
            }
        )

    current = preferred_next
    current_player = next((p for p in players if p.player_id == current), None)
    if current_player is None or current_player.finished:
        current = next_active_player(players, last_actor)

    return state.model_copy(
        update={
            "players": tuple(players),
            "standings": tuple(standings),
            "current_player": current,
        }
    )
