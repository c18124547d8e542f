"""Flat snapshot serialization of GameState.

Snapshots are plain JSON-compatible dicts for a synchronization layer.
Display labels are not stored; they are recomputed from suit and rank.
"""

import json
from typing import Any

from pydantic import TypeAdapter

from daifugo.config import RuleSettings
from daifugo.models.card import Card, Rank, Suit
from daifugo.models.combo import Combo, ComboType
from daifugo.models.effects import PendingEffect
from daifugo.models.game_state import FieldState, GameState, Phase
from daifugo.models.player import PlayerState

SUIT_NAMES: dict[Suit, str] = {
    Suit.SPADE: "spade",
    Suit.HEART: "heart",
    Suit.DIAMOND: "diamond",
    Suit.CLUB: "club",
    Suit.JOKER: "joker",
}
SUITS_BY_NAME: dict[str, Suit] = {name: suit for suit, name in SUIT_NAMES.items()}

_EFFECT_ADAPTER = TypeAdapter(PendingEffect)


def _suit_to_str(suit: Suit | None) -> str | None:
    return None if suit is None else SUIT_NAMES[suit]


def _suit_from_str(name: str | None) -> Suit | None:
    if name is None:
        return None
    if name not in SUITS_BY_NAME:
        raise ValueError(f"Unknown suit: {name!r}")
    return SUITS_BY_NAME[name]


def card_to_dict(card: Card) -> dict[str, Any]:
    return {"id": card.card_id, "suit": SUIT_NAMES[card.suit], "rank": int(card.rank)}


def card_from_dict(data: dict[str, Any]) -> Card:
    return Card(card_id=data["id"], suit=_suit_from_str(data["suit"]), rank=Rank(data["rank"]))


def combo_to_dict(combo: Combo) -> dict[str, Any]:
    return {
        "type": combo.combo_type.value,
        "strength": combo.strength,
        "length": combo.length,
        "suit_constraint": _suit_to_str(combo.suit_constraint),
        "cards": [card_to_dict(c) for c in combo.cards],
    }


def combo_from_dict(data: dict[str, Any]) -> Combo:
    return Combo(
        combo_type=ComboType(data["type"]),
        cards=tuple(card_from_dict(c) for c in data["cards"]),
        strength=data["strength"],
        length=data["length"],
        suit_constraint=_suit_from_str(data.get("suit_constraint")),
    )


def player_to_dict(player: PlayerState) -> dict[str, Any]:
    return {
        "id": player.player_id,
        "name": player.name,
        "seat": player.seat,
        "is_human": player.is_human,
        "finished": player.finished,
        "finish_order": player.finish_order,
        "hand": [card_to_dict(c) for c in player.hand],
    }


def player_from_dict(data: dict[str, Any]) -> PlayerState:
    return PlayerState(
        player_id=data["id"],
        name=data["name"],
        seat=data["seat"],
        is_human=data["is_human"],
        finished=data["finished"],
        finish_order=data.get("finish_order"),
        hand=tuple(card_from_dict(c) for c in data["hand"]),
    )


def field_to_dict(field: FieldState) -> dict[str, Any]:
    return {
        "combo": combo_to_dict(field.combo) if field.combo else None,
        "owner_id": field.owner_id,
        "locked_suit": _suit_to_str(field.locked_suit),
        "is_revolution": field.is_revolution,
        "is_eleven_back": field.is_eleven_back,
        "streak_suit": _suit_to_str(field.streak_suit),
        "streak_count": field.streak_count,
    }


def field_from_dict(data: dict[str, Any]) -> FieldState:
    combo = data.get("combo")
    return FieldState(
        combo=combo_from_dict(combo) if combo else None,
        owner_id=data.get("owner_id"),
        locked_suit=_suit_from_str(data.get("locked_suit")),
        is_revolution=data["is_revolution"],
        is_eleven_back=data["is_eleven_back"],
        streak_suit=_suit_from_str(data.get("streak_suit")),
        streak_count=data["streak_count"],
    )


def effect_from_dict(data: dict[str, Any]) -> PendingEffect:
    """Rebuild a pending effect, dispatching on its ``kind``.

    Raises:
        pydantic.ValidationError: If the kind is unknown or a field is invalid
    """
    return _EFFECT_ADAPTER.validate_python(data)


def serialize_game_state(state: GameState) -> dict[str, Any]:
    """Return a JSON-serializable snapshot of the game state."""
    return {
        "players": [player_to_dict(p) for p in state.players],
        "current_player": state.current_player,
        "field": field_to_dict(state.field),
        "pass_count": state.consecutive_passes,
        "log": list(state.log),
        "standings": list(state.standings),
        "phase": state.phase.value,
        "rules": state.rules.model_dump(),
        "pending_effects": [e.model_dump() for e in state.pending_effects],
    }


def hydrate_game_state(snapshot: dict[str, Any]) -> GameState:
    """Rebuild a GameState from a snapshot.

    Raises:
        ValueError: If the snapshot contains an unknown suit
        pydantic.ValidationError: If an effect kind is unknown or a field fails validation
    """
    return GameState(
        players=tuple(player_from_dict(p) for p in snapshot["players"]),
        current_player=snapshot["current_player"],
        field=field_from_dict(snapshot["field"]),
        consecutive_passes=snapshot["pass_count"],
        log=tuple(snapshot["log"]),
        standings=tuple(snapshot["standings"]),
        phase=Phase(snapshot["phase"]),
        rules=RuleSettings(**snapshot["rules"]),
        pending_effects=tuple(effect_from_dict(e) for e in snapshot["pending_effects"]),
    )


def dumps(state: GameState) -> str:
    """Serialize a game state to a JSON string."""
    return json.dumps(serialize_game_state(state), ensure_ascii=False)


def loads(text: str) -> GameState:
    """Deserialize a game state from a JSON string."""
    return hydrate_game_state(json.loads(text))
