"""Tests for flat snapshot serialization."""

import json

import pytest
from pydantic import ValidationError

from daifugo.config import RuleSettings
from daifugo.models.actions import PlayAction
from daifugo.models.card import Suit
from daifugo.models.effects import DiscardEffect, MassDiscardEffect, TransferEffect
from daifugo.models.game_state import FieldState
from daifugo.network import dumps, hydrate_game_state, loads, serialize_game_state
from daifugo.network.snapshot import effect_from_dict


@pytest.fixture
def mid_game(engine):
    """A dealt match one play in, with effects enabled."""
    rules = RuleSettings(seven_transfer=True, ten_discard=True, queen_bomber=True)
    state = engine.create_match(rules=rules)
    first = state.current_player
    lowest = state.player(first).hand[0]
    state = engine.apply_action(
        state, PlayAction(player_id=first, card_ids=(lowest.card_id,))
    )
    return state.model_copy(
        update={
            "pending_effects": (
                TransferEffect(owner_id=first, target_id=(first + 1) % 4, remaining=1),
                DiscardEffect(owner_id=first, remaining=2),
            )
        }
    )


class TestSnapshot:
    """Tests for serialize_game_state / hydrate_game_state."""

    def test_round_trip(self, mid_game):
        assert hydrate_game_state(serialize_game_state(mid_game)) == mid_game

    def test_json_round_trip(self, mid_game):
        assert loads(dumps(mid_game)) == mid_game

    def test_snapshot_is_flat_json(self, mid_game):
        snapshot = serialize_game_state(mid_game)

        # Survives a plain JSON encode without custom encoders
        json.dumps(snapshot)
        assert snapshot["pass_count"] == 0
        assert snapshot["phase"] == "playing"
        assert snapshot["pending_effects"][0]["kind"] == "transfer"
        assert snapshot["field"]["combo"]["type"] == "single"

    def test_labels_not_stored(self, mid_game):
        card = serialize_game_state(mid_game)["players"][0]["hand"][0]
        assert set(card) == {"id", "suit", "rank"}

    def test_flags_and_lock(self, card, state_builder):
        field = FieldState(
            locked_suit=Suit.HEART,
            is_revolution=True,
            is_eleven_back=True,
            streak_suit=Suit.HEART,
            streak_count=2,
        )
        state = state_builder(
            [[card(Suit.JOKER, 0)], [card(Suit.HEART, 4)], [], []], field=field
        )

        restored = loads(dumps(state))

        assert restored.field == field
        assert restored.player(0).hand[0].is_joker

    def test_unknown_suit(self, mid_game):
        snapshot = serialize_game_state(mid_game)
        snapshot["players"][0]["hand"][0]["suit"] = "star"

        with pytest.raises(ValueError, match="Unknown suit"):
            hydrate_game_state(snapshot)

    def test_unknown_effect_kind(self, mid_game):
        snapshot = serialize_game_state(mid_game)
        snapshot["pending_effects"][0]["kind"] = "teleport"

        with pytest.raises(ValidationError, match="teleport"):
            hydrate_game_state(snapshot)

    def test_invalid_rules(self, mid_game):
        snapshot = serialize_game_state(mid_game)
        snapshot["rules"]["joker_count"] = 5

        with pytest.raises(ValidationError):
            hydrate_game_state(snapshot)


class TestEffectFromDict:
    def test_dispatches_on_kind(self):
        effect = effect_from_dict({"kind": "mass_discard", "owner_id": 2, "remaining": 1})
        assert effect == MassDiscardEffect(owner_id=2, remaining=1)

    def test_missing_field(self):
        with pytest.raises(ValidationError):
            effect_from_dict({"kind": "transfer", "owner_id": 0, "remaining": 1})
