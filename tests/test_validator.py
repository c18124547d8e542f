"""Tests for field comparison and selection validation."""

import pytest

from daifugo.config import RuleSettings
from daifugo.game.analyzer import ComboAnalyzer
from daifugo.game.validator import MoveValidator, combo_beats_field, effective_direction
from daifugo.models.card import Card, Rank, Suit
from daifugo.models.game_state import FieldState


def combo_of(*specs):
    """Build a combo from (suit, rank) pairs."""
    cards = []
    for suit, rank in specs:
        if suit == Suit.JOKER:
            cards.append(Card(card_id=f"joker-{rank}", suit=suit, rank=Rank.JOKER))
        else:
            cards.append(Card(card_id=f"{suit.name.lower()}-{rank}", suit=suit, rank=Rank(rank)))
    combo = ComboAnalyzer().analyze(cards, RuleSettings())
    assert combo is not None
    return combo


@pytest.fixture
def validator():
    return MoveValidator()


class TestEffectiveDirection:
    """Both reversal sources compose like XOR."""

    @pytest.mark.parametrize(
        "revolution,eleven_back,expected",
        [
            (False, False, 1),
            (True, False, -1),
            (False, True, -1),
            (True, True, 1),
        ],
    )
    def test_direction(self, revolution, eleven_back, expected):
        field = FieldState(is_revolution=revolution, is_eleven_back=eleven_back)
        assert effective_direction(field) == expected


class TestComboBeatsField:
    """Tests for combo_beats_field."""

    def test_empty_field_accepts_anything(self):
        assert combo_beats_field(FieldState(), combo_of((Suit.CLUB, 3)))

    def test_higher_single_beats(self):
        field = FieldState(combo=combo_of((Suit.CLUB, 9)))
        assert combo_beats_field(field, combo_of((Suit.SPADE, 10)))
        assert not combo_beats_field(field, combo_of((Suit.SPADE, 9)))
        assert not combo_beats_field(field, combo_of((Suit.SPADE, 8)))

    def test_type_must_match(self):
        field = FieldState(combo=combo_of((Suit.CLUB, 4)))
        pair = combo_of((Suit.CLUB, 9), (Suit.HEART, 9))
        assert not combo_beats_field(field, pair)

    def test_sequence_length_must_match(self):
        field = FieldState(combo=combo_of((Suit.CLUB, 3), (Suit.CLUB, 4), (Suit.CLUB, 5)))
        longer = combo_of((Suit.HEART, 6), (Suit.HEART, 7), (Suit.HEART, 8), (Suit.HEART, 9))
        same = combo_of((Suit.HEART, 6), (Suit.HEART, 7), (Suit.HEART, 8))
        assert not combo_beats_field(field, longer)
        assert combo_beats_field(field, same)

    def test_reversed_direction(self):
        field = FieldState(combo=combo_of((Suit.CLUB, 9)), is_revolution=True)
        assert combo_beats_field(field, combo_of((Suit.SPADE, 4)))
        assert not combo_beats_field(field, combo_of((Suit.SPADE, 10)))

    def test_double_reversal_cancels(self):
        field = FieldState(
            combo=combo_of((Suit.CLUB, 9)), is_revolution=True, is_eleven_back=True
        )
        assert combo_beats_field(field, combo_of((Suit.SPADE, 10)))
        assert not combo_beats_field(field, combo_of((Suit.SPADE, 4)))

    def test_lock_rejects_other_suit(self):
        field = FieldState(combo=combo_of((Suit.HEART, 5)), locked_suit=Suit.HEART)
        assert combo_beats_field(field, combo_of((Suit.HEART, 6)))
        assert not combo_beats_field(field, combo_of((Suit.SPADE, 6)))

    def test_wild_card_exempt_from_lock(self):
        field = FieldState(combo=combo_of((Suit.HEART, 5)), locked_suit=Suit.HEART)
        assert combo_beats_field(field, combo_of((Suit.JOKER, 0)))

    def test_wild_card_is_weakest_when_reversed(self):
        field = FieldState(combo=combo_of((Suit.HEART, 5)), is_revolution=True)
        assert not combo_beats_field(field, combo_of((Suit.JOKER, 0)))


class TestMoveValidator:
    """Tests for MoveValidator.validate."""

    def test_valid_selection(self, validator, card, state_builder):
        state = state_builder([[card(Suit.SPADE, 7)], [], [], []])

        result = validator.validate(state, 0, ["spade-7"])

        assert result.is_valid
        assert result.combo.strength == 7
        assert result.error_message == ""

    def test_unknown_player(self, validator, card, state_builder):
        state = state_builder([[card(Suit.SPADE, 7)], [], [], []])
        result = validator.validate(state, 9, ["spade-7"])
        assert not result.is_valid
        assert result.error_message == "Unknown player"

    def test_empty_selection(self, validator, card, state_builder):
        state = state_builder([[card(Suit.SPADE, 7)], [], [], []])
        result = validator.validate(state, 0, [])
        assert not result.is_valid
        assert result.error_message == "Select at least one card"

    def test_card_not_in_hand(self, validator, card, state_builder):
        state = state_builder([[card(Suit.SPADE, 7)], [card(Suit.HEART, 7)], [], []])
        result = validator.validate(state, 0, ["spade-7", "heart-7"])
        assert not result.is_valid
        assert result.error_message == "Selected cards are not all in hand"

    def test_duplicate_ids(self, validator, card, state_builder):
        state = state_builder([[card(Suit.SPADE, 7)], [], [], []])
        result = validator.validate(state, 0, ["spade-7", "spade-7"])
        assert not result.is_valid
        assert result.error_message == "Selected cards are not all in hand"

    def test_not_a_combo(self, validator, card, state_builder):
        state = state_builder([[card(Suit.SPADE, 7), card(Suit.HEART, 9)], [], [], []])
        result = validator.validate(state, 0, ["spade-7", "heart-9"])
        assert not result.is_valid
        assert result.combo is None
        assert result.error_message == "Selection does not form a combo"

    def test_does_not_beat_field(self, validator, card, state_builder):
        field = FieldState(combo=combo_of((Suit.CLUB, 9)), owner_id=1)
        state = state_builder([[card(Suit.SPADE, 7)], [], [], []], field=field)

        result = validator.validate(state, 0, ["spade-7"])

        assert not result.is_valid
        assert result.combo is not None
        assert result.error_message == "Combo does not beat the field"
