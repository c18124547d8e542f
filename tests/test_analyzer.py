"""Tests for combo analyzer."""

import pytest

from daifugo.config import RuleSettings
from daifugo.game.analyzer import ComboAnalyzer
from daifugo.models.card import Rank, Suit
from daifugo.models.combo import ComboType


@pytest.fixture
def analyzer():
    return ComboAnalyzer()


@pytest.fixture
def rules():
    return RuleSettings()


class TestAnalyze:
    """Tests for ComboAnalyzer.analyze."""

    def test_empty(self, analyzer, rules):
        assert analyzer.analyze([], rules) is None

    def test_single(self, analyzer, rules, card):
        combo = analyzer.analyze([card(Suit.SPADE, 14)], rules)

        assert combo.combo_type == ComboType.SINGLE
        assert combo.strength == Rank.ACE
        assert combo.length == 1
        assert combo.suit_constraint == Suit.SPADE

    def test_joker_single(self, analyzer, rules, card):
        """A lone wild card is the strongest single and carries no suit."""
        combo = analyzer.analyze([card(Suit.JOKER, 0)], rules)

        assert combo.combo_type == ComboType.SINGLE
        assert combo.strength == Rank.JOKER
        assert combo.suit_constraint is None

    @pytest.mark.parametrize(
        "suits,expected",
        [
            ([Suit.SPADE, Suit.HEART], ComboType.PAIR),
            ([Suit.SPADE, Suit.HEART, Suit.CLUB], ComboType.TRIPLE),
            ([Suit.SPADE, Suit.HEART, Suit.CLUB, Suit.DIAMOND], ComboType.QUAD),
        ],
    )
    def test_groups(self, analyzer, rules, card, suits, expected):
        combo = analyzer.analyze([card(s, 9) for s in suits], rules)

        assert combo.combo_type == expected
        assert combo.strength == 9
        assert combo.length == len(suits)
        assert combo.suit_constraint is None

    def test_pair_with_joker_rejected(self, analyzer, rules, card):
        assert analyzer.analyze([card(Suit.SPADE, 5), card(Suit.JOKER, 0)], rules) is None

    def test_mixed_ranks_rejected(self, analyzer, rules, card):
        assert analyzer.analyze([card(Suit.SPADE, 5), card(Suit.HEART, 6)], rules) is None

    def test_sequence(self, analyzer, rules, card):
        """Same-suit consecutive run; strength is the highest rank."""
        cards = [card(Suit.HEART, 7), card(Suit.HEART, 5), card(Suit.HEART, 6)]

        combo = analyzer.analyze(cards, rules)

        assert combo.combo_type == ComboType.SEQUENCE
        assert combo.strength == 7
        assert combo.length == 3
        assert combo.suit_constraint == Suit.HEART
        assert [c.rank for c in combo.cards] == [5, 6, 7]

    def test_sequence_through_ace_and_two(self, analyzer, rules, card):
        cards = [card(Suit.CLUB, 13), card(Suit.CLUB, 14), card(Suit.CLUB, 15)]
        combo = analyzer.analyze(cards, rules)
        assert combo.combo_type == ComboType.SEQUENCE
        assert combo.strength == Rank.TWO

    def test_sequence_rejections(self, analyzer, rules, card):
        # Too short
        assert analyzer.analyze([card(Suit.HEART, 5), card(Suit.HEART, 6)], rules) is None
        # Mixed suits
        mixed = [card(Suit.HEART, 5), card(Suit.SPADE, 6), card(Suit.HEART, 7)]
        assert analyzer.analyze(mixed, rules) is None
        # Gap
        gap = [card(Suit.HEART, 5), card(Suit.HEART, 6), card(Suit.HEART, 8)]
        assert analyzer.analyze(gap, rules) is None
        # Wild card cannot fill a run
        wild = [card(Suit.HEART, 5), card(Suit.HEART, 6), card(Suit.JOKER, 0)]
        assert analyzer.analyze(wild, rules) is None

    def test_sequences_disabled(self, analyzer, card):
        rules = RuleSettings(sequences=False)
        cards = [card(Suit.HEART, 5), card(Suit.HEART, 6), card(Suit.HEART, 7)]
        assert analyzer.analyze(cards, rules) is None

    def test_five_of_a_rank_impossible(self, analyzer, rules, card):
        cards = [card(s, 9) for s in (Suit.SPADE, Suit.HEART, Suit.CLUB, Suit.DIAMOND)]
        cards.append(card(Suit.JOKER, 0))
        assert analyzer.analyze(cards, rules) is None


class TestEnumerate:
    """Tests for ComboAnalyzer.enumerate."""

    def test_singles_and_pair(self, analyzer, rules, card):
        hand = [card(Suit.SPADE, 4), card(Suit.HEART, 4), card(Suit.CLUB, 9)]

        combos = analyzer.enumerate(hand, rules)

        singles = [c for c in combos if c.combo_type == ComboType.SINGLE]
        pairs = [c for c in combos if c.combo_type == ComboType.PAIR]
        assert len(singles) == 3
        assert [c.strength for c in singles] == [4, 4, 9]
        assert len(pairs) == 1
        assert pairs[0].strength == 4

    def test_groups_of_each_size(self, analyzer, rules, card):
        hand = [card(s, 6) for s in (Suit.SPADE, Suit.HEART, Suit.CLUB, Suit.DIAMOND)]

        combos = analyzer.enumerate(hand, rules)

        types = [c.combo_type for c in combos]
        assert types.count(ComboType.SINGLE) == 4
        assert types.count(ComboType.PAIR) == 1
        assert types.count(ComboType.TRIPLE) == 1
        assert types.count(ComboType.QUAD) == 1

    def test_joker_only_as_single(self, analyzer, rules, card):
        hand = [card(Suit.JOKER, 0), card(Suit.SPADE, 3)]

        combos = analyzer.enumerate(hand, rules)

        assert len(combos) == 2
        assert all(c.combo_type == ComboType.SINGLE for c in combos)

    def test_sub_runs_included(self, analyzer, rules, card):
        """A run of four yields two runs of three and the run of four."""
        hand = [card(Suit.SPADE, r) for r in (5, 6, 7, 8)]

        sequences = [
            c for c in analyzer.enumerate(hand, rules) if c.combo_type == ComboType.SEQUENCE
        ]

        spans = sorted((c.cards[0].rank, c.length) for c in sequences)
        assert spans == [(5, 3), (5, 4), (6, 3)]

    def test_runs_split_by_gap(self, analyzer, rules, card):
        hand = [card(Suit.SPADE, r) for r in (3, 4, 5, 7, 8, 9)]

        sequences = [
            c for c in analyzer.enumerate(hand, rules) if c.combo_type == ComboType.SEQUENCE
        ]

        assert sorted(c.strength for c in sequences) == [5, 9]

    def test_no_sequences_when_disabled(self, analyzer, card):
        hand = [card(Suit.SPADE, r) for r in (5, 6, 7)]
        combos = analyzer.enumerate(hand, RuleSettings(sequences=False))
        assert all(c.combo_type == ComboType.SINGLE for c in combos)

    def test_every_enumerated_combo_analyzes(self, analyzer, rules, card):
        hand = [
            card(Suit.SPADE, 5),
            card(Suit.SPADE, 6),
            card(Suit.SPADE, 7),
            card(Suit.HEART, 7),
            card(Suit.CLUB, 7),
            card(Suit.JOKER, 0),
        ]

        for combo in analyzer.enumerate(hand, rules):
            again = analyzer.analyze(list(combo.cards), rules)
            assert again is not None
            assert again.combo_type == combo.combo_type
            assert again.strength == combo.strength
