"""Combo recognition and enumeration."""

from itertools import groupby
from typing import Sequence

from daifugo.config import RuleSettings
from daifugo.models.card import STANDARD_SUITS, Card, sort_cards
from daifugo.models.combo import GROUP_TYPES, Combo, ComboType

MIN_SEQUENCE_LENGTH = 3


class ComboAnalyzer:
    """Classifies card sets into combos."""

    def analyze(self, cards: Sequence[Card], rules: RuleSettings) -> Combo | None:
        """Classify a set of cards.

        Args:
            cards: Cards to analyze
            rules: Active rule settings (sequences may be disabled)

        Returns:
            The combo, or None if the cards do not form a legal shape
        """
        if not cards:
            return None

        ordered = sort_cards(cards)

        if len(ordered) == 1:
            return self._single(ordered[0])

        if self._is_group(ordered):
            return self._group(ordered)

        if rules.sequences and self._is_sequence(ordered):
            return self._sequence(ordered)

        return None

    def enumerate(self, hand: Sequence[Card], rules: RuleSettings) -> list[Combo]:
        """List every legal combo obtainable from a hand.

        Singles come first in hand order, then groups per rank, then every
        same-suit run of at least three cards including sub-runs.
        """
        combos = [self._single(card) for card in sort_cards(hand)]

        normal = sort_cards(c for c in hand if not c.is_joker)
        for _, same_rank in groupby(normal, key=lambda c: c.rank):
            cards_of_rank = list(same_rank)
            for size in GROUP_TYPES:
                if len(cards_of_rank) >= size:
                    combos.append(self._group(tuple(cards_of_rank[:size])))

        if rules.sequences:
            for suit in STANDARD_SUITS:
                suited = [c for c in normal if c.suit == suit]
                for run in self._maximal_runs(suited):
                    combos.extend(self._sub_runs(run))

        return combos

    def _single(self, card: Card) -> Combo:
        return Combo(
            combo_type=ComboType.SINGLE,
            cards=(card,),
            strength=card.rank,
            length=1,
            suit_constraint=None if card.is_joker else card.suit,
        )

    def _group(self, cards: tuple[Card, ...]) -> Combo:
        suits = {c.suit for c in cards}
        return Combo(
            combo_type=GROUP_TYPES[len(cards)],
            cards=cards,
            strength=cards[0].rank,
            length=len(cards),
            suit_constraint=cards[0].suit if len(suits) == 1 else None,
        )

    def _sequence(self, cards: tuple[Card, ...]) -> Combo:
        return Combo(
            combo_type=ComboType.SEQUENCE,
            cards=cards,
            strength=cards[-1].rank,
            length=len(cards),
            suit_constraint=cards[0].suit,
        )

    def _is_group(self, cards: tuple[Card, ...]) -> bool:
        if len(cards) not in GROUP_TYPES:
            return False
        if any(c.is_joker for c in cards):
            return False
        return len({c.rank for c in cards}) == 1

    def _is_sequence(self, cards: tuple[Card, ...]) -> bool:
        if len(cards) < MIN_SEQUENCE_LENGTH:
            return False
        if any(c.is_joker for c in cards):
            return False
        if len({c.suit for c in cards}) != 1:
            return False
        for i in range(1, len(cards)):
            if cards[i].rank != cards[i - 1].rank + 1:
                return False
        return True

    def _maximal_runs(self, suited: list[Card]) -> list[list[Card]]:
        """Split same-suit cards (sorted by rank) into consecutive runs."""
        runs: list[list[Card]] = []
        current: list[Card] = []
        for card in suited:
            if current and card.rank == current[-1].rank + 1:
                current.append(card)
            else:
                if len(current) >= MIN_SEQUENCE_LENGTH:
                    runs.append(current)
                current = [card]
        if len(current) >= MIN_SEQUENCE_LENGTH:
            runs.append(current)
        return runs

    def _sub_runs(self, run: list[Card]) -> list[Combo]:
        combos = []
        for start in range(len(run)):
            for end in range(start + MIN_SEQUENCE_LENGTH, len(run) + 1):
                combos.append(self._sequence(tuple(run[start:end])))
        return combos
