"""Combo model."""

from enum import Enum

from pydantic import BaseModel

from .card import Card, Suit


class ComboType(str, Enum):
    """Shape of a legal play."""

    SINGLE = "single"
    PAIR = "pair"
    TRIPLE = "triple"
    QUAD = "quad"
    SEQUENCE = "sequence"  # Consecutive cards of same suit (階段)


GROUP_TYPES = {
    2: ComboType.PAIR,
    3: ComboType.TRIPLE,
    4: ComboType.QUAD,
}


class Combo(BaseModel, frozen=True):
    """A classified set of cards.

    ``strength`` is the comparison key: the rank for singles and groups, the
    highest rank for sequences. ``suit_constraint`` is the common suit, or
    None when the cards mix suits or the combo is a lone wild card.
    """

    combo_type: ComboType
    cards: tuple[Card, ...]
    strength: int
    length: int
    suit_constraint: Suit | None = None

    def count_rank(self, rank: int) -> int:
        """Number of cards of the given rank."""
        return sum(1 for c in self.cards if c.rank == rank)

    def card_ids(self) -> list[str]:
        """Ids of the cards in this combo."""
        return [c.card_id for c in self.cards]

    def __str__(self) -> str:
        return " ".join(c.label for c in self.cards)
