"""Card models and deck construction."""

from enum import IntEnum
from typing import Iterable

from pydantic import BaseModel


class Suit(IntEnum):
    """Card suit in canonical ascending order."""

    CLUB = 0
    DIAMOND = 1
    HEART = 2
    SPADE = 3
    JOKER = 4


class Rank(IntEnum):
    """Card rank.

    Strength order (normal): 3 < 4 < ... < K < A < 2 < Joker
    """

    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14
    TWO = 15
    JOKER = 16  # Wild sentinel, above every standard rank


STANDARD_SUITS = (Suit.SPADE, Suit.HEART, Suit.DIAMOND, Suit.CLUB)
STANDARD_RANKS = tuple(r for r in Rank if r != Rank.JOKER)

# Map rank to display string
RANK_NAMES = {
    Rank.THREE: "3",
    Rank.FOUR: "4",
    Rank.FIVE: "5",
    Rank.SIX: "6",
    Rank.SEVEN: "7",
    Rank.EIGHT: "8",
    Rank.NINE: "9",
    Rank.TEN: "10",
    Rank.JACK: "J",
    Rank.QUEEN: "Q",
    Rank.KING: "K",
    Rank.ACE: "A",
    Rank.TWO: "2",
    Rank.JOKER: "Jo",
}

SUIT_SYMBOLS = {
    Suit.SPADE: "♠",
    Suit.HEART: "♥",
    Suit.DIAMOND: "♦",
    Suit.CLUB: "♣",
}


class Card(BaseModel, frozen=True):
    """Single card representation."""

    card_id: str
    suit: Suit
    rank: Rank

    @property
    def is_joker(self) -> bool:
        """Check if this card is a wild card."""
        return self.suit == Suit.JOKER

    @property
    def label(self) -> str:
        """Display label, recomputed from suit and rank."""
        if self.is_joker:
            return "Joker"
        return f"{RANK_NAMES[self.rank]}{SUIT_SYMBOLS[self.suit]}"

    def sort_key(self) -> tuple[int, int]:
        """Canonical ordering: rank then suit, ascending."""
        return (self.rank, self.suit)

    def __str__(self) -> str:
        return self.label

    def __repr__(self) -> str:
        return f"Card({self.card_id!r})"


def sort_cards(cards: Iterable[Card]) -> tuple[Card, ...]:
    """Return cards sorted in canonical hand order."""
    return tuple(sorted(cards, key=Card.sort_key))


def is_starting_card(card: Card) -> bool:
    """The plain 3 of the lowest-ranked suit opens the match."""
    return card.suit == Suit.CLUB and card.rank == Rank.THREE


def create_deck(joker_count: int = 0) -> list[Card]:
    """Create a 52-card deck plus ``joker_count`` wild cards.

    Args:
        joker_count: Number of wild cards to add (0-2).

    Returns:
        Unshuffled list of cards with unique ids.
    """
    cards: list[Card] = []
    counter = 0

    for suit in STANDARD_SUITS:
        for rank in STANDARD_RANKS:
            cards.append(
                Card(card_id=f"{suit.name.lower()}-{int(rank)}-{counter}", suit=suit, rank=rank)
            )
            counter += 1

    for i in range(joker_count):
        cards.append(Card(card_id=f"joker-{i}", suit=Suit.JOKER, rank=Rank.JOKER))

    return cards
