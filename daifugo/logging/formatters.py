"""Formatters for cards, combos and effects."""

from typing import Iterable

from daifugo.models.card import RANK_NAMES, Card, Rank, Suit
from daifugo.models.combo import Combo, ComboType

# Suit codes for log output
SUIT_CODES: dict[Suit, str] = {
    Suit.SPADE: "S",
    Suit.HEART: "H",
    Suit.DIAMOND: "D",
    Suit.CLUB: "C",
}

EFFECT_NAMES: dict[str, str] = {
    "transfer": "seven transfer",
    "discard": "ten discard",
    "mass_discard": "queen bomber",
}


def format_card(card: Card) -> str:
    """Format a single card to its compact code.

    Args:
        card: Card to format.

    Returns:
        Formatted string (e.g., "S3" for Spade 3, "Jo" for a wild card).
    """
    if card.is_joker:
        return "Jo"
    return f"{SUIT_CODES[card.suit]}{RANK_NAMES[card.rank]}"


def format_cards(cards: Iterable[Card]) -> str:
    """Format cards with their display labels, space separated."""
    return " ".join(c.label for c in cards)


def format_codes(cards: Iterable[Card]) -> str:
    """Format cards to a comma-separated code string (e.g., "S8,H8,D8")."""
    return ",".join(format_card(c) for c in cards)


def format_rank(rank: int) -> str:
    """Display name of a rank, falling back to the number."""
    try:
        return RANK_NAMES[Rank(rank)]
    except ValueError:
        return str(rank)


def format_combo(combo: Combo | None) -> str:
    """Human-readable description of a combo.

    Args:
        combo: Combo to describe, or None for an empty table.

    Returns:
        e.g. "pair: 9♣ 9♠" or "sequence(3): 5♥ 6♥ 7♥"
    """
    if combo is None:
        return "(empty)"
    kind = combo.combo_type.value
    if combo.combo_type == ComboType.SEQUENCE:
        kind = f"{kind}({combo.length})"
    return f"{kind}: {format_cards(combo.cards)}"


def format_effect_kind(kind: str) -> str:
    """Display name of a pending effect kind."""
    return EFFECT_NAMES.get(kind, "special effect")


def format_hands(hands: dict[int, Iterable[Card]]) -> dict[str, str]:
    """Format all players' hands to dict.

    Args:
        hands: Mapping of player_id to cards.

    Returns:
        Dict mapping player_id (as string) to formatted hand string.
    """
    return {str(pid): format_codes(cards) for pid, cards in hands.items()}
