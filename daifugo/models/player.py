"""Player model."""

from pydantic import BaseModel

from .card import Card


class PlayerState(BaseModel, frozen=True):
    """Player state.

    ``player_id`` equals the seat index and is fixed for the match.
    """

    player_id: int  # 0-3
    name: str = "Player"
    seat: int = 0
    is_human: bool = False

    # Sorted by rank then suit, ascending
    hand: tuple[Card, ...] = ()

    finished: bool = False
    finish_order: int | None = None  # 1 = first out

    def hand_count(self) -> int:
        """Get number of cards in hand."""
        return len(self.hand)

    def has_card(self, card_id: str) -> bool:
        """Check if a card id is in hand."""
        return any(c.card_id == card_id for c in self.hand)

    def find_card(self, card_id: str) -> Card | None:
        """Look up a card in hand by id."""
        for card in self.hand:
            if card.card_id == card_id:
                return card
        return None

    def __str__(self) -> str:
        status = ""
        if self.finished:
            status = f" (#{self.finish_order})"
        return f"Player{self.player_id}[{self.name}]{status}"
