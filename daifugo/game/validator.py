"""Field comparison and selection validation."""

from dataclasses import dataclass
from typing import Sequence

from daifugo.models.card import Card
from daifugo.models.combo import Combo, ComboType
from daifugo.models.game_state import FieldState, GameState
from daifugo.models.player import PlayerState

from .analyzer import ComboAnalyzer


@dataclass
class ValidationResult:
    """Result of selection validation."""

    is_valid: bool
    combo: Combo | None = None
    error_message: str = ""


def effective_direction(field: FieldState) -> int:
    """Return +1 when higher strength wins, -1 when reversed.

    Both reversal sources compose: two active reversals cancel out.
    """
    direction = 1
    if field.is_revolution:
        direction *= -1
    if field.is_eleven_back:
        direction *= -1
    return direction


def combo_beats_field(field: FieldState, combo: Combo) -> bool:
    """Check whether a combo may legally be played on the field.

    Args:
        field: Current field state
        combo: Candidate combo

    Returns:
        True if the field is empty or the combo beats the field combo
    """
    current = field.combo
    if current is None:
        return True

    if combo.combo_type != current.combo_type:
        return False

    if combo.combo_type == ComboType.SEQUENCE and combo.length != current.length:
        return False

    # Combos without a suit constraint are exempt from the lock
    if (
        field.locked_suit is not None
        and combo.suit_constraint is not None
        and combo.suit_constraint != field.locked_suit
    ):
        return False

    if effective_direction(field) >= 0:
        return combo.strength > current.strength
    return combo.strength < current.strength


def collect_cards(player: PlayerState, card_ids: Sequence[str]) -> list[Card] | None:
    """Resolve card ids against a hand.

    Returns:
        The cards in the given order, or None if any id is missing or repeated
    """
    if len(set(card_ids)) != len(card_ids):
        return None
    cards = []
    for card_id in card_ids:
        card = player.find_card(card_id)
        if card is None:
            return None
        cards.append(card)
    return cards


class MoveValidator:
    """Validates card selections against the current field."""

    def __init__(self, analyzer: ComboAnalyzer | None = None):
        """Initialize validator.

        Args:
            analyzer: ComboAnalyzer instance (creates one if not provided)
        """
        self.analyzer = analyzer or ComboAnalyzer()

    def validate(
        self,
        state: GameState,
        player_id: int,
        card_ids: Sequence[str],
    ) -> ValidationResult:
        """Validate a card selection.

        Turn order and pending effects are not checked here; this only
        answers whether the selection forms a combo that beats the field.

        Args:
            state: Current game state
            player_id: Player selecting the cards
            card_ids: Selected card ids

        Returns:
            ValidationResult with the combo when valid
        """
        player = state.player(player_id)
        if player is None:
            return ValidationResult(is_valid=False, error_message="Unknown player")

        if not card_ids:
            return ValidationResult(is_valid=False, error_message="Select at least one card")

        cards = collect_cards(player, card_ids)
        if cards is None:
            return ValidationResult(
                is_valid=False,
                error_message="Selected cards are not all in hand",
            )

        combo = self.analyzer.analyze(cards, state.rules)
        if combo is None:
            return ValidationResult(
                is_valid=False,
                error_message="Selection does not form a combo",
            )

        if not combo_beats_field(state.field, combo):
            return ValidationResult(
                is_valid=False,
                combo=combo,
                error_message="Combo does not beat the field",
            )

        return ValidationResult(is_valid=True, combo=combo)
