"""Game logic."""

from .analyzer import ComboAnalyzer
from .effects import EffectResolver, collect_effects
from .engine import GameEngine, deal_cards
from .standings import next_active_player, settle_finishes
from .validator import MoveValidator, ValidationResult, combo_beats_field, effective_direction

__all__ = [
    "ComboAnalyzer",
    "EffectResolver",
    "GameEngine",
    "MoveValidator",
    "ValidationResult",
    "collect_effects",
    "combo_beats_field",
    "deal_cards",
    "effective_direction",
    "next_active_player",
    "settle_finishes",
]
