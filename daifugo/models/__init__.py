"""Game models."""

from .actions import Action, PassAction, PlayAction
from .card import Card, Rank, Suit, create_deck, sort_cards
from .combo import Combo, ComboType
from .effects import (
    DiscardEffect,
    DiscardResolution,
    EffectResolution,
    MassDiscardEffect,
    MassDiscardResolution,
    PendingEffect,
    SkipResolution,
    TransferEffect,
    TransferResolution,
)
from .game_state import FieldState, GameState, Phase
from .player import PlayerState

__all__ = [
    "Action",
    "Card",
    "Combo",
    "ComboType",
    "DiscardEffect",
    "DiscardResolution",
    "EffectResolution",
    "FieldState",
    "GameState",
    "MassDiscardEffect",
    "MassDiscardResolution",
    "PassAction",
    "PendingEffect",
    "Phase",
    "PlayAction",
    "PlayerState",
    "Rank",
    "SkipResolution",
    "Suit",
    "TransferEffect",
    "TransferResolution",
    "create_deck",
    "sort_cards",
]
