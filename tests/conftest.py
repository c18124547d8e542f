"""Shared fixtures for building game states by hand."""

import random

import pytest

from daifugo.config import RuleSettings
from daifugo.game.engine import GameEngine
from daifugo.models.card import Card, Rank, Suit, sort_cards
from daifugo.models.game_state import FieldState, GameState
from daifugo.models.player import PlayerState


def make_card(suit: Suit, rank: int) -> Card:
    """Create a card with a readable id like "spade-3"."""
    if suit == Suit.JOKER:
        return Card(card_id=f"joker-{rank}", suit=Suit.JOKER, rank=Rank.JOKER)
    return Card(card_id=f"{suit.name.lower()}-{rank}", suit=suit, rank=Rank(rank))


def build_state(
    hands: list[list[Card]],
    current: int = 0,
    rules: RuleSettings | None = None,
    field: FieldState | None = None,
) -> GameState:
    """Build a playing state with the given hands for seats 0-3."""
    players = tuple(
        PlayerState(
            player_id=i,
            name=f"P{i}",
            seat=i,
            is_human=i == 0,
            hand=sort_cards(hand),
        )
        for i, hand in enumerate(hands)
    )
    return GameState(
        players=players,
        current_player=current,
        field=field or FieldState(),
        rules=rules or RuleSettings(),
    )


@pytest.fixture
def card():
    return make_card


@pytest.fixture
def state_builder():
    return build_state


@pytest.fixture
def engine():
    return GameEngine(rng=random.Random(1234))
