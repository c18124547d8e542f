"""Simple greedy strategy.

Strategy:
- Lead: Play the shortest combo, lowest strength first
- Follow: Play the weakest combo that still beats the field
  (highest when a reversal is in effect), otherwise pass
- Transfer: Give away the highest cards
- Discard: Throw away the lowest cards
- Mass discard: Declare the ranks most held across all hands
"""

from collections import Counter

from daifugo.game.analyzer import ComboAnalyzer
from daifugo.game.validator import combo_beats_field, effective_direction
from daifugo.models.actions import Action, PassAction, PlayAction
from daifugo.models.card import STANDARD_RANKS
from daifugo.models.combo import Combo
from daifugo.models.effects import (
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
from daifugo.models.game_state import GameState
from daifugo.models.player import PlayerState
from daifugo.strategy.base import Strategy


class SimpleStrategy(Strategy):
    """Greedy one-ply strategy, no lookahead."""

    def __init__(self, analyzer: ComboAnalyzer | None = None):
        self.analyzer = analyzer or ComboAnalyzer()

    def playable_combos(self, state: GameState, player: PlayerState) -> list[Combo]:
        """All combos in the player's hand that can be played on the field."""
        combos = self.analyzer.enumerate(player.hand, state.rules)
        return [c for c in combos if combo_beats_field(state.field, c)]

    def select_lead(self, state: GameState, player: PlayerState) -> Action:
        """Lead with the shortest combo, breaking ties by lowest strength."""
        playable = self.playable_combos(state, player)
        if not playable:
            return PassAction(player_id=player.player_id)

        chosen = min(playable, key=lambda c: (c.length, c.strength))
        return PlayAction(player_id=player.player_id, card_ids=tuple(chosen.card_ids()))

    def select_follow(self, state: GameState, player: PlayerState) -> Action:
        """Follow with the least wasteful winning combo."""
        playable = self.playable_combos(state, player)
        if not playable:
            return PassAction(player_id=player.player_id)

        direction = effective_direction(state.field)
        chosen = min(playable, key=lambda c: c.strength * direction)
        return PlayAction(player_id=player.player_id, card_ids=tuple(chosen.card_ids()))

    def select_effect(
        self, state: GameState, effect: PendingEffect, player: PlayerState
    ) -> EffectResolution:
        if isinstance(effect, TransferEffect):
            count = min(effect.remaining, player.hand_count())
            strongest = sorted(player.hand, key=lambda c: c.rank, reverse=True)[:count]
            if not strongest:
                return SkipResolution(player_id=player.player_id)
            return TransferResolution(
                player_id=player.player_id,
                card_ids=tuple(c.card_id for c in strongest),
            )

        if isinstance(effect, DiscardEffect):
            count = min(effect.remaining, player.hand_count())
            weakest = sorted(player.hand, key=lambda c: c.rank)[:count]
            if not weakest:
                return SkipResolution(player_id=player.player_id)
            return DiscardResolution(
                player_id=player.player_id,
                card_ids=tuple(c.card_id for c in weakest),
            )

        if isinstance(effect, MassDiscardEffect):
            held = Counter(
                int(c.rank) for p in state.players for c in p.hand if c.rank in STANDARD_RANKS
            )
            ranked = sorted(held.items(), key=lambda item: (-item[1], -item[0]))
            ranks = tuple(rank for rank, _ in ranked[: effect.remaining])
            if not ranks:
                return SkipResolution(player_id=player.player_id)
            return MassDiscardResolution(player_id=player.player_id, ranks=ranks)

        return SkipResolution(player_id=player.player_id)
