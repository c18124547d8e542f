"""Game engine: deal and turn transitions.

Every public method takes an immutable GameState and returns a new one (or
the same object when the input is rejected). The engine keeps no match
state of its own; shuffling at deal time is the only source of randomness.
"""

from __future__ import annotations

import logging
import random
from typing import Sequence

from daifugo.config import MatchConfig, RuleSettings
from daifugo.logging.formatters import format_cards
from daifugo.models.actions import Action, PassAction, PlayAction
from daifugo.models.card import Card, Rank, create_deck, is_starting_card, sort_cards
from daifugo.models.combo import Combo, ComboType
from daifugo.models.effects import EffectResolution
from daifugo.models.game_state import FieldState, GameState, append_log
from daifugo.models.player import PlayerState

from .analyzer import ComboAnalyzer
from .effects import EffectResolver, collect_effects
from .standings import next_active_player, settle_finishes
from .validator import MoveValidator, ValidationResult, collect_cards, combo_beats_field

logger = logging.getLogger(__name__)

NUM_PLAYERS = 4

# Special ranks
RANK_EIGHT = Rank.EIGHT  # 8切り
RANK_ELEVEN = Rank.JACK  # 11バック (J=11)


class GameEngine:
    """Rule engine for one or more matches."""

    def __init__(
        self,
        rng: random.Random | None = None,
        analyzer: ComboAnalyzer | None = None,
    ):
        """Initialize game engine.

        Args:
            rng: Random source used only for shuffling at deal time
            analyzer: ComboAnalyzer instance (creates one if not provided)
        """
        self.rng = rng or random.Random()
        self.analyzer = analyzer or ComboAnalyzer()
        self.validator = MoveValidator(self.analyzer)
        self.resolver = EffectResolver()

    def create_match(
        self,
        config: MatchConfig | None = None,
        rules: RuleSettings | None = None,
    ) -> GameState:
        """Shuffle, deal and build the initial state.

        Args:
            config: Seat names (uses defaults if not provided)
            rules: Rule settings (uses defaults if not provided)

        Returns:
            Initial GameState with an empty field
        """
        config = config or MatchConfig()
        rules = rules or RuleSettings()

        deck = create_deck(rules.joker_count)
        self.rng.shuffle(deck)
        hands = deal_cards(deck, NUM_PLAYERS)

        players = []
        for seat in range(NUM_PLAYERS):
            is_human = seat == 0
            if is_human:
                name = config.human_name
            elif seat - 1 < len(config.cpu_names):
                name = config.cpu_names[seat - 1]
            else:
                name = f"CPU {seat}"
            players.append(
                PlayerState(
                    player_id=seat,
                    name=name,
                    seat=seat,
                    is_human=is_human,
                    hand=sort_cards(hands[seat]),
                )
            )

        first = next(
            (p for p in players if any(is_starting_card(c) for c in p.hand)),
            players[0],
        )
        logger.info(f"Match created, first player: {first.player_id}")

        return GameState(
            players=tuple(players),
            current_player=first.player_id,
            field=FieldState(),
            log=(f"{first.name} holds 3♣ and leads",),
            rules=rules,
        )

    def apply_action(self, state: GameState, action: Action) -> GameState:
        """Apply a play or pass.

        Returns:
            New state, or the same state object if the action is illegal
        """
        if state.is_finished():
            return state

        if state.pending_effects:
            logger.debug(f"Rejected {action.kind} from {action.player_id}: effect pending")
            return state

        if action.player_id != state.current_player:
            logger.debug(f"Rejected {action.kind} from {action.player_id}: not their turn")
            return state

        player = state.player(action.player_id)
        if player is None or player.finished:
            return state

        if isinstance(action, PassAction):
            return self._handle_pass(state, player)

        if not action.card_ids:
            return state

        cards = collect_cards(player, action.card_ids)
        if cards is None:
            logger.debug(f"Rejected play from {player.player_id}: cards not in hand")
            return state

        combo = self.analyzer.analyze(cards, state.rules)
        if combo is None:
            logger.debug(f"Rejected play from {player.player_id}: not a combo")
            return state

        if not combo_beats_field(state.field, combo):
            logger.debug(f"Rejected play from {player.player_id}: does not beat field")
            return state

        return self._handle_play(state, player, combo)

    def resolve_effect(self, state: GameState, resolution: EffectResolution) -> GameState:
        """Resolve the head of the pending-effect queue."""
        return self.resolver.resolve(state, resolution)

    def validate_selection(
        self, state: GameState, player_id: int, card_ids: Sequence[str]
    ) -> ValidationResult:
        """Pre-check a selection and explain why it cannot be played."""
        return self.validator.validate(state, player_id, card_ids)

    def enumerate_combos(self, hand: Sequence[Card], rules: RuleSettings) -> list[Combo]:
        """List every legal combo in a hand."""
        return self.analyzer.enumerate(hand, rules)

    def combo_beats_field(self, state: GameState, combo: Combo) -> bool:
        """Check a combo against the current field."""
        return combo_beats_field(state.field, combo)

    def lookup_seat(self, state: GameState, player_id: int) -> PlayerState | None:
        """Find a player by id."""
        return state.player(player_id)

    def _handle_play(self, state: GameState, player: PlayerState, combo: Combo) -> GameState:
        """Apply an accepted play."""
        played = {c.card_id for c in combo.cards}
        remaining_hand = tuple(c for c in player.hand if c.card_id not in played)

        players = tuple(
            p.model_copy(update={"hand": remaining_hand}) if p.player_id == player.player_id else p
            for p in state.players
        )

        field = self._update_lock(state.field, combo, state.rules)
        field = field.model_copy(update={"combo": combo, "owner_id": player.player_id})
        field = self._apply_special_rules(field, combo, state.rules)

        current = next_active_player(players, player.player_id)

        # 8切り (Eight Stop)
        if state.rules.eight_stop and combo.count_rank(RANK_EIGHT) > 0:
            logger.info("8切り! Field cleared.")
            field = field.cleared()
            if remaining_hand:
                current = player.player_id

        updated = state.model_copy(
            update={
                "players": players,
                "field": field,
                "consecutive_passes": 0,
                "current_player": current,
                "log": append_log(state.log, f"{player.name}: {format_cards(combo.cards)}"),
            }
        )
        logger.debug(f"Player {player.player_id} played: {combo}")

        updated = settle_finishes(updated, current, player.player_id)

        effects = collect_effects(updated, player.player_id, combo)
        if effects:
            logger.info(f"Queued effects: {[e.kind for e in effects]}")
            updated = updated.model_copy(
                update={"pending_effects": updated.pending_effects + tuple(effects)}
            )
        return updated

    def _handle_pass(self, state: GameState, player: PlayerState) -> GameState:
        """Apply a pass, clearing the field once everyone else has passed."""
        passes = state.consecutive_passes + 1
        field = state.field
        current = next_active_player(state.players, player.player_id)
        log = append_log(state.log, f"{player.name}: pass")

        active_count = len(state.active_players())
        if field.combo is not None and passes >= active_count - 1:
            owner_id = field.owner_id
            field = field.cleared()
            passes = 0
            if owner_id is not None:
                owner = state.player(owner_id)
                if owner is not None and not owner.finished:
                    current = owner_id
                else:
                    current = next_active_player(state.players, owner_id)
            logger.debug(f"Field cleared, player {current} leads")

        return state.model_copy(
            update={
                "field": field,
                "consecutive_passes": passes,
                "current_player": current,
                "log": log,
            }
        )

    def _apply_special_rules(
        self, field: FieldState, combo: Combo, rules: RuleSettings
    ) -> FieldState:
        """Toggle reversal modifiers triggered by the combo."""
        # 革命 (Revolution)
        if rules.revolution and combo.combo_type == ComboType.QUAD:
            field = field.model_copy(update={"is_revolution": not field.is_revolution})
            rev_status = "ON" if field.is_revolution else "OFF"
            logger.info(f"革命! Revolution is now {rev_status}")

        # 11バック (Eleven Back)
        if rules.eleven_back and combo.count_rank(RANK_ELEVEN) > 0:
            field = field.model_copy(update={"is_eleven_back": not field.is_eleven_back})
            back_status = "ON" if field.is_eleven_back else "OFF"
            logger.info(f"11バック! Eleven back is now {back_status}")

        return field

    def _update_lock(self, field: FieldState, combo: Combo, rules: RuleSettings) -> FieldState:
        """Update lock (shibari) state."""
        if not rules.lock or combo.suit_constraint is None:
            return field.model_copy(
                update={"locked_suit": None, "streak_suit": None, "streak_count": 0}
            )

        if combo.suit_constraint == field.streak_suit:
            streak_count = field.streak_count + 1
        else:
            streak_count = 1

        locked_suit = combo.suit_constraint if streak_count >= 2 else None
        if locked_suit is not None and field.locked_suit is None:
            logger.info("縛り! Lock activated.")

        return field.model_copy(
            update={
                "locked_suit": locked_suit,
                "streak_suit": combo.suit_constraint,
                "streak_count": streak_count,
            }
        )


def deal_cards(deck: Sequence[Card], num_players: int = NUM_PLAYERS) -> list[list[Card]]:
    """Deal cards round-robin starting from seat 0."""
    hands: list[list[Card]] = [[] for _ in range(num_players)]
    for i, card in enumerate(deck):
        hands[i % num_players].append(card)
    return hands
