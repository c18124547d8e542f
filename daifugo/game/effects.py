"""Special effect pipeline.

Effects triggered by a play are queued in a fixed order (transfer, discard,
mass discard). Only the head of the queue can be resolved, and only by its
owner. Transfer and discard may be resolved across several calls; a mass
discard is consumed by a single declaration.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Sequence

from daifugo.logging.formatters import format_cards, format_effect_kind, format_rank
from daifugo.models.card import STANDARD_RANKS, Card, Rank, sort_cards
from daifugo.models.effects import (
    DiscardEffect,
    DiscardResolution,
    MassDiscardEffect,
    MassDiscardResolution,
    SkipResolution,
    TransferEffect,
    TransferResolution,
)
from daifugo.models.game_state import GameState, append_log

from .standings import next_active_player, settle_finishes

if TYPE_CHECKING:
    from daifugo.models.combo import Combo
    from daifugo.models.effects import EffectResolution, PendingEffect

logger = logging.getLogger(__name__)

RANK_TRANSFER = Rank.SEVEN  # 7渡し
RANK_DISCARD = Rank.TEN  # 10捨て
RANK_MASS_DISCARD = Rank.QUEEN  # Qボンバー


def collect_effects(state: GameState, player_id: int, combo: Combo) -> list[PendingEffect]:
    """Build the effects triggered by a combo just played.

    Args:
        state: State after the play (finishes already settled)
        player_id: Player who played the combo
        combo: The combo played

    Returns:
        Effects to append to the queue, in resolution order
    """
    if state.is_finished():
        return []

    rules = state.rules
    effects: list[PendingEffect] = []

    if rules.seven_transfer:
        count = combo.count_rank(RANK_TRANSFER)
        if count > 0:
            target_id = next_active_player(state.players, player_id)
            if target_id != player_id:
                effects.append(
                    TransferEffect(owner_id=player_id, target_id=target_id, remaining=count)
                )

    if rules.ten_discard:
        count = combo.count_rank(RANK_DISCARD)
        if count > 0:
            effects.append(DiscardEffect(owner_id=player_id, remaining=count))

    if rules.queen_bomber:
        count = combo.count_rank(RANK_MASS_DISCARD)
        if count > 0:
            effects.append(MassDiscardEffect(owner_id=player_id, remaining=count))

    return effects


def _take_by_ids(
    hand: Sequence[Card], card_ids: Sequence[str]
) -> tuple[list[Card], list[Card]]:
    wanted = set(card_ids)
    taken = [c for c in hand if c.card_id in wanted]
    kept = [c for c in hand if c.card_id not in wanted]
    return taken, kept


class EffectResolver:
    """Applies resolutions to the head of the pending-effect queue."""

    def resolve(self, state: GameState, resolution: EffectResolution) -> GameState:
        """Resolve the head effect.

        Args:
            state: Current game state
            resolution: The owner's resolution

        Returns:
            New state, or the same state object if the resolution is rejected
        """
        if state.is_finished() or not state.pending_effects:
            return state

        effect = state.pending_effects[0]
        rest = state.pending_effects[1:]

        if resolution.player_id != effect.owner_id:
            logger.debug(f"Rejected resolution from non-owner {resolution.player_id}")
            return state

        if isinstance(resolution, SkipResolution):
            owner = state.player(effect.owner_id)
            name = owner.name if owner else f"Player {effect.owner_id}"
            entry = f"{name} skipped the {format_effect_kind(effect.kind)}"
            logger.debug(entry)
            return state.model_copy(
                update={"pending_effects": rest, "log": append_log(state.log, entry)}
            )

        if isinstance(effect, TransferEffect) and isinstance(resolution, TransferResolution):
            updated = self._transfer(state, effect, resolution, rest)
        elif isinstance(effect, DiscardEffect) and isinstance(resolution, DiscardResolution):
            updated = self._discard(state, effect, resolution, rest)
        elif isinstance(effect, MassDiscardEffect) and isinstance(
            resolution, MassDiscardResolution
        ):
            updated = self._mass_discard(state, effect, resolution, rest)
        else:
            logger.debug(f"Rejected {resolution.kind} resolution for {effect.kind} effect")
            return state

        if updated is None:
            return state

        return settle_finishes(updated, updated.current_player, effect.owner_id)

    def _requested_cards(
        self, state: GameState, owner_id: int, card_ids: Sequence[str], remaining: int
    ) -> tuple[list[Card], list[Card]] | None:
        """Take up to ``remaining`` of the named cards from the owner's hand.

        Every requested id (after truncation) must be in hand, otherwise the
        whole request is rejected.
        """
        requested = list(dict.fromkeys(card_ids))[:remaining]
        if not requested:
            return None
        owner = state.player(owner_id)
        if owner is None or not all(owner.has_card(card_id) for card_id in requested):
            return None
        return _take_by_ids(owner.hand, requested)

    def _transfer(
        self,
        state: GameState,
        effect: TransferEffect,
        resolution: TransferResolution,
        rest: tuple,
    ) -> GameState | None:
        picked = self._requested_cards(
            state, effect.owner_id, resolution.card_ids, effect.remaining
        )
        if picked is None:
            logger.debug(f"Rejected transfer from player {effect.owner_id}")
            return None
        taken, kept = picked

        owner = state.player(effect.owner_id)
        target = state.player(effect.target_id)
        if owner is None or target is None:
            return None

        players = []
        for p in state.players:
            if p.player_id == owner.player_id:
                p = p.model_copy(update={"hand": sort_cards(kept)})
            elif p.player_id == target.player_id:
                p = p.model_copy(update={"hand": sort_cards(p.hand + tuple(taken))})
            players.append(p)

        pending = rest
        left = effect.remaining - len(taken)
        if left > 0:
            pending = (effect.model_copy(update={"remaining": left}),) + rest

        logger.debug(f"Player {owner.player_id} gave {len(taken)} card(s) to {target.player_id}")
        return state.model_copy(
            update={
                "players": tuple(players),
                "pending_effects": pending,
                "log": append_log(
                    state.log,
                    f"{owner.name} gave {len(taken)} card(s) to {target.name}",
                ),
            }
        )

    def _discard(
        self,
        state: GameState,
        effect: DiscardEffect,
        resolution: DiscardResolution,
        rest: tuple,
    ) -> GameState | None:
        picked = self._requested_cards(
            state, effect.owner_id, resolution.card_ids, effect.remaining
        )
        if picked is None:
            logger.debug(f"Rejected discard from player {effect.owner_id}")
            return None
        taken, kept = picked

        owner = state.player(effect.owner_id)
        if owner is None:
            return None

        players = tuple(
            p.model_copy(update={"hand": sort_cards(kept)}) if p.player_id == owner.player_id else p
            for p in state.players
        )

        pending = rest
        left = effect.remaining - len(taken)
        if left > 0:
            pending = (effect.model_copy(update={"remaining": left}),) + rest

        return state.model_copy(
            update={
                "players": players,
                "pending_effects": pending,
                "log": append_log(
                    state.log, f"{owner.name} discarded {format_cards(sort_cards(taken))}"
                ),
            }
        )

    def _mass_discard(
        self,
        state: GameState,
        effect: MassDiscardEffect,
        resolution: MassDiscardResolution,
        rest: tuple,
    ) -> GameState | None:
        ranks = list(dict.fromkeys(resolution.ranks))[: effect.remaining]
        if not ranks:
            return None
        if any(rank not in STANDARD_RANKS for rank in ranks):
            logger.debug(f"Rejected mass discard ranks {ranks}")
            return None

        declared = set(ranks)
        removed_total = 0
        details = []
        players = []
        for p in state.players:
            removed = [c for c in p.hand if c.rank in declared]
            if removed:
                removed_total += len(removed)
                details.append(f"{p.name}: {format_cards(removed)}")
                p = p.model_copy(
                    update={"hand": tuple(c for c in p.hand if c.rank not in declared)}
                )
            players.append(p)

        labels = ", ".join(format_rank(rank) for rank in ranks)
        entry = f"Queen bomber: {labels} declared, {removed_total} card(s) discarded"
        if details:
            entry += f" ({' / '.join(details)})"
        logger.info(entry)

        return state.model_copy(
            update={
                "players": tuple(players),
                "pending_effects": rest,
                "log": append_log(state.log, entry),
            }
        )
