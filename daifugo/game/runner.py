"""Headless match runner.

Drives every seat with a strategy, invoking it immediately whenever that
seat is the one to act. This is the caller-side scheduler; the engine and
strategies themselves never decide when to run.
"""

from __future__ import annotations

import logging
from typing import Callable

from daifugo.config import MatchConfig, RuleSettings
from daifugo.logging.game_logger import GameLogger
from daifugo.models.actions import PassAction, PlayAction
from daifugo.models.effects import SkipResolution
from daifugo.models.game_state import GameState
from daifugo.strategy.base import Strategy
from daifugo.strategy.simple import SimpleStrategy

from .engine import GameEngine

logger = logging.getLogger(__name__)

# Upper bound on inputs per match; a finite deck always ends well before this
MAX_STEPS = 5000


class MatchRunner:
    """Runs complete matches with automated players."""

    def __init__(
        self,
        engine: GameEngine | None = None,
        strategies: dict[int, Strategy] | None = None,
        game_logger: GameLogger | None = None,
    ):
        """Initialize runner.

        Args:
            engine: GameEngine instance (creates one if not provided)
            strategies: Strategy per player id (SimpleStrategy for any missing)
            game_logger: GameLogger instance for detailed logging
        """
        self.engine = engine or GameEngine()
        self.strategies = strategies or {}
        self.game_logger = game_logger
        self._default_strategy = SimpleStrategy(self.engine.analyzer)

        self._on_step: Callable[[int, GameState], None] | None = None
        self._on_game_end: Callable[[int, GameState], None] | None = None

    def set_callbacks(
        self,
        on_step: Callable[[int, GameState], None] | None = None,
        on_game_end: Callable[[int, GameState], None] | None = None,
    ) -> None:
        """Set event callbacks.

        Args:
            on_step: Called after each accepted input (step number, state)
            on_game_end: Called when a match ends (game number, final state)
        """
        self._on_step = on_step
        self._on_game_end = on_game_end

    def strategy_for(self, player_id: int) -> Strategy:
        return self.strategies.get(player_id, self._default_strategy)

    def step(self, state: GameState, game_num: int = 1, turn_num: int = 0) -> GameState:
        """Let whoever must act next take one input.

        Raises:
            RuntimeError: If neither the decision nor its fallback is accepted
        """
        if state.pending_effects:
            effect = state.pending_effects[0]
            resolution = self.strategy_for(effect.owner_id).decide(state, effect.owner_id)
            if resolution is None or resolution.kind in ("play", "pass"):
                resolution = SkipResolution(player_id=effect.owner_id)
            updated = self.engine.resolve_effect(state, resolution)
            if updated is state:
                logger.warning(
                    f"Player {effect.owner_id} resolution rejected, skipping {effect.kind}"
                )
                resolution = SkipResolution(player_id=effect.owner_id)
                updated = self.engine.resolve_effect(state, resolution)
            if updated is state:
                raise RuntimeError(f"Effect {effect.kind} could not be resolved")
            if self.game_logger:
                self.game_logger.log_effect(game_num, turn_num, resolution, updated)
            self._log_specials(state, updated, game_num, turn_num)
            return updated

        player_id = state.current_player
        action = self.strategy_for(player_id).decide(state, player_id)
        if action is None or action.kind not in ("play", "pass"):
            action = PassAction(player_id=player_id)

        updated = self.engine.apply_action(state, action)
        if updated is state:
            logger.warning(f"Player {player_id} action rejected, passing")
            action = PassAction(player_id=player_id)
            updated = self.engine.apply_action(state, action)
        if updated is state:
            raise RuntimeError(f"Player {player_id} could not act")

        if self.game_logger:
            played = []
            if isinstance(action, PlayAction):
                player = state.player(player_id)
                played = [c for c in player.hand if c.card_id in action.card_ids]
            self.game_logger.log_turn(game_num, turn_num, action, played, updated)
        self._log_specials(state, updated, game_num, turn_num)
        return updated

    def run_match(self, state: GameState, game_num: int = 1) -> GameState:
        """Play a match to completion.

        Raises:
            RuntimeError: If the match does not finish within MAX_STEPS inputs
        """
        if self.game_logger:
            self.game_logger.log_game_start(game_num, state)

        for turn_num in range(1, MAX_STEPS + 1):
            if state.is_finished():
                break
            state = self.step(state, game_num, turn_num)
            if self._on_step:
                self._on_step(turn_num, state)
        else:
            if not state.is_finished():
                raise RuntimeError(f"Match did not finish within {MAX_STEPS} steps")

        if self.game_logger:
            self.game_logger.log_game_end(game_num, state)
        if self._on_game_end:
            self._on_game_end(game_num, state)
        return state

    def run_games(
        self,
        num_games: int,
        config: MatchConfig | None = None,
        rules: RuleSettings | None = None,
    ) -> dict[int, int]:
        """Run multiple matches.

        Returns:
            Dict of player_id -> total points (4 for 1st, 3 for 2nd, ...)
        """
        points: dict[int, int] = {}

        for game_num in range(1, num_games + 1):
            logger.info(f"Starting game {game_num}/{num_games}")
            state = self.engine.create_match(config, rules)
            for p in state.players:
                points.setdefault(p.player_id, 0)

            final = self.run_match(state, game_num)

            for rank, player_id in enumerate(final.standings):
                points[player_id] += len(final.players) - rank

        if self.game_logger:
            ranking = sorted(points.keys(), key=lambda p: points[p], reverse=True)
            self.game_logger.log_session_end(num_games, points, ranking)

        return points

    def _log_specials(
        self, before: GameState, after: GameState, game_num: int, turn_num: int
    ) -> None:
        if not self.game_logger:
            return

        if before.field.combo is not None and after.field.combo is None:
            self.game_logger.log_special(
                game_num, turn_num, "field_clear", after.current_player
            )

        if before.field.is_revolution != after.field.is_revolution:
            self.game_logger.log_special(
                game_num,
                turn_num,
                "revolution",
                before.current_player,
                {"is_revolution": after.field.is_revolution},
            )

        for position, player_id in enumerate(after.standings[len(before.standings):]):
            self.game_logger.log_special(
                game_num,
                turn_num,
                "player_finish",
                player_id,
                {"position": len(before.standings) + position + 1},
            )
