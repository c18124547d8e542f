"""Base strategy class for automated opponents.

Defines the interface that all AI strategies must implement. Strategies
are pure: they only read the state. When to call them is up to the caller.
"""

from abc import ABC, abstractmethod

from daifugo.models.actions import Action
from daifugo.models.effects import EffectResolution, PendingEffect
from daifugo.models.game_state import GameState
from daifugo.models.player import PlayerState


class Strategy(ABC):
    """Abstract base class for game strategies."""

    @abstractmethod
    def select_lead(self, state: GameState, player: PlayerState) -> Action:
        """Select an action when leading (field is empty).

        Args:
            state: Current game state
            player: The player to act

        Returns:
            Play or pass action
        """
        pass

    @abstractmethod
    def select_follow(self, state: GameState, player: PlayerState) -> Action:
        """Select an action when following (field has cards).

        Args:
            state: Current game state
            player: The player to act

        Returns:
            Play or pass action
        """
        pass

    @abstractmethod
    def select_effect(
        self, state: GameState, effect: PendingEffect, player: PlayerState
    ) -> EffectResolution:
        """Select how to resolve a pending effect owned by the player.

        Args:
            state: Current game state
            effect: Head of the pending-effect queue
            player: Owner of the effect

        Returns:
            Resolution for the effect
        """
        pass

    def select_play(self, state: GameState, player: PlayerState) -> Action:
        """Select an action based on the current field.

        Dispatches to select_lead or select_follow.
        """
        if state.field.is_empty():
            return self.select_lead(state, player)
        else:
            return self.select_follow(state, player)

    def decide(self, state: GameState, player_id: int) -> Action | EffectResolution | None:
        """Decide the next input for a player, if the player is the one to act.

        Returns:
            An effect resolution when the player owns the head effect, an
            action when it is the player's turn, otherwise None.
        """
        if state.is_finished():
            return None

        player = state.player(player_id)
        if player is None:
            return None

        if state.pending_effects:
            effect = state.pending_effects[0]
            if effect.owner_id != player_id:
                return None
            return self.select_effect(state, effect, player)

        if state.current_player != player_id or player.finished:
            return None
        return self.select_play(state, player)
