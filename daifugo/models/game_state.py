"""Game state models."""

from enum import Enum

from pydantic import BaseModel

from daifugo.config import RuleSettings

from .card import Suit
from .combo import Combo
from .effects import PendingEffect
from .player import PlayerState

# Oldest entries are dropped beyond this
LOG_LIMIT = 30


class Phase(str, Enum):
    """Match phase."""

    PLAYING = "playing"
    FINISHED = "finished"


class FieldState(BaseModel, frozen=True):
    """State of the playing field."""

    combo: Combo | None = None
    owner_id: int | None = None
    locked_suit: Suit | None = None  # 縛り active

    is_revolution: bool = False  # 革命 (global reversal)
    is_eleven_back: bool = False  # 11バック (temporary reversal)

    # Streak of consecutive plays constrained to the same suit
    streak_suit: Suit | None = None
    streak_count: int = 0

    def is_empty(self) -> bool:
        """Check if field is empty."""
        return self.combo is None

    def cleared(self) -> "FieldState":
        """Return the field after it is cleared (場が流れる).

        The global reversal survives a clear; everything else resets.
        """
        return FieldState(is_revolution=self.is_revolution)

    def __str__(self) -> str:
        if self.is_empty():
            return "Field: [empty]"
        lock_str = f" [LOCK {self.locked_suit.name}]" if self.locked_suit is not None else ""
        return f"Field: {self.combo}{lock_str}"


class GameState(BaseModel, frozen=True):
    """Aggregate root for one match. Replaced wholesale on every transition."""

    players: tuple[PlayerState, ...]
    current_player: int = 0
    field: FieldState = FieldState()
    consecutive_passes: int = 0
    log: tuple[str, ...] = ()
    standings: tuple[int, ...] = ()  # Finished player ids, first out first
    phase: Phase = Phase.PLAYING
    rules: RuleSettings = RuleSettings()
    pending_effects: tuple[PendingEffect, ...] = ()

    def player(self, player_id: int) -> PlayerState | None:
        """Look up a player by id."""
        for p in self.players:
            if p.player_id == player_id:
                return p
        return None

    def active_players(self) -> list[PlayerState]:
        """Players who still hold cards."""
        return [p for p in self.players if not p.finished]

    def is_finished(self) -> bool:
        return self.phase == Phase.FINISHED

    def __str__(self) -> str:
        parts = [f"Phase {self.phase.value}"]
        if self.field.is_revolution:
            parts.append("[REVOLUTION]")
        if self.field.is_eleven_back:
            parts.append("[11-BACK]")
        if self.pending_effects:
            parts.append(f"[EFFECT {self.pending_effects[0].kind}]")
        parts.append(f"Player {self.current_player}'s turn")
        return " ".join(parts)


def append_log(log: tuple[str, ...], entry: str) -> tuple[str, ...]:
    """Append an entry, keeping at most LOG_LIMIT entries."""
    return (log + (entry,))[-LOG_LIMIT:]
