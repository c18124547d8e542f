"""JSONL replay log for simulated matches.

One JSON object per line. Every record carries a ``type``; match-scoped
records also carry ``game``. Hands are written as compact card codes so a
match can be stepped through offline.
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Sequence, TextIO

from pydantic import BaseModel

from daifugo.models.actions import Action
from daifugo.models.card import Card
from daifugo.models.effects import EffectResolution
from daifugo.models.game_state import GameState

from .formatters import format_codes, format_hands


class GameLogConfig(BaseModel):
    """Where (and whether) to write the replay log."""

    enabled: bool = False
    output_path: str = "daifugo_replay.jsonl"


def _hands(state: GameState) -> dict[str, str]:
    return format_hands({p.player_id: p.hand for p in state.players})


def _table(state: GameState) -> dict[str, Any]:
    field = state.field
    return {
        "combo": format_codes(field.combo.cards) if field.combo else "",
        "owner": field.owner_id,
        "revolution": field.is_revolution,
        "eleven_back": field.is_eleven_back,
        "locked_suit": field.locked_suit.name if field.locked_suit is not None else None,
        "pending_effects": [e.kind for e in state.pending_effects],
    }


class GameLogger:
    """Append-only JSONL writer, used as a context manager.

    With a disabled config every method is a no-op, so callers never need to
    check whether logging is on.
    """

    def __init__(self, config: GameLogConfig | None = None):
        self.config = config or GameLogConfig()
        self._stream: TextIO | None = None

    def __enter__(self) -> "GameLogger":
        self.open()
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def open(self) -> None:
        """Open the output file for appending (creating parent directories)."""
        if self._stream is not None or not self.config.enabled:
            return
        target = Path(self.config.output_path)
        target.parent.mkdir(parents=True, exist_ok=True)
        self._stream = target.open("a", encoding="utf-8")

    def close(self) -> None:
        if self._stream is not None:
            self._stream.close()
            self._stream = None

    def emit(self, record_type: str, **fields: Any) -> None:
        """Write one record; a no-op while the log is closed."""
        if self._stream is None:
            return
        record = {"type": record_type, **fields}
        self._stream.write(json.dumps(record, ensure_ascii=False) + "\n")
        self._stream.flush()

    def log_session_start(self, num_games: int, seed: int | None) -> None:
        self.emit(
            "session_start",
            timestamp=datetime.now().isoformat(),
            num_games=num_games,
            seed=seed,
        )

    def log_game_start(self, game_num: int, state: GameState) -> None:
        """Record seats, dealt hands, the opening seat and the rule toggles."""
        self.emit(
            "game_start",
            game=game_num,
            players=[{"id": p.player_id, "name": p.name} for p in state.players],
            hands=_hands(state),
            first_player=state.current_player,
            rules=state.rules.model_dump(),
        )

    def log_turn(
        self,
        game_num: int,
        turn_num: int,
        action: Action,
        played: Sequence[Card],
        state: GameState,
    ) -> None:
        """Record an accepted play or pass.

        Args:
            game_num: Match number within the session.
            turn_num: Input number within the match.
            action: The accepted action.
            played: Cards the action put on the table (empty for a pass).
            state: State after the action.
        """
        self.emit(
            "turn",
            game=game_num,
            turn=turn_num,
            player=action.player_id,
            action=action.kind,
            cards=format_codes(played),
            table=_table(state),
            hands=_hands(state),
        )

    def log_effect(
        self, game_num: int, turn_num: int, resolution: EffectResolution, state: GameState
    ) -> None:
        """Record an accepted effect resolution."""
        detail: dict[str, Any] = {}
        if hasattr(resolution, "card_ids"):
            detail["cards"] = list(resolution.card_ids)
        if hasattr(resolution, "ranks"):
            detail["ranks"] = list(resolution.ranks)
        self.emit(
            "effect",
            game=game_num,
            turn=turn_num,
            player=resolution.player_id,
            resolution=resolution.kind,
            table=_table(state),
            hands=_hands(state),
            **detail,
        )

    def log_special(
        self,
        game_num: int,
        turn_num: int,
        event: str,
        player_id: int,
        detail: dict[str, Any] | None = None,
    ) -> None:
        """Record a notable table event ("field_clear", "revolution", "player_finish")."""
        fields: dict[str, Any] = {
            "game": game_num,
            "turn": turn_num,
            "event": event,
            "player": player_id,
        }
        if detail:
            fields["detail"] = detail
        self.emit("special", **fields)

    def log_game_end(self, game_num: int, state: GameState) -> None:
        self.emit("game_end", game=game_num, standings=list(state.standings))

    def log_session_end(
        self, total_games: int, final_points: dict[int, int], ranking: list[int]
    ) -> None:
        """Record session totals; ``ranking`` lists player ids best first."""
        self.emit(
            "session_end",
            total_games=total_games,
            points={str(pid): pts for pid, pts in final_points.items()},
            ranking=ranking,
        )
