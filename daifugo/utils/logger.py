"""Stdlib logging setup and plain-text match summaries for the CLI."""

import logging
import sys
from typing import TYPE_CHECKING

from daifugo.logging.formatters import format_cards, format_combo

if TYPE_CHECKING:
    from daifugo.models.game_state import GameState

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s | %(message)s"

# Traditional titles by finishing position
TITLES = ("Daifugo", "Fugo", "Hinmin", "Daihinmin")


def setup_logging(level: str = "INFO") -> None:
    """Route all loggers to stdout at the given level name."""
    logging.basicConfig(
        level=logging.getLevelName(level.upper()),
        format=LOG_FORMAT,
        datefmt="%H:%M:%S",
        stream=sys.stdout,
    )


class GameDisplay:
    """Prints match progress; the engine itself never writes to stdout."""

    def __init__(self, show_hands: bool = False, width: int = 60):
        self.show_hands = show_hands
        self.width = width

    def rule(self) -> None:
        print("-" * self.width)

    def print_turn(self, turn_number: int, state: "GameState") -> None:
        """One line for the latest log entry, one for the table."""
        flags = [
            name
            for name, on in (
                ("revolution", state.field.is_revolution),
                ("11-back", state.field.is_eleven_back),
                ("lock", state.field.locked_suit is not None),
            )
            if on
        ]
        latest = state.log[-1] if state.log else ""
        suffix = f"  <{' '.join(flags)}>" if flags else ""
        print(f"#{turn_number:>3} {latest}{suffix}")
        print(f"     table: {format_combo(state.field.combo)}")

    def print_hands(self, state: "GameState") -> None:
        if not self.show_hands:
            return
        for player in state.players:
            shown = format_cards(player.hand) if player.hand else "(out)"
            print(f"  {player.name:<10} {shown}")

    def print_game_end(self, game_number: int, state: "GameState") -> None:
        print(f"Game {game_number} standings:")
        for position, player_id in enumerate(state.standings):
            player = state.player(player_id)
            title = TITLES[position] if position < len(TITLES) else f"#{position + 1}"
            print(f"  {position + 1}. {player.name} [{title}]")

    def print_final_results(self, points: dict[int, int], names: dict[int, str]) -> None:
        """Session totals, highest score first."""
        self.rule()
        print("Session totals")
        self.rule()
        ordered = sorted(points.items(), key=lambda item: item[1], reverse=True)
        for place, (player_id, total) in enumerate(ordered, 1):
            print(f"  {place}. {names.get(player_id, f'Player {player_id}')}: {total} pts")
