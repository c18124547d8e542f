"""State synchronization helpers."""

from .snapshot import dumps, hydrate_game_state, loads, serialize_game_state

__all__ = ["dumps", "hydrate_game_state", "loads", "serialize_game_state"]
