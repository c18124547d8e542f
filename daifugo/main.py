"""Command-line entry point: run headless all-CPU Daifugo matches."""

import argparse
import logging
import random
import sys
from datetime import datetime
from pathlib import Path

from daifugo.config import Config, load_config
from daifugo.game.engine import GameEngine
from daifugo.game.runner import MatchRunner
from daifugo.logging import GameLogConfig, GameLogger
from daifugo.models.game_state import GameState
from daifugo.utils.logger import GameDisplay, setup_logging

logger = logging.getLogger(__name__)


def generate_log_filename(log_dir: str, seed: int | None) -> str:
    """Build ``<log_dir>/<timestamp>_seed<seed>.jsonl`` (``_random`` without a seed)."""
    stamp = datetime.now().strftime("%Y%m%dT%H%M%S")
    tag = "random" if seed is None else f"seed{seed}"
    return str(Path(log_dir) / f"{stamp}_{tag}.jsonl")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="daifugo-sim",
        description="Play Daifugo/Big Tycoon matches between automated seats",
    )
    parser.add_argument("-c", "--config", type=Path, help="YAML config file")
    parser.add_argument("-n", "--num-games", type=int, help="matches to play")
    parser.add_argument("-s", "--seed", type=int, help="shuffle seed")
    parser.add_argument("-v", "--verbose", action="store_true", help="log every input")
    parser.add_argument(
        "--show-hands", action="store_true", help="print hands at the end of each match"
    )
    parser.add_argument(
        "--game-log", type=Path, help="write a JSONL replay log into this directory"
    )
    return parser


def apply_overrides(config: Config, args: argparse.Namespace) -> GameLogConfig:
    """Fold command-line flags into ``config`` and return the replay-log settings."""
    if args.num_games:
        config.simulation.num_games = args.num_games
    if args.seed is not None:
        config.simulation.seed = args.seed
    if args.verbose:
        config.logging.level = "DEBUG"
    if args.show_hands:
        config.logging.show_hands = True

    replay = config.simulation.game_log
    if args.game_log is None and not replay.enabled:
        return GameLogConfig(enabled=False)
    log_dir = str(args.game_log) if args.game_log is not None else replay.output_path
    return GameLogConfig(
        enabled=True,
        output_path=generate_log_filename(log_dir, config.simulation.seed),
    )


def main(argv: list[str] | None = None) -> int:
    """Run a simulation session.

    Returns:
        Process exit code
    """
    args = build_parser().parse_args(argv)
    config = load_config(args.config)
    log_config = apply_overrides(config, args)

    setup_logging(config.logging.level)
    display = GameDisplay(show_hands=config.logging.show_hands)
    verbose = config.logging.level.upper() == "DEBUG"
    seed = config.simulation.seed
    num_games = config.simulation.num_games

    if log_config.enabled:
        print(f"Replay log: {log_config.output_path}")

    try:
        with GameLogger(log_config) as game_logger:
            game_logger.log_session_start(num_games, seed)
            runner = MatchRunner(GameEngine(rng=random.Random(seed)), game_logger=game_logger)
            names: dict[int, str] = {}

            def on_step(turn_num: int, state: GameState) -> None:
                if verbose:
                    display.print_turn(turn_num, state)

            def on_game_end(game_num: int, state: GameState) -> None:
                names.update((p.player_id, p.name) for p in state.players)
                display.print_hands(state)
                display.print_game_end(game_num, state)

            runner.set_callbacks(on_step=on_step, on_game_end=on_game_end)
            print(f"Playing {num_games} game(s), seed={seed}")
            points = runner.run_games(num_games, config.match, config.rules)
            display.print_final_results(points, names)
        return 0

    except KeyboardInterrupt:
        print("\nInterrupted")
        return 1
    except Exception as e:
        logger.exception(f"Simulation failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
