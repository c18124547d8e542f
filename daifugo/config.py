"""Configuration management."""

from pathlib import Path

import yaml
from pydantic import BaseModel, Field


class RuleSettings(BaseModel, frozen=True):
    """Rule toggles, fixed for the lifetime of a match."""

    lock: bool = True  # 縛り
    sequences: bool = True  # 階段
    revolution: bool = True  # 革命 on quads
    eight_stop: bool = True  # 8切り
    eleven_back: bool = True  # 11バック

    # Special effects
    seven_transfer: bool = False  # 7渡し
    ten_discard: bool = False  # 10捨て
    queen_bomber: bool = False  # Qボンバー

    joker_count: int = Field(default=1, ge=0, le=2)


class MatchConfig(BaseModel):
    """Seat names for a new match. Seat 0 is the human seat."""

    human_name: str = "You"
    cpu_names: list[str] = Field(default_factory=lambda: ["AI North", "AI East", "AI South"])


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    show_hands: bool = False


class GameLogSettings(BaseModel):
    """JSONL replay log settings."""

    enabled: bool = False
    output_path: str = "logs"


class SimulationConfig(BaseModel):
    """Headless simulation settings."""

    num_games: int = 1
    seed: int | None = None
    game_log: GameLogSettings = Field(default_factory=GameLogSettings)


class Config(BaseModel):
    """Root configuration."""

    match: MatchConfig = Field(default_factory=MatchConfig)
    rules: RuleSettings = RuleSettings()
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    simulation: SimulationConfig = Field(default_factory=SimulationConfig)


def load_config(path: Path | str | None = None) -> Config:
    """Load configuration from YAML file.

    Args:
        path: Path to config file. If None, uses default config.

    Returns:
        Config object.
    """
    if path is None:
        return Config()

    config_path = Path(path)
    if not config_path.exists():
        return Config()

    with open(config_path) as f:
        data = yaml.safe_load(f)

    return Config(**data) if data else Config()
