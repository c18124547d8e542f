"""Strategy module for automated opponents."""

from daifugo.strategy.base import Strategy
from daifugo.strategy.simple import SimpleStrategy

__all__ = ["Strategy", "SimpleStrategy"]
