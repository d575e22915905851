"""Game settings."""

from __future__ import annotations
import os
from pathlib import Path

import yaml
from pydantic import BaseModel

MOMENTUM_CONFIG = os.getenv("MOMENTUM_CONFIG", None)


class DeckRules(BaseModel):
    """Deck-building constraints."""

    deck_size: int = 20
    campaign_budget: int = 250_000
    required_politicians: int = 10
    required_events: int = 6
    required_specials: int = 4


class MomentumRules(BaseModel):
    """Bounds of the shared momentum dial."""

    min_level: int = 1
    max_level: int = 6
    neutral_level: int = 3
    initial_level: int = 1

    def clamp(self, level: int) -> int:
        return max(self.min_level, min(self.max_level, level))


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"


class GameSettings(BaseModel):
    """Root configuration."""

    deck: DeckRules = DeckRules()
    momentum: MomentumRules = MomentumRules()
    logging: LoggingConfig = LoggingConfig()

    opening_hand_size: int = 6


def load_settings(path: Path | str | None = None) -> GameSettings:
    """Load settings from a YAML file.

    Args:
        path: Path to the settings file. Falls back to $MOMENTUM_CONFIG,
            then to the defaults.

    Returns:
        GameSettings object.
    """
    path = path or MOMENTUM_CONFIG
    if path is None:
        return GameSettings()

    config_path = Path(path)
    if not config_path.exists():
        return GameSettings()

    with open(config_path, encoding="utf-8") as f:
        data = yaml.safe_load(f)

    return GameSettings(**data) if data else GameSettings()
