"""
Engine Core - Deterministic game state, deck management and effect resolution.

The core:
1. Receives a GameState snapshot from the session layer
2. Resolves the round's revealed cards
3. Returns a new GameState

Deck operations are invoked independently whenever a player draws,
discards, or a deck is validated.
"""

from .state import GameState, Player, Deck, CenterCard, GameEffect, LogEntry, LogType
from .deck_manager import DeckManager
from .temporary_effects import TemporaryEffectRegistry
from .effect_resolver import CardEffectResolver, process_effects, apply_card_effect, roll_dice

__all__ = [
    "GameState",
    "Player",
    "Deck",
    "CenterCard",
    "GameEffect",
    "LogEntry",
    "LogType",
    "DeckManager",
    "TemporaryEffectRegistry",
    "CardEffectResolver",
    "process_effects",
    "apply_card_effect",
    "roll_dice",
]
