"""
API Module - Wire shapes for the session/transport layer.

The rules core owns no wire protocol. These models only fix the
JSON shape of cards, decks and game state so whatever transport the
session layer uses can round-trip them losslessly.
"""

from .schemas import (
    CardModel,
    DeckModel,
    PlayerModel,
    CenterCardModel,
    GameEffectModel,
    LogEntryModel,
    GameStateModel,
    ValidationResponse,
    dump_state,
    load_state,
    dump_deck,
    load_deck,
)

__all__ = [
    "CardModel",
    "DeckModel",
    "PlayerModel",
    "CenterCardModel",
    "GameEffectModel",
    "LogEntryModel",
    "GameStateModel",
    "ValidationResponse",
    "dump_state",
    "load_state",
    "dump_deck",
    "load_deck",
]
