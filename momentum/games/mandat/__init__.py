"""
Mandat Macht Momentum - The political card game.

Players field politicians, events and special cards each round.
Influence decides who takes the round's mandates; the shared
momentum dial (1-6) changes which cards are strong.

This module contains:
- The card catalog with effect specs
- Starter deck construction
"""

from .cards import (
    MANDAT_CARDS,
    get_all_cards,
    get_card_by_id,
    get_cards_by_type,
    get_cards_by_rarity,
    get_random_cards,
    create_starter_deck,
)

__all__ = [
    "MANDAT_CARDS",
    "get_all_cards",
    "get_card_by_id",
    "get_cards_by_type",
    "get_cards_by_rarity",
    "get_random_cards",
    "create_starter_deck",
]
