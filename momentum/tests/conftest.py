"""
Pytest fixtures for Momentum tests.
"""

import random

import pytest

from ..config import GameSettings, DeckRules
from ..spec_schema.card import Card, CardType
from ..engine_core.state import GameState, Player, Deck, CenterCard
from ..engine_core.deck_manager import DeckManager
from ..engine_core.effect_resolver import CardEffectResolver


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def deck_manager(rng) -> DeckManager:
    return DeckManager(rng=rng)


@pytest.fixture
def resolver(rng) -> CardEffectResolver:
    return CardEffectResolver(rng=rng)


@pytest.fixture
def card_factory():
    """Build plain cards: card_factory(n, value) -> n cards worth `value` each."""
    def make(count: int, value: int = 10000, prefix: str = "c") -> list[Card]:
        return [
            Card(
                id=f"{prefix}{i}",
                name=f"Card {prefix}{i}",
                card_type=CardType.POLITICIAN,
                influence=3,
                effect="Plain card.",
                campaign_value=value,
            )
            for i in range(count)
        ]
    return make


@pytest.fixture
def small_deck(card_factory) -> Deck:
    """Deck with a known pile order: draw a, b, c; discard d."""
    cards = card_factory(4)
    ids = [c.id for c in cards]
    return Deck(name="test", cards=cards, draw_pile=ids[:3], discard_pile=ids[3:])


@pytest.fixture
def three_player_state() -> GameState:
    """Round 2, momentum 3, three players with nothing played."""
    return GameState(
        game_id="test_game",
        players=[
            Player(player_id="p1", name="Alex"),
            Player(player_id="p2", name="Sam"),
            Player(player_id="p3", name="Robin"),
        ],
        round=2,
        momentum_level=3,
    )


@pytest.fixture
def small_deck_settings() -> GameSettings:
    """Settings with five-card decks, so catalog cards fit the budget."""
    return GameSettings(deck=DeckRules(deck_size=5))


def revealed(player_id: str, card: Card, position: int, target: str | None = None) -> CenterCard:
    return CenterCard(
        player_id=player_id,
        card=card,
        revealed=True,
        position=position,
        target_player_id=target,
    )
