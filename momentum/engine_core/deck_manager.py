"""
Deck Manager - Pure operations over Deck values.

Every method takes a Deck and returns a new Deck (or a result plus a
new Deck). Nothing here edits the deck it was handed.

Invariants:
- Piles only ever hold ids from the deck's card pool
- draw/discard/shuffle/reshuffle move ids, never create or destroy them
- Running out of cards is not an error: draws come back short
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging
import random
import uuid

from ..config import GameSettings
from ..spec_schema.card import Card
from ..spec_schema.validation import ValidationResult
from .state import Deck

logger = logging.getLogger(__name__)


@dataclass
class DeckManager:
    """
    Stateless deck operations.

    The only thing held is the random source, so shuffles can be
    seeded for replays and tests.
    """
    rng: random.Random = field(default_factory=random.Random)
    settings: GameSettings = field(default_factory=GameSettings)

    def create_deck(self, cards: list[Card], name: str = "New Deck") -> Deck:
        """Create a deck whose draw pile is a random permutation of the pool."""
        draw_pile = self._shuffled([card.id for card in cards])
        return Deck(
            name=name,
            cards=list(cards),
            draw_pile=draw_pile,
            discard_pile=[],
            deck_id=f"deck-{uuid.uuid4().hex[:12]}",
        )

    def shuffle_deck(self, deck: Deck) -> Deck:
        """Re-permute the draw pile only."""
        return deck._copy_with(draw_pile=self._shuffled(deck.draw_pile))

    def reshuffle_discard_pile(self, deck: Deck) -> Deck:
        """Merge discard pile into draw pile and shuffle the result."""
        merged = [*deck.draw_pile, *deck.discard_pile]
        logger.debug("Reshuffling %d discarded card(s) into %s", len(deck.discard_pile), deck.name)
        return deck._copy_with(draw_pile=self._shuffled(merged), discard_pile=[])

    def draw_cards(self, deck: Deck, count: int) -> tuple[list[str], Deck]:
        """
        Draw up to `count` ids from the head of the draw pile.

        Reshuffles the discard pile in when the draw pile runs dry.
        Returns (drawn ids, new deck); fewer ids than requested means
        both piles were exhausted.
        """
        current = deck
        drawn: list[str] = []

        for _ in range(max(count, 0)):
            if not current.draw_pile:
                if not current.discard_pile:
                    break
                current = self.reshuffle_discard_pile(current)

            drawn.append(current.draw_pile[0])
            current = current._copy_with(draw_pile=current.draw_pile[1:])

        if len(drawn) < count:
            logger.debug("Deck %s exhausted: drew %d of %d", deck.name, len(drawn), count)

        return drawn, current

    def discard_cards(self, deck: Deck, card_ids: list[str]) -> Deck:
        """Append ids to the discard pile. Ids are not checked."""
        return deck._copy_with(discard_pile=[*deck.discard_pile, *card_ids])

    def peek_top_cards(self, deck: Deck, count: int) -> tuple[list[str], Deck]:
        """
        Look at up to `count` ids on top of the draw pile.

        An empty draw pile triggers the same reshuffle as draw_cards, so
        callers must adopt the returned deck.
        """
        if count <= 0:
            return [], deck

        if not deck.draw_pile:
            if not deck.discard_pile:
                return [], deck
            deck = self.reshuffle_discard_pile(deck)

        return deck.draw_pile[:count], deck

    def put_cards_on_top(self, deck: Deck, card_ids: list[str]) -> Deck:
        """Place ids on top of the draw pile; the first id becomes the next draw."""
        return deck._copy_with(draw_pile=[*card_ids, *deck.draw_pile])

    def get_card_by_id(self, deck: Deck, card_id: str) -> Card | None:
        for card in deck.cards:
            if card.id == card_id:
                return card
        return None

    def calculate_deck_value(self, deck: Deck) -> int:
        """Total campaign value of the card pool."""
        return sum(card.campaign_value or 0 for card in deck.cards)

    def validate_deck(self, deck: Deck) -> ValidationResult:
        """
        Check a deck against the deck-building rules.

        Every rule is checked; errors are collected, never raised.
        """
        rules = self.settings.deck
        errors: list[str] = []

        if len(deck.cards) != rules.deck_size:
            errors.append(
                f"Deck must contain exactly {rules.deck_size} cards. "
                f"Current count: {len(deck.cards)}"
            )

        total_value = self.calculate_deck_value(deck)
        if total_value > rules.campaign_budget:
            errors.append(
                f"Deck exceeds the campaign budget of €{rules.campaign_budget:,}. "
                f"Current value: €{total_value}"
            )

        return ValidationResult.from_errors(errors)

    def _shuffled(self, card_ids: list[str]) -> list[str]:
        shuffled = list(card_ids)
        self.rng.shuffle(shuffled)
        return shuffled
