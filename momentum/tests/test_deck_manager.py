"""
Tests for the deck manager.

Tests:
- Creation and shuffling
- Draw with reshuffle and exhaustion
- Discard, peek, put-on-top
- Deck validation
"""

from collections import Counter
import random

from ..engine_core.deck_manager import DeckManager
from ..engine_core.state import Deck


def pile_multiset(deck: Deck) -> Counter:
    return Counter(deck.draw_pile) + Counter(deck.discard_pile)


class TestCreateAndShuffle:
    """Tests for deck creation and shuffles."""

    def test_create_deck_permutes_pool(self, deck_manager, card_factory):
        """Draw pile is a permutation of the pool ids."""
        cards = card_factory(20)
        deck = deck_manager.create_deck(cards)

        assert sorted(deck.draw_pile) == sorted(c.id for c in cards)
        assert deck.discard_pile == []
        assert deck.cards == cards
        assert deck.deck_id

    def test_shuffle_only_touches_draw_pile(self, deck_manager, small_deck):
        """Shuffle leaves the discard pile and pool alone."""
        shuffled = deck_manager.shuffle_deck(small_deck)

        assert sorted(shuffled.draw_pile) == sorted(small_deck.draw_pile)
        assert shuffled.discard_pile == small_deck.discard_pile
        assert shuffled.cards == small_deck.cards

    def test_reshuffle_merges_piles(self, deck_manager, small_deck):
        """Reshuffle empties the discard pile into the draw pile."""
        reshuffled = deck_manager.reshuffle_discard_pile(small_deck)

        assert reshuffled.discard_pile == []
        assert len(reshuffled.draw_pile) == 4
        assert pile_multiset(reshuffled) == pile_multiset(small_deck)

    def test_shuffle_is_seedable(self, card_factory):
        """Same seed, same order."""
        cards = card_factory(20)
        a = DeckManager(rng=random.Random(7)).create_deck(cards)
        b = DeckManager(rng=random.Random(7)).create_deck(cards)
        assert a.draw_pile == b.draw_pile


class TestDraw:
    """Tests for drawing cards."""

    def test_draw_from_head(self, deck_manager, small_deck):
        """Draws come off the head in order."""
        drawn, deck = deck_manager.draw_cards(small_deck, 2)

        assert drawn == ["c0", "c1"]
        assert deck.draw_pile == ["c2"]
        assert deck.discard_pile == ["c3"]

    def test_draw_does_not_modify_input(self, deck_manager, small_deck):
        """The deck passed in is left as it was."""
        deck_manager.draw_cards(small_deck, 4)

        assert small_deck.draw_pile == ["c0", "c1", "c2"]
        assert small_deck.discard_pile == ["c3"]

    def test_draw_reshuffles_then_stops_short(self, deck_manager, card_factory):
        """Two in draw pile, one discarded: asking for five yields three."""
        cards = card_factory(3)
        deck = Deck(name="t", cards=cards, draw_pile=["c0", "c1"], discard_pile=["c2"])

        drawn, new_deck = deck_manager.draw_cards(deck, 5)

        assert drawn == ["c0", "c1", "c2"]
        assert new_deck.total_count == deck.total_count - 3
        assert new_deck.is_exhausted

    def test_draw_from_empty_deck(self, deck_manager, card_factory):
        """Nothing to draw is not an error."""
        deck = Deck(name="empty", cards=card_factory(2))
        drawn, new_deck = deck_manager.draw_cards(deck, 3)

        assert drawn == []
        assert new_deck.is_exhausted

    def test_draw_zero(self, deck_manager, small_deck):
        drawn, deck = deck_manager.draw_cards(small_deck, 0)
        assert drawn == []
        assert deck.draw_pile == small_deck.draw_pile


class TestPilesAndPeek:
    """Tests for discard, peek and put-on-top."""

    def test_discard_appends(self, deck_manager, small_deck):
        deck = deck_manager.discard_cards(small_deck, ["c0", "x9"])
        assert deck.discard_pile == ["c3", "c0", "x9"]

    def test_peek_is_non_destructive(self, deck_manager, small_deck):
        """Peek returns the head without removing it."""
        top, deck = deck_manager.peek_top_cards(small_deck, 2)

        assert top == ["c0", "c1"]
        assert deck.draw_pile == small_deck.draw_pile
        assert deck.discard_pile == small_deck.discard_pile

    def test_peek_more_than_available(self, deck_manager, small_deck):
        top, _ = deck_manager.peek_top_cards(small_deck, 10)
        assert top == ["c0", "c1", "c2"]

    def test_peek_empty_draw_pile_reshuffles(self, deck_manager, card_factory):
        """Peeking an empty draw pile pulls the discard pile in."""
        cards = card_factory(2)
        deck = Deck(name="t", cards=cards, draw_pile=[], discard_pile=["c0", "c1"])

        top, new_deck = deck_manager.peek_top_cards(deck, 1)

        assert len(top) == 1
        assert new_deck.discard_pile == []
        assert sorted(new_deck.draw_pile) == ["c0", "c1"]

    def test_peek_exhausted_deck(self, deck_manager, card_factory):
        deck = Deck(name="t", cards=card_factory(1))
        top, new_deck = deck_manager.peek_top_cards(deck, 3)
        assert top == []
        assert new_deck is deck

    def test_peek_zero_leaves_piles_alone(self, deck_manager, card_factory):
        """A zero peek on an empty draw pile does not reshuffle."""
        deck = Deck(name="t", cards=card_factory(2), draw_pile=[], discard_pile=["c0", "c1"])

        top, new_deck = deck_manager.peek_top_cards(deck, 0)

        assert top == []
        assert new_deck.draw_pile == []
        assert new_deck.discard_pile == ["c0", "c1"]

    def test_put_cards_on_top_order(self, deck_manager, small_deck):
        """First id given becomes the next draw."""
        deck = deck_manager.put_cards_on_top(small_deck, ["x1", "x2"])
        assert deck.draw_pile == ["x1", "x2", "c0", "c1", "c2"]

        drawn, _ = deck_manager.draw_cards(deck, 1)
        assert drawn == ["x1"]

    def test_operations_conserve_cards(self, deck_manager, small_deck):
        """Shuffle, reshuffle and peek never change the pile contents."""
        before = pile_multiset(small_deck)
        deck = deck_manager.shuffle_deck(small_deck)
        deck = deck_manager.reshuffle_discard_pile(deck)
        _, deck = deck_manager.peek_top_cards(deck, 2)
        assert pile_multiset(deck) == before

        drawn, deck = deck_manager.draw_cards(deck, 3)
        deck = deck_manager.discard_cards(deck, drawn)
        assert pile_multiset(deck) == before

    def test_get_card_by_id(self, deck_manager, small_deck):
        assert deck_manager.get_card_by_id(small_deck, "c2").name == "Card c2"
        assert deck_manager.get_card_by_id(small_deck, "nope") is None


class TestValidateDeck:
    """Tests for deck validation."""

    def test_valid_deck(self, deck_manager, card_factory):
        """Twenty cards within budget pass."""
        deck = deck_manager.create_deck(card_factory(20, value=12500))

        result = deck_manager.validate_deck(deck)

        assert result.valid
        assert result.errors == []
        assert deck_manager.calculate_deck_value(deck) == 250000

    def test_wrong_size(self, deck_manager, card_factory):
        """Twenty-five cards fail on size."""
        deck = deck_manager.create_deck(card_factory(25, value=1000))

        result = deck_manager.validate_deck(deck)

        assert not result.valid
        assert result.errors == ["Deck must contain exactly 20 cards. Current count: 25"]

    def test_over_budget_only(self, deck_manager, card_factory):
        """Twenty cards worth 260,000 give exactly one budget error."""
        deck = deck_manager.create_deck(card_factory(20, value=13000))

        result = deck_manager.validate_deck(deck)

        assert not result.valid
        assert len(result.errors) == 1
        assert "budget" in result.errors[0]
        assert result.errors[0] == (
            "Deck exceeds the campaign budget of €250,000. Current value: €260000"
        )

    def test_reports_every_violation(self, deck_manager, card_factory):
        """Both rules are checked, not just the first failure."""
        deck = deck_manager.create_deck(card_factory(30, value=20000))

        result = deck_manager.validate_deck(deck)

        assert len(result.errors) == 2

    def test_rules_come_from_settings(self, card_factory, small_deck_settings):
        manager = DeckManager(settings=small_deck_settings)
        deck = manager.create_deck(card_factory(5))
        assert manager.validate_deck(deck).valid
