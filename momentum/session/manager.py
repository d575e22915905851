"""
Session Manager - Creates and tears down game sessions.

LIFECYCLE:
1. A table connects -> connect() creates a Session (in-memory only)
2. During the game the Session owns the canonical GameState and decks:
   - players draw, discard and play cards
   - cards are revealed and the round is resolved by the rules core
   - end_round() fulfils deferred effects and expires old ones
3. The table disconnects -> disconnect() tears the Session down

The rules core never sees a Session. It is handed a GameState and
returns a new one; this module is the only place that holds state
between calls.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable
import logging
import random
import time
import uuid

from ..config import GameSettings
from ..errors import (
    CardNotInHandError,
    DeckValidationError,
    PlayerNotFoundError,
    SessionNotFoundError,
    SessionStateError,
)
from ..spec_schema.card import Card
from ..spec_schema.effect_dsl import EXTRA_DRAW
from ..engine_core.state import CenterCard, Deck, GameState, LogEntry, LogType, Player
from ..engine_core.deck_manager import DeckManager
from ..engine_core.effect_resolver import CardEffectResolver
from ..engine_core.temporary_effects import TemporaryEffectRegistry

logger = logging.getLogger(__name__)

StateListener = Callable[[GameState], None]


class SessionState(Enum):
    """State of a game session."""
    CREATED = "created"  # Decks registered, not dealt yet
    ACTIVE = "active"  # Game in progress
    CLOSED = "closed"  # Torn down


@dataclass
class Session:
    """
    One play-through of a game.

    Contains:
    - The canonical GameState
    - One Deck per player
    - The rules core (deck manager, resolver)
    - Listeners notified on every state change
    """
    session_id: str
    game_state: GameState
    decks: dict[str, Deck]
    created_at: float

    settings: GameSettings = field(default_factory=GameSettings)
    deck_manager: DeckManager = field(default_factory=DeckManager)
    resolver: CardEffectResolver = field(default_factory=CardEffectResolver)
    state: SessionState = SessionState.CREATED

    _listeners: list[StateListener] = field(default_factory=list)

    def is_active(self) -> bool:
        return self.state in {SessionState.CREATED, SessionState.ACTIVE}

    # =========================================================================
    # Listeners
    # =========================================================================

    def on_state_changed(self, callback: StateListener) -> Callable[[], None]:
        """
        Register a listener for state changes.

        The listener is called right away with the current state.
        Returns an unsubscribe function.
        """
        self._listeners.append(callback)
        callback(self.game_state)

        def unsubscribe():
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def _commit(self, game_state: GameState):
        self.game_state = game_state
        for listener in list(self._listeners):
            listener(game_state)

    # =========================================================================
    # Game flow
    # =========================================================================

    def start(self) -> GameState:
        """
        Validate every deck, shuffle, and deal opening hands.

        Raises SessionStateError unless the session was just created, and
        DeckValidationError for the first invalid deck.
        """
        if self.state != SessionState.CREATED:
            raise SessionStateError(self.session_id, self.state.value, "start")

        for player_id, deck in self.decks.items():
            result = self.deck_manager.validate_deck(deck)
            if not result.valid:
                raise DeckValidationError(player_id, result.errors)

        self.decks = {
            player_id: self.deck_manager.shuffle_deck(deck)
            for player_id, deck in self.decks.items()
        }

        game_state = self.game_state._copy_with(
            momentum_level=self.settings.momentum.initial_level,
        )
        for player in game_state.players:
            game_state = self._draw_into_hand(game_state, player.player_id, self.settings.opening_hand_size)

        self.state = SessionState.ACTIVE
        logger.info("Session %s started with %d player(s)", self.session_id, len(game_state.players))
        self._commit(game_state.with_log(self._entry("Game started.", game_state.round)))
        return self.game_state

    def draw(self, player_id: str, count: int = 1) -> list[str]:
        """Draw cards into a player's hand. Returns the drawn ids."""
        before = len(self._require_player(player_id).hand)
        game_state = self._draw_into_hand(self.game_state, player_id, count)
        self._commit(game_state)
        return game_state.get_player(player_id).hand[before:]

    def discard(self, player_id: str, card_ids: list[str]):
        """Move cards from a player's hand to their discard pile."""
        player = self._require_player(player_id)
        hand = list(player.hand)
        for card_id in card_ids:
            if card_id not in hand:
                raise CardNotInHandError(player_id, card_id)
            hand.remove(card_id)

        self.decks[player_id] = self.deck_manager.discard_cards(self.decks[player_id], card_ids)
        self._commit(self.game_state.with_player(player._copy_with(hand=hand)))

    def play_card(self, player_id: str, card_id: str, target_player_id: str | None = None):
        """
        Place a card from hand face down in the center.

        Politicians become the player's played card, anything else the
        special card.
        """
        player = self._require_player(player_id)
        if card_id not in player.hand:
            raise CardNotInHandError(player_id, card_id)

        card = self.deck_manager.get_card_by_id(self.decks[player_id], card_id)
        if card is None:
            raise CardNotInHandError(player_id, card_id)

        hand = list(player.hand)
        hand.remove(card_id)
        if card.is_politician:
            new_player = player._copy_with(hand=hand, played_card=card)
        else:
            new_player = player._copy_with(hand=hand, special_card=card)

        center = CenterCard(
            player_id=player_id,
            card=card,
            revealed=False,
            position=len(self.game_state.center_cards),
            target_player_id=target_player_id,
        )
        game_state = self.game_state.with_player(new_player)
        self._commit(game_state._copy_with(center_cards=[*game_state.center_cards, center]))

    def reveal_all(self):
        revealed = [
            CenterCard(
                player_id=cc.player_id,
                card=cc.card,
                revealed=True,
                position=cc.position,
                target_player_id=cc.target_player_id,
            )
            for cc in self.game_state.center_cards
        ]
        self._commit(self.game_state._copy_with(center_cards=revealed))

    def resolve_round(self) -> GameState:
        """Run the rules core over the revealed center cards."""
        self._commit(self.resolver.process_effects(self.game_state))
        return self.game_state

    def roll_dice(self, player_id: str, card_id: str) -> int:
        """Roll for a card effect and record the result in the log."""
        self._require_player(player_id)
        result = self.resolver.roll_dice(self.game_state, player_id, card_id)
        self._commit(self.game_state.with_log(LogEntry(
            message=f"{self.game_state.get_player(player_id).name} rolled a {result}.",
            round=self.game_state.round,
            log_type=LogType.ACTION,
            player_id=player_id,
            card_id=card_id,
        )))
        return result

    def end_round(self) -> GameState:
        """
        Close the current round.

        Discards the played cards, fulfils extra draws, resets round-scoped
        player state, then advances the round and expires old effects.
        """
        game_state = self.game_state
        finished_round = game_state.round

        for center in game_state.center_cards:
            if center.card is not None and center.player_id in self.decks:
                self.decks[center.player_id] = self.deck_manager.discard_cards(
                    self.decks[center.player_id], [center.card.id]
                )

        for effect in TemporaryEffectRegistry.active(game_state, EXTRA_DRAW):
            if game_state.get_player(effect.source_player_id) is None:
                continue
            game_state = self._draw_into_hand(game_state, effect.source_player_id, effect.value or 1)

        players = [
            p._copy_with(
                influence_modifier=0,
                protected_mandates=False,
                is_skipping_round=False,
                played_card=None,
                special_card=None,
            )
            for p in game_state.players
        ]
        game_state = game_state._copy_with(
            players=players,
            center_cards=[],
            round=finished_round + 1,
        ).with_log(self._entry(f"Round {finished_round} ended.", finished_round))

        game_state = TemporaryEffectRegistry.sweep_expired(game_state)
        self._commit(game_state)
        return game_state

    # =========================================================================
    # Helpers
    # =========================================================================

    def _draw_into_hand(self, game_state: GameState, player_id: str, count: int) -> GameState:
        player = game_state.get_player(player_id)
        drawn, new_deck = self.deck_manager.draw_cards(self.decks[player_id], count)
        self.decks[player_id] = new_deck
        if len(drawn) < count:
            game_state = game_state.with_log(self._entry(
                f"{player.name} could only draw {len(drawn)} of {count} card(s).",
                game_state.round,
                player_id=player_id,
            ))
        return game_state.with_player(player._copy_with(hand=[*player.hand, *drawn]))

    def _require_player(self, player_id: str) -> Player:
        player = self.game_state.get_player(player_id)
        if player is None or player_id not in self.decks:
            raise PlayerNotFoundError(player_id)
        return player

    @staticmethod
    def _entry(message: str, round_number: int, player_id: str | None = None) -> LogEntry:
        return LogEntry(message=message, round=round_number, log_type=LogType.INFO, player_id=player_id)


class SessionManager:
    """
    Registry of live sessions.

    Responsibilities:
    - Create a session when a table connects
    - Look sessions up by id
    - Tear sessions down on disconnect

    No persistence - sessions are in-memory only.
    """

    def __init__(self, settings: GameSettings | None = None):
        self.settings = settings or GameSettings()
        self._sessions: dict[str, Session] = {}

    def connect(
        self,
        players: list[tuple[str, str]],
        card_pools: dict[str, list[Card]],
        game_id: str | None = None,
        rng: random.Random | None = None,
    ) -> Session:
        """
        Create a new game session.

        Args:
            players: (player_id, name) pairs in seating order
            card_pools: Cards bought into each player's deck
            game_id: Optional game id (generated if omitted)
            rng: Random source shared by shuffles and dice

        Returns:
            New Session, not yet started
        """
        rng = rng or random.Random()
        deck_manager = DeckManager(rng=rng, settings=self.settings)

        decks = {}
        for player_id, name in players:
            if player_id not in card_pools:
                raise PlayerNotFoundError(player_id)
            deck = deck_manager.create_deck(card_pools[player_id], name=f"{name}'s deck")
            decks[player_id] = deck._copy_with(user_id=player_id)

        session_id = str(uuid.uuid4())
        game_state = GameState(
            game_id=game_id or f"game-{session_id[:8]}",
            players=[Player(player_id=pid, name=name) for pid, name in players],
            momentum_level=self.settings.momentum.initial_level,
        )

        session = Session(
            session_id=session_id,
            game_state=game_state,
            decks=decks,
            created_at=time.time(),
            settings=self.settings,
            deck_manager=deck_manager,
            resolver=CardEffectResolver(rng=rng, settings=self.settings),
        )
        self._sessions[session_id] = session
        logger.info("Session %s connected (game %s)", session_id, game_state.game_id)
        return session

    def get_session(self, session_id: str) -> Session | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def require_session(self, session_id: str) -> Session:
        session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    def disconnect(self, session_id: str) -> bool:
        """
        Tear a session down.

        Returns False if the session was already gone.
        """
        session = self._sessions.pop(session_id, None)
        if session is None:
            return False

        session.state = SessionState.CLOSED
        session._listeners.clear()
        session.decks = {}
        logger.info("Session %s disconnected", session_id)
        return True

    def list_active_sessions(self) -> list[str]:
        """List IDs of active sessions."""
        return [
            sid for sid, session in self._sessions.items()
            if session.is_active()
        ]
