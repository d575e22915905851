"""
Game State - Value types the rules core operates on.

Design principles:
- Copy-on-write: every mutation helper returns a new object
- Serializable: shapes round-trip through api.schemas
- The session layer owns the canonical copy between calls
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any
import time

from ..spec_schema.card import Card


class LogType(Enum):
    """Log entry classes."""
    INFO = "info"
    ACTION = "action"
    SYSTEM = "system"
    ERROR = "error"


@dataclass(frozen=True)
class LogEntry:
    """A single game log line."""
    message: str
    round: int
    log_type: LogType = LogType.SYSTEM
    player_id: str | None = None
    card_id: str | None = None
    timestamp: float = field(default_factory=time.time)


@dataclass
class Deck:
    """
    A player's deck.

    `cards` is the pool bought into the deck. The two piles hold card ids
    from that pool; the head of `draw_pile` is the next draw.
    """
    name: str
    cards: list[Card] = field(default_factory=list)
    draw_pile: list[str] = field(default_factory=list)
    discard_pile: list[str] = field(default_factory=list)
    deck_id: str | None = None
    user_id: str | None = None

    @property
    def total_count(self) -> int:
        return len(self.draw_pile) + len(self.discard_pile)

    @property
    def is_exhausted(self) -> bool:
        """True when neither pile holds a card."""
        return not self.draw_pile and not self.discard_pile

    def _copy_with(self, **kwargs) -> Deck:
        return replace(self, **kwargs)


@dataclass
class Player:
    """
    Per-round player state.

    The resolver never edits a Player in place; it builds a new one
    and swaps it into a new GameState.
    """
    player_id: str
    name: str

    influence: int = 0
    influence_modifier: int = 0  # reset every round by the session layer
    mandates: int = 0

    # Card effect flags
    is_skipping_round: bool = False
    protected_mandates: bool = False
    can_play_special: bool = True
    discard_next: bool = False

    # Cards played this round
    played_card: Card | None = None
    special_card: Card | None = None

    hand: list[str] = field(default_factory=list)

    def adjust_influence(self, amount: int) -> Player:
        """Return new player with influence_modifier changed by amount."""
        return replace(self, influence_modifier=self.influence_modifier + amount)

    def _copy_with(self, **kwargs) -> Player:
        return replace(self, **kwargs)


@dataclass(frozen=True)
class CenterCard:
    """A card placed in the shared play area this round."""
    player_id: str
    card: Card | None
    revealed: bool = False
    position: int = 0  # play order
    target_player_id: str | None = None


@dataclass(frozen=True)
class GameEffect:
    """
    A duration-scoped modifier recorded against the game state.

    Active for rounds start_round .. start_round + duration - 1.
    """
    effect_id: str
    effect_type: str
    source_card_id: str
    source_player_id: str
    duration: int
    start_round: int
    value: int | None = None
    target_player_id: str | None = None
    description: str = ""

    @property
    def end_round(self) -> int:
        """First round in which the effect is no longer active."""
        return self.start_round + self.duration

    def is_active(self, round_number: int) -> bool:
        return self.start_round <= round_number < self.end_round


@dataclass
class GameState:
    """
    Complete game state at a point in time.

    Produced fresh by every resolution call; the log is append-only.
    """
    game_id: str
    players: list[Player] = field(default_factory=list)
    round: int = 1
    momentum_level: int = 1

    center_cards: list[CenterCard] = field(default_factory=list)
    temporary_effects: list[GameEffect] = field(default_factory=list)
    log: list[LogEntry] = field(default_factory=list)

    # Counter for temporary effect ids, never decremented
    effect_seq: int = 0

    metadata: dict[str, Any] = field(default_factory=dict)

    def get_player(self, player_id: str) -> Player | None:
        """Get player by ID."""
        for p in self.players:
            if p.player_id == player_id:
                return p
        return None

    def opponents_of(self, player_id: str) -> list[Player]:
        """Other players, in seating order."""
        return [p for p in self.players if p.player_id != player_id]

    def with_player(self, player: Player) -> GameState:
        """Return new state with updated player."""
        new_players = [
            player if p.player_id == player.player_id else p
            for p in self.players
        ]
        return self._copy_with(players=new_players)

    def with_log(self, *entries: LogEntry) -> GameState:
        """Return new state with entries appended to the log."""
        return self._copy_with(log=[*self.log, *entries])

    def _copy_with(self, **kwargs) -> GameState:
        """Create a copy with some fields replaced."""
        return replace(self, **kwargs)
