"""
Session Module - Owns game state between rules-core calls.

A session represents one play-through of a game:
- Created when a table connects
- Holds the canonical GameState and the players' decks
- Drives rounds through the rules core
- Destroyed on disconnect

Sessions are EPHEMERAL: no persistence.
"""

from .manager import SessionManager, Session, SessionState

__all__ = [
    "SessionManager",
    "Session",
    "SessionState",
]
