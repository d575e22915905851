"""
Exceptions raised by the session and CLI layers.

The rules core never raises for missing references, rule violations
or deck exhaustion; those come back as log entries or result objects.
"""

SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
PLAYER_NOT_FOUND = "PLAYER_NOT_FOUND"
CARD_NOT_IN_HAND = "CARD_NOT_IN_HAND"
INVALID_DECK = "INVALID_DECK"
INVALID_SESSION_STATE = "INVALID_SESSION_STATE"


class MomentumError(Exception):
    """Base exception carrying a structured error code."""

    def __init__(self, code: str, message: str):
        self.code = code
        self.message = message
        super().__init__(f"[{code}] {message}")


class SessionNotFoundError(MomentumError):
    def __init__(self, session_id: str):
        super().__init__(SESSION_NOT_FOUND, f"Session {session_id} not found")


class PlayerNotFoundError(MomentumError):
    def __init__(self, player_id: str):
        super().__init__(PLAYER_NOT_FOUND, f"Player {player_id} not found")


class CardNotInHandError(MomentumError):
    def __init__(self, player_id: str, card_id: str):
        super().__init__(CARD_NOT_IN_HAND, f"Card {card_id} not in hand of {player_id}")


class DeckValidationError(MomentumError):
    """Raised when a deck that fails validation is activated for play."""

    def __init__(self, player_id: str, errors: list[str]):
        self.errors = errors
        super().__init__(
            INVALID_DECK,
            f"Deck of {player_id} failed validation with {len(errors)} error(s)",
        )


class SessionStateError(MomentumError):
    """Raised when an operation does not fit the session's lifecycle state."""

    def __init__(self, session_id: str, state: str, operation: str):
        super().__init__(
            INVALID_SESSION_STATE,
            f"Cannot {operation} session {session_id} in state {state}",
        )
