"""
Temporary Effect Registry - Duration-scoped effects on a GameState.

Effects are created by card resolution and queried by later handlers
("are events blocked this round?"). Expiry is explicit: the resolver
never prunes, the session layer calls sweep_expired at round boundaries.
"""

from __future__ import annotations
import logging

from ..spec_schema.card import Card
from .state import GameState, GameEffect

logger = logging.getLogger(__name__)


class TemporaryEffectRegistry:
    """Queries and updates over GameState.temporary_effects."""

    @staticmethod
    def register(
        game_state: GameState,
        effect_type: str,
        card: Card,
        player_id: str,
        duration: int = 1,
        value: int | None = None,
        target_player_id: str | None = None,
        description: str = "",
    ) -> tuple[GameState, GameEffect]:
        """
        Record a new effect starting in the current round.

        Returns (new_state, effect). Ids come from the state's effect
        counter, so they stay unique after sweeps.
        """
        seq = game_state.effect_seq + 1
        effect = GameEffect(
            effect_id=f"effect-{seq}",
            effect_type=effect_type,
            source_card_id=card.id,
            source_player_id=player_id,
            duration=duration,
            start_round=game_state.round,
            value=value,
            target_player_id=target_player_id,
            description=description,
        )
        new_state = game_state._copy_with(
            temporary_effects=[*game_state.temporary_effects, effect],
            effect_seq=seq,
        )
        return new_state, effect

    @staticmethod
    def active(
        game_state: GameState,
        effect_type: str | None = None,
        round_number: int | None = None,
    ) -> list[GameEffect]:
        """Effects active in the given round (default: current round)."""
        round_number = game_state.round if round_number is None else round_number
        return [
            e for e in game_state.temporary_effects
            if e.is_active(round_number)
            and (effect_type is None or e.effect_type == effect_type)
        ]

    @classmethod
    def has_active(cls, game_state: GameState, effect_type: str) -> bool:
        return bool(cls.active(game_state, effect_type))

    @staticmethod
    def consume(game_state: GameState, effect_id: str) -> GameState:
        """Remove a single effect that has been used up."""
        return game_state._copy_with(
            temporary_effects=[
                e for e in game_state.temporary_effects if e.effect_id != effect_id
            ],
        )

    @staticmethod
    def sweep_expired(game_state: GameState) -> GameState:
        """Drop effects whose duration has elapsed by the current round."""
        kept = [e for e in game_state.temporary_effects if game_state.round < e.end_round]
        dropped = len(game_state.temporary_effects) - len(kept)
        if not dropped:
            return game_state

        logger.debug("Expired %d temporary effect(s) at round %d", dropped, game_state.round)
        return game_state._copy_with(temporary_effects=kept)
