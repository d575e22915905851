"""
Effect Resolver - Applies the cards revealed in a round to the game state.

This module handles:
- Resolution order (politicians, then events, then specials)
- Category gates (blocked events, blocked specials)
- Data-driven effect specs attached to each card
- Target selection for targeted effects

One pass per round, no suspension points. Every handler takes a
GameState and returns a new one; the input is never modified.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable
import logging
import random

from ..config import GameSettings
from ..spec_schema.card import Card, CardType
from ..spec_schema.effect_dsl import (
    BLOCK_NEXT_SPECIAL,
    EXTRA_DRAW,
    AdjustInfluence,
    BlockCategory,
    BlockNextSpecial,
    CardEffect,
    EffectKind,
    GrantExtraDraw,
    ProtectMandates,
    SetMomentum,
    ShiftMomentum,
    TargetType,
    block_tag,
)
from .state import CenterCard, GameState, LogEntry, LogType, Player
from .temporary_effects import TemporaryEffectRegistry

logger = logging.getLogger(__name__)

EffectHandler = Callable[[GameState, CardEffect, Card, str, "str | None"], GameState]


@dataclass
class CardEffectResolver:
    """
    Resolves card effects for a round.

    Stateless apart from the random source used for dice rolls.
    """
    rng: random.Random = field(default_factory=random.Random)
    settings: GameSettings = field(default_factory=GameSettings)

    def process_effects(self, game_state: GameState) -> GameState:
        """
        Resolve every revealed center card.

        Returns the input unchanged when nothing is revealed.
        """
        ordered = self.resolution_order(game_state.center_cards)
        if not ordered:
            return game_state

        new_state = game_state
        for center in ordered:
            new_state = self.apply_card_effect(
                new_state,
                center.card,
                center.player_id,
                target_player_id=center.target_player_id,
            )
        return new_state

    @staticmethod
    def resolution_order(center_cards: list[CenterCard]) -> list[CenterCard]:
        """Revealed cards sorted by (type rank, play position)."""
        revealed = [cc for cc in center_cards if cc.revealed and cc.card is not None]
        return sorted(revealed, key=lambda cc: (cc.card.type_rank, cc.position))

    def apply_card_effect(
        self,
        game_state: GameState,
        card: Card,
        player_id: str,
        target_player_id: str | None = None,
    ) -> GameState:
        """
        Apply a single card's effect.

        A missing owner is logged and skipped. Cards without rules text
        are ignored entirely.
        """
        if not card.effect:
            return game_state

        player = game_state.get_player(player_id)
        if player is None:
            logger.warning("Player %s not found for card %s", player_id, card.id)
            return game_state.with_log(LogEntry(
                message=f"Player {player_id} not found for {card.name} effect",
                round=game_state.round,
                log_type=LogType.ERROR,
                player_id=player_id,
                card_id=card.id,
            ))

        new_state = game_state.with_log(LogEntry(
            message=f"{player.name}'s {card.name} effect: {card.effect}",
            round=game_state.round,
            player_id=player_id,
            card_id=card.id,
        ))

        category_handlers = {
            CardType.POLITICIAN: self._resolve_politician,
            CardType.EVENT: self._resolve_event,
            CardType.SPECIAL: self._resolve_special,
        }
        handler = category_handlers.get(card.card_type)
        if not handler:
            return new_state

        return handler(new_state, card, player_id, target_player_id)

    def roll_dice(self, game_state: GameState, player_id: str, card_id: str) -> int:
        """
        Roll a six-sided die for a card effect.

        Does not touch the state; the caller folds the result in.
        """
        result = self.rng.randint(1, 6)
        logger.debug("Round %d: %s rolled %d for %s", game_state.round, player_id, result, card_id)
        return result

    # =========================================================================
    # Category gates
    # =========================================================================

    def _resolve_politician(
        self, game_state: GameState, card: Card, player_id: str, target_player_id: str | None
    ) -> GameState:
        return self._apply_specs(game_state, card, player_id, target_player_id)

    def _resolve_event(
        self, game_state: GameState, card: Card, player_id: str, target_player_id: str | None
    ) -> GameState:
        if TemporaryEffectRegistry.has_active(game_state, block_tag(CardType.EVENT)):
            return self._blocked(game_state, card)
        return self._apply_specs(game_state, card, player_id, target_player_id)

    def _resolve_special(
        self, game_state: GameState, card: Card, player_id: str, target_player_id: str | None
    ) -> GameState:
        if TemporaryEffectRegistry.has_active(game_state, block_tag(CardType.SPECIAL)):
            return self._blocked(game_state, card)

        blackouts = TemporaryEffectRegistry.active(game_state, BLOCK_NEXT_SPECIAL)
        if blackouts:
            consumed = TemporaryEffectRegistry.consume(game_state, blackouts[0].effect_id)
            return self._blocked(consumed, card)

        return self._apply_specs(game_state, card, player_id, target_player_id)

    def _blocked(self, game_state: GameState, card: Card) -> GameState:
        logger.info("Round %d: %s blocked", game_state.round, card.name)
        return game_state.with_log(LogEntry(
            message=f"{card.name} {card.type_label} was blocked.",
            round=game_state.round,
            card_id=card.id,
        ))

    # =========================================================================
    # Effect specs
    # =========================================================================

    def _apply_specs(
        self, game_state: GameState, card: Card, player_id: str, target_player_id: str | None
    ) -> GameState:
        handlers: dict[EffectKind, EffectHandler] = {
            EffectKind.ADJUST_INFLUENCE: self._adjust_influence,
            EffectKind.BLOCK_CATEGORY: self._block_category,
            EffectKind.BLOCK_NEXT_SPECIAL: self._block_next_special,
            EffectKind.GRANT_EXTRA_DRAW: self._grant_extra_draw,
            EffectKind.SET_MOMENTUM: self._set_momentum,
            EffectKind.SHIFT_MOMENTUM: self._shift_momentum,
            EffectKind.PROTECT_MANDATES: self._protect_mandates,
        }

        new_state = game_state
        for spec in card.effects:
            handler = handlers.get(spec.kind)
            if not handler:
                logger.warning("No handler for effect kind %s on %s", spec.kind, card.id)
                continue
            new_state = handler(new_state, spec, card, player_id, target_player_id)
        return new_state

    def _adjust_influence(
        self,
        game_state: GameState,
        spec: AdjustInfluence,
        card: Card,
        player_id: str,
        target_player_id: str | None,
    ) -> GameState:
        if spec.condition and not spec.condition.holds(game_state.momentum_level):
            logger.debug(
                "%s: condition %s not met at momentum %d",
                card.name, spec.condition.describe(), game_state.momentum_level,
            )
            return game_state

        if spec.target == TargetType.CHOSEN_OPPONENT:
            game_state, target_id = self._choose_opponent(game_state, card, player_id, target_player_id)
            if target_id is None:
                return game_state
            target = game_state.get_player(target_id)
            verb = "reducing" if spec.amount < 0 else "increasing"
            game_state = game_state.with_log(LogEntry(
                message=(
                    f"{card.name} targets {target.name}, {verb} their influence by {abs(spec.amount)}."
                ),
                round=game_state.round,
                player_id=player_id,
                card_id=card.id,
            ))
            selected = {target_id}
        else:
            selected = {p.player_id for p in self._select_players(game_state, spec.target, player_id)}

        new_players = [
            p.adjust_influence(spec.amount) if p.player_id in selected else p
            for p in game_state.players
        ]
        return game_state._copy_with(players=new_players)

    def _block_category(
        self,
        game_state: GameState,
        spec: BlockCategory,
        card: Card,
        player_id: str,
        target_player_id: str | None,
    ) -> GameState:
        span = "this round" if spec.duration == 1 else f"for {spec.duration} rounds"
        new_state, _ = TemporaryEffectRegistry.register(
            game_state,
            block_tag(spec.category),
            card,
            player_id,
            duration=spec.duration,
            description=f"{spec.category.value.capitalize()} cards are blocked {span}",
        )
        return new_state

    def _block_next_special(
        self,
        game_state: GameState,
        spec: BlockNextSpecial,
        card: Card,
        player_id: str,
        target_player_id: str | None,
    ) -> GameState:
        new_state, _ = TemporaryEffectRegistry.register(
            game_state,
            BLOCK_NEXT_SPECIAL,
            card,
            player_id,
            duration=spec.duration,
            description="Block the next special card played",
        )
        return new_state.with_log(LogEntry(
            message=f"{card.name} prevents the next special card from being played.",
            round=new_state.round,
            player_id=player_id,
            card_id=card.id,
        ))

    def _grant_extra_draw(
        self,
        game_state: GameState,
        spec: GrantExtraDraw,
        card: Card,
        player_id: str,
        target_player_id: str | None,
    ) -> GameState:
        if spec.condition and not spec.condition.holds(game_state.momentum_level):
            return game_state

        player = game_state.get_player(player_id)
        noun = "card" if spec.count == 1 else "cards"
        new_state, _ = TemporaryEffectRegistry.register(
            game_state,
            EXTRA_DRAW,
            card,
            player_id,
            duration=1,
            value=spec.count,
            description=f"Draw {spec.count} extra {noun} at end of round",
        )
        return new_state.with_log(LogEntry(
            message=f"{player.name} will draw {spec.count} extra {noun} at the end of the round.",
            round=new_state.round,
            player_id=player_id,
            card_id=card.id,
        ))

    def _set_momentum(
        self,
        game_state: GameState,
        spec: SetMomentum,
        card: Card,
        player_id: str,
        target_player_id: str | None,
    ) -> GameState:
        rules = self.settings.momentum
        level = rules.clamp(spec.level)
        if level == rules.neutral_level:
            message = f"{card.name} resets momentum to neutral (level {level})."
        else:
            message = f"{card.name} sets momentum to level {level}."
        return game_state._copy_with(momentum_level=level).with_log(LogEntry(
            message=message,
            round=game_state.round,
            player_id=player_id,
            card_id=card.id,
        ))

    def _shift_momentum(
        self,
        game_state: GameState,
        spec: ShiftMomentum,
        card: Card,
        player_id: str,
        target_player_id: str | None,
    ) -> GameState:
        level = self.settings.momentum.clamp(game_state.momentum_level + spec.delta)
        return game_state._copy_with(momentum_level=level).with_log(LogEntry(
            message=f"{card.name} moves momentum from {game_state.momentum_level} to {level}.",
            round=game_state.round,
            player_id=player_id,
            card_id=card.id,
        ))

    def _protect_mandates(
        self,
        game_state: GameState,
        spec: ProtectMandates,
        card: Card,
        player_id: str,
        target_player_id: str | None,
    ) -> GameState:
        player = game_state.get_player(player_id)
        return game_state.with_player(player._copy_with(protected_mandates=True))

    # =========================================================================
    # Target helpers
    # =========================================================================

    def _select_players(
        self, game_state: GameState, target: TargetType, player_id: str
    ) -> list[Player]:
        if target == TargetType.SELF:
            return [p for p in game_state.players if p.player_id == player_id]
        if target == TargetType.OTHERS:
            return game_state.opponents_of(player_id)
        if target == TargetType.ALL_PLAYERS:
            return list(game_state.players)
        if target == TargetType.OPPOSING_POLITICIANS:
            return [
                p for p in game_state.opponents_of(player_id)
                if p.played_card is not None and p.played_card.is_politician
            ]
        if target == TargetType.ALL_POLITICIANS:
            return [
                p for p in game_state.players
                if p.played_card is not None and p.played_card.is_politician
            ]
        return []

    def _choose_opponent(
        self,
        game_state: GameState,
        card: Card,
        player_id: str,
        target_player_id: str | None,
    ) -> tuple[GameState, str | None]:
        """
        Resolve the target of a targeted effect.

        Without an explicit choice, falls back to the first opponent in
        seating order.
        """
        if target_player_id is None:
            opponents = game_state.opponents_of(player_id)
            return game_state, (opponents[0].player_id if opponents else None)

        if target_player_id == player_id or game_state.get_player(target_player_id) is None:
            logger.warning("Invalid target %s for %s", target_player_id, card.id)
            return game_state.with_log(LogEntry(
                message=f"{card.name} has no valid target ({target_player_id})",
                round=game_state.round,
                log_type=LogType.ERROR,
                player_id=player_id,
                card_id=card.id,
            )), None

        return game_state, target_player_id


def process_effects(game_state: GameState, rng: random.Random | None = None) -> GameState:
    """
    Convenience function to resolve a round.

    Creates a resolver and processes the revealed center cards.
    """
    return CardEffectResolver(rng=rng or random.Random()).process_effects(game_state)


def apply_card_effect(
    game_state: GameState,
    card: Card,
    player_id: str,
    target_player_id: str | None = None,
) -> GameState:
    """Convenience function to apply a single card."""
    return CardEffectResolver().apply_card_effect(game_state, card, player_id, target_player_id)


def roll_dice(game_state: GameState, player_id: str, card_id: str) -> int:
    """Convenience function for a single die roll."""
    return CardEffectResolver().roll_dice(game_state, player_id, card_id)
