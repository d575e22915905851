"""
Pydantic Schemas - Wire shapes for cards, decks and game state.

These models define the contract with the session/transport layer.
Field names on the wire use the camelCase names the game client
already speaks (userId, influenceModifier, drawPile, momentumLevel...).

Every model converts to and from the engine's dataclasses without
losing information: from_domain(x).to_domain() == x.
"""

from __future__ import annotations
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from ..spec_schema.card import Card, CardRarity, CardType
from ..spec_schema.effect_dsl import (
    AdjustInfluence,
    BlockCategory,
    BlockNextSpecial,
    CardEffect,
    GrantExtraDraw,
    MomentumCondition,
    ProtectMandates,
    SetMomentum,
    ShiftMomentum,
    TargetType,
)
from ..engine_core.state import CenterCard, Deck, GameEffect, GameState, LogEntry, LogType, Player


class WireModel(BaseModel):
    """Base model: camelCase aliases, snake_case accepted on input."""

    model_config = {"populate_by_name": True, "alias_generator": to_camel}


# =============================================================================
# Effect specs
# =============================================================================

class MomentumConditionModel(WireModel):
    min_level: Optional[int] = None
    max_level: Optional[int] = None

    def to_domain(self) -> MomentumCondition:
        return MomentumCondition(min_level=self.min_level, max_level=self.max_level)


def _condition_model(condition: MomentumCondition | None) -> Optional[MomentumConditionModel]:
    if condition is None:
        return None
    return MomentumConditionModel(min_level=condition.min_level, max_level=condition.max_level)


class AdjustInfluenceModel(WireModel):
    kind: Literal["adjust_influence"] = "adjust_influence"
    amount: int
    target: TargetType = TargetType.SELF
    condition: Optional[MomentumConditionModel] = None

    def to_domain(self) -> AdjustInfluence:
        return AdjustInfluence(
            amount=self.amount,
            target=self.target,
            condition=self.condition.to_domain() if self.condition else None,
        )


class BlockCategoryModel(WireModel):
    kind: Literal["block_category"] = "block_category"
    category: CardType
    duration: int = 1

    def to_domain(self) -> BlockCategory:
        return BlockCategory(category=self.category, duration=self.duration)


class BlockNextSpecialModel(WireModel):
    kind: Literal["block_next_special"] = "block_next_special"
    duration: int = 1

    def to_domain(self) -> BlockNextSpecial:
        return BlockNextSpecial(duration=self.duration)


class GrantExtraDrawModel(WireModel):
    kind: Literal["grant_extra_draw"] = "grant_extra_draw"
    count: int = 1
    condition: Optional[MomentumConditionModel] = None

    def to_domain(self) -> GrantExtraDraw:
        return GrantExtraDraw(
            count=self.count,
            condition=self.condition.to_domain() if self.condition else None,
        )


class SetMomentumModel(WireModel):
    kind: Literal["set_momentum"] = "set_momentum"
    level: int

    def to_domain(self) -> SetMomentum:
        return SetMomentum(level=self.level)


class ShiftMomentumModel(WireModel):
    kind: Literal["shift_momentum"] = "shift_momentum"
    delta: int

    def to_domain(self) -> ShiftMomentum:
        return ShiftMomentum(delta=self.delta)


class ProtectMandatesModel(WireModel):
    kind: Literal["protect_mandates"] = "protect_mandates"

    def to_domain(self) -> ProtectMandates:
        return ProtectMandates()


EffectSpecModel = Annotated[
    Union[
        AdjustInfluenceModel,
        BlockCategoryModel,
        BlockNextSpecialModel,
        GrantExtraDrawModel,
        SetMomentumModel,
        ShiftMomentumModel,
        ProtectMandatesModel,
    ],
    Field(discriminator="kind"),
]


def effect_to_model(spec: CardEffect) -> EffectSpecModel:
    """Convert a domain effect spec to its wire model."""
    if isinstance(spec, AdjustInfluence):
        return AdjustInfluenceModel(
            amount=spec.amount, target=spec.target, condition=_condition_model(spec.condition)
        )
    if isinstance(spec, BlockCategory):
        return BlockCategoryModel(category=spec.category, duration=spec.duration)
    if isinstance(spec, BlockNextSpecial):
        return BlockNextSpecialModel(duration=spec.duration)
    if isinstance(spec, GrantExtraDraw):
        return GrantExtraDrawModel(count=spec.count, condition=_condition_model(spec.condition))
    if isinstance(spec, SetMomentum):
        return SetMomentumModel(level=spec.level)
    if isinstance(spec, ShiftMomentum):
        return ShiftMomentumModel(delta=spec.delta)
    if isinstance(spec, ProtectMandates):
        return ProtectMandatesModel()
    raise ValueError(f"Unknown effect spec: {spec!r}")


# =============================================================================
# Cards and decks
# =============================================================================

class CardModel(WireModel):
    """Card definition on the wire."""
    id: str
    name: str
    card_type: str = Field(alias="type")
    influence: int = 0
    effect: str = ""
    campaign_value: int = 0
    country: Optional[str] = None
    era: Optional[str] = None
    description: Optional[str] = None
    rarity: Optional[CardRarity] = None
    tags: list[str] = Field(default_factory=list)
    effects: list[EffectSpecModel] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, card: Card) -> CardModel:
        return cls(
            id=card.id,
            name=card.name,
            card_type=card.type_label,
            influence=card.influence,
            effect=card.effect,
            campaign_value=card.campaign_value,
            country=card.country,
            era=card.era,
            description=card.description,
            rarity=card.rarity,
            tags=list(card.tags),
            effects=[effect_to_model(spec) for spec in card.effects],
        )

    def to_domain(self) -> Card:
        return Card(
            id=self.id,
            name=self.name,
            card_type=CardType.parse(self.card_type),
            influence=self.influence,
            effect=self.effect,
            campaign_value=self.campaign_value,
            country=self.country,
            era=self.era,
            description=self.description,
            rarity=self.rarity,
            tags=tuple(self.tags),
            effects=tuple(spec.to_domain() for spec in self.effects),
        )


def _card_or_none(card: Card | None) -> Optional[CardModel]:
    return CardModel.from_domain(card) if card is not None else None


class DeckModel(WireModel):
    """Deck with its card pool and both piles."""
    deck_id: Optional[str] = Field(default=None, alias="id")
    name: str
    cards: list[CardModel] = Field(default_factory=list)
    draw_pile: list[str] = Field(default_factory=list)
    discard_pile: list[str] = Field(default_factory=list)
    user_id: Optional[str] = None

    @classmethod
    def from_domain(cls, deck: Deck) -> DeckModel:
        return cls(
            deck_id=deck.deck_id,
            name=deck.name,
            cards=[CardModel.from_domain(c) for c in deck.cards],
            draw_pile=list(deck.draw_pile),
            discard_pile=list(deck.discard_pile),
            user_id=deck.user_id,
        )

    def to_domain(self) -> Deck:
        return Deck(
            name=self.name,
            cards=[c.to_domain() for c in self.cards],
            draw_pile=list(self.draw_pile),
            discard_pile=list(self.discard_pile),
            deck_id=self.deck_id,
            user_id=self.user_id,
        )


# =============================================================================
# Game state
# =============================================================================

class PlayerModel(WireModel):
    player_id: str = Field(alias="userId")
    name: str
    influence: int = 0
    influence_modifier: int = 0
    mandates: int = 0
    is_skipping_round: bool = False
    protected_mandates: bool = False
    can_play_special: bool = True
    discard_next: bool = False
    played_card: Optional[CardModel] = None
    special_card: Optional[CardModel] = None
    hand: list[str] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, player: Player) -> PlayerModel:
        return cls(
            player_id=player.player_id,
            name=player.name,
            influence=player.influence,
            influence_modifier=player.influence_modifier,
            mandates=player.mandates,
            is_skipping_round=player.is_skipping_round,
            protected_mandates=player.protected_mandates,
            can_play_special=player.can_play_special,
            discard_next=player.discard_next,
            played_card=_card_or_none(player.played_card),
            special_card=_card_or_none(player.special_card),
            hand=list(player.hand),
        )

    def to_domain(self) -> Player:
        return Player(
            player_id=self.player_id,
            name=self.name,
            influence=self.influence,
            influence_modifier=self.influence_modifier,
            mandates=self.mandates,
            is_skipping_round=self.is_skipping_round,
            protected_mandates=self.protected_mandates,
            can_play_special=self.can_play_special,
            discard_next=self.discard_next,
            played_card=self.played_card.to_domain() if self.played_card else None,
            special_card=self.special_card.to_domain() if self.special_card else None,
            hand=list(self.hand),
        )


class CenterCardModel(WireModel):
    player_id: str
    card: Optional[CardModel] = None
    revealed: bool = False
    position: int = 0
    target_player_id: Optional[str] = None

    @classmethod
    def from_domain(cls, center: CenterCard) -> CenterCardModel:
        return cls(
            player_id=center.player_id,
            card=_card_or_none(center.card),
            revealed=center.revealed,
            position=center.position,
            target_player_id=center.target_player_id,
        )

    def to_domain(self) -> CenterCard:
        return CenterCard(
            player_id=self.player_id,
            card=self.card.to_domain() if self.card else None,
            revealed=self.revealed,
            position=self.position,
            target_player_id=self.target_player_id,
        )


class GameEffectModel(WireModel):
    effect_id: str = Field(alias="id")
    effect_type: str = Field(alias="type")
    source_card_id: str
    source_player_id: str
    duration: int
    start_round: int
    value: Optional[int] = None
    target_player_id: Optional[str] = None
    description: str = ""

    @classmethod
    def from_domain(cls, effect: GameEffect) -> GameEffectModel:
        return cls(
            effect_id=effect.effect_id,
            effect_type=effect.effect_type,
            source_card_id=effect.source_card_id,
            source_player_id=effect.source_player_id,
            duration=effect.duration,
            start_round=effect.start_round,
            value=effect.value,
            target_player_id=effect.target_player_id,
            description=effect.description,
        )

    def to_domain(self) -> GameEffect:
        return GameEffect(**self.model_dump())


class LogEntryModel(WireModel):
    message: str
    round: int
    log_type: LogType = Field(default=LogType.SYSTEM, alias="type")
    player_id: Optional[str] = None
    card_id: Optional[str] = None
    timestamp: float

    @classmethod
    def from_domain(cls, entry: LogEntry) -> LogEntryModel:
        return cls(
            message=entry.message,
            round=entry.round,
            log_type=entry.log_type,
            player_id=entry.player_id,
            card_id=entry.card_id,
            timestamp=entry.timestamp,
        )

    def to_domain(self) -> LogEntry:
        return LogEntry(**self.model_dump())


class GameStateModel(WireModel):
    """Complete game state snapshot."""
    game_id: str
    players: list[PlayerModel] = Field(default_factory=list)
    round: int = 1
    momentum_level: int = 1
    center_cards: list[CenterCardModel] = Field(default_factory=list)
    temporary_effects: list[GameEffectModel] = Field(default_factory=list)
    log: list[LogEntryModel] = Field(default_factory=list)
    effect_seq: int = 0
    metadata: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_domain(cls, state: GameState) -> GameStateModel:
        return cls(
            game_id=state.game_id,
            players=[PlayerModel.from_domain(p) for p in state.players],
            round=state.round,
            momentum_level=state.momentum_level,
            center_cards=[CenterCardModel.from_domain(cc) for cc in state.center_cards],
            temporary_effects=[GameEffectModel.from_domain(e) for e in state.temporary_effects],
            log=[LogEntryModel.from_domain(e) for e in state.log],
            effect_seq=state.effect_seq,
            metadata=dict(state.metadata),
        )

    def to_domain(self) -> GameState:
        return GameState(
            game_id=self.game_id,
            players=[p.to_domain() for p in self.players],
            round=self.round,
            momentum_level=self.momentum_level,
            center_cards=[cc.to_domain() for cc in self.center_cards],
            temporary_effects=[e.to_domain() for e in self.temporary_effects],
            log=[e.to_domain() for e in self.log],
            effect_seq=self.effect_seq,
            metadata=dict(self.metadata),
        )


class ValidationResponse(WireModel):
    """Deck validation result."""
    valid: bool
    errors: list[str] = Field(default_factory=list)
    total_campaign_value: int = 0
    card_count: int = 0


def dump_state(state: GameState) -> dict[str, Any]:
    """Serialize a GameState to a JSON-compatible dict."""
    return GameStateModel.from_domain(state).model_dump(mode="json", by_alias=True)


def load_state(data: dict[str, Any]) -> GameState:
    return GameStateModel.model_validate(data).to_domain()


def dump_deck(deck: Deck) -> dict[str, Any]:
    return DeckModel.from_domain(deck).model_dump(mode="json", by_alias=True)


def load_deck(data: dict[str, Any]) -> Deck:
    return DeckModel.model_validate(data).to_domain()
