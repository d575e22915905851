"""
Effect DSL - Data-driven card effects.

Each card carries a tuple of effect specs. A spec is a small tagged
record; the resolver looks at its `kind` and applies it with a single
generic handler per kind. New cards are data, not code.

Key design decisions:
- Targets are resolved at application time via TargetType
- Conditions read the momentum dial only
- Specs are frozen: they are part of read-only card definitions
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Union

from .card import CardType


class EffectKind(Enum):
    """Types of effect specs."""
    ADJUST_INFLUENCE = "adjust_influence"
    BLOCK_CATEGORY = "block_category"
    BLOCK_NEXT_SPECIAL = "block_next_special"
    GRANT_EXTRA_DRAW = "grant_extra_draw"
    SET_MOMENTUM = "set_momentum"
    SHIFT_MOMENTUM = "shift_momentum"
    PROTECT_MANDATES = "protect_mandates"


class TargetType(Enum):
    """Which players an influence change applies to."""
    SELF = "self"
    OTHERS = "others"
    ALL_PLAYERS = "all_players"
    OPPOSING_POLITICIANS = "opposing_politicians"  # others whose played card is a politician
    ALL_POLITICIANS = "all_politicians"
    CHOSEN_OPPONENT = "chosen_opponent"


# Temporary effect tags
BLOCK_EVENTS = "block-events"
BLOCK_SPECIALS = "block-specials"
BLOCK_NEXT_SPECIAL = "block-next-special"
EXTRA_DRAW = "extra-draw"


def block_tag(category: CardType) -> str:
    """Temporary effect tag that blocks a card category."""
    return f"block-{category.plural}"


@dataclass(frozen=True)
class MomentumCondition:
    """
    Inclusive bounds on the momentum level.

    Either bound may be omitted.
    """
    min_level: int | None = None
    max_level: int | None = None

    def holds(self, level: int) -> bool:
        if self.min_level is not None and level < self.min_level:
            return False
        if self.max_level is not None and level > self.max_level:
            return False
        return True

    def describe(self) -> str:
        parts = []
        if self.min_level is not None:
            parts.append(f"momentum >= {self.min_level}")
        if self.max_level is not None:
            parts.append(f"momentum <= {self.max_level}")
        return " and ".join(parts) or "always"


@dataclass(frozen=True)
class AdjustInfluence:
    """Add `amount` to the influence modifier of each targeted player."""
    kind: ClassVar[EffectKind] = EffectKind.ADJUST_INFLUENCE
    amount: int
    target: TargetType = TargetType.SELF
    condition: MomentumCondition | None = None


@dataclass(frozen=True)
class BlockCategory:
    """Block every card of a category while the effect is active."""
    kind: ClassVar[EffectKind] = EffectKind.BLOCK_CATEGORY
    category: CardType
    duration: int = 1


@dataclass(frozen=True)
class BlockNextSpecial:
    """Block the next special card resolved while the effect is active."""
    kind: ClassVar[EffectKind] = EffectKind.BLOCK_NEXT_SPECIAL
    duration: int = 1


@dataclass(frozen=True)
class GrantExtraDraw:
    """
    Owner draws extra cards at the end of the round.

    Only registers the effect; the draw itself happens at the round
    boundary, outside the resolver.
    """
    kind: ClassVar[EffectKind] = EffectKind.GRANT_EXTRA_DRAW
    count: int = 1
    condition: MomentumCondition | None = None


@dataclass(frozen=True)
class SetMomentum:
    kind: ClassVar[EffectKind] = EffectKind.SET_MOMENTUM
    level: int


@dataclass(frozen=True)
class ShiftMomentum:
    kind: ClassVar[EffectKind] = EffectKind.SHIFT_MOMENTUM
    delta: int


@dataclass(frozen=True)
class ProtectMandates:
    kind: ClassVar[EffectKind] = EffectKind.PROTECT_MANDATES


CardEffect = Union[
    AdjustInfluence,
    BlockCategory,
    BlockNextSpecial,
    GrantExtraDraw,
    SetMomentum,
    ShiftMomentum,
    ProtectMandates,
]


# ============================================================================
# Factory functions for common effect patterns
# ============================================================================

def conditional_boost(threshold: int, amount: int) -> AdjustInfluence:
    """Owner gains `amount` influence if momentum is at least `threshold`."""
    return AdjustInfluence(
        amount=amount,
        target=TargetType.SELF,
        condition=MomentumCondition(min_level=threshold),
    )


def penalize_others(amount: int) -> AdjustInfluence:
    """Every other player loses `amount` influence."""
    return AdjustInfluence(amount=-amount, target=TargetType.OTHERS)


def penalize_opposing_politicians(amount: int) -> AdjustInfluence:
    """Other players who played a politician lose `amount` influence."""
    return AdjustInfluence(amount=-amount, target=TargetType.OPPOSING_POLITICIANS)


def targeted_penalty(amount: int) -> AdjustInfluence:
    """One chosen opponent loses `amount` influence."""
    return AdjustInfluence(amount=-amount, target=TargetType.CHOSEN_OPPONENT)


def block_events(duration: int = 1) -> BlockCategory:
    return BlockCategory(category=CardType.EVENT, duration=duration)


def block_specials(duration: int = 1) -> BlockCategory:
    return BlockCategory(category=CardType.SPECIAL, duration=duration)
