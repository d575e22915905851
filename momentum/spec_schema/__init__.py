"""Card schema - card definitions and the effect DSL."""

from .card import Card, CardType, CardRarity
from .effect_dsl import (
    CardEffect,
    EffectKind,
    TargetType,
    MomentumCondition,
    AdjustInfluence,
    BlockCategory,
    BlockNextSpecial,
    GrantExtraDraw,
    SetMomentum,
    ShiftMomentum,
    ProtectMandates,
)
from .validation import validate_catalog, ValidationResult, CatalogValidationError

__all__ = [
    "Card",
    "CardType",
    "CardRarity",
    "CardEffect",
    "EffectKind",
    "TargetType",
    "MomentumCondition",
    "AdjustInfluence",
    "BlockCategory",
    "BlockNextSpecial",
    "GrantExtraDraw",
    "SetMomentum",
    "ShiftMomentum",
    "ProtectMandates",
    "validate_catalog",
    "ValidationResult",
    "CatalogValidationError",
]
