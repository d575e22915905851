"""
Catalog Validation - Schema checks for card definitions.

Validates that:
1. Required fields are present
2. Card ids are unique
3. Card types are known
4. Effect specs are well-formed
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterable

from .card import Card, CardType
from .effect_dsl import (
    AdjustInfluence,
    BlockCategory,
    BlockNextSpecial,
    GrantExtraDraw,
    TargetType,
)


class CatalogValidationError(Exception):
    """Raised when catalog validation fails."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__(f"Catalog validation failed with {len(errors)} error(s)")


@dataclass
class ValidationResult:
    """Result of validation, with errors and warnings."""
    valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @classmethod
    def from_errors(cls, errors: list[str], warnings: list[str] | None = None) -> ValidationResult:
        return cls(valid=len(errors) == 0, errors=errors, warnings=warnings or [])


def validate_catalog(cards: Iterable[Card], raise_on_error: bool = False) -> ValidationResult:
    """
    Validate a card catalog.

    Returns ValidationResult with errors and warnings.
    Raises CatalogValidationError if raise_on_error=True and errors exist.
    """
    errors: list[str] = []
    warnings: list[str] = []
    seen: set[str] = set()

    for card in cards:
        if card.id in seen:
            errors.append(f"Duplicate card id '{card.id}'")
        seen.add(card.id)
        errors.extend(_validate_card(card))

        if card.effect and not card.effects:
            warnings.append(f"Card '{card.id}' has rules text but no effect specs")

    if not seen:
        warnings.append("No cards defined - catalog may be incomplete")

    if raise_on_error and errors:
        raise CatalogValidationError(errors)

    return ValidationResult.from_errors(errors, warnings)


def _validate_card(card: Card) -> list[str]:
    """Validate a single card definition."""
    errors = []
    if not card.id:
        errors.append("Card has empty ID")
    if not card.name:
        errors.append(f"Card '{card.id}' has empty name")
    if not isinstance(card.card_type, CardType):
        errors.append(f"Card '{card.id}' has unknown type '{card.card_type}'")
    if card.campaign_value < 0:
        errors.append(f"Card '{card.id}' has negative campaign value")
    if card.influence and not card.is_politician:
        errors.append(f"Card '{card.id}' is not a politician but has influence {card.influence}")

    for spec in card.effects:
        errors.extend(f"Card '{card.id}': {e}" for e in _validate_effect(spec))

    return errors


def _validate_effect(spec) -> list[str]:
    errors = []
    if isinstance(spec, (BlockCategory, BlockNextSpecial)) and spec.duration < 1:
        errors.append(f"{spec.kind.value} duration must be >= 1")
    if isinstance(spec, GrantExtraDraw) and spec.count < 1:
        errors.append("grant_extra_draw count must be >= 1")
    if isinstance(spec, AdjustInfluence):
        if spec.amount == 0:
            errors.append("adjust_influence amount must be non-zero")
        if not isinstance(spec.target, TargetType):
            errors.append(f"adjust_influence has unknown target '{spec.target}'")
    return errors
