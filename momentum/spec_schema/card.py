"""
Card Definitions - Read-only reference data.

Cards are loaded once into a catalog and never mutated afterwards.
Decks and game state refer to them by id or hold the same frozen
instance; nothing in the engine rewrites a card.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .effect_dsl import CardEffect


class CardType(Enum):
    """Card categories, in resolution order."""
    POLITICIAN = "politician"
    EVENT = "event"
    SPECIAL = "special"

    @property
    def plural(self) -> str:
        return f"{self.value}s"

    @classmethod
    def parse(cls, value: CardType | str) -> CardType | str:
        """Map a wire value to a CardType, keeping unknown values as plain strings."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return value


class CardRarity(Enum):
    COMMON = "common"
    UNCOMMON = "uncommon"
    RARE = "rare"
    LEGENDARY = "legendary"


# Unknown types sort after every known one
TYPE_RANK: dict[CardType, int] = {
    CardType.POLITICIAN: 1,
    CardType.EVENT: 2,
    CardType.SPECIAL: 3,
}
UNKNOWN_TYPE_RANK = 99


@dataclass(frozen=True)
class Card:
    """
    A card definition.

    `effect` is the printed rules text shown to players. The machine
    readable behaviour lives in `effects`, a sequence of effect specs
    interpreted by the CardEffectResolver.
    """
    id: str
    name: str
    card_type: CardType | str
    influence: int = 0
    effect: str = ""
    campaign_value: int = 0

    # Cosmetic metadata
    country: str | None = None
    era: str | None = None
    description: str | None = None
    rarity: CardRarity | None = None
    tags: tuple[str, ...] = ()

    effects: tuple[CardEffect, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, "card_type", CardType.parse(self.card_type))

    @property
    def type_rank(self) -> int:
        return TYPE_RANK.get(self.card_type, UNKNOWN_TYPE_RANK)

    @property
    def is_politician(self) -> bool:
        return self.card_type == CardType.POLITICIAN

    @property
    def type_label(self) -> str:
        if isinstance(self.card_type, CardType):
            return self.card_type.value
        return str(self.card_type)
