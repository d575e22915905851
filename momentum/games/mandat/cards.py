"""
Mandat Macht Momentum Cards - The political card catalog.

Card structure:
- Type (politician, event, special)
- Influence (politicians only)
- Campaign value (deck-building cost)
- Effect specs (interpreted by the resolver)

Rules text that the effect DSL does not model yet is kept on the card
and only shows up in the game log.
"""

from __future__ import annotations
import random

from ...config import GameSettings
from ...spec_schema.card import Card, CardType, CardRarity
from ...spec_schema.effect_dsl import (
    AdjustInfluence,
    BlockNextSpecial,
    GrantExtraDraw,
    MomentumCondition,
    ProtectMandates,
    SetMomentum,
    ShiftMomentum,
    TargetType,
    block_events,
    block_specials,
    conditional_boost,
    penalize_opposing_politicians,
    penalize_others,
    targeted_penalty,
)

POLITICIAN = CardType.POLITICIAN
EVENT = CardType.EVENT
SPECIAL = CardType.SPECIAL


def _card(
    num: int,
    name: str,
    card_type: CardType,
    country: str,
    influence: int,
    effect: str,
    campaign_value: int,
    description: str,
    effects: tuple = (),
) -> Card:
    return Card(
        id=f"card-{num}",
        name=name,
        card_type=card_type,
        country=country,
        influence=influence,
        effect=effect,
        campaign_value=campaign_value,
        era="Modern",
        description=description,
        effects=tuple(effects),
    )


# ============================================================================
# Politicians
# ============================================================================

ANGELA_MERKEL = _card(
    1, "Angela Merkel", POLITICIAN, "Germany", 6,
    "Blocks all event cards this round.", 25000,
    "The long-serving German Chancellor known for her stability and pragmatism.",
    effects=[block_events()],
)

DONALD_TRUMP = _card(
    2, "Donald Trump", POLITICIAN, "USA", 7,
    "Other politicians lose 2 influence.", 30000,
    "The bombastic businessman-turned-president known for his unpredictable style.",
    effects=[penalize_opposing_politicians(2)],
)

EMMANUEL_MACRON = _card(
    3, "Emmanuel Macron", POLITICIAN, "France", 5,
    "Draw an extra card if momentum level is 3 or higher.", 22000,
    "The young reformist president of France with a vision for European integration.",
    effects=[GrantExtraDraw(count=1, condition=MomentumCondition(min_level=3))],
)

VLADIMIR_PUTIN = _card(
    4, "Vladimir Putin", POLITICIAN, "Russia", 8,
    "All other players get -1 influence this round.", 35000,
    "The authoritarian Russian leader with an iron grip on power.",
    effects=[penalize_others(1)],
)

VOLODYMYR_ZELENSKYJ = _card(
    5, "Volodymyr Zelenskyj", POLITICIAN, "Ukraine", 4,
    "+3 influence if momentum level is 4 or higher.", 20000,
    "The Ukrainian president who rose to prominence during wartime.",
    effects=[conditional_boost(threshold=4, amount=3)],
)

URSULA_VON_DER_LEYEN = _card(
    6, "Ursula von der Leyen", POLITICIAN, "EU", 5,
    "All EU politicians gain +1 influence.", 22000,
    "President of the European Commission and former German defense minister.",
)

BORIS_JOHNSON = _card(
    7, "Boris Johnson", POLITICIAN, "UK", 5,
    "If momentum is below 3, gain +2 influence.", 21000,
    "The charismatic but controversial former UK Prime Minister who led Brexit.",
    effects=[AdjustInfluence(amount=2, condition=MomentumCondition(max_level=2))],
)

OLAF_SCHOLZ = _card(
    8, "Olaf Scholz", POLITICIAN, "Germany", 4,
    "If another politician is in play, gain +2 influence.", 18000,
    "The pragmatic German Chancellor who succeeded Angela Merkel.",
)

XI_JINPING = _card(
    9, "Xi Jinping", POLITICIAN, "China", 9,
    "Opponents cannot play special cards next round.", 40000,
    "The powerful leader of China with a vision for national rejuvenation.",
)

KAMALA_HARRIS = _card(
    10, "Kamala Harris", POLITICIAN, "USA", 5,
    "If another player has more mandates than you, gain +2 influence.", 20000,
    "The trail-blazing Vice President of the United States.",
)

ANNALENA_BAERBOCK = _card(
    31, "Annalena Baerbock", POLITICIAN, "Germany", 5,
    "+2 influence if momentum level is 2 or higher.", 21000,
    "The German foreign minister with a values-driven foreign policy.",
    effects=[conditional_boost(threshold=2, amount=2)],
)

# ============================================================================
# Events
# ============================================================================

ECONOMIC_SUMMIT = _card(
    11, "Economic Summit", EVENT, "Global", 0,
    "Player with highest influence gains 1 extra mandate.", 15000,
    "World leaders gather to address economic challenges and opportunities.",
)

CLIMATE_CONFERENCE = _card(
    12, "Climate Conference", EVENT, "Global", 0,
    "Set momentum level to 2.", 12000,
    "Nations debate environmental policy amid rising global temperatures.",
    effects=[SetMomentum(level=2)],
)

ELECTION_YEAR = _card(
    13, "Election Year", EVENT, "Global", 0,
    "All politicians gain +1 influence.", 18000,
    "Multiple countries hold elections, creating a wave of political activity.",
    effects=[AdjustInfluence(amount=1, target=TargetType.ALL_POLITICIANS)],
)

UN_RESOLUTION = _card(
    14, "UN Resolution", EVENT, "Global", 0,
    "Set momentum to level 3 (neutral).", 10000,
    "The international body passes a significant resolution affecting global politics.",
    effects=[SetMomentum(level=3)],
)

NUCLEAR_TENSIONS = _card(
    15, "Nuclear Tensions", EVENT, "Global", 0,
    "Increase momentum by 2 levels. All players discard 1 card.", 22000,
    "Geopolitical tensions rise as nuclear threats are exchanged.",
    effects=[ShiftMomentum(delta=2)],
)

DIPLOMATIC_BREAKTHROUGH = _card(
    16, "Diplomatic Breakthrough", EVENT, "Global", 0,
    "Decrease momentum by 1 level. Each player draws 1 card.", 17000,
    "A unexpected agreement leads to easing tensions between major powers.",
    effects=[ShiftMomentum(delta=-1)],
)

FINANCIAL_CRISIS = _card(
    17, "Financial Crisis", EVENT, "Global", 0,
    "All players lose 1 influence. Increase momentum by 1.", 20000,
    "Markets crash as confidence in the global financial system wavers.",
    effects=[
        AdjustInfluence(amount=-1, target=TargetType.ALL_PLAYERS),
        ShiftMomentum(delta=1),
    ],
)

PANDEMIC = _card(
    18, "Pandemic", EVENT, "Global", 0,
    "No special cards can be played this round. Set momentum to level 4.", 23000,
    "A global health crisis forces nations to adopt emergency measures.",
    effects=[block_specials(), SetMomentum(level=4)],
)

TECHNOLOGICAL_BREAKTHROUGH = _card(
    19, "Technological Breakthrough", EVENT, "Global", 0,
    "The player who played this card draws 2 cards.", 15000,
    "A major scientific advancement shifts the balance of power.",
    effects=[GrantExtraDraw(count=2)],
)

LOBBYISMUS = _card(
    20, "Lobbyismus", EVENT, "Global", 0,
    "Draw 1 extra card at the end of this round.", 12000,
    "Behind-the-scenes influence shapes policy decisions in unexpected ways.",
    effects=[GrantExtraDraw(count=1)],
)

# ============================================================================
# Specials
# ============================================================================

SHITSTORM = _card(
    21, "Shitstorm", SPECIAL, "Global", 0,
    "Target player gets -2 influence this round.", 8000,
    "A social media scandal erupts, damaging someone's reputation.",
    effects=[targeted_penalty(2)],
)

MEDIA_BLACKOUT = _card(
    22, "Media Blackout", SPECIAL, "Global", 0,
    "Block the next special card played.", 9000,
    "Information control prevents certain stories from reaching the public.",
    effects=[BlockNextSpecial()],
)

WHISTLEBLOWER = _card(
    23, "Whistleblower", SPECIAL, "Global", 0,
    "Reveal another player's hand. That player discards 1 card.", 11000,
    "Classified information leaks to the public with damaging consequences.",
)

COUNTERINTELLIGENCE = _card(
    24, "Counterintelligence", SPECIAL, "Global", 0,
    "Cancel the effect of the last politician played.", 10000,
    "Secret services uncover and neutralize a political operation.",
)

POLITICAL_ASYLUM = _card(
    25, "Political Asylum", SPECIAL, "Global", 0,
    "Protect your mandates from being lost this round.", 12000,
    "A safe harbor from political persecution and retribution.",
    effects=[ProtectMandates()],
)

EMERGENCY_POWERS = _card(
    26, "Emergency Powers", SPECIAL, "Global", 0,
    "Double your politician's influence for this round.", 18000,
    "Extraordinary circumstances enable the exercise of expanded authority.",
)

FAKE_NEWS = _card(
    27, "Fake News", SPECIAL, "Global", 0,
    "Change the momentum level up or down by 1.", 7000,
    "Misinformation spreads rapidly, shaping public opinion.",
)

DIPLOMATIC_IMMUNITY = _card(
    28, "Diplomatic Immunity", SPECIAL, "Global", 0,
    "You cannot be targeted by special cards this round.", 9000,
    "Political protection that shields from certain consequences.",
)

OPPOSITION_RESEARCH = _card(
    29, "Opposition Research", SPECIAL, "Global", 0,
    "Look at the top 3 cards of the deck. Draw 1 and put the others back in any order.", 8000,
    "Digging up dirt on opponents to gain strategic advantage.",
)

GRASSROOTS_MOVEMENT = _card(
    30, "Grassroots Movement", SPECIAL, "Global", 0,
    "If you have the fewest mandates, gain +3 influence this round.", 7000,
    "An organic political movement emerges from ordinary citizens.",
)


MANDAT_CARDS: list[Card] = [
    ANGELA_MERKEL,
    DONALD_TRUMP,
    EMMANUEL_MACRON,
    VLADIMIR_PUTIN,
    VOLODYMYR_ZELENSKYJ,
    URSULA_VON_DER_LEYEN,
    BORIS_JOHNSON,
    OLAF_SCHOLZ,
    XI_JINPING,
    KAMALA_HARRIS,
    ECONOMIC_SUMMIT,
    CLIMATE_CONFERENCE,
    ELECTION_YEAR,
    UN_RESOLUTION,
    NUCLEAR_TENSIONS,
    DIPLOMATIC_BREAKTHROUGH,
    FINANCIAL_CRISIS,
    PANDEMIC,
    TECHNOLOGICAL_BREAKTHROUGH,
    LOBBYISMUS,
    SHITSTORM,
    MEDIA_BLACKOUT,
    WHISTLEBLOWER,
    COUNTERINTELLIGENCE,
    POLITICAL_ASYLUM,
    EMERGENCY_POWERS,
    FAKE_NEWS,
    DIPLOMATIC_IMMUNITY,
    OPPOSITION_RESEARCH,
    GRASSROOTS_MOVEMENT,
    ANNALENA_BAERBOCK,
]

_CARDS_BY_ID = {card.id: card for card in MANDAT_CARDS}


def get_all_cards() -> list[Card]:
    return list(MANDAT_CARDS)


def get_card_by_id(card_id: str) -> Card | None:
    return _CARDS_BY_ID.get(card_id)


def get_cards_by_type(card_type: CardType) -> list[Card]:
    return [card for card in MANDAT_CARDS if card.card_type == card_type]


def get_cards_by_rarity(rarity: CardRarity) -> list[Card]:
    return [card for card in MANDAT_CARDS if card.rarity == rarity]


def get_random_cards(count: int, rng: random.Random | None = None) -> list[Card]:
    """Up to `count` distinct cards in random order."""
    rng = rng or random.Random()
    return rng.sample(MANDAT_CARDS, min(count, len(MANDAT_CARDS)))


def create_starter_deck(
    rng: random.Random | None = None,
    settings: GameSettings | None = None,
) -> list[Card]:
    """
    Build a starter card pool from the catalog.

    Takes the first politicians, events and specials in catalog order,
    shuffles them, then drops the most expensive card while the pool is
    over budget and larger than 15 cards.
    """
    rng = rng or random.Random()
    rules = (settings or GameSettings()).deck

    pool = (
        get_cards_by_type(POLITICIAN)[:rules.required_politicians]
        + get_cards_by_type(EVENT)[:rules.required_events]
        + get_cards_by_type(SPECIAL)[:rules.required_specials]
    )
    rng.shuffle(pool)
    pool = pool[:rules.deck_size]

    total_value = sum(card.campaign_value for card in pool)
    while total_value > rules.campaign_budget and len(pool) > 15:
        most_expensive = max(pool, key=lambda card: card.campaign_value)
        pool.remove(most_expensive)
        total_value -= most_expensive.campaign_value

    return pool
