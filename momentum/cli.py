"""
Momentum CLI - Command-line interface for the rules core.

Usage:
    momentum catalog [--type TYPE]     List the card catalog
    momentum validate-deck <file>      Validate a deck JSON file
    momentum resolve <file>            Resolve a round from a game state JSON file
    momentum roll [--seed N]           Roll a die
"""

import argparse
import json
import logging
import random
import sys

from .config import load_settings
from .utils.logger import setup_logging

logger = logging.getLogger(__name__)


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Momentum - Card Effect Resolution Engine",
        prog="momentum",
    )
    parser.add_argument("--config", "-c", help="Path to settings YAML")
    parser.add_argument("--log-level", help="Override logging level")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    catalog_parser = subparsers.add_parser("catalog", help="List the card catalog")
    catalog_parser.add_argument("--type", dest="card_type", help="politician, event or special")

    validate_parser = subparsers.add_parser("validate-deck", help="Validate a deck file")
    validate_parser.add_argument("deck_file", help="Path to deck JSON")

    resolve_parser = subparsers.add_parser("resolve", help="Resolve a round")
    resolve_parser.add_argument("state_file", help="Path to game state JSON")
    resolve_parser.add_argument("--output", "-o", help="Output file (default: stdout)")

    roll_parser = subparsers.add_parser("roll", help="Roll a six-sided die")
    roll_parser.add_argument("--seed", type=int, help="Random seed")

    args = parser.parse_args(argv)

    settings = load_settings(args.config)
    setup_logging(args.log_level or settings.logging.level)

    if args.command == "catalog":
        return cmd_catalog(args)
    elif args.command == "validate-deck":
        return cmd_validate_deck(args, settings)
    elif args.command == "resolve":
        return cmd_resolve(args, settings)
    elif args.command == "roll":
        return cmd_roll(args)
    else:
        parser.print_help()
        sys.exit(1)


def _read_json(path):
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError:
        print(f"Error: File not found: {path}")
        sys.exit(1)
    except json.JSONDecodeError as e:
        print(f"Error: Invalid JSON in {path}: {e}")
        sys.exit(1)


def cmd_catalog(args):
    """Print the card catalog."""
    from .games.mandat import get_all_cards
    from .spec_schema.card import CardType

    cards = get_all_cards()
    if args.card_type:
        wanted = CardType.parse(args.card_type)
        cards = [c for c in cards if c.card_type == wanted]

    for card in cards:
        print(f"{card.id:<8} {card.type_label:<10} {card.name:<28} €{card.campaign_value:>7,}  {card.effect}")


def cmd_validate_deck(args, settings):
    """Validate a deck file against the deck-building rules."""
    from pydantic import ValidationError
    from .api.schemas import ValidationResponse, load_deck
    from .engine_core.deck_manager import DeckManager

    try:
        deck = load_deck(_read_json(args.deck_file))
    except ValidationError as e:
        print(f"Error: Malformed deck: {e}")
        sys.exit(1)

    manager = DeckManager(settings=settings)
    result = manager.validate_deck(deck)
    response = ValidationResponse(
        valid=result.valid,
        errors=result.errors,
        total_campaign_value=manager.calculate_deck_value(deck),
        card_count=len(deck.cards),
    )
    print(json.dumps(response.model_dump(by_alias=True), indent=2, ensure_ascii=False))

    if not result.valid:
        sys.exit(1)


def cmd_resolve(args, settings):
    """Resolve one round and write the new state."""
    from pydantic import ValidationError
    from .api.schemas import dump_state, load_state
    from .engine_core.effect_resolver import CardEffectResolver

    try:
        state = load_state(_read_json(args.state_file))
    except ValidationError as e:
        print(f"Error: Malformed game state: {e}")
        sys.exit(1)

    new_state = CardEffectResolver(settings=settings).process_effects(state)
    logger.info("Resolved round %d: %d new log entries", new_state.round, len(new_state.log) - len(state.log))

    output = json.dumps(dump_state(new_state), indent=2, ensure_ascii=False)
    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(output)
    else:
        print(output)


def cmd_roll(args):
    """Roll a die."""
    from .engine_core.effect_resolver import CardEffectResolver
    from .engine_core.state import GameState

    resolver = CardEffectResolver(rng=random.Random(args.seed))
    print(resolver.roll_dice(GameState(game_id="cli"), "cli", "cli"))


if __name__ == "__main__":
    main()
