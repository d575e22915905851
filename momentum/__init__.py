"""
Momentum - Card Effect Resolution Engine

A deterministic rules core for a political card game.
The engine provides:
- Copy-on-write game state
- Deck management (draw, discard, shuffle, validation)
- Data-driven card effect resolution
- Duration-scoped temporary effects
"""

__version__ = "0.1.0"
