"""Bracket generation for Bracketeer."""

from bracketeer.bracket.generator import (
    BracketGenerator,
    create_tournament,
    generate_bracket,
)
from bracketeer.bracket.seeding import apply_seeding, next_power_of_two, seed_order

__all__ = [
    "BracketGenerator",
    "apply_seeding",
    "create_tournament",
    "generate_bracket",
    "next_power_of_two",
    "seed_order",
]
