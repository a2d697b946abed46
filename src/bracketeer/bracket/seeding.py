"""Seeding helpers shared by the elimination formats."""

# Bracketeer
# Copyright (C) 2025  Bracketeer developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

from typing import List

from bracketeer.constants import (
    FINAL_ROUND_NAME,
    QUARTER_FINAL_ROUND_NAME,
    SEMI_FINAL_ROUND_NAME,
)
from bracketeer.models.player import Player


def next_power_of_two(n: int) -> int:
    """Smallest power of two >= n (1 for n <= 1)."""
    size = 1
    while size < n:
        size *= 2
    return size


def seed_order(size: int) -> List[int]:
    """Standard bracket order of seeds for a power-of-two ``size``.

    Adjacent entries meet in round one. Seeds 1 and 2 land in opposite
    halves, 1-4 in different quarters, and so on:

    >>> seed_order(8)
    [1, 8, 4, 5, 2, 7, 3, 6]
    """
    order = [1]
    while len(order) < size:
        total = 2 * len(order) + 1
        order = [s for seed in order for s in (seed, total - seed)]
    return order


def apply_seeding(players: List[Player]) -> List[Player]:
    """Order players for bracket placement.

    Players with an explicit seed come first, ascending; unseeded players
    follow in their original order. The generator itself never reorders:
    call this first when the roster is not already in seed order.
    """
    seeded = sorted(
        (p for p in players if p.seed is not None), key=lambda p: p.seed
    )
    unseeded = [p for p in players if p.seed is None]
    return seeded + unseeded


def elimination_round_name(round_number: int, total_rounds: int) -> str:
    """Name a single-elimination round counted back from the final."""
    remaining = total_rounds - round_number
    if remaining == 0:
        return FINAL_ROUND_NAME
    if remaining == 1:
        return SEMI_FINAL_ROUND_NAME
    if remaining == 2:
        return QUARTER_FINAL_ROUND_NAME
    return f"Round {round_number}"
