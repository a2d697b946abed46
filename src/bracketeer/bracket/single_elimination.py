"""Single elimination bracket construction."""

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

import math
from typing import Callable, List, Optional

from bracketeer.bracket.seeding import (
    elimination_round_name,
    next_power_of_two,
    seed_order,
)
from bracketeer.constants import PREFIX_SINGLE
from bracketeer.models.player import Player
from bracketeer.models.tournament import Match, Round


def match_id(prefix: str, round_number: int, match_number: int) -> str:
    return f"{prefix}{round_number}_m{match_number}"


def build_knockout_rounds(
    players: List[Player],
    prefix: str = PREFIX_SINGLE,
    bracket_type: Optional[str] = None,
    round_name: Callable[[int, int], str] = elimination_round_name,
) -> List[Round]:
    """Build a knockout tree for ``players`` (already in seed order).

    The tree has ``next_power_of_two(N)`` slots filled in standard seed
    order; seeds beyond N are byes, so they always face the top seeds.
    Winners of matches 2k-1 and 2k meet in match k of the next round.

    Args:
        players: Participants, seed 1 first
        prefix: Match/round id prefix ("r", "wb")
        bracket_type: Section tag stored on rounds and matches
        round_name: Callable(round_number, total_rounds) -> display name

    Returns:
        Rounds from first to final; byes are not resolved yet
    """
    size = next_power_of_two(len(players))
    total_rounds = int(math.log2(size))
    order = seed_order(size)

    def slot(seed: int) -> Optional[str]:
        return players[seed - 1].id if seed <= len(players) else None

    rounds: List[Round] = []
    for number in range(1, total_rounds + 1):
        count = size // (2 ** number)
        round_id = f"{prefix}{number}"
        matches = []
        for m in range(1, count + 1):
            next_id = None
            if number < total_rounds:
                next_id = match_id(prefix, number + 1, (m + 1) // 2)
            match = Match(
                id=match_id(prefix, number, m),
                round_id=round_id,
                round_number=number,
                match_number=m,
                next_match_id=next_id,
                bracket_type=bracket_type,
            )
            if number == 1:
                match.player1_id = slot(order[2 * m - 2])
                match.player2_id = slot(order[2 * m - 1])
            matches.append(match)
        rounds.append(
            Round(
                id=round_id,
                number=number,
                name=round_name(number, total_rounds),
                bracket_type=bracket_type,
                matches=matches,
            )
        )
    return rounds


def generate_single_elimination(players: List[Player]) -> List[Round]:
    """Single elimination rounds named Round N / Quarter-Finals / Semi-Finals / Final."""
    return build_knockout_rounds(players)
