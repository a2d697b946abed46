"""Double elimination bracket construction.

Layout for a bracket of ``size`` slots with W = log2(size) winner rounds:

* Winner bracket: a standard knockout tree (``wb`` ids).
* Loser bracket: 2W - 2 rounds (``lb`` ids). Round r has
  ``size / 2 ** (ceil(r / 2) + 1)`` matches. Round 1 pairs the losers of
  winner round 1. Each even round r = 2j - 2 takes the survivors plus the
  losers of winner round j, dropped in reverse match order so players
  who just met are kept apart. Odd rounds after the first halve the field.
* Grand final (``gf`` ids): round 1 meets the two bracket champions,
  round 2 is the bracket reset, locked until the loser-bracket champion
  wins round 1.
"""

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
from typing import List

from bracketeer.bracket.seeding import next_power_of_two
from bracketeer.bracket.single_elimination import build_knockout_rounds, match_id
from bracketeer.constants import (
    BRACKET_GRAND_FINAL,
    BRACKET_LOSER,
    BRACKET_RESET_ROUND_NAME,
    BRACKET_WINNER,
    GRAND_FINAL_ROUND_NAME,
    PREFIX_GRAND_FINAL,
    PREFIX_LOSER,
    PREFIX_WINNER,
    STATUS_CONDITIONAL,
)
from bracketeer.models.player import Player
from bracketeer.models.tournament import Match, Round

GRAND_FINAL_ID = match_id(PREFIX_GRAND_FINAL, 1, 1)
BRACKET_RESET_ID = match_id(PREFIX_GRAND_FINAL, 2, 1)


def _winner_round_name(number: int, total: int) -> str:
    if number == total:
        return "Winners Final"
    return f"Winners Round {number}"


def _loser_round_name(number: int, total: int) -> str:
    if number == total:
        return "Losers Final"
    return f"Losers Round {number}"


def loser_round_size(size: int, round_number: int) -> int:
    """Number of matches in loser-bracket round ``round_number``."""
    return size // (2 ** (math.ceil(round_number / 2) + 1))


def _build_loser_rounds(size: int, total: int) -> List[Round]:
    rounds = []
    for number in range(1, total + 1):
        round_id = f"{PREFIX_LOSER}{number}"
        matches = []
        for m in range(1, loser_round_size(size, number) + 1):
            if number == total:
                next_id = GRAND_FINAL_ID
            elif number % 2 == 1:
                next_id = match_id(PREFIX_LOSER, number + 1, m)
            else:
                next_id = match_id(PREFIX_LOSER, number + 1, (m + 1) // 2)
            matches.append(
                Match(
                    id=match_id(PREFIX_LOSER, number, m),
                    round_id=round_id,
                    round_number=number,
                    match_number=m,
                    next_match_id=next_id,
                    bracket_type=BRACKET_LOSER,
                )
            )
        rounds.append(
            Round(
                id=round_id,
                number=number,
                name=_loser_round_name(number, total),
                bracket_type=BRACKET_LOSER,
                matches=matches,
            )
        )
    return rounds


def _route_losers(winner_rounds: List[Round], has_loser_bracket: bool) -> None:
    for round_ in winner_rounds:
        count = len(round_.matches)
        for match in round_.matches:
            if not has_loser_bracket:
                match.next_loser_match_id = GRAND_FINAL_ID
            elif round_.number == 1:
                match.next_loser_match_id = match_id(
                    PREFIX_LOSER, 1, (match.match_number + 1) // 2
                )
            else:
                match.next_loser_match_id = match_id(
                    PREFIX_LOSER,
                    2 * round_.number - 2,
                    count + 1 - match.match_number,
                )


def _build_grand_final() -> List[Round]:
    first = Match(
        id=GRAND_FINAL_ID,
        round_id=f"{PREFIX_GRAND_FINAL}1",
        round_number=1,
        match_number=1,
        bracket_type=BRACKET_GRAND_FINAL,
    )
    reset = Match(
        id=BRACKET_RESET_ID,
        round_id=f"{PREFIX_GRAND_FINAL}2",
        round_number=2,
        match_number=1,
        status=STATUS_CONDITIONAL,
        bracket_type=BRACKET_GRAND_FINAL,
    )
    return [
        Round(
            id=first.round_id,
            number=1,
            name=GRAND_FINAL_ROUND_NAME,
            bracket_type=BRACKET_GRAND_FINAL,
            matches=[first],
        ),
        Round(
            id=reset.round_id,
            number=2,
            name=BRACKET_RESET_ROUND_NAME,
            bracket_type=BRACKET_GRAND_FINAL,
            matches=[reset],
        ),
    ]


def generate_double_elimination(players: List[Player]) -> List[Round]:
    """Winner bracket, loser bracket and grand final rounds, in that order."""
    size = next_power_of_two(len(players))
    winner_total = int(math.log2(size))
    loser_total = 2 * winner_total - 2

    winner_rounds = build_knockout_rounds(
        players,
        prefix=PREFIX_WINNER,
        bracket_type=BRACKET_WINNER,
        round_name=_winner_round_name,
    )
    winner_rounds[-1].matches[0].next_match_id = GRAND_FINAL_ID
    _route_losers(winner_rounds, has_loser_bracket=loser_total > 0)

    loser_rounds = _build_loser_rounds(size, loser_total)
    return winner_rounds + loser_rounds + _build_grand_final()
