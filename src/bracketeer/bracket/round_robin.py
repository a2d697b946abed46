"""Round robin schedule using the circle method."""

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

from typing import List, Optional, Tuple

from bracketeer.bracket.single_elimination import match_id
from bracketeer.constants import PREFIX_ROUND_ROBIN
from bracketeer.models.player import Player
from bracketeer.models.tournament import Match, Round


def round_robin_schedule(player_ids: List[str]) -> List[List[Tuple[str, str]]]:
    """Pairings per round; every player meets every other exactly once.

    The first player stays fixed while the others rotate one seat per
    round. With an odd count a phantom seat is added and whoever faces it
    sits the round out, so each player rests exactly once.

    >>> round_robin_schedule(["a", "b", "c", "d"])[0]
    [('a', 'd'), ('b', 'c')]
    """
    seats: List[Optional[str]] = list(player_ids)
    if len(seats) % 2 == 1:
        seats.append(None)
    n = len(seats)

    schedule = []
    for _ in range(n - 1):
        pairings = []
        for i in range(n // 2):
            home, away = seats[i], seats[n - 1 - i]
            if home is not None and away is not None:
                pairings.append((home, away))
        schedule.append(pairings)
        seats = [seats[0], seats[-1]] + seats[1:-1]
    return schedule


def resting_player(player_ids: List[str], pairings: List[Tuple[str, str]]) -> Optional[str]:
    """The player without a match in a round, if any."""
    busy = {pid for pair in pairings for pid in pair}
    idle = [pid for pid in player_ids if pid not in busy]
    return idle[0] if idle else None


def generate_round_robin(players: List[Player]) -> List[Round]:
    """All rounds of the round robin, matches numbered within each round."""
    rounds = []
    for number, pairings in enumerate(
        round_robin_schedule([p.id for p in players]), start=1
    ):
        round_id = f"{PREFIX_ROUND_ROBIN}{number}"
        matches = [
            Match(
                id=match_id(PREFIX_ROUND_ROBIN, number, m),
                round_id=round_id,
                round_number=number,
                match_number=m,
                player1_id=home,
                player2_id=away,
            )
            for m, (home, away) in enumerate(pairings, start=1)
        ]
        rounds.append(
            Round(id=round_id, number=number, name=f"Round {number}", matches=matches)
        )
    return rounds
