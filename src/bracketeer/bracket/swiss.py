"""Swiss round construction."""

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
from typing import Iterable, List, Optional

from bracketeer.bracket.single_elimination import match_id
from bracketeer.constants import PREFIX_SWISS, SWISS_MAX_ROUNDS
from bracketeer.models.player import Player
from bracketeer.models.tournament import Match, Round
from bracketeer.pairing.swiss import pair_round_one
from bracketeer.type_hints import Pairing


def default_swiss_rounds(player_count: int) -> int:
    """``min(ceil(log2 N), 7)``, at least 1."""
    return max(1, min(math.ceil(math.log2(player_count)), SWISS_MAX_ROUNDS))


def build_swiss_round(
    number: int,
    pairings: List[Pairing],
    bye_player_id: Optional[str] = None,
    rematches: Iterable[Pairing] = (),
) -> Round:
    """Turn pairings into a round; the bye becomes a one-player last match."""
    round_id = f"{PREFIX_SWISS}{number}"
    rematch_set = {frozenset(p) for p in rematches}
    matches = [
        Match(
            id=match_id(PREFIX_SWISS, number, m),
            round_id=round_id,
            round_number=number,
            match_number=m,
            player1_id=player1_id,
            player2_id=player2_id,
            is_rematch=frozenset((player1_id, player2_id)) in rematch_set,
        )
        for m, (player1_id, player2_id) in enumerate(pairings, start=1)
    ]
    if bye_player_id is not None:
        m = len(matches) + 1
        matches.append(
            Match(
                id=match_id(PREFIX_SWISS, number, m),
                round_id=round_id,
                round_number=number,
                match_number=m,
                player1_id=bye_player_id,
            )
        )
    return Round(id=round_id, number=number, name=f"Round {number}", matches=matches)


def generate_swiss_first_round(players: List[Player]) -> List[Round]:
    pairings, bye = pair_round_one([p.id for p in players])
    return [build_swiss_round(1, pairings, bye)]
