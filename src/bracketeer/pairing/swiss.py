"""Swiss System Pairing Implementation."""

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

from dataclasses import dataclass, field
from typing import List, Optional

from bracketeer.constants import SWISS_MAX_BACKTRACKS
from bracketeer.models.tournament import PairingHistory
from bracketeer.type_hints import Pairing, RoundPairings
from bracketeer.utils import setup_logger

logger = setup_logger(__name__)


@dataclass
class SwissPairingResult:
    """Pairings for one Swiss round.

    Attributes
    ----------
    pairings : list of tuple of str
        (higher ranked, lower ranked) player id pairs in board order.
    bye_player_id : str or None
        Player sitting out with a bye.
    rematches : list of tuple of str
        Pairings that repeat an earlier meeting (greedy fallback only).
    backtracking_steps : int
        Search steps spent before a pairing was found or the budget ran out.
    """

    pairings: List[Pairing] = field(default_factory=list)
    bye_player_id: Optional[str] = None
    rematches: List[Pairing] = field(default_factory=list)
    backtracking_steps: int = 0

    def is_rematch(self, pairing: Pairing) -> bool:
        return pairing in self.rematches


class _BudgetExhausted(Exception):
    pass


class _StepCounter:
    def __init__(self, budget: int):
        self.budget = budget
        self.steps = 0

    def tick(self) -> None:
        self.steps += 1
        if self.steps > self.budget:
            raise _BudgetExhausted()


def create_swiss_pairings(
    ranked_player_ids: List[str],
    history: PairingHistory,
    max_backtracks: int = SWISS_MAX_BACKTRACKS,
) -> SwissPairingResult:
    """
    Pair a Swiss round from the current standings.

    - ranked_player_ids: player ids ordered by standing, leader first
    - history: earlier pairings and bye recipients
    - max_backtracks: step budget for the rematch-free search

    With an odd field the lowest ranked player without a previous bye
    sits out. The rest are paired top-down by a depth-first search that
    never repeats a pairing; when the search fails or runs out of budget,
    a greedy pass pairs each player with the nearest opponent not yet
    met, falling back to the nearest player at all. Any repeat is
    reported in ``rematches``.
    """
    remaining = list(ranked_player_ids)
    result = SwissPairingResult()

    if len(remaining) % 2 == 1:
        result.bye_player_id = _select_bye_player(remaining, history)
        remaining.remove(result.bye_player_id)

    counter = _StepCounter(max_backtracks)
    try:
        pairings = _pair_without_rematches(remaining, history, counter)
    except _BudgetExhausted:
        logger.warning(
            f"Swiss pairing search exceeded {max_backtracks} steps; using greedy pairing"
        )
        pairings = None
    result.backtracking_steps = counter.steps

    if pairings is None:
        pairings = _greedy_pairings(remaining, history)
        result.rematches = [p for p in pairings if history.have_played(*p)]
        for player1_id, player2_id in result.rematches:
            logger.warning(f"Forced rematch: {player1_id} vs {player2_id}")

    result.pairings = pairings
    return result


def _select_bye_player(ranked_player_ids: List[str], history: PairingHistory) -> str:
    """Lowest ranked player who has not had a bye yet."""
    for player_id in reversed(ranked_player_ids):
        if not history.had_bye(player_id):
            return player_id
    lowest = ranked_player_ids[-1]
    logger.warning(f"Every player already had a bye; {lowest} receives a second one")
    return lowest


def _pair_without_rematches(
    players: List[str], history: PairingHistory, counter: _StepCounter
) -> Optional[List[Pairing]]:
    """Depth-first search for a rematch-free pairing, top player first."""
    if not players:
        return []

    top = players[0]
    for i in range(1, len(players)):
        counter.tick()
        opponent = players[i]
        if history.have_played(top, opponent):
            continue
        rest = _pair_without_rematches(players[1:i] + players[i + 1 :], history, counter)
        if rest is not None:
            return [(top, opponent)] + rest
    return None


def _greedy_pairings(players: List[str], history: PairingHistory) -> List[Pairing]:
    """Fallback pairing that accepts rematches when nothing else is left."""
    pairings = []
    remaining = players.copy()

    while len(remaining) >= 2:
        player1 = remaining.pop(0)
        opponent_idx = 0
        for i, player2 in enumerate(remaining):
            if not history.have_played(player1, player2):
                opponent_idx = i
                break
        pairings.append((player1, remaining.pop(opponent_idx)))

    return pairings


def pair_round_one(seeded_player_ids: List[str]) -> RoundPairings:
    """Round 1: adjacent seeds meet (1v2, 3v4, ...); an odd last seed gets the bye."""
    pairings = [
        (seeded_player_ids[i], seeded_player_ids[i + 1])
        for i in range(0, len(seeded_player_ids) - 1, 2)
    ]
    bye = seeded_player_ids[-1] if len(seeded_player_ids) % 2 == 1 else None
    return pairings, bye
