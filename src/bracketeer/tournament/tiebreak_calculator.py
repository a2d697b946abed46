"""Standings and tiebreak calculation for tournaments.

This module derives points and tiebreak scores from completed matches.
Nothing is cached: standings are recomputed from scratch on every call.
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

import dataclasses
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

from bracketeer.constants import (
    FORMAT_SWISS,
    TB_BUCHHOLZ,
    TB_BUCHHOLZ_CUT_1,
    TB_HEAD_TO_HEAD,
    TB_POINT_DIFF,
    TB_SONNEBORN_BERGER,
    TB_WINS,
)
from bracketeer.models.player import Player
from bracketeer.models.tournament import Match, TournamentConfig
from bracketeer.utils import setup_logger

logger = setup_logger(__name__)


@dataclass
class Standing:
    """One row of the standings table.

    Attributes
    ----------
    player_id : str
        Player this row describes.
    rank : int
        1-based position after all tiebreaks.
    played, won, drawn, lost : int
        Match counts. A bye counts as played and won.
    points : float
        Points from the tournament's scoring settings.
    buchholz : float or None
        Sum of opponents' points (Swiss only).
    tiebreakers : dict of str to float
        Every supported tiebreak value, keyed by tiebreak name.
    """

    player_id: str
    rank: int = 0
    played: int = 0
    won: int = 0
    drawn: int = 0
    lost: int = 0
    points: float = 0.0
    buchholz: Optional[float] = None
    tiebreakers: Dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return dataclasses.asdict(self)


@dataclass
class _Tally:
    """Running totals for one player while walking the matches."""

    played: int = 0
    won: int = 0
    drawn: int = 0
    lost: int = 0
    points: float = 0.0
    score_for: float = 0.0
    score_against: float = 0.0
    # (opponent id, points earned in that game), real games only
    games: List[Tuple[str, float]] = field(default_factory=list)


class StandingsCalculator:
    """Calculates standings and tiebreak scores.

    Supported tiebreaks:

    - Buchholz: sum of the current points of every opponent met
    - Buchholz Cut-1: Buchholz dropping the lowest opponent
    - Sonneborn-Berger: sum of (opponent points x points scored against them)
    - Number of Wins: byes and walkovers included
    - Point Difference: scores for minus scores against
    - Head-to-Head: points scored against players level on points
    """

    def __init__(self, config: Optional[TournamentConfig] = None):
        self.config = config or TournamentConfig()

    def compute(self, players: List[Player], matches: Iterable[Match]) -> List[Standing]:
        """Rank ``players`` using the completed ``matches``.

        Args:
            players: Participants in seed order (the final tiebreak)
            matches: Any matches; unplayed ones are ignored

        Returns:
            Standings sorted best first, ranks filled in
        """
        tallies = {p.id: _Tally() for p in players}
        for match in matches:
            self._record_match(match, tallies)

        points = {pid: t.points for pid, t in tallies.items()}
        is_swiss = self.config.format == FORMAT_SWISS

        standings = []
        for player in players:
            tally = tallies[player.id]
            tiebreakers = self._calculate_tiebreaks(player.id, tally, points)
            standings.append(
                Standing(
                    player_id=player.id,
                    played=tally.played,
                    won=tally.won,
                    drawn=tally.drawn,
                    lost=tally.lost,
                    points=tally.points,
                    buchholz=tiebreakers[TB_BUCHHOLZ] if is_swiss else None,
                    tiebreakers=tiebreakers,
                )
            )

        order = self.config.effective_tiebreak_order
        seed_index = {p.id: i for i, p in enumerate(players)}
        standings.sort(
            key=lambda s: (
                -s.points,
                *(-s.tiebreakers.get(key, 0.0) for key in order),
                seed_index[s.player_id],
            )
        )
        for rank, standing in enumerate(standings, start=1):
            standing.rank = rank
        logger.debug(f"Ranked {len(standings)} players by points, then {order}")
        return standings

    # ========== Tallying ==========

    def _record_match(self, match: Match, tallies: Dict[str, _Tally]) -> None:
        result = match.result
        if not match.is_completed or result is None:
            return

        if result.is_bye:
            if not result.is_void and result.winner_id in tallies:
                tally = tallies[result.winner_id]
                tally.played += 1
                tally.won += 1
                tally.points += self.config.bye_points
            return

        sides = (
            (match.player1_id, match.player2_id, result.player1_score, result.player2_score),
            (match.player2_id, match.player1_id, result.player2_score, result.player1_score),
        )
        for player_id, opponent_id, score_for, score_against in sides:
            tally = tallies.get(player_id)
            if tally is None:
                continue
            if result.winner_id is None:
                earned = self.config.points_for_draw
                tally.drawn += 1
            elif result.winner_id == player_id:
                earned = self.config.points_for_win
                tally.won += 1
            else:
                earned = self.config.points_for_loss
                tally.lost += 1
            tally.played += 1
            tally.points += earned
            tally.score_for += score_for
            tally.score_against += score_against
            if opponent_id is not None:
                tally.games.append((opponent_id, earned))

    # ========== Tiebreaks ==========

    def _calculate_tiebreaks(
        self,
        player_id: str,
        tally: _Tally,
        points: Dict[str, float],
    ) -> Dict[str, float]:
        opponent_points = [points.get(opp, 0.0) for opp, _ in tally.games]
        return {
            TB_BUCHHOLZ: sum(opponent_points),
            TB_BUCHHOLZ_CUT_1: self._calculate_buchholz_cut_1(opponent_points),
            TB_SONNEBORN_BERGER: self._calculate_sonneborn_berger(tally, points),
            TB_WINS: float(tally.won),
            TB_POINT_DIFF: tally.score_for - tally.score_against,
            TB_HEAD_TO_HEAD: self._calculate_head_to_head(player_id, tally, points),
        }

    def _calculate_buchholz_cut_1(self, opponent_points: List[float]) -> float:
        """Buchholz dropping the lowest opponent score.

        With a single opponent nothing is dropped.
        """
        if len(opponent_points) <= 1:
            return sum(opponent_points)
        return sum(sorted(opponent_points)[1:])

    def _calculate_sonneborn_berger(
        self, tally: _Tally, points: Dict[str, float]
    ) -> float:
        """Sum of opponent points weighted by the share of a win earned."""
        win = self.config.points_for_win
        if not win:
            return 0.0
        return sum(points.get(opp, 0.0) * (earned / win) for opp, earned in tally.games)

    def _calculate_head_to_head(
        self, player_id: str, tally: _Tally, points: Dict[str, float]
    ) -> float:
        """Points earned against players currently level on points."""
        own = points.get(player_id, 0.0)
        return sum(
            earned
            for opp, earned in tally.games
            if opp != player_id and points.get(opp) == own
        )


def compute_standings(
    players: List[Player],
    matches: Iterable[Match],
    config: Optional[TournamentConfig] = None,
    fmt: Optional[str] = None,
) -> List[Standing]:
    """Standings for ``players`` over ``matches``.

    ``fmt`` overrides the format stored in ``config`` (it selects the
    default tiebreak order and whether Buchholz is reported).
    """
    config = config or TournamentConfig()
    if fmt is not None and fmt != config.format:
        config = dataclasses.replace(config, format=fmt)
    return StandingsCalculator(config).compute(players, matches)
