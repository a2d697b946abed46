"""Result recording and validation for tournaments.

This module turns a reported outcome into a validated MatchResult.
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

from numbers import Real
from typing import Optional, Sequence, Union

from bracketeer.exceptions import InvalidResultException
from bracketeer.models.tournament import Match, MatchResult, TournamentConfig
from bracketeer.tournament.scoring import ScoreData, parse_score_string, validate_score
from bracketeer.utils import setup_logger

logger = setup_logger(__name__)

ScoreInput = Union[None, str, ScoreData, Sequence[float]]


class ResultRecorder:
    """Builds and validates match results.

    This class is responsible for:
    - Checking the winner is one of the seated players
    - Allowing draws only where the format and config permit them
    - Parsing set scores and checking they agree with the winner
    - Marking walkovers
    """

    def __init__(self, config: TournamentConfig):
        self.config = config

    def build_result(
        self,
        match: Match,
        winner_id: Optional[str],
        score: ScoreInput = None,
        walkover: bool = False,
    ) -> MatchResult:
        """Create the MatchResult for ``match``.

        Args:
            match: The match being reported
            winner_id: Winning player id, None for a draw
            score: A score string ("6-4 7-5"), a ScoreData, a
                (player1, player2) pair of numbers, or None
            walkover: The loser did not play

        Returns:
            A validated MatchResult

        Raises:
            InvalidResultException: If the outcome is inconsistent
        """
        self._validate_winner(match, winner_id, walkover)

        if isinstance(score, str):
            score = parse_score_string(score)

        if isinstance(score, ScoreData):
            return self._from_score_data(match, winner_id, score, walkover)

        player1_score, player2_score = self._validate_points(match, winner_id, score, walkover)
        return MatchResult(
            winner_id=winner_id,
            player1_score=player1_score,
            player2_score=player2_score,
            is_walkover=walkover,
        )

    # ========== Validation ==========

    def _validate_winner(
        self, match: Match, winner_id: Optional[str], walkover: bool
    ) -> None:
        if winner_id is None:
            if walkover:
                raise InvalidResultException("A walkover needs a winner")
            if not self.config.draws_permitted:
                raise InvalidResultException(
                    f"Draws are not allowed in this {self.config.format} tournament"
                )
            return

        if not match.has_player(winner_id):
            raise InvalidResultException(
                f"{winner_id} is not playing in {match.id} "
                f"({match.player1_id} vs {match.player2_id})"
            )

    def _from_score_data(
        self,
        match: Match,
        winner_id: Optional[str],
        data: ScoreData,
        walkover: bool,
    ) -> MatchResult:
        walkover = walkover or data.walkover
        if walkover and winner_id is None:
            raise InvalidResultException("A walkover needs a winner")

        validation = validate_score(data)
        if not validation:
            raise InvalidResultException(validation.error_message)

        if not walkover and not data.retired and not data.is_empty:
            slot = data.winning_slot()
            score_winner = {1: match.player1_id, 2: match.player2_id}.get(slot)
            if score_winner != winner_id:
                raise InvalidResultException(
                    f"Score {data.sets} does not match reported winner {winner_id}"
                )

        player1_sets, player2_sets = data.sets_won()
        return MatchResult(
            winner_id=winner_id,
            player1_score=float(player1_sets),
            player2_score=float(player2_sets),
            is_walkover=walkover,
            sets=list(data.sets),
            tiebreaks=list(data.tiebreaks),
            match_tiebreak=data.match_tiebreak,
            retired=data.retired,
        )

    def _validate_points(
        self,
        match: Match,
        winner_id: Optional[str],
        score: Optional[Sequence[float]],
        walkover: bool,
    ) -> tuple:
        if score is None:
            return 0.0, 0.0
        if len(score) != 2 or not all(
            isinstance(s, Real) and not isinstance(s, bool) for s in score
        ):
            raise InvalidResultException(f"Score must be a pair of numbers: {score!r}")

        player1_score, player2_score = float(score[0]), float(score[1])
        if player1_score < 0 or player2_score < 0:
            raise InvalidResultException(f"Scores cannot be negative: {score!r}")

        if walkover:
            return player1_score, player2_score
        if winner_id is None and player1_score != player2_score:
            raise InvalidResultException(f"A draw needs level scores: {score!r}")
        if winner_id == match.player1_id and player1_score < player2_score:
            raise InvalidResultException(
                f"Winner {winner_id} has the lower score {score!r}"
            )
        if winner_id == match.player2_id and player2_score < player1_score:
            raise InvalidResultException(
                f"Winner {winner_id} has the lower score {score!r}"
            )
        return player1_score, player2_score
