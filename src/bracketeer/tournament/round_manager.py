"""Round management for tournaments.

This module handles round-level queries and Swiss round generation.
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

from typing import List, Optional, Set, Tuple

from bracketeer.bracket.swiss import build_swiss_round, default_swiss_rounds
from bracketeer.constants import FORMAT_SWISS
from bracketeer.exceptions import RoundIncompleteException, TournamentStateException
from bracketeer.models.tournament import PairingHistory, Round, Tournament
from bracketeer.pairing.swiss import SwissPairingResult, create_swiss_pairings
from bracketeer.tournament.tiebreak_calculator import compute_standings
from bracketeer.utils import setup_logger

logger = setup_logger(__name__)


class RoundManager:
    """Manages round progression for a tournament.

    This class is responsible for:
    - Reporting which rounds are complete
    - Generating the next Swiss round from fresh standings
    - Knowing how many Swiss rounds remain
    """

    def __init__(self, tournament: Tournament):
        """Initialize the round manager.

        Args:
            tournament: Tournament to inspect; Swiss generation appends to it
        """
        self.tournament = tournament

    @property
    def total_rounds(self) -> int:
        """Configured Swiss rounds, or the format default for the roster size."""
        config = self.tournament.config
        if config.total_rounds is not None:
            return config.total_rounds
        return default_swiss_rounds(len(self.tournament.players))

    def get_round(self, round_number: int, bracket_type: Optional[str] = None) -> Optional[Round]:
        """Get a round by number within a bracket section.

        Returns:
            The round, or None if it does not exist
        """
        for round_ in self.tournament.rounds_in(bracket_type):
            if round_.number == round_number:
                return round_
        return None

    def completed_round_ids(self) -> Set[str]:
        return {r.id for r in self.tournament.rounds if r.is_completed}

    def is_round_complete(self, round_number: int) -> bool:
        """Check a round of a single-section format (Swiss, round robin, single elimination)."""
        round_ = self.get_round(round_number)
        return round_ is not None and round_.is_completed

    # ========== Swiss ==========

    def create_next_swiss_round(self) -> Tuple[Round, SwissPairingResult]:
        """Pair and append the next Swiss round.

        Standings are recomputed from every completed match. The new round
        is appended to ``self.tournament`` and ``current_round`` advanced;
        byes are left for the caller to resolve.

        Returns:
            The new round and the pairing details

        Raises:
            TournamentStateException: Not Swiss, or all rounds already created
            RoundIncompleteException: The current round still has open matches
        """
        tournament = self.tournament
        if tournament.format != FORMAT_SWISS:
            raise TournamentStateException(
                f"Next-round generation only applies to Swiss, not {tournament.format}"
            )
        if tournament.current_round >= self.total_rounds:
            raise TournamentStateException(
                f"All {self.total_rounds} rounds have already been created"
            )
        if not self.is_round_complete(tournament.current_round):
            raise RoundIncompleteException(
                f"Round {tournament.current_round} still has matches without a result"
            )

        standings = compute_standings(
            tournament.players, tournament.iter_matches(), tournament.config
        )
        ranked_ids: List[str] = [s.player_id for s in standings]
        history = PairingHistory.from_matches(tournament.iter_matches())

        pairing = create_swiss_pairings(
            ranked_ids, history, tournament.config.swiss_max_backtracks
        )
        number = tournament.current_round + 1
        new_round = build_swiss_round(
            number, pairing.pairings, pairing.bye_player_id, pairing.rematches
        )
        tournament.rounds.append(new_round)
        tournament.current_round = number

        logger.info(
            f"Created Swiss round {number}: {len(pairing.pairings)} pairings, "
            f"bye={pairing.bye_player_id}, rematches={len(pairing.rematches)}"
        )
        return new_round, pairing
