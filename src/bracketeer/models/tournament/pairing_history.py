"""Pairing history used to avoid Swiss rematches."""

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
from typing import Iterable, Set

from bracketeer.models.tournament.match import Match


@dataclass
class PairingHistory:
    """
    Tracks historical pairings to prevent repeat matches.

    Attributes
    ----------
    previous_matches : set of frozenset of str
        Player id pairs that have already been paired.
    bye_recipients : set of str
        Players who already received a bye.
    """

    previous_matches: Set[frozenset] = field(default_factory=set)
    bye_recipients: Set[str] = field(default_factory=set)

    def add_pairing(self, player1_id: str, player2_id: str) -> None:
        """Record that two players have been paired."""
        self.previous_matches.add(frozenset({player1_id, player2_id}))

    def have_played(self, player1_id: str, player2_id: str) -> bool:
        """Check if two players have previously played each other."""
        return frozenset({player1_id, player2_id}) in self.previous_matches

    def had_bye(self, player_id: str) -> bool:
        return player_id in self.bye_recipients

    @classmethod
    def from_matches(cls, matches: Iterable[Match]) -> "PairingHistory":
        """Rebuild the history from the matches generated so far.

        Every generated pairing counts, played or not, so a pending
        pairing is never repeated either.
        """
        history = cls()
        for match in matches:
            if match.player1_id and match.player2_id:
                history.add_pairing(match.player1_id, match.player2_id)
            elif match.result is not None and match.result.is_bye and match.winner_id:
                history.bye_recipients.add(match.winner_id)
        return history
