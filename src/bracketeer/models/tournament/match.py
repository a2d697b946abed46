"""Match data class."""

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

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from bracketeer.constants import STATUS_COMPLETED, STATUS_CONDITIONAL, STATUS_PENDING
from bracketeer.models.tournament.match_result import MatchResult


@dataclass
class Match:
    """A single pairing inside a round.

    Attributes
    ----------
    id : str
        Match id, unique within the tournament (e.g. ``"wb2_m1"``).
    round_id : str
        Id of the owning round.
    round_number : int
        Round number within its bracket section (1-indexed).
    match_number : int
        Position within the round (1-indexed).
    player1_id, player2_id : str or None
        Occupants of the two slots. None means unresolved or bye.
    status : str
        One of pending, scheduled, in_progress, completed, conditional.
    result : MatchResult or None
        Set once the match is completed.
    next_match_id : str or None
        Where the winner goes.
    next_loser_match_id : str or None
        Where the loser goes (double elimination winner bracket only).
    bracket_type : str or None
        winner, loser or grand_final in double elimination, else None.
    is_rematch : bool
        Set by the Swiss pairer when a rematch could not be avoided.
    """

    id: str
    round_id: str
    round_number: int
    match_number: int
    player1_id: Optional[str] = None
    player2_id: Optional[str] = None
    status: str = STATUS_PENDING
    result: Optional[MatchResult] = None
    next_match_id: Optional[str] = None
    next_loser_match_id: Optional[str] = None
    bracket_type: Optional[str] = None
    is_rematch: bool = False

    # ========== Queries ==========

    @property
    def player_ids(self) -> List[str]:
        """Ids of the players currently seated, in slot order."""
        return [pid for pid in (self.player1_id, self.player2_id) if pid]

    @property
    def is_completed(self) -> bool:
        return self.status == STATUS_COMPLETED

    @property
    def is_conditional(self) -> bool:
        return self.status == STATUS_CONDITIONAL

    @property
    def is_ready(self) -> bool:
        """Both players are known and the match can be played."""
        return (
            self.player1_id is not None
            and self.player2_id is not None
            and not self.is_completed
            and not self.is_conditional
        )

    @property
    def winner_id(self) -> Optional[str]:
        return self.result.winner_id if self.result else None

    @property
    def loser_id(self) -> Optional[str]:
        """The other seated player when there is a winner, else None."""
        winner = self.winner_id
        if winner is None:
            return None
        if winner == self.player1_id:
            return self.player2_id
        if winner == self.player2_id:
            return self.player1_id
        return None

    def has_player(self, player_id: str) -> bool:
        return player_id in (self.player1_id, self.player2_id)

    # ========== Serialization ==========

    def to_dict(self) -> Dict[str, Any]:
        """Serialize match to dictionary."""
        return {
            "id": self.id,
            "round_id": self.round_id,
            "round_number": self.round_number,
            "match_number": self.match_number,
            "player1_id": self.player1_id,
            "player2_id": self.player2_id,
            "status": self.status,
            "result": self.result.to_dict() if self.result else None,
            "next_match_id": self.next_match_id,
            "next_loser_match_id": self.next_loser_match_id,
            "bracket_type": self.bracket_type,
            "is_rematch": self.is_rematch,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Match":
        """Deserialize a match, dispatching to ScheduledMatch when placed."""
        if data.get("scheduled_at") is not None:
            from bracketeer.models.scheduling import ScheduledMatch

            return ScheduledMatch.from_dict(data)
        return cls(**cls._base_kwargs(data))

    @staticmethod
    def _base_kwargs(data: Dict[str, Any]) -> Dict[str, Any]:
        result = data.get("result")
        return {
            "id": data["id"],
            "round_id": data["round_id"],
            "round_number": data["round_number"],
            "match_number": data["match_number"],
            "player1_id": data.get("player1_id"),
            "player2_id": data.get("player2_id"),
            "status": data.get("status", STATUS_PENDING),
            "result": MatchResult.from_dict(result) if result else None,
            "next_match_id": data.get("next_match_id"),
            "next_loser_match_id": data.get("next_loser_match_id"),
            "bracket_type": data.get("bracket_type"),
            "is_rematch": data.get("is_rematch", False),
        }
