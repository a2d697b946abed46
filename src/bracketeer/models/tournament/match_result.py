"""Match result data class."""

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
from typing import Any, Dict, List, Optional, Tuple

from bracketeer.type_hints import SetScore


@dataclass
class MatchResult:
    """Represents the outcome of a single match.

    Attributes
    ----------
    winner_id : str or None
        ID of the winner. None only for a draw or a void bye.
    player1_score : float
        Score for the player in slot 1 (sets won, goals, points...).
    player2_score : float
        Score for the player in slot 2.
    is_walkover : bool
        Reported walkover: the opponent did not show up or withdrew.
    is_bye : bool
        Engine-generated unopposed advancement.
    sets : list of tuple of int
        Per-set games as (player1, player2), empty when not tracked.
    tiebreaks : list of int or None
        Tiebreak points per set, aligned with ``sets``.
    match_tiebreak : tuple of int or None
        Super tiebreak played instead of a deciding set.
    retired : bool
        A player retired during the match.
    """

    winner_id: Optional[str]
    player1_score: float = 0.0
    player2_score: float = 0.0
    is_walkover: bool = False
    is_bye: bool = False
    sets: List[SetScore] = field(default_factory=list)
    tiebreaks: List[Optional[int]] = field(default_factory=list)
    match_tiebreak: Optional[Tuple[int, int]] = None
    retired: bool = False

    @property
    def is_draw(self) -> bool:
        """A played match with no winner."""
        return self.winner_id is None and not self.is_bye

    @property
    def is_void(self) -> bool:
        """A bye nobody received (both feeders empty)."""
        return self.winner_id is None and self.is_bye

    def same_outcome(self, other: "MatchResult") -> bool:
        """True when ``other`` reports the same winner and score."""
        return (
            self.winner_id == other.winner_id
            and self.player1_score == other.player1_score
            and self.player2_score == other.player2_score
            and self.is_walkover == other.is_walkover
            and list(self.sets) == list(other.sets)
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize match result to dictionary."""
        return {
            "winner_id": self.winner_id,
            "player1_score": self.player1_score,
            "player2_score": self.player2_score,
            "is_walkover": self.is_walkover,
            "is_bye": self.is_bye,
            "sets": [list(s) for s in self.sets],
            "tiebreaks": list(self.tiebreaks),
            "match_tiebreak": list(self.match_tiebreak)
            if self.match_tiebreak
            else None,
            "retired": self.retired,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MatchResult":
        """Deserialize match result from dictionary."""
        match_tiebreak = data.get("match_tiebreak")
        return cls(
            winner_id=data.get("winner_id"),
            player1_score=data.get("player1_score", 0.0),
            player2_score=data.get("player2_score", 0.0),
            is_walkover=data.get("is_walkover", False),
            is_bye=data.get("is_bye", False),
            sets=[tuple(s) for s in data.get("sets", [])],
            tiebreaks=list(data.get("tiebreaks", [])),
            match_tiebreak=tuple(match_tiebreak) if match_tiebreak else None,
            retired=data.get("retired", False),
        )
