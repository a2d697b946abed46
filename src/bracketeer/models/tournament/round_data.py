"""Data model for tournament round."""

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
from typing import Any, Dict, List, Optional

from bracketeer.models.tournament.match import Match


@dataclass
class Round:
    """Container for all matches of a single round.

    Attributes
    ----------
    id : str
        Round id (e.g. ``"wb2"`` or ``"sw3"``).
    number : int
        Round number within its bracket section (1-indexed).
    name : str
        Display name ("Final", "Round 2"...).
    bracket_type : str or None
        Bracket section for double elimination, else None.
    matches : list of Match
        Matches ordered by ``match_number``.
    """

    id: str
    number: int
    name: str
    bracket_type: Optional[str] = None
    matches: List[Match] = field(default_factory=list)

    @property
    def is_completed(self) -> bool:
        """Every match in the round has a result (byes included)."""
        return bool(self.matches) and all(m.is_completed for m in self.matches)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize round data to dictionary."""
        return {
            "id": self.id,
            "number": self.number,
            "name": self.name,
            "bracket_type": self.bracket_type,
            "matches": [m.to_dict() for m in self.matches],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Round":
        """Deserialize round data from dictionary."""
        return cls(
            id=data["id"],
            number=data["number"],
            name=data.get("name", f"Round {data['number']}"),
            bracket_type=data.get("bracket_type"),
            matches=[Match.from_dict(m) for m in data.get("matches", [])],
        )
