"""Selection result data classes."""

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
from typing import Any, Dict, List

from bracketeer.models.player import Player
from bracketeer.models.registration.candidate import RegistrationCandidate


@dataclass
class RejectedCandidate:
    """A candidate excluded from selection, with the reason shown to organizers."""

    candidate: RegistrationCandidate
    reason: str
    score: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "candidate": self.candidate.to_dict(),
            "reason": self.reason,
            "score": self.score,
        }


@dataclass
class SelectionResult:
    """Partition of registrations into selected, waitlisted and rejected.

    Attributes
    ----------
    selected : list of RegistrationCandidate
        Accepted candidates, best score first.
    waitlist : list of RegistrationCandidate
        Eligible candidates beyond capacity, in promotion order.
    rejected : list of RejectedCandidate
        Candidates below the eligibility threshold.
    scores : dict of str to float
        Computed score per candidate id.
    """

    selected: List[RegistrationCandidate] = field(default_factory=list)
    waitlist: List[RegistrationCandidate] = field(default_factory=list)
    rejected: List[RejectedCandidate] = field(default_factory=list)
    scores: Dict[str, float] = field(default_factory=dict)

    @property
    def selected_ids(self) -> List[str]:
        return [c.id for c in self.selected]

    @property
    def waitlist_ids(self) -> List[str]:
        return [c.id for c in self.waitlist]

    @property
    def rejected_ids(self) -> List[str]:
        return [r.candidate.id for r in self.rejected]

    def to_players(self) -> List[Player]:
        """Selected candidates as seeded players, in selection order."""
        return [c.to_player(seed=i) for i, c in enumerate(self.selected, start=1)]

    def to_dict(self) -> Dict[str, Any]:
        """Serialize selection result to dictionary."""
        return {
            "selected": [c.to_dict() for c in self.selected],
            "waitlist": [c.to_dict() for c in self.waitlist],
            "rejected": [r.to_dict() for r in self.rejected],
            "scores": dict(self.scores),
        }
