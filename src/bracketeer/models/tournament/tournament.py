"""Tournament state container."""

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
from typing import Any, Dict, Iterator, List, Optional

from bracketeer.constants import (
    TOURNAMENT_ACTIVE,
    TOURNAMENT_SETUP,
)
from bracketeer.exceptions import MatchNotFoundException
from bracketeer.models.player import Player
from bracketeer.models.tournament.match import Match
from bracketeer.models.tournament.round_data import Round
from bracketeer.models.tournament.tournament_config import TournamentConfig
from bracketeer.utils import generate_id


@dataclass
class Tournament:
    """The unit of mutation for every engine operation.

    Engine functions never modify a Tournament in place; they return a new
    one. The caller owns storage and serializes writes.

    Attributes
    ----------
    id : str
        Tournament id.
    config : TournamentConfig
        Format and scoring settings.
    players : list of Player
        Participants in seed order.
    rounds : list of Round
        Rounds in creation order (for double elimination: winner bracket,
        then loser bracket, then grand final).
    status : str
        setup, active, completed or cancelled.
    current_round : int
        Highest generated round (Swiss) or 1 for pre-built brackets.
    champion_id : str or None
        Winner of an elimination tournament once decided.
    cancel_reason : str or None
        Why the tournament was cancelled.
    """

    config: TournamentConfig
    players: List[Player] = field(default_factory=list)
    rounds: List[Round] = field(default_factory=list)
    status: str = TOURNAMENT_SETUP
    current_round: int = 0
    champion_id: Optional[str] = None
    cancel_reason: Optional[str] = None
    id: str = field(default_factory=lambda: generate_id("tournament"))

    # ========== Properties ==========

    @property
    def name(self) -> str:
        """Get tournament name."""
        return self.config.name

    @property
    def format(self) -> str:
        return self.config.format

    @property
    def is_active(self) -> bool:
        return self.status == TOURNAMENT_ACTIVE

    @property
    def player_map(self) -> Dict[str, Player]:
        return {p.id: p for p in self.players}

    # ========== Lookups ==========

    def iter_matches(self) -> Iterator[Match]:
        for round_ in self.rounds:
            yield from round_.matches

    @property
    def matches(self) -> List[Match]:
        return list(self.iter_matches())

    def get_match(self, match_id: str) -> Match:
        """Return the match with ``match_id``.

        Raises:
            MatchNotFoundException: If no such match exists
        """
        for match in self.iter_matches():
            if match.id == match_id:
                return match
        raise MatchNotFoundException(f"Match not found: {match_id}")

    def find_match(self, match_id: Optional[str]) -> Optional[Match]:
        if match_id is None:
            return None
        for match in self.iter_matches():
            if match.id == match_id:
                return match
        return None

    def get_round(self, round_id: str) -> Optional[Round]:
        for round_ in self.rounds:
            if round_.id == round_id:
                return round_
        return None

    def rounds_in(self, bracket_type: Optional[str]) -> List[Round]:
        """Rounds of one bracket section, in round order."""
        return [r for r in self.rounds if r.bracket_type == bracket_type]

    # ========== Serialization ==========

    def to_dict(self) -> Dict[str, Any]:
        """Serialize tournament state to dictionary."""
        return {
            "id": self.id,
            "config": self.config.to_dict(),
            "players": [p.to_dict() for p in self.players],
            "rounds": [r.to_dict() for r in self.rounds],
            "status": self.status,
            "current_round": self.current_round,
            "champion_id": self.champion_id,
            "cancel_reason": self.cancel_reason,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Tournament":
        """Deserialize tournament state from dictionary."""
        return cls(
            id=data.get("id") or generate_id("tournament"),
            config=TournamentConfig.from_dict(data.get("config", {})),
            players=[Player.from_dict(p) for p in data.get("players", [])],
            rounds=[Round.from_dict(r) for r in data.get("rounds", [])],
            status=data.get("status", TOURNAMENT_SETUP),
            current_round=data.get("current_round", 0),
            champion_id=data.get("champion_id"),
            cancel_reason=data.get("cancel_reason"),
        )
