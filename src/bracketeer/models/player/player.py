"""Player data class."""

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
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class Player:
    """A tournament participant (an individual or a team).

    Players are immutable once placed in a bracket; matches refer to them
    by ``id`` only.

    Attributes
    ----------
    id : str
        Unique, stable identifier.
    name : str
        Display name.
    seed : int or None
        Initial rank used at bracket-build time (1 = strongest).
    ranking : str or None
        External ranking label (e.g. "15/1", "NC").
    email : str or None
        Contact address.
    age : int or None
        Age in years.
    """

    id: str
    name: str
    seed: Optional[int] = None
    ranking: Optional[str] = None
    email: Optional[str] = None
    age: Optional[int] = None

    def __str__(self) -> str:
        if self.seed is not None:
            return f"{self.name} [{self.seed}]"
        return self.name

    def to_dict(self) -> Dict[str, Any]:
        """Serialize player to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "seed": self.seed,
            "ranking": self.ranking,
            "email": self.email,
            "age": self.age,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Player":
        """Deserialize player from dictionary."""
        return cls(
            id=str(data["id"]),
            name=data["name"],
            seed=data.get("seed"),
            ranking=data.get("ranking"),
            email=data.get("email"),
            age=data.get("age"),
        )
