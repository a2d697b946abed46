"""Registration candidate data classes."""

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
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Set, Union

from dateutil.parser import isoparse

from bracketeer.models.player import Player


def to_date(value: Union[str, date, datetime]) -> date:
    """Coerce an ISO string, date or datetime to a date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return isoparse(value).date()


def to_datetime(value: Union[str, date, datetime]) -> datetime:
    """Coerce an ISO string, date or datetime to a datetime."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    return isoparse(value)


@dataclass
class PlayerConstraints:
    """Availability declared by a candidate at registration.

    Attributes
    ----------
    unavailable_dates : set of date
        Calendar days the candidate cannot play.
    max_matches_per_day : int or None
        Daily match cap; None means no limit.
    preferred_times : list of str
        Free-form slot preferences ("morning", "18:00"...). Informational.
    """

    unavailable_dates: Set[date] = field(default_factory=set)
    max_matches_per_day: Optional[int] = None
    preferred_times: List[str] = field(default_factory=list)

    def is_available_on(self, day: date) -> bool:
        return day not in self.unavailable_dates

    def to_dict(self) -> Dict[str, Any]:
        return {
            "unavailable_dates": sorted(d.isoformat() for d in self.unavailable_dates),
            "max_matches_per_day": self.max_matches_per_day,
            "preferred_times": list(self.preferred_times),
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "PlayerConstraints":
        data = data or {}
        return cls(
            unavailable_dates={to_date(d) for d in data.get("unavailable_dates", [])},
            max_matches_per_day=data.get("max_matches_per_day"),
            preferred_times=list(data.get("preferred_times", [])),
        )


@dataclass
class RegistrationCandidate:
    """An open registration awaiting selection.

    Attributes
    ----------
    id : str
        Candidate id; becomes the player id once selected.
    name : str
        Display name.
    email : str or None
        Contact address.
    registration_timestamp : datetime
        When the registration was received (earlier wins ties).
    constraints : PlayerConstraints
        Declared availability.
    skill_level : str or None
        Self-declared level, informational.
    """

    id: str
    name: str
    registration_timestamp: datetime
    email: Optional[str] = None
    constraints: PlayerConstraints = field(default_factory=PlayerConstraints)
    skill_level: Optional[str] = None

    def to_player(self, seed: Optional[int] = None) -> Player:
        return Player(id=self.id, name=self.name, seed=seed, email=self.email)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize candidate to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "registration_timestamp": self.registration_timestamp.isoformat(),
            "constraints": self.constraints.to_dict(),
            "skill_level": self.skill_level,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RegistrationCandidate":
        """Deserialize candidate from dictionary."""
        return cls(
            id=str(data["id"]),
            name=data["name"],
            email=data.get("email"),
            registration_timestamp=to_datetime(data["registration_timestamp"]),
            constraints=PlayerConstraints.from_dict(data.get("constraints")),
            skill_level=data.get("skill_level"),
        )
