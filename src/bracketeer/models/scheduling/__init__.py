"""Scheduling models: resources, placed matches and conflicts."""

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

from dataclasses import asdict, dataclass, fields
from datetime import datetime
from typing import Any, Dict, Optional

from bracketeer.constants import RESOURCE_COURT, RESOURCE_TYPES
from bracketeer.exceptions import InvalidConfigurationException
from bracketeer.models.registration.candidate import to_datetime
from bracketeer.models.tournament.match import Match


@dataclass(frozen=True)
class Resource:
    """A court, field or table matches can be played on."""

    id: str
    name: str
    type: str = RESOURCE_COURT

    def __post_init__(self) -> None:
        if self.type not in RESOURCE_TYPES:
            raise InvalidConfigurationException(f"Unknown resource type: {self.type}")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Resource":
        return cls(
            id=str(data["id"]),
            name=data.get("name", str(data["id"])),
            type=data.get("type", RESOURCE_COURT),
        )


@dataclass
class ScheduledMatch(Match):
    """A match with a time slot and a resource.

    Attributes
    ----------
    scheduled_at : datetime or None
        Start time; None for matches left unscheduled (conditional ones).
    resource_id : str or None
        Id of the assigned resource.
    location : str or None
        Display name of the assigned resource.
    """

    scheduled_at: Optional[datetime] = None
    resource_id: Optional[str] = None
    location: Optional[str] = None

    @classmethod
    def from_match(cls, match: Match, **placement: Any) -> "ScheduledMatch":
        """Copy ``match`` and apply placement fields.

        Placement already carried by ``match`` is kept unless overridden.
        """
        values = {f.name: getattr(match, f.name) for f in fields(Match)}
        for name in ("scheduled_at", "resource_id", "location"):
            values[name] = placement.get(name, getattr(match, name, None))
        if "status" in placement:
            values["status"] = placement["status"]
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["scheduled_at"] = (
            self.scheduled_at.isoformat() if self.scheduled_at else None
        )
        data["resource_id"] = self.resource_id
        data["location"] = self.location
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ScheduledMatch":
        kwargs = Match._base_kwargs(data)
        scheduled_at = data.get("scheduled_at")
        kwargs["scheduled_at"] = to_datetime(scheduled_at) if scheduled_at else None
        kwargs["resource_id"] = data.get("resource_id")
        kwargs["location"] = data.get("location")
        return cls(**kwargs)


@dataclass(frozen=True)
class ScheduleConflict:
    """A constraint violated by a placed match."""

    kind: str
    match_id: str
    detail: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


__all__ = ["Resource", "ScheduleConflict", "ScheduledMatch"]
