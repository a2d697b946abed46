"""Match scheduling on courts, fields and tables.

Two placement strategies are offered. ``schedule`` spreads matches over the
resources in round-robin order, one wave of matches per time slot.
``schedule_with_constraints`` scans forward in fixed steps for the first slot
where the resource is free and both players are available, falling back to
a flagged placement when the search window is exhausted.
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

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Dict, List, Mapping, Optional, Sequence, Tuple, Union

from dateutil.relativedelta import relativedelta

from bracketeer.bracket.advancement import feeder_map
from bracketeer.constants import (
    CONFLICT_DAILY_LIMIT,
    CONFLICT_PLAYER,
    CONFLICT_RESOURCE,
    CONFLICT_UNAVAILABLE,
    DEFAULT_MATCH_DURATION_MINUTES,
    SCHEDULE_SEARCH_DAYS,
    SCHEDULE_STEP_MINUTES,
    STATUS_PENDING,
    STATUS_SCHEDULED,
)
from bracketeer.exceptions import SchedulingException
from bracketeer.models.registration import to_datetime
from bracketeer.models.scheduling import Resource, ScheduleConflict, ScheduledMatch
from bracketeer.models.tournament import Match
from bracketeer.scheduling.conflicts import (
    ConstraintSource,
    constraints_of,
    interval,
    overlaps,
)
from bracketeer.utils import setup_logger

logger = setup_logger(__name__)

DateLike = Union[str, date, datetime]


@dataclass
class _Booking:
    match_id: str
    resource_id: Optional[str]
    player_ids: List[str]
    span: Tuple[datetime, datetime]


@dataclass
class _Calendar:
    """Bookings made so far, used to test candidate slots."""

    duration: int
    bookings: List[_Booking] = field(default_factory=list)

    def book(self, match: ScheduledMatch) -> None:
        if match.scheduled_at is None:
            return
        self.bookings.append(
            _Booking(
                match_id=match.id,
                resource_id=match.resource_id,
                player_ids=match.player_ids,
                span=interval(match.scheduled_at, self.duration),
            )
        )

    def resource_free(self, resource_id: str, start: datetime) -> bool:
        span = interval(start, self.duration)
        return not any(
            b.resource_id == resource_id and overlaps(b.span, span)
            for b in self.bookings
        )

    def player_free(self, player_id: str, start: datetime) -> bool:
        span = interval(start, self.duration)
        return not any(
            player_id in b.player_ids and overlaps(b.span, span)
            for b in self.bookings
        )

    def matches_on(self, player_id: str, day: date) -> int:
        return sum(
            1
            for b in self.bookings
            if player_id in b.player_ids and b.span[0].date() == day
        )


class SchedulingEngine:
    """Assigns time slots and resources to matches.

    Completed matches keep whatever placement they had and conditional
    matches (an unplayed bracket reset) are returned without one. Input
    matches are never modified.
    """

    def __init__(
        self,
        resources: Sequence[Resource],
        match_duration_minutes: int = DEFAULT_MATCH_DURATION_MINUTES,
    ):
        if not resources:
            raise SchedulingException("At least one resource is required")
        if match_duration_minutes <= 0:
            raise SchedulingException(
                f"Match duration must be positive: {match_duration_minutes}"
            )
        self.resources = list(resources)
        self.duration = match_duration_minutes

    def _place(
        self, match: Match, resource: Resource, start: datetime
    ) -> ScheduledMatch:
        status = STATUS_SCHEDULED if match.status == STATUS_PENDING else match.status
        return ScheduledMatch.from_match(
            match,
            scheduled_at=start,
            resource_id=resource.id,
            location=resource.name,
            status=status,
        )

    def schedule(
        self, matches: Sequence[Match], start_date: DateLike
    ) -> List[ScheduledMatch]:
        """Place matches in waves of one match per resource.

        The i-th schedulable match goes on ``resources[i % R]`` at
        ``start + (i // R) * duration``.
        """
        start = to_datetime(start_date)
        count = len(self.resources)
        scheduled: List[ScheduledMatch] = []
        index = 0

        for match in matches:
            if match.is_completed or match.is_conditional:
                scheduled.append(ScheduledMatch.from_match(match))
                continue
            slot = start + relativedelta(minutes=(index // count) * self.duration)
            scheduled.append(self._place(match, self.resources[index % count], slot))
            index += 1

        logger.info(
            f"Scheduled {index} matches on {count} resources from {start.isoformat()}"
        )
        return scheduled

    def schedule_with_constraints(
        self,
        matches: Sequence[Match],
        candidates_by_player: Mapping[str, ConstraintSource],
        start_date: DateLike,
        search_days: int = SCHEDULE_SEARCH_DAYS,
        step_minutes: int = SCHEDULE_STEP_MINUTES,
    ) -> Tuple[List[ScheduledMatch], List[ScheduleConflict]]:
        """Place each match in the first slot that satisfies every constraint.

        Slots are tried every ``step_minutes`` from ``start_date`` for
        ``search_days`` days, resources in order within a slot. A slot is
        valid when the resource and both players are free for the whole
        match, neither player has declared the day unavailable and neither
        has reached a daily cap. A match never starts before the matches
        feeding it have ended. A match with no valid slot is placed at the
        end of the window (or after its feeders, if later) and reported as
        a conflict.

        Returns:
            Tuple of (scheduled matches, conflicts for fallback placements)
        """
        if step_minutes <= 0:
            raise SchedulingException(f"Step must be positive: {step_minutes}")
        start = to_datetime(start_date)
        window_end = start + relativedelta(days=search_days)
        calendar = _Calendar(self.duration)
        scheduled: List[ScheduledMatch] = []
        conflicts: List[ScheduleConflict] = []

        feeders = feeder_map({m.id: m for m in matches})
        ends: Dict[str, datetime] = {}

        for match in matches:
            if match.is_completed and getattr(match, "scheduled_at", None):
                calendar.book(ScheduledMatch.from_match(match))
                ends[match.id] = interval(match.scheduled_at, self.duration)[1]

        placed = 0
        for match in matches:
            if match.is_completed or match.is_conditional:
                scheduled.append(ScheduledMatch.from_match(match))
                continue

            earliest = max(
                [start] + [ends[f.id] for f in feeders[match.id] if f.id in ends]
            )
            found = self._first_valid_slot(
                match, candidates_by_player, calendar, earliest, window_end, step_minutes
            )
            if found is not None:
                resource, slot = found
                result = self._place(match, resource, slot)
            else:
                resource = self.resources[placed % len(self.resources)]
                result = self._place(match, resource, max(window_end, earliest))
                conflicts.append(
                    self._fallback_conflict(result, candidates_by_player, calendar)
                )
                logger.warning(
                    f"No valid slot for {match.id} within {search_days} days; "
                    f"placed at {result.scheduled_at.isoformat()} on {resource.id}"
                )
            calendar.book(result)
            ends[match.id] = interval(result.scheduled_at, self.duration)[1]
            scheduled.append(result)
            placed += 1

        logger.info(
            f"Scheduled {placed} matches with constraints, {len(conflicts)} conflicts"
        )
        return scheduled, conflicts

    def _first_valid_slot(
        self,
        match: Match,
        candidates_by_player: Mapping[str, ConstraintSource],
        calendar: _Calendar,
        start: datetime,
        window_end: datetime,
        step_minutes: int,
    ) -> Optional[Tuple[Resource, datetime]]:
        slot = start
        step = relativedelta(minutes=step_minutes)
        while slot < window_end:
            if self._players_can_play(match, candidates_by_player, calendar, slot):
                for resource in self.resources:
                    if calendar.resource_free(resource.id, slot):
                        return resource, slot
            slot = slot + step
        return None

    @staticmethod
    def _players_can_play(
        match: Match,
        candidates_by_player: Mapping[str, ConstraintSource],
        calendar: _Calendar,
        slot: datetime,
    ) -> bool:
        day = slot.date()
        for player_id in match.player_ids:
            if not calendar.player_free(player_id, slot):
                return False
            constraints = constraints_of(candidates_by_player.get(player_id))
            if constraints is None:
                continue
            if not constraints.is_available_on(day):
                return False
            cap = constraints.max_matches_per_day
            if cap is not None and calendar.matches_on(player_id, day) >= cap:
                return False
        return True

    def _fallback_conflict(
        self,
        match: ScheduledMatch,
        candidates_by_player: Mapping[str, ConstraintSource],
        calendar: _Calendar,
    ) -> ScheduleConflict:
        slot = match.scheduled_at
        if not calendar.resource_free(match.resource_id, slot):
            return ScheduleConflict(
                kind=CONFLICT_RESOURCE,
                match_id=match.id,
                detail=f"{match.resource_id} is already booked at {slot.isoformat()}",
            )
        for player_id in match.player_ids:
            if not calendar.player_free(player_id, slot):
                return ScheduleConflict(
                    kind=CONFLICT_PLAYER,
                    match_id=match.id,
                    detail=f"{player_id} is already playing at {slot.isoformat()}",
                )
            constraints = constraints_of(candidates_by_player.get(player_id))
            if constraints is None:
                continue
            if not constraints.is_available_on(slot.date()):
                return ScheduleConflict(
                    kind=CONFLICT_UNAVAILABLE,
                    match_id=match.id,
                    detail=f"{player_id} is unavailable on {slot.date().isoformat()}",
                )
        return ScheduleConflict(
            kind=CONFLICT_DAILY_LIMIT,
            match_id=match.id,
            detail="No slot satisfied the daily match limits within the search window",
        )


def schedule(
    matches: Sequence[Match],
    resources: Sequence[Resource],
    start_date: DateLike,
    match_duration_minutes: int = DEFAULT_MATCH_DURATION_MINUTES,
) -> List[ScheduledMatch]:
    """Shortcut for ``SchedulingEngine(resources, duration).schedule``."""
    return SchedulingEngine(resources, match_duration_minutes).schedule(
        matches, start_date
    )


def schedule_with_constraints(
    matches: Sequence[Match],
    resources: Sequence[Resource],
    candidates_by_player: Mapping[str, ConstraintSource],
    start_date: DateLike,
    match_duration_minutes: int = DEFAULT_MATCH_DURATION_MINUTES,
    search_days: int = SCHEDULE_SEARCH_DAYS,
    step_minutes: int = SCHEDULE_STEP_MINUTES,
) -> Tuple[List[ScheduledMatch], List[ScheduleConflict]]:
    """Shortcut for ``SchedulingEngine(...).schedule_with_constraints``."""
    return SchedulingEngine(resources, match_duration_minutes).schedule_with_constraints(
        matches, candidates_by_player, start_date, search_days, step_minutes
    )
