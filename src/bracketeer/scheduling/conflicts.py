"""Schedule conflict detection."""

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

from collections import defaultdict
from datetime import date, datetime
from itertools import combinations
from typing import Dict, List, Mapping, Optional, Tuple, Union

from dateutil.relativedelta import relativedelta

from bracketeer.constants import (
    CONFLICT_DAILY_LIMIT,
    CONFLICT_PLAYER,
    CONFLICT_RESOURCE,
    CONFLICT_UNAVAILABLE,
    DEFAULT_MATCH_DURATION_MINUTES,
)
from bracketeer.models.registration import PlayerConstraints, RegistrationCandidate
from bracketeer.models.scheduling import ScheduleConflict, ScheduledMatch

ConstraintSource = Union[RegistrationCandidate, PlayerConstraints]


def constraints_of(source: Optional[ConstraintSource]) -> Optional[PlayerConstraints]:
    """Accept either a candidate or bare constraints."""
    if isinstance(source, RegistrationCandidate):
        return source.constraints
    return source


def interval(start: datetime, duration_minutes: int) -> Tuple[datetime, datetime]:
    return start, start + relativedelta(minutes=duration_minutes)


def overlaps(a: Tuple[datetime, datetime], b: Tuple[datetime, datetime]) -> bool:
    """Half-open intervals: a match ending at 10:00 does not clash with one starting then."""
    return a[0] < b[1] and b[0] < a[1]


def detect_conflicts(
    scheduled: List[ScheduledMatch],
    constraints_by_player: Optional[Mapping[str, ConstraintSource]] = None,
    match_duration_minutes: int = DEFAULT_MATCH_DURATION_MINUTES,
) -> List[ScheduleConflict]:
    """List every constraint the placed matches violate.

    Checks resource double-booking, player double-booking, matches on a
    player's unavailable day and daily caps exceeded. Matches without a
    start time are ignored.
    """
    constraints_by_player = constraints_by_player or {}
    placed = [m for m in scheduled if m.scheduled_at is not None]
    conflicts: List[ScheduleConflict] = []

    for first, second in combinations(placed, 2):
        if not overlaps(
            interval(first.scheduled_at, match_duration_minutes),
            interval(second.scheduled_at, match_duration_minutes),
        ):
            continue
        if first.resource_id is not None and first.resource_id == second.resource_id:
            conflicts.append(
                ScheduleConflict(
                    kind=CONFLICT_RESOURCE,
                    match_id=second.id,
                    detail=f"{first.id} and {second.id} overlap on {second.resource_id}",
                )
            )
        for player_id in set(first.player_ids) & set(second.player_ids):
            conflicts.append(
                ScheduleConflict(
                    kind=CONFLICT_PLAYER,
                    match_id=second.id,
                    detail=f"{player_id} plays {first.id} and {second.id} at once",
                )
            )

    per_day: Dict[Tuple[str, date], List[ScheduledMatch]] = defaultdict(list)
    for match in sorted(placed, key=lambda m: m.scheduled_at):
        day = match.scheduled_at.date()
        for player_id in match.player_ids:
            constraints = constraints_of(constraints_by_player.get(player_id))
            if constraints is None:
                continue
            if not constraints.is_available_on(day):
                conflicts.append(
                    ScheduleConflict(
                        kind=CONFLICT_UNAVAILABLE,
                        match_id=match.id,
                        detail=f"{player_id} is unavailable on {day.isoformat()}",
                    )
                )
            per_day[(player_id, day)].append(match)
            cap = constraints.max_matches_per_day
            if cap is not None and len(per_day[(player_id, day)]) > cap:
                conflicts.append(
                    ScheduleConflict(
                        kind=CONFLICT_DAILY_LIMIT,
                        match_id=match.id,
                        detail=(
                            f"{player_id} has {len(per_day[(player_id, day)])} matches "
                            f"on {day.isoformat()} (max {cap})"
                        ),
                    )
                )

    return conflicts
