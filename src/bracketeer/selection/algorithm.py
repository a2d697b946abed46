"""Participant selection from open registrations.

Each candidate gets an eligibility score: a baseline minus penalties for
availability constraints that would make the tournament hard to schedule.
Candidates below the rejection threshold are turned away whatever the
capacity; the rest fill the field best score first, earlier registration
first on equal scores, and the remainder forms the waitlist.
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

from dataclasses import dataclass
from datetime import date, datetime
from typing import Dict, List, Optional, Union

from bracketeer.constants import (
    SELECTION_BASELINE_SCORE,
    SELECTION_LOW_DAILY_LIMIT_PENALTY,
    SELECTION_LOW_DAILY_LIMIT_THRESHOLD,
    SELECTION_REJECTION_THRESHOLD,
    SELECTION_UNAVAILABLE_DATE_PENALTY,
)
from bracketeer.exceptions import InvalidConfigurationException, SelectionException
from bracketeer.models.registration import (
    RegistrationCandidate,
    RejectedCandidate,
    SelectionResult,
    to_date,
)
from bracketeer.utils import setup_logger

logger = setup_logger(__name__)

DateLike = Union[str, date, datetime]


@dataclass(frozen=True)
class SelectionConfig:
    """Scoring constants for participant selection.

    Attributes
    ----------
    baseline_score : float
        Starting score of every candidate (100).
    unavailable_date_penalty : float
        Deducted per unavailable day inside the tournament window (10).
    low_daily_limit_penalty : float
        Deducted when the daily match cap is below the threshold (15).
    low_daily_limit_threshold : int
        Daily caps strictly below this value are penalized (2).
    rejection_threshold : float
        Candidates scoring strictly below this are rejected (50).
    """

    baseline_score: float = SELECTION_BASELINE_SCORE
    unavailable_date_penalty: float = SELECTION_UNAVAILABLE_DATE_PENALTY
    low_daily_limit_penalty: float = SELECTION_LOW_DAILY_LIMIT_PENALTY
    low_daily_limit_threshold: int = SELECTION_LOW_DAILY_LIMIT_THRESHOLD
    rejection_threshold: float = SELECTION_REJECTION_THRESHOLD


class SelectionAlgorithm:
    """Scores registration candidates and partitions them.

    Pure and deterministic: the same candidates and settings always give
    the same result.
    """

    def __init__(self, config: Optional[SelectionConfig] = None):
        self.config = config or SelectionConfig()

    def calculate_score(
        self,
        candidate: RegistrationCandidate,
        tournament_start_date: DateLike,
        tournament_end_date: Optional[DateLike] = None,
    ) -> float:
        """Eligibility score of ``candidate``, floored at 0.

        Unavailable days count only inside the tournament window: from the
        start date to the end date inclusive, or any day from the start
        onwards when no end date is known.
        """
        start = to_date(tournament_start_date)
        end = to_date(tournament_end_date) if tournament_end_date is not None else None

        score = self.config.baseline_score
        blocked = [
            day
            for day in candidate.constraints.unavailable_dates
            if day >= start and (end is None or day <= end)
        ]
        score -= len(blocked) * self.config.unavailable_date_penalty

        daily_cap = candidate.constraints.max_matches_per_day
        if daily_cap is not None and daily_cap < self.config.low_daily_limit_threshold:
            score -= self.config.low_daily_limit_penalty

        return max(0.0, score)

    def select(
        self,
        candidates: List[RegistrationCandidate],
        capacity: int,
        tournament_start_date: DateLike,
        tournament_end_date: Optional[DateLike] = None,
    ) -> SelectionResult:
        """Partition ``candidates`` into selected, waitlist and rejected.

        Args:
            candidates: Open registrations
            capacity: Maximum number of participants
            tournament_start_date: First day of the tournament
            tournament_end_date: Last day, if known

        Returns:
            SelectionResult with every candidate in exactly one list

        Raises:
            InvalidConfigurationException: If capacity is negative
        """
        if capacity < 0:
            raise InvalidConfigurationException(f"Capacity cannot be negative: {capacity}")

        scores: Dict[str, float] = {
            c.id: self.calculate_score(c, tournament_start_date, tournament_end_date)
            for c in candidates
        }
        ranked = sorted(
            candidates, key=lambda c: (-scores[c.id], c.registration_timestamp)
        )

        result = SelectionResult(scores=scores)
        for candidate in ranked:
            score = scores[candidate.id]
            if score < self.config.rejection_threshold:
                result.rejected.append(
                    RejectedCandidate(
                        candidate=candidate,
                        reason=(
                            "Availability too restricted for the tournament format "
                            f"(score {score:g} below {self.config.rejection_threshold:g})"
                        ),
                        score=score,
                    )
                )
            elif len(result.selected) < capacity:
                result.selected.append(candidate)
            else:
                result.waitlist.append(candidate)

        logger.info(
            f"Selection: {len(result.selected)} selected, {len(result.waitlist)} "
            f"waitlisted, {len(result.rejected)} rejected (capacity {capacity})"
        )
        return result

    def promote_from_waitlist(
        self, result: SelectionResult, withdrawn_id: str
    ) -> SelectionResult:
        """Remove a withdrawn candidate and fill the freed place.

        A selected candidate's place goes to the head of the waitlist. A
        waitlisted candidate simply leaves the queue.

        Raises:
            SelectionException: If ``withdrawn_id`` is neither selected nor waitlisted
        """
        selected = list(result.selected)
        waitlist = list(result.waitlist)

        if withdrawn_id in result.selected_ids:
            selected = [c for c in selected if c.id != withdrawn_id]
            if waitlist:
                promoted = waitlist.pop(0)
                selected.append(promoted)
                logger.info(f"{promoted.id} promoted from the waitlist after {withdrawn_id} withdrew")
        elif withdrawn_id in result.waitlist_ids:
            waitlist = [c for c in waitlist if c.id != withdrawn_id]
        else:
            raise SelectionException(
                f"{withdrawn_id} is neither selected nor on the waitlist"
            )

        return SelectionResult(
            selected=selected,
            waitlist=waitlist,
            rejected=list(result.rejected),
            scores=dict(result.scores),
        )


def select(
    candidates: List[RegistrationCandidate],
    capacity: int,
    tournament_start_date: DateLike,
    tournament_end_date: Optional[DateLike] = None,
    config: Optional[SelectionConfig] = None,
) -> SelectionResult:
    """Shortcut for ``SelectionAlgorithm(config).select``."""
    return SelectionAlgorithm(config).select(
        candidates, capacity, tournament_start_date, tournament_end_date
    )
