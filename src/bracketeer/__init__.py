"""Bracketeer - tournament formats and progression.

Generates single-elimination, double-elimination, round-robin and Swiss
tournaments, applies results and moves players through the bracket,
computes standings, selects participants and schedules matches.
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

import logging

from bracketeer.bracket import BracketGenerator, create_tournament, generate_bracket
from bracketeer.events import EventRecorder, NotificationDispatcher
from bracketeer.importing import parse_player_csv
from bracketeer.models import (
    Match,
    MatchResult,
    Player,
    PlayerFactory,
    RegistrationCandidate,
    Resource,
    Round,
    ScheduledMatch,
    SelectionResult,
    Tournament,
    TournamentConfig,
)
from bracketeer.scheduling import (
    SchedulingEngine,
    detect_conflicts,
    schedule,
    schedule_with_constraints,
)
from bracketeer.selection import SelectionAlgorithm, SelectionConfig, select
from bracketeer.tournament import (
    ProgressionEngine,
    StandingsCalculator,
    apply_result,
    cancel_tournament,
    compute_standings,
    generate_next_round,
    undo_result,
)

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "BracketGenerator",
    "EventRecorder",
    "Match",
    "MatchResult",
    "NotificationDispatcher",
    "Player",
    "PlayerFactory",
    "ProgressionEngine",
    "RegistrationCandidate",
    "Resource",
    "Round",
    "ScheduledMatch",
    "SchedulingEngine",
    "SelectionAlgorithm",
    "SelectionConfig",
    "SelectionResult",
    "StandingsCalculator",
    "Tournament",
    "TournamentConfig",
    "apply_result",
    "cancel_tournament",
    "compute_standings",
    "create_tournament",
    "detect_conflicts",
    "generate_bracket",
    "generate_next_round",
    "parse_player_csv",
    "schedule",
    "schedule_with_constraints",
    "select",
    "undo_result",
]
