"""Data models for Bracketeer."""

from bracketeer.models.player import Player, PlayerFactory
from bracketeer.models.registration import (
    PlayerConstraints,
    RegistrationCandidate,
    RejectedCandidate,
    SelectionResult,
)
from bracketeer.models.scheduling import Resource, ScheduleConflict, ScheduledMatch
from bracketeer.models.tournament import (
    Match,
    MatchResult,
    PairingHistory,
    Round,
    Tournament,
    TournamentConfig,
)

__all__ = [
    "Match",
    "MatchResult",
    "PairingHistory",
    "Player",
    "PlayerConstraints",
    "PlayerFactory",
    "RegistrationCandidate",
    "RejectedCandidate",
    "Resource",
    "Round",
    "ScheduleConflict",
    "ScheduledMatch",
    "SelectionResult",
    "Tournament",
    "TournamentConfig",
]
