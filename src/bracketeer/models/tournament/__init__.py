"""Tournament models for Bracketeer."""

from bracketeer.models.tournament.match import Match
from bracketeer.models.tournament.match_result import MatchResult
from bracketeer.models.tournament.pairing_history import PairingHistory
from bracketeer.models.tournament.round_data import Round
from bracketeer.models.tournament.tournament import Tournament
from bracketeer.models.tournament.tournament_config import TournamentConfig

__all__ = [
    "Match",
    "MatchResult",
    "PairingHistory",
    "Round",
    "Tournament",
    "TournamentConfig",
]
