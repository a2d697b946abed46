"""Tournament progression, results and standings."""

from bracketeer.tournament.progression import (
    ProgressionEngine,
    apply_result,
    cancel_tournament,
    generate_next_round,
    undo_result,
)
from bracketeer.tournament.result_recorder import ResultRecorder
from bracketeer.tournament.round_manager import RoundManager
from bracketeer.tournament.scoring import (
    ScoreData,
    format_score_string,
    parse_score_string,
    validate_score,
)
from bracketeer.tournament.tiebreak_calculator import (
    Standing,
    StandingsCalculator,
    compute_standings,
)

__all__ = [
    "ProgressionEngine",
    "ResultRecorder",
    "RoundManager",
    "ScoreData",
    "Standing",
    "StandingsCalculator",
    "apply_result",
    "cancel_tournament",
    "compute_standings",
    "format_score_string",
    "generate_next_round",
    "parse_score_string",
    "undo_result",
    "validate_score",
]
